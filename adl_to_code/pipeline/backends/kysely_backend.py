"""
Kysely table interface backend.

Generates one TypeScript interface per database table and a `Database`
interface mapping table names to them:

    interface AppUserTable {
      id: string;
      email: string;
    }
    export interface Database {
      app_user: AppUserTable;
    }
"""

from __future__ import annotations

from ...utils import pascal_case
from ..analyzer.db_resources import DbTable, ResolvedField, load_db_tables, resolve_field
from ..analyzer.decoder import DecodedKind, DecodedType, TypeExprDecoder
from ..analyzer.resolver import DeclResolver
from ..config import CodeGeneratorConfig
from ..schema_ast.nodes import Decl, ScopedName
from .base import CodeBackend, Phase
from .code_emitter import CodeEmitter
from .importing_helper import ImportingHelper
from .syntax import KyselySyntax

ID_COLUMN = "id"


class KyselyBackend(CodeBackend):
    """Table interface generator for the kysely query builder."""

    TEMPLATE_LANG = "typescript"
    TARGET = "kysely"
    FILE_EXTENSION = "ts"
    INDENT = "  "

    def __init__(self, resolver: DeclResolver, config: CodeGeneratorConfig, generation_comment: str = ""):
        super().__init__(resolver, config, generation_comment)
        self.syntax = KyselySyntax()
        self.helper = self.create_importing_helper()
        self.decoder = TypeExprDecoder(resolver, expand_newtypes=True, is_nominal=self._is_overridden)
        self._fields: dict[ScopedName, list[ResolvedField]] = {}

    def create_importing_helper(self) -> ImportingHelper:
        return ImportingHelper(self.syntax, qualified=True)

    def _is_overridden(self, scoped_name: ScopedName, decl: Decl) -> bool:
        return str(scoped_name) in self.config.typescript_type_overrides

    def generate(self) -> list[str]:
        tables = self.run_collect(load_db_tables(self.resolver, self.config.excluded_tables, self.config.table_decls))
        self.helper.resolve_imports()

        code = self.new_emitter()
        imports = self.helper.module_imports()
        code.extend(self.render_prefix(imports=imports, import_root=self.config.kysely_import_root))
        if imports:
            code.add("")

        self.run_phase(Phase.DECL, tables, code)

        with code.block("export interface Database {") as body:
            for table in tables:
                body.add(f"{table.name}: {self.interface_name(table)};")
        code.add("")
        return code.write()

    @staticmethod
    def interface_name(table: DbTable) -> str:
        return f"{pascal_case(table.name)}Table"

    def collect(self, table: DbTable) -> bool:
        fields = [resolve_field(f, self.decoder) for f in table.fields]
        for f in fields:
            self._register(f.value_type)
        self._fields[table.scoped_name] = fields
        return True

    def _register(self, decoded: DecodedType) -> None:
        if decoded.kind == DecodedKind.REFERENCE:
            if str(decoded.scoped_name) not in self.config.typescript_type_overrides:
                self.helper.add_reference(decoded.scoped_name)
            for param in decoded.parameters:
                self._register(param)
        elif decoded.elem_type is not None:
            self._register(decoded.elem_type)

    def decl(self, table: DbTable, code: CodeEmitter) -> None:
        fields = self._fields[table.scoped_name]
        with code.block(f"interface {self.interface_name(table)} {{") as body:
            if table.annotation.with_id_primary_key and all(f.column_name != ID_COLUMN for f in fields):
                body.add(f"{ID_COLUMN}: string;")
            for f in fields:
                ts_type = self.ts_type(f.value_type)
                if f.nullable:
                    ts_type = f"{ts_type} | null"
                body.add(f"{f.column_name}: {ts_type};")

    def ts_type(self, decoded: DecodedType) -> str:
        """The TypeScript type of a column value."""
        if decoded.kind == DecodedKind.REFERENCE:
            override = self.config.typescript_type_overrides.get(str(decoded.scoped_name))
            if override:
                return override
            params = [self.ts_type(p) for p in decoded.parameters]
            return self.syntax.generic(self.helper.referenced_name(decoded.scoped_name), params)
        if decoded.elem_type is not None:
            return self.syntax.container(decoded.kind, self.ts_type(decoded.elem_type))
        return self.syntax.primitive(decoded.kind)
