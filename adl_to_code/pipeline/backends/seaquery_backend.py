"""
Rust sea-query column schema backend.

Generates, per database table, a unit struct with the table name and one
typed column accessor per field:

    pub fn email() -> ColumnSpec<String> {
        ColumnSpec::new(Self::table_str(), "email")
    }

Newtypes stay nominal, since the ADL rust generator emits them as distinct
types. Declarations bound to a custom rust type use that type instead.
"""

from __future__ import annotations

from ...utils import pascal_case
from ..analyzer.annotations import get_custom_type
from ..analyzer.db_resources import DbTable, ResolvedField, load_db_tables, resolve_field
from ..analyzer.decoder import DecodedKind, DecodedType, TypeExprDecoder
from ..analyzer.resolver import DeclResolver
from ..config import CodeGeneratorConfig
from ..schema_ast.nodes import Decl, ScopedName
from .base import CodeBackend, Phase
from .code_emitter import CodeEmitter
from .importing_helper import ImportingHelper
from .syntax import RustSyntax


class SeaQueryBackend(CodeBackend):
    """Column schema generator for the sea-query rust library."""

    TEMPLATE_LANG = "rust"
    TARGET = "seaquery"
    FILE_EXTENSION = "rs"
    INDENT = "    "

    def __init__(self, resolver: DeclResolver, config: CodeGeneratorConfig, generation_comment: str = ""):
        super().__init__(resolver, config, generation_comment)
        self.syntax = RustSyntax()
        self.helper = self.create_importing_helper()
        self.decoder = TypeExprDecoder(resolver, expand_newtypes=False, is_nominal=self._has_custom_type)
        self._fields: dict[ScopedName, list[ResolvedField]] = {}

    def create_importing_helper(self) -> ImportingHelper:
        return ImportingHelper(self.syntax, qualified=True)

    @staticmethod
    def _has_custom_type(scoped_name: ScopedName, decl: Decl) -> bool:
        return get_custom_type(decl) is not None

    def generate(self) -> list[str]:
        tables = self.run_collect(load_db_tables(self.resolver, self.config.excluded_tables, self.config.table_decls))
        self.helper.resolve_imports()

        code = self.new_emitter()
        code.extend(
            self.render_prefix(
                imports=self.helper.module_imports(),
                gen_alias=self.config.rust_gen_module_alias,
                runtime_alias=self.config.rust_runtime_module_alias,
                key_type=self.config.rust_key_type,
            )
        )
        code.add("")
        self.run_phase(Phase.DECL, tables, code)
        return code.write()

    def collect(self, table: DbTable) -> bool:
        fields = [resolve_field(f, self.decoder) for f in table.fields]
        if any(f.is_primary_key for f in fields):
            self.helper.add_reference(table.scoped_name)
        for f in fields:
            if not f.is_primary_key:
                self._register(f.decoded_type)
        self._fields[table.scoped_name] = fields
        return True

    def _register(self, decoded: DecodedType) -> None:
        if decoded.kind == DecodedKind.REFERENCE:
            if get_custom_type(self.resolver.resolve(decoded.scoped_name)) is None:
                self.helper.add_reference(decoded.scoped_name)
            for param in decoded.parameters:
                self._register(param)
        elif decoded.elem_type is not None:
            self._register(decoded.elem_type)

    def decl(self, table: DbTable, code: CodeEmitter) -> None:
        struct_name = pascal_case(table.name)
        code.add(f"pub struct {struct_name} {{}}")
        code.add("")
        with code.block(f"impl {struct_name} {{") as body:
            with body.block("pub fn table_str() -> &'static str {") as fn_body:
                fn_body.add(f'"{table.name}"')
            body.add("")
            with body.block("pub fn table() -> DynIden {") as fn_body:
                fn_body.add("Alias::new(Self::table_str()).into_iden()")
            for f in self._fields[table.scoped_name]:
                body.add("")
                with body.block(f"pub fn {f.column_name}() -> ColumnSpec<{self.column_type(table, f)}> {{") as fn_body:
                    fn_body.add(f'ColumnSpec::new(Self::table_str(), "{f.column_name}")')
        code.add("")

    def column_type(self, table: DbTable, f: ResolvedField) -> str:
        if f.is_primary_key:
            return self.syntax.generic(self.config.rust_key_type, [self.helper.referenced_name(table.scoped_name)])
        return self.rust_type(f.decoded_type)

    def rust_type(self, decoded: DecodedType) -> str:
        """The rust type of a column value."""
        if decoded.kind == DecodedKind.REFERENCE:
            params = [self.rust_type(p) for p in decoded.parameters]
            custom = get_custom_type(self.resolver.resolve(decoded.scoped_name))
            if custom:
                return self.syntax.generic(custom.render(self.config.rust_runtime_module_alias), params)
            return self.syntax.generic(self.helper.referenced_name(decoded.scoped_name), params)
        if decoded.elem_type is not None:
            return self.syntax.container(decoded.kind, self.rust_type(decoded.elem_type))
        return self.syntax.primitive(decoded.kind)
