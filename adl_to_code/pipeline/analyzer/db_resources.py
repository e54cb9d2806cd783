"""
Database table discovery.

Finds the struct declarations annotated as database tables and resolves
their fields into the form consumed by the table generators.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ...utils import snake_case
from ..errors import InvalidAnnotationError
from ..schema_ast.nodes import Decl, DeclKind, Field, ScopedName, Struct
from .annotations import DbTableAnnotation, get_column_name_override, get_db_table, is_primary_key, require_db_table
from .decoder import DecodedKind, DecodedType, TypeExprDecoder
from .resolver import DeclResolver

logger = logging.getLogger(__name__)

MAYBE = ScopedName("sys.types", "Maybe")


@dataclass
class DbTable:
    """A struct declaration annotated as a database table."""

    scoped_name: ScopedName
    name: str  # Table name
    decl: Decl
    annotation: DbTableAnnotation
    fields: list[Field] = field(default_factory=list)


@dataclass
class ResolvedField:
    """A table field with its decoded type and column configuration."""

    name: str = ""
    decoded_type: DecodedType | None = None

    # decoded_type with Nullable and Maybe wrappers removed
    value_type: DecodedType | None = None
    nullable: bool = False

    # Column name from DbColumnName, if any
    override_name: str | None = None
    is_primary_key: bool = False

    @property
    def column_name(self) -> str:
        return self.override_name or snake_case(self.name)


def load_db_tables(
    resolver: DeclResolver,
    excluded_tables: list[str] | None = None,
    table_decls: list[str] | None = None,
) -> list[DbTable]:
    """
    Collect all table declarations.

    Args:
        resolver: Resolver over the loaded modules
        excluded_tables: Table names to skip
        table_decls: "module.Name" of the structs to load, in that order. Each
            must carry a table annotation. All annotated structs when None.

    Returns:
        Tables, modules by name then declarations in declared order, unless
        table_decls gives the order
    """
    excluded = set(excluded_tables or [])
    if table_decls is None:
        candidates = [(scoped_name, decl, get_db_table(decl)) for scoped_name, decl in resolver.iter_decls()]
    else:
        candidates = []
        for text in table_decls:
            scoped_name = ScopedName.parse(text)
            decl = resolver.resolve(scoped_name)
            candidates.append((scoped_name, decl, require_db_table(decl)))

    tables = []
    for scoped_name, decl, annotation in candidates:
        if annotation is None:
            continue
        if decl.kind != DeclKind.STRUCT or decl.type_params:
            raise InvalidAnnotationError(f"{scoped_name}: only monomorphic structs can be database tables")

        name = annotation.table_name or snake_case(decl.name)
        if name in excluded:
            logger.debug("Skipping excluded table %s", name)
            continue

        struct: Struct = decl.type_
        tables.append(DbTable(scoped_name, name, decl, annotation, list(struct.fields)))
    return tables


def resolve_field(f: Field, decoder: TypeExprDecoder) -> ResolvedField:
    """Decode a table field.

    Nullable and Maybe wrappers, however deeply nested, collapse to a single
    nullable flag on the field.
    """
    decoded = decoder.decode(f.type_expr)
    value_type = decoded
    nullable = False
    while True:
        if value_type.kind == DecodedKind.NULLABLE:
            value_type = value_type.elem_type
        elif value_type.kind == DecodedKind.REFERENCE and value_type.scoped_name == MAYBE:
            value_type = value_type.parameters[0]
        else:
            break
        nullable = True

    return ResolvedField(
        name=f.name,
        decoded_type=decoded,
        value_type=value_type,
        nullable=nullable,
        override_name=get_column_name_override(f),
        is_primary_key=is_primary_key(f),
    )
