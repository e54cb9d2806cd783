"""
Annotation lookup.

Annotations are looked up by exact scoped name; the first match wins.
Recognized annotations are decoded into small typed structures at lookup
time so that generators never inspect raw payloads.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..errors import InvalidAnnotationError, MissingAnnotationError
from ..schema_ast.nodes import Annotation, Decl, Field, ScopedName

DOC = ScopedName("sys.annotations", "Doc")
DB_TABLE = ScopedName("common.db", "DbTable")
DB_COLUMN_NAME = ScopedName("common.db", "DbColumnName")
DB_PRIMARY_KEY = ScopedName("common.db", "DbPrimaryKey")
RUST_CUSTOM_TYPE = ScopedName("adlc.config.rust", "RustCustomType")

# Placeholder in custom type names for the runtime module alias
STDLIB_MODULE_PLACEHOLDER = "{{STDLIBMODULE}}"


def find_annotation(key: ScopedName, annotations: list[Annotation]) -> Annotation | None:
    """Return the first annotation with the given key, or None."""
    for annotation in annotations:
        if annotation.key == key:
            return annotation
    return None


def get_annotation(key: ScopedName, annotations: list[Annotation]) -> Any:
    """Return the value of the first annotation with the given key, or None if absent."""
    annotation = find_annotation(key, annotations)
    return annotation.value if annotation else None


def has_annotation(key: ScopedName, annotations: list[Annotation]) -> bool:
    """Check for an annotation; use this for markers whose value may be null."""
    return find_annotation(key, annotations) is not None


@dataclass(frozen=True)
class DbTableAnnotation:
    """Decoded `common.db.DbTable` annotation."""

    table_name: str | None = None
    with_id_primary_key: bool = False
    with_primary_key: tuple[str, ...] = ()
    label: tuple[str, ...] = ()
    indexes: tuple[tuple[str, ...], ...] = ()
    uniqueness_constraints: tuple[tuple[str, ...], ...] = ()


@dataclass(frozen=True)
class CustomTypeBinding:
    """Decoded custom type annotation: a target type name with a runtime placeholder."""

    name_template: str
    helpers: str | None = None
    std_traits: tuple[str, ...] = field(default_factory=tuple)

    def render(self, runtime_module_alias: str) -> str:
        return self.name_template.replace(STDLIB_MODULE_PLACEHOLDER, runtime_module_alias)


def get_doc(annotations: list[Annotation]) -> str | None:
    """The documentation comment, newlines collapsed to spaces."""
    value = get_annotation(DOC, annotations)
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidAnnotationError(f"{DOC} must be a string, got {value!r}")
    return value.replace("\n", " ").strip() or None


def get_db_table(decl: Decl) -> DbTableAnnotation | None:
    """The decoded table annotation, or None if the declaration is not a table."""
    annotation = find_annotation(DB_TABLE, decl.annotations)
    if annotation is None:
        return None
    value = annotation.value
    if value is None:
        return DbTableAnnotation()
    if not isinstance(value, dict):
        raise InvalidAnnotationError(f"{DB_TABLE} on {decl.name} must be an object, got {value!r}")

    table_name = value.get("tableName")
    if table_name is not None and not isinstance(table_name, str):
        raise InvalidAnnotationError(f"{DB_TABLE}.tableName on {decl.name} must be a string")
    with_id_primary_key = value.get("withIdPrimaryKey", False)
    if not isinstance(with_id_primary_key, bool):
        raise InvalidAnnotationError(f"{DB_TABLE}.withIdPrimaryKey on {decl.name} must be a boolean")

    return DbTableAnnotation(
        table_name=table_name,
        with_id_primary_key=with_id_primary_key,
        with_primary_key=_string_tuple(value.get("withPrimaryKey", []), decl.name),
        label=_string_tuple(value.get("label", []), decl.name),
        indexes=tuple(_string_tuple(i, decl.name) for i in value.get("indexes", [])),
        uniqueness_constraints=tuple(_string_tuple(u, decl.name) for u in value.get("uniquenessConstraints", [])),
    )


def require_db_table(decl: Decl) -> DbTableAnnotation:
    table = get_db_table(decl)
    if table is None:
        raise MissingAnnotationError(f"{decl.name} has no {DB_TABLE} annotation")
    return table


def get_column_name_override(f: Field) -> str | None:
    value = get_annotation(DB_COLUMN_NAME, f.annotations)
    if value is not None and not isinstance(value, str):
        raise InvalidAnnotationError(f"{DB_COLUMN_NAME} on field {f.name} must be a string, got {value!r}")
    return value


def is_primary_key(f: Field) -> bool:
    return has_annotation(DB_PRIMARY_KEY, f.annotations)


def get_custom_type(decl: Decl) -> CustomTypeBinding | None:
    """The decoded custom type binding for a declaration, if any."""
    value = get_annotation(RUST_CUSTOM_TYPE, decl.annotations)
    if value is None:
        return None
    if not isinstance(value, dict) or not isinstance(value.get("rustname"), str):
        raise InvalidAnnotationError(f"{RUST_CUSTOM_TYPE} on {decl.name} must be an object with a 'rustname' string")
    return CustomTypeBinding(
        name_template=value["rustname"],
        helpers=value.get("helpers"),
        std_traits=_string_tuple(value.get("stdTraits", []), decl.name),
    )


def _string_tuple(value: Any, where: str) -> tuple[str, ...]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise InvalidAnnotationError(f"{where}: expected a list of strings, got {value!r}")
    return tuple(value)
