"""
Helpers to build ADL declaration graphs in tests.
"""

from __future__ import annotations

from adl_to_code.pipeline.schema_ast import (
    Annotation,
    Decl,
    Field,
    Module,
    NewType,
    ScopedName,
    Struct,
    TypeDef,
    TypeExpr,
    Union,
)

VOID = TypeExpr.primitive("Void")
STRING = TypeExpr.primitive("String")
INT32 = TypeExpr.primitive("Int32")
INT64 = TypeExpr.primitive("Int64")
BOOL = TypeExpr.primitive("Bool")
DOUBLE = TypeExpr.primitive("Double")
JSON = TypeExpr.primitive("Json")


def sn(text: str) -> ScopedName:
    return ScopedName.parse(text)


def prim(name: str, *params: TypeExpr) -> TypeExpr:
    return TypeExpr.primitive(name, *params)


def vector(elem: TypeExpr) -> TypeExpr:
    return TypeExpr.primitive("Vector", elem)


def nullable(elem: TypeExpr) -> TypeExpr:
    return TypeExpr.primitive("Nullable", elem)


def string_map(elem: TypeExpr) -> TypeExpr:
    return TypeExpr.primitive("StringMap", elem)


def ref(text: str, *params: TypeExpr) -> TypeExpr:
    return TypeExpr.reference(sn(text), *params)


def tparam(name: str) -> TypeExpr:
    return TypeExpr.type_param(name)


def ann(key: str, value=None) -> Annotation:
    return Annotation(sn(key), value)


def doc(text: str) -> Annotation:
    return ann("sys.annotations.Doc", text)


def fld(name: str, type_expr: TypeExpr, *annotations: Annotation, default=None, has_default=None) -> Field:
    return Field(
        name=name,
        serialized_name=name,
        type_expr=type_expr,
        default=default,
        has_default=default is not None if has_default is None else has_default,
        annotations=list(annotations),
    )


def struct(name: str, fields: list[Field], *annotations: Annotation, type_params: list[str] | None = None) -> Decl:
    return Decl(name, Struct(type_params or [], fields), list(annotations))


def union(name: str, fields: list[Field], *annotations: Annotation, type_params: list[str] | None = None) -> Decl:
    return Decl(name, Union(type_params or [], fields), list(annotations))


def enum(name: str, *variants: str) -> Decl:
    return union(name, [fld(v, VOID) for v in variants])


def typedef(name: str, type_expr: TypeExpr, type_params: list[str] | None = None) -> Decl:
    return Decl(name, TypeDef(type_params or [], type_expr))


def newtype(name: str, type_expr: TypeExpr, *annotations: Annotation, type_params: list[str] | None = None) -> Decl:
    return Decl(name, NewType(type_params or [], type_expr), list(annotations))


def module(name: str, *decls: Decl) -> Module:
    return Module(name=name, decls={d.name: d for d in decls})


def modules(*mods: Module) -> dict[str, Module]:
    return {m.name: m for m in mods}


def std_modules() -> list[Module]:
    """The parts of the ADL standard library the generators know about."""
    return [
        module(
            "sys.types",
            union(
                "Maybe",
                [fld("nothing", VOID), fld("just", tparam("T"))],
                ann("adlc.config.rust.RustCustomType", {"rustname": "std::option::Option"}),
                type_params=["T"],
            ),
        ),
        module(
            "common.db",
            newtype(
                "DbKey",
                STRING,
                ann("adlc.config.rust.RustCustomType", {"rustname": "{{STDLIBMODULE}}::custom::common::db::DbKey"}),
                type_params=["T"],
            ),
        ),
        module(
            "common.http",
            struct("HttpPost", [fld("path", STRING)], type_params=["I", "O"]),
            struct("HttpGet", [fld("path", STRING)], type_params=["O"]),
            struct("Unit", []),
        ),
        module("common", newtype("Instant", INT64)),
    ]


def table(table_name: str | None = None, with_id_primary_key: bool = False) -> Annotation:
    value = {}
    if table_name:
        value["tableName"] = table_name
    if with_id_primary_key:
        value["withIdPrimaryKey"] = True
    return ann("common.db.DbTable", value)


def primary_key() -> Annotation:
    return ann("common.db.DbPrimaryKey")


def column_name(name: str) -> Annotation:
    return ann("common.db.DbColumnName", name)
