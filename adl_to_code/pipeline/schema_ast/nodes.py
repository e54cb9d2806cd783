"""
AST node definitions for ADL declarations.

These nodes represent an already-parsed ADL module graph. They are built
once per generation run by the loader and never mutated afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class ScopedName:
    """A (module, name) pair identifying a declaration."""

    module_name: str
    name: str

    def __str__(self) -> str:
        return f"{self.module_name}.{self.name}"

    @staticmethod
    def parse(text: str) -> ScopedName:
        """Parse "a.b.Name" into ScopedName("a.b", "Name")."""
        module_name, _, name = text.rpartition(".")
        return ScopedName(module_name, name)


class TypeRefKind(Enum):
    """Kind of the head of a type expression."""

    PRIMITIVE = "primitive"  # Int32, String, Vector, ...
    TYPE_PARAM = "typeParam"  # A type parameter placeholder
    REFERENCE = "reference"  # A declaration, by scoped name


@dataclass(frozen=True)
class TypeRef:
    """The head of a type expression."""

    kind: TypeRefKind
    value: str | ScopedName


@dataclass(frozen=True)
class TypeExpr:
    """A type expression: a head applied to zero or more type parameters."""

    type_ref: TypeRef
    parameters: tuple[TypeExpr, ...] = ()

    @staticmethod
    def primitive(name: str, *parameters: TypeExpr) -> TypeExpr:
        return TypeExpr(TypeRef(TypeRefKind.PRIMITIVE, name), tuple(parameters))

    @staticmethod
    def type_param(name: str) -> TypeExpr:
        return TypeExpr(TypeRef(TypeRefKind.TYPE_PARAM, name))

    @staticmethod
    def reference(scoped_name: ScopedName, *parameters: TypeExpr) -> TypeExpr:
        return TypeExpr(TypeRef(TypeRefKind.REFERENCE, scoped_name), tuple(parameters))

    @property
    def is_reference(self) -> bool:
        return self.type_ref.kind == TypeRefKind.REFERENCE

    @property
    def scoped_name(self) -> ScopedName | None:
        """The referenced scoped name, or None for primitives and type parameters."""
        if self.type_ref.kind == TypeRefKind.REFERENCE:
            return self.type_ref.value
        return None


@dataclass(frozen=True)
class Annotation:
    """A (key, value) pair attached to a declaration or field."""

    key: ScopedName
    value: Any = None


@dataclass
class Field:
    """A field of a struct, or a variant of a union."""

    name: str = ""
    serialized_name: str = ""
    type_expr: TypeExpr | None = None
    default: Any = None
    has_default: bool = False
    annotations: list[Annotation] = field(default_factory=list)


@dataclass
class Struct:
    """A struct declaration body."""

    type_params: list[str] = field(default_factory=list)
    fields: list[Field] = field(default_factory=list)


@dataclass
class Union:
    """A union declaration body."""

    type_params: list[str] = field(default_factory=list)
    fields: list[Field] = field(default_factory=list)

    def is_enum(self) -> bool:
        """A union is enum-like iff no variant carries a payload."""
        return all(_is_void(f.type_expr) for f in self.fields)


@dataclass
class TypeDef:
    """A type alias declaration body."""

    type_params: list[str] = field(default_factory=list)
    type_expr: TypeExpr | None = None


@dataclass
class NewType:
    """A newtype declaration body."""

    type_params: list[str] = field(default_factory=list)
    type_expr: TypeExpr | None = None
    default: Any = None
    has_default: bool = False


class DeclKind(Enum):
    """Kind of a declaration."""

    STRUCT = "struct_"
    UNION = "union_"
    TYPE_ALIAS = "type_"
    NEWTYPE = "newtype_"


_DECL_KINDS: dict[type, DeclKind] = {
    Struct: DeclKind.STRUCT,
    Union: DeclKind.UNION,
    TypeDef: DeclKind.TYPE_ALIAS,
    NewType: DeclKind.NEWTYPE,
}


@dataclass
class Decl:
    """A named declaration with its annotations."""

    name: str = ""
    type_: Struct | Union | TypeDef | NewType | None = None
    annotations: list[Annotation] = field(default_factory=list)

    @property
    def kind(self) -> DeclKind:
        return _DECL_KINDS[type(self.type_)]

    @property
    def type_params(self) -> list[str]:
        return self.type_.type_params

    def is_enum(self) -> bool:
        return isinstance(self.type_, Union) and self.type_.is_enum()


@dataclass
class Module:
    """An ADL module: declarations in declared order."""

    name: str = ""
    imports: list[str] = field(default_factory=list)
    decls: dict[str, Decl] = field(default_factory=dict)
    annotations: list[Annotation] = field(default_factory=list)


def _is_void(type_expr: TypeExpr | None) -> bool:
    return (
        type_expr is not None
        and type_expr.type_ref.kind == TypeRefKind.PRIMITIVE
        and type_expr.type_ref.value == "Void"
        and not type_expr.parameters
    )
