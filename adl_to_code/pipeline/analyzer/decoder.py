"""
Type expression decoder.

Decodes a type expression into a canonical DecodedType. Type aliases are
always seen through; newtypes are seen through unless the caller keeps them
nominal. Enum-like unions always stay nominal references.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from ..errors import AliasCycleError, PartialApplicationError, UnsupportedTypeKindError
from ..schema_ast.nodes import Decl, DeclKind, ScopedName, TypeExpr, TypeRefKind
from .alias_expander import expand_once
from .resolver import Resolver

MAX_DECODE_DEPTH = 64


class DecodedKind(Enum):
    """Kind of a decoded type."""

    VOID = "Void"
    BOOL = "Bool"
    STRING = "String"
    INT8 = "Int8"
    INT16 = "Int16"
    INT32 = "Int32"
    INT64 = "Int64"
    WORD8 = "Word8"
    WORD16 = "Word16"
    WORD32 = "Word32"
    WORD64 = "Word64"
    FLOAT = "Float"
    DOUBLE = "Double"
    JSON = "Json"
    VECTOR = "Vector"
    STRING_MAP = "StringMap"
    NULLABLE = "Nullable"
    REFERENCE = "Reference"


@dataclass(frozen=True)
class DecodedType:
    """A decoded type expression."""

    kind: DecodedKind

    # For Vector, StringMap and Nullable
    elem_type: DecodedType | None = None

    # For Reference
    scoped_name: ScopedName | None = None
    decl_kind: DeclKind | None = None
    parameters: tuple[DecodedType, ...] = ()

    def __str__(self) -> str:
        if self.elem_type is not None:
            return f"{self.kind.value}<{self.elem_type}>"
        if self.kind == DecodedKind.REFERENCE:
            params = f"<{', '.join(str(p) for p in self.parameters)}>" if self.parameters else ""
            return f"{self.scoped_name}{params}"
        return self.kind.value


# Nullary primitives, by ADL primitive name
PRIMITIVES: dict[str, DecodedKind] = {
    "Void": DecodedKind.VOID,
    "Bool": DecodedKind.BOOL,
    "String": DecodedKind.STRING,
    "Int8": DecodedKind.INT8,
    "Int16": DecodedKind.INT16,
    "Int32": DecodedKind.INT32,
    "Int64": DecodedKind.INT64,
    "Word8": DecodedKind.WORD8,
    "Word16": DecodedKind.WORD16,
    "Word32": DecodedKind.WORD32,
    "Word64": DecodedKind.WORD64,
    "Float": DecodedKind.FLOAT,
    "Double": DecodedKind.DOUBLE,
    "Json": DecodedKind.JSON,
}

# Unary primitives, by ADL primitive name
CONTAINERS: dict[str, DecodedKind] = {
    "Vector": DecodedKind.VECTOR,
    "StringMap": DecodedKind.STRING_MAP,
    "Nullable": DecodedKind.NULLABLE,
}

NominalPredicate = Callable[[ScopedName, Decl], bool]


def decode(
    type_expr: TypeExpr,
    resolver: Resolver,
    *,
    expand_newtypes: bool = True,
    is_nominal: NominalPredicate | None = None,
) -> DecodedType:
    """
    Decode a type expression.

    Args:
        type_expr: The type expression to decode
        resolver: Declaration lookup
        expand_newtypes: Whether newtypes are replaced by their underlying type
        is_nominal: Declarations for which this returns True are decoded as
            references without expansion

    Returns:
        The decoded type

    Raises:
        UnresolvedReferenceError: A referenced declaration does not exist
        UnsupportedTypeKindError: The type has no decoded mapping
        PartialApplicationError: A type was applied to the wrong number of parameters
        AliasCycleError: Expansion did not terminate
    """
    return TypeExprDecoder(resolver, expand_newtypes, is_nominal).decode(type_expr)


class TypeExprDecoder:
    """Decodes type expressions against one resolver."""

    def __init__(
        self,
        resolver: Resolver,
        expand_newtypes: bool = True,
        is_nominal: NominalPredicate | None = None,
    ):
        self.resolver = resolver
        self.expand_newtypes = expand_newtypes
        self.is_nominal = is_nominal

    def decode(self, type_expr: TypeExpr) -> DecodedType:
        return self._decode(type_expr, 0)

    def _decode(self, type_expr: TypeExpr, depth: int) -> DecodedType:
        if depth > MAX_DECODE_DEPTH:
            raise AliasCycleError(f"Type expression nesting exceeds {MAX_DECODE_DEPTH} levels")

        type_ref = type_expr.type_ref
        match type_ref.kind:
            case TypeRefKind.PRIMITIVE:
                return self._decode_primitive(type_ref.value, type_expr.parameters, depth)
            case TypeRefKind.REFERENCE:
                return self._decode_reference(type_expr, depth)
            case _:
                raise UnsupportedTypeKindError(f"Unbound type parameter {type_ref.value} cannot be decoded")

    def _decode_primitive(self, name: str, parameters: tuple[TypeExpr, ...], depth: int) -> DecodedType:
        if name in PRIMITIVES:
            _check_arity(name, parameters, 0)
            return DecodedType(PRIMITIVES[name])

        if name in CONTAINERS:
            _check_arity(name, parameters, 1)
            elem_type = self._decode(parameters[0], depth + 1)
            kind = CONTAINERS[name]
            if kind == DecodedKind.NULLABLE and elem_type.kind == DecodedKind.NULLABLE:
                # Nullable<Nullable<T>> has a single null value
                return elem_type
            return DecodedType(kind, elem_type=elem_type)

        raise UnsupportedTypeKindError(f"unhandled type: {name}")

    def _decode_reference(self, type_expr: TypeExpr, depth: int) -> DecodedType:
        scoped_name = type_expr.scoped_name
        decl = self.resolver.resolve(scoped_name)

        if self.is_nominal is not None and self.is_nominal(scoped_name, decl):
            return self._reference(type_expr, decl, depth)

        # Enums stay nominal, never inlined
        if decl.is_enum():
            return self._reference(type_expr, decl, depth)

        if decl.kind == DeclKind.TYPE_ALIAS or (decl.kind == DeclKind.NEWTYPE and self.expand_newtypes):
            # Expand one link only; the result goes through the checks above again
            expanded = expand_once(type_expr, decl.type_params, decl.type_.type_expr)
            return self._decode(expanded, depth + 1)

        return self._reference(type_expr, decl, depth)

    def _reference(self, type_expr: TypeExpr, decl: Decl, depth: int) -> DecodedType:
        _check_arity(str(type_expr.scoped_name), type_expr.parameters, len(decl.type_params))
        return DecodedType(
            DecodedKind.REFERENCE,
            scoped_name=type_expr.scoped_name,
            decl_kind=decl.kind,
            parameters=tuple(self._decode(p, depth + 1) for p in type_expr.parameters),
        )


def _check_arity(name: str, parameters: tuple[TypeExpr, ...], expected: int) -> None:
    if len(parameters) != expected:
        raise PartialApplicationError(f"{name} takes {expected} type parameters, got {len(parameters)}")
