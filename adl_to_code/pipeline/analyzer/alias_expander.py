"""
Type alias and newtype expansion.

Replaces a reference to a type alias (or newtype) with its underlying type
expression, substituting the declaration's type parameters by position.
"""

from __future__ import annotations

from ..errors import AliasCycleError, PartialApplicationError, UnsupportedTypeKindError
from ..schema_ast.nodes import DeclKind, ScopedName, TypeExpr, TypeRefKind
from .resolver import Resolver

# Schemas are acyclic; this bound only catches malformed input
MAX_ALIAS_DEPTH = 32


def expand(type_expr: TypeExpr, resolver: Resolver, *, expand_newtypes: bool = True) -> TypeExpr:
    """
    Expand the head of a type expression until it is no longer an alias.

    Args:
        type_expr: The type expression to expand
        resolver: Declaration lookup
        expand_newtypes: Whether newtypes are expanded as well as type aliases

    Returns:
        The expanded type expression, or `type_expr` itself if its head is
        not an alias.
    """
    kinds = {DeclKind.TYPE_ALIAS, DeclKind.NEWTYPE} if expand_newtypes else {DeclKind.TYPE_ALIAS}
    chain = []
    while type_expr.is_reference:
        decl = resolver.resolve(type_expr.scoped_name)
        if decl.kind not in kinds:
            break
        chain.append(str(type_expr.scoped_name))
        if len(chain) > MAX_ALIAS_DEPTH:
            raise AliasCycleError(f"Alias expansion exceeded {MAX_ALIAS_DEPTH} steps: {' -> '.join(chain[:4])} -> ...")
        type_expr = expand_once(type_expr, decl.type_params, decl.type_.type_expr)
    return type_expr


def expand_once(type_expr: TypeExpr, type_params: list[str], body: TypeExpr) -> TypeExpr:
    """Substitute the arguments of `type_expr` into an alias body."""
    name = type_expr.scoped_name
    if len(type_expr.parameters) > len(type_params):
        raise PartialApplicationError(f"{name} takes {len(type_params)} type parameters, got {len(type_expr.parameters)}")
    bindings = dict(zip(type_params, type_expr.parameters))
    unbound = set(type_params[len(type_expr.parameters) :])
    return substitute_type_params(body, bindings, unbound, name)


def substitute_type_params(
    type_expr: TypeExpr,
    bindings: dict[str, TypeExpr],
    unbound: frozenset[str] | set[str] = frozenset(),
    name: ScopedName | None = None,
) -> TypeExpr:
    """Replace type parameter placeholders with their bound type expressions."""
    type_ref = type_expr.type_ref
    if type_ref.kind == TypeRefKind.TYPE_PARAM:
        if type_ref.value in bindings:
            if type_expr.parameters:
                raise UnsupportedTypeKindError(f"Type parameter {type_ref.value} is not a concrete type")
            return bindings[type_ref.value]
        if type_ref.value in unbound:
            raise PartialApplicationError(f"{name}: no type argument supplied for type parameter {type_ref.value}")
    return TypeExpr(
        type_ref,
        tuple(substitute_type_params(p, bindings, unbound, name) for p in type_expr.parameters),
    )
