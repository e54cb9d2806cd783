"""
API entry discovery.

An API is a monomorphic struct whose fields are HTTP request descriptors,
e.g. `HttpPost<LoginReq, LoginResp> login`. Each field becomes an ApiEntry.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..analyzer.alias_expander import expand
from ..analyzer.annotations import get_doc
from ..analyzer.resolver import DeclResolver
from ..errors import PartialApplicationError, UnsupportedTypeKindError
from ..schema_ast.nodes import Decl, DeclKind, Field, ScopedName, TypeExpr

# Request descriptor declarations, by name: (default method, number of type parameters)
HTTP_REQUEST_KINDS: dict[str, tuple[str, int]] = {
    "HttpReq": ("post", 2),
    "HttpPost": ("post", 2),
    "HttpGet": ("get", 1),
}

DEFAULT_SECURITY = "token"

VOID = TypeExpr.primitive("Void")


@dataclass
class ApiEntry:
    """One field of an API struct."""

    name: str
    type_expr: TypeExpr
    comment: str | None = None

    # Set only for HTTP request descriptors
    request_type: TypeExpr | None = None
    response_type: TypeExpr | None = None
    method: str | None = None
    security: str | None = None

    @property
    def is_http(self) -> bool:
        return self.method is not None


@dataclass
class Api:
    """An API struct and its entries, in declared order."""

    scoped_name: ScopedName
    decl: Decl
    entries: list[ApiEntry]

    @property
    def type_expr(self) -> TypeExpr:
        return TypeExpr.reference(self.scoped_name)

    @property
    def comment(self) -> str | None:
        return get_doc(self.decl.annotations)


def load_api(resolver: DeclResolver, scoped_name: ScopedName) -> Api:
    """
    Resolve an API struct.

    Type aliases on the field types are expanded so that request descriptors
    declared through aliases are recognized.
    """
    decl = resolver.resolve(scoped_name)
    if decl.kind != DeclKind.STRUCT or decl.type_params:
        raise UnsupportedTypeKindError(f"{scoped_name} is not a monomorphic struct")
    entries = [_api_entry(resolver, f) for f in decl.type_.fields]
    return Api(scoped_name, decl, entries)


def _api_entry(resolver: DeclResolver, f: Field) -> ApiEntry:
    type_expr = expand(f.type_expr, resolver, expand_newtypes=False)
    entry = ApiEntry(name=f.name, type_expr=type_expr, comment=get_doc(f.annotations))

    scoped_name = type_expr.scoped_name
    if scoped_name is None or scoped_name.name not in HTTP_REQUEST_KINDS:
        return entry

    default_method, arity = HTTP_REQUEST_KINDS[scoped_name.name]
    if len(type_expr.parameters) != arity:
        raise PartialApplicationError(f"{f.name}: {scoped_name} takes {arity} type parameters, got {len(type_expr.parameters)}")

    if arity == 2:
        entry.request_type, entry.response_type = type_expr.parameters
    else:
        entry.request_type, entry.response_type = VOID, type_expr.parameters[0]

    default = f.default if isinstance(f.default, dict) else {}
    entry.method = _method(default.get("method"), default_method)
    entry.security = _security(default.get("security"))
    return entry


def _method(value: Any, default: str) -> str:
    if isinstance(value, str) and value.lower() in ("get", "post"):
        return value.lower()
    return default


def _security(value: Any) -> str:
    """Security classification: "public", "token" or "tokenWithRole:<role>"."""
    if isinstance(value, str):
        return value
    if isinstance(value, dict) and len(value) == 1:
        kind, arg = next(iter(value.items()))
        return f"{kind}:{arg}" if arg is not None else kind
    return DEFAULT_SECURITY
