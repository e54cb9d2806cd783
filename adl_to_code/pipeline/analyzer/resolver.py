"""
Declaration resolver.

Maps scoped names to declarations. A resolver is built once at the start of
a generation run and passed explicitly to every component that needs it.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Protocol

from ..errors import UnresolvedReferenceError
from ..schema_ast.nodes import Decl, Module, ScopedName


class Resolver(Protocol):
    """Lookup capability from scoped name to declaration."""

    def resolve(self, scoped_name: ScopedName) -> Decl: ...


class DeclResolver:
    """Resolver over a set of loaded modules."""

    def __init__(self, modules: dict[str, Module]):
        """
        Initialize the resolver.

        Args:
            modules: Loaded modules, keyed by module name
        """
        self.modules = modules

    def resolve(self, scoped_name: ScopedName) -> Decl:
        module = self.modules.get(scoped_name.module_name)
        decl = module.decls.get(scoped_name.name) if module else None
        if decl is None:
            raise UnresolvedReferenceError(scoped_name)
        return decl

    def find(self, scoped_name: ScopedName) -> Decl | None:
        """Like resolve, but returns None for unknown names."""
        try:
            return self.resolve(scoped_name)
        except UnresolvedReferenceError:
            return None

    def iter_decls(self) -> Iterator[tuple[ScopedName, Decl]]:
        """Iterate all declarations, modules by name, declarations in declared order."""
        for module_name in sorted(self.modules):
            for decl in self.modules[module_name].decls.values():
                yield ScopedName(module_name, decl.name), decl
