"""
Import tracking for one generated file.

The importing helper collects every declaration referenced by a generated
file, assigns each source module a unique alias, and then spells type
expressions with whatever qualification the file's imports require.

Usage is strictly two-phase:

1. `add_type` / `add_reference` for every type the file will mention
2. `resolve_imports` once
3. `as_referenced_name` / `referenced_name` and `module_imports` as needed

One helper serves exactly one generation run.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..analyzer.decoder import CONTAINERS, PRIMITIVES
from ..errors import ImportingHelperUsageError, PartialApplicationError, UnsupportedTypeKindError
from ..schema_ast.nodes import ScopedName, TypeExpr, TypeRefKind
from .syntax import TypeSyntax

logger = logging.getLogger(__name__)


@dataclass
class ImportedSymbol:
    """A symbol imported from a module."""

    name: str  # Name in the source module
    local_name: str  # Name in the generated file

    @property
    def is_renamed(self) -> bool:
        return self.name != self.local_name

    @property
    def import_spec(self) -> str:
        """The symbol as written in an import list, e.g. "Unit as http_Unit"."""
        return f"{self.name} as {self.local_name}" if self.is_renamed else self.name


@dataclass
class ModuleImport:
    """All symbols imported from one module."""

    module: str
    alias: str
    symbols: list[ImportedSymbol] = field(default_factory=list)

    @property
    def path(self) -> str:
        """The module name as a relative path, e.g. "protoapp/db"."""
        return self.module.replace(".", "/")

    @property
    def is_renamed(self) -> bool:
        """Whether the alias differs from the last segment of the module name."""
        return self.alias != self.module.rpartition(".")[2]


class ImportingHelper:
    """Tracks the imports of one generated file."""

    def __init__(self, syntax: TypeSyntax, local_module: str | None = None, qualified: bool = False):
        """
        Initialize the helper.

        Args:
            syntax: Spelling of types in the target language
            local_module: Module whose declarations are referenced unqualified
            qualified: Reference imported names through their module alias
                (`db.AppUser`) instead of importing them by name (`AppUser`)
        """
        self.syntax = syntax
        self.local_module = local_module
        self.qualified = qualified

        # module -> symbol names, both in order of first registration
        self._symbols: dict[str, list[str]] = {}
        self._resolved = False

        self.module_aliases: dict[str, str] = {}
        self._local_names: dict[tuple[str, str], str] = {}

    def add_type(self, type_expr: TypeExpr, extra_prefixes: tuple[str, ...] = ()) -> None:
        """
        Register a type and, recursively, its type parameters.

        Args:
            type_expr: The type the generated file will mention
            extra_prefixes: Companion symbols to import alongside a referenced
                declaration, e.g. ("sn", "make") for snFoo and makeFoo
        """
        self._check_not_resolved("add_type")
        scoped_name = type_expr.scoped_name
        if scoped_name is not None:
            self._add_symbol(scoped_name.module_name, scoped_name.name)
            for prefix in extra_prefixes:
                self._add_symbol(scoped_name.module_name, prefix + scoped_name.name)
        for param in type_expr.parameters:
            self.add_type(param)

    def add_reference(self, scoped_name: ScopedName) -> None:
        """Register a single declaration."""
        self._check_not_resolved("add_reference")
        self._add_symbol(scoped_name.module_name, scoped_name.name)

    def _add_symbol(self, module: str, name: str) -> None:
        symbols = self._symbols.setdefault(module, [])
        if name not in symbols:
            symbols.append(name)

    def resolve_imports(self) -> None:
        """Assign module aliases and local names. Call exactly once."""
        self._check_not_resolved("resolve_imports")
        self._resolved = True

        # Module aliases: last path segment, numbered on collision in registration order
        used_aliases: set[str] = set()
        for module in self._symbols:
            if module == self.local_module:
                continue
            base = module.rpartition(".")[2]
            alias = base
            n = 2
            while alias in used_aliases:
                alias = f"{base}_{n}"
                n += 1
            used_aliases.add(alias)
            self.module_aliases[module] = alias
            if alias != base:
                logger.debug("Module %s imported as %s", module, alias)

        taken: set[str] = set(self._symbols.get(self.local_module, []))
        for name in taken:
            self._local_names[(self.local_module, name)] = name

        for module, alias in self.module_aliases.items():
            for name in self._symbols[module]:
                if self.qualified:
                    local_name = self.syntax.qualify(alias, name)
                else:
                    local_name = name
                    n = 2
                    while local_name in taken:
                        local_name = f"{alias}_{name}" if n == 2 else f"{alias}_{name}_{n}"
                        n += 1
                    taken.add(local_name)
                self._local_names[(module, name)] = local_name

    def module_imports(self) -> list[ModuleImport]:
        """The imports of the file, modules in order of first registration."""
        self._check_resolved("module_imports")
        imports = []
        for module, alias in self.module_aliases.items():
            symbols = [ImportedSymbol(name, name if self.qualified else self._local_names[(module, name)]) for name in self._symbols[module]]
            imports.append(ModuleImport(module, alias, symbols))
        return imports

    def referenced_name(self, scoped_name: ScopedName, prefix: str = "") -> str:
        """The name to print for a declaration (or a prefixed companion symbol)."""
        self._check_resolved("referenced_name")
        key = (scoped_name.module_name, prefix + scoped_name.name)
        if key not in self._local_names:
            raise ImportingHelperUsageError(f"{scoped_name.module_name}.{prefix}{scoped_name.name} was not registered before resolve_imports")
        return self._local_names[key]

    def as_referenced_name(self, type_expr: TypeExpr, prefix: str = "") -> str:
        """The full type to print for a type expression, with any qualifiers embedded."""
        self._check_resolved("as_referenced_name")
        type_ref = type_expr.type_ref
        params = [self.as_referenced_name(p) for p in type_expr.parameters]

        match type_ref.kind:
            case TypeRefKind.REFERENCE:
                return self.syntax.generic(self.referenced_name(type_ref.value, prefix), params)
            case TypeRefKind.TYPE_PARAM:
                return self.syntax.generic(type_ref.value, params)

        name = type_ref.value
        if name in PRIMITIVES:
            if params:
                raise PartialApplicationError(f"{name} takes no type parameters")
            return self.syntax.primitive(PRIMITIVES[name])
        if name in CONTAINERS:
            if len(params) != 1:
                raise PartialApplicationError(f"{name} takes 1 type parameter, got {len(params)}")
            inner = type_expr.parameters[0].type_ref
            if name == "Nullable" and inner.kind == TypeRefKind.PRIMITIVE and inner.value == "Nullable":
                # Nullable<Nullable<T>> has a single null value
                return params[0]
            return self.syntax.container(CONTAINERS[name], params[0])
        raise UnsupportedTypeKindError(f"unhandled type: {name}")

    def _check_resolved(self, operation: str) -> None:
        if not self._resolved:
            raise ImportingHelperUsageError(f"{operation} called before resolve_imports")

    def _check_not_resolved(self, operation: str) -> None:
        if self._resolved:
            raise ImportingHelperUsageError(f"{operation} called after resolve_imports")
