"""
Loader for ADL JSON AST dumps.

Reads the JSON serialization of `sys.adlast` modules, as written by the ADL
compiler's `ast` command, into schema AST nodes.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from ..errors import SchemaLoadError
from .nodes import (
    Annotation,
    Decl,
    Field,
    Module,
    NewType,
    ScopedName,
    Struct,
    TypeDef,
    TypeExpr,
    TypeRef,
    TypeRefKind,
    Union,
)

logger = logging.getLogger(__name__)


class AstLoader:
    """Builds Module nodes from JSON AST data."""

    def load_files(self, paths: list[Path]) -> dict[str, Module]:
        """Load and merge the modules found in several JSON AST files."""
        modules: dict[str, Module] = {}
        for path in paths:
            with open(path, encoding="utf-8") as f:
                try:
                    data = json.load(f)
                except json.JSONDecodeError as e:
                    raise SchemaLoadError(f"{path}: invalid JSON: {e}") from e
            for module in self.load(data):
                if module.name in modules:
                    logger.debug("Module %s redefined by %s", module.name, path)
                modules[module.name] = module
            logger.debug("Loaded %s", path)
        return modules

    def load(self, data: Any) -> list[Module]:
        """Load modules from a single module, a list of modules, or a name -> module mapping."""
        if isinstance(data, list):
            return [self.parse_module(m) for m in data]
        if isinstance(data, dict) and "decls" in data:
            return [self.parse_module(data)]
        if isinstance(data, dict):
            return [self.parse_module(m) for m in data.values()]
        raise SchemaLoadError(f"Expected a module, a list or a mapping of modules, got {type(data).__name__}")

    def parse_module(self, data: dict) -> Module:
        name = self._require(data, "name", "module")
        module = Module(
            name=name,
            imports=[self._parse_import(i) for i in data.get("imports", [])],
            annotations=self.parse_annotations(data.get("annotations", [])),
        )
        for decl_name, decl_data in data.get("decls", {}).items():
            module.decls[decl_name] = self.parse_decl(decl_data, f"{name}.{decl_name}")
        return module

    def parse_decl(self, data: dict, where: str) -> Decl:
        type_data = self._require(data, "type_", where)
        kind, body = self._parse_union_value(type_data, where)
        if kind == "struct_":
            type_ = Struct(
                type_params=list(body.get("typeParams", [])),
                fields=[self.parse_field(f, where) for f in body.get("fields", [])],
            )
        elif kind == "union_":
            type_ = Union(
                type_params=list(body.get("typeParams", [])),
                fields=[self.parse_field(f, where) for f in body.get("fields", [])],
            )
        elif kind == "type_":
            type_ = TypeDef(
                type_params=list(body.get("typeParams", [])),
                type_expr=self.parse_type_expr(self._require(body, "typeExpr", where)),
            )
        elif kind == "newtype_":
            has_default, default = self._parse_maybe(body.get("default"))
            type_ = NewType(
                type_params=list(body.get("typeParams", [])),
                type_expr=self.parse_type_expr(self._require(body, "typeExpr", where)),
                default=default,
                has_default=has_default,
            )
        else:
            raise SchemaLoadError(f"{where}: unknown declaration kind {kind!r}")

        return Decl(
            name=data.get("name", where.rpartition(".")[2]),
            type_=type_,
            annotations=self.parse_annotations(data.get("annotations", [])),
        )

    def parse_field(self, data: dict, where: str) -> Field:
        name = self._require(data, "name", where)
        has_default, default = self._parse_maybe(data.get("default"))
        return Field(
            name=name,
            serialized_name=data.get("serializedName", name),
            type_expr=self.parse_type_expr(self._require(data, "typeExpr", f"{where}.{name}")),
            default=default,
            has_default=has_default,
            annotations=self.parse_annotations(data.get("annotations", [])),
        )

    def parse_type_expr(self, data: dict) -> TypeExpr:
        kind, value = self._parse_union_value(self._require(data, "typeRef", "typeExpr"), "typeRef")
        if kind == "primitive":
            type_ref = TypeRef(TypeRefKind.PRIMITIVE, value)
        elif kind == "typeParam":
            type_ref = TypeRef(TypeRefKind.TYPE_PARAM, value)
        elif kind == "reference":
            type_ref = TypeRef(TypeRefKind.REFERENCE, self.parse_scoped_name(value))
        else:
            raise SchemaLoadError(f"Unknown type reference kind {kind!r}")
        parameters = tuple(self.parse_type_expr(p) for p in data.get("parameters", []))
        return TypeExpr(type_ref, parameters)

    def parse_scoped_name(self, data: dict) -> ScopedName:
        return ScopedName(self._require(data, "moduleName", "scopedName"), self._require(data, "name", "scopedName"))

    def parse_annotations(self, data: Any) -> list[Annotation]:
        """Parse annotations, serialized either as a list of map entries or as an object keyed by "module.Name"."""
        if isinstance(data, dict):
            return [Annotation(ScopedName.parse(k), v) for k, v in data.items()]

        annotations = []
        for entry in data:
            if "k" in entry:
                annotations.append(Annotation(self.parse_scoped_name(entry["k"]), entry.get("v")))
            elif "key" in entry:
                annotations.append(Annotation(self.parse_scoped_name(entry["key"]), entry.get("value")))
            else:
                raise SchemaLoadError(f"Malformed annotation entry: {entry!r}")
        return annotations

    def _parse_import(self, data: Any) -> str:
        kind, value = self._parse_union_value(data, "import")
        if kind == "moduleName":
            return value
        return str(self.parse_scoped_name(value))

    @staticmethod
    def _parse_union_value(data: Any, where: str) -> tuple[str, Any]:
        """Read a serialized union value: {"kind": value} or a bare "kind" for void variants."""
        if isinstance(data, str):
            return data, None
        if isinstance(data, dict) and len(data) == 1:
            return next(iter(data.items()))
        raise SchemaLoadError(f"{where}: expected a union value, got {data!r}")

    @staticmethod
    def _parse_maybe(data: Any) -> tuple[bool, Any]:
        """Read a serialized Maybe value, returning (present, value)."""
        if data is None or data == "nothing":
            return False, None
        if isinstance(data, dict):
            if "just" in data:
                return True, data["just"]
            if data.get("kind") == "just":
                return True, data.get("value")
            if "nothing" in data or data.get("kind") == "nothing":
                return False, None
        raise SchemaLoadError(f"Expected a Maybe value, got {data!r}")

    @staticmethod
    def _require(data: dict, key: str, where: str) -> Any:
        if not isinstance(data, dict) or key not in data:
            raise SchemaLoadError(f"{where}: missing {key!r}")
        return data[key]
