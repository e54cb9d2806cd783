"""
Type syntax of the target languages.

A syntax object spells primitive types, containers and generic
applications in one target language.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..analyzer.decoder import DecodedKind
from ..errors import UnsupportedTypeKindError


class TypeSyntax(ABC):
    """Base class for target type syntaxes."""

    # Spelling of each nullary primitive
    PRIMITIVE_MAP: dict[DecodedKind, str] = {}

    # Separator between a module alias and a name
    QUALIFIER = "."

    # Separator between generic parameters
    PARAM_SEPARATOR = ", "

    def primitive(self, kind: DecodedKind) -> str:
        if kind not in self.PRIMITIVE_MAP:
            raise UnsupportedTypeKindError(f"{type(self).__name__} has no mapping for {kind.value}")
        return self.PRIMITIVE_MAP[kind]

    def container(self, kind: DecodedKind, elem: str) -> str:
        match kind:
            case DecodedKind.VECTOR:
                return self.vector(elem)
            case DecodedKind.STRING_MAP:
                return self.string_map(elem)
            case DecodedKind.NULLABLE:
                return self.nullable(elem)
        raise UnsupportedTypeKindError(f"{kind.value} is not a container type")

    @abstractmethod
    def vector(self, elem: str) -> str:
        """Spell a vector of `elem`."""

    @abstractmethod
    def string_map(self, elem: str) -> str:
        """Spell a map from strings to `elem`."""

    @abstractmethod
    def nullable(self, elem: str) -> str:
        """Spell an optional `elem`."""

    def generic(self, name: str, params: list[str]) -> str:
        if not params:
            return name
        return f"{name}<{self.PARAM_SEPARATOR.join(params)}>"

    def qualify(self, alias: str, name: str) -> str:
        return f"{alias}{self.QUALIFIER}{name}"


_NUMBER_KINDS = [
    DecodedKind.INT8,
    DecodedKind.INT16,
    DecodedKind.INT32,
    DecodedKind.INT64,
    DecodedKind.WORD8,
    DecodedKind.WORD16,
    DecodedKind.WORD32,
    DecodedKind.WORD64,
    DecodedKind.FLOAT,
    DecodedKind.DOUBLE,
]


class TypescriptSyntax(TypeSyntax):
    """TypeScript, following the ADL typescript runtime representation."""

    PRIMITIVE_MAP = {
        DecodedKind.VOID: "null",
        DecodedKind.BOOL: "boolean",
        DecodedKind.STRING: "string",
        DecodedKind.JSON: "{}|null",
        **{kind: "number" for kind in _NUMBER_KINDS},
    }

    PARAM_SEPARATOR = ","

    def vector(self, elem: str) -> str:
        return f"{elem}[]"

    def string_map(self, elem: str) -> str:
        return f"{{[key: string]: {elem}}}"

    def nullable(self, elem: str) -> str:
        return f"({elem}|null)"


class KyselySyntax(TypescriptSyntax):
    """TypeScript as seen by the kysely query builder: database column values."""

    PRIMITIVE_MAP = {
        **TypescriptSyntax.PRIMITIVE_MAP,
        DecodedKind.INT64: "bigint",
        DecodedKind.WORD64: "bigint",
        DecodedKind.JSON: "{}",
    }

    PARAM_SEPARATOR = ", "

    def string_map(self, elem: str) -> str:
        return f"Record<string, {elem}>"

    def nullable(self, elem: str) -> str:
        return f"({elem} | null)"


class RustSyntax(TypeSyntax):
    """Rust, following the ADL rust runtime representation."""

    PRIMITIVE_MAP = {
        DecodedKind.VOID: "()",
        DecodedKind.BOOL: "bool",
        DecodedKind.STRING: "String",
        DecodedKind.JSON: "serde_json::Value",
        DecodedKind.INT8: "i8",
        DecodedKind.INT16: "i16",
        DecodedKind.INT32: "i32",
        DecodedKind.INT64: "i64",
        DecodedKind.WORD8: "u8",
        DecodedKind.WORD16: "u16",
        DecodedKind.WORD32: "u32",
        DecodedKind.WORD64: "u64",
        DecodedKind.FLOAT: "f32",
        DecodedKind.DOUBLE: "f64",
    }

    QUALIFIER = "::"

    def vector(self, elem: str) -> str:
        return f"std::vec::Vec<{elem}>"

    def string_map(self, elem: str) -> str:
        return f"std::collections::HashMap<String, {elem}>"

    def nullable(self, elem: str) -> str:
        return f"std::option::Option<{elem}>"
