"""
Analyzer module.

Contains declaration resolution, alias expansion, type decoding and
annotation lookup.
"""

from __future__ import annotations

from .alias_expander import expand
from .annotations import find_annotation, get_annotation, has_annotation
from .db_resources import DbTable, ResolvedField, load_db_tables, resolve_field
from .decoder import DecodedKind, DecodedType, TypeExprDecoder, decode
from .resolver import DeclResolver, Resolver

__all__ = [
    "DbTable",
    "DecodedKind",
    "DecodedType",
    "DeclResolver",
    "ResolvedField",
    "Resolver",
    "TypeExprDecoder",
    "decode",
    "expand",
    "find_annotation",
    "get_annotation",
    "has_annotation",
    "load_db_tables",
    "resolve_field",
]
