"""
Schema AST module.

Contains the ADL declaration nodes and the JSON AST loader.
"""

from __future__ import annotations

from .loader import AstLoader
from .nodes import (
    Annotation,
    Decl,
    DeclKind,
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

__all__ = [
    "Annotation",
    "AstLoader",
    "Decl",
    "DeclKind",
    "Field",
    "Module",
    "NewType",
    "ScopedName",
    "Struct",
    "TypeDef",
    "TypeExpr",
    "TypeRef",
    "TypeRefKind",
    "Union",
]
