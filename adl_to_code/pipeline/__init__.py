"""
Pipeline - ADL schema to code generator.

This module provides a multi-phase architecture for generating code from an
already-parsed ADL declaration graph:

1. Phase 1 (Loader): Read the JSON AST dump into schema AST nodes
2. Phase 2 (Analyzer): Resolve references, expand aliases, decode types
3. Phase 3 (Backend): Collect imports, then emit declarations, constructors
   and implementations through the code emitter
4. Phase 4 (Writer): Write the file atomically
"""

from __future__ import annotations

from .config import CodeGeneratorConfig, OutputConfig, OutputMode
from .errors import CodegenError
from .generator import TARGETS, PipelineGenerator
from .schema_ast import AstLoader
from .writer import AtomicWriter

__all__ = [
    "AstLoader",
    "AtomicWriter",
    "CodeGeneratorConfig",
    "CodegenError",
    "OutputConfig",
    "OutputMode",
    "PipelineGenerator",
    "TARGETS",
]
