"""ADL to Code Generator

A Python package for generating code from ADL schemas.
Generates kysely table interfaces, typed service clients and server endpoint
interfaces for TypeScript, and sea-query column schemas for Rust.
"""

__version__ = "0.3.0"

from .pipeline import (
    AstLoader,
    AtomicWriter,
    CodeGeneratorConfig,
    CodegenError,
    OutputConfig,
    OutputMode,
    PipelineGenerator,
)

__all__ = [
    "PipelineGenerator",
    "CodeGeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "CodegenError",
    "AstLoader",
    "AtomicWriter",
]
