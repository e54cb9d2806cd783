"""
Configuration for the code generator pipeline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when the output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    atomic_write: bool = True


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Add generation comment at top of file
    add_generation_comment: bool = True

    # Tables never emitted, by table name
    excluded_tables: list[str] = field(default_factory=lambda: ["meta_adl_decl"])

    # "module.Name" of the table structs to generate, in order; None for every annotated struct
    table_decls: list[str] | None = None

    # "module.Name" -> TypeScript type used verbatim by the kysely target
    typescript_type_overrides: dict[str, str] = field(default_factory=lambda: {"common.Instant": "Date"})

    # Relative path from the generated TypeScript file to the ADL generated sources
    adl_gen_dir_rel: str = "./adl-gen"

    # Import root for the kysely interface file
    kysely_import_root: str = "."

    # Name of the generated service class
    service_class: str = "AppService"

    # Rust module aliases for the generated ADL types and the ADL runtime
    rust_gen_module_alias: str = "adlgen"
    rust_runtime_module_alias: str = "adlrt"

    # Rust wrapper type for primary key columns
    rust_key_type: str = "DbKey"

    # Output configuration
    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if k == "output" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.ERROR_IF_EXISTS)
                if isinstance(mode, str):
                    mode = OutputMode(mode)
                config.output = OutputConfig(
                    mode=mode,
                    atomic_write=v.get("atomic_write", True),
                )
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "add_generation_comment": self.add_generation_comment,
            "excluded_tables": self.excluded_tables,
            "table_decls": self.table_decls,
            "typescript_type_overrides": self.typescript_type_overrides,
            "adl_gen_dir_rel": self.adl_gen_dir_rel,
            "kysely_import_root": self.kysely_import_root,
            "service_class": self.service_class,
            "rust_gen_module_alias": self.rust_gen_module_alias,
            "rust_runtime_module_alias": self.rust_runtime_module_alias,
            "rust_key_type": self.rust_key_type,
            "output": {
                "mode": self.output.mode.value,
                "atomic_write": self.output.atomic_write,
            },
        }
