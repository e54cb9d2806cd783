"""
Atomic file writer for generated code.

A generated file is either written completely or not at all, so a failed
run never leaves a truncated artifact for downstream compilers.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path

from .config import OutputConfig, OutputMode
from .errors import CodegenError

logger = logging.getLogger(__name__)


class AtomicWriter:
    """Handles atomic file writes with validation.

    Uses a two-phase commit approach:
    1. Write to a temporary file in the same directory
    2. Validate the content
    3. Atomically replace the target file
    """

    def __init__(self, output_config: OutputConfig | None = None):
        self.output_config = output_config or OutputConfig()

    def write(self, path: Path, content: str, validate: bool = True) -> None:
        """Write content to file atomically.

        Args:
            path: Target file path
            content: Content to write
            validate: Whether to validate before finalizing

        Raises:
            FileExistsError: If the file exists and the output mode forbids overwriting
            CodegenError: If validation fails
            OSError: If file operations fail
        """
        if path.exists() and self.output_config.mode == OutputMode.ERROR_IF_EXISTS:
            raise FileExistsError(f"Output file already exists: {path}. Use --force to overwrite.")

        if validate:
            self.validate(content)

        path.parent.mkdir(parents=True, exist_ok=True)
        if not self.output_config.atomic_write:
            path.write_text(content, encoding="utf-8")
            return

        # Same directory ensures atomic rename on the same filesystem
        temp_fd, temp_path_str = tempfile.mkstemp(
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            text=True,
        )
        temp_path = Path(temp_path_str)

        try:
            with open(temp_fd, "w", encoding="utf-8", newline="\n") as f:
                f.write(content)
            temp_path.replace(path)
        except BaseException:
            temp_path.unlink(missing_ok=True)
            raise
        logger.info("Wrote %s", path)

    @staticmethod
    def validate(content: str) -> None:
        """Check for balanced braces (simple heuristic)."""
        open_braces = content.count("{")
        close_braces = content.count("}")
        if open_braces != close_braces:
            raise CodegenError(f"Generated code has unbalanced braces: {open_braces} open, {close_braces} close")
