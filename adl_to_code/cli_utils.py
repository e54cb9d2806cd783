"""
CLI utilities for command line reconstruction and logging setup.
"""

import logging
import sys
from pathlib import Path

import click


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Reconstruct command line from current Click context using introspection.

    Args:
        click_command: Click command object for introspection

    Returns:
        Reconstructed command line string
    """
    try:
        ctx = click.get_current_context()
        cli_args = ctx.params
    except RuntimeError:
        # No active context, return basic command
        return "adl_to_code"

    if not cli_args:
        return "adl_to_code"

    cmd_parts = ["adl_to_code"]
    arguments = []
    options = []

    for param in click_command.params:
        param_name = param.name
        if param_name not in cli_args:
            continue

        value = cli_args[param_name]
        if not value:
            continue

        # Flags are never echoed: they don't change what is generated
        if isinstance(value, bool):
            continue

        values = value if isinstance(value, (list, tuple)) else [value]
        # File paths are shown as bare file names
        formatted = [Path(str(v)).name if isinstance(param.type, click.Path) else str(v) for v in values]

        if isinstance(param, click.Argument):
            arguments.extend(formatted)
        elif isinstance(param, click.Option):
            if hasattr(param, "default") and value == param.default:
                continue
            flag = param.opts[0] if param.opts else f"--{param_name}"
            for v in formatted:
                options.extend([flag, v])

    cmd_parts.extend(arguments)
    cmd_parts.extend(options)

    return " ".join(cmd_parts)


class _GeneratorFormatter(logging.Formatter):
    """Formatter that prints bare messages for warnings and above, and tags the rest."""

    def format(self, record):
        if record.levelno >= logging.WARNING:
            return f"{record.levelname.lower()}: {record.getMessage()}"
        return super().format(record)


def configure_logging(verbose: bool = False) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_GeneratorFormatter("%(levelname)s %(name)s - %(message)s"))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        handlers=[handler],
        force=True,
    )
