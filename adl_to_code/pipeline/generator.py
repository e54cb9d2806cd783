"""
Pipeline generator.

One generation run for one output file:

1. Resolver: built from the loaded modules
2. Backend: decodes the schema and emits lines through the importing helper
3. Text: lines joined into the file content
"""

from __future__ import annotations

import logging

from .analyzer.resolver import DeclResolver
from .backends import CodeBackend, EndpointsBackend, KyselyBackend, SeaQueryBackend, ServiceBackend
from .config import CodeGeneratorConfig
from .schema_ast.nodes import Module, ScopedName

logger = logging.getLogger(__name__)

TABLE_TARGETS: dict[str, type[CodeBackend]] = {
    "kysely": KyselyBackend,
    "seaquery": SeaQueryBackend,
}

API_TARGETS: dict[str, type[CodeBackend]] = {
    "service": ServiceBackend,
    "endpoints": EndpointsBackend,
}

TARGETS = [*TABLE_TARGETS, *API_TARGETS]


class PipelineGenerator:
    """Generates one output file from loaded ADL modules."""

    def __init__(
        self,
        target: str,
        modules: dict[str, Module],
        config: CodeGeneratorConfig | None = None,
        api_name: ScopedName | None = None,
    ):
        """
        Initialize the generator.

        Args:
            target: One of TARGETS
            modules: Loaded modules, keyed by module name
            config: Code generation configuration
            api_name: The API struct, for the service and endpoints targets
        """
        if target not in TARGETS:
            raise ValueError(f"Unknown target '{target}', expected one of {', '.join(TARGETS)}")
        if target in API_TARGETS and api_name is None:
            raise ValueError(f"Target '{target}' needs an API struct name")
        self.target = target
        self.modules = modules
        self.config = config or CodeGeneratorConfig()
        self.api_name = api_name

    def generate(self) -> str:
        """Generate the file content."""
        resolver = DeclResolver(self.modules)
        backend = self._create_backend(resolver)
        lines = backend.generate()
        logger.info("Generated %d lines for target %s", len(lines), self.target)
        return "\n".join(lines)

    def _create_backend(self, resolver: DeclResolver) -> CodeBackend:
        comment = self._generate_command_comment()
        if self.target in API_TARGETS:
            return API_TARGETS[self.target](resolver, self.config, self.api_name, comment)
        return TABLE_TARGETS[self.target](resolver, self.config, comment)

    def _generate_command_comment(self) -> str:
        """Generate a simplified command line comment for the generated file"""
        if not self.config.add_generation_comment:
            return ""

        from .. import __version__
        from ..cli_utils import reconstruct_command_line

        try:
            from ..adl_to_code import adl_to_code as click_command  # noqa

            command_line = reconstruct_command_line(click_command)
        except (ImportError, AttributeError):
            command_line = "adl_to_code"

        return f"// Generated by adl_to_code v{__version__} : {command_line}"
