"""
Base class for code generation backends.

Every backend walks an ordered list of entries in up to four phases:

- collect: register referenced types with the importing helper; emits nothing
- decl: member and property declarations
- ctor: per-entry initialization
- impl: per-entry executable bodies

Phases run strictly in that order, each over the same entry list, so the
output only depends on the schema and its declared order.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import jinja2

from ..analyzer.resolver import DeclResolver
from ..config import CodeGeneratorConfig
from ..errors import PhaseOrderError
from .code_emitter import CodeEmitter
from .importing_helper import ImportingHelper


class Phase(Enum):
    """Generation phase, in execution order."""

    COLLECT = "collect"
    DECL = "decl"
    CTOR = "ctor"
    IMPL = "impl"


_PHASE_ORDER = list(Phase)


@dataclass
class PhaseState:
    """Tracks the phases a backend has run; phases may be skipped but never repeated or reordered."""

    current: Phase | None = None

    def advance(self, phase: Phase) -> None:
        if self.current is not None and _PHASE_ORDER.index(phase) <= _PHASE_ORDER.index(self.current):
            raise PhaseOrderError(f"Phase {phase.value} cannot run after {self.current.value}")
        self.current = phase


class CodeBackend(ABC):
    """Abstract base class for code generation backends."""

    # Template directory name
    TEMPLATE_LANG: str = ""

    # Target name, used for the prefix template name
    TARGET: str = ""

    # File extension
    FILE_EXTENSION: str = ""

    # Indentation of one nesting level
    INDENT: str = "  "

    def __init__(self, resolver: DeclResolver, config: CodeGeneratorConfig, generation_comment: str = ""):
        """
        Initialize the backend.

        Args:
            resolver: Resolver over the loaded modules
            config: Code generation configuration
            generation_comment: Comment line placed at the top of the file
        """
        self.resolver = resolver
        self.config = config
        self.generation_comment = generation_comment
        self.phase_state = PhaseState()
        self._setup_templates()

    def _setup_templates(self) -> None:
        """Set up Jinja2 templates."""
        template_dir = Path(__file__).parent.parent.parent / "templates" / self.TEMPLATE_LANG
        self.jinja_env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            lstrip_blocks=True,
            trim_blocks=True,
            autoescape=False,
        )
        self.prefix_template = self.jinja_env.get_template(f"prefix_{self.TARGET}.{self.FILE_EXTENSION}.jinja2")

    @abstractmethod
    def create_importing_helper(self) -> ImportingHelper:
        """Create the importing helper for one run."""

    @abstractmethod
    def generate(self) -> list[str]:
        """
        Generate the output file.

        Returns:
            Lines of the generated file
        """

    def new_emitter(self) -> CodeEmitter:
        return CodeEmitter(self.INDENT)

    def render_prefix(self, **context: Any) -> list[str]:
        """Render the file header and import block."""
        text = self.prefix_template.render(generation_comment=self.generation_comment, **context)
        return text.splitlines()

    def run_collect(self, entries: list) -> list:
        """Run the collect phase; returns the entries the later phases will see."""
        self.phase_state.advance(Phase.COLLECT)
        return [entry for entry in entries if self.collect(entry)]

    def run_phase(self, phase: Phase, entries: list, emitter: CodeEmitter) -> None:
        """Run an emitting phase over all entries, in order."""
        if phase == Phase.COLLECT:
            raise PhaseOrderError("Use run_collect for the collect phase")
        self.phase_state.advance(phase)
        emit = getattr(self, phase.value)
        for entry in entries:
            emit(entry, emitter)

    def collect(self, entry: Any) -> bool:
        """Register the types of one entry. Returns False to drop the entry."""
        return True

    def decl(self, entry: Any, emitter: CodeEmitter) -> None:
        raise NotImplementedError(f"{type(self).__name__} has no decl phase")

    def ctor(self, entry: Any, emitter: CodeEmitter) -> None:
        raise NotImplementedError(f"{type(self).__name__} has no ctor phase")

    def impl(self, entry: Any, emitter: CodeEmitter) -> None:
        raise NotImplementedError(f"{type(self).__name__} has no impl phase")
