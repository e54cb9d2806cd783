"""
Indentation-aware text builder.

An emitter holds lines and nested emitters. A nested emitter is placed at the
point where it was created and can still be filled after the parent has
moved on, which lets a generator open a class body, add the closing brace,
and populate the body afterwards.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager


class CodeEmitter:
    """Builds indented source text."""

    def __init__(self, indent: str = "  "):
        """
        Initialize the emitter.

        Args:
            indent: Indentation added by each nesting level
        """
        self.indent = indent
        self._items: list[str | CodeEmitter] = []

    def add(self, line: str) -> CodeEmitter:
        """Append a line. Returns self so calls can be chained."""
        self._items.append(line)
        return self

    def extend(self, lines: list[str]) -> CodeEmitter:
        for line in lines:
            self.add(line)
        return self

    def inner(self) -> CodeEmitter:
        """Insert a nested emitter, indented one level, at the current position."""
        child = CodeEmitter(self.indent)
        self._items.append(child)
        return child

    @contextmanager
    def block(self, opener: str, closer: str = "}") -> Iterator[CodeEmitter]:
        """Emit `opener`, yield an inner emitter for the body, then emit `closer`."""
        self.add(opener)
        body = self.inner()
        yield body
        self.add(closer)

    def write(self) -> list[str]:
        """Return the emitted lines. Empty lines carry no indentation."""
        lines: list[str] = []
        for item in self._items:
            if isinstance(item, CodeEmitter):
                lines.extend(line and self.indent + line for line in item.write())
            else:
                lines.append(item)
        return lines

    def text(self) -> str:
        return "\n".join(self.write())
