"""
Errors raised while resolving schemas and generating code.

Every error except `PhaseOrderError` and `ImportingHelperUsageError` describes
a problem with the schema being generated. All of them abort the output file
currently being produced; other output files are unaffected.
"""

from __future__ import annotations


class CodegenError(Exception):
    """Base class for all generation errors."""

    pass


class SchemaLoadError(CodegenError):
    """Raised when a JSON AST dump cannot be interpreted as ADL modules."""

    pass


class UnresolvedReferenceError(CodegenError):
    """Raised when the resolver has no declaration for a scoped name."""

    def __init__(self, scoped_name):
        super().__init__(f"Scoped name not found: {scoped_name}")
        self.scoped_name = scoped_name


class AliasCycleError(CodegenError):
    """Raised when alias expansion or decoding exceeds its depth bound.

    This happens for cyclic type aliases, which the schema language does
    not support.
    """

    pass


class PartialApplicationError(CodegenError):
    """Raised when a generic declaration is applied to the wrong number of type arguments."""

    pass


class UnsupportedTypeKindError(CodegenError):
    """Raised when the decoder meets a type with no defined mapping.

    New primitive kinds need an explicit case in the decoder.
    """

    pass


class MissingAnnotationError(CodegenError):
    """Raised when a generator requires an annotation that is absent."""

    pass


class InvalidAnnotationError(CodegenError):
    """Raised when a recognized annotation carries a malformed value."""

    pass


class ImportingHelperUsageError(CodegenError):
    """Raised when the importing helper is used out of order."""

    pass


class PhaseOrderError(CodegenError):
    """Raised when a generator phase runs out of order."""

    pass
