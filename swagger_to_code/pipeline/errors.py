"""
Errors raised while compiling a Swagger document.

Every error here aborts the compilation. Recoverable conditions (missing or
duplicated operation ids, unused models) are logged instead.
"""

from __future__ import annotations


class CompilationError(Exception):
    """Base class for errors that abort the compilation."""

    pass


class UnsupportedDocumentError(CompilationError):
    """Raised when the document is not a Swagger 2.0 document."""

    pass


class UnresolvedReferenceError(CompilationError):
    """Raised when a reference does not resolve to a known node.

    This can happen when:
    - A local reference does not start with ``#/``
    - A local reference points to a missing node
    - An allOf composition lists a parent that is not a known model
    """

    def __init__(self, ref: str, message: str | None = None):
        self.ref = ref
        super().__init__(message or f"Unresolved reference: {ref}")


class DocumentLoadError(CompilationError):
    """Raised when the input file is not a JSON or YAML mapping."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"{path}: {message}")


class ConfigurationError(CompilationError):
    """Raised when a configuration value has the wrong type."""

    pass
