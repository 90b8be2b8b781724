"""
Exceptions raised by the generator pipeline.

Skip conditions (no marked type, unresolved symbol, zero cases) are not
errors and never raise; these exceptions cover malformed input and failed
emission only.
"""

from __future__ import annotations


class DiscriminatedUnionError(Exception):
    """Base class for all generator errors."""


class ManifestError(DiscriminatedUnionError):
    """Raised when a declaration manifest is malformed.

    Attributes:
        path: JSON path of the offending element (e.g. ``#/compilation_units/0``)
    """

    def __init__(self, message: str, path: str = "#"):
        super().__init__(f"{message} (at {path})")
        self.path = path


class SourceParseError(DiscriminatedUnionError):
    """Raised when C# source cannot be parsed."""

    def __init__(self, message: str, path: str = "", line: int | None = None):
        location = path or "<source>"
        if line is not None:
            location = f"{location}:{line}"
        super().__init__(f"{location}: {message}")
        self.path = path
        self.line = line


class EmissionError(DiscriminatedUnionError):
    """Raised when generated code fails validation or cannot be written."""


class GenerationCancelled(DiscriminatedUnionError):
    """Raised when the host cancels generation between extraction and rendering."""
