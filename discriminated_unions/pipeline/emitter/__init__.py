"""
Emitter module.

Validates generated C# and writes it atomically to the output directory.
"""

from __future__ import annotations

from .atomic_writer import AtomicWriter
from .sink import ATTRIBUTE_FILE_NAME, EmissionSink, GeneratedSource, render_attribute_source
from .validation import CSharpValidator

__all__ = [
    "ATTRIBUTE_FILE_NAME",
    "AtomicWriter",
    "CSharpValidator",
    "EmissionSink",
    "GeneratedSource",
    "render_attribute_source",
]
