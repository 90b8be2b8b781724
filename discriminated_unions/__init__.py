"""Discriminated Unions for C#

A Python package that generates C# tagged union implementations
(case factories, an exhaustive Match fold and ToString) from partial
type declarations marked with a [DiscriminatedUnion] attribute.
"""

__version__ = "1.0.0"

from .pipeline import (
    AtomicWriter,
    CodeGeneratorConfig,
    DiscriminatedUnionError,
    GeneratedSource,
    OutputConfig,
    OutputMode,
    PipelineGenerator,
    ReferenceStyle,
)

__all__ = [
    "PipelineGenerator",
    "CodeGeneratorConfig",
    "OutputConfig",
    "OutputMode",
    "ReferenceStyle",
    "DiscriminatedUnionError",
    "GeneratedSource",
    "AtomicWriter",
]
