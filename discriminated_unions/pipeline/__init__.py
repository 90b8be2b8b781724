"""
Pipeline - discriminated union generator for C#.

This module provides a multi-phase architecture for generating C# tagged
union implementations from declarations:

1. Phase 1 (Syntax): Parse C# sources (tree-sitter) or a JSON manifest
2. Phase 2 (Discovery): Find types marked with the union attribute
3. Phase 3 (Analyzer): Extract declaration context and cases into a model
4. Phase 4 (AST Backend): Build a C# AST for the reference or value layout
5. Phase 5 (Serializer): Convert AST to source code
6. Phase 6 (Emitter): Validate and write files atomically
"""

from __future__ import annotations

from .config import CodeGeneratorConfig, OutputConfig, OutputMode, ReferenceStyle
from .emitter import AtomicWriter, GeneratedSource
from .errors import (
    DiscriminatedUnionError,
    EmissionError,
    GenerationCancelled,
    ManifestError,
    SourceParseError,
)
from .generator import PipelineGenerator

__all__ = [
    "AtomicWriter",
    "CodeGeneratorConfig",
    "DiscriminatedUnionError",
    "EmissionError",
    "GeneratedSource",
    "GenerationCancelled",
    "ManifestError",
    "OutputConfig",
    "OutputMode",
    "PipelineGenerator",
    "ReferenceStyle",
    "SourceParseError",
]
