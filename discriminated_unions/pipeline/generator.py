"""
Pipeline generator: sources in, generated union files out.

Each union candidate is discovered, assembled and rendered independently;
a candidate that yields no model contributes no file.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from .analyzer.assembler import UnionModelAssembler
from .ast_backends.renderer import UnionRenderer
from .config import CodeGeneratorConfig
from .discovery import find_union_candidates
from .emitter.sink import EmissionSink, GeneratedSource, render_attribute_source
from .syntax.csharp_parser import parse_sources
from .syntax.manifest_parser import ManifestParser
from .syntax.nodes import CompilationUnit
from .syntax.semantic import SemanticModel

logger = logging.getLogger(__name__)


class PipelineGenerator:
    """Generates union implementations for a set of compilation units."""

    def __init__(self, config: CodeGeneratorConfig | None = None):
        """
        Initialize the generator.

        Args:
            config: Code generation configuration
        """
        self.config = config or CodeGeneratorConfig()
        self.renderer = UnionRenderer(self.config)

    def generate_from_units(
        self,
        units: list[CompilationUnit],
        cancelled: Callable[[], bool] | None = None,
    ) -> list[GeneratedSource]:
        """
        Generate sources for every union declared in the given units.

        Args:
            units: Compilation units of one compilation
            cancelled: Polled once per union, between extraction and rendering

        Returns:
            Generated files in document order of the union attributes

        Raises:
            GenerationCancelled: If ``cancelled`` returns true
        """
        semantic_model = SemanticModel(units, implicit_usings=self.config.implicit_usings)
        assembler = UnionModelAssembler(semantic_model, cancelled=cancelled)

        sources = []
        if self.config.emit_attribute_source:
            sources.append(render_attribute_source(self.config))

        for attribute in find_union_candidates(units, self.config.union_attribute_names):
            info = assembler.assemble(attribute)
            if info is None:
                continue
            file_name = f"{info.unique_name}{self.config.file_suffix}"
            sources.append(GeneratedSource(file_name=file_name, text=self.renderer.render(info)))
            logger.debug("Rendered %s", file_name)
        return sources

    def generate_from_sources(
        self,
        sources: dict[str, str],
        cancelled: Callable[[], bool] | None = None,
    ) -> list[GeneratedSource]:
        """Generate from C# source texts keyed by path."""
        return self.generate_from_units(parse_sources(sources), cancelled)

    def generate_from_manifest(
        self,
        manifest: dict[str, Any],
        cancelled: Callable[[], bool] | None = None,
    ) -> list[GeneratedSource]:
        """Generate from a declaration manifest."""
        return self.generate_from_units(ManifestParser().parse(manifest), cancelled)

    def write(self, sources: list[GeneratedSource], output_dir: Path) -> list[Path]:
        """Write generated sources through the emission sink."""
        return EmissionSink(self.config).write(sources, output_dir)
