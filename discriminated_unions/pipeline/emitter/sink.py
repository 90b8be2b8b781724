"""
Emission sink.

Turns union models into (file name, source text) pairs and writes them to
an output directory.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import jinja2

from ..config import CodeGeneratorConfig, OutputMode
from ..errors import EmissionError
from .atomic_writer import AtomicWriter
from .validation import CSharpValidator

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent.parent.parent / "templates" / "cs"

ATTRIBUTE_FILE_NAME = "DiscriminatedUnionAttribute.g.cs"


@dataclass(frozen=True)
class GeneratedSource:
    """One generated file."""

    file_name: str
    text: str


def render_attribute_source(config: CodeGeneratorConfig) -> GeneratedSource:
    """Declaration of the marker attribute, in the configured namespace."""
    jinja_env = jinja2.Environment(lstrip_blocks=True, trim_blocks=True, keep_trailing_newline=True)
    template = jinja_env.from_string((TEMPLATES_DIR / "attributes.cs.jinja2").read_text(encoding="utf-8"))
    name = config.union_attribute_names[0] if config.union_attribute_names else "DiscriminatedUnion"
    if name.endswith("Attribute"):
        name = name[: -len("Attribute")]
    text = template.render(
        generation_comment="// <auto-generated/>" if config.add_generation_comment else "",
        namespace=config.attribute_namespace,
        attribute_name=name.split(".")[-1],
    )
    return GeneratedSource(file_name=ATTRIBUTE_FILE_NAME, text=text)


class EmissionSink:
    """Writes generated sources to disk."""

    def __init__(self, config: CodeGeneratorConfig):
        self.config = config
        self.validator = CSharpValidator()
        self.writer = AtomicWriter(validate_csharp=self.validator, mode=config.output.mode)

    def write(self, sources: list[GeneratedSource], output_dir: Path) -> list[Path]:
        """
        Write generated sources into a directory.

        Args:
            sources: Generated files
            output_dir: Target directory (created if missing)

        Returns:
            Paths of the written files

        Raises:
            EmissionError: If a source fails validation or cannot be written
        """
        output_dir = Path(output_dir)
        written = []
        seen = set()
        for source in sources:
            if source.file_name in seen:
                logger.warning("Duplicate generated file name %s", source.file_name)
            seen.add(source.file_name)
            path = output_dir / source.file_name
            try:
                if self.config.output.atomic_write:
                    self.writer.write(path, source.text, validate=self.config.output.validate_before_write)
                else:
                    self._write_direct(path, source.text)
            except OSError as e:
                raise EmissionError(f"Cannot write {path}: {e}") from e
            written.append(path)
        return written

    def _write_direct(self, path: Path, text: str) -> None:
        if self.config.output.validate_before_write:
            self.validator.validate(text, str(path))
        if path.exists() and self.config.output.mode == OutputMode.ERROR_IF_EXISTS:
            raise FileExistsError(f"Output file already exists: {path}. Use force mode to overwrite.")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8", newline="\n")
        logger.info("Wrote %s", path)
