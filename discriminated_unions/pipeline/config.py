"""
Configuration for the union generator pipeline.

Mirrors the structure used by the CLI ``--config`` JSON file:
top-level generation options plus a nested ``output`` section.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OutputMode(str, Enum):
    """Output mode for file generation.

    Controls behavior when an output file already exists.
    """

    ERROR_IF_EXISTS = "error"  # Default: raise error if file exists
    FORCE = "force"  # Overwrite


class ReferenceStyle(str, Enum):
    """Layout used for reference-type (class / record) unions."""

    FLAT = "flat"  # One file-local sealed type per case
    CAPABILITY = "capability"  # Cases.X interfaces + private Implementations


@dataclass
class OutputConfig:
    """Configuration for output file handling.

    Attributes:
        mode: How to handle existing output files
        validate_before_write: Whether to reparse generated code before writing
        atomic_write: Whether to use atomic file writes
    """

    mode: OutputMode = OutputMode.ERROR_IF_EXISTS
    validate_before_write: bool = True
    atomic_write: bool = True


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Attribute names that mark a type as a union (last name segment)
    union_attribute_names: list[str] = field(default_factory=lambda: ["DiscriminatedUnion", "DiscriminatedUnionAttribute"])

    # Layout for class / record unions
    reference_style: ReferenceStyle = ReferenceStyle.FLAT

    # Emit MatchName / MapNames helpers
    case_name_helpers: bool = False

    # Add "// <auto-generated/>" at the top of each file
    add_generation_comment: bool = True

    # Suffix appended to the unique type name to build the file name
    file_suffix: str = ".g.cs"

    # Also emit the marker attribute declaration
    emit_attribute_source: bool = False

    # Namespace of the emitted marker attribute
    attribute_namespace: str = "DiscriminatedUnions"

    # Namespaces imported implicitly by the build (e.g. SDK implicit usings)
    implicit_usings: list[str] = field(default_factory=list)

    # Output configuration
    output: OutputConfig = field(default_factory=OutputConfig)

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if k == "output" and isinstance(v, dict):
                mode = v.get("mode", OutputMode.ERROR_IF_EXISTS)
                if isinstance(mode, str):
                    mode = OutputMode(mode)
                config.output = OutputConfig(
                    mode=mode,
                    validate_before_write=v.get("validate_before_write", True),
                    atomic_write=v.get("atomic_write", True),
                )
            elif k == "reference_style" and isinstance(v, str):
                config.reference_style = ReferenceStyle(v)
            elif hasattr(config, k):
                setattr(config, k, v)
        return config

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {
            "union_attribute_names": self.union_attribute_names,
            "reference_style": self.reference_style.value,
            "case_name_helpers": self.case_name_helpers,
            "add_generation_comment": self.add_generation_comment,
            "file_suffix": self.file_suffix,
            "emit_attribute_source": self.emit_attribute_source,
            "attribute_namespace": self.attribute_namespace,
            "implicit_usings": self.implicit_usings,
            "output": {
                "mode": self.output.mode.value,
                "validate_before_write": self.output.validate_before_write,
                "atomic_write": self.output.atomic_write,
            },
        }
