"""
Union model definitions.

These nodes are the analyzed, immutable description of one union, the only
input to rendering. They are built once per marked type and never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class NamespaceDeclarationInfo:
    """One enclosing namespace scope."""

    declaration: str | None  # Dotted name; None for the compilation unit scope
    using_statements: str = ""  # Verbatim using lines of this scope only, each ending in "\n"


@dataclass(frozen=True)
class DeclarationInfo:
    """Nesting context of the marked type, outer to inner."""

    namespace_declarations: tuple[NamespaceDeclarationInfo, ...] = ()

    # Headers such as "public static partial class Outer<T>"; the last one is the union
    type_declarations: tuple[str, ...] = ()

    # Generic parameter names across all enclosing types, flattened outer to inner
    generic_type_arguments: tuple[str, ...] = ()

    # Generic parameter names declared by the union type itself
    own_generic_type_arguments: tuple[str, ...] = ()

    # Type names with their generic parameters, e.g. ("Outer<U>", "Result<T>")
    type_names: tuple[str, ...] = ()

    is_value_type: bool = False
    is_record: bool = False


@dataclass(frozen=True)
class UnionCaseParameterInfo:
    """A case parameter: fully-qualified type text plus name."""

    type: str
    name: str


@dataclass(frozen=True)
class UnionCaseInfo:
    """One case of a union."""

    name: str
    name_as_argument: str
    case_class_name_with_generic_arguments: str
    type: str  # Declared return type, display format
    parameters: tuple[UnionCaseParameterInfo, ...] = ()
    accessibility: str = "public"


@dataclass(frozen=True)
class DiscriminatedUnionTypeInfo:
    """A whole union, ready to render."""

    name: str
    name_with_parameters: str
    unique_name: str
    declaration_info: DeclarationInfo
    cases: tuple[UnionCaseInfo, ...]
    generate_to_string: bool = True

    @property
    def namespace(self) -> str | None:
        """Innermost dotted namespace name, joined from all named scopes."""
        names = [ns.declaration for ns in self.declaration_info.namespace_declarations if ns.declaration]
        return ".".join(names) or None
