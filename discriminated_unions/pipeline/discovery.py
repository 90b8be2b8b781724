"""
Discovery of union candidates.

A candidate is an attribute occurrence whose name marks a union. The
analyzer decides whether the attribute actually sits on a type declaration.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .syntax.nodes import AttributeSyntax, CompilationUnit


def _normalize(name: str) -> str:
    return name[: -len("Attribute")] if name.endswith("Attribute") and name != "Attribute" else name


def is_union_attribute(attribute: AttributeSyntax, attribute_names: Iterable[str]) -> bool:
    """Check the attribute's last name segment against the configured names.

    ``DiscriminatedUnion`` and ``DiscriminatedUnionAttribute`` are the same
    attribute in C#, so both spellings match either configured form.
    """
    wanted = {_normalize(name.split(".")[-1]) for name in attribute_names}
    return _normalize(attribute.simple_name) in wanted


def find_union_candidates(
    units: Iterable[CompilationUnit],
    attribute_names: Iterable[str],
) -> Iterator[AttributeSyntax]:
    """Yield every union marker attribute, in document order."""
    attribute_names = list(attribute_names)
    for unit in units:
        for node in unit.descendants():
            if isinstance(node, AttributeSyntax) and is_union_attribute(node, attribute_names):
                yield node
