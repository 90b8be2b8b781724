"""
Model assembler.

Combines the declaration context and the cases of one marked type into a
DiscriminatedUnionTypeInfo. Anything that prevents a complete model is a
skip, not an error: the candidate simply produces no output.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..errors import GenerationCancelled
from ..syntax.nodes import AttributeSyntax
from ..syntax.semantic import MethodSymbol, SemanticModel, TypeSymbol
from .case_extractor import extract_cases
from .declaration_extractor import extract_declaration_info, extract_from_attribute
from .model import DiscriminatedUnionTypeInfo

logger = logging.getLogger(__name__)


def overrides_to_string(symbol: TypeSymbol) -> bool:
    """Whether the type declares ``override string ToString()`` itself.

    Only that exact signature counts; other ToString overloads or a
    non-override ``new`` method do not suppress the generated one.
    """
    return any(
        isinstance(member, MethodSymbol)
        and member.is_override
        and not member.is_implicitly_declared
        and member.name == "ToString"
        and not member.declaration.parameters
        for member in symbol.get_members()
    )


def unique_name(symbol: TypeSymbol) -> str:
    """File-safe name: display string with ``<>`` replaced by ``[]``."""
    return symbol.to_display_string().replace("<", "[").replace(">", "]")


class UnionModelAssembler:
    """Builds union models for the candidates of one semantic model."""

    def __init__(self, semantic_model: SemanticModel, cancelled: Callable[[], bool] | None = None):
        self.semantic_model = semantic_model
        self.cancelled = cancelled

    def assemble(self, attribute: AttributeSyntax) -> DiscriminatedUnionTypeInfo | None:
        """
        Build the model for one union attribute.

        Args:
            attribute: A union marker attribute

        Returns:
            The union model, or None when the candidate is skipped

        Raises:
            GenerationCancelled: If the cancellation check returns true
        """
        declaration = extract_from_attribute(attribute)
        if declaration is None:
            logger.debug("Skipping [%s]: not attached to a type declaration", attribute.name)
            return None

        symbol = self.semantic_model.get_declared_symbol(declaration)
        if symbol is None:
            logger.debug("Skipping %s: no symbol", declaration.identifier)
            return None

        declaration_info = extract_declaration_info(declaration)
        cases = extract_cases(symbol, declaration_info.generic_type_arguments)
        if not cases:
            logger.debug("Skipping %s: no cases", symbol.to_display_string())
            return None

        if self.cancelled is not None and self.cancelled():
            raise GenerationCancelled(f"Generation cancelled before rendering {symbol.to_display_string()}")

        name_with_parameters = symbol.name
        if declaration_info.own_generic_type_arguments:
            name_with_parameters += f"<{', '.join(declaration_info.own_generic_type_arguments)}>"

        info = DiscriminatedUnionTypeInfo(
            name=symbol.name,
            name_with_parameters=name_with_parameters,
            unique_name=unique_name(symbol),
            declaration_info=declaration_info,
            cases=cases,
            generate_to_string=not overrides_to_string(symbol),
        )
        logger.debug("Assembled %s with %d cases", info.unique_name, len(cases))
        return info
