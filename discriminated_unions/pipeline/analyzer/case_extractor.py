"""
Case extractor.

A case is a static, body-less partial method without type parameters of
its own, declared directly on the union type.
"""

from __future__ import annotations

from ...utils import argument_name
from ..syntax.semantic import MethodSymbol, TypeSymbol
from .model import UnionCaseInfo, UnionCaseParameterInfo


def is_case_method(member) -> bool:
    return (
        isinstance(member, MethodSymbol)
        and member.is_static
        and member.is_partial_definition
        and not member.type_parameters
    )


def case_class_name(name: str, generic_arguments: tuple[str, ...]) -> str:
    if not generic_arguments:
        return name
    return f"{name}<{', '.join(generic_arguments)}>"


def extract_cases(symbol: TypeSymbol, generic_arguments: tuple[str, ...]) -> tuple[UnionCaseInfo, ...]:
    """Cases of a union, in member order."""
    cases = []
    for member in symbol.get_members():
        if not is_case_method(member):
            continue
        cases.append(
            UnionCaseInfo(
                name=member.name,
                name_as_argument=argument_name(member.name),
                case_class_name_with_generic_arguments=case_class_name(member.name, generic_arguments),
                type=member.return_type.to_display_string(),
                parameters=tuple(
                    UnionCaseParameterInfo(type=p.type.to_display_string(fully_qualified=True), name=p.name)
                    for p in member.parameters
                ),
                accessibility=member.accessibility,
            )
        )
    return tuple(cases)
