"""
Base class for union layout backends.

A backend fills the reopened partial union type with its storage, case
factories, the exhaustive Match fold and the default ToString. The
members every layout shares are built here.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from ...utils import pascal_name
from ..analyzer.model import DiscriminatedUnionTypeInfo, UnionCaseInfo
from ..config import CodeGeneratorConfig
from .csharp_ast_nodes import (
    CSharpClass,
    CSharpExpression,
    CSharpInterpolatedString,
    CSharpInterpolation,
    CSharpMethod,
    CSharpNamespace,
    CSharpParameter,
    CSharpSwitchArm,
    MemberModifier,
)
from .csharp_serializer import string_literal

FUNC_TYPE = "global::System.Func"
FATAL_EXCEPTION = "global::System.InvalidOperationException"

# Pattern variable bound in switch arms; upper-case so it never shadows a handler argument
CASE_VARIABLE = "Case"


def case_parameters(case: UnionCaseInfo) -> list[CSharpParameter]:
    """The declared parameter list of a case factory."""
    return [CSharpParameter(name=p.name, type_name=p.type) for p in case.parameters]


class UnionBackend(ABC):
    """Abstract base class for union layout backends."""

    def __init__(self, config: CodeGeneratorConfig):
        """
        Initialize the backend.

        Args:
            config: Code generation configuration
        """
        self.config = config

    @abstractmethod
    def build(self, info: DiscriminatedUnionTypeInfo, union: CSharpClass, namespace: CSharpNamespace) -> None:
        """
        Add the union's generated members.

        Args:
            info: The union model
            union: The reopened partial union type
            namespace: Innermost namespace scope, for file-level case types
        """

    def result_type_parameter(self, info: DiscriminatedUnionTypeInfo) -> str:
        """``TResult``, renamed if a generic parameter in scope already uses it."""
        name = "TResult"
        taken = set(info.declaration_info.generic_type_arguments)
        suffix = 1
        while name in taken:
            name = f"TResult{suffix}"
            suffix += 1
        return name

    def func_type(self, argument_types: list[str], result: str) -> str:
        return f"{FUNC_TYPE}<{', '.join([*argument_types, result])}>"

    def factory(self, case: UnionCaseInfo, expression: CSharpExpression) -> CSharpMethod:
        """Implementation of a declared ``static partial`` case factory."""
        return CSharpMethod(
            name=case.name,
            return_type=case.type,
            access=case.accessibility,
            modifiers=[MemberModifier.STATIC, MemberModifier.PARTIAL],
            parameters=case_parameters(case),
            expression_body=expression,
        )

    def fatal_arm(self, info: DiscriminatedUnionTypeInfo) -> CSharpSwitchArm:
        """Discard arm for a value matching no known case."""
        message = string_literal(f"Unknown case of {info.name_with_parameters}")
        return CSharpSwitchArm(pattern="_", expression=f"throw new {FATAL_EXCEPTION}({message})")

    def match_method(
        self,
        info: DiscriminatedUnionTypeInfo,
        handler_argument_types: list[list[str]],
        expression: CSharpExpression,
    ) -> CSharpMethod:
        """The exhaustive fold: one handler per case, in case order."""
        result = self.result_type_parameter(info)
        return CSharpMethod(
            name="Match",
            return_type=result,
            type_parameters=[result],
            parameters=[
                CSharpParameter(name=case.name_as_argument, type_name=self.func_type(types, result))
                for case, types in zip(info.cases, handler_argument_types, strict=True)
            ],
            expression_body=expression,
            wrap_parameters=True,
        )

    def case_text(self, case: UnionCaseInfo, values: list[str]) -> CSharpInterpolatedString:
        """``Case(Prop=value, ...)`` text for one case."""
        parts: list[str | CSharpInterpolation] = [f"{case.name}("]
        for i, (parameter, value) in enumerate(zip(case.parameters, values, strict=True)):
            separator = ", " if i else ""
            parts.append(f"{separator}{pascal_name(parameter.name)}=")
            parts.append(CSharpInterpolation(expression=value))
        parts.append(")")
        return CSharpInterpolatedString(parts=parts)

    def to_string_method(self, info: DiscriminatedUnionTypeInfo, expression: CSharpExpression) -> CSharpMethod:
        """Default ToString; sealed on record classes so case records keep it."""
        modifiers = [MemberModifier.OVERRIDE]
        if info.declaration_info.is_record and not info.declaration_info.is_value_type:
            modifiers.insert(0, MemberModifier.SEALED)
        return CSharpMethod(
            name="ToString",
            return_type="string",
            modifiers=modifiers,
            expression_body=expression,
        )
