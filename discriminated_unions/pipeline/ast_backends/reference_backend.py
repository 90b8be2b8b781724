"""
Reference-type layout.

Each case gets its own sealed implementation type deriving from the union.

- flat style (default): one file-local sealed type per case at namespace
  level; Match hands the stored values straight to the handlers.
- capability style: nested ``Cases`` interfaces expose each case's values;
  private ``Implementations`` hold them and Match hands out the interface.
"""

from __future__ import annotations

from ...utils import member_name
from ..analyzer.model import DiscriminatedUnionTypeInfo, UnionCaseInfo
from ..config import ReferenceStyle
from .base import CASE_VARIABLE, UnionBackend, case_parameters
from .csharp_ast_nodes import (
    AccessModifier,
    CSharpClass,
    CSharpConstructor,
    CSharpMethod,
    CSharpNamespace,
    CSharpParameter,
    CSharpProperty,
    CSharpSwitchArm,
    CSharpSwitchExpression,
    MemberModifier,
)
from .csharp_serializer import string_literal

NAME_PARAMETER = "NameToMatch"


def qualified_union_name(info: DiscriminatedUnionTypeInfo) -> str:
    """``global::Ns.Outer<U>.Result<T>``, usable from any scope."""
    parts = [info.namespace, *info.declaration_info.type_names]
    return "global::" + ".".join(part for part in parts if part)


class ReferenceTypeBackend(UnionBackend):
    """Layout for class and record unions."""

    def build(self, info: DiscriminatedUnionTypeInfo, union: CSharpClass, namespace: CSharpNamespace) -> None:
        if self.config.reference_style == ReferenceStyle.FLAT:
            self._build_flat(info, union, namespace)
        else:
            self._build_capability(info, union)
        if self.config.case_name_helpers:
            union.methods.extend(self._case_name_helpers(info))

    def _case_type(
        self,
        info: DiscriminatedUnionTypeInfo,
        case: UnionCaseInfo,
        names: list[str],
        base_types: list[str],
    ) -> CSharpClass:
        """Sealed record (record unions) or sealed class holding one case's values."""
        typed = [CSharpParameter(name=name, type_name=p.type) for name, p in zip(names, case.parameters, strict=True)]
        if info.declaration_info.is_record:
            return CSharpClass(
                name=case.name,
                keyword="record",
                modifiers=[MemberModifier.SEALED],
                primary_parameters=typed,
                base_types=base_types,
            )
        return CSharpClass(
            name=case.name,
            modifiers=[MemberModifier.SEALED],
            base_types=base_types,
            properties=[CSharpProperty(name=p.name, type_name=p.type_name) for p in typed],
            constructors=[
                CSharpConstructor(
                    class_name=case.name,
                    parameters=case_parameters(case),
                    body=[f"this.{name} = {p.name};" for name, p in zip(names, case.parameters, strict=True)],
                )
            ],
        )

    # Capability style

    def _build_capability(self, info: DiscriminatedUnionTypeInfo, union: CSharpClass) -> None:
        union_name = info.name_with_parameters
        cases_class = CSharpClass(name="Cases", modifiers=[MemberModifier.STATIC])
        implementations = CSharpClass(
            name="Implementations",
            access=AccessModifier.PRIVATE,
            modifiers=[MemberModifier.STATIC],
        )

        for case in info.cases:
            names = [member_name(p.name, case.name) for p in case.parameters]
            arguments = ", ".join(p.name for p in case.parameters)
            union.methods.append(self.factory(case, f"new Implementations.{case.name}({arguments})"))
            cases_class.nested_classes.append(
                CSharpClass(
                    name=case.name,
                    keyword="interface",
                    properties=[
                        CSharpProperty(name=name, type_name=p.type, access=None)
                        for name, p in zip(names, case.parameters, strict=True)
                    ],
                )
            )
            implementations.nested_classes.append(
                self._case_type(info, case, names, [union_name, f"{union_name}.Cases.{case.name}"])
            )

        union.methods.append(
            self.match_method(
                info,
                [[f"Cases.{case.name}"] for case in info.cases],
                self._type_switch(
                    info,
                    lambda case: f"Cases.{case.name}",
                    lambda case: f"{case.name_as_argument}({CASE_VARIABLE})",
                ),
            )
        )
        if info.generate_to_string:
            union.methods.append(
                self.to_string_method(
                    info,
                    self._type_switch(
                        info,
                        lambda case: f"Cases.{case.name}",
                        lambda case: self.case_text(
                            case,
                            [f"{CASE_VARIABLE}.{member_name(p.name, case.name)}" for p in case.parameters],
                        ),
                    ),
                )
            )
        union.nested_classes.extend([cases_class, implementations])

    def _case_name_helpers(self, info: DiscriminatedUnionTypeInfo) -> list[CSharpMethod]:
        """MatchName / MapNames: dispatch on, and enumerate, case names."""
        result = self.result_type_parameter(info)
        thunks = [CSharpParameter(name=c.name_as_argument, type_name=self.func_type([], result)) for c in info.cases]
        handler_names = ", ".join(c.name_as_argument for c in info.cases)

        arms = [CSharpSwitchArm(pattern=string_literal(c.name), expression=f"{c.name_as_argument}()") for c in info.cases]
        arms.append(
            CSharpSwitchArm(
                pattern="_",
                expression=f"throw new global::System.ArgumentOutOfRangeException(nameof({NAME_PARAMETER}), {NAME_PARAMETER}, null)",
            )
        )
        match_name = CSharpMethod(
            name="MatchName",
            return_type=result,
            modifiers=[MemberModifier.STATIC],
            type_parameters=[result],
            parameters=[CSharpParameter(name=NAME_PARAMETER, type_name="string"), *thunks],
            expression_body=CSharpSwitchExpression(subject=NAME_PARAMETER, arms=arms),
            wrap_parameters=True,
        )
        match_name_curried = CSharpMethod(
            name="MatchName",
            return_type=self.func_type(["string"], result),
            modifiers=[MemberModifier.STATIC],
            type_parameters=[result],
            parameters=list(thunks),
            expression_body=f"{NAME_PARAMETER} => MatchName({NAME_PARAMETER}, {handler_names})",
            wrap_parameters=True,
        )
        map_names = CSharpMethod(
            name="MapNames",
            return_type=f"global::System.Collections.Generic.IEnumerable<{result}>",
            modifiers=[MemberModifier.STATIC],
            type_parameters=[result],
            parameters=[
                CSharpParameter(name=c.name_as_argument, type_name=self.func_type(["string"], result))
                for c in info.cases
            ],
            body=[f"yield return {c.name_as_argument}({string_literal(c.name)});" for c in info.cases],
            wrap_parameters=True,
        )
        return [match_name, match_name_curried, map_names]

    # Flat style

    def _build_flat(self, info: DiscriminatedUnionTypeInfo, union: CSharpClass, namespace: CSharpNamespace) -> None:
        union_reference = qualified_union_name(info)
        prefix = f"global::{info.namespace}." if info.namespace else "global::"

        def case_reference(case: UnionCaseInfo) -> str:
            return prefix + case.case_class_name_with_generic_arguments

        for case in info.cases:
            names = [member_name(p.name, case.name) for p in case.parameters]
            case_type = self._case_type(info, case, names, [union_reference])
            case_type.access = AccessModifier.FILE
            case_type.type_parameters = list(info.declaration_info.generic_type_arguments)
            namespace.members.append(case_type)

            arguments = ", ".join(p.name for p in case.parameters)
            union.methods.append(self.factory(case, f"new {case_reference(case)}({arguments})"))

        union.methods.append(
            self.match_method(
                info,
                [[p.type for p in case.parameters] for case in info.cases],
                self._type_switch(
                    info,
                    case_reference,
                    lambda case: "{}({})".format(
                        case.name_as_argument,
                        ", ".join(f"{CASE_VARIABLE}.{member_name(p.name, case.name)}" for p in case.parameters),
                    ),
                ),
            )
        )
        if info.generate_to_string:
            union.methods.append(
                self.to_string_method(
                    info,
                    self._type_switch(
                        info,
                        case_reference,
                        lambda case: self.case_text(
                            case,
                            [f"{CASE_VARIABLE}.{member_name(p.name, case.name)}" for p in case.parameters],
                        ),
                    ),
                )
            )

    def _type_switch(self, info: DiscriminatedUnionTypeInfo, pattern_type, result) -> CSharpSwitchExpression:
        """``this switch`` with one type pattern per case plus the fatal arm."""
        arms = [
            CSharpSwitchArm(pattern=f"{pattern_type(case)} {CASE_VARIABLE}", expression=result(case))
            for case in info.cases
        ]
        arms.append(self.fatal_arm(info))
        return CSharpSwitchExpression(subject="this", arms=arms)


