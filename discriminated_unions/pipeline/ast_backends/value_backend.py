"""
Value-type layout.

A struct union stores an integer tag plus pooled backing fields. A field is
keyed by (declared type, occurrence of that type within the case): the n-th
``double`` of every case shares one ``double`` field. Slots are allocated in
first-seen order, case order then parameter order, so the assignment is
stable for an unchanged declaration.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from ...utils import type_identifier
from ..analyzer.model import DiscriminatedUnionTypeInfo, UnionCaseInfo
from .base import UnionBackend
from .csharp_ast_nodes import (
    AccessModifier,
    CSharpClass,
    CSharpConstructor,
    CSharpField,
    CSharpNamespace,
    CSharpParameter,
    CSharpSwitchArm,
    CSharpSwitchExpression,
    MemberModifier,
)

TAG_FIELD = "__tag"


@dataclass(frozen=True)
class ValueSlot:
    """One backing field."""

    type: str
    occurrence: int
    field_name: str


@dataclass(frozen=True)
class ValueLayout:
    """Backing fields in allocation order, and each case's slots in parameter order."""

    slots: tuple[ValueSlot, ...]
    case_slots: tuple[tuple[ValueSlot, ...], ...]


def plan_value_layout(cases: tuple[UnionCaseInfo, ...]) -> ValueLayout:
    """Assign every case parameter to a shared backing field."""
    slots: dict[tuple[str, int], ValueSlot] = {}
    used_names = {TAG_FIELD}
    case_slots = []

    for case in cases:
        occurrences: Counter[str] = Counter()
        mapped = []
        for parameter in case.parameters:
            key = (parameter.type, occurrences[parameter.type])
            occurrences[parameter.type] += 1
            slot = slots.get(key)
            if slot is None:
                base = f"__{type_identifier(parameter.type)}_{key[1]}"
                name = base
                suffix = 1
                while name in used_names:
                    name = f"{base}_{suffix}"
                    suffix += 1
                used_names.add(name)
                slot = ValueSlot(type=parameter.type, occurrence=key[1], field_name=name)
                slots[key] = slot
            mapped.append(slot)
        case_slots.append(tuple(mapped))

    return ValueLayout(slots=tuple(slots.values()), case_slots=tuple(case_slots))


class ValueTypeBackend(UnionBackend):
    """Layout for struct and record struct unions."""

    def build(self, info: DiscriminatedUnionTypeInfo, union: CSharpClass, namespace: CSharpNamespace) -> None:
        layout = plan_value_layout(info.cases)

        union.fields.append(CSharpField(name=TAG_FIELD, type_name="int", modifiers=[MemberModifier.READONLY]))
        union.fields.extend(
            CSharpField(name=slot.field_name, type_name=slot.type, modifiers=[MemberModifier.READONLY])
            for slot in layout.slots
        )

        union.constructors.append(
            CSharpConstructor(
                class_name=info.name,
                access=AccessModifier.PRIVATE,
                parameters=[
                    CSharpParameter(name=TAG_FIELD, type_name="int"),
                    *(CSharpParameter(name=slot.field_name, type_name=slot.type) for slot in layout.slots),
                ],
                this_call_args=[],
                body=[f"this.{name} = {name};" for name in [TAG_FIELD, *(s.field_name for s in layout.slots)]],
            )
        )

        for index, (case, mapped) in enumerate(zip(info.cases, layout.case_slots, strict=True)):
            by_slot = {slot.field_name: parameter.name for slot, parameter in zip(mapped, case.parameters, strict=True)}
            arguments = [str(index), *(by_slot.get(slot.field_name, "default!") for slot in layout.slots)]
            union.methods.append(self.factory(case, f"new {info.name_with_parameters}({', '.join(arguments)})"))

        union.methods.append(
            self.match_method(
                info,
                [[p.type for p in case.parameters] for case in info.cases],
                self._tag_switch(
                    info,
                    layout,
                    lambda case, fields: f"{case.name_as_argument}({', '.join(fields)})",
                ),
            )
        )
        if info.generate_to_string:
            union.methods.append(self.to_string_method(info, self._tag_switch(info, layout, self.case_text)))

    def _tag_switch(self, info: DiscriminatedUnionTypeInfo, layout: ValueLayout, result) -> CSharpSwitchExpression:
        """``this.__tag switch`` with one arm per case index plus the fatal arm."""
        arms = [
            CSharpSwitchArm(pattern=str(index), expression=result(case, [f"this.{s.field_name}" for s in mapped]))
            for index, (case, mapped) in enumerate(zip(info.cases, layout.case_slots, strict=True))
        ]
        arms.append(self.fatal_arm(info))
        return CSharpSwitchExpression(subject=f"this.{TAG_FIELD}", arms=arms)
