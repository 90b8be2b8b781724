"""
Tests for the C# AST serializer.
"""

from __future__ import annotations

from discriminated_unions.pipeline.ast_backends.csharp_ast_nodes import (
    AccessModifier,
    CSharpClass,
    CSharpConstructor,
    CSharpField,
    CSharpFile,
    CSharpInterpolatedString,
    CSharpInterpolation,
    CSharpMethod,
    CSharpNamespace,
    CSharpParameter,
    CSharpProperty,
    CSharpSwitchArm,
    CSharpSwitchExpression,
    MemberModifier,
)
from discriminated_unions.pipeline.ast_backends.csharp_serializer import CSharpSerializer, string_literal


def _serialize_class(cls):
    return "\n".join(CSharpSerializer()._serialize_class(cls))


class TestFileLayout:
    def test_single_namespace_is_file_scoped(self):
        file = CSharpFile(
            generation_comment="// <auto-generated/>",
            directives=["#nullable enable"],
            root=CSharpNamespace(
                using_directives=["using System;"],
                members=[CSharpNamespace(name="Demo", members=[CSharpClass(name="A")])],
            ),
        )
        assert CSharpSerializer().serialize(file) == (
            "// <auto-generated/>\n#nullable enable\n\nusing System;\n\nnamespace Demo;\n\npublic class A\n{\n}\n"
        )

    def test_nested_namespaces_are_blocks(self):
        inner = CSharpNamespace(name="B", using_directives=["using System.Text;"], members=[CSharpClass(name="C")])
        file = CSharpFile(root=CSharpNamespace(members=[CSharpNamespace(name="A", members=[inner])]))
        assert CSharpSerializer().serialize(file) == (
            "namespace A\n{\n    namespace B\n    {\n        using System.Text;\n\n"
            "        public class C\n        {\n        }\n    }\n}\n"
        )

    def test_global_namespace(self):
        file = CSharpFile(directives=["#nullable enable"], root=CSharpNamespace(members=[CSharpClass(name="A")]))
        assert CSharpSerializer().serialize(file) == "#nullable enable\n\npublic class A\n{\n}\n"


class TestMembers:
    def test_header_overrides_composed_declaration(self):
        cls = CSharpClass(name="Shape", header="public abstract partial record Shape")
        assert _serialize_class(cls).splitlines()[0] == "public abstract partial record Shape"

    def test_positional_record_without_members(self):
        cls = CSharpClass(
            name="Circle",
            keyword="record",
            modifiers=[MemberModifier.SEALED],
            primary_parameters=[CSharpParameter(name="Radius", type_name="double")],
            base_types=["Shape", "Shape.Cases.Circle"],
        )
        assert _serialize_class(cls) == "public sealed record Circle(double Radius) : Shape, Shape.Cases.Circle;"

    def test_member_blocks(self):
        cls = CSharpClass(
            name="Box",
            keyword="struct",
            access=AccessModifier.INTERNAL,
            fields=[
                CSharpField(name="a", type_name="int", modifiers=[MemberModifier.READONLY]),
                CSharpField(name="b", type_name="int", modifiers=[MemberModifier.READONLY]),
            ],
            properties=[CSharpProperty(name="Size", type_name="int")],
            constructors=[
                CSharpConstructor(
                    class_name="Box",
                    access=AccessModifier.PRIVATE,
                    parameters=[CSharpParameter(name="a", type_name="int")],
                    this_call_args=[],
                    body=["this.a = a;"],
                )
            ],
        )
        assert _serialize_class(cls) == (
            "internal struct Box\n{\n"
            "    private readonly int a;\n    private readonly int b;\n\n"
            "    public int Size { get; }\n\n"
            "    private Box(int a) : this()\n    {\n        this.a = a;\n    }\n"
            "}"
        )

    def test_interface_property_without_access(self):
        cls = CSharpClass(
            name="Circle",
            keyword="interface",
            properties=[CSharpProperty(name="Radius", type_name="double", access=None)],
        )
        assert _serialize_class(cls) == "public interface Circle\n{\n    double Radius { get; }\n}"


class TestMethods:
    def test_single_line_expression_body(self):
        method = CSharpMethod(
            name="Circle",
            return_type="Shape",
            modifiers=[MemberModifier.STATIC, MemberModifier.PARTIAL],
            parameters=[CSharpParameter(name="radius", type_name="double")],
            expression_body="new Implementations.Circle(radius)",
        )
        assert CSharpSerializer()._serialize_method(method) == [
            "public static partial Shape Circle(double radius) => new Implementations.Circle(radius);"
        ]

    def test_declared_accessibility_text(self):
        method = CSharpMethod(name="M", access="protected internal", expression_body="0", return_type="int")
        assert CSharpSerializer()._serialize_method(method) == ["protected internal int M() => 0;"]

    def test_wrapped_parameters_and_switch(self):
        method = CSharpMethod(
            name="Match",
            return_type="TResult",
            type_parameters=["TResult"],
            parameters=[
                CSharpParameter(name="a", type_name="Func<TResult>"),
                CSharpParameter(name="b", type_name="Func<TResult>"),
            ],
            expression_body=CSharpSwitchExpression(
                subject="this.__tag",
                arms=[CSharpSwitchArm(pattern="0", expression="a()"), CSharpSwitchArm(pattern="_", expression="b()")],
            ),
            wrap_parameters=True,
        )
        assert CSharpSerializer()._serialize_method(method) == [
            "public TResult Match<TResult>(",
            "    Func<TResult> a,",
            "    Func<TResult> b) =>",
            "    this.__tag switch",
            "    {",
            "        0 => a(),",
            "        _ => b(),",
            "    };",
        ]

    def test_block_body(self):
        method = CSharpMethod(
            name="Names",
            return_type="IEnumerable<string>",
            modifiers=[MemberModifier.STATIC],
            body=['yield return "A";'],
        )
        assert CSharpSerializer()._serialize_method(method) == [
            "public static IEnumerable<string> Names()",
            "{",
            '    yield return "A";',
            "}",
        ]


class TestStrings:
    def test_interpolated_string(self):
        value = CSharpInterpolatedString(
            parts=["Set{", CSharpInterpolation(expression="Case.Value"), '}"']
        )
        assert CSharpSerializer()._serialize_expression(value) == ['$"Set{{{Case.Value}}}\\""']

    def test_interpolated_string_without_holes_is_plain_literal(self):
        value = CSharpInterpolatedString(parts=["Dot(", ")"])
        assert CSharpSerializer()._serialize_expression(value) == ['"Dot()"']

    def test_string_literal(self):
        assert string_literal('a"b\\c') == '"a\\"b\\\\c"'
