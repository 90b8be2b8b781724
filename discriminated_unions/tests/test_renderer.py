"""
Renderer tests on hand-built union models.
"""

from __future__ import annotations

from discriminated_unions.pipeline.analyzer import (
    DeclarationInfo,
    DiscriminatedUnionTypeInfo,
    NamespaceDeclarationInfo,
    UnionCaseInfo,
    UnionCaseParameterInfo,
)
from discriminated_unions.pipeline.ast_backends import UnionRenderer, render
from discriminated_unions.pipeline.ast_backends.reference_backend import qualified_union_name
from discriminated_unions.pipeline.ast_backends.renderer import companion_class
from discriminated_unions.pipeline.config import CodeGeneratorConfig, ReferenceStyle

CAPABILITY = CodeGeneratorConfig(reference_style=ReferenceStyle.CAPABILITY)


def _case(name, *parameters, type="Pair<TResult>", generic_arguments="", accessibility="public"):
    return UnionCaseInfo(
        name=name,
        name_as_argument=name[0].lower() + name[1:],
        case_class_name_with_generic_arguments=name + generic_arguments,
        type=type,
        parameters=tuple(UnionCaseParameterInfo(type=t, name=n) for t, n in parameters),
        accessibility=accessibility,
    )


def _pair_union(**declaration):
    defaults = dict(
        namespace_declarations=(NamespaceDeclarationInfo(declaration=None),),
        type_declarations=("internal abstract partial class Pair<TResult>",),
        generic_type_arguments=("TResult",),
        own_generic_type_arguments=("TResult",),
        type_names=("Pair<TResult>",),
    )
    defaults.update(declaration)
    return DiscriminatedUnionTypeInfo(
        name="Pair",
        name_with_parameters="Pair<TResult>",
        unique_name="Pair[TResult]",
        declaration_info=DeclarationInfo(**defaults),
        cases=(
            _case("Both", ("TResult", "left"), ("TResult", "right"), generic_arguments="<TResult>"),
            _case("Neither", generic_arguments="<TResult>", accessibility="protected internal"),
        ),
    )


def test_render_is_pure():
    info = _pair_union()
    assert render(info) == render(info)


def test_global_namespace_union():
    text = render(_pair_union())
    assert text.startswith("// <auto-generated/>\n#nullable enable\n\ninternal abstract partial class Pair<TResult>\n{")
    assert "namespace" not in text


def test_result_type_parameter_renamed():
    text = render(_pair_union(), CAPABILITY)
    assert "public TResult1 Match<TResult1>(" in text
    assert "global::System.Func<Cases.Both, TResult1> both," in text


def test_declared_accessibility_repeated():
    text = render(_pair_union(), CAPABILITY)
    assert "protected internal static partial Pair<TResult> Neither() => new Implementations.Neither();" in text


def test_companion_class():
    companion = companion_class(_pair_union())
    assert companion.header == "internal static class Pair"
    assert [m.name for m in companion.methods] == ["Both", "Neither"]
    text = render(_pair_union())
    assert "public static Pair<TResult> Both<TResult>(TResult left, TResult right) => Pair<TResult>.Both(left, right);" in text
    assert "protected internal static Pair<TResult> Neither<TResult>() => Pair<TResult>.Neither();" in text


def test_no_companion_without_own_generics():
    info = _pair_union(own_generic_type_arguments=())
    assert "static class Pair" not in render(info)


def test_flat_style_is_default():
    assert render(_pair_union()) == render(_pair_union(), CodeGeneratorConfig(reference_style=ReferenceStyle.FLAT))


def test_flat_style_in_global_namespace():
    text = render(_pair_union())
    assert "file sealed class Both<TResult> : global::Pair<TResult>" in text
    assert "public TResult Left { get; }" in text
    assert "global::System.Func<TResult, TResult, TResult1> both," in text
    assert "global::System.Func<TResult1> neither) =>" in text
    assert "global::Both<TResult> Case => both(Case.Left, Case.Right)," in text
    assert "new global::Both<TResult>(left, right)" in text


def test_qualified_union_name():
    info = _pair_union(
        namespace_declarations=(NamespaceDeclarationInfo(declaration=None), NamespaceDeclarationInfo(declaration="A.B")),
        type_names=("Outer<U>", "Pair<TResult>"),
    )
    assert info.namespace == "A.B"
    assert qualified_union_name(info) == "global::A.B.Outer<U>.Pair<TResult>"


def test_enclosing_types_and_companion_placement():
    info = _pair_union(
        namespace_declarations=(
            NamespaceDeclarationInfo(declaration=None, using_statements="using System;\n"),
            NamespaceDeclarationInfo(declaration="Outer.Space"),
            NamespaceDeclarationInfo(declaration="Inner", using_statements="using System.Text;\n"),
        ),
        type_declarations=("public static partial class Host", "internal abstract partial class Pair<TResult>"),
        type_names=("Host", "Pair<TResult>"),
    )
    config = CodeGeneratorConfig(reference_style=ReferenceStyle.CAPABILITY, add_generation_comment=False)
    text = UnionRenderer(config).render(info)
    assert text.startswith(
        "#nullable enable\n\nusing System;\n\nnamespace Outer.Space\n{\n    namespace Inner\n    {\n"
        "        using System.Text;\n\n        public static partial class Host\n        {\n"
        "            internal abstract partial class Pair<TResult>\n            {\n"
    )
    # Companion is a sibling of the union inside the enclosing type
    assert "\n            internal static class Pair\n            {\n" in text
    assert text.endswith("            }\n        }\n    }\n}\n")


def test_value_type_without_parameters():
    info = DiscriminatedUnionTypeInfo(
        name="Flag",
        name_with_parameters="Flag",
        unique_name="Flag",
        declaration_info=DeclarationInfo(
            namespace_declarations=(NamespaceDeclarationInfo(declaration=None),),
            type_declarations=("public partial struct Flag",),
            type_names=("Flag",),
            is_value_type=True,
        ),
        cases=(_case("On", type="Flag"), _case("Off", type="Flag")),
        generate_to_string=False,
    )
    text = render(info)
    assert "private Flag(int __tag) : this()" in text
    assert "public static partial Flag Off() => new Flag(1);" in text
    assert "1 => off()," in text
    assert "ToString" not in text
