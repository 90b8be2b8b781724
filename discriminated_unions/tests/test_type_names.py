import pytest

from discriminated_unions.pipeline.syntax.type_names import (
    ArrayType,
    NamedType,
    NameSegment,
    NullableType,
    PredefinedType,
    QualifiedName,
    TupleType,
    TypeName,
    TypeSyntaxError,
)


class TestTypeNameParsing:
    def test_predefined(self):
        assert TypeName.parse("int") == PredefinedType(keyword="int")

    def test_qualified_generic(self):
        parsed = TypeName.parse("System.Collections.Generic.Dictionary<string, List<int>>")
        assert isinstance(parsed, QualifiedName)
        assert [s.identifier for s in parsed.segments] == ["System", "Collections", "Generic", "Dictionary"]
        assert parsed.render() == "System.Collections.Generic.Dictionary<string, List<int>>"

    def test_alias_qualifier(self):
        parsed = TypeName.parse("global::System.Guid")
        assert parsed.alias == "global"
        assert parsed.render() == "global::System.Guid"

    def test_nullable_array_pointer(self):
        parsed = TypeName.parse("int?[,]")
        assert isinstance(parsed, ArrayType)
        assert parsed.rank == 2
        assert isinstance(parsed.element, NullableType)
        assert parsed.render() == "int?[,]"
        assert TypeName.parse("byte*").render() == "byte*"

    def test_tuple(self):
        parsed = TypeName.parse("(int x, string? y)")
        assert isinstance(parsed, TupleType)
        assert parsed.render() == "(int x, string? y)"

    def test_whitespace_is_normalized(self):
        assert TypeName.parse("List< int >").render() == "List<int>"

    def test_keyword_as_namespace_segment_is_not_predefined(self):
        # "string" followed by "." cannot be the keyword type
        assert isinstance(TypeName.parse("string.Value"), QualifiedName)

    @pytest.mark.parametrize("text", ["", "List<int", "(int)", "int int", "1abc", "List<>"])
    def test_invalid(self, text):
        with pytest.raises(TypeSyntaxError):
            TypeName.parse(text)


class TestRendering:
    def test_named_type_display_and_fully_qualified(self):
        named = NamedType(
            namespace="Demo",
            chain=[NameSegment("Outer", [PredefinedType("int")]), NameSegment("Inner")],
        )
        assert named.render() == "Demo.Outer<int>.Inner"
        assert named.render(fully_qualified=True) == "global::Demo.Outer<int>.Inner"

    def test_fully_qualified_propagates_to_type_arguments(self):
        inner = NamedType(namespace="Demo", chain=[NameSegment("Shape")])
        outer = NamedType(namespace="System.Collections.Generic", chain=[NameSegment("List", [inner])])
        assert outer.render(fully_qualified=True) == "global::System.Collections.Generic.List<global::Demo.Shape>"

    def test_global_namespace(self):
        assert NamedType(chain=[NameSegment("Shape")]).render(fully_qualified=True) == "global::Shape"
