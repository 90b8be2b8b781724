from pathlib import Path

import pytest

from discriminated_unions.pipeline.errors import SourceParseError
from discriminated_unions.pipeline.syntax import (
    CSharpSourceParser,
    MethodDeclaration,
    NamespaceDeclaration,
    TypeDeclaration,
    parse_sources,
)

SOURCES_DIR = Path(__file__).parent / "test_data" / "sources"


@pytest.fixture(scope="module")
def parser():
    return CSharpSourceParser()


def _parse_file(parser, name):
    return parser.parse((SOURCES_DIR / name).read_text(encoding="utf-8"), name)


def test_file_scoped_namespace(parser):
    unit = _parse_file(parser, "Shape.cs")
    assert [u.text for u in unit.usings] == ["using System;"]

    namespace = unit.members[0]
    assert isinstance(namespace, NamespaceDeclaration)
    assert namespace.name == "Demo"
    assert namespace.file_scoped

    shape = namespace.members[0]
    assert isinstance(shape, TypeDeclaration)
    assert shape.keyword == "record"
    assert shape.identifier == "Shape"
    assert shape.modifiers == ["public", "abstract", "partial"]
    assert shape.attribute_lists[0].attributes[0].name == "DiscriminatedUnion"
    assert shape.parent is namespace


def test_methods(parser):
    shape = _parse_file(parser, "Shape.cs").members[0].members[0]
    methods = [m for m in shape.members if isinstance(m, MethodDeclaration)]
    assert [m.identifier for m in methods] == ["Dot", "Circle", "Rectangle"]

    rectangle = methods[2]
    assert rectangle.return_type == "Shape"
    assert rectangle.modifiers == ["public", "static", "partial"]
    assert [(p.type, p.name) for p in rectangle.parameters] == [("double", "length"), ("double", "width")]
    assert not rectangle.has_body


def test_block_namespace_with_usings_and_nested_types(parser):
    unit = _parse_file(parser, "Event.cs")
    namespace = unit.members[0]
    assert namespace.name == "Demo.Models"
    assert not namespace.file_scoped
    assert [u.text for u in namespace.usings] == ["using System.Collections.Generic;"]

    outer = namespace.members[0]
    assert outer.identifier == "Outer"
    assert outer.modifiers == ["public", "static", "partial"]
    assert [(p.name, p.text) for p in outer.type_parameters] == [("U", "U")]

    event = outer.members[0]
    assert event.identifier == "Event"
    assert event.parent is outer
    created = event.members[0]
    assert [(p.type, p.name) for p in created.parameters] == [("Guid", "id"), ("List<U>", "items")]


def test_record_struct_keyword(parser):
    option = _parse_file(parser, "Option.cs").members[0].members[0]
    assert option.keyword == "record struct"
    assert option.is_value_type
    assert option.modifiers == ["public", "readonly", "partial"]
    assert option.type_parameters[0].name == "T"


def test_bodies_and_generic_methods(parser):
    token = _parse_file(parser, "Token.cs").members[0].members[0]
    methods = {m.identifier: m for m in token.members}
    assert methods["Zero"].has_body
    assert methods["ToString"].has_body
    assert "override" in methods["ToString"].modifiers
    assert [p.name for p in methods["Make"].type_parameters] == ["T"]
    assert methods["Number"].parameters[1].type == "System.Nullable<int>"
    assert methods["Word"].parameters[0].type == "string?"
    assert token.attribute_lists[0].attributes[0].name == "CSharp.DiscriminatedUnions.DiscriminatedUnionAttribute"


def test_variance_kept_in_type_parameter_text(parser):
    unit = parser.parse("public partial interface IProducer<out T> { }\n")
    parameter = unit.members[0].type_parameters[0]
    assert parameter.name == "T"
    assert parameter.text == "out T"


def test_syntax_error_reports_line(parser):
    with pytest.raises(SourceParseError) as exc_info:
        _parse_file(parser, "Invalid.cs")
    assert exc_info.value.path == "Invalid.cs"
    assert exc_info.value.line is not None
    assert str(exc_info.value).startswith("Invalid.cs:")


def test_parse_sources_keeps_order():
    units = parse_sources({"B.cs": "class B { }\n", "A.cs": "class A { }\n"})
    assert [unit.path for unit in units] == ["B.cs", "A.cs"]
    assert [unit.members[0].identifier for unit in units] == ["B", "A"]
