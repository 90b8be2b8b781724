from discriminated_unions.pipeline.discovery import find_union_candidates, is_union_attribute
from discriminated_unions.pipeline.syntax import AttributeSyntax, ManifestParser

DEFAULT_NAMES = ["DiscriminatedUnion", "DiscriminatedUnionAttribute"]


def _units():
    return ManifestParser().parse(
        {
            "compilation_units": [
                {
                    "members": [
                        {"kind": "type", "keyword": "record", "name": "A", "attributes": ["Serializable", "DiscriminatedUnion"]},
                        {
                            "kind": "namespace",
                            "name": "N",
                            "members": [
                                {
                                    "kind": "type",
                                    "keyword": "class",
                                    "name": "B",
                                    "members": [
                                        {
                                            "kind": "method",
                                            "name": "M",
                                            "attributes": ["DiscriminatedUnionAttribute"],
                                        }
                                    ],
                                }
                            ],
                        },
                    ]
                },
                {"members": [{"kind": "type", "keyword": "struct", "name": "C", "attributes": ["X.Y.DiscriminatedUnion"]}]},
            ]
        }
    )


def test_attribute_name_forms():
    for name in ["DiscriminatedUnion", "DiscriminatedUnionAttribute", "CSharp.DiscriminatedUnions.DiscriminatedUnion"]:
        assert is_union_attribute(AttributeSyntax(name=name), DEFAULT_NAMES)
    assert is_union_attribute(AttributeSyntax(name="global::Lib.DiscriminatedUnionAttribute"), ["DiscriminatedUnion"])
    assert not is_union_attribute(AttributeSyntax(name="Union"), DEFAULT_NAMES)
    assert not is_union_attribute(AttributeSyntax(name="DiscriminatedUnionExtra"), DEFAULT_NAMES)


def test_candidates_in_document_order():
    candidates = list(find_union_candidates(_units(), DEFAULT_NAMES))
    owners = [candidate.parent.parent for candidate in candidates]
    # The method-level attribute is a candidate too; the analyzer skips it
    assert [getattr(owner, "identifier", None) for owner in owners] == ["A", "M", "C"]


def test_no_configured_names():
    assert list(find_union_candidates(_units(), [])) == []
