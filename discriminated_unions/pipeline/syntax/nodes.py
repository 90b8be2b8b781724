"""
Syntax node definitions for C# declarations.

These nodes represent the declaration structure of C# compilation units
(namespaces, type declarations, methods, attributes) as produced by either
the tree-sitter source parser or the JSON manifest parser. Bodies and
expressions are not modelled; the generator only needs declarations.

Parent links are set by ``link_parents`` once a tree is complete.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

# Keywords that declare value types
VALUE_TYPE_KEYWORDS = {"struct", "record struct"}

# Keywords accepted for TypeDeclaration.keyword
TYPE_KEYWORDS = {"class", "struct", "interface", "record", "record class", "record struct"}


@dataclass(eq=False)
class SyntaxNode:
    """Base class for all syntax nodes."""

    parent: SyntaxNode | None = field(default=None, repr=False, kw_only=True)

    def children(self) -> list[SyntaxNode]:
        """Direct child nodes, in source order."""
        return []

    def ancestors_and_self(self) -> Iterator[SyntaxNode]:
        """Walk from this node up to the compilation unit."""
        node: SyntaxNode | None = self
        while node is not None:
            yield node
            node = node.parent

    def descendants(self) -> Iterator[SyntaxNode]:
        """All nodes below this one, depth-first in source order."""
        for child in self.children():
            yield child
            yield from child.descendants()


@dataclass(eq=False)
class UsingDirective(SyntaxNode):
    """A using directive, kept verbatim (e.g. ``using System.Text;``)."""

    text: str = ""

    @property
    def is_global(self) -> bool:
        return self.text.startswith("global ")

    @property
    def is_static(self) -> bool:
        return self._body().startswith("static ")

    @property
    def alias(self) -> tuple[str, str] | None:
        """``(alias, target)`` for ``using A = B;`` directives."""
        body = self._body()
        if "=" not in body:
            return None
        alias, target = body.split("=", 1)
        return alias.strip(), target.strip()

    @property
    def namespace(self) -> str | None:
        """Imported namespace for plain ``using X.Y;`` directives."""
        if self.alias is not None or self.is_static:
            return None
        return self._body() or None

    def _body(self) -> str:
        text = self.text.strip()
        if text.startswith("global "):
            text = text[len("global ") :].strip()
        if text.startswith("using "):
            text = text[len("using ") :]
        return text.rstrip(";").strip()


@dataclass(eq=False)
class AttributeSyntax(SyntaxNode):
    """An attribute such as ``[DiscriminatedUnion]``."""

    name: str = ""

    @property
    def simple_name(self) -> str:
        """Last segment of the attribute name (``A.B.Name`` -> ``Name``)."""
        name = self.name.split("::")[-1]
        return name.split(".")[-1].strip()


@dataclass(eq=False)
class AttributeList(SyntaxNode):
    """One ``[...]`` attribute section."""

    attributes: list[AttributeSyntax] = field(default_factory=list)

    def children(self) -> list[SyntaxNode]:
        return list(self.attributes)


@dataclass(eq=False)
class ParameterSyntax(SyntaxNode):
    """A method parameter."""

    type: str = ""
    name: str = ""


@dataclass(eq=False)
class TypeParameterSyntax(SyntaxNode):
    """A type parameter; ``text`` keeps variance (``out T``)."""

    name: str = ""
    text: str = ""

    def __post_init__(self):
        if not self.text:
            self.text = self.name


@dataclass(eq=False)
class MethodDeclaration(SyntaxNode):
    """A method declaration (body content is not kept)."""

    identifier: str = ""
    return_type: str = "void"
    modifiers: list[str] = field(default_factory=list)
    type_parameters: list[TypeParameterSyntax] = field(default_factory=list)
    parameters: list[ParameterSyntax] = field(default_factory=list)
    has_body: bool = False
    attribute_lists: list[AttributeList] = field(default_factory=list)

    def children(self) -> list[SyntaxNode]:
        return [*self.attribute_lists, *self.type_parameters, *self.parameters]


@dataclass(eq=False)
class TypeDeclaration(SyntaxNode):
    """A class, struct, interface, record or record struct declaration."""

    keyword: str = "class"
    identifier: str = ""
    modifiers: list[str] = field(default_factory=list)
    type_parameters: list[TypeParameterSyntax] = field(default_factory=list)
    attribute_lists: list[AttributeList] = field(default_factory=list)
    members: list[SyntaxNode] = field(default_factory=list)

    @property
    def is_value_type(self) -> bool:
        return self.keyword in VALUE_TYPE_KEYWORDS

    @property
    def is_record(self) -> bool:
        return self.keyword.startswith("record")

    @property
    def arity(self) -> int:
        return len(self.type_parameters)

    def children(self) -> list[SyntaxNode]:
        return [*self.attribute_lists, *self.type_parameters, *self.members]


@dataclass(eq=False)
class NamespaceDeclaration(SyntaxNode):
    """A block (``namespace A { }``) or file-scoped (``namespace A;``) namespace."""

    name: str = ""
    usings: list[UsingDirective] = field(default_factory=list)
    members: list[SyntaxNode] = field(default_factory=list)
    file_scoped: bool = False

    def children(self) -> list[SyntaxNode]:
        return [*self.usings, *self.members]


@dataclass(eq=False)
class CompilationUnit(SyntaxNode):
    """Root of one source file."""

    path: str = ""
    usings: list[UsingDirective] = field(default_factory=list)
    members: list[SyntaxNode] = field(default_factory=list)

    def children(self) -> list[SyntaxNode]:
        return [*self.usings, *self.members]


def link_parents(root: SyntaxNode) -> SyntaxNode:
    """Set ``parent`` on every node below ``root`` and return ``root``."""
    for child in root.children():
        child.parent = root
        link_parents(child)
    return root
