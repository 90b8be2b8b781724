"""
C# type syntax.

Parses type text as written in a declaration (``List<int>[]``,
``global::System.Guid?``, ``(int x, string y)``) into a small tree that the
semantic model resolves and renders back in display or fully-qualified form.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

# Predefined types rendered as keywords, keyed by their System name
SPECIAL_TYPES = {
    "Boolean": "bool",
    "Byte": "byte",
    "SByte": "sbyte",
    "Char": "char",
    "Decimal": "decimal",
    "Double": "double",
    "Single": "float",
    "Int32": "int",
    "UInt32": "uint",
    "IntPtr": "nint",
    "UIntPtr": "nuint",
    "Int64": "long",
    "UInt64": "ulong",
    "Int16": "short",
    "UInt16": "ushort",
    "Object": "object",
    "String": "string",
}

PREDEFINED_TYPES = set(SPECIAL_TYPES.values()) | {"dynamic", "void"}

_TOKEN_PATTERN = re.compile(r"\s*(?:(@?[^\W\d]\w*)|(::|[.,<>()\[\]?*]))")


class TypeSyntaxError(ValueError):
    """Raised when type text is not valid C# type syntax."""


@dataclass
class TypeName:
    """Base class for type syntax nodes."""

    def render(self, fully_qualified: bool = False) -> str:
        raise NotImplementedError

    @staticmethod
    def parse(text: str) -> TypeName:
        """Parse C# type text.

        Raises:
            TypeSyntaxError: If the text is not a single well-formed type
        """
        return _TypeParser(text).parse()


@dataclass
class PredefinedType(TypeName):
    keyword: str = ""

    def render(self, fully_qualified: bool = False) -> str:
        return self.keyword


@dataclass
class TypeParameterType(TypeName):
    name: str = ""

    def render(self, fully_qualified: bool = False) -> str:
        return self.name


@dataclass
class NameSegment:
    identifier: str = ""
    type_arguments: list[TypeName] = field(default_factory=list)

    def render(self, fully_qualified: bool = False) -> str:
        if not self.type_arguments:
            return self.identifier
        args = ", ".join(arg.render(fully_qualified) for arg in self.type_arguments)
        return f"{self.identifier}<{args}>"


@dataclass
class QualifiedName(TypeName):
    """A name as written (possibly unresolved): ``alias::A.B<C>``."""

    segments: list[NameSegment] = field(default_factory=list)
    alias: str | None = None

    def render(self, fully_qualified: bool = False) -> str:
        text = ".".join(segment.render(fully_qualified) for segment in self.segments)
        if self.alias:
            return f"{self.alias}::{text}"
        return text


@dataclass
class NamedType(TypeName):
    """A resolved named type: namespace plus containing-type chain."""

    namespace: str | None = None
    chain: list[NameSegment] = field(default_factory=list)

    def render(self, fully_qualified: bool = False) -> str:
        parts = [segment.render(fully_qualified) for segment in self.chain]
        if self.namespace:
            parts.insert(0, self.namespace)
        text = ".".join(parts)
        return f"global::{text}" if fully_qualified else text


@dataclass
class NullableType(TypeName):
    element: TypeName | None = None

    def render(self, fully_qualified: bool = False) -> str:
        return f"{self.element.render(fully_qualified)}?"


@dataclass
class ArrayType(TypeName):
    element: TypeName | None = None
    rank: int = 1

    def render(self, fully_qualified: bool = False) -> str:
        return f"{self.element.render(fully_qualified)}[{',' * (self.rank - 1)}]"


@dataclass
class PointerType(TypeName):
    element: TypeName | None = None

    def render(self, fully_qualified: bool = False) -> str:
        return f"{self.element.render(fully_qualified)}*"


@dataclass
class TupleElement:
    type: TypeName | None = None
    name: str | None = None


@dataclass
class TupleType(TypeName):
    elements: list[TupleElement] = field(default_factory=list)

    def render(self, fully_qualified: bool = False) -> str:
        rendered = []
        for element in self.elements:
            text = element.type.render(fully_qualified)
            if element.name:
                text = f"{text} {element.name}"
            rendered.append(text)
        return f"({', '.join(rendered)})"


class _TypeParser:
    """Recursive-descent parser over the token stream of one type."""

    def __init__(self, text: str):
        self.text = text
        self.tokens = self._tokenize(text)
        self.position = 0

    def _tokenize(self, text: str) -> list[str]:
        tokens = []
        index = 0
        text = text.rstrip()
        while index < len(text):
            match = _TOKEN_PATTERN.match(text, index)
            if not match:
                raise TypeSyntaxError(f"Unexpected character in type '{text}' at offset {index}")
            tokens.append(match.group(1) or match.group(2))
            index = match.end()
        return tokens

    def parse(self) -> TypeName:
        result = self._parse_type()
        if self._peek() is not None:
            raise TypeSyntaxError(f"Unexpected '{self._peek()}' in type '{self.text}'")
        return result

    def _peek(self, offset: int = 0) -> str | None:
        index = self.position + offset
        return self.tokens[index] if index < len(self.tokens) else None

    def _next(self) -> str:
        token = self._peek()
        if token is None:
            raise TypeSyntaxError(f"Unexpected end of type '{self.text}'")
        self.position += 1
        return token

    def _expect(self, token: str) -> None:
        actual = self._next()
        if actual != token:
            raise TypeSyntaxError(f"Expected '{token}' but found '{actual}' in type '{self.text}'")

    def _is_identifier(self, token: str | None) -> bool:
        return token is not None and (token[0] == "@" or token[0].isalpha() or token[0] == "_")

    def _parse_type(self) -> TypeName:
        result = self._parse_non_array_type()
        while True:
            token = self._peek()
            if token == "?":
                self._next()
                result = NullableType(element=result)
            elif token == "*":
                self._next()
                result = PointerType(element=result)
            elif token == "[":
                self._next()
                rank = 1
                while self._peek() == ",":
                    self._next()
                    rank += 1
                self._expect("]")
                result = ArrayType(element=result, rank=rank)
            else:
                return result

    def _parse_non_array_type(self) -> TypeName:
        token = self._peek()
        if token == "(":
            return self._parse_tuple()
        if not self._is_identifier(token):
            raise TypeSyntaxError(f"Expected a type name in '{self.text}'")
        if token in PREDEFINED_TYPES and self._peek(1) not in (".", "::"):
            self._next()
            return PredefinedType(keyword=token)
        return self._parse_qualified_name()

    def _parse_tuple(self) -> TupleType:
        self._expect("(")
        elements = []
        while True:
            element_type = self._parse_type()
            name = None
            if self._is_identifier(self._peek()):
                name = self._next()
            elements.append(TupleElement(type=element_type, name=name))
            if self._peek() == ",":
                self._next()
                continue
            self._expect(")")
            break
        if len(elements) < 2:
            raise TypeSyntaxError(f"A tuple type needs at least two elements: '{self.text}'")
        return TupleType(elements=elements)

    def _parse_qualified_name(self) -> QualifiedName:
        alias = None
        if self._peek(1) == "::":
            alias = self._next()
            self._next()
        segments = [self._parse_segment()]
        while self._peek() == ".":
            self._next()
            segments.append(self._parse_segment())
        return QualifiedName(segments=segments, alias=alias)

    def _parse_segment(self) -> NameSegment:
        identifier = self._next()
        if not self._is_identifier(identifier):
            raise TypeSyntaxError(f"Expected an identifier but found '{identifier}' in type '{self.text}'")
        type_arguments = []
        if self._peek() == "<":
            self._next()
            type_arguments.append(self._parse_type())
            while self._peek() == ",":
                self._next()
                type_arguments.append(self._parse_type())
            self._expect(">")
        return NameSegment(identifier=identifier, type_arguments=type_arguments)
