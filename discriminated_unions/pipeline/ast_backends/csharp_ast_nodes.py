"""
C# AST node definitions.

These nodes represent the structure of generated C# union files. They are
built by the layout backends and then serialized to source code.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class AccessModifier(str, Enum):
    """C# access modifiers."""

    PUBLIC = "public"
    PRIVATE = "private"
    PROTECTED = "protected"
    INTERNAL = "internal"
    FILE = "file"


class MemberModifier(str, Enum):
    """C# member modifiers."""

    STATIC = "static"
    READONLY = "readonly"
    OVERRIDE = "override"
    SEALED = "sealed"
    PARTIAL = "partial"


@dataclass
class CSharpNode:
    """Base class for all C# AST nodes."""

    pass


@dataclass
class CSharpParameter(CSharpNode):
    """Represents a method/constructor parameter."""

    name: str = ""
    type_name: str = ""


@dataclass
class CSharpInterpolation(CSharpNode):
    """A ``{expression}`` hole inside an interpolated string."""

    expression: str = ""


@dataclass
class CSharpInterpolatedString(CSharpNode):
    """A string built from literal text and interpolation holes.

    Serialized as a plain string literal when it has no holes.
    """

    parts: list[str | CSharpInterpolation] = field(default_factory=list)


@dataclass
class CSharpSwitchArm(CSharpNode):
    """``pattern => expression`` inside a switch expression."""

    pattern: str = ""
    expression: str | CSharpInterpolatedString = ""


@dataclass
class CSharpSwitchExpression(CSharpNode):
    """``subject switch { arms }``."""

    subject: str = ""
    arms: list[CSharpSwitchArm] = field(default_factory=list)


CSharpExpression = str | CSharpInterpolatedString | CSharpSwitchExpression


@dataclass
class CSharpField(CSharpNode):
    """Represents a field."""

    name: str = ""
    type_name: str = ""
    access: AccessModifier = AccessModifier.PRIVATE
    modifiers: list[MemberModifier] = field(default_factory=list)


@dataclass
class CSharpProperty(CSharpNode):
    """Represents a property; interface members have no access modifier."""

    name: str = ""
    type_name: str = ""
    access: AccessModifier | None = AccessModifier.PUBLIC


@dataclass
class CSharpConstructor(CSharpNode):
    """Represents a constructor."""

    class_name: str = ""
    access: AccessModifier = AccessModifier.PUBLIC
    parameters: list[CSharpParameter] = field(default_factory=list)
    this_call_args: list[str] | None = None  # ": this(...)" initializer
    body: list[str] = field(default_factory=list)  # Assignment statements


@dataclass
class CSharpMethod(CSharpNode):
    """Represents a method with a block body or an expression body.

    ``access`` is kept as text so declared accessibility such as
    ``protected internal`` can be repeated on partial implementations.
    """

    name: str = ""
    return_type: str = "void"
    access: str = AccessModifier.PUBLIC.value
    modifiers: list[MemberModifier] = field(default_factory=list)
    type_parameters: list[str] = field(default_factory=list)
    parameters: list[CSharpParameter] = field(default_factory=list)
    body: list[str] | None = None
    expression_body: CSharpExpression | None = None
    wrap_parameters: bool = False  # One parameter per line


@dataclass
class CSharpClass(CSharpNode):
    """Represents a class, struct, record or interface declaration.

    ``header`` replaces the composed declaration line; it is used to reopen
    user-declared partial types exactly as they were written.
    """

    name: str = ""
    keyword: str = "class"
    access: AccessModifier | None = AccessModifier.PUBLIC
    modifiers: list[MemberModifier] = field(default_factory=list)
    type_parameters: list[str] = field(default_factory=list)
    primary_parameters: list[CSharpParameter] | None = None
    base_types: list[str] = field(default_factory=list)
    header: str | None = None
    fields: list[CSharpField] = field(default_factory=list)
    properties: list[CSharpProperty] = field(default_factory=list)
    constructors: list[CSharpConstructor] = field(default_factory=list)
    methods: list[CSharpMethod] = field(default_factory=list)
    nested_classes: list[CSharpClass] = field(default_factory=list)

    def has_members(self) -> bool:
        return bool(self.fields or self.properties or self.constructors or self.methods or self.nested_classes)


@dataclass
class CSharpNamespace(CSharpNode):
    """A namespace scope with its own verbatim using directives.

    ``name`` is None for the compilation unit scope.
    """

    name: str | None = None
    using_directives: list[str] = field(default_factory=list)
    members: list[CSharpNamespace | CSharpClass] = field(default_factory=list)


@dataclass
class CSharpFile(CSharpNode):
    """Represents a complete C# source file."""

    generation_comment: str = ""
    directives: list[str] = field(default_factory=list)  # e.g. "#nullable enable"
    root: CSharpNamespace = field(default_factory=CSharpNamespace)
