"""
Naming utilities for the discriminated union generator.
"""

import re

# C# reserved keywords that need escaping
CS_RESERVED_KEYWORDS = {
    "abstract",
    "as",
    "base",
    "bool",
    "break",
    "byte",
    "case",
    "catch",
    "char",
    "checked",
    "class",
    "const",
    "continue",
    "decimal",
    "default",
    "delegate",
    "do",
    "double",
    "else",
    "enum",
    "event",
    "explicit",
    "extern",
    "false",
    "finally",
    "fixed",
    "float",
    "for",
    "foreach",
    "goto",
    "if",
    "implicit",
    "in",
    "int",
    "interface",
    "internal",
    "is",
    "lock",
    "long",
    "namespace",
    "new",
    "null",
    "object",
    "operator",
    "out",
    "override",
    "params",
    "private",
    "protected",
    "public",
    "readonly",
    "ref",
    "return",
    "sbyte",
    "sealed",
    "short",
    "sizeof",
    "stackalloc",
    "static",
    "string",
    "struct",
    "switch",
    "this",
    "throw",
    "true",
    "try",
    "typeof",
    "uint",
    "ulong",
    "unchecked",
    "unsafe",
    "ushort",
    "using",
    "virtual",
    "void",
    "volatile",
    "while",
}

_NON_WORD_PATTERN = re.compile(r"\W+")


def escape_keyword(name: str) -> str:
    """Escape a C# reserved keyword with @ prefix."""
    if name in CS_RESERVED_KEYWORDS:
        return f"@{name}"
    return name


def argument_name(case_name: str) -> str:
    """Derive the handler argument name for a case.

    Examples:
        "Circle" -> "circle"
        "Event" -> "@event"
        "dot" -> "_dot"
    """
    if case_name[:1].isupper():
        return escape_keyword(case_name[0].lower() + case_name[1:])
    return f"_{case_name}"


def pascal_name(name: str) -> str:
    """Upper-case the first letter of an identifier, dropping any @ escape.

    Examples:
        "length" -> "Length"
        "@event" -> "Event"
    """
    name = name.lstrip("@")
    return name[:1].upper() + name[1:]


def member_name(parameter_name: str, case_name: str) -> str:
    """Property name exposing a case parameter.

    A member cannot share its enclosing type's name, so a parameter named
    after its own case gets a ``Value`` suffix.
    """
    name = pascal_name(parameter_name)
    if name == case_name:
        return f"{name}Value"
    return name


def type_identifier(type_text: str) -> str:
    """Turn type text into an identifier fragment.

    Examples:
        "int" -> "int"
        "global::System.Guid" -> "System_Guid"
        "string?" -> "string_Nullable"
        "global::System.Collections.Generic.List<int>[]" -> "System_Collections_Generic_List_int_Array"
    """
    text = type_text.replace("global::", "")
    text = text.replace("?", "_Nullable ").replace("[", "_Array ").replace("*", "_Pointer ")
    return _NON_WORD_PATTERN.sub("_", text).strip("_")


def escape_interpolated_literal(text: str) -> str:
    """Escape literal text for use inside a C# interpolated string.

    Generated ToString text only holds case and parameter identifiers, which
    never need escaping; literal segments of any other origin do.
    """
    return text.replace("\\", "\\\\").replace('"', '\\"').replace("{", "{{").replace("}", "}}")
