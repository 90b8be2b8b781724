"""
C# AST Serializer.

Converts C# AST nodes to properly-formatted C# source code.
Follows C# style guidelines:
- Braces on new lines (Allman style)
- 4-space indentation
- Blank line between members
- Single named namespace written as a file-scoped namespace
"""

from __future__ import annotations

from ...utils import escape_interpolated_literal
from .csharp_ast_nodes import (
    CSharpClass,
    CSharpConstructor,
    CSharpExpression,
    CSharpField,
    CSharpFile,
    CSharpInterpolatedString,
    CSharpInterpolation,
    CSharpMethod,
    CSharpNamespace,
    CSharpParameter,
    CSharpProperty,
    CSharpSwitchExpression,
)


def string_literal(text: str) -> str:
    """Quote text as a regular C# string literal."""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"').replace("\n", "\\n").replace("\r", "\\r")
    return f'"{escaped}"'


class CSharpSerializer:
    """Serializes C# AST nodes to source code."""

    INDENT = "    "  # 4 spaces

    def serialize(self, file: CSharpFile) -> str:
        """Serialize a complete C# file to source code."""
        lines: list[str] = []

        # Generation comment and preprocessor directives
        if file.generation_comment:
            lines.append(file.generation_comment)
        lines.extend(file.directives)
        if lines:
            lines.append("")

        root = file.root
        if self._is_single_namespace(root):
            namespace = root.members[0]
            lines.extend(root.using_directives)
            if root.using_directives:
                lines.append("")
            lines.append(f"namespace {namespace.name};")
            lines.append("")
            lines.extend(self._serialize_scope(namespace))
        else:
            lines.extend(self._serialize_scope(root))

        return "\n".join(lines).rstrip("\n") + "\n"

    def _is_single_namespace(self, root: CSharpNamespace) -> bool:
        """Whether the file holds exactly one named namespace and nothing else."""
        if len(root.members) != 1 or not isinstance(root.members[0], CSharpNamespace):
            return False
        namespace = root.members[0]
        return bool(namespace.name) and not any(isinstance(m, CSharpNamespace) for m in namespace.members)

    def _indent_lines(self, lines: list[str], level: int) -> list[str]:
        """Add indentation to a list of lines."""
        if level == 0:
            return lines
        prefix = self.INDENT * level
        return [prefix + line if line.strip() else line for line in lines]

    def _join_blocks(self, blocks: list[list[str]]) -> list[str]:
        """Join member blocks with one blank line between them."""
        lines: list[str] = []
        for block in blocks:
            if not block:
                continue
            if lines:
                lines.append("")
            lines.extend(block)
        return lines

    def _serialize_scope(self, namespace: CSharpNamespace) -> list[str]:
        """Serialize the usings and members of a namespace scope."""
        lines = list(namespace.using_directives)
        blocks = []
        for member in namespace.members:
            if isinstance(member, CSharpNamespace):
                blocks.append(self._serialize_namespace_block(member))
            else:
                blocks.append(self._serialize_class(member))
        if lines and blocks:
            lines.append("")
        lines.extend(self._join_blocks(blocks))
        return lines

    def _serialize_namespace_block(self, namespace: CSharpNamespace) -> list[str]:
        lines = [f"namespace {namespace.name}", "{"]
        lines.extend(self._indent_lines(self._serialize_scope(namespace), 1))
        lines.append("}")
        return lines

    def _modifier_text(self, access, modifiers) -> str:
        words = []
        if access:
            words.append(access.value if hasattr(access, "value") else access)
        words.extend(m.value for m in modifiers)
        return " ".join(words)

    def _serialize_parameters(self, parameters: list[CSharpParameter]) -> str:
        return ", ".join(f"{p.type_name} {p.name}" for p in parameters)

    def _class_header(self, cls: CSharpClass) -> str:
        if cls.header:
            return cls.header
        parts = [self._modifier_text(cls.access, cls.modifiers), cls.keyword, cls.name]
        declaration = " ".join(part for part in parts if part)
        if cls.type_parameters:
            declaration += f"<{', '.join(cls.type_parameters)}>"
        if cls.primary_parameters is not None:
            declaration += f"({self._serialize_parameters(cls.primary_parameters)})"
        if cls.base_types:
            declaration += f" : {', '.join(cls.base_types)}"
        return declaration

    def _serialize_class(self, cls: CSharpClass) -> list[str]:
        """Serialize a class, struct, record or interface declaration."""
        lines = []
        declaration = self._class_header(cls)

        # Positional records without members end with a semicolon
        if cls.primary_parameters is not None and not cls.has_members():
            lines.append(f"{declaration};")
            return lines

        lines.append(declaration)
        lines.append("{")

        blocks: list[list[str]] = []
        # Fields and properties are kept together in one block each
        blocks.append([line for f in cls.fields for line in self._serialize_field(f)])
        blocks.append([line for p in cls.properties for line in self._serialize_property(p)])
        blocks.extend(self._serialize_constructor(c) for c in cls.constructors)
        blocks.extend(self._serialize_method(m) for m in cls.methods)
        blocks.extend(self._serialize_class(nested) for nested in cls.nested_classes)

        lines.extend(self._indent_lines(self._join_blocks(blocks), 1))
        lines.append("}")
        return lines

    def _serialize_field(self, field: CSharpField) -> list[str]:
        """Serialize a field declaration."""
        modifiers = self._modifier_text(field.access, field.modifiers)
        return [f"{modifiers} {field.type_name} {field.name};"]

    def _serialize_property(self, prop: CSharpProperty) -> list[str]:
        """Serialize a get-only property declaration."""
        declaration = f"{prop.type_name} {prop.name} {{ get; }}"
        if prop.access:
            declaration = f"{prop.access.value} {declaration}"
        return [declaration]

    def _serialize_constructor(self, constructor: CSharpConstructor) -> list[str]:
        """Serialize a constructor declaration."""
        params = self._serialize_parameters(constructor.parameters)
        declaration = f"{constructor.access.value} {constructor.class_name}({params})"
        if constructor.this_call_args is not None:
            declaration += f" : this({', '.join(constructor.this_call_args)})"

        lines = [declaration, "{"]
        lines.extend(self._indent_lines(list(constructor.body), 1))
        lines.append("}")
        return lines

    def _serialize_method(self, method: CSharpMethod) -> list[str]:
        """Serialize a method with a block or expression body."""
        modifiers = self._modifier_text(method.access, method.modifiers)
        name = method.name
        if method.type_parameters:
            name += f"<{', '.join(method.type_parameters)}>"
        prefix = f"{modifiers} {method.return_type} {name}".lstrip()

        if method.wrap_parameters and method.parameters:
            signature = [f"{prefix}("]
            for i, p in enumerate(method.parameters):
                end = "," if i < len(method.parameters) - 1 else ")"
                signature.append(f"{self.INDENT}{p.type_name} {p.name}{end}")
        else:
            signature = [f"{prefix}({self._serialize_parameters(method.parameters)})"]

        if method.expression_body is None:
            lines = signature + ["{"]
            lines.extend(self._indent_lines(list(method.body or []), 1))
            lines.append("}")
            return lines

        expression = self._serialize_expression(method.expression_body)
        if len(signature) == 1 and len(expression) == 1:
            return [f"{signature[0]} => {expression[0]};"]

        signature[-1] += " =>"
        expression[-1] += ";"
        return signature + self._indent_lines(expression, 1)

    def _serialize_expression(self, expression: CSharpExpression) -> list[str]:
        """Serialize an expression; switch expressions span several lines."""
        if isinstance(expression, CSharpSwitchExpression):
            lines = [f"{expression.subject} switch", "{"]
            for arm in expression.arms:
                result = self._serialize_expression(arm.expression)
                lines.append(f"{self.INDENT}{arm.pattern} => {result[0]},")
            lines.append("}")
            return lines
        if isinstance(expression, CSharpInterpolatedString):
            return [self._serialize_interpolated_string(expression)]
        return [expression]

    def _serialize_interpolated_string(self, value: CSharpInterpolatedString) -> str:
        if not any(isinstance(part, CSharpInterpolation) for part in value.parts):
            return string_literal("".join(value.parts))
        text = []
        for part in value.parts:
            if isinstance(part, CSharpInterpolation):
                text.append(f"{{{part.expression}}}")
            else:
                text.append(escape_interpolated_literal(part))
        return f'$"{"".join(text)}"'
