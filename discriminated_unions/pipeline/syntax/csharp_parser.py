"""
C# source parser.

Uses tree-sitter and tree-sitter-c-sharp to parse source text and keep the
declaration structure the generator needs: usings, namespaces, type
declarations, attributes and method signatures.
"""

from __future__ import annotations

import logging
from typing import Any

import tree_sitter_c_sharp as ts_csharp
from tree_sitter import Language, Parser

from ..errors import SourceParseError
from .nodes import (
    AttributeList,
    AttributeSyntax,
    CompilationUnit,
    MethodDeclaration,
    NamespaceDeclaration,
    ParameterSyntax,
    TypeDeclaration,
    TypeParameterSyntax,
    UsingDirective,
    link_parents,
)

logger = logging.getLogger(__name__)

# tree-sitter node type -> declaration keyword
TYPE_DECLARATION_NODES = {
    "class_declaration": "class",
    "struct_declaration": "struct",
    "interface_declaration": "interface",
    "record_declaration": "record",
    "record_struct_declaration": "record struct",
}


class CSharpSourceParser:
    """Parses C# source text into declaration syntax nodes."""

    def __init__(self):
        self._parser = Parser(Language(ts_csharp.language()))

    def parse_tree(self, code: str, path: str = "") -> Any:
        """Parse C# source into a tree-sitter tree.

        Raises:
            SourceParseError: If the code has syntax errors
        """
        tree = self._parser.parse(bytes(code, "utf8"))
        if tree.root_node.has_error:
            errors = self._find_errors(tree.root_node)
            line = errors[0].start_point[0] + 1 if errors else None
            raise SourceParseError("syntax error", path=path, line=line)
        return tree

    def parse(self, code: str, path: str = "") -> CompilationUnit:
        """
        Parse C# source into a compilation unit.

        Args:
            code: C# source text
            path: File path, used in errors and kept on the unit

        Returns:
            CompilationUnit with parent links set

        Raises:
            SourceParseError: If the code has syntax errors
        """
        source = bytes(code, "utf8")
        tree = self.parse_tree(code, path)
        unit = CompilationUnit(path=path)

        file_scoped: NamespaceDeclaration | None = None
        for child in tree.root_node.children:
            if child.type == "file_scoped_namespace_declaration":
                file_scoped = NamespaceDeclaration(name=self._name(child, source), file_scoped=True)
                self._collect(child.children, source, file_scoped.usings, file_scoped.members)
                unit.members.append(file_scoped)
            elif file_scoped is not None:
                # Older grammars keep the file-scoped namespace members as siblings
                self._collect([child], source, file_scoped.usings, file_scoped.members)
            else:
                self._collect([child], source, unit.usings, unit.members)

        logger.debug("Parsed %s: %d top-level members", path or "<source>", len(unit.members))
        return link_parents(unit)

    def _collect(self, nodes: list[Any], source: bytes, usings: list, members: list) -> None:
        for node in nodes:
            if node.type == "using_directive":
                usings.append(UsingDirective(text=self._text(node, source)))
            elif node.type == "namespace_declaration":
                members.append(self._parse_namespace(node, source))
            elif node.type in TYPE_DECLARATION_NODES:
                members.append(self._parse_type(node, source))
            elif node.type == "declaration_list":
                self._collect(node.children, source, usings, members)

    def _parse_namespace(self, node: Any, source: bytes) -> NamespaceDeclaration:
        namespace = NamespaceDeclaration(name=self._name(node, source))
        body = node.child_by_field_name("body")
        if body is not None:
            self._collect(body.children, source, namespace.usings, namespace.members)
        return namespace

    def _parse_type(self, node: Any, source: bytes) -> TypeDeclaration:
        keyword = TYPE_DECLARATION_NODES[node.type]
        if node.type == "record_declaration":
            tokens = {child.type for child in node.children}
            if "struct" in tokens:
                keyword = "record struct"
            elif "class" in tokens:
                keyword = "record class"

        declaration = TypeDeclaration(
            keyword=keyword,
            identifier=self._name(node, source),
            modifiers=self._modifiers(node, source),
            type_parameters=self._type_parameters(node, source),
            attribute_lists=self._attribute_lists(node, source),
        )
        body = node.child_by_field_name("body")
        if body is None:
            body = next((child for child in node.children if child.type == "declaration_list"), None)
        if body is not None:
            for member in body.children:
                if member.type in TYPE_DECLARATION_NODES:
                    declaration.members.append(self._parse_type(member, source))
                elif member.type == "method_declaration":
                    declaration.members.append(self._parse_method(member, source))
        return declaration

    def _parse_method(self, node: Any, source: bytes) -> MethodDeclaration:
        return_type = node.child_by_field_name("returns") or node.child_by_field_name("type")
        parameters = []
        parameter_list = node.child_by_field_name("parameters")
        if parameter_list is not None:
            for parameter in parameter_list.children:
                if parameter.type != "parameter":
                    continue
                type_node = parameter.child_by_field_name("type")
                parameters.append(
                    ParameterSyntax(
                        type=self._text(type_node, source) if type_node is not None else "",
                        name=self._name(parameter, source),
                    )
                )
        has_body = node.child_by_field_name("body") is not None or any(
            child.type in ("block", "arrow_expression_clause") for child in node.children
        )
        return MethodDeclaration(
            identifier=self._name(node, source),
            return_type=self._text(return_type, source) if return_type is not None else "void",
            modifiers=self._modifiers(node, source),
            type_parameters=self._type_parameters(node, source),
            parameters=parameters,
            has_body=has_body,
            attribute_lists=self._attribute_lists(node, source),
        )

    def _modifiers(self, node: Any, source: bytes) -> list[str]:
        return [self._text(child, source) for child in node.children if child.type == "modifier"]

    def _type_parameters(self, node: Any, source: bytes) -> list[TypeParameterSyntax]:
        parameter_list = node.child_by_field_name("type_parameters")
        if parameter_list is None:
            parameter_list = next((c for c in node.children if c.type == "type_parameter_list"), None)
        if parameter_list is None:
            return []
        return [
            TypeParameterSyntax(name=self._name(child, source), text=self._text(child, source))
            for child in parameter_list.children
            if child.type == "type_parameter"
        ]

    def _attribute_lists(self, node: Any, source: bytes) -> list[AttributeList]:
        lists = []
        for child in node.children:
            if child.type != "attribute_list":
                continue
            attributes = [
                AttributeSyntax(name=self._name(attribute, source))
                for attribute in child.children
                if attribute.type == "attribute"
            ]
            lists.append(AttributeList(attributes=attributes))
        return lists

    def _name(self, node: Any, source: bytes) -> str:
        name = node.child_by_field_name("name")
        if name is None:
            name = next(
                (child for child in reversed(node.children) if child.type in ("identifier", "qualified_name")),
                None,
            )
        return self._text(name, source) if name is not None else ""

    def _text(self, node: Any, source: bytes) -> str:
        """Source text of a node with whitespace collapsed."""
        return " ".join(source[node.start_byte : node.end_byte].decode("utf8").split())

    def _find_errors(self, node: Any) -> list[Any]:
        """Find all ERROR and missing nodes in the tree."""
        errors = []
        if node.type == "ERROR" or node.is_missing:
            errors.append(node)
        for child in node.children:
            errors.extend(self._find_errors(child))
        return errors


def parse_sources(sources: dict[str, str]) -> list[CompilationUnit]:
    """Parse several ``{path: text}`` sources, in the given order."""
    parser = CSharpSourceParser()
    return [parser.parse(text, path) for path, text in sources.items()]
