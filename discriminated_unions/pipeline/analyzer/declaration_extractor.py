"""
Declaration extractor.

Walks the enclosing scopes of a marked type once, from the type outward,
then reverses what it collected so everything reads outer to inner.
"""

from __future__ import annotations

from ..syntax.nodes import (
    AttributeList,
    AttributeSyntax,
    CompilationUnit,
    NamespaceDeclaration,
    TypeDeclaration,
)
from .model import DeclarationInfo, NamespaceDeclarationInfo


def extract_from_attribute(attribute: AttributeSyntax) -> TypeDeclaration | None:
    """Type declaration an attribute is attached to, or None for any other target."""
    attribute_list = attribute.parent
    if not isinstance(attribute_list, AttributeList):
        return None
    declaration = attribute_list.parent
    if not isinstance(declaration, TypeDeclaration):
        return None
    return declaration


def type_header(declaration: TypeDeclaration) -> str:
    """Header text such as ``public static partial class Outer<out T>``."""
    parts = [*declaration.modifiers, declaration.keyword, declaration.identifier]
    header = " ".join(part for part in parts if part)
    if declaration.type_parameters:
        header += "<" + ", ".join(parameter.text for parameter in declaration.type_parameters) + ">"
    return header


def _name_with_parameters(declaration: TypeDeclaration) -> str:
    if not declaration.type_parameters:
        return declaration.identifier
    return f"{declaration.identifier}<{', '.join(p.name for p in declaration.type_parameters)}>"


def _using_block(usings) -> str:
    # Global usings already apply to every file of the compilation
    return "".join(f"{using.text}\n" for using in usings if not using.is_global)


def extract_declaration_info(declaration: TypeDeclaration) -> DeclarationInfo:
    """
    Build the nesting context of a marked type declaration.

    Args:
        declaration: The type declaration carrying the union attribute

    Returns:
        DeclarationInfo with namespaces and type headers outer to inner
    """
    namespaces: list[NamespaceDeclarationInfo] = []
    headers: list[str] = []
    names: list[str] = []
    generic_groups: list[list[str]] = []

    for node in declaration.ancestors_and_self():
        if isinstance(node, TypeDeclaration):
            headers.append(type_header(node))
            names.append(_name_with_parameters(node))
            generic_groups.append([parameter.name for parameter in node.type_parameters])
        elif isinstance(node, NamespaceDeclaration):
            namespaces.append(NamespaceDeclarationInfo(declaration=node.name, using_statements=_using_block(node.usings)))
        elif isinstance(node, CompilationUnit):
            namespaces.append(NamespaceDeclarationInfo(declaration=None, using_statements=_using_block(node.usings)))

    namespaces.reverse()
    headers.reverse()
    names.reverse()
    generic_groups.reverse()

    return DeclarationInfo(
        namespace_declarations=tuple(namespaces),
        type_declarations=tuple(headers),
        generic_type_arguments=tuple(name for group in generic_groups for name in group),
        own_generic_type_arguments=tuple(parameter.name for parameter in declaration.type_parameters),
        type_names=tuple(names),
        is_value_type=declaration.is_value_type,
        is_record=declaration.is_record,
    )
