"""
Syntax phase: C# declarations as syntax trees and symbols.

Sources enter either as C# text (tree-sitter) or as a JSON declaration
manifest; both produce the same CompilationUnit trees.
"""

from .csharp_parser import CSharpSourceParser, parse_sources
from .manifest_parser import ManifestParser
from .nodes import (
    AttributeList,
    AttributeSyntax,
    CompilationUnit,
    MethodDeclaration,
    NamespaceDeclaration,
    ParameterSyntax,
    SyntaxNode,
    TypeDeclaration,
    TypeParameterSyntax,
    UsingDirective,
    link_parents,
)
from .semantic import MethodSymbol, SemanticModel, TypeReference, TypeSymbol
from .type_names import TypeName, TypeSyntaxError

__all__ = [
    "AttributeList",
    "AttributeSyntax",
    "CompilationUnit",
    "CSharpSourceParser",
    "ManifestParser",
    "MethodDeclaration",
    "MethodSymbol",
    "NamespaceDeclaration",
    "ParameterSyntax",
    "SemanticModel",
    "SyntaxNode",
    "TypeDeclaration",
    "TypeName",
    "TypeParameterSyntax",
    "TypeReference",
    "TypeSymbol",
    "TypeSyntaxError",
    "UsingDirective",
    "link_parents",
    "parse_sources",
]
