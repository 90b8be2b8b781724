"""
Analyzer module.

Contains declaration and case extraction and assembly of the union model.
"""

from __future__ import annotations

from .assembler import UnionModelAssembler
from .case_extractor import extract_cases
from .declaration_extractor import extract_declaration_info, extract_from_attribute
from .model import (
    DeclarationInfo,
    DiscriminatedUnionTypeInfo,
    NamespaceDeclarationInfo,
    UnionCaseInfo,
    UnionCaseParameterInfo,
)

__all__ = [
    "DeclarationInfo",
    "DiscriminatedUnionTypeInfo",
    "NamespaceDeclarationInfo",
    "UnionCaseInfo",
    "UnionCaseParameterInfo",
    "UnionModelAssembler",
    "extract_cases",
    "extract_declaration_info",
    "extract_from_attribute",
]
