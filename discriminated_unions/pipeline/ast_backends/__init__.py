"""
AST backends: union model -> C# AST -> source text.
"""

from __future__ import annotations

from .base import UnionBackend
from .csharp_serializer import CSharpSerializer
from .reference_backend import ReferenceTypeBackend
from .renderer import UnionRenderer, render
from .value_backend import ValueLayout, ValueSlot, ValueTypeBackend, plan_value_layout

__all__ = [
    "CSharpSerializer",
    "ReferenceTypeBackend",
    "UnionBackend",
    "UnionRenderer",
    "ValueLayout",
    "ValueSlot",
    "ValueTypeBackend",
    "plan_value_layout",
    "render",
]
