"""
Declaration manifest parser.

Builds syntax trees from a JSON manifest describing compilation units, for
hosts that already know their declarations and do not want to ship C#
source text. Members carry a ``"kind"`` of ``namespace``, ``type`` or
``method``.
"""

from __future__ import annotations

from typing import Any

from ..errors import ManifestError
from .nodes import (
    TYPE_KEYWORDS,
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


class ManifestParser:
    """Parses a declaration manifest into compilation units."""

    def parse(self, manifest: dict[str, Any]) -> list[CompilationUnit]:
        """
        Parse a manifest dictionary.

        Args:
            manifest: Parsed JSON with a ``compilation_units`` list

        Returns:
            One CompilationUnit per entry, with parent links set

        Raises:
            ManifestError: If the manifest is malformed
        """
        if not isinstance(manifest, dict):
            raise ManifestError("Manifest must be a JSON object")
        units = self._list(manifest, "compilation_units", "#", required=True)
        return [self._parse_unit(unit, f"#/compilation_units/{i}") for i, unit in enumerate(units)]

    def _parse_unit(self, data: Any, path: str) -> CompilationUnit:
        self._require_object(data, path)
        unit = CompilationUnit(
            path=self._string(data, "path", path, default=""),
            usings=self._parse_usings(data, path),
            members=self._parse_members(data, path, allow_namespaces=True),
        )
        return link_parents(unit)

    def _parse_members(self, data: dict, path: str, allow_namespaces: bool) -> list[SyntaxNode]:
        members = []
        for i, member in enumerate(self._list(data, "members", path)):
            member_path = f"{path}/members/{i}"
            self._require_object(member, member_path)
            kind = member.get("kind")
            if kind == "namespace" and allow_namespaces:
                members.append(self._parse_namespace(member, member_path))
            elif kind == "type":
                members.append(self._parse_type(member, member_path))
            elif kind == "method" and not allow_namespaces:
                members.append(self._parse_method(member, member_path))
            else:
                raise ManifestError(f"Unexpected member kind '{kind}'", member_path)
        return members

    def _parse_namespace(self, data: dict, path: str) -> NamespaceDeclaration:
        return NamespaceDeclaration(
            name=self._string(data, "name", path),
            usings=self._parse_usings(data, path),
            members=self._parse_members(data, path, allow_namespaces=True),
            file_scoped=self._bool(data, "file_scoped", path),
        )

    def _parse_type(self, data: dict, path: str) -> TypeDeclaration:
        keyword = " ".join(self._string(data, "keyword", path).split())
        if keyword not in TYPE_KEYWORDS:
            raise ManifestError(f"Unknown type keyword '{keyword}'", f"{path}/keyword")
        return TypeDeclaration(
            keyword=keyword,
            identifier=self._string(data, "name", path),
            modifiers=self._strings(data, "modifiers", path),
            type_parameters=self._parse_type_parameters(data, path),
            attribute_lists=self._parse_attributes(data, path),
            members=self._parse_members(data, path, allow_namespaces=False),
        )

    def _parse_method(self, data: dict, path: str) -> MethodDeclaration:
        parameters = []
        for i, parameter in enumerate(self._list(data, "parameters", path)):
            parameter_path = f"{path}/parameters/{i}"
            self._require_object(parameter, parameter_path)
            parameters.append(
                ParameterSyntax(
                    type=self._string(parameter, "type", parameter_path),
                    name=self._string(parameter, "name", parameter_path),
                )
            )
        return MethodDeclaration(
            identifier=self._string(data, "name", path),
            return_type=self._string(data, "return_type", path, default="void"),
            modifiers=self._strings(data, "modifiers", path),
            type_parameters=self._parse_type_parameters(data, path),
            parameters=parameters,
            has_body=self._bool(data, "has_body", path),
            attribute_lists=self._parse_attributes(data, path),
        )

    def _parse_usings(self, data: dict, path: str) -> list[UsingDirective]:
        usings = []
        for text in self._strings(data, "usings", path):
            text = text.strip()
            if not text.startswith(("using ", "global using ")):
                text = f"using {text}"
            if not text.endswith(";"):
                text = f"{text};"
            usings.append(UsingDirective(text=text))
        return usings

    def _parse_type_parameters(self, data: dict, path: str) -> list[TypeParameterSyntax]:
        parameters = []
        for text in self._strings(data, "type_parameters", path):
            text = " ".join(text.split())
            parameters.append(TypeParameterSyntax(name=text.split(" ")[-1], text=text))
        return parameters

    def _parse_attributes(self, data: dict, path: str) -> list[AttributeList]:
        # Each attribute gets its own [..] section
        return [
            AttributeList(attributes=[AttributeSyntax(name=name.strip("[] "))])
            for name in self._strings(data, "attributes", path)
        ]

    def _require_object(self, value: Any, path: str) -> None:
        if not isinstance(value, dict):
            raise ManifestError("Expected an object", path)

    def _list(self, data: dict, key: str, path: str, required: bool = False) -> list:
        if key not in data:
            if required:
                raise ManifestError(f"Missing required key '{key}'", path)
            return []
        value = data[key]
        if not isinstance(value, list):
            raise ManifestError(f"'{key}' must be a list", f"{path}/{key}")
        return value

    def _strings(self, data: dict, key: str, path: str) -> list[str]:
        values = self._list(data, key, path)
        for i, value in enumerate(values):
            if not isinstance(value, str):
                raise ManifestError("Expected a string", f"{path}/{key}/{i}")
        return values

    def _string(self, data: dict, key: str, path: str, default: str | None = None) -> str:
        if key not in data:
            if default is None:
                raise ManifestError(f"Missing required key '{key}'", path)
            return default
        value = data[key]
        if not isinstance(value, str) or (default is None and not value.strip()):
            raise ManifestError(f"'{key}' must be a non-empty string", f"{path}/{key}")
        return value.strip()

    def _bool(self, data: dict, key: str, path: str) -> bool:
        value = data.get(key, False)
        if not isinstance(value, bool):
            raise ManifestError(f"'{key}' must be a boolean", f"{path}/{key}")
        return value
