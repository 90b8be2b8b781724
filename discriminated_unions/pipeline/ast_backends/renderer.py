"""
Union renderer.

Rebuilds the union's surroundings (namespaces with their usings, enclosing
partial types) as a C# AST, lets the layout backend fill in the union, adds
the generic companion class and serializes the result. Rendering is a pure
function of the model and the configuration.
"""

from __future__ import annotations

from ..analyzer.model import DiscriminatedUnionTypeInfo
from ..config import CodeGeneratorConfig
from .base import case_parameters
from .csharp_ast_nodes import (
    CSharpClass,
    CSharpFile,
    CSharpMethod,
    CSharpNamespace,
    MemberModifier,
)
from .csharp_serializer import CSharpSerializer
from .reference_backend import ReferenceTypeBackend
from .value_backend import ValueTypeBackend

GENERATION_COMMENT = "// <auto-generated/>"

ACCESSIBILITY_KEYWORDS = ("public", "protected", "internal", "private", "file")


def _header_accessibility(header: str) -> str:
    words = header.split()
    keyword_index = next(
        (i for i, word in enumerate(words) if word in ("class", "struct", "record", "interface")),
        len(words),
    )
    return " ".join(word for word in words[:keyword_index] if word in ACCESSIBILITY_KEYWORDS)


def companion_class(info: DiscriminatedUnionTypeInfo) -> CSharpClass:
    """Non-generic static class whose generic factories forward to the union's factories.

    ``Result.Success<T>(value)`` lets callers spell out type arguments the
    compiler cannot infer from ``Result<T>.Success(value)``.
    """
    own = list(info.declaration_info.own_generic_type_arguments)
    accessibility = _header_accessibility(info.declaration_info.type_declarations[-1])
    methods = []
    for case in info.cases:
        arguments = ", ".join(p.name for p in case.parameters)
        methods.append(
            CSharpMethod(
                name=case.name,
                return_type=case.type,
                access=case.accessibility,
                modifiers=[MemberModifier.STATIC],
                type_parameters=own,
                parameters=case_parameters(case),
                expression_body=f"{info.name_with_parameters}.{case.name}({arguments})",
            )
        )
    return CSharpClass(
        name=info.name,
        header=" ".join(part for part in (accessibility, "static class", info.name) if part),
        methods=methods,
    )


class UnionRenderer:
    """Renders union models to C# source text."""

    def __init__(self, config: CodeGeneratorConfig):
        self.config = config
        self.serializer = CSharpSerializer()
        self.reference_backend = ReferenceTypeBackend(config)
        self.value_backend = ValueTypeBackend(config)

    def build_file(self, info: DiscriminatedUnionTypeInfo) -> CSharpFile:
        """Build the C# AST of the generated file."""
        file = CSharpFile(
            generation_comment=GENERATION_COMMENT if self.config.add_generation_comment else "",
            directives=["#nullable enable"],
        )

        # Namespaces, outer to inner; the unnamed scope is the file root
        namespace = file.root
        for scope in info.declaration_info.namespace_declarations:
            usings = scope.using_statements.splitlines()
            if scope.declaration is None:
                namespace.using_directives.extend(usings)
                continue
            inner = CSharpNamespace(name=scope.declaration, using_directives=usings)
            namespace.members.append(inner)
            namespace = inner

        # Enclosing partial types, each opening a body, then the union itself
        container: CSharpNamespace | CSharpClass = namespace
        headers = info.declaration_info.type_declarations
        for header in headers[:-1]:
            shell = CSharpClass(header=header)
            self._add_member(container, shell)
            container = shell

        union = CSharpClass(name=info.name, header=headers[-1])
        self._add_member(container, union)

        backend = self.value_backend if info.declaration_info.is_value_type else self.reference_backend
        backend.build(info, union, namespace)

        if info.declaration_info.own_generic_type_arguments:
            self._add_member(container, companion_class(info))
        return file

    def _add_member(self, container: CSharpNamespace | CSharpClass, member: CSharpClass) -> None:
        if isinstance(container, CSharpNamespace):
            container.members.append(member)
        else:
            container.nested_classes.append(member)

    def render(self, info: DiscriminatedUnionTypeInfo) -> str:
        """Render one union to source text."""
        return self.serializer.serialize(self.build_file(info))


def render(info: DiscriminatedUnionTypeInfo, config: CodeGeneratorConfig | None = None) -> str:
    """Render one union to source text."""
    return UnionRenderer(config or CodeGeneratorConfig()).render(info)
