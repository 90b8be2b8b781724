"""
Semantic model over parsed compilation units.

Builds type symbols from syntax (merging partial declarations), enumerates
their members in a stable order, and resolves type text written in
declarations to display and fully-qualified forms.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .nodes import (
    CompilationUnit,
    MethodDeclaration,
    NamespaceDeclaration,
    SyntaxNode,
    TypeDeclaration,
    UsingDirective,
)
from .type_names import (
    SPECIAL_TYPES,
    ArrayType,
    NamedType,
    NameSegment,
    NullableType,
    PointerType,
    PredefinedType,
    QualifiedName,
    TupleElement,
    TupleType,
    TypeName,
    TypeParameterType,
    TypeSyntaxError,
)

logger = logging.getLogger(__name__)

ACCESSIBILITY_MODIFIERS = ("public", "protected", "internal", "private", "file")


def _arities(name: str, *arities: int) -> set[tuple[str, int]]:
    return {(name, arity) for arity in arities}


# Well-known framework types reachable through using directives
WELL_KNOWN_TYPES: dict[str, set[tuple[str, int]]] = {
    "System": {
        *((name, 0) for name in SPECIAL_TYPES),
        ("Guid", 0),
        ("DateTime", 0),
        ("DateTimeOffset", 0),
        ("DateOnly", 0),
        ("TimeOnly", 0),
        ("TimeSpan", 0),
        ("Exception", 0),
        ("Uri", 0),
        ("Version", 0),
        ("Type", 0),
        ("Half", 0),
        ("Index", 0),
        ("Range", 0),
        ("Nullable", 1),
        ("Lazy", 1),
        ("ReadOnlyMemory", 1),
        ("Memory", 1),
        *_arities("Func", *range(1, 18)),
        *_arities("Action", *range(0, 17)),
        *_arities("Tuple", *range(1, 9)),
        *_arities("ValueTuple", *range(1, 9)),
    },
    "System.Collections.Generic": {
        ("List", 1),
        ("IList", 1),
        ("IReadOnlyList", 1),
        ("ICollection", 1),
        ("IReadOnlyCollection", 1),
        ("IEnumerable", 1),
        ("Dictionary", 2),
        ("IDictionary", 2),
        ("IReadOnlyDictionary", 2),
        ("SortedDictionary", 2),
        ("KeyValuePair", 2),
        ("HashSet", 1),
        ("ISet", 1),
        ("IReadOnlySet", 1),
        ("Queue", 1),
        ("Stack", 1),
        ("LinkedList", 1),
    },
    "System.Collections.Immutable": {
        ("ImmutableArray", 1),
        ("ImmutableList", 1),
        ("ImmutableDictionary", 2),
        ("ImmutableHashSet", 1),
    },
    "System.Threading": {("CancellationToken", 0)},
    "System.Threading.Tasks": {("Task", 0), ("Task", 1), ("ValueTask", 0), ("ValueTask", 1)},
    "System.Text": {("StringBuilder", 0)},
    "System.IO": {("Stream", 0), ("FileInfo", 0), ("DirectoryInfo", 0)},
    "System.Numerics": {("BigInteger", 0), ("Complex", 0)},
}


def namespace_of(node: SyntaxNode) -> str | None:
    """Full name of the namespace enclosing ``node`` (None for the global namespace)."""
    names = [
        ancestor.name
        for ancestor in node.ancestors_and_self()
        if isinstance(ancestor, NamespaceDeclaration) and ancestor is not node
    ]
    return ".".join(reversed(names)) or None


@dataclass
class TypeReference:
    """Type text as written in a declaration, plus its resolution."""

    text: str
    resolved: TypeName | None = None

    def to_display_string(self, fully_qualified: bool = False) -> str:
        if self.resolved is None:
            return " ".join(self.text.split())
        return self.resolved.render(fully_qualified)


@dataclass
class ParameterSymbol:
    name: str
    type: TypeReference


class TypeSymbol:
    """A named type, merged across its partial declarations."""

    kind = "type"

    def __init__(
        self,
        model: SemanticModel,
        name: str,
        arity: int,
        namespace: str | None,
        containing_type: TypeSymbol | None,
    ):
        self._model = model
        self.name = name
        self.arity = arity
        self.namespace = namespace
        self.containing_type = containing_type
        self.declarations: list[TypeDeclaration] = []
        self.nested: dict[tuple[str, int], TypeSymbol] = {}

    def __repr__(self) -> str:
        return f"TypeSymbol({self.to_display_string()!r})"

    @property
    def type_parameters(self) -> list[str]:
        return [parameter.name for parameter in self.declarations[0].type_parameters]

    @property
    def is_value_type(self) -> bool:
        return self.declarations[0].is_value_type

    @property
    def is_record(self) -> bool:
        return self.declarations[0].is_record

    def chain(self) -> list[NameSegment]:
        """Containing types then this type, each with its own type parameters."""
        segments = []
        symbol: TypeSymbol | None = self
        while symbol is not None:
            arguments = [TypeParameterType(name=name) for name in symbol.type_parameters]
            segments.insert(0, NameSegment(identifier=symbol.name, type_arguments=arguments))
            symbol = symbol.containing_type
        return segments

    def to_display_string(self) -> str:
        """Display name such as ``Ns.Outer<U>.Result<T>``."""
        return NamedType(namespace=self.namespace, chain=self.chain()).render()

    def get_members(self) -> list[MethodSymbol | TypeSymbol]:
        """Methods and nested types across all partial declarations.

        Order is compilation-unit order, then source order within each
        declaration. Partial method implementations are folded into their
        definition.
        """
        definitions = set()
        for declaration in self.declarations:
            for member in declaration.members:
                if isinstance(member, MethodDeclaration) and "partial" in member.modifiers and not member.has_body:
                    definitions.add(_signature(member))

        members: list[MethodSymbol | TypeSymbol] = []
        seen_types = set()
        for declaration in self.declarations:
            for member in declaration.members:
                if isinstance(member, MethodDeclaration):
                    if "partial" in member.modifiers and member.has_body and _signature(member) in definitions:
                        continue
                    members.append(MethodSymbol(self._model, self, member))
                elif isinstance(member, TypeDeclaration):
                    nested = self._model.get_declared_symbol(member)
                    if nested is not None and id(nested) not in seen_types:
                        seen_types.add(id(nested))
                        members.append(nested)
        return members


def _signature(method: MethodDeclaration) -> tuple:
    return method.identifier, tuple(" ".join(p.type.split()) for p in method.parameters)


class MethodSymbol:
    """A method declared in source."""

    kind = "method"

    def __init__(self, model: SemanticModel, containing_type: TypeSymbol, declaration: MethodDeclaration):
        self._model = model
        self.containing_type = containing_type
        self.declaration = declaration
        self.name = declaration.identifier
        self.is_static = "static" in declaration.modifiers
        self.is_override = "override" in declaration.modifiers
        self.is_partial_definition = "partial" in declaration.modifiers and not declaration.has_body
        self.is_implicitly_declared = False
        self.type_parameters = [parameter.name for parameter in declaration.type_parameters]

    def __repr__(self) -> str:
        return f"MethodSymbol({self.containing_type.name}.{self.name})"

    @property
    def accessibility(self) -> str:
        """Accessibility modifiers as written (``""`` when none are given)."""
        return " ".join(m for m in self.declaration.modifiers if m in ACCESSIBILITY_MODIFIERS)

    @property
    def return_type(self) -> TypeReference:
        return self._model.resolve_type(self.declaration.return_type, self.declaration, self.type_parameters)

    @property
    def parameters(self) -> list[ParameterSymbol]:
        return [
            ParameterSymbol(
                name=parameter.name,
                type=self._model.resolve_type(parameter.type, self.declaration, self.type_parameters),
            )
            for parameter in self.declaration.parameters
        ]


@dataclass
class _Found:
    """Lookup result: a namespace (empty chain) or a type."""

    namespace: str | None
    chain: list[NameSegment] = field(default_factory=list)
    symbol: TypeSymbol | None = None

    @property
    def is_namespace(self) -> bool:
        return not self.chain


@dataclass
class _LookupContext:
    type_parameters: set[str] = field(default_factory=set)
    type_declarations: list[TypeDeclaration] = field(default_factory=list)
    # (namespace, usings), innermost scope first; None is the global namespace
    scopes: list[tuple[str | None, list[UsingDirective]]] = field(default_factory=list)


class SemanticModel:
    """Symbols for every type declared across a set of compilation units."""

    def __init__(self, units: list[CompilationUnit], implicit_usings: list[str] | None = None):
        self.units = units
        self._types: dict[str | None, dict[tuple[str, int], TypeSymbol]] = {}
        self._symbols_by_node: dict[TypeDeclaration, TypeSymbol] = {}
        self._namespaces: set[str] = set()
        self._global_usings: list[UsingDirective] = [
            UsingDirective(text=f"using {namespace};") for namespace in implicit_usings or []
        ]

        for namespace in WELL_KNOWN_TYPES:
            self._add_namespace(namespace)
        for unit in units:
            self._global_usings.extend(using for using in unit.usings if using.is_global)
            self._register(unit.members, None, None)

    def _add_namespace(self, namespace: str) -> None:
        parts = namespace.split(".")
        for index in range(1, len(parts) + 1):
            self._namespaces.add(".".join(parts[:index]))

    def _register(self, members: list[SyntaxNode], namespace: str | None, containing: TypeSymbol | None) -> None:
        for member in members:
            if isinstance(member, NamespaceDeclaration):
                full_name = f"{namespace}.{member.name}" if namespace else member.name
                self._add_namespace(full_name)
                self._register(member.members, full_name, None)
            elif isinstance(member, TypeDeclaration):
                table = containing.nested if containing else self._types.setdefault(namespace, {})
                key = (member.identifier, member.arity)
                symbol = table.get(key)
                if symbol is None:
                    symbol = TypeSymbol(self, member.identifier, member.arity, namespace, containing)
                    table[key] = symbol
                symbol.declarations.append(member)
                self._symbols_by_node[member] = symbol
                self._register(member.members, namespace, symbol)

    def get_declared_symbol(self, declaration: TypeDeclaration) -> TypeSymbol | None:
        """Symbol declared by a type declaration, or None if unknown to this model."""
        return self._symbols_by_node.get(declaration)

    def resolve_type(self, text: str, context: SyntaxNode, type_parameters: list[str] = ()) -> TypeReference:
        """Resolve type text written at ``context``.

        Args:
            text: Type as written (``List<Shape>``, ``int?``)
            context: Node the text appears on; its ancestors define the scope
            type_parameters: Extra type parameters in scope (e.g. the method's own)
        """
        try:
            parsed = TypeName.parse(text)
        except TypeSyntaxError as e:
            logger.debug("Keeping type text '%s' as written: %s", text, e)
            return TypeReference(text=text)
        return TypeReference(text=text, resolved=self._resolve(parsed, self._context(context, type_parameters)))

    def _context(self, node: SyntaxNode, type_parameters) -> _LookupContext:
        context = _LookupContext(type_parameters=set(type_parameters))
        for ancestor in node.ancestors_and_self():
            if isinstance(ancestor, TypeDeclaration):
                context.type_declarations.append(ancestor)
                context.type_parameters.update(parameter.name for parameter in ancestor.type_parameters)
            elif isinstance(ancestor, NamespaceDeclaration):
                outer = namespace_of(ancestor)
                parts = ancestor.name.split(".")
                # namespace A.B declares A.B inside A; only the innermost carries the usings
                for index in range(len(parts), 0, -1):
                    name = ".".join(parts[:index])
                    full_name = f"{outer}.{name}" if outer else name
                    context.scopes.append((full_name, ancestor.usings if index == len(parts) else []))
            elif isinstance(ancestor, CompilationUnit):
                local = [using for using in ancestor.usings if not using.is_global]
                context.scopes.append((None, local + self._global_usings))
        if not context.scopes:
            context.scopes.append((None, list(self._global_usings)))
        return context

    def _resolve(self, type_name: TypeName, context: _LookupContext) -> TypeName:
        if isinstance(type_name, NullableType):
            return NullableType(element=self._resolve(type_name.element, context))
        if isinstance(type_name, ArrayType):
            return ArrayType(element=self._resolve(type_name.element, context), rank=type_name.rank)
        if isinstance(type_name, PointerType):
            return PointerType(element=self._resolve(type_name.element, context))
        if isinstance(type_name, TupleType):
            return TupleType(
                elements=[TupleElement(type=self._resolve(e.type, context), name=e.name) for e in type_name.elements]
            )
        if isinstance(type_name, QualifiedName):
            return self._resolve_name(type_name, context)
        return type_name

    def _resolve_name(self, name: QualifiedName, context: _LookupContext) -> TypeName:
        segments = [
            NameSegment(
                identifier=segment.identifier,
                type_arguments=[self._resolve(argument, context) for argument in segment.type_arguments],
            )
            for segment in name.segments
        ]
        first = segments[0]
        if name.alias is None and len(segments) == 1 and not first.type_arguments:
            if first.identifier in context.type_parameters:
                return TypeParameterType(name=first.identifier)

        found = self._lookup_qualified(name.alias, segments, context)
        if found is None or found.is_namespace:
            logger.debug("Could not resolve type '%s'", name.render())
            return QualifiedName(segments=segments, alias=name.alias)
        return self._as_type(found)

    def _lookup_qualified(self, alias: str | None, segments: list[NameSegment], context: _LookupContext):
        if alias == "global":
            found = self._lookup_in_namespace(None, segments[0])
        elif alias is not None:
            found = self._lookup_alias(alias, context)
            if found is not None and not found.is_namespace:
                return None
            found = self._member_lookup(found, segments[0]) if found else None
        else:
            found = self._lookup_simple(segments[0], context)
        for segment in segments[1:]:
            if found is None:
                return None
            found = self._member_lookup(found, segment)
        return found

    def _as_type(self, found: _Found) -> TypeName:
        if found.symbol is None and found.namespace == "System" and len(found.chain) == 1:
            segment = found.chain[0]
            if not segment.type_arguments and segment.identifier in SPECIAL_TYPES:
                return PredefinedType(keyword=SPECIAL_TYPES[segment.identifier])
            if segment.identifier == "Nullable" and len(segment.type_arguments) == 1:
                return NullableType(element=segment.type_arguments[0])
        return NamedType(namespace=found.namespace, chain=found.chain)

    def _lookup_in_namespace(self, namespace: str | None, segment: NameSegment, types_only: bool = False):
        key = (segment.identifier, len(segment.type_arguments))
        symbol = self._types.get(namespace, {}).get(key)
        if symbol is not None:
            return _Found(namespace=namespace, chain=[segment], symbol=symbol)
        if key in WELL_KNOWN_TYPES.get(namespace, ()):
            return _Found(namespace=namespace, chain=[segment])
        if not types_only and not segment.type_arguments:
            child = f"{namespace}.{segment.identifier}" if namespace else segment.identifier
            if child in self._namespaces:
                return _Found(namespace=child)
        return None

    def _member_lookup(self, found: _Found, segment: NameSegment):
        if found.is_namespace:
            return self._lookup_in_namespace(found.namespace, segment)
        if found.symbol is not None:
            nested = found.symbol.nested.get((segment.identifier, len(segment.type_arguments)))
            if nested is not None:
                return _Found(namespace=found.namespace, chain=[*found.chain, segment], symbol=nested)
        return None

    def _lookup_alias(self, alias: str, context: _LookupContext):
        for _, usings in context.scopes:
            for using in usings:
                if using.alias is not None and using.alias[0] == alias:
                    try:
                        target = TypeName.parse(using.alias[1])
                    except TypeSyntaxError:
                        return None
                    if not isinstance(target, QualifiedName):
                        return None
                    # alias targets are resolved without the usings they sit beside
                    return self._lookup_qualified(target.alias, target.segments, _LookupContext(scopes=[(None, [])]))
        return None

    def _lookup_simple(self, segment: NameSegment, context: _LookupContext):
        key = (segment.identifier, len(segment.type_arguments))
        for declaration in context.type_declarations:
            symbol = self.get_declared_symbol(declaration)
            if symbol is None:
                continue
            nested = symbol.nested.get(key)
            if nested is not None:
                return _Found(namespace=symbol.namespace, chain=[*symbol.chain(), segment], symbol=nested)

        for namespace, usings in context.scopes:
            found = self._lookup_in_namespace(namespace, segment)
            if found is not None:
                return found
            if not segment.type_arguments:
                found = self._lookup_alias_in(segment.identifier, usings)
                if found is not None:
                    return found
            for using in usings:
                if using.namespace is not None:
                    found = self._lookup_in_namespace(using.namespace, segment, types_only=True)
                    if found is not None:
                        return found
        return None

    def _lookup_alias_in(self, alias: str, usings: list[UsingDirective]):
        if any(using.alias is not None and using.alias[0] == alias for using in usings):
            return self._lookup_alias(alias, _LookupContext(scopes=[(None, usings)]))
        return None
