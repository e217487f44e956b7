"""Recursive synthesis of selection sets from a schema's type graph."""

from dataclasses import dataclass, field

from graphql import GraphQLField, GraphQLObjectType, GraphQLUnionType

from gqlg.config import GeneratorConfig
from gqlg.generator.arguments import (
    ArgumentDefinition,
    ArgumentDictionary,
    collect_field_arguments,
    render_argument_clause,
)
from gqlg.utils.graphql_type import CompositeType, TypeGraph

INDENT = "    "

# Inline fragments add a nesting layer of their own; union members are synthesized this much deeper
UNION_DEPTH_OFFSET = 2


@dataclass
class SynthesisContext:
    """Accumulators shared by every recursive call made for one root field."""

    arguments: ArgumentDictionary = field(default_factory=ArgumentDictionary)
    cross_references: set[tuple[str, str]] = field(default_factory=set)


class QuerySynthesizer:
    def __init__(self, graph: TypeGraph, config: GeneratorConfig) -> None:
        self.graph = graph
        self.config = config

    def synthesize(
        self,
        field_name: str,
        parent_type: CompositeType,
        context: SynthesisContext,
        depth: int = 1,
        from_union: bool = False,
        alias: str | None = None,
    ) -> str:
        """
        Render the selection of one field and, recursively, of everything below it.

        Composite fields whose selection would end up empty are dropped, as are fields pruned by
        the depth limit or by an already visited (parent type, field) edge. Arguments are bound
        into ``context.arguments`` before the children are visited and withdrawn again if the
        field is dropped.

        Args:
            field_name: Name of the field on ``parent_type``
            parent_type: The object or interface type declaring the field
            context: Argument dictionary and cross-reference set of the current root field
            depth: Nesting depth of the field, 1 for a root field
            from_union: Whether the field is reached through a union expansion
            alias: Response name to render the field under instead of its own name

        Returns:
            The rendered selection text, or an empty string if the field is dropped
        """
        graphql_field = self.graph.get_field(parent_type, field_name)
        cur_type = self.graph.field_type(graphql_field)
        indent = INDENT * depth
        label = f"{alias}: {field_name}" if alias else field_name
        effective_depth = depth - UNION_DEPTH_OFFSET if from_union else depth

        if self.graph.is_union(cur_type):
            if effective_depth > self.config.depth_limit:
                return ""
            mark = context.arguments.mark()
            arguments = self._render_arguments(graphql_field, context)
            fragments = self.expand_union(cur_type, context, depth)  # type: ignore[arg-type]
            if not fragments:
                context.arguments.restore(mark)
                return ""
            return f"{indent}{label}{arguments}{{\n{fragments}{indent}}}"

        if not self.graph.is_composite(cur_type):
            return f"{indent}{label}{self._render_arguments(graphql_field, context)}"

        edge = (parent_type.name, field_name)
        if (
            not self.config.include_cross_references and edge in context.cross_references
        ) or effective_depth > self.config.depth_limit:
            return ""
        if not from_union:
            context.cross_references.add(edge)

        mark = context.arguments.mark()
        arguments = self._render_arguments(graphql_field, context)
        children = self.synthesize_children(cur_type, context, depth + 1, from_union)  # type: ignore[arg-type]
        if not children:
            context.arguments.restore(mark)
            return ""
        return f"{indent}{label}{arguments}{{\n{children}\n{indent}}}"

    def synthesize_children(
        self,
        parent_type: CompositeType,
        context: SynthesisContext,
        depth: int,
        from_union: bool,
        aliases: dict[str, str] | None = None,
    ) -> str:
        aliases = aliases or {}
        selections = (
            self.synthesize(name, parent_type, context, depth, from_union, aliases.get(name))
            for name in self.graph.selectable_fields(parent_type, self.config.include_deprecated_fields)
        )
        return "\n".join(selection for selection in selections if selection)

    def expand_union(self, union_type: GraphQLUnionType, context: SynthesisContext, depth: int) -> str:
        """
        Render one inline fragment per member of ``union_type``.

        Every member is expanded independently at ``depth + 2`` and exempt from cross-reference
        recording, so the same edge may appear once per member. Members whose selection is empty
        are left out.

        Fragments share one response namespace: a member field whose name was already used by an
        earlier member with a different type is aliased as ``<Member>_<field>``.
        """
        fragment_indent = INDENT * (depth + 1)
        fragments = ""
        response_types: dict[str, str] = {}
        for member in self.graph.union_members(union_type):
            aliases = self._member_aliases(member, response_types)
            block = self.synthesize_children(
                member, context, depth + UNION_DEPTH_OFFSET, from_union=True, aliases=aliases
            )
            if block:
                fragments += f"{fragment_indent}... on {member.name} {{\n{block}\n{fragment_indent}}}\n"
        return fragments

    @staticmethod
    def _member_aliases(member: GraphQLObjectType, response_types: dict[str, str]) -> dict[str, str]:
        """Pick aliases for the fields of ``member`` that clash with a differently typed response name."""
        aliases: dict[str, str] = {}
        for name, graphql_field in member.fields.items():
            type_text = str(graphql_field.type)
            response_name = name
            if response_types.setdefault(name, type_text) != type_text:
                response_name = f"{member.name}_{name}"
                count = 0
                while response_types.setdefault(response_name, type_text) != type_text:
                    count += 1
                    response_name = f"{member.name}_{name}{count}"
                aliases[name] = response_name
        return aliases

    @staticmethod
    def _render_arguments(graphql_field: GraphQLField, context: SynthesisContext) -> str:
        if not graphql_field.args:
            return ""
        definitions = [ArgumentDefinition.from_graphql(name, arg) for name, arg in graphql_field.args.items()]
        bindings = collect_field_arguments(definitions, context.arguments)
        return f"({render_argument_clause(bindings)})"
