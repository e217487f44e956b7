from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from ariadne import gql
from graphql import (
    DocumentNode,
    GraphQLSchema,
    TypeInfo,
    TypeInfoVisitor,
    Visitor,
    build_schema,
    get_named_type,
    visit,
)
from hypothesis import strategies as st
from hypothesis.strategies import composite

from gqlg.config import GeneratorConfig
from gqlg.generator import OperationGenerator
from gqlg.utils.graphql_type import is_composite_type

SCALAR_TYPES = ["String", "Int", "ID", "Boolean"]
ARGUMENT_TYPES = {"id": "ID!", "limit": "Int", "after": "String", "filter": "[String!]"}


class TestSchemaData:
    TESTS_DATA_DIR: Path = Path(__file__).parent / "data"
    USERS: Path = TESTS_DATA_DIR / "users.graphql"
    SEARCH: Path = TESTS_DATA_DIR / "search.graphql"
    BLOG: Path = TESTS_DATA_DIR / "blog.graphql"
    SPLIT_DIR: Path = TESTS_DATA_DIR / "split"
    INVALID_SYNTAX: Path = TESTS_DATA_DIR / "invalid_syntax.graphql"
    UNKNOWN_TYPE: Path = TESTS_DATA_DIR / "unknown_type.graphql"
    MUTATION_ONLY: Path = TESTS_DATA_DIR / "mutation_only.graphql"


@pytest.fixture
def generator_for() -> Callable[..., OperationGenerator]:
    """Build an OperationGenerator from SDL text and generator options."""

    def _generator_for(schema_str: str, **options: Any) -> OperationGenerator:
        return OperationGenerator(build_schema(schema_str), GeneratorConfig(**options))

    return _generator_for


def composite_edges(schema: GraphQLSchema, document: DocumentNode) -> list[tuple[str, str]]:
    """Every (parent type, field) pair outside inline fragments whose field returns an object or interface."""
    type_info = TypeInfo(schema)
    edges: list[tuple[str, str]] = []

    class EdgeCollector(Visitor):
        fragment_depth = 0

        def enter_inline_fragment(self, *_: Any) -> None:
            self.fragment_depth += 1

        def leave_inline_fragment(self, *_: Any) -> None:
            self.fragment_depth -= 1

        def enter_field(self, node: Any, *_: Any) -> None:
            if self.fragment_depth:
                return
            parent_type = type_info.get_parent_type()
            field_type = type_info.get_type()
            if parent_type is not None and field_type is not None and is_composite_type(get_named_type(field_type)):
                edges.append((parent_type.name, node.name.value))

    visit(document, TypeInfoVisitor(type_info, EdgeCollector()))
    return edges


def deprecated_selections(schema: GraphQLSchema, document: DocumentNode) -> list[str]:
    """Every selected field of ``document`` that the schema marks as deprecated, as ``Parent.field``."""
    type_info = TypeInfo(schema)
    selections: list[str] = []

    class DeprecationCollector(Visitor):
        def enter_field(self, node: Any, *_: Any) -> None:
            parent_type = type_info.get_parent_type()
            field_def = type_info.get_field_def()
            if parent_type is not None and field_def is not None and field_def.deprecation_reason is not None:
                selections.append(f"{parent_type.name}.{node.name.value}")

    visit(document, TypeInfoVisitor(type_info, DeprecationCollector()))
    return selections


def max_indent_level(text: str) -> int:
    return max((len(line) - len(line.lstrip(" "))) // 4 for line in text.splitlines())


@composite
def cyclic_schema_strategy(draw: Callable[[st.SearchStrategy[Any]], Any]) -> str:
    """Generate a random, possibly self- and mutually-referential schema with unions and deprecated fields.

    e.g.
    type Node0 { field0(limit: Int): [Union0] field1: String @deprecated(reason: "old") }
    union Union0 = Node0 | Node1
    """
    num_types = draw(st.integers(min_value=1, max_value=4))
    type_names = [f"Node{i}" for i in range(num_types)]
    num_unions = draw(st.integers(min_value=0, max_value=2))
    unions = {
        f"Union{i}": draw(st.lists(st.sampled_from(type_names), unique=True, min_size=1, max_size=3))
        for i in range(num_unions)
    }
    return_types = st.sampled_from(SCALAR_TYPES + type_names + list(unions))

    def fields_str(min_fields: int, max_fields: int) -> str:
        num_fields = draw(st.integers(min_value=min_fields, max_value=max_fields))
        fields = []
        for index in range(num_fields):
            return_type = draw(return_types)
            if draw(st.booleans()):
                return_type = f"[{return_type}]"
            arguments = draw(st.lists(st.sampled_from(sorted(ARGUMENT_TYPES)), unique=True, max_size=2))
            arguments_str = ", ".join(f"{name}: {ARGUMENT_TYPES[name]}" for name in arguments)
            deprecation = ' @deprecated(reason: "old")' if draw(st.integers(0, 4)) == 0 else ""
            fields.append(f"field{index}{f'({arguments_str})' if arguments_str else ''}: {return_type}{deprecation}")
        return "\n".join(fields)

    types = [f"type {name} {{\n{fields_str(1, 3)}\n}}" for name in type_names]
    types += [f"union {name} = {' | '.join(members)}" for name, members in unions.items()]
    return gql(f"type Query {{\n{fields_str(1, 3)}\n}}\n\n" + "\n\n".join(types))
