from collections.abc import Iterator
from dataclasses import dataclass, field

from graphql import GraphQLObjectType, GraphQLSchema, OperationType

from gqlg import log
from gqlg.config import GeneratorConfig
from gqlg.generator.arguments import ArgumentDefinition, ArgumentDictionary, render_variable_signature
from gqlg.generator.synthesizer import QuerySynthesizer, SynthesisContext
from gqlg.utils.graphql_type import OPERATION_CATEGORIES, OPERATION_ORDER, TypeGraph


@dataclass(frozen=True)
class OperationDocument:
    operation: str
    category: str
    name: str
    text: str
    variables: dict[str, ArgumentDefinition] = field(default_factory=dict)
    has_arguments: bool = False

    @property
    def variable_types(self) -> dict[str, str]:
        return {variable_name: argument.type_text for variable_name, argument in self.variables.items()}


def assemble_document(operation: str, field_name: str, body: str, arguments: ArgumentDictionary) -> str:
    """
    Wrap a synthesized root field selection into a complete operation document.

    Args:
        operation: Operation keyword (query, mutation or subscription)
        field_name: Root field name, used as operation name
        body: Selection text of the root field
        arguments: Every variable bound while synthesizing ``body``

    Returns:
        The operation document text
    """
    signature = render_variable_signature(arguments)
    signature = f"({signature})" if signature else ""
    return f"{operation} {field_name}{signature}{{\n{body}\n}}"


class OperationGenerator:
    """Generates one operation document per root operation field of a schema."""

    def __init__(self, schema: GraphQLSchema, config: GeneratorConfig | None = None) -> None:
        self.graph = TypeGraph(schema)
        self.config = config or GeneratorConfig()
        self.synthesizer = QuerySynthesizer(self.graph, self.config)

    def generate(self, root_type: str | None = None) -> list[OperationDocument]:
        """
        Generate documents for every root operation type, or only for ``root_type``.

        Args:
            root_type: Optional name of the single type whose fields should be generated

        Returns:
            The generated documents, mutations first, then queries, then subscriptions
        """
        if root_type is not None:
            return list(self.generate_for_type(self._resolve_root_type(root_type)))

        documents: list[OperationDocument] = []
        for operation in OPERATION_ORDER:
            operation_type = self.graph.root_type(operation)
            if operation_type is None:
                log.warning(f"No {operation.value} type found in your schema")
                continue
            documents.extend(self.generate_for_type(operation_type))

        log.info(f"Generated {len(documents)} operation document(s)")
        return documents

    def generate_for_type(self, operation_type: GraphQLObjectType) -> Iterator[OperationDocument]:
        operation, category = self._classify(operation_type)
        for field_name, graphql_field in operation_type.fields.items():
            if not self.config.include_deprecated_fields and graphql_field.deprecation_reason is not None:
                log.debug(f"Skipping deprecated field '{operation_type.name}.{field_name}'")
                continue
            document = self._generate_field(operation_type, field_name, operation, category)
            if document is not None:
                yield document

    def generate_field(self, operation_type: GraphQLObjectType | str, field_name: str) -> OperationDocument | None:
        """
        Generate the document of a single root field.

        Args:
            operation_type: The root type, or its name
            field_name: Name of the field on the root type

        Returns:
            The document, or None if depth or cross-reference pruning emptied its selection
        """
        if isinstance(operation_type, str):
            operation_type = self._resolve_root_type(operation_type)
        self.graph.get_field(operation_type, field_name)
        operation, category = self._classify(operation_type)
        return self._generate_field(operation_type, field_name, operation, category)

    def _generate_field(
        self, operation_type: GraphQLObjectType, field_name: str, operation: str, category: str
    ) -> OperationDocument | None:
        context = SynthesisContext()
        body = self.synthesizer.synthesize(field_name, operation_type, context)
        if not body:
            log.debug(f"Selection of '{operation_type.name}.{field_name}' was pruned entirely, skipping it")
            return None

        return OperationDocument(
            operation=operation,
            category=category,
            name=field_name,
            text=assemble_document(operation, field_name, body, context.arguments),
            variables=dict(context.arguments.items()),
            has_arguments=bool(operation_type.fields[field_name].args),
        )

    def _resolve_root_type(self, type_name: str) -> GraphQLObjectType:
        named_type = self.graph.get_type(type_name)
        if not isinstance(named_type, GraphQLObjectType):
            raise ValueError(f"Type '{type_name}' is not an object type")
        return named_type

    def _classify(self, operation_type: GraphQLObjectType) -> tuple[str, str]:
        operation: OperationType | None = self.graph.operation_for(operation_type)
        if operation is None:
            fallback = operation_type.name.lower()
            log.warning(
                f"Type '{operation_type.name}' is not a query, mutation or subscription root type; "
                f"using '{fallback}' as operation keyword"
            )
            return fallback, fallback
        return operation.value, OPERATION_CATEGORIES[operation]


def generate_operations(
    schema: GraphQLSchema, config: GeneratorConfig | None = None, root_type: str | None = None
) -> list[OperationDocument]:
    """Generate an operation document for every root operation field of ``schema``."""
    return OperationGenerator(schema, config).generate(root_type)
