from graphql import (
    GraphQLField,
    GraphQLInterfaceType,
    GraphQLNamedType,
    GraphQLObjectType,
    GraphQLSchema,
    GraphQLUnionType,
    OperationType,
    get_named_type,
    is_interface_type,
    is_object_type,
    is_union_type,
)

CompositeType = GraphQLObjectType | GraphQLInterfaceType

OPERATION_CATEGORIES: dict[OperationType, str] = {
    OperationType.QUERY: "queries",
    OperationType.MUTATION: "mutations",
    OperationType.SUBSCRIPTION: "subscriptions",
}

# Order in which root categories are generated
OPERATION_ORDER = (OperationType.MUTATION, OperationType.QUERY, OperationType.SUBSCRIPTION)


def is_composite_type(type_: GraphQLNamedType) -> bool:
    """Whether the type exposes sub-fields of its own (object or interface)."""
    return is_object_type(type_) or is_interface_type(type_)


class TypeGraph:
    """Read-only lookup over the named types of a schema and the fields they declare."""

    def __init__(self, schema: GraphQLSchema) -> None:
        self.schema = schema

    def get_type(self, type_name: str) -> GraphQLNamedType:
        type_ = self.schema.get_type(type_name)
        if type_ is None:
            raise ValueError(f"Type '{type_name}' not found in schema")
        return type_

    def get_field(self, parent_type: CompositeType, field_name: str) -> GraphQLField:
        try:
            return parent_type.fields[field_name]
        except KeyError:
            raise ValueError(f"Field '{field_name}' not found on type '{parent_type.name}'") from None

    @staticmethod
    def field_type(field: GraphQLField) -> GraphQLNamedType:
        """The declared return type of a field with list and non-null wrappers stripped."""
        return get_named_type(field.type)

    @staticmethod
    def is_composite(type_: GraphQLNamedType) -> bool:
        return is_composite_type(type_)

    @staticmethod
    def is_union(type_: GraphQLNamedType) -> bool:
        return is_union_type(type_)

    @staticmethod
    def union_members(union_type: GraphQLUnionType) -> tuple[GraphQLObjectType, ...]:
        return tuple(union_type.types)

    @staticmethod
    def selectable_fields(type_: CompositeType, include_deprecated: bool) -> list[str]:
        """Names of the fields of ``type_`` in declaration order, optionally without deprecated ones."""
        return [
            name
            for name, field in type_.fields.items()
            if include_deprecated or field.deprecation_reason is None
        ]

    def root_type(self, operation: OperationType) -> GraphQLObjectType | None:
        """The object type the schema designates as root for the given operation."""
        return {
            OperationType.QUERY: self.schema.query_type,
            OperationType.MUTATION: self.schema.mutation_type,
            OperationType.SUBSCRIPTION: self.schema.subscription_type,
        }[operation]

    def operation_for(self, type_: GraphQLNamedType) -> OperationType | None:
        """Identify which root slot ``type_`` occupies, comparing by identity rather than by name."""
        for operation in OPERATION_ORDER:
            if self.root_type(operation) is type_:
                return operation
        return None
