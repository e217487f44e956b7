"""Binding of field arguments to document-wide unique variable names."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from graphql import GraphQLArgument


@dataclass(frozen=True)
class ArgumentDefinition:
    name: str
    type_text: str

    @classmethod
    def from_graphql(cls, name: str, argument: GraphQLArgument) -> "ArgumentDefinition":
        return cls(name=name, type_text=str(argument.type))


@dataclass(frozen=True)
class ArgumentMark:
    size: int
    duplicate_counts: dict[str, int]


@dataclass
class ArgumentDictionary:
    """
    Ordered mapping of variable name to argument definition for one operation document.

    ``duplicate_counts`` records, per literal argument name, how many collisions have been
    seen, so that the next collision deterministically gets the next integer suffix.
    """

    bindings: dict[str, ArgumentDefinition] = field(default_factory=dict)
    duplicate_counts: dict[str, int] = field(default_factory=dict)

    def __contains__(self, variable_name: object) -> bool:
        return variable_name in self.bindings

    def __len__(self) -> int:
        return len(self.bindings)

    def items(self) -> Iterable[tuple[str, ArgumentDefinition]]:
        return self.bindings.items()

    def mark(self) -> ArgumentMark:
        return ArgumentMark(len(self.bindings), dict(self.duplicate_counts))

    def restore(self, mark: ArgumentMark) -> None:
        """Withdraw every binding made after ``mark`` was taken."""
        for variable_name in list(self.bindings)[mark.size :]:
            del self.bindings[variable_name]
        self.duplicate_counts = dict(mark.duplicate_counts)

    def bind(self, argument: ArgumentDefinition) -> str:
        """Bind an argument occurrence and return the variable name it received.

        The first occurrence of a name keeps it bare. The second is bound as ``name1``, the
        third as ``name2`` and so on. A suffixed candidate that is already taken (because a
        field literally declares e.g. ``id1``) is skipped.
        """
        name = argument.name
        if name not in self.duplicate_counts and name not in self.bindings:
            self.bindings[name] = argument
            return name

        count = self.duplicate_counts.get(name, 0) + 1
        while f"{name}{count}" in self.bindings:
            count += 1
        self.duplicate_counts[name] = count

        variable_name = f"{name}{count}"
        self.bindings[variable_name] = argument
        return variable_name


def collect_field_arguments(
    arguments: Iterable[ArgumentDefinition], dictionary: ArgumentDictionary
) -> dict[str, ArgumentDefinition]:
    """
    Bind every argument of one field into the shared dictionary.

    Args:
        arguments: The field's arguments in declaration order
        dictionary: The document-wide argument dictionary, updated in place

    Returns:
        The bindings made for this field, variable name to argument definition
    """
    return {dictionary.bind(argument): argument for argument in arguments}


def render_argument_clause(bindings: dict[str, ArgumentDefinition]) -> str:
    """Render ``arg: $var, ...`` for the arguments of one field."""
    return ", ".join(f"{argument.name}: ${variable_name}" for variable_name, argument in bindings.items())


def render_variable_signature(dictionary: ArgumentDictionary) -> str:
    """Render ``$var: Type, ...`` for every bound variable, in binding order."""
    return ", ".join(f"${variable_name}: {argument.type_text}" for variable_name, argument in dictionary.items())
