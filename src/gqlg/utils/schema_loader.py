from pathlib import Path

from ariadne import load_schema_from_path
from ariadne.exceptions import GraphQLFileSyntaxError
from graphql import GraphQLError, GraphQLSchema, build_schema, print_schema, validate_schema

from gqlg import log

GRAPHQL_FILE_SUFFIXES = (".graphql", ".gql")


class SchemaBuildError(Exception):
    """Raised when the schema text cannot be parsed, built or validated."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or [message]


def resolve_graphql_files(paths: list[Path]) -> list[Path]:
    """Resolve a list of paths (files and directories) into a flat list of unique GraphQL files.

    Args:
        paths: List of file or directory paths

    Returns:
        Flat list of unique GraphQL file paths (deduplicated and sorted)
    """
    resolved_files: set[Path] = set()

    for path in paths:
        if path.is_file():
            resolved_files.add(path)
        elif path.is_dir():
            for file in path.rglob("*"):
                if file.is_file() and file.suffix in GRAPHQL_FILE_SUFFIXES:
                    resolved_files.add(file)

    return sorted(resolved_files)


def build_schema_str(graphql_schema_paths: list[Path]) -> str:
    """Concatenate the SDL of every given GraphQL file.

    Raises:
        SchemaBuildError: If one of the files is not syntactically valid GraphQL
    """
    schema_str = ""
    for graphql_file in graphql_schema_paths:
        try:
            content = load_schema_from_path(graphql_file)
        except GraphQLFileSyntaxError as e:
            raise SchemaBuildError(f"Syntax error in {graphql_file}", [str(e)]) from e
        schema_str += content + "\n"

    return schema_str


def build_schema_from_str(schema_str: str, assume_valid: bool = False) -> GraphQLSchema:
    """Build a GraphQL schema from SDL text.

    With ``assume_valid`` the SDL and the resulting schema are trusted as they are; the
    generator's behaviour on a schema that is in fact malformed is undefined.

    Args:
        schema_str: GraphQL SDL
        assume_valid: Skip SDL and schema validation

    Returns:
        The built GraphQLSchema

    Raises:
        SchemaBuildError: If the SDL cannot be parsed or the schema is invalid
    """
    try:
        schema = build_schema(schema_str, assume_valid=assume_valid, assume_valid_sdl=assume_valid)
    except GraphQLError as e:
        raise SchemaBuildError(f"Invalid schema: {e.message}", [e.message]) from e
    except TypeError as e:
        raise SchemaBuildError(f"Invalid schema: {e}") from e

    if not assume_valid:
        spec_errors = validate_schema(schema)
        if spec_errors:
            messages = [error.message for error in spec_errors]
            raise SchemaBuildError(f"Schema validation failed with {len(messages)} error(s)", messages)

    log.info("Successfully built the given GraphQL schema string.")
    log.debug(f"Read schema: \n{print_schema(schema)}")
    return schema


def load_schema(graphql_schema_paths: Path | list[Path], assume_valid: bool = False) -> GraphQLSchema:
    """Load and build a GraphQL schema from files or folders."""
    if isinstance(graphql_schema_paths, Path):
        graphql_schema_paths = [graphql_schema_paths]

    files = resolve_graphql_files(graphql_schema_paths)
    if not files:
        raise SchemaBuildError(f"No GraphQL files found in {[str(path) for path in graphql_schema_paths]}")

    return build_schema_from_str(build_schema_str(files), assume_valid=assume_valid)
