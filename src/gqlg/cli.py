import logging
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import rich_click as click
import yaml
from graphql import GraphQLSchema
from pydantic import ValidationError
from rich.markup import escape
from rich.traceback import install

from gqlg import __version__, log
from gqlg.config import GeneratorConfig, load_generator_config
from gqlg.generator import OperationGenerator
from gqlg.utils.schema_loader import SchemaBuildError, load_schema, resolve_graphql_files
from gqlg.writer import OperationWriter


class PathResolverOption(click.Option):
    def process_value(self, ctx: click.Context, value: Any) -> list[Path] | None:
        value = super().process_value(ctx, value)
        if not value:
            return None
        paths = set(value)
        return resolve_graphql_files(list(paths))


schema_option = click.option(
    "--schema",
    "-s",
    "schemas",
    type=click.Path(exists=True, path_type=Path),
    cls=PathResolverOption,
    required=True,
    multiple=True,
    help="The GraphQL schema file or directory containing schema files. Can be specified multiple times.",
)


root_type_option = click.option(
    "--root-type",
    "-r",
    type=str,
    help="Only generate operations for the fields of this type",
)


def generator_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by every command that synthesizes documents; unset options keep the config value."""
    options = [
        click.option(
            "--config",
            "config_path",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            help="YAML file containing generator configuration",
        ),
        click.option(
            "--depth-limit",
            type=click.IntRange(min=1),
            default=None,
            help="Maximum nesting depth of generated selections [default: 100]",
        ),
        click.option(
            "--assume-valid",
            is_flag=True,
            default=False,
            help="Skip schema validation; output for a malformed schema is undefined",
        ),
        click.option(
            "--include-deprecated-fields",
            "-C",
            is_flag=True,
            default=False,
            help="Include fields marked as deprecated (excluded by default)",
        ),
        click.option(
            "--include-cross-references",
            "-R",
            is_flag=True,
            default=False,
            help="Revisit (type, field) edges already added to the document (excluded by default)",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def resolve_config(config_path: Path | None, **overrides: Any) -> GeneratorConfig:
    try:
        return load_generator_config(config_path).with_overrides(**overrides)
    except (OSError, yaml.YAMLError, TypeError, ValidationError) as e:
        raise click.ClickException(f"Invalid generator configuration: {e}") from e


def load_schema_or_exit(schemas: list[Path] | None, assume_valid: bool) -> GraphQLSchema:
    try:
        return load_schema(schemas or [], assume_valid=assume_valid)
    except SchemaBuildError as e:
        log.error(f"Could not build schema: {e}")
        for error in e.errors:
            log.error(f"  - {error}")
        sys.exit(1)


@click.group(context_settings={"auto_envvar_prefix": "gqlg"})
@click.option(
    "-l",
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    default="INFO",
    help="Log level",
    show_default=True,
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Log file",
)
@click.version_option(__version__)
def cli(log_level: str, log_file: Path | None) -> None:
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w")
        file_handler.setFormatter(logging.Formatter("%(asctime)s:%(levelname)s:%(message)s"))
        log.addHandler(file_handler)

    log.setLevel(log_level.upper())
    if log_level.upper() == "DEBUG":
        _ = install(show_locals=True)


@cli.command
@schema_option
@click.option(
    "--output",
    "-o",
    type=click.Path(file_okay=False, writable=True, path_type=Path),
    required=True,
    help="Directory to store the generated operations in",
)
@click.option("--ext", type=str, default=None, help="File extension of generated documents [default: gql]")
@click.option(
    "--clean",
    is_flag=True,
    default=False,
    help="Remove the output directory before writing. Without it, documents from earlier runs are left in place",
)
@root_type_option
@generator_options
def generate(
    schemas: list[Path] | None,
    output: Path,
    ext: str | None,
    clean: bool,
    root_type: str | None,
    config_path: Path | None,
    depth_limit: int | None,
    assume_valid: bool,
    include_deprecated_fields: bool,
    include_cross_references: bool,
) -> None:
    """Generate a query, mutation or subscription document for every root field of a schema."""
    config = resolve_config(
        config_path,
        depth_limit=depth_limit,
        assume_valid=assume_valid or None,
        include_deprecated_fields=include_deprecated_fields or None,
        include_cross_references=include_cross_references or None,
        file_extension=ext,
    )
    schema = load_schema_or_exit(schemas, config.assume_valid)

    try:
        documents = OperationGenerator(schema, config).generate(root_type)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    try:
        written = OperationWriter(output, config.file_extension, clean=clean).write(documents)
    except OSError as e:
        log.error(f"File I/O error: {e}")
        sys.exit(1)

    log.success(f"Generated {len(written)} operation(s) in {output}")


@cli.command
@schema_option
@click.argument("field_name", type=str)
@click.option(
    "--root-type",
    "-r",
    type=str,
    default=None,
    help="Type declaring the field [default: the schema's query type]",
)
@generator_options
def show(
    schemas: list[Path] | None,
    field_name: str,
    root_type: str | None,
    config_path: Path | None,
    depth_limit: int | None,
    assume_valid: bool,
    include_deprecated_fields: bool,
    include_cross_references: bool,
) -> None:
    """Print the generated document of a single root field."""
    config = resolve_config(
        config_path,
        depth_limit=depth_limit,
        assume_valid=assume_valid or None,
        include_deprecated_fields=include_deprecated_fields or None,
        include_cross_references=include_cross_references or None,
    )
    schema = load_schema_or_exit(schemas, config.assume_valid)
    generator = OperationGenerator(schema, config)

    operation_type = root_type if root_type else schema.query_type
    if operation_type is None:
        raise click.ClickException("The schema has no query type, pass --root-type")

    try:
        document = generator.generate_field(operation_type, field_name)
    except ValueError as e:
        raise click.ClickException(str(e)) from e

    if document is None:
        log.warning(f"Every selection of '{field_name}' was pruned, nothing to show")
        log.hint("Raise --depth-limit or pass --include-cross-references to keep more of it")
        return

    log.rule(f"{document.operation} {document.name}")
    click.echo(document.text)
    for variable_name, type_text in document.variable_types.items():
        log.key_value(f"${variable_name}", escape(type_text))


if __name__ == "__main__":
    cli()
