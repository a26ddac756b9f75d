"""optionfields Command Line Interface.

Entry point for the optionfields CLI tool.
"""

import logging
from pathlib import Path

import typer
from pydantic import ValidationError
from sqlalchemy.schema import CreateTable

from optionfields import __version__
from optionfields.contracts import BackendKind, ConfigurationError
from optionfields.core.assembly import AssembledSchema, SchemaAssembler
from optionfields.core.canonical import CANONICAL_VERSION
from optionfields.core.config import SchemaSettings, load_settings
from optionfields.core.database import SchemaDB
from optionfields.core.logging import configure_logging
from optionfields.plugins.manager import PluginManager

app = typer.Typer(
    name="optionfields",
    help="optionfields: field-type plugins with pluggable storage bindings.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"optionfields version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log assembly details to stderr.",
    ),
    json_logs: bool = typer.Option(
        False,
        "--json-logs",
        help="Emit logs as JSON lines.",
    ),
) -> None:
    """optionfields: field-type plugins with pluggable storage bindings."""
    configure_logging(
        json_output=json_logs,
        level=logging.DEBUG if verbose else logging.WARNING,
    )


def _load(settings: str) -> SchemaSettings:
    """Load settings, reporting errors and exiting with status 1."""
    settings_path = Path(settings).expanduser()
    try:
        return load_settings(settings_path)
    except FileNotFoundError:
        typer.echo(f"Error: Schema file not found: {settings}", err=True)
        raise typer.Exit(1) from None
    except ValidationError as e:
        typer.echo("Configuration errors:", err=True)
        for error in e.errors():
            loc = ".".join(str(x) for x in error["loc"])
            typer.echo(f"  - {loc}: {error['msg']}", err=True)
        raise typer.Exit(1) from None


def _assemble(config: SchemaSettings) -> AssembledSchema:
    """Assemble the schema, reporting configuration errors."""
    manager = PluginManager()
    manager.register_builtin_plugins()
    manager.load_entrypoints()
    try:
        return SchemaAssembler(config, manager).assemble()
    except ConfigurationError as e:
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(1) from None


@app.command()
def validate(
    settings: str = typer.Option(
        ...,
        "--settings",
        "-s",
        help="Path to schema definition YAML file.",
    ),
) -> None:
    """Validate a schema definition without emitting anything."""
    config = _load(settings)
    schema = _assemble(config)

    typer.echo(f"Schema valid: {Path(settings).name}")
    typer.echo(f"  Backend: {schema.backend.value}")
    for key, assembled in schema.lists.items():
        typer.echo(f"  {key}: {len(assembled.fields)} field(s)")
    typer.echo(f"  Fingerprint: {schema.fingerprint()} ({CANONICAL_VERSION})")


@app.command()
def schema(
    settings: str = typer.Option(
        ...,
        "--settings",
        "-s",
        help="Path to schema definition YAML file.",
    ),
) -> None:
    """Print the schema type declarations."""
    config = _load(settings)
    typer.echo(_assemble(config).sdl(), nl=False)


@app.command()
def ddl(
    settings: str = typer.Option(
        ...,
        "--settings",
        "-s",
        help="Path to schema definition YAML file.",
    ),
    create: bool = typer.Option(
        False,
        "--create",
        help="Create the tables in the configured database.",
    ),
    url: str | None = typer.Option(
        None,
        "--url",
        help="Database URL, overriding database.url from the settings.",
    ),
) -> None:
    """Print CREATE TABLE statements for a relational schema."""
    config = _load(settings)
    if config.backend is not BackendKind.RELATIONAL:
        typer.echo(
            f"Error: ddl requires the relational backend (got {config.backend.value}).",
            err=True,
        )
        raise typer.Exit(1)

    assembled = _assemble(config)
    assert assembled.metadata is not None  # relational backend always has metadata

    database_url = url or config.database.url
    with SchemaDB(database_url, assembled.metadata) as db:
        for table in assembled.metadata.sorted_tables:
            statement = CreateTable(table).compile(dialect=db.engine.dialect)
            typer.echo(str(statement).strip() + ";")
        if create:
            db.create_tables()
            typer.echo(f"Created {len(assembled.metadata.tables)} table(s) in {database_url}")


@app.command()
def plugins() -> None:
    """List registered field types and their backends."""
    manager = PluginManager()
    manager.register_builtin_plugins()
    manager.load_entrypoints()

    typer.echo("\nFIELD TYPES:")
    for field_type in manager.get_field_types():
        backends = ", ".join(sorted(b.value for b in field_type.adapters))
        typer.echo(f"  {field_type.name:12} - {field_type.description} [{backends}]")
    typer.echo()  # Final newline


if __name__ == "__main__":
    app()
