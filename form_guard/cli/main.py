"""
Main CLI entry point using Typer.

This module defines the command-line interface for FormGuard using Typer.
It provides three commands: validate, resolve, and types.
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from form_guard.utils.logging import setup_logging

from .commands import resolve_command, types_command, validate_command
from .display import print_error


# Create Typer app
app = typer.Typer(
    name="form-guard",
    help="FormGuard - Verify and resolve JSON form schemas",
    add_completion=False,
    rich_markup_mode="rich"
)


@app.command("validate")
def validate(
    schema: Annotated[
        Path,
        typer.Option("--schema", "-s", help="Path to form schema JSON file", exists=True, file_okay=True, dir_okay=False)
    ],
    show_schema: Annotated[
        bool,
        typer.Option("--show-schema", help="Display the schema")
    ] = False,
) -> None:
    """
    Verify a form schema and report the first error.

    Example:
        form-guard validate --schema profile.json
    """
    try:
        validate_command(schema_path=schema, show_schema=show_schema)
    except Exception as e:
        print_error(f"Command failed: {e}")
        raise typer.Exit(code=1)


@app.command("resolve")
def resolve(
    schema: Annotated[
        Path,
        typer.Option("--schema", "-s", help="Path to form schema JSON file", exists=True, file_okay=True, dir_okay=False)
    ],
    initial: Annotated[
        Optional[Path],
        typer.Option("--initial", "-i", help="JSON object of initial values overriding schema defaults", exists=True, file_okay=True, dir_okay=False)
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Path to save the resolved result as JSON")
    ] = None,
    columns: Annotated[
        Optional[int],
        typer.Option("--columns", "-c", min=1, help="Columns to use when the schema layout sets none")
    ] = None,
    tree: Annotated[
        bool,
        typer.Option("--tree/--no-tree", help="Display the resolved field tree")
    ] = True,
) -> None:
    """
    Resolve a form schema into field descriptors and initial values.

    Example:
        form-guard resolve \\
            --schema profile.json \\
            --initial values.json \\
            --output resolved.json
    """
    try:
        resolve_command(
            schema_path=schema,
            initial_path=initial,
            output_path=output,
            columns=columns,
            show_tree=tree,
        )
    except Exception as e:
        print_error(f"Command failed: {e}")
        raise typer.Exit(code=1)


@app.command("types")
def types() -> None:
    """List the field types a schema may use."""
    types_command()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option("--version", "-v", help="Show version and exit")
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging")
    ] = False,
) -> None:
    """
    FormGuard - Verify and resolve JSON form schemas.

    Checks a schema against the field grammar and shows what a renderer
    would receive.
    """
    if version:
        from form_guard import __version__
        typer.echo(f"FormGuard version {__version__}")
        raise typer.Exit()

    setup_logging(level=logging.DEBUG if verbose else logging.WARNING)

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def cli() -> None:
    """CLI entry point for poetry script."""
    app()


if __name__ == "__main__":
    cli()
