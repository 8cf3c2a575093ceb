"""Main CLI entry point for recordlite."""

import typer
from typing import Optional
from pathlib import Path
from rich.markup import escape
from rich.table import Table as RichTable

from recordlite.cli.utils import console, fail, get_config, read_view_def
from recordlite.compiler import compile_view_def, index_name, validate_view_def
from recordlite.exceptions import CompilationError, InvalidSchemaError

app = typer.Typer(
    name="recordlite",
    help="recordlite - compile schema-on-read view descriptions into SQLite DDL",
    add_completion=False,
    invoke_without_command=True,
)


class State:
    verbose: bool = False


state = State()


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Enable debug logging on stderr"
    ),
):
    """
    recordlite - compile schema-on-read view descriptions into SQLite DDL
    """
    state.verbose = verbose
    if ctx.invoked_subcommand is None:
        # No subcommand was invoked, show help
        print(ctx.get_help())
        raise typer.Exit(0)


@app.command(name="compile")
def compile_command(
    path: Optional[Path] = typer.Argument(
        None, help="JSON view description (default: read stdin)"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the SQL script to a file"
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Require plain SQL identifiers for names"
    ),
    skip_triggers: bool = typer.Option(
        False, "--skip-triggers", help="Do not generate triggers"
    ),
    skip_indices: bool = typer.Option(
        False, "--skip-indices", help="Do not generate indices"
    ),
    unsafe_drop_orphan_indices: bool = typer.Option(
        False,
        "--unsafe-drop-orphan-indices",
        help="Drop previously generated indices missing from the description",
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to recordlite.toml"
    ),
):
    """Compile a view description into a SQL script.

    Examples:
        recordlite compile events.json
        cat events.json | recordlite compile --skip-triggers > events.sql
    """
    config = get_config(config_path, verbose=state.verbose)
    view = config.apply(read_view_def(path))
    view = view.model_copy(
        update={
            "skip_triggers": view.skip_triggers or skip_triggers,
            "skip_indices": view.skip_indices or skip_indices,
            "unsafe_drop_orphan_indices": view.unsafe_drop_orphan_indices
            or unsafe_drop_orphan_indices,
        }
    )

    try:
        statement = compile_view_def(
            view, strict=strict or config.settings.strict_names
        )
    except (InvalidSchemaError, CompilationError) as e:
        fail(f"Failed compiling table: {e}")

    if output:
        try:
            output.write_text(statement + "\n")
        except OSError as e:
            fail(f"Failed writing '{output}': {e}")
        return

    typer.echo(statement)


@app.command()
def indices(
    path: Optional[Path] = typer.Argument(
        None, help="JSON view description (default: read stdin)"
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to recordlite.toml"
    ),
):
    """Show the index names derived for each indexed column."""
    config = get_config(config_path, verbose=state.verbose)
    view = read_view_def(path)
    try:
        validate_view_def(view, strict=config.settings.strict_names)
    except InvalidSchemaError as e:
        fail(f"Invalid view description: {e}")
    columns = list(view.indexed_columns())

    if not columns:
        console.print("[yellow]No indexed columns[/yellow]")
        return

    table = RichTable(title=f"Indices on {view.table_name}", title_justify="left")
    table.add_column("Column", style="cyan")
    table.add_column("Expression", style="green")
    table.add_column("Index", style="yellow", overflow="fold")

    for column in columns:
        try:
            name = index_name(column)
        except UnicodeError as e:
            fail(f"Cannot derive index name for column '{column.name}': {e}")
        table.add_row(escape(column.name), escape(column.expr), name)

    console.print(table)


@app.command()
def version():
    """Show recordlite version."""
    from recordlite import __version__

    typer.echo(f"recordlite version {__version__}")


if __name__ == "__main__":
    app()
