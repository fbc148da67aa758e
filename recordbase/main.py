from __future__ import annotations

import sys
from enum import Enum

import typer

from recordbase import statements
from recordbase.config import get_settings
from recordbase.domain.models import FieldDescriptor
from recordbase.infrastructure.database import Database
from recordbase.infrastructure.db_factory import PoolManager
from recordbase.naming import to_attribute_name, to_column_name
from recordbase.reporter import print_fields
from recordbase.utils.logging import configure_logging

app = typer.Typer(help="recordbase CLI: inspect how tables map onto record attributes.")


class Target(str, Enum):
    attribute = "attribute"
    column = "column"


@app.callback()
def _setup() -> None:
    settings = get_settings()
    configure_logging(level=settings.log_level, json_logs=settings.log_json)


@app.command()
def info() -> None:
    """
    Show effective configuration values.
    """
    settings = get_settings()
    typer.echo(
        f"DB={settings.db_user}@{settings.db_host}:{settings.db_port}/{settings.db_name} | "
        f"env={settings.app_env} introspection={settings.introspection_mode} "
        f"statement_timeout_ms={settings.db_statement_timeout_ms}"
    )


@app.command()
def convert(
    name: str = typer.Argument(..., help="Name to convert."),
    to: Target = typer.Option(
        Target.attribute,
        "--to",
        "-t",
        help="Convert a column name to an attribute name, or the reverse.",
    ),
) -> None:
    """
    Convert a name between column (snake_case) and attribute (camelCase) form.
    """
    if to is Target.attribute:
        typer.echo(to_attribute_name(name))
    else:
        typer.echo(to_column_name(name))


@app.command()
def describe(table: str = typer.Argument(..., help="Table to describe.")) -> None:
    """
    List the columns of a table with the attribute each one maps to.
    """
    # Pooled connections are shared; session settings would outlive this command.
    with PoolManager().sync_connection() as conn:
        columns = Database(conn, statement_timeout_ms=0).describe_table(table)
    fields = [FieldDescriptor.from_column(column, position) for position, column in enumerate(columns)]
    print_fields(table, fields)


@app.command()
def count(table: str = typer.Argument(..., help="Table to count.")) -> None:
    """
    Count the rows of a table.
    """
    with PoolManager().sync_connection() as conn:
        rows = Database(conn, statement_timeout_ms=0).execute(statements.count(table))
    typer.echo(rows[0][statements.COUNT_ALIAS])


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
