from __future__ import annotations

from typing import List, Optional

from rich import box
from rich.console import Console
from rich.table import Table

from recordbase.domain.models import FieldDescriptor


def print_fields(
    table_name: str,
    fields: List[FieldDescriptor],
    console: Optional[Console] = None,
) -> None:
    """
    Render the column/attribute mapping of a table as a rich table.
    """
    console = console or Console()

    if not fields:
        console.print(f"[yellow]Table '{table_name}' has no columns (or does not exist).[/yellow]")
        return

    table = Table(
        title=f"Field mapping for {table_name}",
        box=box.ROUNDED,
        caption="Schema order",
    )
    table.add_column("#", justify="right", style="magenta")
    table.add_column("Column", style="cyan", no_wrap=True)
    table.add_column("Attribute", style="green", no_wrap=True)

    for descriptor in fields:
        table.add_row(str(descriptor.position), descriptor.column, descriptor.attribute)

    console.print(table)


__all__ = ["print_fields"]
