"""Colored status lines and tables for CLI output."""
from io import StringIO
from typing import Iterable, List, Sequence

import click
from rich.console import Console
from rich.table import Table

RULE = "=" * 54


def info(message: str) -> None:
    click.echo(click.style("i ", fg="blue") + message)


def success(message: str) -> None:
    click.echo(click.style("✓ ", fg="green") + message)


def warning(message: str, err: bool = False) -> None:
    click.echo(click.style("! ", fg="yellow") + message, err=err)


def error(message: str, err: bool = False) -> None:
    click.echo(click.style("✗ ", fg="red") + message, err=err)


def fatal(message: str) -> None:
    """Error line in the 'Error: ...' form used before aborting."""
    click.echo(click.style("Error: ", fg="red", bold=True) + message)


def section(title: str) -> None:
    click.echo()
    click.echo(RULE)
    click.echo(click.style(title, fg="cyan", bold=True))
    click.echo(RULE)


def bullet_list(items: Iterable[str], indent: int = 4) -> None:
    for item in items:
        click.echo(" " * indent + f"- {item}")


def render_table(title: str, columns: Sequence[str], rows: List[Sequence[str]]) -> str:
    """
    Render rows as a rich table.

    Args:
        title: Table title
        columns: Column headers
        rows: Row values, already formatted as strings

    Returns:
        Formatted table output as string
    """
    table = Table(title=title)
    styles = ["cyan", "magenta", "white", "green", "yellow"]
    for index, column in enumerate(columns):
        table.add_column(column, style=styles[index % len(styles)])

    for row in rows:
        table.add_row(*row)

    console = Console(file=StringIO(), force_terminal=True)
    console.print(table)
    return console.file.getvalue()
