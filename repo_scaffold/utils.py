"""Shared utility functions for repo-scaffold.

Provides name normalisation and the Rich-based console helpers used for all
user-facing output.
"""

from __future__ import annotations

import re
from typing import Any

from rich.console import Console
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def slugify(text: str) -> str:
    """Convert text to a hyphenated, lowercase slug.

    Examples::

        slugify("My Tool") -> "my-tool"
        slugify("data.Pipeline_2") -> "data-pipeline-2"
    """
    slug = re.sub(r"[^a-z0-9]+", "-", text.lower().strip())
    return slug.strip("-")


def python_slugify(text: str) -> str:
    """Convert text to a Python-identifier-safe slug (underscored).

    A leading digit gets an underscore prefix so the result is always a
    valid module name.
    """
    slug = re.sub(r"[^a-z0-9]+", "_", text.lower().strip()).strip("_")
    if slug and slug[0].isdigit():
        slug = f"_{slug}"
    return slug


def pascal_case(text: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``SomeThing``."""
    parts = re.split(r"[-_.\s]+", text)
    return "".join(word.capitalize() for word in parts if word)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, Any], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")
