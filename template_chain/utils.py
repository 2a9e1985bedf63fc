"""Shared helpers: Rich console output, status lines, and context loading.

All operator-facing output goes through the module-level ``console`` so that
tests (and embedding hosts) can capture or silence it in one place.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .naming import ChainDescriptor

console = Console()

# ---------------------------------------------------------------------------
# Status output
# ---------------------------------------------------------------------------

STATUS_COLORS: dict[str, str] = {
    "create": "green",
    "identical": "blue",
    "skip": "yellow",
    "error": "red",
    "stage": "dim",
}


def print_status(status: str, message: str, color: str | None = None) -> None:
    """Print a right-aligned status word followed by *message*.

    Mirrors the ``create  app/views/index.html`` lines printed by code
    generators.  The colour defaults to the entry in ``STATUS_COLORS``.
    """
    color = color or STATUS_COLORS.get(status, "white")
    console.print(f"[bold {color}]{status:>12}[/bold {color}]  {escape(message)}")


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")


def print_chain_table(
    rows: Iterable[tuple[str, ChainDescriptor]],
    title: str = "Template chains",
) -> None:
    """Print one row per file: input name, base path, and chain order."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("File", no_wrap=True)
    table.add_column("Base", style="dim")
    table.add_column("Templates (applied first -> last)")

    for filename, descriptor in rows:
        chain = " -> ".join(descriptor.templates) if descriptor.has_chain else "-"
        table.add_row(filename, descriptor.base, chain)

    console.print(table)
    console.print()


# ---------------------------------------------------------------------------
# Context loading
# ---------------------------------------------------------------------------


def load_context(path: str | Path) -> dict[str, Any]:
    """Load a template context from a JSON or YAML file.

    The format is chosen by extension (``.yaml``/``.yml`` for YAML, anything
    else is parsed as JSON).  An empty YAML document yields ``{}``.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the document is malformed or not a mapping.
    """
    file_path = Path(path)
    raw = file_path.read_text(encoding="utf-8")
    if file_path.suffix.lower() in (".yaml", ".yml"):
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in context file {file_path}: {exc}") from exc
        if data is None:
            data = {}
    else:
        data = json.loads(raw)

    if not isinstance(data, dict):
        raise ValueError(f"Context file must contain a mapping: {file_path}")
    return data


def parse_assignments(assignments: Iterable[str]) -> dict[str, str]:
    """Turn ``KEY=VALUE`` strings into a dict.

    Examples::

        parse_assignments(["title=Home", "lang=en"]) -> {"title": "Home", "lang": "en"}

    Raises:
        ValueError: If an entry has no ``=`` or an empty key.
    """
    result: dict[str, str] = {}
    for item in assignments:
        key, sep, value = item.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Expected KEY=VALUE, got: {item!r}")
        result[key] = value
    return result
