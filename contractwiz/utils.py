"""Shared utility functions for the Arc Contract Wizard.

Provides JSON/YAML I/O, contract file naming, and Rich-based console
reporting.  The pure generation core never imports the console
helpers; only the CLI reports progress through them.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

import yaml
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------


def contract_filename(name: str, suffix: str = ".sol") -> str:
    """Return a safe file name for a generated contract.

    Characters that are not valid in Solidity identifiers are replaced with
    underscores.  An empty name falls back to ``Contract``.

    Examples::

        contract_filename("MyToken") -> "MyToken.sol"
        contract_filename("My Token!") -> "My_Token_.sol"
    """
    stem = re.sub(r"[^A-Za-z0-9_$]", "_", name.strip()) or "Contract"
    return f"{stem}{suffix}"


# ---------------------------------------------------------------------------
# JSON / YAML I/O
# ---------------------------------------------------------------------------


def load_mapping(path: str | Path) -> dict[str, Any]:
    """Load a JSON or YAML file that contains a top-level mapping.

    ``.json`` files are parsed with :mod:`json`; everything else goes through
    ``yaml.safe_load`` (YAML is a superset of JSON, so either works).

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the document is not a mapping.
    """
    file_path = Path(path)
    raw = file_path.read_text(encoding="utf-8")
    if file_path.suffix.lower() == ".json":
        data = json.loads(raw)
    else:
        data = yaml.safe_load(raw)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{file_path} must contain a mapping, got {type(data).__name__}")
    return data


def write_text(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


# ---------------------------------------------------------------------------
# Rich console output
# ---------------------------------------------------------------------------


def print_header(title: str) -> None:
    """Print a full-width rule with a bold title."""
    console.print()
    console.print(Rule(f"[bold cyan] {title} [/bold cyan]", style="cyan"))
    console.print()


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_panel(body: str, title: str) -> None:
    """Print *body* inside a titled panel."""
    console.print(Panel(body, title=title, border_style="cyan"))


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")
