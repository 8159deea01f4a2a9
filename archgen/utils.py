"""Shared utility functions for the clean architecture generator.

Provides Rich-based operator output (one shared console, coloured status
lines, summary tables) and the identifier case helpers used by naming,
planning and field identifier mapping.
"""

from __future__ import annotations

import json
import re
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

console = Console()


# ---------------------------------------------------------------------------
# Case conversion helpers
# ---------------------------------------------------------------------------

_WORD_SPLIT = re.compile(r"[^A-Za-z0-9]+")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


def split_words(text: str) -> list[str]:
    """Split *text* into words on separators and camelCase boundaries.

    Examples::

        split_words("user_profile")  -> ["user", "profile"]
        split_words("userProfile")   -> ["user", "Profile"]
        split_words("HTTPResponse")  -> ["HTTP", "Response"]
    """
    words: list[str] = []
    for chunk in _WORD_SPLIT.split(text):
        if chunk:
            words.extend(w for w in _CAMEL_BOUNDARY.split(chunk) if w)
    return words


def to_pascal(text: str) -> str:
    """Convert ``some-thing``, ``some_thing`` or ``someThing`` to ``SomeThing``."""
    return "".join(word[:1].upper() + word[1:].lower() for word in split_words(text))


def to_camel(text: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``someThing``."""
    pascal = to_pascal(text)
    if pascal:
        return pascal[0].lower() + pascal[1:]
    return ""


def to_snake(text: str) -> str:
    """Convert ``SomeThing`` or ``some-thing`` to ``some_thing``."""
    return "_".join(word.lower() for word in split_words(text))


# ---------------------------------------------------------------------------
# JSON helpers
# ---------------------------------------------------------------------------


def load_json_text(text: str) -> Any:
    """Parse *text* as JSON.

    Integral and fractional numbers keep their source representation:
    ``1`` parses to ``int`` and ``1.0`` to ``float``.

    Raises:
        json.JSONDecodeError: If the text is not valid JSON.
    """
    return json.loads(text)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_header(title: str) -> None:
    """Print a full-width rule with *title*."""
    console.print()
    console.print(Rule(f"[bold bright_cyan] {title} [/bold bright_cyan]", style="bright_cyan"))
    console.print()


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")


def print_info(message: str) -> None:
    """Print a dim informational message."""
    console.print(f"[dim]{escape(message)}[/dim]")
