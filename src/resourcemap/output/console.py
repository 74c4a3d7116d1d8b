"""Rich Console factory and theme for resourcemap output.

Consoles render to a StringIO buffer so formatters keep a plain
``-> str`` contract. In non-TTY environments (tests, pipes) Rich disables
color codes automatically.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

MAP_THEME = Theme(
    {
        "map.ok": "bold green",
        "map.error": "bold red",
        "map.warning": "bold yellow",
        "map.op": "bold cyan",
        "map.key": "dim",
        "map.tag": "bold blue",
        "map.kind.scalar": "green",
        "map.kind.collection": "yellow",
        "map.kind.nested": "magenta",
    }
)


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=MAP_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_kind(kind: str) -> str:
    """Return the Rich style name for a field kind."""
    if kind == "nested_list_of_object":
        return "map.kind.nested"
    if kind.startswith(("list_of_", "map_of_")):
        return "map.kind.collection"
    return "map.kind.scalar"
