"""Rich/JSON output for OperationResult.

The CLI renders results for humans (Rich tables, colors) or machines
(--json). ``describe`` gets a field table; other operations print their
payload as indented key-value pairs.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table

from resourcemap.output.console import create_console, get_output, style_for_kind

if TYPE_CHECKING:
    from resourcemap.services.result import OperationResult


def _format_data_human(data: dict[str, Any]) -> str:
    """Format result data as indented key-value pairs."""
    lines: list[str] = []
    for key, value in data.items():
        if isinstance(value, (dict, list)):
            lines.append(f"  {key}: {_json.dumps(value, separators=(',', ':'))}")
        else:
            lines.append(f"  {key}: {value}")
    return "\n".join(lines)


def _format_fields_table(data: dict[str, Any], *, no_color: bool) -> str:
    """Render describe output as a field table."""
    console = create_console(no_color=no_color)
    table = Table(title=f"{data.get('shape', '')} ({data.get('count', 0)} fields)")
    table.add_column("Tag", style="map.tag")
    table.add_column("Attribute", style="map.key")
    table.add_column("Kind")
    table.add_column("Computed")
    table.add_column("Details", style="map.key")
    for row in data.get("fields", []):
        details = [f"{k}={row[k]}" for k in ("width", "container", "nested") if k in row]
        table.add_row(
            row["tag"],
            row["name"],
            f"[{style_for_kind(row['kind'])}]{row['kind']}[/]",
            "yes" if row["computed"] else "",
            " ".join(details),
        )
    console.print(table)
    return get_output(console).rstrip("\n")


def format_result(
    result: OperationResult,
    *,
    json_output: bool = False,
    no_color: bool = False,
) -> str:
    """Format an OperationResult for display.

    Args:
        result: The service result to format.
        json_output: If True, return JSON; otherwise return human-readable text.
        no_color: Disable ANSI codes in human output.
    """
    if json_output:
        return result.model_dump_json(indent=2)
    if not result.ok:
        if result.error is None:
            return f"ERROR: {result.op} - Unknown error"
        where = f" at {result.error.path}" if result.error.path else ""
        return f"ERROR: {result.op} - {result.error.code}{where}: {result.error.message}"
    if result.op == "describe":
        return _format_fields_table(result.data, no_color=no_color)
    parts = [f"OK: {result.op}"]
    if result.data:
        parts.append(_format_data_human(result.data))
    return "\n".join(parts)
