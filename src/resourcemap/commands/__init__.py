"""Subcommand modules for resourcemap.

Provides register_commands() which uses deferred imports to keep
``resourcemap --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from resourcemap.commands.decode import decode
    from resourcemap.commands.describe import describe

    cli.add_command(describe)
    cli.add_command(decode)
