"""Command: show the resolved field descriptors of a shape."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from resourcemap.commands._base import MapCommand

if TYPE_CHECKING:
    from resourcemap.commands._context import AppContext


@click.command(
    cls=MapCommand,
    examples="""\
  resourcemap describe myprovider.models:Network
  resourcemap --json describe myprovider.models:Network""",
)
@click.argument("shape_ref", metavar="MODULE:SHAPE")
@click.pass_obj
def describe(app: AppContext, shape_ref: str) -> None:
    """List the mappable fields of a dataclass or pydantic model."""
    shape = app.load_shape("describe", shape_ref)
    app.emit(app.service.describe(shape))
