"""Command: decode a JSON tree into a shape and print the canonical tree."""

from __future__ import annotations

import json
from typing import IO, TYPE_CHECKING

import click

from resourcemap.commands._base import MapCommand
from resourcemap.services.result import OperationError, OperationResult

if TYPE_CHECKING:
    from resourcemap.commands._context import AppContext


@click.command(
    cls=MapCommand,
    examples="""\
  resourcemap decode myprovider.models:Network state.json
  cat state.json | resourcemap --json decode myprovider.models:Network -""",
)
@click.argument("shape_ref", metavar="MODULE:SHAPE")
@click.argument("source", type=click.File("r"), default="-")
@click.pass_obj
def decode(app: AppContext, shape_ref: str, source: IO[str]) -> None:
    """Decode a JSON tree from SOURCE (default: stdin) into a shape."""
    shape = app.load_shape("decode", shape_ref)
    try:
        tree = json.load(source)
    except json.JSONDecodeError as exc:
        app.emit(
            OperationResult(
                ok=False,
                op="decode",
                error=OperationError(code="invalid_json", message=str(exc)),
            )
        )
        return
    app.emit(app.service.decode(shape, tree))
