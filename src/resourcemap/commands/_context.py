"""AppContext: shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Configures logging and owns result emission
(stdout/stderr routing and exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from resourcemap.domain.errors import MappingError
from resourcemap.output.formatters import format_result
from resourcemap.services.mapping import MappingService, import_shape
from resourcemap.services.result import OperationError, OperationResult

if TYPE_CHECKING:
    from resourcemap.config.settings import MapSettings


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: MapSettings) -> None:
        self.settings = settings

        from resourcemap.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose, log_json=settings.log_json, trace=settings.trace
        )
        self.service = MappingService(settings)

    def load_shape(self, op: str, ref: str) -> type:
        """Import the shape named by *ref*, emitting a failure if it cannot be loaded."""
        try:
            return import_shape(ref)
        except MappingError as exc:
            failure = OperationResult(ok=False, op=op, error=OperationError.from_exception(exc))
        self.emit(failure)
        raise SystemExit(1)

    def emit(self, result: OperationResult) -> None:
        """Format and output an OperationResult with correct exit semantics.

        * Success: writes to stdout; warnings go to stderr outside JSON mode.
        * Failure: writes to stderr, exits with code 1.
        """
        output = format_result(result, json_output=self.settings.json_output)
        if result.ok:
            click.echo(output)
            if not self.settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
