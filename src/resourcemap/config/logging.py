"""structlog setup for the resourcemap CLI and host processes.

Everything is rendered by one stderr handler on the root logger, either as
colored console lines or as JSON lines (``--log-json``). Level routing:

- ``resourcemap`` follows ``verbose`` (DEBUG or WARNING);
- ``resourcemap.engine`` opens to DEBUG on its own when ``trace`` is set, so
  encode/decode traces can be collected without the rest of the debug output;
- every other logger stays at WARNING.
"""

from __future__ import annotations

import logging
import sys

import structlog

from resourcemap.engine.tracing import ENGINE_LOGGER

PACKAGE_LOGGER = "resourcemap"


def _shared_processors() -> list[structlog.types.Processor]:
    """Processors applied to both structlog and foreign stdlib records."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _stderr_handler(*, log_json: bool) -> logging.Handler:
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_shared_processors(),
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )
    return handler


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    trace: bool = False,
) -> None:
    """Route structlog and stdlib logging to a single stderr handler.

    Safe to call repeatedly; each call replaces the previous handler.

    Args:
        verbose: DEBUG for every ``resourcemap`` logger instead of WARNING.
        log_json: Render JSON lines instead of console output.
        trace: DEBUG for ``resourcemap.engine`` even when not verbose.
    """
    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(_stderr_handler(log_json=log_json))
    root.setLevel(logging.WARNING)

    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    # NOTSET defers to the package level.
    logging.getLogger(ENGINE_LOGGER).setLevel(logging.DEBUG if trace else logging.NOTSET)
