"""Trace logger selection for encode/decode recursion.

Tracing is purely observational. An injected logger always receives the
events; otherwise they go to ``resourcemap.engine`` only when
``MappingConfig.trace`` is on, and are dropped by a
filtering logger when off (the engine never logs above debug).
"""

from __future__ import annotations

import logging
from typing import Any

import structlog

from resourcemap.config.models import MappingConfig

ENGINE_LOGGER = "resourcemap.engine"

_silent = structlog.wrap_logger(
    structlog.PrintLogger(),
    wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL),
    processors=[],
)


def trace_logger(config: MappingConfig, logger: Any | None = None) -> Any:
    """Pick the logger encode/decode should trace to."""
    if logger is not None:
        return logger
    if config.trace:
        return structlog.get_logger(ENGINE_LOGGER)
    return _silent
