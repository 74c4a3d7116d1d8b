"""BaseService: shared foundation for resourcemap services.

Every service receives the resolved :class:`MapSettings` at construction
and maps shapes through the registry shared by that tag vocabulary.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from resourcemap.domain.errors import MappingError
from resourcemap.engine.registry import DescriptorRegistry, registry_for
from resourcemap.services.result import OperationError, OperationResult

if TYPE_CHECKING:
    from resourcemap.config.settings import MapSettings

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class MappingService(BaseService):
            def describe(self, shape: type) -> OperationResult:
                ...
    """

    def __init__(self, settings: MapSettings) -> None:
        self._settings = settings
        self._config = settings.mapping
        self._registry: DescriptorRegistry = registry_for(self._config.tags)

    def _failure(self, op: str, exc: MappingError) -> OperationResult:
        """Convert a mapping failure into a failed OperationResult."""
        logger.debug("%s failed: %s", op, exc, exc_info=True)
        return OperationResult(ok=False, op=op, error=OperationError.from_exception(exc))
