"""ResourceMetaData: the boundary a resource layer uses to reach the engine.

A resource's lifecycle functions receive one of these. It holds the host's
dynamic state for the resource and exposes exactly two conversions:
``encode`` (typed object -> state) and ``decode`` (state -> typed object).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TypeVar

from resourcemap.config.models import MappingConfig
from resourcemap.engine.decoder import decode
from resourcemap.engine.encoder import encode
from resourcemap.engine.registry import DescriptorRegistry, registry_for

T = TypeVar("T")


@dataclass
class ResourceMetaData:
    """Dynamic resource state plus the collaborators used to map it.

    Attributes:
        state: The host's dynamic tree for this resource.
        logger: Optional structlog-style logger; passed to the engine for tracing.
        config: Engine configuration.
        resource_id: Identifier recorded by :meth:`set_id`, if any.
    """

    state: dict[str, Any] = field(default_factory=dict)
    logger: Any | None = None
    config: MappingConfig = field(default_factory=MappingConfig)
    resource_id: str | None = None

    @property
    def registry(self) -> DescriptorRegistry:
        return registry_for(self.config.tags)

    def encode(self, value: Any) -> None:
        """Replace the state with the encoded tree of *value*.

        The state is left untouched when encoding fails.
        """
        self.state = encode(value, config=self.config, registry=self.registry, logger=self.logger)

    def decode(self, shape: type[T]) -> T:
        """Decode the current state into a new *shape* instance."""
        return decode(
            shape, self.state, config=self.config, registry=self.registry, logger=self.logger
        )

    def set_id(self, resource_id: str) -> None:
        """Record the identifier the resource layer built for this resource."""
        if not resource_id:
            raise ValueError("resource id must be non-empty")
        self.resource_id = resource_id
