"""Per-shape descriptor cache.

The registry is process-wide and append-only: once a shape's descriptors are
published they are never replaced, so readers can share the tuple freely.
Publication happens under a re-entrant lock because resolving a shape also
resolves its nested shapes.
"""

from __future__ import annotations

import logging
import threading

from resourcemap.config.models import TagsConfig
from resourcemap.domain.descriptors import FieldDescriptor, build_descriptors
from resourcemap.domain.kinds import Kind

logger = logging.getLogger(__name__)


class DescriptorRegistry:
    """Caches resolved field descriptors keyed by shape identity."""

    def __init__(self, tags: TagsConfig | None = None) -> None:
        self.tags = tags or TagsConfig()
        self._cache: dict[type, tuple[FieldDescriptor, ...]] = {}
        self._lock = threading.RLock()
        self._resolving: set[type] = set()

    def __contains__(self, shape: object) -> bool:
        return shape in self._cache

    def __len__(self) -> int:
        return len(self._cache)

    def resolve(self, shape: type) -> tuple[FieldDescriptor, ...]:
        """Return the descriptors of *shape*, resolving and caching on first use.

        Nested shapes are resolved eagerly, so an unmappable field anywhere
        below *shape* fails here. A shape already being resolved higher up
        the stack (a self reference) is not entered again.

        Raises:
            ShapeError: if *shape* or any nested shape cannot be mapped.
        """
        cached = self._cache.get(shape)
        if cached is not None:
            return cached

        with self._lock:
            cached = self._cache.get(shape)
            if cached is not None:
                return cached
            self._resolving.add(shape)
            try:
                descriptors = build_descriptors(
                    shape,
                    name_tag=self.tags.name,
                    computed_tag=self.tags.computed,
                )
                for desc in descriptors:
                    if desc.kind is Kind.NESTED_LIST_OF_OBJECT and desc.nested is not None:
                        if desc.nested not in self._resolving:
                            self.resolve(desc.nested)
            finally:
                self._resolving.discard(shape)
            self._cache[shape] = descriptors
            logger.debug("Resolved %d field(s) for %s", len(descriptors), shape.__qualname__)
            return descriptors

    def clear(self) -> None:
        """Drop every cached entry (tests and config reloads)."""
        with self._lock:
            self._cache.clear()


_registries: dict[TagsConfig, DescriptorRegistry] = {}
_registries_lock = threading.Lock()


def registry_for(tags: TagsConfig | None = None) -> DescriptorRegistry:
    """Return the shared registry for a tag vocabulary."""
    key = tags or TagsConfig()
    with _registries_lock:
        registry = _registries.get(key)
        if registry is None:
            registry = DescriptorRegistry(key)
            _registries[key] = registry
        return registry


def resolve(
    shape: type, *, registry: DescriptorRegistry | None = None
) -> tuple[FieldDescriptor, ...]:
    """Resolve *shape* against *registry* (default: the shared default-tag registry)."""
    return (registry if registry is not None else registry_for()).resolve(shape)
