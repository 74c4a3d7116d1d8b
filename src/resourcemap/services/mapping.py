"""MappingService: describe, encode, and decode shapes as operations.

Wraps the engine for callers that want an :class:`OperationResult` instead
of exceptions (the CLI, and resource layers reporting to a host).
"""

from __future__ import annotations

import importlib
import logging
from typing import Any

import structlog

from resourcemap.domain.descriptors import is_shape
from resourcemap.domain.errors import ErrorCode, MappingError, ShapeError
from resourcemap.engine.decoder import decode
from resourcemap.engine.encoder import encode
from resourcemap.services.base import BaseService
from resourcemap.services.result import OperationResult

logger = logging.getLogger(__name__)


def import_shape(ref: str) -> type:
    """Import a shape from a ``package.module:QualName`` reference.

    Raises:
        ShapeError: ``not_a_shape`` if the reference is malformed, cannot be
            imported, or does not name a dataclass or pydantic model.
    """
    module_name, sep, qualname = ref.partition(":")
    if not sep or not module_name or not qualname:
        raise ShapeError(ErrorCode.NOT_A_SHAPE, f"expected 'module:Shape', got {ref!r}")
    try:
        target: Any = importlib.import_module(module_name)
        for part in qualname.split("."):
            target = getattr(target, part)
    except (ImportError, AttributeError) as exc:
        raise ShapeError(ErrorCode.NOT_A_SHAPE, f"cannot import {ref!r}: {exc}") from exc
    if not is_shape(target):
        raise ShapeError(
            ErrorCode.NOT_A_SHAPE,
            f"{ref!r} is neither a dataclass nor a pydantic model",
        )
    return target


class MappingService(BaseService):
    """Shape description and tree conversion for the CLI."""

    def _trace(self) -> Any:
        return structlog.get_logger("resourcemap.engine") if self._config.trace else None

    def describe(self, shape: type) -> OperationResult:
        """List the resolved field descriptors of *shape*."""
        try:
            descriptors = self._registry.resolve(shape)
        except MappingError as exc:
            return self._failure("describe", exc)
        return OperationResult(
            ok=True,
            op="describe",
            data={
                "shape": shape.__qualname__,
                "count": len(descriptors),
                "fields": [desc.to_dict() for desc in descriptors],
            },
        )

    def encode(self, value: Any) -> OperationResult:
        """Encode *value* into a dynamic tree."""
        try:
            tree = encode(
                value, config=self._config, registry=self._registry, logger=self._trace()
            )
        except MappingError as exc:
            return self._failure("encode", exc)
        return OperationResult(
            ok=True,
            op="encode",
            data={"shape": type(value).__qualname__, "tree": tree},
        )

    def decode(self, shape: type, tree: Any) -> OperationResult:
        """Decode *tree* into *shape* and report the canonical re-encoded tree.

        Keys the shape does not declare are reported as warnings.
        """
        try:
            obj = decode(
                shape, tree, config=self._config, registry=self._registry, logger=self._trace()
            )
            canonical = encode(obj, shape, config=self._config, registry=self._registry)
        except MappingError as exc:
            return self._failure("decode", exc)

        unknown = sorted(map(str, set(tree) - set(canonical)))
        warnings = [f"Ignored unknown key: {key}" for key in unknown]
        logger.debug("Decoded %s with %d warning(s)", shape.__qualname__, len(warnings))
        return OperationResult(
            ok=True,
            op="decode",
            data={"shape": shape.__qualname__, "object": repr(obj), "tree": canonical},
            warnings=warnings,
        )
