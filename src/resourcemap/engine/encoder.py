"""Encode typed objects into a dynamic value tree.

The output is always a ``dict`` keyed by tag name, containing every mappable
field of the shape:

- scalars are copied, integers normalized to the 64-bit representation;
- ``None`` or empty lists/maps become empty containers, never missing keys;
- nested lists of objects recurse, element by element, in input order.

Computed fields are encoded exactly like any other field.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from resourcemap.config.models import MappingConfig
from resourcemap.domain.descriptors import FieldDescriptor
from resourcemap.domain.errors import EncodeError, ErrorCode, MappingError, ShapeError, join_path
from resourcemap.domain.kinds import INT64, ZERO_VALUES, IntWidth, Kind
from resourcemap.engine.registry import DescriptorRegistry, registry_for
from resourcemap.engine.tracing import trace_logger

_SEQUENCES = (list, tuple, set, frozenset)


def encode(
    value: Any,
    shape: type | None = None,
    *,
    config: MappingConfig | None = None,
    registry: DescriptorRegistry | None = None,
    logger: Any | None = None,
) -> dict[str, Any]:
    """Encode *value* (an instance of *shape*) into a dynamic tree.

    Args:
        value: The typed object to encode.
        shape: Its shape; defaults to ``type(value)``.
        config: Engine configuration (defaults baked into MappingConfig).
        registry: Descriptor cache; defaults to the shared one for ``config.tags``.
        logger: Optional structlog-style logger receiving trace events.

    Raises:
        EncodeError: ``unsupported_kind`` when the shape cannot be resolved,
            ``type_mismatch``/``integer_overflow`` for bad field values, and
            ``nested_encode_failed`` wrapping the first failing nested element.
    """
    cfg = config or MappingConfig()
    if registry is None:
        registry = registry_for(cfg.tags)
    encoder = _Encoder(cfg, registry, trace_logger(cfg, logger))
    return encoder.encode_object(value, shape or type(value), "")


class _Encoder:
    """One encode call's state: config, registry, and trace logger."""

    def __init__(self, config: MappingConfig, registry: DescriptorRegistry, log: Any) -> None:
        self._config = config
        self._registry = registry
        self._log = log

    def encode_object(self, value: Any, shape: type, path: str) -> dict[str, Any]:
        try:
            descriptors = self._registry.resolve(shape)
        except ShapeError as exc:
            raise EncodeError(
                ErrorCode.UNSUPPORTED_KIND,
                f"cannot encode {getattr(shape, '__qualname__', shape)!r}: {exc}",
                path=path,
            ) from exc

        if not isinstance(value, shape):
            raise EncodeError(
                ErrorCode.TYPE_MISMATCH,
                f"expected an instance of {shape.__qualname__}, got {type(value).__name__}",
                path=path,
            )

        self._log.debug("encode_object", shape=shape.__qualname__, path=path or "<root>")
        result: dict[str, Any] = {}
        for desc in descriptors:
            field_path = join_path(path, desc.tag)
            result[desc.tag] = self.encode_field(desc, getattr(value, desc.name), field_path)
        return result

    def encode_field(self, desc: FieldDescriptor, value: Any, path: str) -> Any:
        self._log.debug("encode_field", path=path, kind=desc.kind.value, computed=desc.computed)
        if desc.kind.is_scalar:
            return self._scalar(desc.kind, desc.width, value, path)
        if desc.kind.is_list:
            return self._list(desc, value, path)
        if desc.kind.is_map:
            return self._map(desc, value, path)
        if desc.kind is Kind.NESTED_LIST_OF_OBJECT:
            return self._nested(desc, value, path)
        raise EncodeError(
            ErrorCode.UNSUPPORTED_KIND,
            f"kind {desc.kind.value!r} cannot be encoded",
            path=path,
        )

    def _scalar(self, kind: Kind, width: IntWidth | None, value: Any, path: str) -> Any:
        if value is None:
            return ZERO_VALUES[kind]
        if kind is Kind.STRING and isinstance(value, str):
            return str.__str__(value)
        if kind is Kind.BOOL and isinstance(value, bool):
            return value
        if kind is Kind.INTEGER and isinstance(value, int) and not isinstance(value, bool):
            return _normalize_int(int(value), width or INT64, path)
        if kind is Kind.FLOAT and isinstance(value, (int, float)) and not isinstance(value, bool):
            return _to_float(value, path)
        raise EncodeError(
            ErrorCode.TYPE_MISMATCH,
            f"expected {kind.value}, got {type(value).__name__}",
            path=path,
        )

    def _list(self, desc: FieldDescriptor, value: Any, path: str) -> list[Any]:
        if value is None:
            return []
        if not isinstance(value, _SEQUENCES):
            raise EncodeError(
                ErrorCode.TYPE_MISMATCH,
                f"expected {desc.kind.value}, got {type(value).__name__}",
                path=path,
            )
        element = desc.kind.element
        items = [
            self._scalar(element, desc.width, item, join_path(path, f"[{i}]"))
            for i, item in enumerate(value)
        ]
        if isinstance(value, (set, frozenset)) and self._config.encode.sort_sets:
            items.sort()
        return items

    def _map(self, desc: FieldDescriptor, value: Any, path: str) -> dict[str, Any]:
        if value is None:
            return {}
        if not isinstance(value, Mapping):
            raise EncodeError(
                ErrorCode.TYPE_MISMATCH,
                f"expected {desc.kind.value}, got {type(value).__name__}",
                path=path,
            )
        element = desc.kind.element
        result: dict[str, Any] = {}
        for key, item in value.items():
            if not isinstance(key, str):
                raise EncodeError(
                    ErrorCode.TYPE_MISMATCH,
                    f"map keys must be strings, got {type(key).__name__}",
                    path=path,
                )
            item_path = join_path(path, f"[{key!r}]")
            result[str(key)] = self._scalar(element, desc.width, item, item_path)
        return result

    def _nested(self, desc: FieldDescriptor, value: Any, path: str) -> list[dict[str, Any]]:
        assert desc.nested is not None
        if value is None:
            return []
        if not isinstance(value, (list, tuple)):
            raise EncodeError(
                ErrorCode.TYPE_MISMATCH,
                f"expected a list of {desc.nested.__qualname__}, got {type(value).__name__}",
                path=path,
            )
        result: list[dict[str, Any]] = []
        for i, item in enumerate(value):
            item_path = join_path(path, f"[{i}]")
            try:
                result.append(self.encode_object(item, desc.nested, item_path))
            except MappingError as exc:
                raise EncodeError(
                    ErrorCode.NESTED_ENCODE_FAILED,
                    f"element {i} of {desc.tag!r} failed to encode: {exc.message}",
                    path=item_path,
                    tag=desc.tag,
                    index=i,
                ) from exc
        return result


def _to_float(value: int | float, path: str) -> float:
    try:
        return float(value)
    except OverflowError as exc:
        raise EncodeError(
            ErrorCode.INTEGER_OVERFLOW,
            "integer is too large to convert to a float",
            path=path,
        ) from exc


def _normalize_int(value: int, width: IntWidth, path: str) -> int:
    """Check *value* against its native width and the 64-bit representation."""
    for limit in (width, INT64):
        if not limit.fits(value):
            raise EncodeError(
                ErrorCode.INTEGER_OVERFLOW,
                f"{value} does not fit {limit}",
                path=path,
                value=value,
                width=limit,
            )
    return value
