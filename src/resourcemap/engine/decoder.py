"""Decode a dynamic value tree into a typed object.

The symmetric counterpart of :mod:`resourcemap.engine.encoder`. A missing
key, a ``None`` value and an empty container all populate the field with its
zero value. Decoding fails fast: the first bad field aborts the whole object
and no partially built instance is returned.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from resourcemap.config.models import MappingConfig
from resourcemap.domain.descriptors import FieldDescriptor
from resourcemap.domain.errors import DecodeError, ErrorCode, MappingError, ShapeError, join_path
from resourcemap.domain.kinds import INT64, ZERO_VALUES, IntWidth, Kind, node_kind
from resourcemap.engine.registry import DescriptorRegistry, registry_for
from resourcemap.engine.tracing import trace_logger

T = TypeVar("T")


def decode(
    shape: type[T],
    node: Any,
    *,
    config: MappingConfig | None = None,
    registry: DescriptorRegistry | None = None,
    logger: Any | None = None,
) -> T:
    """Build an instance of *shape* from the dynamic tree *node*.

    Keys in *node* that match no tagged field are ignored.

    Raises:
        DecodeError: ``type_mismatch`` when a node has the wrong kind,
            ``integer_overflow`` when an integer exceeds the field's native
            width, ``nested_decode_failed`` wrapping the first failing nested
            element, ``unsupported_kind`` when the shape cannot be resolved,
            and ``construction_failed`` when the instance cannot be built.
    """
    cfg = config or MappingConfig()
    if registry is None:
        registry = registry_for(cfg.tags)
    decoder = _Decoder(cfg, registry, trace_logger(cfg, logger))
    return decoder.decode_object(shape, node, "")


def _mismatch(expected: Kind | str, raw: Any, path: str) -> DecodeError:
    actual = node_kind(raw)
    actual_name = type(raw).__name__ if actual is Kind.UNRECOGNIZED else actual.value
    expected_name = expected.value if isinstance(expected, Kind) else expected
    return DecodeError(
        ErrorCode.TYPE_MISMATCH,
        f"expected {expected_name}, got {actual_name}",
        path=path,
        expected=expected_name,
        actual=actual_name,
    )


class _Decoder:
    """One decode call's state: config, registry, and trace logger."""

    def __init__(self, config: MappingConfig, registry: DescriptorRegistry, log: Any) -> None:
        self._config = config
        self._registry = registry
        self._log = log

    def decode_object(self, shape: type, node: Any, path: str) -> Any:
        try:
            descriptors = self._registry.resolve(shape)
        except ShapeError as exc:
            raise DecodeError(
                ErrorCode.UNSUPPORTED_KIND,
                f"cannot decode into {getattr(shape, '__qualname__', shape)!r}: {exc}",
                path=path,
            ) from exc

        if not isinstance(node, Mapping):
            raise _mismatch("object", node, path)

        self._log.debug("decode_object", shape=shape.__qualname__, path=path or "<root>")
        init_values: dict[str, Any] = {}
        late_values: dict[str, Any] = {}
        for desc in descriptors:
            value = self.decode_field(desc, node.get(desc.tag), join_path(path, desc.tag))
            if desc.init:
                init_values[desc.name] = value
            else:
                late_values[desc.name] = value

        unknown = set(node) - {desc.tag for desc in descriptors}
        if unknown:
            self._log.debug(
                "decode_unknown_keys", path=path or "<root>", keys=sorted(map(str, unknown))
            )

        try:
            instance = shape(**init_values)
        except (TypeError, ValueError) as exc:
            raise DecodeError(
                ErrorCode.CONSTRUCTION_FAILED,
                f"cannot construct {shape.__qualname__}: {exc}",
                path=path,
            ) from exc
        for name, value in late_values.items():
            object.__setattr__(instance, name, value)
        return instance

    def decode_field(self, desc: FieldDescriptor, raw: Any, path: str) -> Any:
        self._log.debug("decode_field", path=path, kind=desc.kind.value, present=raw is not None)
        if desc.kind.is_scalar:
            return self._scalar(desc.kind, desc.width, raw, path)
        if desc.kind.is_list:
            return self._list(desc, raw, path)
        if desc.kind.is_map:
            return self._map(desc, raw, path)
        if desc.kind is Kind.NESTED_LIST_OF_OBJECT:
            return self._nested(desc, raw, path)
        raise DecodeError(
            ErrorCode.UNSUPPORTED_KIND,
            f"kind {desc.kind.value!r} cannot be decoded",
            path=path,
        )

    def _scalar(self, kind: Kind, width: IntWidth | None, raw: Any, path: str) -> Any:
        if raw is None:
            return ZERO_VALUES[kind]
        if kind is Kind.STRING and isinstance(raw, str):
            return str.__str__(raw)
        if kind is Kind.BOOL and isinstance(raw, bool):
            return raw
        if kind is Kind.FLOAT and isinstance(raw, (int, float)) and not isinstance(raw, bool):
            return _to_float(raw, path)
        if kind is Kind.INTEGER and not isinstance(raw, bool):
            if isinstance(raw, int):
                return _narrow(raw, width or INT64, path)
            if (
                isinstance(raw, float)
                and self._config.decode.accept_integral_floats
                and raw.is_integer()
            ):
                return _narrow(int(raw), width or INT64, path)
        raise _mismatch(kind, raw, path)

    def _list(self, desc: FieldDescriptor, raw: Any, path: str) -> Any:
        if raw is None:
            return desc.container()
        if not isinstance(raw, (list, tuple)):
            raise _mismatch(desc.kind, raw, path)
        element = desc.kind.element
        items = [
            self._scalar(element, desc.width, item, join_path(path, f"[{i}]"))
            for i, item in enumerate(raw)
        ]
        return desc.container(items)

    def _map(self, desc: FieldDescriptor, raw: Any, path: str) -> dict[str, Any]:
        if raw is None:
            return {}
        if not isinstance(raw, Mapping):
            raise _mismatch(desc.kind, raw, path)
        element = desc.kind.element
        result: dict[str, Any] = {}
        for key, item in raw.items():
            if not isinstance(key, str):
                raise _mismatch("string map key", key, path)
            result[key] = self._scalar(element, desc.width, item, join_path(path, f"[{key!r}]"))
        return result

    def _nested(self, desc: FieldDescriptor, raw: Any, path: str) -> list[Any]:
        assert desc.nested is not None
        if raw is None:
            return []
        if not isinstance(raw, (list, tuple)):
            raise _mismatch(desc.kind, raw, path)
        result: list[Any] = []
        for i, item in enumerate(raw):
            item_path = join_path(path, f"[{i}]")
            if not isinstance(item, Mapping):
                raise _mismatch("object", item, item_path)
            try:
                result.append(self.decode_object(desc.nested, item, item_path))
            except MappingError as exc:
                raise DecodeError(
                    ErrorCode.NESTED_DECODE_FAILED,
                    f"element {i} of {desc.tag!r} failed to decode: {exc.message}",
                    path=item_path,
                    tag=desc.tag,
                    index=i,
                ) from exc
        return result


def _to_float(value: int | float, path: str) -> float:
    try:
        return float(value)
    except OverflowError as exc:
        raise DecodeError(
            ErrorCode.INTEGER_OVERFLOW,
            "integer is too large to convert to a float",
            path=path,
        ) from exc


def _narrow(value: int, width: IntWidth, path: str) -> int:
    """Narrow the normalized integer to the field's native width."""
    if not width.fits(value):
        raise DecodeError(
            ErrorCode.INTEGER_OVERFLOW,
            f"{value} does not fit {width}",
            path=path,
            value=value,
            width=width,
        )
    return value
