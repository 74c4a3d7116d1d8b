"""Field descriptors derived from a shape's tagged fields.

A *shape* is a dataclass type or a pydantic model class. Its mappable fields
are exactly those carrying the mapping-name tag; each one is classified into
a single :class:`~resourcemap.domain.kinds.Kind`.

INVARIANT: a tag name is unique within one shape, and every tagged field has
a recognized kind. Either violation fails the whole shape.
"""

from __future__ import annotations

import dataclasses
import types
import typing
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Annotated, Any, Union

from pydantic import BaseModel

from resourcemap.domain.errors import ErrorCode, ShapeError
from resourcemap.domain.kinds import INT64, SCALAR_TYPES, IntWidth, Kind, list_kind, map_kind
from resourcemap.domain.tags import COMPUTED_TAG, NAME_TAG, is_truthy_tag

COLLECTION_TYPES: tuple[type, ...] = (list, tuple, set, frozenset)


@dataclass(frozen=True)
class FieldDescriptor:
    """Resolved mapping metadata for one tagged field."""

    name: str
    tag: str
    kind: Kind
    computed: bool = False
    nested: type | None = None
    width: IntWidth | None = None
    container: type = list
    init: bool = True

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "name": self.name,
            "tag": self.tag,
            "kind": self.kind.value,
            "computed": self.computed,
        }
        if self.width is not None:
            data["width"] = str(self.width)
        if self.kind.is_list and self.container is not list:
            data["container"] = self.container.__name__
        if self.nested is not None:
            data["nested"] = self.nested.__qualname__
        return data


@dataclass(frozen=True)
class Classification:
    """Outcome of classifying one native type annotation."""

    kind: Kind
    nested: type | None = None
    width: IntWidth | None = None
    container: type = list


@dataclass(frozen=True)
class DeclaredField:
    """A field as declared on a shape, before tag filtering."""

    name: str
    annotation: Any
    tags: Mapping[str, Any]
    init: bool = True


UNRECOGNIZED = Classification(Kind.UNRECOGNIZED)


def is_shape(tp: object) -> bool:
    """Whether *tp* is a type the engine can map (dataclass or pydantic model)."""
    if not isinstance(tp, type):
        return False
    return dataclasses.is_dataclass(tp) or issubclass(tp, BaseModel)


def _strip(annotation: Any) -> tuple[Any, IntWidth | None]:
    """Peel ``Annotated`` and ``X | None`` wrappers, collecting an IntWidth."""
    width: IntWidth | None = None
    while True:
        origin = typing.get_origin(annotation)
        if origin is Annotated:
            for meta in annotation.__metadata__:
                if isinstance(meta, IntWidth):
                    width = meta
            annotation = annotation.__origin__
        elif origin is Union or origin is types.UnionType:
            args = [a for a in typing.get_args(annotation) if a is not type(None)]
            if len(args) != 1:
                return annotation, width
            annotation = args[0]
        else:
            return annotation, width


def _scalar(annotation: Any) -> tuple[Kind, IntWidth | None] | None:
    base, width = _strip(annotation)
    kind = SCALAR_TYPES.get(base) if isinstance(base, type) else None
    if kind is None:
        return None
    if kind is Kind.INTEGER:
        return kind, width or INT64
    return kind, None


def classify(annotation: Any) -> Classification:
    """Classify a native type annotation into exactly one kind.

    Nested objects are only recognized as ``list[Shape]``. Maps of nested
    shapes, lists of lists, non-``str`` map keys and bare nested shapes are
    all ``UNRECOGNIZED``.
    """
    scalar = _scalar(annotation)
    if scalar is not None:
        return Classification(scalar[0], width=scalar[1])

    base, _ = _strip(annotation)
    origin = typing.get_origin(base)
    args = typing.get_args(base)

    if origin in COLLECTION_TYPES:
        if origin is tuple:
            if len(args) != 2 or args[1] is not Ellipsis:
                return UNRECOGNIZED
        elif len(args) != 1:
            return UNRECOGNIZED
        element = args[0]
        scalar = _scalar(element)
        if scalar is not None:
            return Classification(list_kind(scalar[0]), width=scalar[1], container=origin)
        if origin is list and is_shape(_strip(element)[0]):
            return Classification(Kind.NESTED_LIST_OF_OBJECT, nested=_strip(element)[0])
        return UNRECOGNIZED

    if origin is dict and len(args) == 2:
        if _strip(args[0])[0] is not str:
            return UNRECOGNIZED
        scalar = _scalar(args[1])
        if scalar is not None:
            return Classification(map_kind(scalar[0]), width=scalar[1], container=dict)
        # Maps of nested objects are a known unsupported gap.
        return UNRECOGNIZED

    return UNRECOGNIZED


def declared_fields(shape: type) -> list[DeclaredField]:
    """List every declared field of *shape* with its resolved annotation."""
    if not is_shape(shape):
        raise ShapeError(
            ErrorCode.NOT_A_SHAPE,
            f"{shape!r} is neither a dataclass nor a pydantic model",
        )

    if issubclass(shape, BaseModel):
        result: list[DeclaredField] = []
        for name, info in shape.model_fields.items():
            annotation = info.annotation
            if info.metadata:
                annotation = Annotated[(annotation, *info.metadata)]
            extra = info.json_schema_extra if isinstance(info.json_schema_extra, dict) else {}
            result.append(DeclaredField(name, annotation, extra))
        return result

    try:
        hints = typing.get_type_hints(shape, include_extras=True)
    except (NameError, TypeError) as exc:
        raise ShapeError(
            ErrorCode.UNRECOGNIZED_KIND,
            f"cannot resolve annotations of {shape.__qualname__}: {exc}",
        ) from exc
    return [
        DeclaredField(f.name, hints.get(f.name, f.type), f.metadata, f.init)
        for f in dataclasses.fields(shape)
    ]


def build_descriptors(
    shape: type,
    *,
    name_tag: str = NAME_TAG,
    computed_tag: str = COMPUTED_TAG,
) -> tuple[FieldDescriptor, ...]:
    """Derive the ordered descriptors of *shape* (not recursing into nested shapes)."""
    descriptors: list[FieldDescriptor] = []
    seen: dict[str, str] = {}
    for declared in declared_fields(shape):
        if name_tag not in declared.tags:
            continue
        tag = declared.tags[name_tag]
        path = f"{shape.__qualname__}.{declared.name}"
        if not isinstance(tag, str) or not tag:
            raise ShapeError(
                ErrorCode.INVALID_TAG,
                f"tag {name_tag!r} must be a non-empty string, got {tag!r}",
                path=path,
            )
        if tag in seen:
            raise ShapeError(
                ErrorCode.DUPLICATE_TAG,
                f"tag {tag!r} already used by field {seen[tag]!r}",
                path=path,
            )
        found = classify(declared.annotation)
        if found.kind is Kind.UNRECOGNIZED:
            raise ShapeError(
                ErrorCode.UNRECOGNIZED_KIND,
                f"field type {declared.annotation!r} is not a supported kind",
                path=path,
                tag=tag,
            )
        seen[tag] = declared.name
        descriptors.append(
            FieldDescriptor(
                name=declared.name,
                tag=tag,
                kind=found.kind,
                computed=is_truthy_tag(declared.tags.get(computed_tag, False)),
                nested=found.nested,
                width=found.width,
                container=found.container,
                init=declared.init,
            )
        )
    return tuple(descriptors)
