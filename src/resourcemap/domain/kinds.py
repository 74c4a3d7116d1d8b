"""Field kinds, integer widths, and dynamic value classification.

The dynamic tree crossing the host boundary is made of plain Python values:
``str``, ``int``, ``float``, ``bool``, ``list`` and ``str``-keyed ``dict``.
:class:`Kind` is the closed set of shapes a mappable field (or a dynamic
node) can take; encode and decode dispatch on it exhaustively.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Annotated, Any


class Kind(StrEnum):
    """Every kind a mappable field may resolve to."""

    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    BOOL = "bool"
    LIST_OF_STRING = "list_of_string"
    LIST_OF_INTEGER = "list_of_integer"
    LIST_OF_FLOAT = "list_of_float"
    LIST_OF_BOOL = "list_of_bool"
    MAP_OF_STRING = "map_of_string"
    MAP_OF_INTEGER = "map_of_integer"
    MAP_OF_FLOAT = "map_of_float"
    MAP_OF_BOOL = "map_of_bool"
    NESTED_LIST_OF_OBJECT = "nested_list_of_object"
    UNRECOGNIZED = "unrecognized"

    @property
    def is_scalar(self) -> bool:
        return self in _SCALARS

    @property
    def is_list(self) -> bool:
        return self in _LIST_OF

    @property
    def is_map(self) -> bool:
        return self in _MAP_OF

    @property
    def element(self) -> Kind:
        """Scalar kind of a list/map element (the kind itself for scalars)."""
        if self.is_list:
            return _LIST_OF[self]
        if self.is_map:
            return _MAP_OF[self]
        return self


_SCALARS = frozenset({Kind.STRING, Kind.INTEGER, Kind.FLOAT, Kind.BOOL})

_LIST_OF: dict[Kind, Kind] = {
    Kind.LIST_OF_STRING: Kind.STRING,
    Kind.LIST_OF_INTEGER: Kind.INTEGER,
    Kind.LIST_OF_FLOAT: Kind.FLOAT,
    Kind.LIST_OF_BOOL: Kind.BOOL,
}

_MAP_OF: dict[Kind, Kind] = {
    Kind.MAP_OF_STRING: Kind.STRING,
    Kind.MAP_OF_INTEGER: Kind.INTEGER,
    Kind.MAP_OF_FLOAT: Kind.FLOAT,
    Kind.MAP_OF_BOOL: Kind.BOOL,
}


def list_kind(element: Kind) -> Kind:
    """Return the list kind holding *element* scalars."""
    return {v: k for k, v in _LIST_OF.items()}[element]


def map_kind(element: Kind) -> Kind:
    """Return the map kind holding *element* scalars."""
    return {v: k for k, v in _MAP_OF.items()}[element]


# Python type -> scalar kind. ``bool`` must stay ahead of ``int`` wherever
# isinstance checks are used, since ``bool`` subclasses ``int``.
SCALAR_TYPES: dict[type, Kind] = {
    str: Kind.STRING,
    bool: Kind.BOOL,
    int: Kind.INTEGER,
    float: Kind.FLOAT,
}

ZERO_VALUES: dict[Kind, Any] = {
    Kind.STRING: "",
    Kind.INTEGER: 0,
    Kind.FLOAT: 0.0,
    Kind.BOOL: False,
}


# --- Integer widths ---


@dataclass(frozen=True)
class IntWidth:
    """Native width of an integer field, attached via ``Annotated``."""

    bits: int = 64
    signed: bool = True

    @property
    def min_value(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max_value(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    def fits(self, value: int) -> bool:
        return self.min_value <= value <= self.max_value

    def __str__(self) -> str:
        return f"{'int' if self.signed else 'uint'}{self.bits}"


INT64 = IntWidth(64, signed=True)
"""Width of the normalized integer representation in the dynamic tree."""

Int8 = Annotated[int, IntWidth(8)]
Int16 = Annotated[int, IntWidth(16)]
Int32 = Annotated[int, IntWidth(32)]
Int64 = Annotated[int, IntWidth(64)]
UInt8 = Annotated[int, IntWidth(8, signed=False)]
UInt16 = Annotated[int, IntWidth(16, signed=False)]
UInt32 = Annotated[int, IntWidth(32, signed=False)]
UInt64 = Annotated[int, IntWidth(64, signed=False)]


# --- Dynamic node classification ---


def scalar_kind(value: object) -> Kind:
    """Classify a single scalar value, or ``UNRECOGNIZED``."""
    if isinstance(value, bool):
        return Kind.BOOL
    if isinstance(value, int):
        return Kind.INTEGER
    if isinstance(value, float):
        return Kind.FLOAT
    if isinstance(value, str):
        return Kind.STRING
    return Kind.UNRECOGNIZED


def node_kind(value: object) -> Kind:
    """Classify a dynamic tree node.

    Empty containers are ambiguous; they report the string element kind for
    lists and maps, which is only used in diagnostics. A list whose first
    element is a mapping is a nested list of objects.
    """
    kind = scalar_kind(value)
    if kind is not Kind.UNRECOGNIZED:
        return kind
    if isinstance(value, (list, tuple)):
        if not value:
            return Kind.LIST_OF_STRING
        if isinstance(value[0], Mapping):
            return Kind.NESTED_LIST_OF_OBJECT
        element = scalar_kind(value[0])
        if element is Kind.UNRECOGNIZED:
            return Kind.UNRECOGNIZED
        return list_kind(element)
    if isinstance(value, Mapping):
        if not value:
            return Kind.MAP_OF_STRING
        element = scalar_kind(next(iter(value.values())))
        if element is Kind.UNRECOGNIZED:
            return Kind.UNRECOGNIZED
        return map_kind(element)
    return Kind.UNRECOGNIZED
