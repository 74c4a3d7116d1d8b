"""Error taxonomy for shape resolution, encoding, and decoding.

Every failure carries a machine-readable :class:`ErrorCode`, a message, and
the dotted field path it occurred at (``first[0].second[1].value``).
Nested failures chain the inner error through ``__cause__``.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Machine-readable failure categories."""

    UNRECOGNIZED_KIND = "unrecognized_kind"
    DUPLICATE_TAG = "duplicate_tag"
    INVALID_TAG = "invalid_tag"
    NOT_A_SHAPE = "not_a_shape"
    UNSUPPORTED_KIND = "unsupported_kind"
    TYPE_MISMATCH = "type_mismatch"
    INTEGER_OVERFLOW = "integer_overflow"
    NESTED_ENCODE_FAILED = "nested_encode_failed"
    NESTED_DECODE_FAILED = "nested_decode_failed"
    CONSTRUCTION_FAILED = "construction_failed"


class MappingError(Exception):
    """Base class for every error raised by the mapping engine."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        *,
        path: str = "",
        **detail: Any,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.path = path
        self.detail = detail

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code.value!r}, {str(self)!r})"

    @property
    def root_cause(self) -> MappingError:
        """Innermost mapping error in the ``__cause__`` chain."""
        err: MappingError = self
        while isinstance(err.__cause__, MappingError):
            err = err.__cause__
        return err

    def to_dict(self) -> dict[str, Any]:
        """Structured payload for JSON output and service results."""
        payload: dict[str, Any] = {
            "code": self.code.value,
            "message": self.message,
            "path": self.path,
        }
        if self.detail:
            payload["detail"] = {k: str(v) for k, v in self.detail.items()}
        if isinstance(self.__cause__, MappingError):
            payload["cause"] = self.__cause__.to_dict()
        return payload


class ShapeError(MappingError):
    """A shape's declared fields cannot be mapped."""


class EncodeError(MappingError):
    """A typed object could not be encoded into a dynamic tree."""


class DecodeError(MappingError):
    """A dynamic tree could not be decoded into a typed object."""


def join_path(parent: str, child: str) -> str:
    """Join a field path segment onto *parent*.

    Examples:
        >>> join_path("", "first")
        'first'
        >>> join_path("first[0]", "second")
        'first[0].second'
        >>> join_path("first", "[2]")
        'first[2]'
    """
    if not parent:
        return child
    if child.startswith("["):
        return f"{parent}{child}"
    return f"{parent}.{child}"
