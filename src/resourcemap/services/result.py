"""OperationResult and OperationError: the service-layer contract.

INVARIANT: All service-layer methods return OperationResult; mapping
failures are carried in ``error`` instead of raised. The CLI consumes this
type for both human and JSON output.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from resourcemap.domain.errors import MappingError


class OperationError(BaseModel):
    """Structured error payload within an OperationResult."""

    model_config = {"frozen": True}

    code: str
    message: str
    path: str = ""
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: MappingError) -> OperationError:
        """Flatten a MappingError (and its cause chain) into a payload."""
        payload = exc.to_dict()
        detail = dict(payload.get("detail", {}))
        if "cause" in payload:
            detail["cause"] = payload["cause"]
        return cls(code=exc.code.value, message=exc.message, path=exc.path, detail=detail)


class OperationResult(BaseModel):
    """Return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"describe"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: OperationError | None = None
