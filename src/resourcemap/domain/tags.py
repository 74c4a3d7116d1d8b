"""Tag vocabulary and declaration helpers.

A field becomes mappable by carrying the mapping-name tag; the computed tag
marks it host-managed (output only). Dataclasses carry tags in
``field(metadata=...)``, pydantic models in ``Field(json_schema_extra=...)``.
"""

from __future__ import annotations

import dataclasses
from typing import Any

from pydantic import Field

NAME_TAG = "hcl"
COMPUTED_TAG = "computed"


def attribute(
    name: str,
    *,
    computed: bool = False,
    default: Any = dataclasses.MISSING,
    default_factory: Any = dataclasses.MISSING,
    name_tag: str = NAME_TAG,
    computed_tag: str = COMPUTED_TAG,
    **kwargs: Any,
) -> Any:
    """Declare a tagged dataclass field.

    Usage::

        @dataclass
        class Network:
            name: str = attribute("name", default="")
            subnets: list[str] = attribute("subnets", default_factory=list)
            output: str = attribute("output", computed=True, default="")
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[name_tag] = name
    if computed:
        metadata[computed_tag] = True
    return dataclasses.field(
        default=default,
        default_factory=default_factory,
        metadata=metadata,
        **kwargs,
    )


def model_attribute(
    name: str,
    *,
    computed: bool = False,
    name_tag: str = NAME_TAG,
    computed_tag: str = COMPUTED_TAG,
    **kwargs: Any,
) -> Any:
    """Declare a tagged pydantic field (same tags as :func:`attribute`)."""
    extra = dict(kwargs.pop("json_schema_extra", None) or {})
    extra[name_tag] = name
    if computed:
        extra[computed_tag] = True
    return Field(json_schema_extra=extra, **kwargs)


def is_truthy_tag(value: object) -> bool:
    """Interpret a computed tag value (``True`` or the string ``"true"``)."""
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)
