"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, resourcemap.toml only contains
overrides. An empty file (or no file at all) is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class TagsConfig(BaseModel):
    """[tags] section: the tag keys read from field declarations."""

    model_config = {"frozen": True}

    name: str = "hcl"
    computed: str = "computed"

    @field_validator("name", "computed")
    @classmethod
    def _non_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("tag keys must be non-empty")
        return value


class EncodeConfig(BaseModel):
    """[encode] section."""

    model_config = {"frozen": True}

    sort_sets: bool = True


class DecodeConfig(BaseModel):
    """[decode] section."""

    model_config = {"frozen": True}

    accept_integral_floats: bool = True


class MappingConfig(BaseModel):
    """Root engine configuration composing all sections."""

    model_config = {"frozen": True}

    tags: TagsConfig = Field(default_factory=TagsConfig)
    encode: EncodeConfig = Field(default_factory=EncodeConfig)
    decode: DecodeConfig = Field(default_factory=DecodeConfig)
    trace: bool = False
