"""Mapping engine: descriptor registry, encoder, and decoder."""

from resourcemap.engine.decoder import decode
from resourcemap.engine.encoder import encode
from resourcemap.engine.registry import DescriptorRegistry, registry_for, resolve

__all__ = ["DescriptorRegistry", "decode", "encode", "registry_for", "resolve"]
