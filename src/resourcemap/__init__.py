"""resourcemap: tag-driven mapping between typed objects and dynamic value trees."""

from resourcemap.config.models import MappingConfig
from resourcemap.domain.descriptors import FieldDescriptor
from resourcemap.domain.errors import DecodeError, EncodeError, ErrorCode, MappingError, ShapeError
from resourcemap.domain.kinds import (
    Int8,
    Int16,
    Int32,
    Int64,
    IntWidth,
    Kind,
    UInt8,
    UInt16,
    UInt32,
    UInt64,
)
from resourcemap.domain.tags import attribute, model_attribute
from resourcemap.engine import DescriptorRegistry, decode, encode, registry_for, resolve
from resourcemap.services.metadata import ResourceMetaData

__version__ = "0.1.0"

__all__ = [
    "DecodeError",
    "DescriptorRegistry",
    "EncodeError",
    "ErrorCode",
    "FieldDescriptor",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "IntWidth",
    "Kind",
    "MappingConfig",
    "MappingError",
    "ResourceMetaData",
    "ShapeError",
    "UInt8",
    "UInt16",
    "UInt32",
    "UInt64",
    "__version__",
    "attribute",
    "decode",
    "encode",
    "model_attribute",
    "registry_for",
    "resolve",
]
