"""(De)serialization between JSON:API documents and resources."""

from .base import JSONAPISerializer
from .deserialize import DeserializeOperation
from .serialize import (
    SerializationOptions,
    SerializeOperation,
    resource_linkage,
    serialize_linkage_data,
    serialize_to_one_linkage,
)

__all__ = [
    "DeserializeOperation",
    "JSONAPISerializer",
    "SerializationOptions",
    "SerializeOperation",
    "resource_linkage",
    "serialize_linkage_data",
    "serialize_to_one_linkage",
]
