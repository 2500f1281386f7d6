"""Core JSON:API document and error types."""

from .document import JSONAPIDocument, JSONAPIDocumentBuilder
from .errors import (
    APIError,
    InvalidDocumentStructure,
    InvalidResourceStructure,
    JSONAPIClientError,
    JSONSerializationError,
    ResourceIDMissing,
    ResourceTypeMissing,
    ResourceTypeUnregistered,
    SerializerError,
    TopLevelDataAndErrorsCoexist,
    TopLevelEntryMissing,
)

__all__ = [
    "APIError",
    "InvalidDocumentStructure",
    "InvalidResourceStructure",
    "JSONAPIClientError",
    "JSONAPIDocument",
    "JSONAPIDocumentBuilder",
    "JSONSerializationError",
    "ResourceIDMissing",
    "ResourceTypeMissing",
    "ResourceTypeUnregistered",
    "SerializerError",
    "TopLevelDataAndErrorsCoexist",
    "TopLevelEntryMissing",
]
