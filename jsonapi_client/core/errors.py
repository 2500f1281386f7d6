"""Error taxonomy for JSON:API (de)serialization and API error records."""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel


class JSONAPIClientError(Exception):
    """Base class for all errors raised by this package."""


class SerializerError(JSONAPIClientError):
    """A document could not be (de)serialized."""

    message = "Unknown serializer error."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class InvalidDocumentStructure(SerializerError):
    """The given JSON is not an object (hash)."""

    message = "The given JSON document is not an object."


class TopLevelEntryMissing(SerializerError):
    """None of 'data', 'errors' or 'meta' is present in the top level."""

    message = "None of 'data', 'errors' or 'meta' is present in the top level."


class TopLevelDataAndErrorsCoexist(SerializerError):
    """Top level 'data' and 'errors' coexist in the same document."""

    message = "Top level 'data' and 'errors' coexist in the same document."


class InvalidResourceStructure(SerializerError):
    """A resource object is not an object (hash)."""

    message = "The given resource object is not an object."


class ResourceTypeMissing(SerializerError):
    """A resource object has no 'type' member."""

    message = "The 'type' member is missing from a resource object."


class ResourceIDMissing(SerializerError):
    """A resource object has no 'id' member."""

    message = "The 'id' member is missing from a resource object."


class ResourceTypeUnregistered(SerializerError):
    """A resource type was encountered that has no registered resource class."""

    def __init__(self, resource_type: str) -> None:
        self.resource_type = resource_type
        super().__init__(
            f"Cannot instantiate resource of type {resource_type!r}. "
            "Register a resource class for this type first."
        )


class JSONSerializationError(SerializerError):
    """The JSON encoder rejected the serialized document."""

    def __init__(self, original: Exception) -> None:
        self.original = original
        super().__init__(f"Could not encode document as JSON: {original}")


class APIError(BaseModel):
    """A single error object returned by the API."""

    id: str | None = None
    status: str | None = None
    code: str | None = None
    title: str | None = None
    detail: str | None = None
    source_pointer: str | None = None
    source_parameter: str | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def from_error_object(cls, error: Mapping[str, Any]) -> APIError:
        """Return an APIError copied from a JSON:API error object."""
        source = error.get("source") or {}
        return cls(
            id=_string_or_none(error.get("id")),
            status=_string_or_none(error.get("status")),
            code=_string_or_none(error.get("code")),
            title=error.get("title"),
            detail=error.get("detail"),
            source_pointer=source.get("pointer"),
            source_parameter=source.get("parameter"),
            meta=error.get("meta"),
        )

    def to_error_object(self) -> dict[str, Any]:
        """Return the JSON:API error object for this error."""
        error: dict[str, Any] = {}
        for key in ("id", "status", "code", "title", "detail"):
            value = getattr(self, key)
            if value is not None:
                error[key] = value
        source: dict[str, str] = {}
        if self.source_pointer is not None:
            source["pointer"] = self.source_pointer
        if self.source_parameter is not None:
            source["parameter"] = self.source_parameter
        if source:
            error["source"] = source
        if self.meta is not None:
            error["meta"] = self.meta
        return error


def _string_or_none(value: Any) -> str | None:
    # Some servers send numeric status codes and ids.
    return None if value is None else str(value)
