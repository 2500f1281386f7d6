"""Serialization of resources into JSON:API documents."""

from __future__ import annotations

import enum
import json
import logging
from typing import Any, Iterable, Sequence

from jsonapi_client.core.document import JSONAPIDocumentBuilder
from jsonapi_client.core.errors import JSONSerializationError, SerializerError
from jsonapi_client.formatting.keys import AsIsKeyFormatter, KeyFormatter
from jsonapi_client.formatting.values import ValueFormatterRegistry
from jsonapi_client.resources import (
    LinkedResourceCollection,
    Resource,
    ResourceCollection,
    ToManyRelationship,
    ToOneRelationship,
)

logger = logging.getLogger(__name__)


class SerializationOptions(enum.Flag):
    """Toggle which parts of a resource end up in the serialized document."""

    NONE = 0

    # Include the resource id, when the resource has one.
    INCLUDE_ID = enum.auto()

    # Include to-one relationship linkage.
    INCLUDE_TO_ONE = enum.auto()

    # Include to-many relationship linkage.
    INCLUDE_TO_MANY = enum.auto()

    # Leave out attributes without a value instead of sending null.
    OMIT_NULL_VALUES = enum.auto()

    @classmethod
    def default(cls) -> SerializationOptions:
        return cls.INCLUDE_ID

    @classmethod
    def from_names(cls, names: Iterable[str]) -> SerializationOptions:
        """Return the options named in ``names``, eg. ["INCLUDE_ID", "INCLUDE_TO_ONE"]."""
        options = cls.NONE
        for name in names:
            try:
                options |= cls[name.upper()]
            except KeyError:
                raise ValueError(f"Unknown serialization option {name!r}.") from None
        return options


class SerializeOperation:
    """Serialize resources into a JSON:API document.

    A single resource is serialized as a resource object under 'data', several
    resources as an array of resource objects. To-many relationships are
    serialized with their full current linkage. Changes tracked by
    ``LinkedResourceCollection`` are sent separately, see
    ``serialize_linkage_data``.
    """

    def __init__(
        self,
        resources: Sequence[Resource],
        value_formatters: ValueFormatterRegistry | None = None,
        key_formatter: KeyFormatter | None = None,
        options: SerializationOptions = SerializationOptions.INCLUDE_ID,
    ) -> None:
        self.resources = list(resources)
        self.value_formatters = value_formatters or ValueFormatterRegistry.default_registry()
        self.key_formatter = key_formatter or AsIsKeyFormatter()
        self.options = options
        self.document_builder = JSONAPIDocumentBuilder()

        self.result: bytes | None = None
        self.error: SerializerError | None = None

    def start(self) -> bytes | None:
        """Run the operation and return the encoded document, or None on failure."""
        try:
            self.result = encode_document(self.build_document())
        except SerializerError as exc:
            logger.warning("Could not serialize resources: %s", exc)
            self.error = exc
            self.result = None
        return self.result

    def build_document(self) -> dict[str, Any]:
        """Return the document as JSON compatible Python values."""
        if len(self.resources) == 1:
            return self.document_builder.build_single(self.serialize_resource(self.resources[0]))
        return self.document_builder.build_collection(
            self.serialize_resource(resource) for resource in self.resources
        )

    def serialize_resource(self, resource: Resource) -> dict[str, Any]:
        """Return the resource object for ``resource``."""
        serialized: dict[str, Any] = {}

        if SerializationOptions.INCLUDE_ID in self.options and resource.id is not None:
            serialized["id"] = resource.id

        serialized["type"] = resource.resource_type

        attributes = self._serialize_attributes(resource)
        if attributes:
            serialized["attributes"] = attributes

        relationships = self._serialize_relationships(resource)
        if relationships:
            serialized["relationships"] = relationships

        return serialized

    def _serialize_attributes(self, resource: Resource) -> dict[str, Any]:
        attributes: dict[str, Any] = {}
        for field in resource.fields:
            if field.is_relationship or field.is_read_only:
                continue
            key = self.key_formatter.format(field)
            value = resource.value_for_field(field.name)
            if value is None:
                if SerializationOptions.OMIT_NULL_VALUES not in self.options:
                    attributes[key] = None
                continue
            attributes[key] = self.value_formatters.format(value, field)
        return attributes

    def _serialize_relationships(self, resource: Resource) -> dict[str, Any]:
        relationships: dict[str, Any] = {}
        for field in resource.fields:
            if field.is_read_only:
                continue
            key = self.key_formatter.format(field)
            if isinstance(field, ToOneRelationship):
                if SerializationOptions.INCLUDE_TO_ONE in self.options:
                    linked = resource.value_for_field(field.name)
                    relationships[key] = {"data": _to_one_linkage(linked)}
            elif isinstance(field, ToManyRelationship):
                if SerializationOptions.INCLUDE_TO_MANY in self.options:
                    linked = resource.value_for_field(field.name)
                    relationships[key] = {"data": _to_many_linkage(linked)}
        return relationships


def serialize_linkage_data(resources: Iterable[Resource]) -> bytes:
    """Return a relationship document with linkage for ``resources``.

    Used for to-many relationship updates, with the added resources of a
    ``LinkedResourceCollection`` for POST and the removed resources for DELETE.
    """
    builder = JSONAPIDocumentBuilder()
    return encode_document(builder.build_collection(resource_linkage(r) for r in resources))


def serialize_to_one_linkage(resource: Resource | None) -> bytes:
    """Return a relationship document for a to-one relationship update."""
    builder = JSONAPIDocumentBuilder()
    linkage = None if resource is None else resource_linkage(resource)
    return encode_document(builder.build_single(linkage))


def resource_linkage(resource: Resource) -> dict[str, str]:
    """Return the resource identifier object of ``resource``."""
    if resource.id is None:
        raise ValueError(f"Cannot convert {resource!r} to linkage, it does not have an id.")
    return {"type": resource.resource_type, "id": resource.id}


def encode_document(document: dict[str, Any]) -> bytes:
    """Encode ``document`` as UTF-8 JSON."""
    try:
        return json.dumps(document, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise JSONSerializationError(exc) from exc


def _to_one_linkage(linked: Any) -> dict[str, str] | None:
    if isinstance(linked, Resource) and linked.id is not None:
        return {"type": linked.resource_type, "id": linked.id}
    return None


def _to_many_linkage(linked: Any) -> list[dict[str, str]]:
    if not isinstance(linked, ResourceCollection):
        return []
    identifiers = [resource.identifier for resource in linked.resources if resource.id is not None]

    # An unloaded linked collection only knows its members through linkage.
    if isinstance(linked, LinkedResourceCollection) and not linked.is_loaded and linked.linkage:
        removed = {resource.identifier for resource in linked.removed_resources}
        known = [identifier for identifier in linked.linkage if identifier not in removed]
        identifiers = known + [identifier for identifier in identifiers if identifier not in known]

    return [identifier.to_dict() for identifier in identifiers]
