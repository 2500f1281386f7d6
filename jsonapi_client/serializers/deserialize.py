"""Deserialization of JSON:API documents into pooled resource graphs."""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable

import httpx
from pydantic import ValidationError

from jsonapi_client.core.document import JSONAPIDocument
from jsonapi_client.core.errors import (
    APIError,
    InvalidDocumentStructure,
    InvalidResourceStructure,
    ResourceIDMissing,
    ResourceTypeMissing,
    SerializerError,
    TopLevelDataAndErrorsCoexist,
    TopLevelEntryMissing,
)
from jsonapi_client.formatting.keys import AsIsKeyFormatter, KeyFormatter
from jsonapi_client.formatting.values import ValueFormatterRegistry
from jsonapi_client.pagination import PaginationData
from jsonapi_client.resources import (
    LinkedResourceCollection,
    Resource,
    ResourceFactory,
    ResourceIdentifier,
    ToManyRelationship,
    ToOneRelationship,
)
from jsonapi_client.schemas import (
    JSONAPIRelationship,
    JSONAPIResource,
    JSONAPIResourceIdentifier,
    JSONAPITopLevel,
    link_href,
)

logger = logging.getLogger(__name__)

TOP_LEVEL_ENTRIES = ("data", "errors", "meta")
SNAPSHOT_ATTRIBUTES = ("id", "url", "meta", "relationships", "is_loaded")


class DeserializeOperation:
    """Deserialize a single JSON:API document into resources.

    Every resource that is encountered, as primary data, as included data or
    as relationship linkage, is dispensed from one pool. Each (type, id) pair
    therefore maps onto exactly one resource instance, which makes shared and
    cyclic relationships resolve to the same objects.

    After ``start()`` either ``result`` holds the document or ``error`` holds
    the ``SerializerError`` that aborted deserialization.
    """

    def __init__(
        self,
        data: bytes | str | Any,
        resource_factory: ResourceFactory,
        value_formatters: ValueFormatterRegistry | None = None,
        key_formatter: KeyFormatter | None = None,
    ) -> None:
        self.data = data
        self.resource_factory = resource_factory
        self.value_formatters = value_formatters or ValueFormatterRegistry.default_registry()
        self.key_formatter = key_formatter or AsIsKeyFormatter()

        self.result: JSONAPIDocument | None = None
        self.error: SerializerError | None = None

        self._resource_pool: list[Resource] = []
        self._mapping_targets: list[Resource] = []

    def add_mapping_targets(self, targets: Iterable[Resource]) -> None:
        """Deserialize onto ``targets`` instead of creating new resources.

        Targets are matched by type and id first, then by their position
        within the primary data.
        """
        for resource in targets:
            if resource.is_loaded:
                raise ValueError(f"Cannot map onto loaded resource {resource!r}.")
            self._mapping_targets.append(resource)

    def start(self) -> JSONAPIDocument | None:
        """Run the operation and return the document, or None on failure."""
        self._resource_pool = list(self._mapping_targets)
        saved = [_snapshot(target) for target in self._mapping_targets]
        try:
            self.result = self._deserialize()
        except SerializerError as exc:
            logger.warning("Could not deserialize document: %s", exc)
            # Mapping targets are left as they were before this document.
            for target, state in zip(self._mapping_targets, saved):
                _restore(target, state)
            self.error = exc
            self.result = None
        return self.result

    def _deserialize(self) -> JSONAPIDocument:
        document = self._load_document()
        top_level = self._validate_top_level(document)

        primary: list[Resource] | None = None
        if "data" in document:
            primary = self._extract_primary(document["data"])

        included: list[Resource] | None = None
        if top_level.included is not None:
            included = [self._deserialize_resource(item) for item in top_level.included]

        errors = None
        if top_level.errors is not None:
            errors = [
                APIError.from_error_object(error.model_dump(exclude_none=True))
                for error in top_level.errors
            ]

        links = self._extract_links(top_level.links)
        self._resolve_relationships()

        logger.debug(
            "Deserialized %d primary and %d included resources into a pool of %d",
            len(primary or []),
            len(included or []),
            len(self._resource_pool),
        )

        return JSONAPIDocument(
            data=primary,
            included=included,
            errors=errors,
            meta=top_level.meta,
            links=links,
            jsonapi=top_level.jsonapi,
            pagination=PaginationData.from_document(links, top_level.meta),
        )

    # Document structure

    def _load_document(self) -> Any:
        if isinstance(self.data, (bytes, bytearray, str)):
            try:
                return json.loads(self.data)
            except ValueError as exc:
                raise InvalidDocumentStructure(f"The given data is not valid JSON: {exc}") from exc
        return self.data

    def _validate_top_level(self, document: Any) -> JSONAPITopLevel:
        if not isinstance(document, dict):
            raise InvalidDocumentStructure()
        if not any(entry in document for entry in TOP_LEVEL_ENTRIES):
            raise TopLevelEntryMissing()
        if "data" in document and "errors" in document:
            raise TopLevelDataAndErrorsCoexist()
        try:
            return JSONAPITopLevel.model_validate(document)
        except ValidationError as exc:
            raise InvalidDocumentStructure(str(exc)) from exc

    def _extract_primary(self, data: Any) -> list[Resource]:
        if data is None:
            return []
        if isinstance(data, list):
            return [
                self._deserialize_resource(representation, mapping_target_index=index)
                for index, representation in enumerate(data)
            ]
        if isinstance(data, dict):
            return [self._deserialize_resource(data, mapping_target_index=0)]
        raise InvalidDocumentStructure("Top level 'data' must be an object, an array or null.")

    # Resources

    def _deserialize_resource(
        self, representation: Any, mapping_target_index: int | None = None
    ) -> Resource:
        if not isinstance(representation, dict):
            raise InvalidResourceStructure()
        if not isinstance(representation.get("type"), str) or not representation["type"]:
            raise ResourceTypeMissing()
        if representation.get("id") is None:
            raise ResourceIDMissing()
        try:
            parsed = JSONAPIResource.model_validate(representation)
        except ValidationError as exc:
            raise InvalidResourceStructure(str(exc)) from exc

        resource = self._dispense(parsed.type, parsed.id, mapping_target_index)
        resource.id = parsed.id

        self_link = link_href((parsed.links or {}).get("self"))
        if self_link is not None:
            resource.url = _parse_url(self_link)

        if parsed.meta is not None and resource.supports_meta:
            resource.meta = parsed.meta

        if "relationships" in representation:
            resource.relationships = representation["relationships"]

        self._extract_attributes(parsed, resource)
        self._extract_relationships(parsed, resource)

        resource.is_loaded = True
        return resource

    def _dispense(self, resource_type: str, resource_id: str, index: int | None = None) -> Resource:
        # Mapping targets head the pool, so a positional match is only valid
        # while the index points into the targets of this type.
        if index is not None:
            targets = sum(1 for target in self._mapping_targets if target.resource_type == resource_type)
            if index >= targets:
                index = None
        return self.resource_factory.dispense(
            resource_type, resource_id, self._resource_pool, index=index
        )

    def _extract_attributes(self, parsed: JSONAPIResource, resource: Resource) -> None:
        attributes = parsed.attributes or {}
        for field in resource.fields:
            if field.is_relationship:
                continue
            key = self.key_formatter.format(field)
            if key not in attributes:
                continue
            value = attributes[key]
            if value is None:
                resource.set_value(field.name, None)
            else:
                resource.set_value(field.name, self.value_formatters.unformat(value, field))

    # Relationships

    def _extract_relationships(self, parsed: JSONAPIResource, resource: Resource) -> None:
        relationships = parsed.relationships or {}
        for field in resource.fields:
            relationship = relationships.get(self.key_formatter.format(field))
            if relationship is None:
                continue
            if isinstance(field, ToOneRelationship):
                self._extract_to_one(relationship, field, resource)
            elif isinstance(field, ToManyRelationship):
                self._extract_to_many(relationship, field, resource)

    def _extract_to_one(
        self, relationship: JSONAPIRelationship, field: ToOneRelationship, resource: Resource
    ) -> None:
        related_url = relationship.link("related")

        if relationship.has_linkage:
            linkage = relationship.data
            if linkage is None:
                resource.set_value(field.name, None)
                return
            if not isinstance(linkage, JSONAPIResourceIdentifier):
                logger.warning(
                    "Ignoring array linkage for to-one relationship %r of %r",
                    field.name,
                    resource,
                )
                return
            linked = self._dispense(linkage.type, linkage.id)
            if related_url is not None and linked.url is None:
                linked.url = _parse_url(related_url)
            resource.set_value(field.name, linked)

        elif related_url is not None:
            linked = self.resource_factory.instantiate(field.linked_type_name)
            linked.url = _parse_url(related_url)
            resource.set_value(field.name, linked)

    def _extract_to_many(
        self, relationship: JSONAPIRelationship, field: ToManyRelationship, resource: Resource
    ) -> None:
        resources_url = relationship.link("related")
        link_url = relationship.link("self")

        linkage = None
        if relationship.has_linkage and isinstance(relationship.data, list):
            linkage = [ResourceIdentifier(item.type, item.id) for item in relationship.data]

        if resources_url is None and link_url is None and linkage is None:
            return

        collection = LinkedResourceCollection(
            resources_url=_parse_url(resources_url) if resources_url is not None else None,
            link_url=_parse_url(link_url) if link_url is not None else None,
            linkage=linkage,
        )
        resource.set_value(field.name, collection)

    def _resolve_relationships(self) -> None:
        """Fill to-many collections whose linked resources are all in the pool.

        A collection is only filled when every linked resource was loaded
        from this document. Otherwise it keeps its linkage and stays unloaded.
        """
        for resource in self._resource_pool:
            for field in resource.fields:
                if not isinstance(field, ToManyRelationship):
                    continue
                collection = resource.value_for_field(field.name)
                if not isinstance(collection, LinkedResourceCollection):
                    continue
                if collection.linkage is None:
                    continue

                targets = [self._find_loaded(link) for link in collection.linkage]
                if all(target is not None for target in targets):
                    collection.resources = targets
                    collection.is_loaded = True
                else:
                    logger.debug(
                        "Cannot resolve to-many relationship %r of %r, "
                        "not all linked resources are included",
                        field.name,
                        resource,
                    )

    def _find_loaded(self, identifier: ResourceIdentifier) -> Resource | None:
        for resource in self._resource_pool:
            if (
                resource.resource_type == identifier.type
                and resource.id == identifier.id
                and resource.is_loaded
            ):
                return resource
        return None

    # Links

    def _extract_links(self, links: dict[str, Any] | None) -> dict[str, httpx.URL] | None:
        if links is None:
            return None
        extracted: dict[str, httpx.URL] = {}
        for name, value in links.items():
            href = link_href(value)
            if href is None:
                continue
            url = _parse_url(href)
            if url is not None:
                extracted[name] = url
        return extracted


def _snapshot(resource: Resource) -> dict[str, Any]:
    state = {name: getattr(resource, name) for name in SNAPSHOT_ATTRIBUTES}
    state["_values"] = dict(resource._values)
    return state


def _restore(resource: Resource, state: dict[str, Any]) -> None:
    for name, value in state.items():
        setattr(resource, name, value)


def _parse_url(value: str) -> httpx.URL | None:
    try:
        return httpx.URL(value)
    except httpx.InvalidURL:
        logger.warning("Ignoring invalid URL %r", value)
        return None
