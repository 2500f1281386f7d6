"""Router that builds JSON:API URLs for resource types, relationships and queries."""

from __future__ import annotations

from typing import Any

import httpx

from jsonapi_client.formatting import AsIsKeyFormatter, KeyFormatter
from jsonapi_client.pagination import Pagination
from jsonapi_client.resources import Field, Relationship, Resource, ResourceFactory
from jsonapi_client.schemas import link_href
from jsonapi_client.utils import build_query_params, set_query_item

from .query import Filter, Query

QueryItems = list[tuple[str, str]]


class JSONAPIRouter:
    """Build URLs following the JSON:API recommendations.

    Resource collections live at ``{base_url}/{type}``, single resources at
    ``{base_url}/{type}/{id}``. Query criteria are encoded as ``include``,
    ``filter[...]``, ``fields[...]``, ``sort`` and ``page[...]`` parameters.
    Subclass and override ``query_item_for_filter`` or
    ``query_items_for_pagination`` to support other strategies.
    """

    def __init__(
        self,
        base_url: httpx.URL | str,
        key_formatter: KeyFormatter | None = None,
        resource_factory: ResourceFactory | None = None,
    ) -> None:
        self.base_url = httpx.URL(base_url)
        self.key_formatter = key_formatter or AsIsKeyFormatter()
        self.resource_factory = resource_factory

    def url_for_resource_type(self, resource_type: str) -> httpx.URL:
        """Return the URL of the collection of ``resource_type``."""
        return _append_path(self.base_url, resource_type)

    def url_for_relationship(self, relationship: Relationship, resource: Resource) -> httpx.URL:
        """Return the relationship URL of ``relationship`` on ``resource``.

        The relationship 'self' link from the last response is preferred.
        """
        key = self.key_formatter.format(relationship)
        self_url = _relationship_self_link(resource, key)
        if self_url is not None:
            return self.base_url.join(self_url)

        if resource.url is not None:
            resource_url = resource.url
        elif resource.id is not None:
            resource_url = _append_path(self.url_for_resource_type(resource.resource_type), resource.id)
        else:
            raise ValueError(f"{resource!r} does not have a URL, nor an id.")
        return _append_path(resource_url, "relationships", key)

    def url_for_query(self, query: Query) -> httpx.URL:
        """Return the URL that fetches the resources described by ``query``."""
        if query.url is not None:
            url = self.base_url.join(query.url)
            pre_built = True
        elif query.resource_type:
            url = self.url_for_resource_type(query.resource_type)
            pre_built = False
        else:
            raise ValueError("Cannot build a URL for a query without a URL or resource type.")

        items: QueryItems = list(url.params.multi_items())

        if not pre_built and query.resource_ids is not None:
            if len(query.resource_ids) == 1:
                url = _append_path(url, query.resource_ids[0])
            else:
                items = set_query_item(items, "filter[id]", ",".join(query.resource_ids))

        params: dict[str, Any] = {}
        if query.includes:
            params["include"] = [self._resolve_include(query, include) for include in query.includes]
        if query.fields:
            params["fields"] = {
                resource_type: [self._key_for_type(query, resource_type, name) for name in names]
                for resource_type, names in query.fields.items()
            }
        if query.sort_descriptors:
            params["sort"] = [
                {
                    "field": self._key_for_type(query, query.resource_type, descriptor.field_name),
                    "direction": "asc" if descriptor.ascending else "desc",
                }
                for descriptor in query.sort_descriptors
            ]
        encoded = build_query_params(params)

        for name, value in encoded:
            if name == "include":
                items = set_query_item(items, name, value)

        for filter_ in query.filters:
            field = query.resource_class.field_named(filter_.field_name) if query.resource_class else None
            name, value = self.query_item_for_filter(filter_, field)
            items = set_query_item(items, name, value)

        for name, value in encoded:
            if name != "include":
                items = set_query_item(items, name, value)

        if query.pagination is not None:
            for name, value in self.query_items_for_pagination(query.pagination):
                items = set_query_item(items, name, value)

        return url.copy_with(params=items) if items else url

    def query_item_for_filter(self, filter_: Filter, field: Field | None) -> tuple[str, str]:
        """Return the query item for ``filter_``.

        Equality filters become ``filter[key]``, other operators become
        ``filter[key][operator]``.
        """
        key = self.key_formatter.format(field) if field is not None else filter_.field_name
        (item,) = build_query_params(
            {"filter": {key: {"op": filter_.operator, "val": filter_.value}}}
        )
        return item

    def query_items_for_pagination(self, pagination: Pagination) -> QueryItems:
        return list(pagination.get_query_params().items())

    def _resolve_include(self, query: Query, include: str) -> str:
        resource_class = query.resource_class
        keys = []
        for part in include.split("."):
            field = resource_class.field_named(part) if resource_class is not None else None
            if not isinstance(field, Relationship):
                keys.append(part)
                resource_class = None
                continue
            keys.append(self.key_formatter.format(field))
            resource_class = self._linked_class(field)
        return ".".join(keys)

    def _linked_class(self, relationship: Relationship) -> type[Resource] | None:
        if not isinstance(relationship.linked_type, str):
            return relationship.linked_type
        if self.resource_factory and self.resource_factory.is_registered(relationship.linked_type):
            return self.resource_factory.resource_class(relationship.linked_type)
        return None

    def _key_for_type(self, query: Query, resource_type: str | None, field_name: str) -> str:
        resource_class = None
        if resource_type and resource_type == query.resource_type:
            resource_class = query.resource_class
        elif resource_type and self.resource_factory and self.resource_factory.is_registered(resource_type):
            resource_class = self.resource_factory.resource_class(resource_type)
        field = resource_class.field_named(field_name) if resource_class else None
        return self.key_formatter.format(field) if field is not None else field_name


def _append_path(url: httpx.URL, *segments: str) -> httpx.URL:
    path = url.path.rstrip("/")
    for segment in segments:
        path = f"{path}/{segment.strip('/')}"
    return url.copy_with(path=path)


def _relationship_self_link(resource: Resource, key: str) -> str | None:
    relationship = (resource.relationships or {}).get(key)
    if not isinstance(relationship, dict):
        return None
    return link_href((relationship.get("links") or {}).get("self"))
