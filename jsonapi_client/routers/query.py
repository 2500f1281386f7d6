"""Queries describe which resources to fetch from a JSON:API server."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from jsonapi_client.pagination import Pagination
from jsonapi_client.resources import Relationship, Resource, ResourceCollection

FILTER_OPERATORS = frozenset({"eq", "ne", "lt", "le", "gt", "ge", "like", "in"})


@dataclass(frozen=True)
class Filter:
    """A comparison of a field against a constant value."""

    field_name: str
    value: Any
    operator: str = "eq"


@dataclass(frozen=True)
class SortDescriptor:
    field_name: str
    ascending: bool = True


class Query:
    """Search criteria used to retrieve resources.

    Builder methods return the query so calls can be chained::

        query = (
            Query(Post)
            .include("author", "comments")
            .where("title", "Hello")
            .add_descending_order("published_at")
            .paginate(PageBasedPagination(page_number=1, page_size=20))
        )
    """

    def __init__(
        self,
        resource_class: type[Resource] | None,
        resource_ids: list[str] | None = None,
        *,
        url: httpx.URL | str | None = None,
    ) -> None:
        self.resource_class = resource_class
        self.resource_type = resource_class.resource_type if resource_class else None
        self.resource_ids = list(resource_ids) if resource_ids is not None else None
        self.url = httpx.URL(url) if isinstance(url, str) else url
        self.includes: list[str] = []
        self.filters: list[Filter] = []
        self.fields: dict[str, list[str]] = {}
        self.sort_descriptors: list[SortDescriptor] = []
        self.pagination: Pagination | None = None

    @classmethod
    def for_resource(cls, resource: Resource) -> Query:
        """Return a query that fetches ``resource``."""
        if resource.id is None:
            raise ValueError(f"Cannot build a query for {resource!r}, it does not have an id.")
        return cls(type(resource), [resource.id], url=resource.url)

    @classmethod
    def for_collection(
        cls,
        collection: ResourceCollection,
        resource_class: type[Resource] | None = None,
    ) -> Query:
        """Return a query that fetches the resources of ``collection``."""
        if collection.resources_url is None:
            raise ValueError(f"Cannot build a query for {collection!r}, it does not have a URL.")
        return cls(resource_class, url=collection.resources_url)

    @classmethod
    def for_url(cls, resource_class: type[Resource], url: httpx.URL | str) -> Query:
        """Return a query that fetches resources from ``url``."""
        return cls(resource_class, url=url)

    # Includes

    def include(self, *relationships: str) -> Query:
        """Include related resources, given as dot separated relationship paths."""
        for relationship in relationships:
            self._require_relationship(relationship)
            if relationship not in self.includes:
                self.includes.append(relationship)
        return self

    def remove_include(self, *relationships: str) -> Query:
        for relationship in relationships:
            if relationship not in self.includes:
                raise ValueError(f"Relationship {relationship!r} was not included.")
            self.includes.remove(relationship)
        return self

    # Filtering

    def where(self, field_name: str, value: Any, operator: str = "eq") -> Query:
        """Filter on ``field_name`` compared to ``value``."""
        if operator not in FILTER_OPERATORS:
            raise ValueError(f"Unknown filter operator {operator!r}.")
        self.filters.append(Filter(field_name, value, operator))
        return self

    def where_relationship(self, relationship: str, resource: Resource) -> Query:
        """Filter on a relationship pointing to, or containing, ``resource``."""
        if resource.id is None:
            raise ValueError("Cannot filter on a relationship to a resource without an id.")
        self._require_relationship(relationship)
        self.filters.append(Filter(relationship, resource.id))
        return self

    # Sparse fieldsets

    def restrict_fields_to(self, *field_names: str) -> Query:
        """Only fetch the given fields of the queried resource type."""
        if self.resource_type is None:
            raise ValueError(
                "Cannot restrict fields of a query without a resource type, "
                "use restrict_fields_of_type instead."
            )
        return self.restrict_fields_of_type(self.resource_type, *field_names)

    def restrict_fields_of_type(self, resource_type: str, *field_names: str) -> Query:
        """Only fetch the given fields of ``resource_type``, eg. of included resources."""
        fields = self.fields.setdefault(resource_type, [])
        fields.extend(name for name in field_names if name not in fields)
        return self

    # Sorting

    def add_ascending_order(self, field_name: str) -> Query:
        self.sort_descriptors.append(SortDescriptor(field_name, ascending=True))
        return self

    def add_descending_order(self, field_name: str) -> Query:
        self.sort_descriptors.append(SortDescriptor(field_name, ascending=False))
        return self

    # Pagination

    def paginate(self, pagination: Pagination) -> Query:
        self.pagination = pagination
        return self

    def _require_relationship(self, path: str) -> None:
        if self.resource_class is None:
            return
        name = path.split(".", 1)[0]
        if not isinstance(self.resource_class.field_named(name), Relationship):
            raise ValueError(
                f"Resource of type {self.resource_type!r} does not have a relationship named {name!r}."
            )
