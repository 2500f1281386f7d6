"""JSON:API documents: the deserialization result and outbound document construction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Iterable, Mapping

import httpx

from .errors import APIError

if TYPE_CHECKING:
    from jsonapi_client.pagination import PaginationData
    from jsonapi_client.resources import Resource


@dataclass
class JSONAPIDocument:
    """A JSON:API document containing resources, errors, meta, links and jsonapi data."""

    data: list[Resource] | None = None
    included: list[Resource] | None = None
    errors: list[APIError] | None = None
    meta: dict[str, Any] | None = None
    links: dict[str, httpx.URL] | None = None
    jsonapi: dict[str, Any] | None = None
    pagination: PaginationData | None = None


class JSONAPIDocumentBuilder:
    """Build outbound JSON:API v1.1 documents from serialized resource objects."""

    def build_single(
        self,
        resource: Mapping[str, Any] | None,
        *,
        links: Mapping[str, Any] | None = None,
        meta: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return a JSON:API document for a single resource object or linkage."""
        document: dict[str, Any] = {"data": None if resource is None else dict(resource)}
        if links:
            document["links"] = dict(links)
        if meta:
            document["meta"] = dict(meta)
        return document

    def build_collection(
        self,
        resources: Iterable[Mapping[str, Any]],
        *,
        links: Mapping[str, Any] | None = None,
        meta: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Return a JSON:API document for a collection of resource objects or linkage."""
        document: dict[str, Any] = {"data": [dict(item) for item in resources]}
        if links:
            document["links"] = dict(links)
        if meta:
            document["meta"] = dict(meta)
        return document

    def build_error(self, errors: Iterable[APIError]) -> dict[str, Any]:
        """Return a JSON:API error document from API errors."""
        return {"errors": [error.to_error_object() for error in errors]}
