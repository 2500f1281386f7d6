"""Pagination configuration and pagination data extracted from documents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

import httpx


class Pagination:
    """Define the pagination API used by the router."""

    def get_query_params(self) -> dict[str, str]:
        """Return the page[...] query parameters for this pagination."""
        raise NotImplementedError


@dataclass
class PaginationData:
    """Pagination links and counters found in a response document."""

    count: int | None = None
    limit: int | None = None
    before_cursor: str | None = None
    after_cursor: str | None = None
    first_url: httpx.URL | None = None
    last_url: httpx.URL | None = None
    next_url: httpx.URL | None = None
    previous_url: httpx.URL | None = None

    @classmethod
    def from_document(
        cls,
        links: Mapping[str, httpx.URL] | None,
        meta: Mapping[str, Any] | None,
    ) -> PaginationData | None:
        """Return pagination data from top-level links and meta, or None if there is none."""
        links = links or {}
        meta = meta or {}
        data = cls(
            count=_int_or_none(meta.get("count", meta.get("total"))),
            limit=_int_or_none(meta.get("limit")),
            before_cursor=_str_or_none(meta.get("before_cursor")),
            after_cursor=_str_or_none(meta.get("after_cursor")),
            first_url=links.get("first"),
            last_url=links.get("last"),
            next_url=links.get("next"),
            previous_url=links.get("prev", links.get("previous")),
        )
        if data == cls():
            return None
        return data

    @property
    def can_fetch_next_page(self) -> bool:
        return self.next_url is not None or self.after_cursor is not None

    @property
    def can_fetch_previous_page(self) -> bool:
        return self.previous_url is not None or self.before_cursor is not None


def _int_or_none(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        return None if value is None else int(value)
    except (TypeError, ValueError):
        return None


def _str_or_none(value: Any) -> str | None:
    return None if value is None else str(value)
