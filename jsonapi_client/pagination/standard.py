"""Standard JSON:API pagination strategies."""

from __future__ import annotations

from dataclasses import dataclass

from .base import Pagination


@dataclass
class PageBasedPagination(Pagination):
    """page[number]/page[size] pagination."""

    page_number: int
    page_size: int

    def get_query_params(self) -> dict[str, str]:
        """Build page[number] and page[size] query parameters."""
        return {"page[number]": str(self.page_number), "page[size]": str(self.page_size)}


@dataclass
class OffsetBasedPagination(Pagination):
    """page[offset]/page[limit] pagination."""

    offset: int
    limit: int

    def get_query_params(self) -> dict[str, str]:
        """Build page[offset] and page[limit] query parameters."""
        if self.offset < 0 or self.limit < 1:
            raise ValueError("Offset must be >= 0 and limit must be >= 1.")
        return {"page[offset]": str(self.offset), "page[limit]": str(self.limit)}
