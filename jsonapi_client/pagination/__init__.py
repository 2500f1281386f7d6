"""Pagination for JSON:API queries and responses."""

from .base import Pagination, PaginationData
from .standard import OffsetBasedPagination, PageBasedPagination

__all__ = ["OffsetBasedPagination", "PageBasedPagination", "Pagination", "PaginationData"]
