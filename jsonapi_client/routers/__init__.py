"""URL routing for JSON:API resources and queries."""

from .base import JSONAPIRouter
from .query import FILTER_OPERATORS, Filter, Query, SortDescriptor

__all__ = ["FILTER_OPERATORS", "Filter", "JSONAPIRouter", "Query", "SortDescriptor"]
