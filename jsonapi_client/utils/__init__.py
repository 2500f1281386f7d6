"""Utility helpers for JSON:API URLs."""

from .query_params import build_query_params, set_query_item

__all__ = ["build_query_params", "set_query_item"]
