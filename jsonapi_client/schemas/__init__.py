"""Pydantic schemas for JSON:API."""

from .resource import (
    JSONAPIErrorObject,
    JSONAPIErrorSource,
    JSONAPIRelationship,
    JSONAPIResource,
    JSONAPIResourceIdentifier,
    JSONAPITopLevel,
    link_href,
)

__all__ = [
    "JSONAPIErrorObject",
    "JSONAPIErrorSource",
    "JSONAPIRelationship",
    "JSONAPIResource",
    "JSONAPIResourceIdentifier",
    "JSONAPITopLevel",
    "link_href",
]
