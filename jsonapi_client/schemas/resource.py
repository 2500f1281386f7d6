"""Pydantic models for the JSON:API v1.1 wire format."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict


class JSONAPIModel(BaseModel):
    """Lenient base: unknown members are kept, numeric ids become strings."""

    model_config = ConfigDict(extra="allow", coerce_numbers_to_str=True)


class JSONAPIResourceIdentifier(JSONAPIModel):
    """Resource identifier object: type + id."""

    type: str
    id: str


class JSONAPIRelationship(JSONAPIModel):
    """Relationship object with optional linkage and links."""

    data: Optional[Union[JSONAPIResourceIdentifier, List[JSONAPIResourceIdentifier]]] = None
    links: Optional[Dict[str, Any]] = None
    meta: Optional[Dict[str, Any]] = None

    @property
    def has_linkage(self) -> bool:
        """Return True if the 'data' member was present, even when null."""
        return "data" in self.model_fields_set

    def link(self, name: str) -> Optional[str]:
        """Return the href of the named link, if any."""
        return link_href((self.links or {}).get(name))


class JSONAPIResource(JSONAPIModel):
    """Resource object with attributes and relationships."""

    type: str
    id: Optional[str] = None
    attributes: Optional[Dict[str, Any]] = None
    relationships: Optional[Dict[str, JSONAPIRelationship]] = None
    links: Optional[Dict[str, Any]] = None
    meta: Optional[Dict[str, Any]] = None


class JSONAPIErrorSource(JSONAPIModel):
    """Source member of an error object."""

    pointer: Optional[str] = None
    parameter: Optional[str] = None


class JSONAPIErrorObject(JSONAPIModel):
    """Error object as returned in a top-level 'errors' array."""

    id: Optional[str] = None
    status: Optional[str] = None
    code: Optional[str] = None
    title: Optional[str] = None
    detail: Optional[str] = None
    source: Optional[JSONAPIErrorSource] = None
    meta: Optional[Dict[str, Any]] = None


class JSONAPITopLevel(JSONAPIModel):
    """Top-level JSON:API document members, before resource mapping."""

    data: Optional[Any] = None
    errors: Optional[List[JSONAPIErrorObject]] = None
    included: Optional[List[Any]] = None
    meta: Optional[Dict[str, Any]] = None
    links: Optional[Dict[str, Any]] = None
    jsonapi: Optional[Dict[str, Any]] = None


def link_href(value: Any) -> Optional[str]:
    """Return the URL of a link, which is either a string or a link object."""
    if isinstance(value, str):
        return value
    if isinstance(value, dict):
        href = value.get("href")
        return href if isinstance(href, str) else None
    return None
