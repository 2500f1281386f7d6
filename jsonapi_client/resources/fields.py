"""Field descriptors that declare the schema of a resource type.

Each resource class declares an ordered list of fields. A field maps a
native attribute name onto a key in the JSON:API document. The field kinds
form a closed set:

* ``Attribute`` - a plain value copied as-is.
* ``URLAttribute`` - an ``httpx.URL``, optionally resolved against a base URL.
* ``DateAttribute`` - a ``datetime`` with a configurable ``strptime`` format.
* ``BooleanAttribute`` - a ``bool``, lenient about the wire representation.
* ``ToOneRelationship`` - a single linked resource.
* ``ToManyRelationship`` - a ``LinkedResourceCollection`` of linked resources.

Example::

    class Post(Resource):
        resource_type = "posts"
        fields = [
            Attribute("title"),
            DateAttribute("published_at"),
            ToOneRelationship("author", "people").serialize_as("writer"),
            ToManyRelationship("comments", "comments"),
        ]
"""

from __future__ import annotations

from dataclasses import dataclass, field as dataclass_field
from typing import TYPE_CHECKING, Any, Mapping, TypeVar

import httpx

if TYPE_CHECKING:
    from .resource import Resource

F = TypeVar("F", bound="Field")


@dataclass(eq=False)
class Field:
    """Base field. Use one of the concrete kinds instead."""

    name: str
    _serialized_name: str | None = dataclass_field(default=None, init=False, repr=False)
    is_read_only: bool = dataclass_field(default=False, init=False)

    @property
    def serialized_name(self) -> str:
        """The name that is passed to the key formatter, defaults to ``name``."""
        return self._serialized_name or self.name

    @serialized_name.setter
    def serialized_name(self, value: str) -> None:
        self._serialized_name = value

    def serialize_as(self: F, name: str) -> F:
        """Set the serialized name and return the field."""
        self.serialized_name = name
        return self

    def read_only(self: F) -> F:
        """Exclude the field from outbound documents and return the field."""
        self.is_read_only = True
        return self

    @property
    def is_relationship(self) -> bool:
        return isinstance(self, Relationship)


@dataclass(eq=False)
class Attribute(Field):
    """A plain attribute."""


@dataclass(eq=False)
class URLAttribute(Attribute):
    """An attribute holding an ``httpx.URL``.

    Relative URLs are made absolute against ``base_url`` when one is given.
    """

    base_url: httpx.URL | str | None = None


@dataclass(eq=False)
class DateAttribute(Attribute):
    """An attribute holding a ``datetime``.

    ``format`` is a ``strptime``/``strftime`` format string. When it is None
    the value is read and written as ISO 8601.
    """

    format: str | None = None


@dataclass(eq=False)
class BooleanAttribute(Attribute):
    """An attribute holding a ``bool``."""


@dataclass(eq=False)
class Relationship(Field):
    """Base relationship. Use ``ToOneRelationship`` or ``ToManyRelationship``."""

    linked_type: type[Resource] | str = ""

    @property
    def linked_type_name(self) -> str:
        """The resource type name of the linked resources."""
        if isinstance(self.linked_type, str):
            return self.linked_type
        return self.linked_type.resource_type


@dataclass(eq=False)
class ToOneRelationship(Relationship):
    """A relationship to a single resource."""


@dataclass(eq=False)
class ToManyRelationship(Relationship):
    """A relationship to a collection of resources."""


def fields_from_dict(fields: Mapping[str, Any]) -> list[Field]:
    """Return a field list from a mapping of field name to field.

    The name given in the mapping replaces the name set on the field, so
    fields can be declared without repeating their names::

        fields = fields_from_dict({
            "title": Attribute(""),
            "author": ToOneRelationship("", "people"),
        })
    """
    result = []
    for name, field in fields.items():
        field.name = name
        result.append(field)
    return result
