"""Resource base class and resource identifiers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Mapping

import httpx

from .fields import Field

RESERVED_NAMES = frozenset(
    {"id", "url", "meta", "relationships", "is_loaded", "resource_type", "fields"}
)


@dataclass(frozen=True)
class ResourceIdentifier:
    """Uniquely identifies a resource that exists on the server."""

    type: str
    id: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ResourceIdentifier:
        """Return an identifier from a mapping with 'type' and 'id' keys."""
        return cls(type=data["type"], id=data["id"])

    def to_dict(self) -> dict[str, str]:
        """Return a resource identifier object."""
        return {"type": self.type, "id": self.id}


class Resource:
    """Base class for resources.

    Subclasses set ``resource_type`` to the JSON:API type name and ``fields``
    to an ordered list of field descriptors. Field values are kept in a value
    bag and can be read and written as plain attributes or through
    ``value_for_field`` and ``set_value``.
    """

    resource_type: ClassVar[str] = ""
    fields: ClassVar[list[Field]] = []

    # Whether resource level 'meta' members are copied during deserialization.
    supports_meta: ClassVar[bool] = True

    _field_index: ClassVar[dict[str, Field]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        index: dict[str, Field] = {}
        for field in cls.fields:
            if field.name in RESERVED_NAMES:
                raise ValueError(f"{cls.__name__}: field name {field.name!r} is reserved.")
            if field.name in index:
                raise ValueError(f"{cls.__name__}: duplicate field name {field.name!r}.")
            index[field.name] = field
        cls._field_index = index

    def __init__(self, id: str | None = None, **values: Any) -> None:
        self.id = id
        self.url: httpx.URL | None = None
        self.is_loaded = False
        self.meta: dict[str, Any] | None = None
        self.relationships: dict[str, dict[str, Any]] | None = None
        self._values: dict[str, Any] = {}
        for name, value in values.items():
            self.set_value(name, value)

    @classmethod
    def field_named(cls, name: str) -> Field | None:
        """Return the field named ``name``, or None if no such field exists."""
        return cls._field_index.get(name)

    def value_for_field(self, name: str) -> Any:
        """Return the value of the field named ``name``."""
        self._require_field(name)
        return self._values.get(name)

    def set_value(self, name: str, value: Any) -> None:
        """Set the value of the field named ``name``."""
        self._require_field(name)
        self._values[name] = value

    def unload(self) -> None:
        """Clear all field values and mark the resource as not loaded."""
        self._values.clear()
        self.is_loaded = False

    @property
    def identifier(self) -> ResourceIdentifier | None:
        """The identifier of this resource, or None for a new resource."""
        if self.id is None:
            return None
        return ResourceIdentifier(self.resource_type, self.id)

    def _require_field(self, name: str) -> None:
        if name not in self._field_index:
            raise AttributeError(f"{type(self).__name__} has no field named {name!r}.")

    def __getattr__(self, name: str) -> Any:
        # Only reached when normal lookup fails, i.e. for declared fields.
        if name.startswith("_") or name not in type(self)._field_index:
            raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")
        return self._values.get(name)

    def __setattr__(self, name: str, value: Any) -> None:
        if name in type(self)._field_index:
            self._values[name] = value
        else:
            super().__setattr__(name, value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.resource_type}:{self.id}, url={self.url})"
