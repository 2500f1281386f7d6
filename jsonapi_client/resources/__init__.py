"""Resource classes, field descriptors, collections and the resource factory."""

from .collection import LinkedResourceCollection, ResourceCollection
from .factory import ResourceFactory
from .fields import (
    Attribute,
    BooleanAttribute,
    DateAttribute,
    Field,
    Relationship,
    ToManyRelationship,
    ToOneRelationship,
    URLAttribute,
    fields_from_dict,
)
from .resource import Resource, ResourceIdentifier

__all__ = [
    "Attribute",
    "BooleanAttribute",
    "DateAttribute",
    "Field",
    "LinkedResourceCollection",
    "Relationship",
    "Resource",
    "ResourceCollection",
    "ResourceFactory",
    "ResourceIdentifier",
    "ToManyRelationship",
    "ToOneRelationship",
    "URLAttribute",
    "fields_from_dict",
]
