"""JSON:API client serialization package."""

from .config import ClientSettings, configure, init_logging
from .core.document import JSONAPIDocument, JSONAPIDocumentBuilder
from .core.errors import APIError, JSONAPIClientError, SerializerError
from .formatting import (
    AsIsKeyFormatter,
    DasherizedKeyFormatter,
    UnderscoredKeyFormatter,
    ValueFormatter,
    ValueFormatterRegistry,
)
from .pagination import OffsetBasedPagination, PageBasedPagination, PaginationData
from .resources import (
    Attribute,
    BooleanAttribute,
    DateAttribute,
    LinkedResourceCollection,
    Resource,
    ResourceCollection,
    ResourceFactory,
    ResourceIdentifier,
    ToManyRelationship,
    ToOneRelationship,
    URLAttribute,
)
from .routers import JSONAPIRouter, Query
from .serializers import JSONAPISerializer, SerializationOptions

__all__ = [
    "APIError",
    "AsIsKeyFormatter",
    "Attribute",
    "BooleanAttribute",
    "ClientSettings",
    "DasherizedKeyFormatter",
    "DateAttribute",
    "JSONAPIClientError",
    "JSONAPIDocument",
    "JSONAPIDocumentBuilder",
    "JSONAPIRouter",
    "JSONAPISerializer",
    "LinkedResourceCollection",
    "OffsetBasedPagination",
    "PageBasedPagination",
    "PaginationData",
    "Query",
    "Resource",
    "ResourceCollection",
    "ResourceFactory",
    "ResourceIdentifier",
    "SerializationOptions",
    "SerializerError",
    "ToManyRelationship",
    "ToOneRelationship",
    "URLAttribute",
    "UnderscoredKeyFormatter",
    "ValueFormatter",
    "ValueFormatterRegistry",
    "configure",
    "init_logging",
]
