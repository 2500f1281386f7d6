"""Key and value formatting between field names/values and the wire format."""

from .keys import (
    AsIsKeyFormatter,
    DasherizedKeyFormatter,
    KeyFormatter,
    UnderscoredKeyFormatter,
    key_formatter_named,
)
from .values import (
    DATE_FALLBACK,
    BooleanValueFormatter,
    DateValueFormatter,
    URLValueFormatter,
    ValueFormatter,
    ValueFormatterRegistry,
    default_registry,
)

__all__ = [
    "AsIsKeyFormatter",
    "BooleanValueFormatter",
    "DATE_FALLBACK",
    "DasherizedKeyFormatter",
    "DateValueFormatter",
    "KeyFormatter",
    "URLValueFormatter",
    "UnderscoredKeyFormatter",
    "ValueFormatter",
    "ValueFormatterRegistry",
    "default_registry",
    "key_formatter_named",
]
