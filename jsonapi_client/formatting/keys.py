"""Key formatters turn field names into JSON:API member names."""

from __future__ import annotations

import re

from jsonapi_client.resources.fields import Field

# Word boundaries in camelCase names: aB -> a|B, ABc -> A|Bc.
_WORD_BOUNDARY = re.compile(r"(?<=[a-z0-9])([A-Z])|([A-Z])(?=[a-z])")


class KeyFormatter:
    """Format the serialized name of a field as a document key."""

    def format(self, field: Field) -> str:
        raise NotImplementedError


class AsIsKeyFormatter(KeyFormatter):
    """Use serialized names as keys unchanged."""

    def format(self, field: Field) -> str:
        return field.serialized_name


class DasherizedKeyFormatter(KeyFormatter):
    """Format keys as dasherized names, eg. someFieldName or some_field_name -> some-field-name."""

    def format(self, field: Field) -> str:
        return _split_words(field.serialized_name, "-")


class UnderscoredKeyFormatter(KeyFormatter):
    """Format keys as underscored names, eg. someFieldName -> some_field_name."""

    def format(self, field: Field) -> str:
        return _split_words(field.serialized_name, "_")


KEY_FORMATTERS: dict[str, type[KeyFormatter]] = {
    "as-is": AsIsKeyFormatter,
    "dasherized": DasherizedKeyFormatter,
    "underscored": UnderscoredKeyFormatter,
}


def key_formatter_named(name: str) -> KeyFormatter:
    """Return a new key formatter for a configured key format name."""
    try:
        return KEY_FORMATTERS[name]()
    except KeyError:
        raise ValueError(
            f"Unknown key format {name!r}, expected one of {sorted(KEY_FORMATTERS)}."
        ) from None


def _split_words(name: str, separator: str) -> str:
    separated = _WORD_BOUNDARY.sub(lambda match: separator + match.group(0), name)
    separated = re.sub(r"[-_]+", separator, separated)
    return separated.lower().strip(separator)
