"""Value formatters convert attribute values between wire and native form."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from jsonapi_client.resources.fields import (
    BooleanAttribute,
    DateAttribute,
    Field,
    URLAttribute,
)

logger = logging.getLogger(__name__)

# Value used for dates that cannot be parsed.
DATE_FALLBACK = datetime(1970, 1, 1, tzinfo=timezone.utc)
_DATETIME_ADAPTER = TypeAdapter(datetime)


class ValueFormatter:
    """Transform values of one field kind between serialized and native form.

    A formatter is only used for fields that are instances of ``field_type``.
    ``unformat`` is used for wire values of ``formatted_type``, ``format`` for
    native values of ``unformatted_type``.
    """

    field_type: type[Field] = Field
    formatted_type: type | tuple[type, ...] = object
    unformatted_type: type | tuple[type, ...] = object

    def handles_unformat(self, value: Any, field: Field) -> bool:
        return isinstance(field, self.field_type) and isinstance(value, self.formatted_type)

    def handles_format(self, value: Any, field: Field) -> bool:
        return isinstance(field, self.field_type) and isinstance(value, self.unformatted_type)

    def unformat(self, value: Any, field: Any) -> Any:
        """Return the native form of ``value``."""
        raise NotImplementedError

    def format(self, value: Any, field: Any) -> Any:
        """Return the serialized form of ``value``."""
        raise NotImplementedError


class ValueFormatterRegistry:
    """Choose between registered formatters in registration order.

    Values that no formatter handles pass through unchanged.
    """

    def __init__(self, formatters: list[ValueFormatter] | None = None) -> None:
        self._formatters: list[ValueFormatter] = list(formatters or [])

    @classmethod
    def default_registry(cls) -> ValueFormatterRegistry:
        """Return a registry with the built in URL, date and boolean formatters."""
        return cls([URLValueFormatter(), DateValueFormatter(), BooleanValueFormatter()])

    def register_formatter(self, formatter: ValueFormatter) -> None:
        self._formatters.append(formatter)

    def unformat(self, value: Any, field: Field) -> Any:
        """Return the native form of ``value`` for ``field``."""
        for formatter in self._formatters:
            if formatter.handles_unformat(value, field):
                return formatter.unformat(value, field)
        return value

    def format(self, value: Any, field: Field) -> Any:
        """Return the serialized form of ``value`` for ``field``."""
        for formatter in self._formatters:
            if formatter.handles_format(value, field):
                return formatter.format(value, field)
        return value


def default_registry() -> ValueFormatterRegistry:
    return ValueFormatterRegistry.default_registry()


class URLValueFormatter(ValueFormatter):
    """Transform between ``str`` and ``httpx.URL``.

    Relative URLs are resolved against the field's ``base_url``, if set.
    """

    field_type = URLAttribute
    formatted_type = str
    unformatted_type = httpx.URL

    def unformat(self, value: str, field: URLAttribute) -> httpx.URL | None:
        try:
            if field.base_url is not None:
                return httpx.URL(field.base_url).join(value)
            return httpx.URL(value)
        except httpx.InvalidURL:
            logger.warning("Could not deserialize URL %r for field %r.", value, field.name)
            return None

    def format(self, value: httpx.URL, field: URLAttribute) -> str:
        return str(value)


class DateValueFormatter(ValueFormatter):
    """Transform between ``str`` and ``datetime`` using the field's format."""

    field_type = DateAttribute
    formatted_type = str
    unformatted_type = datetime

    def unformat(self, value: str, field: DateAttribute) -> datetime:
        try:
            if field.format is None:
                return parse_iso8601(value)
            return datetime.strptime(value, field.format)
        except (ValidationError, ValueError):
            logger.warning(
                "Could not deserialize date string %r with format %r. Deserializing to %s instead.",
                value,
                field.format or "ISO 8601",
                DATE_FALLBACK.isoformat(),
            )
            return DATE_FALLBACK

    def format(self, value: datetime, field: DateAttribute) -> str:
        if field.format is None:
            return value.isoformat()
        return value.strftime(field.format)


class BooleanValueFormatter(ValueFormatter):
    """Transform JSON booleans, and the usual string and integer spellings, to ``bool``."""

    field_type = BooleanAttribute
    formatted_type = (bool, str, int)
    unformatted_type = bool

    TRUE_VALUES = frozenset({"true", "1", "yes"})
    FALSE_VALUES = frozenset({"false", "0", "no"})

    def unformat(self, value: bool | str | int, field: BooleanAttribute) -> bool | None:
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in self.TRUE_VALUES:
                return True
            if lowered in self.FALSE_VALUES:
                return False
        logger.warning("Could not deserialize boolean %r for field %r.", value, field.name)
        return None

    def format(self, value: bool, field: BooleanAttribute) -> bool:
        return value


def parse_iso8601(value: str) -> datetime:
    """Parse an ISO 8601 timestamp.

    Fractional seconds beyond microsecond precision are truncated. Raises
    ``pydantic.ValidationError`` when ``value`` is not a timestamp.
    """
    return _DATETIME_ADAPTER.validate_python(value)
