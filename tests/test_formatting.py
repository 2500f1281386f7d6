import logging
from datetime import datetime, timezone

import httpx
import pytest

from jsonapi_client.formatting import (
    DATE_FALLBACK,
    AsIsKeyFormatter,
    DasherizedKeyFormatter,
    UnderscoredKeyFormatter,
    URLValueFormatter,
    ValueFormatter,
    ValueFormatterRegistry,
    key_formatter_named,
)
from jsonapi_client.resources import (
    Attribute,
    BooleanAttribute,
    DateAttribute,
    ToOneRelationship,
    URLAttribute,
)


class TestKeyFormatters:
    @pytest.mark.parametrize(
        "name, dasherized, underscored",
        [
            ("someFieldName", "some-field-name", "some_field_name"),
            ("some_field_name", "some-field-name", "some_field_name"),
            ("some-field-name", "some-field-name", "some_field_name"),
            ("URLAttribute", "url-attribute", "url_attribute"),
            ("title", "title", "title"),
        ],
    )
    def test_formats(self, name: str, dasherized: str, underscored: str) -> None:
        field = Attribute(name)

        assert AsIsKeyFormatter().format(field) == name
        assert DasherizedKeyFormatter().format(field) == dasherized
        assert UnderscoredKeyFormatter().format(field) == underscored

    def test_uses_serialized_name(self) -> None:
        field = ToOneRelationship("author", "people").serialize_as("writtenBy")

        assert DasherizedKeyFormatter().format(field) == "written-by"

    def test_named(self) -> None:
        assert isinstance(key_formatter_named("dasherized"), DasherizedKeyFormatter)
        with pytest.raises(ValueError):
            key_formatter_named("camelized")


class TestURLFormatter:
    def test_absolute(self) -> None:
        registry = ValueFormatterRegistry.default_registry()

        value = registry.unformat("http://example.com/a", URLAttribute("link"))

        assert value == httpx.URL("http://example.com/a")

    def test_relative_to_base(self) -> None:
        registry = ValueFormatterRegistry.default_registry()
        field = URLAttribute("link", base_url="http://example.com/api/")

        assert registry.unformat("images/1.png", field) == httpx.URL("http://example.com/api/images/1.png")

    def test_format(self) -> None:
        registry = ValueFormatterRegistry.default_registry()

        assert registry.format(httpx.URL("http://example.com/a"), URLAttribute("link")) == "http://example.com/a"

    def test_invalid(self, caplog: pytest.LogCaptureFixture) -> None:
        registry = ValueFormatterRegistry.default_registry()

        with caplog.at_level(logging.WARNING, logger="jsonapi_client"):
            assert registry.unformat("http://example.com:notaport/", URLAttribute("link")) is None
        assert "Could not deserialize URL" in caplog.text


class TestDateFormatter:
    def test_iso8601(self) -> None:
        registry = ValueFormatterRegistry.default_registry()

        value = registry.unformat("2015-03-14T09:26:53Z", DateAttribute("at"))

        assert value == datetime(2015, 3, 14, 9, 26, 53, tzinfo=timezone.utc)

    @pytest.mark.parametrize(
        "value, microsecond",
        [
            ("2015-01-01T00:00:00.12Z", 120000),
            ("2015-01-01T00:00:00.123456Z", 123456),
            ("2015-01-01T00:00:00.123456789Z", 123456),
        ],
    )
    def test_iso8601_fractional_seconds(self, value: str, microsecond: int) -> None:
        registry = ValueFormatterRegistry.default_registry()

        parsed = registry.unformat(value, DateAttribute("at"))

        assert parsed == datetime(2015, 1, 1, 0, 0, 0, microsecond, tzinfo=timezone.utc)
        assert parsed.utcoffset().total_seconds() == 0

    def test_iso8601_offset(self) -> None:
        registry = ValueFormatterRegistry.default_registry()

        value = registry.unformat("1970-01-01T01:00:00+01:00", DateAttribute("at"))

        assert value == datetime(1970, 1, 1, tzinfo=timezone.utc)
        assert value.isoformat() == "1970-01-01T01:00:00+01:00"

    def test_iso8601_fallback(self, caplog: pytest.LogCaptureFixture) -> None:
        registry = ValueFormatterRegistry.default_registry()

        with caplog.at_level(logging.WARNING, logger="jsonapi_client"):
            value = registry.unformat("not a date", DateAttribute("at"))

        assert value == DATE_FALLBACK
        assert "ISO 8601" in caplog.text

    def test_custom_format(self) -> None:
        registry = ValueFormatterRegistry.default_registry()
        field = DateAttribute("on", format="%d-%m-%Y")

        assert registry.unformat("14-03-2015", field) == datetime(2015, 3, 14)
        assert registry.format(datetime(2015, 3, 14), field) == "14-03-2015"

    def test_fallback(self, caplog: pytest.LogCaptureFixture) -> None:
        registry = ValueFormatterRegistry.default_registry()

        with caplog.at_level(logging.WARNING, logger="jsonapi_client"):
            value = registry.unformat("14/03/2015", DateAttribute("on", format="%d-%m-%Y"))

        assert value == DATE_FALLBACK
        assert "14/03/2015" in caplog.text


class TestBooleanFormatter:
    @pytest.mark.parametrize(
        "raw, expected",
        [(True, True), (False, False), ("true", True), ("False", False), ("1", True), (1, True), (0, False)],
    )
    def test_unformat(self, raw: object, expected: bool) -> None:
        registry = ValueFormatterRegistry.default_registry()

        assert registry.unformat(raw, BooleanAttribute("flag")) is expected

    def test_unknown_value(self) -> None:
        registry = ValueFormatterRegistry.default_registry()

        assert registry.unformat(2, BooleanAttribute("flag")) is None


class Upper(ValueFormatter):
    field_type = Attribute
    formatted_type = str
    unformatted_type = str

    def unformat(self, value, field):
        return value.upper()

    def format(self, value, field):
        return value.lower()


class TestRegistry:
    def test_passthrough(self) -> None:
        registry = ValueFormatterRegistry.default_registry()

        assert registry.unformat({"nested": [1]}, Attribute("data")) == {"nested": [1]}
        assert registry.unformat("2015-03-14", Attribute("plain")) == "2015-03-14"

    def test_kind_mismatch_passes_through(self) -> None:
        registry = ValueFormatterRegistry.default_registry()

        assert registry.unformat(12, DateAttribute("at")) == 12

    def test_custom_formatter(self) -> None:
        registry = ValueFormatterRegistry.default_registry()
        registry.register_formatter(Upper())

        assert registry.unformat("abc", Attribute("name")) == "ABC"
        assert registry.format("ABC", Attribute("name")) == "abc"
        assert registry.unformat("true", BooleanAttribute("flag")) is True

    def test_first_registered_wins(self) -> None:
        registry = ValueFormatterRegistry([Upper(), URLValueFormatter()])

        assert registry.unformat("http://example.com", URLAttribute("link")) == "HTTP://EXAMPLE.COM"
