import logging
from collections.abc import Iterator

import pytest
from pydantic import ValidationError

from jsonapi_client import JSONAPISerializer
from jsonapi_client.config import PACKAGE_LOGGER, ClientSettings, configure, init_logging
from jsonapi_client.formatting import DasherizedKeyFormatter
from jsonapi_client.serializers import SerializationOptions


@pytest.fixture
def package_logger() -> Iterator[logging.Logger]:
    log = logging.getLogger(PACKAGE_LOGGER)
    handlers, level = list(log.handlers), log.level
    yield log
    log.handlers = handlers
    log.setLevel(level)


def test_defaults() -> None:
    settings = ClientSettings()

    assert settings.key_format == "as-is"
    assert settings.log_level == logging.WARNING
    assert settings.serialization_options == ["INCLUDE_ID"]


def test_log_level_names() -> None:
    assert ClientSettings(log_level="debug").log_level == logging.DEBUG
    assert ClientSettings(log_level="10").log_level == 10
    with pytest.raises(ValidationError):
        ClientSettings(log_level="loud")


def test_unknown_key_format() -> None:
    with pytest.raises(ValidationError):
        ClientSettings(key_format="camelized")


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("JSONAPI_KEY_FORMAT", "dasherized")
    monkeypatch.setenv("JSONAPI_LOG_LEVEL", "info")
    monkeypatch.setenv("JSONAPI_SERIALIZATION_OPTIONS", "INCLUDE_ID, INCLUDE_TO_ONE")

    settings = ClientSettings.from_env()

    assert settings.key_format == "dasherized"
    assert settings.log_level == logging.INFO
    assert settings.serialization_options == ["INCLUDE_ID", "INCLUDE_TO_ONE"]


def test_from_env_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("JSONAPI_KEY_FORMAT", "JSONAPI_LOG_LEVEL", "JSONAPI_SERIALIZATION_OPTIONS"):
        monkeypatch.delenv(name, raising=False)

    assert ClientSettings.from_env() == ClientSettings()


def test_serializer_from_settings(factory) -> None:
    settings = ClientSettings(
        key_format="dasherized", serialization_options=["INCLUDE_ID", "OMIT_NULL_VALUES"]
    )

    serializer = JSONAPISerializer.from_settings(settings, resource_factory=factory)

    assert isinstance(serializer.key_formatter, DasherizedKeyFormatter)
    assert serializer.default_options == (
        SerializationOptions.INCLUDE_ID | SerializationOptions.OMIT_NULL_VALUES
    )
    assert serializer.resource_factory is factory


def test_init_logging_adds_one_handler(package_logger: logging.Logger) -> None:
    package_logger.handlers = []

    init_logging(logging.DEBUG)
    init_logging(logging.INFO)

    assert len(package_logger.handlers) == 1
    assert package_logger.level == logging.INFO


def test_configure(package_logger: logging.Logger) -> None:
    settings = configure(ClientSettings(log_level="error"))

    assert settings.log_level == logging.ERROR
    assert package_logger.level == logging.ERROR
