import json
from typing import Any

import pytest

from jsonapi_client import JSONAPISerializer
from jsonapi_client.resources import (
    Attribute,
    BooleanAttribute,
    DateAttribute,
    Resource,
    ResourceFactory,
    ToManyRelationship,
    ToOneRelationship,
    URLAttribute,
)


class Foo(Resource):
    resource_type = "foos"
    fields = [
        Attribute("string_attribute").serialize_as("stringAttribute"),
        Attribute("integer_attribute").serialize_as("integerAttribute"),
        Attribute("float_attribute").serialize_as("floatAttribute"),
        BooleanAttribute("boolean_attribute").serialize_as("booleanAttribute"),
        Attribute("nil_attribute").serialize_as("nilAttribute"),
        DateAttribute("date_attribute").serialize_as("dateAttribute"),
        URLAttribute("url_attribute", base_url="http://example.com/").serialize_as("urlAttribute"),
        Attribute("computed").read_only(),
        ToOneRelationship("to_one_attribute", "bars").serialize_as("toOneAttribute"),
        ToManyRelationship("to_many_attribute", "bars").serialize_as("toManyAttribute"),
    ]


class Bar(Resource):
    resource_type = "bars"
    fields = [
        Attribute("bar_string_attribute").serialize_as("barStringAttribute"),
        Attribute("bar_integer_attribute").serialize_as("barIntegerAttribute"),
        ToOneRelationship("foo", Foo),
    ]


@pytest.fixture
def factory() -> ResourceFactory:
    return ResourceFactory([Foo, Bar])


@pytest.fixture
def serializer(factory: ResourceFactory) -> JSONAPISerializer:
    return JSONAPISerializer(resource_factory=factory)


def foo_representation(resource_id: str = "1", **overrides: Any) -> dict[str, Any]:
    representation: dict[str, Any] = {
        "type": "foos",
        "id": resource_id,
        "attributes": {
            "stringAttribute": "stringAttribute",
            "integerAttribute": 10,
            "floatAttribute": 5.5,
            "booleanAttribute": True,
            "nilAttribute": None,
            "dateAttribute": "1970-01-01T01:00:00+01:00",
            "urlAttribute": "foos/1",
        },
        "links": {"self": f"http://example.com/foos/{resource_id}"},
    }
    representation.update(overrides)
    return representation


def bar_representation(resource_id: str = "10", **overrides: Any) -> dict[str, Any]:
    representation: dict[str, Any] = {
        "type": "bars",
        "id": resource_id,
        "attributes": {"barStringAttribute": f"bar {resource_id}", "barIntegerAttribute": 7},
    }
    representation.update(overrides)
    return representation


def encode(document: dict[str, Any]) -> bytes:
    return json.dumps(document).encode("utf-8")


def decode(data: bytes) -> dict[str, Any]:
    return json.loads(data.decode("utf-8"))
