import logging

import httpx
import pytest

from conftest import Bar, Foo
from jsonapi_client.core.errors import ResourceTypeUnregistered
from jsonapi_client.resources import (
    Attribute,
    LinkedResourceCollection,
    Resource,
    ResourceCollection,
    ResourceFactory,
    ResourceIdentifier,
    ToOneRelationship,
    fields_from_dict,
)


class TestResource:
    def test_field_values(self) -> None:
        foo = Foo(id="1", string_attribute="a")

        assert foo.value_for_field("string_attribute") == "a"
        foo.set_value("integer_attribute", 3)
        assert foo.integer_attribute == 3
        foo.float_attribute = 1.5
        assert foo.value_for_field("float_attribute") == 1.5
        assert foo.nil_attribute is None

    def test_unknown_field(self) -> None:
        foo = Foo()

        with pytest.raises(AttributeError):
            foo.set_value("unknown", 1)
        with pytest.raises(AttributeError):
            foo.value_for_field("unknown")
        with pytest.raises(AttributeError):
            foo.unknown

    def test_field_named(self) -> None:
        field = Foo.field_named("to_one_attribute")

        assert isinstance(field, ToOneRelationship)
        assert field.serialized_name == "toOneAttribute"
        assert field.linked_type_name == "bars"
        assert Bar.field_named("foo").linked_type_name == "foos"
        assert Foo.field_named("missing") is None

    def test_duplicate_field_names_are_rejected(self) -> None:
        with pytest.raises(ValueError):

            class Broken(Resource):
                resource_type = "broken"
                fields = [Attribute("name"), Attribute("name")]

    def test_reserved_field_names_are_rejected(self) -> None:
        with pytest.raises(ValueError):

            class Broken(Resource):
                resource_type = "broken"
                fields = [Attribute("id")]

    def test_fields_from_dict(self) -> None:
        class Tag(Resource):
            resource_type = "tags"
            fields = fields_from_dict({"label": Attribute(""), "owner": ToOneRelationship("", "people")})

        assert [field.name for field in Tag.fields] == ["label", "owner"]
        assert Tag(label="x").label == "x"

    def test_unload(self) -> None:
        foo = Foo(id="1", string_attribute="a")
        foo.is_loaded = True

        foo.unload()

        assert foo.string_attribute is None
        assert not foo.is_loaded
        assert foo.id == "1"

    def test_identifier(self) -> None:
        assert Foo().identifier is None
        assert Foo(id="1").identifier == ResourceIdentifier("foos", "1")
        assert ResourceIdentifier.from_dict({"type": "foos", "id": "1"}).to_dict() == {
            "type": "foos",
            "id": "1",
        }

    def test_equality_is_identity(self) -> None:
        assert Foo(id="1") != Foo(id="1")


class TestResourceCollection:
    def test_loaded_state(self) -> None:
        assert not ResourceCollection().is_loaded
        assert ResourceCollection([Bar(id="1")]).is_loaded

    def test_sequence_behaviour(self) -> None:
        first, second = Bar(id="1"), Bar(id="2")
        collection = ResourceCollection([first, second], resources_url=httpx.URL("http://example.com/bars"))

        assert len(collection) == 2
        assert list(collection) == [first, second]
        assert collection[1] is second
        assert first in collection
        assert Bar(id="1") not in collection
        assert collection.get("bars", "2") is second
        assert collection.get("bars", "3") is None

    def test_load_callbacks(self) -> None:
        calls = []
        loaded = ResourceCollection([Bar(id="1")])
        unloaded = ResourceCollection()

        loaded.if_loaded(lambda resources: calls.append(len(resources))).if_not_loaded(
            lambda: calls.append("unloaded")
        )
        unloaded.if_loaded(lambda resources: calls.append(len(resources))).if_not_loaded(
            lambda: calls.append("unloaded")
        )

        assert calls == [1, "unloaded"]


class TestLinkedResourceCollection:
    def test_add_tracks_addition(self) -> None:
        collection = LinkedResourceCollection()
        bar = Bar(id="1")

        collection.add(bar)

        assert collection.resources == [bar]
        assert collection.added_resources == [bar]
        assert collection.removed_resources == []

    def test_remove_tracks_removal(self) -> None:
        bar = Bar(id="1")
        collection = LinkedResourceCollection()
        collection.add_as_existing(bar)

        collection.remove(bar)

        assert collection.resources == []
        assert collection.removed_resources == [bar]
        assert collection.added_resources == []

    def test_remove_cancels_addition(self) -> None:
        bar = Bar(id="1")
        collection = LinkedResourceCollection()

        collection.add(bar)
        collection.remove(bar)

        assert collection.resources == []
        assert collection.added_resources == []
        assert collection.removed_resources == []

    def test_add_cancels_removal(self) -> None:
        bar = Bar(id="1")
        collection = LinkedResourceCollection()
        collection.add_as_existing(bar)

        collection.remove(bar)
        collection.add(bar)

        assert collection.resources == [bar]
        assert collection.added_resources == []
        assert collection.removed_resources == []

    def test_add_existing_member_is_a_no_op(self) -> None:
        bar = Bar(id="1")
        collection = LinkedResourceCollection()
        collection.add_as_existing(bar)

        collection.add(bar)
        collection.add(bar)

        assert collection.resources == [bar]
        assert collection.added_resources == []
        assert collection.removed_resources == []

    def test_add_as_existing(self) -> None:
        bar = Bar(id="1")
        collection = LinkedResourceCollection()

        collection.add(bar)
        collection.add_as_existing(bar)

        assert collection.resources == [bar]
        assert collection.added_resources == []

    def test_extend(self) -> None:
        bars = [Bar(id="1"), Bar(id="2")]
        collection = LinkedResourceCollection(linkage=[ResourceIdentifier("bars", "9")])

        collection.extend(bars)

        assert collection.added_resources == bars
        assert collection.linkage == [ResourceIdentifier("bars", "9")]


class TestResourceFactory:
    def test_resource_class(self, factory: ResourceFactory) -> None:
        assert factory.resource_class("foos") is Foo
        assert factory.is_registered("bars")
        assert not factory.is_registered("bazs")

    def test_unregistered_type(self, factory: ResourceFactory) -> None:
        with pytest.raises(ResourceTypeUnregistered) as exc_info:
            factory.instantiate("bazs")
        assert exc_info.value.resource_type == "bazs"

    def test_class_without_type(self) -> None:
        class Untyped(Resource):
            fields = []

        with pytest.raises(ValueError):
            ResourceFactory([Untyped])

    def test_register_replaces(self, factory: ResourceFactory, caplog: pytest.LogCaptureFixture) -> None:
        class SpecialBar(Bar):
            resource_type = "bars"

        with caplog.at_level(logging.DEBUG, logger="jsonapi_client"):
            factory.register_resource(SpecialBar)

        assert isinstance(factory.instantiate("bars"), SpecialBar)
        assert "SpecialBar" in caplog.text

    def test_dispense_reuses_pooled_resource(self, factory: ResourceFactory) -> None:
        pool = []

        first = factory.dispense("bars", "1", pool)
        second = factory.dispense("bars", "1", pool)

        assert first is second
        assert pool == [first]
        assert first.id == "1"
        assert not first.is_loaded

    def test_dispense_by_index(self, factory: ResourceFactory) -> None:
        targets = [Foo(), Foo()]
        pool = list(targets)

        assert factory.dispense("foos", "5", pool, index=1) is targets[1]
        assert factory.dispense("bars", "5", pool, index=0) not in targets
        assert len(pool) == 3

    def test_dispense_creates_when_index_is_out_of_range(self, factory: ResourceFactory) -> None:
        pool = [Foo()]

        resource = factory.dispense("foos", "5", pool, index=1)

        assert resource is not pool[0]
        assert resource.id == "5"
