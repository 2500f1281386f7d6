"""Serializer entry points for JSON:API documents."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Iterable, Sequence

from jsonapi_client.core.document import JSONAPIDocument
from jsonapi_client.formatting.keys import AsIsKeyFormatter, KeyFormatter, key_formatter_named
from jsonapi_client.formatting.values import ValueFormatter, ValueFormatterRegistry
from jsonapi_client.resources import Resource, ResourceFactory

from .deserialize import DeserializeOperation
from .serialize import (
    SerializationOptions,
    SerializeOperation,
    serialize_linkage_data,
    serialize_to_one_linkage,
)

if TYPE_CHECKING:
    from jsonapi_client.config import ClientSettings


class JSONAPISerializer:
    """(De)serialize JSON:API documents to and from resources.

    The serializer holds the resource factory, value formatters and key
    formatter shared by all operations. Failures are raised as
    ``SerializerError`` subclasses.
    """

    def __init__(
        self,
        resource_factory: ResourceFactory | None = None,
        value_formatters: ValueFormatterRegistry | None = None,
        key_formatter: KeyFormatter | None = None,
        default_options: SerializationOptions = SerializationOptions.INCLUDE_ID,
    ) -> None:
        self.resource_factory = resource_factory or ResourceFactory()
        self.value_formatters = value_formatters or ValueFormatterRegistry.default_registry()
        self.key_formatter = key_formatter or AsIsKeyFormatter()
        self.default_options = default_options

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings,
        resource_factory: ResourceFactory | None = None,
    ) -> JSONAPISerializer:
        """Return a serializer configured from ``settings``."""
        return cls(
            resource_factory=resource_factory,
            key_formatter=key_formatter_named(settings.key_format),
            default_options=SerializationOptions.from_names(settings.serialization_options),
        )

    def register_resource(self, resource_class: type[Resource]) -> None:
        self.resource_factory.register_resource(resource_class)

    def register_value_formatter(self, formatter: ValueFormatter) -> None:
        self.value_formatters.register_formatter(formatter)

    def deserialize_data(
        self,
        data: bytes | str | Any,
        mapping_targets: Iterable[Resource] | None = None,
    ) -> JSONAPIDocument:
        """Deserialize ``data`` into a JSONAPIDocument.

        Resources in ``mapping_targets`` are populated in place instead of
        new resources being created for them.
        """
        operation = DeserializeOperation(
            data,
            resource_factory=self.resource_factory,
            value_formatters=self.value_formatters,
            key_formatter=self.key_formatter,
        )
        if mapping_targets is not None:
            operation.add_mapping_targets(mapping_targets)

        operation.start()
        if operation.error is not None:
            raise operation.error
        return operation.result

    def serialize_document(
        self,
        document: JSONAPIDocument,
        options: SerializationOptions | None = None,
    ) -> bytes:
        """Serialize the primary data of ``document``."""
        return self.serialize_resources(document.data or [], options=options)

    def serialize_resources(
        self,
        resources: Sequence[Resource],
        options: SerializationOptions | None = None,
    ) -> bytes:
        """Serialize ``resources`` into a JSON:API document."""
        operation = SerializeOperation(
            resources,
            value_formatters=self.value_formatters,
            key_formatter=self.key_formatter,
            options=self.default_options if options is None else options,
        )
        operation.start()
        if operation.error is not None:
            raise operation.error
        return operation.result

    def serialize_linkage_data(self, resources: Iterable[Resource]) -> bytes:
        """Serialize to-many relationship linkage for ``resources``."""
        return serialize_linkage_data(resources)

    def serialize_to_one_linkage(self, resource: Resource | None) -> bytes:
        """Serialize to-one relationship linkage for ``resource``."""
        return serialize_to_one_linkage(resource)
