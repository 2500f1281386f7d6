"""Resource factory: type registry and pool-aware dispensing."""

from __future__ import annotations

import logging

from jsonapi_client.core.errors import ResourceTypeUnregistered

from .resource import Resource

logger = logging.getLogger(__name__)


class ResourceFactory:
    """Create resources from registered resource classes."""

    def __init__(self, resource_classes: list[type[Resource]] | None = None) -> None:
        self._resource_classes: dict[str, type[Resource]] = {}
        for resource_class in resource_classes or []:
            self.register_resource(resource_class)

    def register_resource(self, resource_class: type[Resource]) -> None:
        """Register ``resource_class`` under its resource type.

        Registering a class for an already registered type replaces it.
        """
        if not resource_class.resource_type:
            raise ValueError(f"{resource_class.__name__} does not declare a resource_type.")
        previous = self._resource_classes.get(resource_class.resource_type)
        if previous is not None and previous is not resource_class:
            logger.debug(
                "Replacing %s with %s for resource type %r",
                previous.__name__,
                resource_class.__name__,
                resource_class.resource_type,
            )
        self._resource_classes[resource_class.resource_type] = resource_class

    def is_registered(self, resource_type: str) -> bool:
        return resource_type in self._resource_classes

    def resource_class(self, resource_type: str) -> type[Resource]:
        """Return the class registered for ``resource_type``."""
        try:
            return self._resource_classes[resource_type]
        except KeyError:
            raise ResourceTypeUnregistered(resource_type) from None

    def instantiate(self, resource_type: str) -> Resource:
        """Return a new, empty resource of the given type."""
        return self.resource_class(resource_type)()

    def dispense(
        self,
        resource_type: str,
        resource_id: str,
        pool: list[Resource],
        index: int | None = None,
    ) -> Resource:
        """Return a resource with the given type and id.

        The resource is looked up in ``pool`` by type and id first. If none
        matches and ``index`` is given, the ``index``-th pooled resource of the
        given type is returned. Otherwise a new resource with the given id is
        instantiated and appended to the pool.
        """
        for resource in pool:
            if resource.resource_type == resource_type and resource.id == resource_id:
                return resource

        if index is not None and pool:
            applicable = [resource for resource in pool if resource.resource_type == resource_type]
            if index < len(applicable):
                return applicable[index]

        resource = self.instantiate(resource_type)
        resource.id = resource_id
        pool.append(resource)
        return resource
