"""Resource collections for list responses and to-many relationships."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Iterable, Iterator, Sequence

import httpx

from .resource import Resource, ResourceIdentifier

if TYPE_CHECKING:
    from jsonapi_client.pagination import PaginationData


class ResourceCollection:
    """An ordered collection of resources.

    ``resources_url`` points to where the resources can be fetched. For
    collections that can be paginated, ``pagination`` holds the page links.
    """

    def __init__(
        self,
        resources: Iterable[Resource] | None = None,
        *,
        resources_url: httpx.URL | None = None,
    ) -> None:
        self.resources: list[Resource] = list(resources or [])
        self.resources_url = resources_url
        self.is_loaded = bool(self.resources)
        self.pagination: PaginationData | None = None

    def __len__(self) -> int:
        return len(self.resources)

    def __iter__(self) -> Iterator[Resource]:
        return iter(self.resources)

    def __getitem__(self, index: int) -> Resource:
        return self.resources[index]

    def __contains__(self, resource: object) -> bool:
        return any(member is resource for member in self.resources)

    def get(self, resource_type: str, resource_id: str) -> Resource | None:
        """Return the loaded resource with the given type and id, if any."""
        for resource in self.resources:
            if resource.resource_type == resource_type and resource.id == resource_id:
                return resource
        return None

    def if_loaded(self, callback: Callable[[Sequence[Resource]], None]) -> ResourceCollection:
        """Call ``callback`` with the resources if they are loaded."""
        if self.is_loaded:
            callback(self.resources)
        return self

    def if_not_loaded(self, callback: Callable[[], None]) -> ResourceCollection:
        """Call ``callback`` if the resources are not loaded."""
        if not self.is_loaded:
            callback()
        return self

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(loaded={self.is_loaded}, "
            f"count={len(self.resources)}, url={self.resources_url})"
        )


class LinkedResourceCollection(ResourceCollection):
    """A collection of resources linked from another resource.

    Besides the resources it keeps the relationship ``linkage`` and the
    relationship ``link_url``. Resources added and removed through ``add``
    and ``remove`` are tracked so a relationship can be updated partially.
    A resource is never tracked as both added and removed.
    """

    def __init__(
        self,
        resources: Iterable[Resource] | None = None,
        *,
        resources_url: httpx.URL | None = None,
        link_url: httpx.URL | None = None,
        linkage: Iterable[ResourceIdentifier] | None = None,
    ) -> None:
        super().__init__(resources, resources_url=resources_url)
        self.link_url = link_url
        self.linkage: list[ResourceIdentifier] | None = (
            list(linkage) if linkage is not None else None
        )
        self.added_resources: list[Resource] = []
        self.removed_resources: list[Resource] = []

    def add(self, resource: Resource) -> None:
        """Add ``resource`` and mark it as added."""
        if _contains(self.resources, resource):
            return
        self.resources.append(resource)
        if _contains(self.removed_resources, resource):
            self.removed_resources = _without(self.removed_resources, resource)
        elif not _contains(self.added_resources, resource):
            self.added_resources.append(resource)

    def remove(self, resource: Resource) -> None:
        """Remove ``resource`` and mark it as removed.

        Removing a resource that was added but not yet persisted only
        cancels the addition.
        """
        self.resources = _without(self.resources, resource)
        if _contains(self.added_resources, resource):
            self.added_resources = _without(self.added_resources, resource)
        elif not _contains(self.removed_resources, resource):
            self.removed_resources.append(resource)

    def add_as_existing(self, resource: Resource) -> None:
        """Add ``resource`` without marking it as added."""
        if not _contains(self.resources, resource):
            self.resources.append(resource)
        self.added_resources = _without(self.added_resources, resource)
        self.removed_resources = _without(self.removed_resources, resource)

    def append(self, resource: Resource) -> None:
        self.add(resource)

    def extend(self, resources: Iterable[Resource]) -> None:
        for resource in resources:
            self.add(resource)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(loaded={self.is_loaded}, "
            f"count={len(self.resources)}, linkage={self.linkage}, url={self.link_url})"
        )


def _contains(resources: list[Resource], resource: Resource) -> bool:
    return any(member is resource for member in resources)


def _without(resources: list[Resource], resource: Resource) -> list[Resource]:
    return [member for member in resources if member is not resource]
