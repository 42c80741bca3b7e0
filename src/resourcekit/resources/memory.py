from __future__ import annotations

from typing import Callable, Iterator

from resourcekit.common.event import Emitter, Event
from resourcekit.common.uri import URI
from resourcekit.config.logging_config import get_logger
from resourcekit.resources.exceptions import (
    ResourceAlreadyExistsError,
    ResourceDoesNotExistError,
)
from resourcekit.resources.types import ResourceReadOptions, ResourceSaveOptions

log = get_logger(__name__)


class MutableResource:
    """
    A resource whose whole content is one in-process string.

    It has no versioning. ``on_dispose`` runs once, on the first ``dispose``.
    """

    def __init__(self, uri: URI, contents: str, on_dispose: Callable[[], object] | None = None):
        self._uri = uri
        self._contents = contents
        self._on_dispose = on_dispose
        self._on_did_change_contents_emitter: Emitter[None] = Emitter()
        self._disposed = False

    @property
    def uri(self) -> URI:
        return self._uri

    @property
    def on_did_change_contents(self) -> Event[None]:
        return self._on_did_change_contents_emitter.event

    async def read_contents(self, options: ResourceReadOptions | None = None) -> str:
        return self._contents

    async def save_contents(self, contents: str, options: ResourceSaveOptions | None = None) -> None:
        self.replace_contents(contents)

    def replace_contents(self, contents: str) -> None:
        """Synchronous form of :meth:`save_contents`."""
        self._contents = contents
        self._fire_did_change_contents()

    def _fire_did_change_contents(self) -> None:
        self._on_did_change_contents_emitter.fire(None)

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self._on_did_change_contents_emitter.dispose()
        on_dispose, self._on_dispose = self._on_dispose, None
        if on_dispose is not None:
            on_dispose()

    def __repr__(self) -> str:
        return f"MutableResource({str(self._uri)!r})"


class InMemoryResources:
    """
    A resolver over resources registered explicitly by URI.

    Resolving returns the registered instance itself, so every consumer of a
    URI shares one resource. Disposing a resource unregisters it.

    Example:
        resources = InMemoryResources()
        resource = resources.add(URI.parse("memory:/greeting"), "hello")
        assert resources.resolve(resource.uri) is resource
    """

    def __init__(self) -> None:
        self._resources: dict[str, MutableResource] = {}

    def add(self, uri: URI, contents: str) -> MutableResource:
        """
        Raises:
            ResourceAlreadyExistsError: If ``uri`` is already registered.
        """
        key = str(uri)
        if key in self._resources:
            raise ResourceAlreadyExistsError(uri)
        resource = MutableResource(uri, contents, lambda: self._remove(key))
        self._resources[key] = resource
        log.debug("Added in-memory resource '%s'", key)
        return resource

    def update(self, uri: URI, contents: str) -> MutableResource:
        """
        Raises:
            ResourceDoesNotExistError: If ``uri`` is not registered.
        """
        key = str(uri)
        resource = self._resources.get(key)
        if resource is None:
            raise ResourceDoesNotExistError(
                uri, f"Cannot update non-existed in-memory resource '{key}'"
            )
        resource.replace_contents(contents)
        return resource

    def resolve(self, uri: URI) -> MutableResource:
        """
        Raises:
            ResourceDoesNotExistError: If ``uri`` is not registered.
        """
        key = str(uri)
        resource = self._resources.get(key)
        if resource is None:
            raise ResourceDoesNotExistError(uri)
        return resource

    def _remove(self, key: str) -> None:
        self._resources.pop(key, None)
        log.debug("Removed in-memory resource '%s'", key)

    def __contains__(self, uri: object) -> bool:
        return isinstance(uri, URI) and str(uri) in self._resources

    def __len__(self) -> int:
        return len(self._resources)

    def __iter__(self) -> Iterator[MutableResource]:
        return iter(list(self._resources.values()))

    def dispose(self) -> None:
        """Dispose and unregister every resource."""
        for resource in list(self._resources.values()):
            resource.dispose()
