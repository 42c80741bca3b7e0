"""
The resource contract and the save orchestration built on top of it.

A resource is any object with a ``uri``, an async ``read_contents`` and a
``dispose``. Everything else is an optional capability a caller probes for
with ``isinstance`` against the runtime-checkable protocols below:

- :class:`SavableResource`: ``save_contents``
- :class:`IncrementallySavableResource`: ``save_content_changes``
- :class:`ObservableResource`: ``on_did_change_contents``
- :class:`EncodingAwareResource`: ``guess_encoding``
- :class:`VersionedResource`: ``version``

:func:`save` is the entry point consumers use to persist content: it tries
incremental changes first and falls back to writing the full content.
"""

from __future__ import annotations

import json
from typing import Any, Protocol, Sequence, runtime_checkable

from pydantic import BaseModel

from resourcekit.common.event import Event
from resourcekit.common.uri import URI
from resourcekit.concurrency.cancellation import CancellationTokenLike
from resourcekit.config.logging_config import get_logger
from resourcekit.resources.exceptions import ResourceError
from resourcekit.resources.text_edits import TextDocumentContentChangeEvent
from resourcekit.resources.types import (
    ResourceReadOptions,
    ResourceSaveOptions,
    ResourceVersion,
    SaveContext,
)

log = get_logger(__name__)


@runtime_checkable
class Resource(Protocol):
    @property
    def uri(self) -> URI: ...

    async def read_contents(self, options: ResourceReadOptions | None = None) -> str:
        """
        Read the latest content of this resource.

        Versioned resources update ``version`` to the state just read.

        Raises:
            ApplicationError: ``ResourceError.NotFound`` if the content does not exist.
        """
        ...

    def dispose(self) -> None: ...


@runtime_checkable
class SavableResource(Resource, Protocol):
    async def save_contents(
        self, content: str, options: ResourceSaveOptions | None = None
    ) -> None:
        """
        Rewrite the complete content, creating it if it does not exist.

        Raises:
            ApplicationError: ``ResourceError.OutOfSync`` if ``options.version``
                does not match the current version.
        """
        ...


@runtime_checkable
class IncrementallySavableResource(Resource, Protocol):
    async def save_content_changes(
        self,
        changes: Sequence[TextDocumentContentChangeEvent],
        options: ResourceSaveOptions | None = None,
    ) -> None:
        """
        Apply incremental changes to the existing content.

        Raises:
            ApplicationError: ``ResourceError.NotFound`` if the resource does not
                exist or was not read yet; ``ResourceError.OutOfSync`` on a
                version mismatch.
        """
        ...


@runtime_checkable
class ObservableResource(Resource, Protocol):
    @property
    def on_did_change_contents(self) -> Event[None]: ...


@runtime_checkable
class EncodingAwareResource(Resource, Protocol):
    async def guess_encoding(self) -> str | None: ...


@runtime_checkable
class VersionedResource(Resource, Protocol):
    @property
    def version(self) -> ResourceVersion | None: ...


async def save(
    resource: Resource,
    context: SaveContext,
    token: CancellationTokenLike | None = None,
) -> None:
    """
    Persist ``context`` to ``resource``.

    Read-only resources are left untouched. Incremental changes are tried
    first when they are cheaper than the full content; if they are not
    applicable or fail, the full content is written instead, unless
    ``token`` was cancelled in the meantime. Errors from the full save
    propagate to the caller.
    """
    if not isinstance(resource, SavableResource):
        return
    if await try_save_content_changes(resource, context):
        return
    if token is not None and token.is_cancellation_requested:
        return
    await resource.save_contents(context.content, context.options)


async def try_save_content_changes(resource: Resource, context: SaveContext) -> bool:
    """
    Try to save ``context.changes`` incrementally.

    Returns:
        True if the changes were applied, False if the caller should fall
        back to saving the full content.
    """
    if (
        context.changes is None
        or not isinstance(resource, IncrementallySavableResource)
        or should_save_content(context)
    ):
        return False
    try:
        await resource.save_content_changes(context.changes, context.options)
        return True
    except Exception as e:
        if ResourceError.NotFound.is_(e) or ResourceError.OutOfSync.is_(e):
            log.debug("Falling back to full save of '%s': %s", resource.uri, e)
        else:
            log.error(
                "Failed to apply incremental changes to '%s'", resource.uri, exc_info=e
            )
        return False


def should_save_content(context: SaveContext) -> bool:
    """
    Return True if writing the full content is preferable to sending the changes.

    Changes win only when their combined serialized size is strictly smaller
    than the full content.
    """
    return should_prefer_full_save(context.content, context.changes)


def should_prefer_full_save(
    content: str, changes: Sequence[Any] | None
) -> bool:
    if changes is None:
        return True
    content_length = len(content)
    changes_length = 0
    for change in changes:
        changes_length += _serialized_length(change)
        if changes_length >= content_length:
            return True
    return changes_length >= content_length


def _serialized_length(change: Any) -> int:
    if isinstance(change, TextDocumentContentChangeEvent):
        return change.serialized_length()
    if isinstance(change, BaseModel):
        return len(change.model_dump_json(by_alias=True, exclude_none=True))
    return len(json.dumps(change, separators=(",", ":"), default=str))
