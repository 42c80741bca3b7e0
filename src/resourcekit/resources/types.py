from typing import Any, Sequence

from pydantic import BaseModel

from resourcekit.resources.text_edits import TextDocumentContentChangeEvent

# Opaque to callers; each backing store defines what it holds.
ResourceVersion = Any


class ResourceReadOptions(BaseModel):
    encoding: str | None = None


class ResourceSaveOptions(BaseModel):
    encoding: str | None = None
    overwrite_encoding: str | None = None
    version: ResourceVersion | None = None


class SaveContext(BaseModel):
    """Everything one save call needs: the full new content and, optionally,
    the edits that produced it."""

    content: str
    changes: Sequence[TextDocumentContentChangeEvent] | None = None
    options: ResourceSaveOptions | None = None
