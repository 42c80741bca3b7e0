import asyncio
import codecs
import os
from typing import Sequence

import aiofiles
from pydantic import BaseModel, ConfigDict

from resourcekit.common.event import Emitter, Event
from resourcekit.common.uri import URI
from resourcekit.config.environment import Environment
from resourcekit.config.logging_config import get_logger
from resourcekit.resources.exceptions import ResourceError
from resourcekit.resources.text_edits import (
    TextDocumentContentChangeEvent,
    apply_content_changes,
)
from resourcekit.resources.types import ResourceReadOptions, ResourceSaveOptions

log = get_logger(__name__)

# Longest BOMs first so UTF-32 LE is not mistaken for UTF-16 LE
_BOMS: list[tuple[bytes, str]] = [
    (codecs.BOM_UTF32_LE, "utf-32"),
    (codecs.BOM_UTF32_BE, "utf-32"),
    (codecs.BOM_UTF8, "utf-8-sig"),
    (codecs.BOM_UTF16_LE, "utf-16"),
    (codecs.BOM_UTF16_BE, "utf-16"),
]


class FileResourceVersion(BaseModel):
    model_config = ConfigDict(frozen=True)

    mtime_ns: int
    size: int

    @property
    def etag(self) -> str:
        return f"{self.mtime_ns:x}-{self.size:x}"

    @classmethod
    def from_stat(cls, stat: os.stat_result) -> "FileResourceVersion":
        return cls(mtime_ns=stat.st_mtime_ns, size=stat.st_size)


class FileResource:
    """
    A resource backed by a file on the local file system.

    Writes are guarded by the file's modification time and size: a save whose
    expected version no longer matches the file on disk fails with
    ``ResourceError.OutOfSync``. Without an explicit ``options.version`` the
    version of the last read or write is expected.
    """

    def __init__(self, uri: URI):
        self._uri = uri
        self._path = uri.fs_path
        self._version: FileResourceVersion | None = None
        self._encoding: str | None = None
        self._on_did_change_contents_emitter: Emitter[None] = Emitter()
        self._disposed = False

    @property
    def uri(self) -> URI:
        return self._uri

    @property
    def version(self) -> FileResourceVersion | None:
        return self._version

    @property
    def encoding(self) -> str | None:
        """Encoding of the last read or write."""
        return self._encoding

    @property
    def on_did_change_contents(self) -> Event[None]:
        return self._on_did_change_contents_emitter.event

    async def _stat(self) -> FileResourceVersion | None:
        try:
            stat = await asyncio.to_thread(os.stat, self._path)
        except FileNotFoundError:
            return None
        return FileResourceVersion.from_stat(stat)

    def _check_version(
        self, current: FileResourceVersion | None, options: ResourceSaveOptions | None
    ) -> None:
        expected = options.version if options and options.version is not None else self._version
        if expected is None or current is None:
            return
        if expected != current:
            raise ResourceError.OutOfSync(self._uri)

    async def read_contents(self, options: ResourceReadOptions | None = None) -> str:
        encoding = (options.encoding if options else None) or self._encoding or Environment.get_default_encoding()
        try:
            async with aiofiles.open(self._path, "r", encoding=encoding, newline="") as f:
                content = await f.read()
        except (FileNotFoundError, IsADirectoryError) as e:
            raise ResourceError.NotFound(self._uri) from e
        self._version = await self._stat()
        self._encoding = encoding
        return content

    async def save_contents(self, content: str, options: ResourceSaveOptions | None = None) -> None:
        self._check_version(await self._stat(), options)
        await self._write(content, self._save_encoding(options))

    async def save_content_changes(
        self,
        changes: Sequence[TextDocumentContentChangeEvent],
        options: ResourceSaveOptions | None = None,
    ) -> None:
        current = await self._stat()
        if self._version is None or current is None:
            raise ResourceError.NotFound(self._uri)
        self._check_version(current, options)
        encoding = self._encoding or Environment.get_default_encoding()
        async with aiofiles.open(self._path, "r", encoding=encoding, newline="") as f:
            content = await f.read()
        await self._write(apply_content_changes(content, changes), self._save_encoding(options))

    def _save_encoding(self, options: ResourceSaveOptions | None) -> str:
        if options is not None:
            if options.overwrite_encoding:
                return options.overwrite_encoding
            if options.encoding:
                return options.encoding
        return self._encoding or Environment.get_default_encoding()

    async def _write(self, content: str, encoding: str) -> None:
        await asyncio.to_thread(os.makedirs, self._path.parent, exist_ok=True)
        async with aiofiles.open(self._path, "w", encoding=encoding, newline="") as f:
            await f.write(content)
        self._version = await self._stat()
        self._encoding = encoding
        log.debug("Saved '%s' (%s)", self._uri, self._version.etag if self._version else "?")
        self._on_did_change_contents_emitter.fire(None)

    async def guess_encoding(self) -> str | None:
        """
        Guess the encoding of the file from its byte order mark, falling back
        to a strict UTF-8 decode. Returns None if the file is missing or is
        not valid UTF-8.
        """
        try:
            async with aiofiles.open(self._path, "rb") as f:
                data = await f.read()
        except (FileNotFoundError, IsADirectoryError):
            return None
        for bom, encoding in _BOMS:
            if data.startswith(bom):
                return encoding
        try:
            data.decode("utf-8")
        except UnicodeDecodeError:
            return None
        return "utf-8"

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        self._on_did_change_contents_emitter.dispose()

    def __repr__(self) -> str:
        return f"FileResource({str(self._uri)!r})"


class FileResourceResolver:
    """Resolves ``file://`` URIs to a fresh :class:`FileResource` each time."""

    async def resolve(self, uri: URI) -> FileResource:
        """
        Raises:
            ValueError: If ``uri`` is not a file URI or names a directory.
        """
        if uri.scheme != "file":
            raise ValueError(f"The uri '{uri}' is not a file uri.")
        if await asyncio.to_thread(os.path.isdir, uri.fs_path):
            raise ValueError(f"The '{uri}' is a directory.")
        return FileResource(uri)
