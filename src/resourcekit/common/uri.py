from __future__ import annotations

from pathlib import Path, PurePosixPath
from urllib.parse import quote, unquote, urlsplit, urlunsplit


class URI:
    """
    An immutable resource identifier.

    Equality and hashing use the string form, so two URIs naming the same
    resource are interchangeable as dictionary keys.

    Example:
        uri = URI.parse("memory://notes/today.md")
        uri.scheme  # "memory"
        uri.path  # "/today.md"
        str(uri)  # "memory://notes/today.md"
    """

    __slots__ = ("_scheme", "_authority", "_path", "_query", "_fragment", "_str")

    def __init__(
        self,
        scheme: str = "",
        authority: str = "",
        path: str = "",
        query: str = "",
        fragment: str = "",
    ):
        self._scheme = scheme.lower()
        self._authority = authority
        self._path = path
        self._query = query
        self._fragment = fragment
        self._str = urlunsplit(
            (self._scheme, authority, quote(path, safe="/:@!$&'()*+,;="), query, fragment)
        )

    @classmethod
    def parse(cls, value: str) -> URI:
        """Parse a URI string. Percent-encoded path segments are decoded."""
        parts = urlsplit(value)
        return cls(
            scheme=parts.scheme,
            authority=parts.netloc,
            path=unquote(parts.path),
            query=parts.query,
            fragment=parts.fragment,
        )

    @classmethod
    def from_file_path(cls, path: str | Path) -> URI:
        """
        Create a file:// URI from a file path.
        Relative paths are resolved against the current directory.
        """
        resolved = Path(path).expanduser().resolve(strict=False)
        return cls.parse(resolved.as_uri())

    @property
    def scheme(self) -> str:
        return self._scheme

    @property
    def authority(self) -> str:
        return self._authority

    @property
    def path(self) -> str:
        return self._path

    @property
    def query(self) -> str:
        return self._query

    @property
    def fragment(self) -> str:
        return self._fragment

    @property
    def name(self) -> str:
        """The last path segment."""
        return PurePosixPath(self._path).name

    @property
    def fs_path(self) -> Path:
        """
        The local file system path of a file:// URI.

        Raises:
            ValueError: If the URI does not use the file scheme.
        """
        if self._scheme != "file":
            raise ValueError(f"'{self}' is not a file URI")
        if self._authority and self._authority != "localhost":
            return Path(f"//{self._authority}{self._path}")
        return Path(self._path)

    def with_path(self, path: str) -> URI:
        return URI(self._scheme, self._authority, path, self._query, self._fragment)

    def __str__(self) -> str:
        return self._str

    def __repr__(self) -> str:
        return f"URI({self._str!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, URI):
            return NotImplemented
        return self._str == other._str

    def __hash__(self) -> int:
        return hash(self._str)
