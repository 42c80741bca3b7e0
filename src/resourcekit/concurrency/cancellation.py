"""
Cooperative cancellation tokens.

A :class:`CancellationTokenSource` owns the right to cancel; the
:class:`CancellationToken` it hands out can only be queried. Long-running
operations check the token at points where stopping is safe.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, ClassVar, Protocol, runtime_checkable


class CancellationError(Exception):
    """Raised when an operation observes a cancelled token."""

    def __init__(self, message: str = "Operation was cancelled"):
        self.message = message
        super().__init__(self.message)


@runtime_checkable
class CancellationTokenLike(Protocol):
    @property
    def is_cancellation_requested(self) -> bool: ...


class CancellationToken:
    """
    Read-only view of a cancellation state.

    Example:
        async def copy_all(items, token: CancellationToken):
            for item in items:
                token.raise_if_cancellation_requested()
                await copy(item)
    """

    NONE: ClassVar[CancellationToken]
    CANCELLED: ClassVar[CancellationToken]

    def __init__(self, source: CancellationTokenSource | None = None, cancelled: bool = False):
        self._source = source
        self._cancelled = cancelled

    @property
    def is_cancellation_requested(self) -> bool:
        """
        Check if cancellation has been requested.

        Returns:
            True if the owning source has been cancelled, False otherwise.
        """
        if self._source is not None:
            return self._source._cancelled
        return self._cancelled

    def raise_if_cancellation_requested(self) -> None:
        """
        Raise CancellationError if cancellation has been requested.

        Raises:
            CancellationError: If the token has been cancelled.
        """
        if self.is_cancellation_requested:
            raise CancellationError()

    async def wait_for_cancellation_requested(self) -> None:
        """Wait until cancellation is requested."""
        while not self.is_cancellation_requested:
            await asyncio.sleep(0.001)


CancellationToken.NONE = CancellationToken()
CancellationToken.CANCELLED = CancellationToken(cancelled=True)


class CancellationTokenSource:
    """
    Creates a token and cancels it.

    Example:
        source = CancellationTokenSource()
        task = asyncio.create_task(save(resource, context, source.token))
        source.cancel()
    """

    def __init__(self) -> None:
        self._cancelled = False
        self._token: CancellationToken | None = None
        self._callbacks: list[Callable[[], Any]] = []

    @property
    def token(self) -> CancellationToken:
        if self._token is None:
            self._token = CancellationToken(self)
        return self._token

    def cancel(self) -> None:
        """
        Request cancellation. Callbacks registered with
        :meth:`add_cancel_callback` run once, on the first call.
        """
        if self._cancelled:
            return
        self._cancelled = True
        callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    def add_cancel_callback(self, callback: Callable[[], Any]) -> Callable[[], None]:
        """
        Add a callback invoked on cancellation.

        Returns:
            A function that removes the callback when called.
        """
        if self._cancelled:
            callback()
            return lambda: None
        self._callbacks.append(callback)

        def remove() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return remove

    def __enter__(self) -> CancellationTokenSource:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self._callbacks.clear()


__all__ = [
    "CancellationError",
    "CancellationToken",
    "CancellationTokenLike",
    "CancellationTokenSource",
]
