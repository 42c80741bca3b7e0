"""Synchronous publish/subscribe events.

An :class:`Emitter` owns the listener list and fires notifications; it hands
out an :class:`Event` that consumers subscribe through, so subscribers cannot
fire on their own.

Example:
    emitter: Emitter[None] = Emitter()
    handle = emitter.event(lambda _: print("changed"))
    emitter.fire(None)  # prints "changed"
    handle.dispose()
"""

from __future__ import annotations

from typing import Callable, Generic, TypeVar

from resourcekit.common.disposable import Disposable
from resourcekit.config.logging_config import get_logger

log = get_logger(__name__)

T = TypeVar("T")

Listener = Callable[[T], object]


class Event(Generic[T]):
    """Subscription side of an :class:`Emitter`."""

    def __init__(self, emitter: Emitter[T]):
        self._emitter = emitter

    def subscribe(self, listener: Listener[T]) -> Disposable:
        return self._emitter._add_listener(listener)

    def __call__(self, listener: Listener[T]) -> Disposable:
        return self.subscribe(listener)


class Emitter(Generic[T]):
    def __init__(self) -> None:
        self._listeners: list[Listener[T]] = []
        self._disposed = False
        self._event: Event[T] | None = None

    @property
    def event(self) -> Event[T]:
        if self._event is None:
            self._event = Event(self)
        return self._event

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def _add_listener(self, listener: Listener[T]) -> Disposable:
        if self._disposed:
            return Disposable()
        self._listeners.append(listener)

        def remove() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return Disposable(remove)

    def fire(self, value: T) -> None:
        """
        Deliver ``value`` to every listener subscribed at the time of the call.

        A failing listener is logged and does not prevent delivery to the rest.
        """
        for listener in list(self._listeners):
            try:
                listener(value)
            except Exception:
                log.exception("Event listener %r failed", listener)

    def dispose(self) -> None:
        self._disposed = True
        self._listeners.clear()
