from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

from resourcekit.config.logging_config import get_logger

log = get_logger(__name__)


@runtime_checkable
class DisposableLike(Protocol):
    def dispose(self) -> None: ...


class Disposable:
    """
    Runs a release callback at most once.

    Example:
        handle = Disposable(lambda: listeners.remove(listener))
        handle.dispose()
        handle.dispose()  # no-op
    """

    def __init__(self, callback: Callable[[], object] | None = None):
        self._callback = callback
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def dispose(self) -> None:
        if self._disposed:
            return
        self._disposed = True
        callback, self._callback = self._callback, None
        if callback is not None:
            callback()

    def __enter__(self) -> Disposable:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.dispose()


class DisposableCollection(Disposable):
    """Disposes every collected item, in reverse order of addition."""

    def __init__(self, *items: DisposableLike):
        super().__init__()
        self._items: list[DisposableLike] = list(items)

    def push(self, item: DisposableLike) -> Disposable:
        """
        Add an item, disposing it right away if the collection is already disposed.

        Returns:
            A handle that removes the item from the collection without disposing it.
        """
        if self.disposed:
            item.dispose()
            return Disposable()
        self._items.append(item)

        def remove() -> None:
            if item in self._items:
                self._items.remove(item)

        return Disposable(remove)

    def __len__(self) -> int:
        return len(self._items)

    def dispose(self) -> None:
        if self.disposed:
            return
        super().dispose()
        while self._items:
            item = self._items.pop()
            try:
                item.dispose()
            except Exception:
                log.exception("Failed to dispose %r", item)
