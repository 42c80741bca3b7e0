from __future__ import annotations

from typing import Callable, Generic, Iterable, TypeVar

T = TypeVar("T")


class ContributionProvider(Generic[T]):
    """
    An ordered collection of contributions of one kind.

    Contributions are returned in registration order. A ``factory`` may be
    supplied to compute the initial contributions lazily on first access.

    Example:
        resolvers: ContributionProvider[ResourceResolver] = ContributionProvider(
            [InMemoryResources(), FileResourceResolver()]
        )
        provider = DefaultResourceProvider(resolvers)
    """

    def __init__(
        self,
        contributions: Iterable[T] = (),
        factory: Callable[[], Iterable[T]] | None = None,
    ):
        self._contributions: list[T] = list(contributions)
        self._factory = factory

    def register(self, contribution: T) -> None:
        self._ensure_loaded()
        self._contributions.append(contribution)

    def get_contributions(self) -> list[T]:
        self._ensure_loaded()
        return list(self._contributions)

    def _ensure_loaded(self) -> None:
        if self._factory is not None:
            factory, self._factory = self._factory, None
            self._contributions = list(factory()) + self._contributions
