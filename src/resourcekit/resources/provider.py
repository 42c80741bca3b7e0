from __future__ import annotations

import inspect
from typing import Awaitable, Callable, Protocol, runtime_checkable

from resourcekit.common.contribution_provider import ContributionProvider
from resourcekit.common.uri import URI
from resourcekit.resources.exceptions import UnregisteredResourceError
from resourcekit.resources.resource import Resource

ResourceProvider = Callable[[URI], Awaitable[Resource]]


@runtime_checkable
class ResourceResolver(Protocol):
    def resolve(self, uri: URI) -> Resource | Awaitable[Resource]:
        """
        Return a resource for ``uri``, directly or as an awaitable.

        Raise if this resolver cannot provide a resource for ``uri``.
        """
        ...


class DefaultResourceProvider:
    """
    Resolves URIs through an ordered chain of resolvers.

    The first resolver that produces a resource wins; the resolvers after it
    are not consulted. Instances are callable as a :data:`ResourceProvider`.
    """

    def __init__(self, resolvers_provider: ContributionProvider[ResourceResolver]):
        self.resolvers_provider = resolvers_provider

    async def get(self, uri: URI) -> Resource:
        """
        Raises:
            UnregisteredResourceError: If no resolver can provide ``uri``.
        """
        resolvers = self.resolvers_provider.get_contributions()
        for resolver in resolvers:
            try:
                result = resolver.resolve(uri)
                if inspect.isawaitable(result):
                    result = await result
                return result
            except Exception:
                # not this resolver's resource
                continue
        raise UnregisteredResourceError(uri)

    async def __call__(self, uri: URI) -> Resource:
        return await self.get(uri)
