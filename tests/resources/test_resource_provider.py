"""Tests for DefaultResourceProvider resolver-chain lookup."""

from unittest.mock import AsyncMock, Mock

import pytest

from resourcekit.common.contribution_provider import ContributionProvider
from resourcekit.common.uri import URI
from resourcekit.resources import (
    DefaultResourceProvider,
    InMemoryResources,
    MutableResource,
    ResourceResolver,
    UnregisteredResourceError,
)

URI_ = URI.parse("memory:/a.txt")


def failing_resolver() -> Mock:
    return Mock(resolve=Mock(side_effect=ValueError("not mine")))


def succeeding_resolver(resource) -> Mock:
    return Mock(resolve=Mock(return_value=resource))


class TestDefaultResourceProvider:
    @pytest.mark.asyncio
    async def test_no_resolvers_raises_unregistered(self):
        provider = DefaultResourceProvider(ContributionProvider())
        with pytest.raises(UnregisteredResourceError) as exc_info:
            await provider.get(URI_)
        assert exc_info.value.uri == URI_
        assert str(exc_info.value) == "A resource provider for 'memory:/a.txt' is not registered."

    @pytest.mark.asyncio
    async def test_unregistered_error_is_a_lookup_error(self):
        provider = DefaultResourceProvider(ContributionProvider([failing_resolver()]))
        with pytest.raises(LookupError):
            await provider.get(URI_)

    @pytest.mark.asyncio
    async def test_first_success_wins_and_later_resolvers_are_not_invoked(self):
        resource = MutableResource(URI_, "k")
        resolvers = [
            failing_resolver(),
            failing_resolver(),
            succeeding_resolver(resource),
            succeeding_resolver(MutableResource(URI_, "other")),
            failing_resolver(),
        ]
        provider = DefaultResourceProvider(ContributionProvider(resolvers))

        assert await provider.get(URI_) is resource

        for resolver in resolvers[:3]:
            resolver.resolve.assert_called_once_with(URI_)
        for resolver in resolvers[3:]:
            resolver.resolve.assert_not_called()

    @pytest.mark.asyncio
    async def test_async_resolvers_are_awaited(self):
        resource = MutableResource(URI_, "async")
        rejecting = Mock(resolve=AsyncMock(side_effect=LookupError("no")))
        resolving = Mock(resolve=AsyncMock(return_value=resource))
        provider = DefaultResourceProvider(ContributionProvider([rejecting, resolving]))

        assert await provider.get(URI_) is resource
        rejecting.resolve.assert_awaited_once_with(URI_)
        resolving.resolve.assert_awaited_once_with(URI_)

    @pytest.mark.asyncio
    async def test_all_resolvers_failing_raises_unregistered(self):
        resolvers = [failing_resolver(), Mock(resolve=AsyncMock(side_effect=RuntimeError()))]
        provider = DefaultResourceProvider(ContributionProvider(resolvers))
        with pytest.raises(UnregisteredResourceError):
            await provider.get(URI_)
        for resolver in resolvers:
            resolver.resolve.assert_called_once_with(URI_)

    @pytest.mark.asyncio
    async def test_resolvers_are_read_at_lookup_time(self):
        contributions: ContributionProvider[ResourceResolver] = ContributionProvider()
        provider = DefaultResourceProvider(contributions)
        with pytest.raises(UnregisteredResourceError):
            await provider.get(URI_)

        memory = InMemoryResources()
        resource = memory.add(URI_, "late")
        contributions.register(memory)
        assert await provider.get(URI_) is resource

    @pytest.mark.asyncio
    async def test_provider_is_callable(self):
        memory = InMemoryResources()
        resource = memory.add(URI_, "text")
        provider = DefaultResourceProvider(ContributionProvider([memory]))
        assert await provider(URI_) is resource

    def test_in_memory_resources_is_a_resolver(self):
        assert isinstance(InMemoryResources(), ResourceResolver)
