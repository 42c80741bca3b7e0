"""Tests for CancellationToken and CancellationTokenSource."""

import asyncio

import pytest

from resourcekit.concurrency import (
    CancellationError,
    CancellationToken,
    CancellationTokenLike,
    CancellationTokenSource,
)


class TestCancellationTokenSource:
    """Test suite for CancellationTokenSource."""

    def test_initial_state(self) -> None:
        """Test that a new token is not cancelled."""
        source = CancellationTokenSource()
        assert not source.token.is_cancellation_requested

    def test_cancel_sets_flag(self) -> None:
        """Test that cancel() is visible through the token."""
        source = CancellationTokenSource()
        token = source.token
        source.cancel()
        assert token.is_cancellation_requested
        assert source.token is token

    def test_raise_if_cancellation_requested(self) -> None:
        """Test raise_if_cancellation_requested raises only once cancelled."""
        source = CancellationTokenSource()
        source.token.raise_if_cancellation_requested()  # Should not raise
        source.cancel()
        with pytest.raises(CancellationError):
            source.token.raise_if_cancellation_requested()

    def test_callbacks_run_once(self) -> None:
        """Test cancel callbacks run on the first cancel only."""
        source = CancellationTokenSource()
        calls = []
        source.add_cancel_callback(lambda: calls.append("a"))
        remove = source.add_cancel_callback(lambda: calls.append("b"))
        remove()
        source.cancel()
        source.cancel()
        assert calls == ["a"]

    def test_callback_added_after_cancel_runs_immediately(self) -> None:
        source = CancellationTokenSource()
        source.cancel()
        calls = []
        source.add_cancel_callback(lambda: calls.append(1))
        assert calls == [1]

    @pytest.mark.asyncio
    async def test_wait_for_cancellation_requested(self) -> None:
        """Test waiting blocks until the source is cancelled."""
        source = CancellationTokenSource()
        done = False

        async def waiter() -> None:
            nonlocal done
            await source.token.wait_for_cancellation_requested()
            done = True

        task = asyncio.create_task(waiter())
        await asyncio.sleep(0.01)
        assert not done

        source.cancel()
        await asyncio.wait_for(task, timeout=1.0)
        assert done


class TestStaticTokens:
    def test_none_is_never_cancelled(self) -> None:
        assert not CancellationToken.NONE.is_cancellation_requested

    def test_cancelled_is_always_cancelled(self) -> None:
        assert CancellationToken.CANCELLED.is_cancellation_requested

    def test_tokens_satisfy_protocol(self) -> None:
        assert isinstance(CancellationToken.NONE, CancellationTokenLike)
        assert isinstance(CancellationTokenSource().token, CancellationTokenLike)
