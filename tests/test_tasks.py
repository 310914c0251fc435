"""
Tests for the task runner and its mailbox.
"""

import asyncio

import pytest

from porkbun_tui.tasks import FetchFailed, KeyPressed, Operation, TaskRunner, Tick, tagged


class TestTaskRunner:
    """Tests for TaskRunner."""

    @pytest.mark.asyncio
    async def test_result_lands_in_mailbox(self):
        mailbox = asyncio.Queue()
        runner = TaskRunner(mailbox)

        async def command():
            return KeyPressed("x")

        runner.spawn([command])
        message = await asyncio.wait_for(mailbox.get(), timeout=1)

        assert message == KeyPressed("x")

    @pytest.mark.asyncio
    async def test_none_posts_nothing(self):
        mailbox = asyncio.Queue()
        runner = TaskRunner(mailbox)

        async def quiet():
            return None

        async def loud():
            await asyncio.sleep(0.01)
            return Tick()

        runner.spawn([quiet, loud])
        message = await asyncio.wait_for(mailbox.get(), timeout=1)

        assert isinstance(message, Tick)
        assert mailbox.empty()

    @pytest.mark.asyncio
    async def test_crash_becomes_fetch_failed(self):
        mailbox = asyncio.Queue()
        runner = TaskRunner(mailbox)

        async def broken():
            raise RuntimeError("kaboom")

        runner.spawn([broken])
        message = await asyncio.wait_for(mailbox.get(), timeout=1)

        assert isinstance(message, FetchFailed)
        assert message.operation is None
        assert str(message.error) == "kaboom"

    @pytest.mark.asyncio
    async def test_tagged_crash_keeps_operation_and_domain(self):
        mailbox = asyncio.Queue()
        runner = TaskRunner(mailbox)

        @tagged(Operation.AVAILABILITY, "x.com")
        async def broken():
            raise AttributeError("no price")

        runner.spawn([broken])
        message = await asyncio.wait_for(mailbox.get(), timeout=1)

        assert message.operation == Operation.AVAILABILITY
        assert message.domain == "x.com"
        assert isinstance(message.error, AttributeError)

    @pytest.mark.asyncio
    async def test_completion_order_follows_latency(self):
        mailbox = asyncio.Queue()
        runner = TaskRunner(mailbox)

        def delayed(key, delay):
            async def command():
                await asyncio.sleep(delay)
                return KeyPressed(key)
            return command

        runner.spawn([delayed("slow", 0.05), delayed("fast", 0.0)])
        first = await asyncio.wait_for(mailbox.get(), timeout=1)
        second = await asyncio.wait_for(mailbox.get(), timeout=1)

        assert [first.key, second.key] == ["fast", "slow"]

    @pytest.mark.asyncio
    async def test_shutdown_cancels_pending(self):
        mailbox = asyncio.Queue()
        runner = TaskRunner(mailbox)
        started = asyncio.Event()

        async def forever():
            started.set()
            await asyncio.sleep(3600)

        runner.spawn([forever])
        await asyncio.wait_for(started.wait(), timeout=1)
        await runner.shutdown()

        assert mailbox.empty()
