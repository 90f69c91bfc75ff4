"""
Tests for DeferredTask.

Async code is driven with asyncio.run from plain tests.
"""

import asyncio
import logging

import pytest
from pokercoach.coach.timer import DeferredTask


class TestDeferredTask:
    """Fire-or-cancel semantics."""

    def test_fires_once_after_delay(self):
        calls = []

        async def main():
            task = DeferredTask(0.01, lambda: calls.append("fired"), name="t").start()
            assert task.pending
            await task.wait()
            return task

        task = asyncio.run(main())
        assert calls == ["fired"]
        assert task.fired
        assert not task.pending
        assert not task.cancel()

    def test_cancel_prevents_callback(self):
        calls = []

        async def main():
            task = DeferredTask(10, lambda: calls.append("fired")).start()
            assert task.cancel()
            assert not task.cancel()
            await task.wait()
            return task

        task = asyncio.run(main())
        assert calls == []
        assert task.cancelled
        assert not task.fired

    def test_async_callback_is_awaited(self):
        calls = []

        async def callback():
            await asyncio.sleep(0)
            calls.append("done")

        async def main():
            task = DeferredTask(0, callback).start()
            await task.wait()

        asyncio.run(main())
        assert calls == ["done"]

    def test_callback_error_is_logged(self, caplog):
        def boom():
            raise RuntimeError("boom")

        async def main():
            task = DeferredTask(0, boom, name="bad").start()
            await task.wait()
            return task

        with caplog.at_level(logging.ERROR, logger="pokercoach.coach.timer"):
            task = asyncio.run(main())
        assert task.fired
        assert "bad" in caplog.text

    def test_start_twice(self):
        async def main():
            task = DeferredTask(10, lambda: None).start()
            with pytest.raises(RuntimeError):
                task.start()
            task.cancel()

        asyncio.run(main())

    def test_unstarted_task(self):
        task = DeferredTask(-1, lambda: None)
        assert task.delay == 0
        assert not task.pending
        asyncio.run(task.wait())
        assert task.cancel()
        assert "cancelled" in repr(task)
