"""Schedulable units: delayed tasks, debouncing and paced iteration."""

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable, Iterable
from typing import Any, TypeVar

from loguru import logger

T = TypeVar("T")


class DelayedTask:
    """Run a coroutine function once after `delay` seconds, unless cancelled first.

    Must be scheduled from inside a running event loop.
    """

    def __init__(
        self, delay: float, func: Callable[[], Awaitable[Any]], *, name: str | None = None
    ) -> None:
        self.delay = delay
        self.func = func
        self.name = name or getattr(func, "__name__", "delayed-task")
        self._task: asyncio.Task[Any] | None = None

    @property
    def pending(self) -> bool:
        return self._task is not None and not self._task.done()

    def schedule(self) -> asyncio.Task[Any]:
        """Start the countdown. Scheduling twice replaces the earlier countdown."""
        self.cancel()
        self._task = asyncio.get_running_loop().create_task(self._run(), name=self.name)
        return self._task

    def cancel(self) -> bool:
        """Cancel the task if it has not finished. Returns True if something was cancelled."""
        if self._task is None or self._task.done():
            return False
        self._task.cancel()
        return True

    async def wait(self) -> None:
        """Wait for the scheduled run (if any) to finish or be cancelled."""
        if self._task is None:
            return
        try:
            await self._task
        except asyncio.CancelledError:
            if not self._task.cancelled():
                raise

    async def _run(self) -> Any:
        await asyncio.sleep(self.delay)
        try:
            return await self.func()
        except Exception:
            logger.exception("Scheduled task {!r} failed", self.name)
            return None


class Debouncer:
    """Apply only the last of a burst of calls, after a quiet period.

    Each `call` cancels the pending invocation and schedules a new one
    `delay` seconds later.
    """

    def __init__(self, delay: float, func: Callable[..., Awaitable[Any]]) -> None:
        self.delay = delay
        self.func = func
        self._pending: DelayedTask | None = None

    @property
    def pending(self) -> bool:
        return self._pending is not None and self._pending.pending

    def call(self, *args: Any, **kwargs: Any) -> None:
        if self._pending is not None:
            self._pending.cancel()

        async def invoke() -> Any:
            return await self.func(*args, **kwargs)

        self._pending = DelayedTask(self.delay, invoke, name="debounced")
        self._pending.schedule()

    def cancel(self) -> None:
        if self._pending is not None:
            self._pending.cancel()

    async def flush(self) -> None:
        """Wait for the pending invocation, if any."""
        if self._pending is not None:
            await self._pending.wait()


async def paced(items: Iterable[T], interval: float) -> AsyncIterator[T]:
    """Yield items one at a time, sleeping `interval` seconds after each.

    The sleep happens when the consumer asks for the next item, so the pause
    follows the consumer's work on the previous one.
    """
    for item in items:
        yield item
        await asyncio.sleep(interval)
