# gainfunction/state/base.py
from __future__ import annotations

import asyncio
import logging
from typing import AsyncIterator, Callable, Coroutine, Generic, Optional, TypeVar

log = logging.getLogger(__name__)

S = TypeVar("S")
T = TypeVar("T")

NAME_MAX_LENGTH = 50


def is_valid_name(name: str) -> bool:
    """Exercise and template names: non-empty after trim, at most 50 chars."""
    trimmed = name.strip()
    return 0 < len(trimmed) <= NAME_MAX_LENGTH


class StateFlow(Generic[S]):
    """Latest immutable snapshot plus change notification.

    Updates replace the whole value, so a reader never sees a half-applied
    change.
    """

    def __init__(self, initial: S):
        self._value = initial
        self._waiters: set[asyncio.Event] = set()

    @property
    def value(self) -> S:
        return self._value

    def update(self, fn: Callable[[S], S]) -> S:
        self._value = fn(self._value)
        for changed in self._waiters:
            changed.set()
        return self._value

    async def stream(self) -> AsyncIterator[S]:
        """Yield the current snapshot, then each new one (conflated)."""
        changed = asyncio.Event()
        self._waiters.add(changed)
        last = None
        try:
            while True:
                current = self._value
                if current is not last:
                    last = current
                    yield current
                await changed.wait()
                changed.clear()
        finally:
            self._waiters.discard(changed)


class StateHolder:
    """Owns the asyncio tasks of one screen.

    Must be created while an event loop is running; ``close()`` cancels
    everything still in flight.
    """

    def __init__(self) -> None:
        self._loop = asyncio.get_running_loop()
        self._tasks: set[asyncio.Task] = set()

    def launch(self, coro: Coroutine[None, None, T], *, name: Optional[str] = None) -> asyncio.Task[T]:
        task = self._loop.create_task(coro, name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def close(self) -> None:
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc) -> None:
        await self.close()
