# src/auto_physics/tasks/sequential_queue.py

from __future__ import annotations

"""
Sequential task queue.

A single execution lane for async work:
- tasks run one at a time, in enqueue order,
- a failing task never blocks the tasks behind it,
- every submitter gets back its own task's outcome (value or exception).

Each submission produces two futures:
- the execution task returned to the caller (carries the real outcome),
- an internal tail future that settles with None once the execution task is done.

The next submission waits on the tail, never on the execution task, so failures
stay with the caller that submitted them.
"""

import asyncio
import concurrent.futures
import logging
import threading
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Any, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

TaskFactory = Callable[[], Awaitable[T]]
# Zero-argument callable returning an awaitable, e.g. `lambda: client.fetch(x)`.


class QueueState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"


class SequentialTaskQueue:
    """
    FIFO, one-at-a-time execution of async tasks.

    Bound to the event loop that performs the first enqueue. Create one queue per
    logical owner (e.g. one per generator) rather than sharing a global one.
    """

    def __init__(self, name: str = "default") -> None:
        self.name = name
        self._lock = threading.Lock()
        self._tail: asyncio.Future[None] | None = None
        self._pending = 0
        self._active = False

    @property
    def pending(self) -> int:
        """Submitted tasks that have not settled yet (including the running one)."""
        return self._pending

    @property
    def state(self) -> QueueState:
        return QueueState.RUNNING if self._active else QueueState.IDLE

    def enqueue(self, task: TaskFactory[T]) -> asyncio.Task[T]:
        """
        Schedule `task` to run after everything enqueued so far has settled.

        Returns the execution task: awaiting it yields the task's result or raises
        the exception the task raised. Must be called from the owning event loop.

        The queue itself never cancels or times out a task. The returned handle is
        the caller's own: `handle.cancel()` (or `asyncio.wait_for(handle, ...)`)
        skips the task if it has not started yet, and interrupts it with
        CancelledError if it is already running. Either way the next task starts
        only after this one has unwound and its predecessor has settled. Wrap the
        handle in `asyncio.shield` to wait with a deadline without interrupting it.
        """
        if not callable(task):
            raise TypeError(f"task must be a zero-argument callable, got {type(task).__name__}")

        loop = asyncio.get_running_loop()

        with self._lock:
            previous = self._tail
            if previous is not None and previous.get_loop() is not loop:
                if not previous.done():
                    raise RuntimeError(f"Queue {self.name!r} is bound to a different event loop.")
                previous = None

            tail: asyncio.Future[None] = loop.create_future()
            execution = loop.create_task(self._run(previous, task))
            execution.add_done_callback(lambda _t: self._advance(previous, tail))

            self._tail = tail
            self._pending += 1
            position = self._pending

        logger.debug("queue=%s enqueued task (position=%d)", self.name, position)
        return execution

    def submit_threadsafe(
        self,
        task: TaskFactory[T],
        loop: asyncio.AbstractEventLoop,
    ) -> concurrent.futures.Future[T]:
        """
        Enqueue from a thread that does not run `loop`.

        Submissions are ordered by the order in which `loop` picks them up.
        Do not block on the returned future from inside `loop` itself.
        """

        async def _submit() -> T:
            return await self.enqueue(task)

        return asyncio.run_coroutine_threadsafe(_submit(), loop)

    async def join(self) -> None:
        """Wait until every task enqueued so far has settled. Never raises task errors."""
        tail = self._tail
        if tail is None or tail.done():
            return
        await asyncio.shield(tail)

    async def _run(self, previous: asyncio.Future[None] | None, task: TaskFactory[T]) -> T:
        if previous is not None and not previous.done():
            # shield: cancelling this submission must not settle the predecessor's tail.
            await asyncio.shield(previous)

        self._active = True
        try:
            return await task()
        finally:
            self._active = False

    def _advance(self, previous: asyncio.Future[None] | None, tail: asyncio.Future[None]) -> None:
        """Absorb the execution outcome into `tail` once the predecessor has settled too."""

        def _release(_: Any = None) -> None:
            with self._lock:
                self._pending -= 1
            if not tail.done():
                tail.set_result(None)

        # A submission cancelled while waiting finishes before its predecessor does.
        if previous is None or previous.done():
            _release()
        else:
            previous.add_done_callback(_release)


def timeboxed(task: TaskFactory[T], seconds: float) -> TaskFactory[T]:
    """
    Wrap `task` so that it fails with TimeoutError after `seconds`.

    The queue never times tasks out on its own; wrap before enqueueing.
    """
    limit = max(0.0, float(seconds))

    async def _run() -> T:
        return await asyncio.wait_for(task(), timeout=limit)

    return _run
