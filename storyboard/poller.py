# storyboard/poller.py

import asyncio
import logging
from typing import Awaitable, Callable

from storyboard.entities import Note
from storyboard.exc import StoryboardError
from storyboard.settings import POLL_INTERVAL

logger = logging.getLogger("storyboard_client")


class SnapshotPoller:
    """
    Refetch the whole note collection on a fixed cadence.

    The first fetch happens as soon as the poller starts. Ticks are scheduled
    against a fixed deadline and each one runs as its own task, so a slow or
    failing fetch never delays the next tick. A successful fetch is handed to
    ``apply`` as-is. A failed one is logged and dropped. Polling never pauses
    for local gestures, so a snapshot can land in the middle of a drag.
    """

    def __init__(
        self,
        fetch: Callable[[], Awaitable[list[Note]]],
        apply: Callable[[list[Note]], None],
        interval: float = POLL_INTERVAL,
        on_settled: Callable[[], None] | None = None,
    ) -> None:
        self.fetch = fetch
        self.apply = apply
        self.interval = interval
        self.on_settled = on_settled
        self._task: asyncio.Task | None = None
        self._in_flight: set[asyncio.Task] = set()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def poll_once(self) -> bool:
        try:
            snapshot = await self.fetch()
        except StoryboardError as e:
            logger.debug(f"Poll failed, keeping current board: {e}")
            return False
        else:
            self.apply(snapshot)
            return True
        finally:
            if self.on_settled is not None:
                self.on_settled()

    async def _tick(self) -> None:
        try:
            await self.poll_once()
        except Exception:
            logger.exception("Poll tick raised, polling continues")

    async def _run(self) -> None:
        loop = asyncio.get_running_loop()
        next_tick = loop.time()
        while True:
            task = asyncio.create_task(self._tick())
            self._in_flight.add(task)
            task.add_done_callback(self._in_flight.discard)

            next_tick += self.interval
            await asyncio.sleep(max(0.0, next_tick - loop.time()))

    def start(self) -> asyncio.Task:
        if not self.running:
            self._task = asyncio.create_task(self._run())
        return self._task

    async def stop(self) -> None:
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        ticks = list(self._in_flight)
        for tick in ticks:
            tick.cancel()
        await asyncio.gather(task, *ticks, return_exceptions=True)
