import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

from src.config.settings import settings

logger = logging.getLogger(__name__)


class BackgroundTaskQueue:
    """Runs fire-and-forget coroutines detached from the request that queued them.

    Each task logs its own failure; nothing is propagated to the submitter.
    At most ``max_pending`` tasks run at once, further submissions are dropped.
    """

    def __init__(self, max_pending: int = 100):
        self._max_pending = max_pending
        self._tasks: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._tasks)

    def submit(self, coro: Coroutine[Any, Any, Any], name: str) -> bool:
        if len(self._tasks) >= self._max_pending:
            coro.close()
            logger.warning("Background queue full (%d pending), dropping %s", self.pending, name)
            return False

        task = asyncio.create_task(self._run(coro, name), name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return True

    async def _run(self, coro: Coroutine[Any, Any, Any], name: str) -> None:
        try:
            await coro
        except Exception:
            logger.exception("Background task %s failed", name)

    async def drain(self) -> None:
        """Wait for every task submitted so far."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))


background_queue = BackgroundTaskQueue(max_pending=settings.background_max_pending)


def get_background_queue() -> BackgroundTaskQueue:
    return background_queue
