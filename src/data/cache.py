"""Session-scoped cache for fetched and parsed datasets.

One DatasetCache lives for the whole session and is never invalidated. It
guarantees at most one in-flight load per key: concurrent callers for the same
dataset await the same task. A load that raises is not cached, so a later call
can retry.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)


class DatasetCache:
    def __init__(self) -> None:
        self._tasks: dict[str, asyncio.Task] = {}

    def __contains__(self, key: object) -> bool:
        task = self._tasks.get(key)  # type: ignore[arg-type]
        return (
            task is not None
            and task.done()
            and not task.cancelled()
            and task.exception() is None
        )

    def __len__(self) -> int:
        return sum(1 for key in self._tasks if key in self)

    async def get_or_load(self, key: str, loader: Callable[[], Awaitable[Any]]) -> Any:
        task = self._tasks.get(key)
        if task is None:
            logger.debug("Cache miss: %s", key)
            task = asyncio.ensure_future(loader())
            self._tasks[key] = task
        else:
            logger.debug("Cache hit: %s", key)

        try:
            return await asyncio.shield(task)
        except Exception:
            if self._tasks.get(key) is task:
                del self._tasks[key]
            logger.warning("Load failed for %s; not cached", key)
            raise
