from __future__ import annotations

import asyncio
import logging
from typing import Optional, Protocol

from ..errors import DecodeError, FetchError
from ..metrics.normalizer import normalize
from ..metrics.registry import GaugeSink
from .decoder import decode_status, decode_tasks
from .fetcher import STATUS_PATH, TASKS_PATH
from .ticker import IntervalTicker, Ticker

logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    async def fetch(self, path: str) -> bytes: ...


class PollLoop:
    """Background task that periodically polls Redash and publishes the result.

    Each cycle fetches ``/status.json`` and, only if that succeeded, the
    admin task list. The two publications are independent: a failed task
    fetch leaves ``redash_active_tasks`` at its previous value while the
    status series are still updated. A failed status fetch publishes nothing.
    """

    def __init__(
        self,
        fetcher: Fetcher,
        sink: GaugeSink,
        interval_seconds: int,
        ticker: Optional[Ticker] = None,
    ) -> None:
        self.fetcher = fetcher
        self.sink = sink
        self.interval_seconds = max(interval_seconds, 1)
        self.ticker: Ticker = ticker or IntervalTicker(self.interval_seconds)
        self._task: Optional[asyncio.Task[None]] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if not self.running:
            self.ticker.reset()
            self._task = asyncio.create_task(self._run(), name="redash-poll-loop")

    async def stop(self) -> None:
        if self._task is None:
            return
        self.ticker.stop()
        self._task.cancel()
        try:
            await self.wait_closed()
        except asyncio.CancelledError:
            pass
        finally:
            self._task = None

    async def _run(self) -> None:
        while True:
            try:
                await self.poll_once()
            except Exception:
                logger.exception("Unexpected error while polling Redash")
            if not await self.ticker.wait():
                return

    async def poll_once(self) -> bool:
        """Run one cycle. Returns True when the status series were published."""
        try:
            status = decode_status(await self.fetcher.fetch(STATUS_PATH))
        except (FetchError, DecodeError) as exc:
            logger.error("%s", exc)
            return False

        self.sink.publish_status(normalize(status))

        try:
            tasks = decode_tasks(await self.fetcher.fetch(TASKS_PATH))
        except (FetchError, DecodeError) as exc:
            logger.error("%s", exc)
        else:
            self.sink.publish_active_tasks(tasks.active_count)
        return True

    async def wait_closed(self) -> None:
        if self._task is not None:
            await self._task
