from __future__ import annotations

import asyncio
from typing import Protocol


class Ticker(Protocol):
    async def wait(self) -> bool: ...

    def stop(self) -> None: ...

    def reset(self) -> None: ...


class IntervalTicker:
    """Fixed-interval timer that can be stopped while a wait is in progress."""

    def __init__(self, interval_seconds: float) -> None:
        self.interval_seconds = interval_seconds
        self._stop_event = asyncio.Event()

    async def wait(self) -> bool:
        """Sleep one interval. Returns False once the ticker has been stopped."""
        if self._stop_event.is_set():
            return False
        try:
            await asyncio.wait_for(self._stop_event.wait(), timeout=self.interval_seconds)
        except asyncio.TimeoutError:
            return True
        return False

    def stop(self) -> None:
        self._stop_event.set()

    def reset(self) -> None:
        self._stop_event.clear()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()
