"""Suspension points for the sequence controller."""

import asyncio
from typing import Protocol


class Scheduler(Protocol):
    async def sleep(self, seconds: float) -> None:
        """Yield to the event loop and resume after ``seconds``."""
        ...


class AsyncioScheduler:
    """Real wall-clock suspension on the running event loop."""

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)


class InstantScheduler:
    """Yields to the event loop without waiting (headless runs, ``--instant``)."""

    def __init__(self):
        self.total_seconds = 0.0

    async def sleep(self, seconds: float) -> None:
        self.total_seconds += seconds
        await asyncio.sleep(0)
