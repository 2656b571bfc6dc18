import asyncio
import logging
from typing import Awaitable, Callable, TypeVar

log = logging.getLogger("webcheck")

T = TypeVar("T")


class AuditScheduler:
    """Admission queue for expensive audit jobs.

    Jobs start in submission order and at most ``concurrency`` of them run at
    once. A job that raises hands the error back to its submitter and frees
    the slot for the next one.
    """

    def __init__(self, concurrency: int = 1):
        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")
        self.concurrency = concurrency
        self._semaphore = asyncio.Semaphore(concurrency)
        self._pending = 0
        self._active = 0

    @property
    def pending(self) -> int:
        return self._pending

    @property
    def active(self) -> int:
        return self._active

    def stats(self) -> dict:
        return {"pending": self._pending, "active": self._active, "concurrency": self.concurrency}

    async def submit(self, job: Callable[[], Awaitable[T]]) -> T:
        self._pending += 1
        try:
            await self._semaphore.acquire()
        finally:
            self._pending -= 1

        self._active += 1
        try:
            return await job()
        finally:
            self._active -= 1
            self._semaphore.release()
