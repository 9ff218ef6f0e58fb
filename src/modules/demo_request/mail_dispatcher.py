import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional

from src.common.config import Settings
from src.modules.demo_request.demo_request_service import send_demo_request

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MailJob:
    html_body: str


class MailDispatcher:
    """
    Fire-and-forget delivery of demo request emails.

    Jobs go into a bounded queue that a fixed pool of worker tasks drains, so at
    most `DISPATCH_WORKERS` SMTP sessions are open at once and at most
    `DISPATCH_QUEUE_SIZE` jobs wait. When the queue is full new jobs are dropped.
    Must be started from inside the running event loop (see the app lifespan).
    """
    def __init__(self, settings: Settings):
        self._settings = settings
        self._queue: asyncio.Queue = asyncio.Queue(maxsize=settings.DISPATCH_QUEUE_SIZE)
        self._workers: List[asyncio.Task] = []
        self._in_flight = 0

    @property
    def running(self) -> bool:
        return bool(self._workers)

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    def start(self) -> None:
        if self._workers:
            return
        for index in range(self._settings.DISPATCH_WORKERS):
            self._workers.append(asyncio.create_task(self._worker(index), name=f"mail-worker-{index}"))
        logger.info("Mail dispatcher started with %d workers", len(self._workers))

    def submit(self, html_body: str) -> bool:
        """
        Queue a rendered message without waiting for delivery.

        Returns:
            bool: False if the queue was full and the message was dropped.
        """
        if not self._workers:
            raise RuntimeError("Mail dispatcher is not running")
        try:
            self._queue.put_nowait(MailJob(html_body=html_body))
        except asyncio.QueueFull:
            logger.warning("Mail queue full (%d pending), dropping demo request", self._queue.qsize())
            return False
        logger.debug("Queued demo request email, %d pending", self._queue.qsize())
        return True

    async def stop(self, timeout: Optional[float] = 10.0) -> None:
        """Let queued jobs drain for up to `timeout` seconds, then cancel the workers."""
        if not self._workers:
            return
        try:
            await asyncio.wait_for(self._queue.join(), timeout=timeout)
        except asyncio.TimeoutError:
            logger.warning(
                "Mail dispatcher stopped with %d undelivered emails", self._queue.qsize() + self._in_flight
            )

        for worker in self._workers:
            worker.cancel()
        await asyncio.gather(*self._workers, return_exceptions=True)
        self._workers = []
        logger.info("Mail dispatcher stopped")

    async def _worker(self, index: int) -> None:
        while True:
            job = await self._queue.get()
            self._in_flight += 1
            try:
                await send_demo_request(self._settings, job.html_body)
            except Exception as e:
                logger.error("Mail worker %d failed on a job: %s", index, e, exc_info=e)
            finally:
                self._in_flight -= 1
                self._queue.task_done()
