import asyncio
from typing import Awaitable, Callable, Generic, List, Optional, Sequence, TypeVar

from sitestatus.logging.logger import setup_logger

T = TypeVar('T')
R = TypeVar('R')


class AsyncWorkerPool(Generic[T, R]):
    """
    Runs ``processor`` over a batch of items with at most ``concurrency`` in flight.

    Results come back in input order. An item whose processor raises, exceeds
    ``worker_timeout``, or is still running when ``batch_timeout`` expires is
    mapped through ``fallback`` instead, so process_items() always returns one
    result per item.
    """

    def __init__(
        self,
        concurrency: int,
        processor: Callable[[T], Awaitable[R]],
        fallback: Callable[[T], R],
        worker_timeout: float = 30.0,
        batch_timeout: Optional[float] = None,
    ):
        self.concurrency = max(1, concurrency)
        self.processor = processor
        self.fallback = fallback
        self.worker_timeout = worker_timeout
        self.batch_timeout = batch_timeout
        self.logger = setup_logger(__name__)

    async def process_items(self, items: Sequence[T]) -> List[R]:
        if not items:
            return []

        semaphore = asyncio.Semaphore(self.concurrency)
        results: List[Optional[R]] = [None] * len(items)
        finished = [False] * len(items)

        async def worker(index: int, item: T) -> None:
            async with semaphore:
                try:
                    results[index] = await asyncio.wait_for(self.processor(item), timeout=self.worker_timeout)
                except asyncio.TimeoutError:
                    self.logger.warning(f"Worker timed out after {self.worker_timeout}s on {item!r}")
                    results[index] = self.fallback(item)
                except Exception as e:
                    self.logger.warning(f"Worker failed on {item!r}: {e!r}")
                    results[index] = self.fallback(item)
                finished[index] = True

        tasks = [asyncio.create_task(worker(i, item)) for i, item in enumerate(items)]

        try:
            _, pending = await asyncio.wait(tasks, timeout=self.batch_timeout)
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        if pending:
            self.logger.warning(f"Batch timed out after {self.batch_timeout}s with {len(pending)} unfinished items")

        return [
            results[i] if finished[i] else self.fallback(item)
            for i, item in enumerate(items)
        ]
