"""Asynchronous task runner for Substring Counter.

Bridges an ``asyncio`` event loop onto a thread pool: every task is handed
to the pool with ``run_in_executor`` and the loop awaits completion in
batches, keeping at most ``batch_size`` tasks in flight so that very large
directory trees do not pile up pending futures.
"""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from itertools import islice
from typing import Iterable, Iterator, List, Optional

from .base import Task, default_worker_count, report_failure

module_logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 500


def take(tasks: Iterator[Task], size: int) -> List[Task]:
    """Pull at most ``size`` items from ``tasks``."""
    return list(islice(tasks, size))


class AsyncBatchRunner:
    """Run tasks from an event loop in bounded batches."""

    def __init__(
        self,
        batch_size: int = DEFAULT_BATCH_SIZE,
        max_workers: Optional[int] = None,
        logger: Optional[logging.Logger] = None,
    ):
        if batch_size < 1:
            raise ValueError(f'batch_size must be positive, got {batch_size}')
        self.batch_size = batch_size
        self.max_workers = max_workers or default_worker_count()
        self.logger = logger or module_logger

    def run_tasks(self, tasks: Iterable[Task]) -> None:
        """Run every task and block until all of them have completed."""
        asyncio.run(self.run_tasks_async(tasks))

    async def run_tasks_async(self, tasks: Iterable[Task]) -> None:
        loop = asyncio.get_running_loop()
        with ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix='scan-worker') as executor:
            pending = iter(tasks)
            while True:
                # The task iterable may block (a directory walk), so it is
                # drained on the loop's default executor
                batch = await loop.run_in_executor(None, take, pending, self.batch_size)
                if not batch:
                    break
                futures = [loop.run_in_executor(executor, task) for task in batch]
                results = await asyncio.gather(*futures, return_exceptions=True)
                for task, result in zip(batch, results):
                    if isinstance(result, Exception):
                        report_failure(task, result, self.logger)
                    elif isinstance(result, BaseException):
                        raise result
