"""Worker supervisor for Substring Counter.

Runs scan tasks on a fixed-size pool of worker threads.  Tasks are fed to
the workers through a bounded queue, so a lazy task iterable (such as a
directory walk) is consumed no faster than the workers can keep up with.
A failing task is logged and never takes its worker down.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Iterable, Optional

from .async_runner import AsyncBatchRunner
from .base import Runner, Task, default_worker_count, run_task

module_logger = logging.getLogger(__name__)

_STOP = object()


class WorkerSupervisor:
    """Manage worker threads for parallel operations."""

    def __init__(self, max_workers: Optional[int] = None, logger: Optional[logging.Logger] = None):
        self.max_workers = max_workers or default_worker_count()
        self.logger = logger or module_logger
        self._threads: list[threading.Thread] = []

    def _work(self, tasks: 'queue.Queue[object]') -> None:
        while True:
            task = tasks.get()
            if task is _STOP:
                break
            run_task(task, self.logger)

    def run_tasks(self, tasks: Iterable[Task]) -> None:
        """Run a collection of no-arg callables in parallel.

        Starts ``max_workers`` threads that pull tasks from a shared queue
        and blocks until every task has finished.
        """
        pending: queue.Queue[object] = queue.Queue(maxsize=self.max_workers * 2)
        self._threads = [
            threading.Thread(target=self._work, args=(pending,), name=f'scan-worker-{i}', daemon=True)
            for i in range(self.max_workers)
        ]
        for t in self._threads:
            t.start()
        try:
            for task in tasks:
                pending.put(task)
        finally:
            # One stop marker per worker, queued after every real task
            for _ in self._threads:
                pending.put(_STOP)
            for t in self._threads:
                t.join()


class SerialRunner:
    """Run tasks one after another in the calling thread."""

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or module_logger

    def run_tasks(self, tasks: Iterable[Task]) -> None:
        for task in tasks:
            run_task(task, self.logger)


def select_runner(
    strategy: str,
    max_workers: Optional[int] = None,
    batch_size: int = 500,
    logger: Optional[logging.Logger] = None,
) -> Runner:
    """Build the task runner for ``strategy``.

    ``pool`` runs tasks on a ``WorkerSupervisor``, ``async`` on an
    ``AsyncBatchRunner`` and ``serial`` in the calling thread, which is
    handy when debugging with breakpoints.
    """
    if strategy == 'pool':
        return WorkerSupervisor(max_workers=max_workers, logger=logger)
    if strategy == 'async':
        return AsyncBatchRunner(batch_size=batch_size, max_workers=max_workers, logger=logger)
    if strategy == 'serial':
        return SerialRunner(logger=logger)
    raise ValueError(f'Unknown scheduling strategy: {strategy}')
