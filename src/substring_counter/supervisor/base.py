"""Pieces shared by the task runners."""

from __future__ import annotations

import logging
import os
from typing import Callable, Iterable, Protocol, runtime_checkable

DEFAULT_WORKERS = 8

Task = Callable[[], None]


@runtime_checkable
class Runner(Protocol):
    """Scheduler backend: runs every task and returns once all have finished."""

    def run_tasks(self, tasks: Iterable[Task]) -> None:
        ...


def default_worker_count() -> int:
    """Available hardware parallelism, or ``DEFAULT_WORKERS`` if unknown."""
    return os.cpu_count() or DEFAULT_WORKERS


def report_failure(task: Task, exc: BaseException, logger: logging.Logger) -> None:
    logger.error('%s: %s', task, exc)


def run_task(task: Task, logger: logging.Logger) -> None:
    """Run one task, containing and logging any failure."""
    try:
        task()
    except Exception as exc:
        report_failure(task, exc, logger)
