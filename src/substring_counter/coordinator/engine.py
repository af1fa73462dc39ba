"""Scan coordination for Substring Counter.

Discovers every regular file under a root directory, schedules one scan
task per file on the configured runner and merges the per-file counts into
a single report keyed by path.
"""

from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Mapping, Optional, Union

from ..config_loader import ScanSettings
from ..discovery.engine import discover_files
from ..matching.scanner import count_in_file
from ..supervisor.aggregator import ResultAggregator
from ..supervisor.manager import select_runner

module_logger = logging.getLogger(__name__)


@dataclass
class ScanTask:
    """Count matches in one file and post the result to the aggregator."""

    path: Path
    pattern: bytes
    aggregator: ResultAggregator
    settings: ScanSettings
    logger: logging.Logger

    def __call__(self) -> None:
        try:
            count = count_in_file(
                self.path,
                self.pattern,
                buffer_size=self.settings.buffer_size,
                strict_boundaries=self.settings.strict_boundaries,
            )
        except OSError as exc:
            self.logger.error('%s: %s', self.path, exc.strerror or exc)
            return
        self.aggregator.submit(str(self.path), count)

    def __str__(self) -> str:
        return str(self.path)


def encode_pattern(pattern: Union[str, bytes]) -> bytes:
    """Return ``pattern`` as bytes, encoding text as UTF-8."""
    raw = pattern.encode('utf-8') if isinstance(pattern, str) else bytes(pattern)
    if not raw:
        raise ValueError('pattern must not be empty')
    return raw


def scan_directory(
    root: Union[str, Path],
    pattern: Union[str, bytes],
    settings: Optional[ScanSettings] = None,
    logger: Optional[logging.Logger] = None,
) -> Mapping[str, int]:
    """Count ``pattern`` in every regular file under ``root``.

    Files that cannot be read are logged and left out of the result.

    Args:
        root: Directory to scan recursively.
        pattern: Non-empty substring; text is matched as its UTF-8 bytes.
        settings: Scheduling and scanning options (defaults when ``None``).
        logger: Error sink for per-file and traversal failures.

    Returns:
        Read-only mapping from file path to match count.

    Raises:
        ValueError: ``pattern`` is empty.
        FileNotFoundError: ``root`` does not exist.
        NotADirectoryError: ``root`` is not a directory.
    """
    settings = settings or ScanSettings()
    log = logger or module_logger
    raw_pattern = encode_pattern(pattern)
    if len(raw_pattern) > settings.buffer_size:
        raise ValueError(
            f'pattern ({len(raw_pattern)} bytes) does not fit the {settings.buffer_size}-byte read buffer'
        )
    if not os.path.exists(root):
        raise FileNotFoundError(f'No such directory: {root}')
    if not os.path.isdir(root):
        raise NotADirectoryError(f'Not a directory: {root}')

    runner = select_runner(
        settings.strategy,
        max_workers=settings.workers,
        batch_size=settings.batch_size,
        logger=log,
    )
    log.info(
        'Starting: root=%s, pattern=%d bytes, strategy=%s, workers=%s',
        root,
        len(raw_pattern),
        settings.strategy,
        settings.workers or 'auto',
    )
    start = time.perf_counter()
    discovered = 0

    def tasks(aggregator: ResultAggregator) -> Iterator[ScanTask]:
        nonlocal discovered
        for path in discover_files(root, follow_links=settings.follow_links, logger=log):
            discovered += 1
            yield ScanTask(path, raw_pattern, aggregator, settings, log)

    with ResultAggregator() as aggregator:
        runner.run_tasks(tasks(aggregator))
        results = aggregator.close()

    elapsed = time.perf_counter() - start
    log.info('Done: %d of %d files scanned in %.2fs', len(results), discovered, elapsed)
    if len(results) < discovered:
        log.warning('%d files could not be scanned', discovered - len(results))
    return results
