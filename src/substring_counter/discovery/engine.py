"""Discovery engine for Substring Counter.

This module walks a root directory recursively and yields the regular files
found under it for downstream scanning.  The walk is lazy so the scan
coordinator can start dispatching work before the whole tree is listed.
Unreadable directories are reported and skipped; they never stop the walk
of their siblings.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterator, Optional, Union

module_logger = logging.getLogger(__name__)


def discover_files(
    root: Union[str, Path],
    follow_links: bool = False,
    logger: Optional[logging.Logger] = None,
) -> Iterator[Path]:
    """Yield paths of regular files under ``root``.

    Args:
        root: Directory to search.
        follow_links: Descend into symlinked directories and yield symlinked
            files.  When disabled (the default) symbolic links are skipped.
        logger: Error sink for traversal failures.  Defaults to this
            module's logger.

    Yields:
        ``pathlib.Path`` objects built from the walked directory and the
        entry name, as encountered during traversal.
    """
    log = logger or module_logger

    def on_error(error: OSError) -> None:
        log.error('%s: %s', error.filename, error.strerror or error)

    for dirpath, _, files in os.walk(root, onerror=on_error, followlinks=follow_links):
        for name in files:
            path = Path(dirpath) / name
            try:
                if not follow_links and path.is_symlink():
                    log.debug('Skipping symbolic link %s', path)
                    continue
                if not path.is_file():
                    log.debug('Skipping non-regular file %s', path)
                    continue
            except OSError as exc:
                log.error('%s: %s', path, exc)
                continue
            yield path
