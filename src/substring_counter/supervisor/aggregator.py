"""Single-writer aggregation of per-file results.

Scan tasks never touch the result map directly.  They post ``(path, count)``
events to a queue and one consumer thread folds them into the map, so
concurrent workers cannot lose or corrupt each other's updates.
"""

from __future__ import annotations

import queue
import threading
from types import MappingProxyType
from typing import Dict, Mapping, Optional

_CLOSE = object()


class ResultAggregator:
    """Collect ``(path, count)`` events into a single result map."""

    def __init__(self) -> None:
        self._events: queue.Queue[object] = queue.Queue()
        self._results: Dict[str, int] = {}
        self._thread: Optional[threading.Thread] = None
        self._closed = False

    def start(self) -> 'ResultAggregator':
        if self._thread is not None:
            raise RuntimeError('aggregator already started')
        self._thread = threading.Thread(target=self._consume, name='result-aggregator', daemon=True)
        self._thread.start()
        return self

    def submit(self, path: str, count: int) -> None:
        """Record ``count`` for ``path``, replacing any earlier value."""
        if self._closed:
            raise RuntimeError('aggregator is closed')
        self._events.put((path, count))

    def _consume(self) -> None:
        while True:
            event = self._events.get()
            if event is _CLOSE:
                break
            path, count = event
            self._results[path] = count

    def close(self) -> Mapping[str, int]:
        """Drain pending events and return the frozen result map."""
        if self._thread is None:
            raise RuntimeError('aggregator was never started')
        if not self._closed:
            self._closed = True
            self._events.put(_CLOSE)
            self._thread.join()
        return MappingProxyType(dict(self._results))

    def __enter__(self) -> 'ResultAggregator':
        return self.start()

    def __exit__(self, *exc_info: object) -> None:
        if self._thread is not None:
            self.close()
