"""Substring matching within a single in-memory chunk."""

from __future__ import annotations

from typing import Tuple, Union

BytesLike = Union[bytes, bytearray]


def count_in_chunk(chunk: BytesLike, pattern: bytes) -> Tuple[int, int]:
    """Count non-overlapping occurrences of ``pattern`` in ``chunk``.

    The scan runs left to right; after a match at offset ``p`` it resumes at
    ``p + len(pattern)``.

    Returns:
        ``(count, last_match_start)``.  When ``count`` is zero the second
        value is ``0`` and does not denote a match.
    """
    if not pattern:
        raise ValueError('pattern must not be empty')
    count = 0
    last_match_start = 0
    step = len(pattern)
    offset = chunk.find(pattern)
    while offset != -1:
        count += 1
        last_match_start = offset
        offset = chunk.find(pattern, offset + step)
    return count, last_match_start
