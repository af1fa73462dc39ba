"""Bounded file scanning for Substring Counter.

Reads a file through a fixed-size buffer and counts pattern occurrences
chunk by chunk.  After each chunk the read cursor is moved back so that a
match straddling two buffers is examined again in the next one, while
matches already counted are never revisited.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

from .chunk import count_in_chunk

BUFFER_SIZE = 8192


def next_offset(
    offset: int,
    bytes_read: int,
    count: int,
    last_match_start: int,
    pattern_length: int,
    strict_boundaries: bool = True,
) -> int:
    """Return the file offset of the next buffer fill.

    The cursor advances by ``bytes_read`` and is then rewound by at most
    ``pattern_length - 1`` bytes, never past the end of the last counted
    match.  With ``strict_boundaries`` disabled the rewind only happens
    after a chunk that contained a match.
    """
    matched_until = last_match_start + pattern_length if count else 0
    if count or strict_boundaries:
        rewind = min(pattern_length - 1, bytes_read - matched_until)
    else:
        rewind = 0
    # always move forward by at least one byte
    rewind = min(rewind, bytes_read - 1)
    return offset + bytes_read - rewind


def count_in_file(
    path: Union[str, Path],
    pattern: bytes,
    buffer_size: int = BUFFER_SIZE,
    strict_boundaries: bool = True,
) -> int:
    """Count non-overlapping occurrences of ``pattern`` in the file at ``path``.

    Args:
        path: File to scan.
        pattern: Non-empty byte string to look for.
        buffer_size: Size of the read buffer; must hold at least one pattern.
        strict_boundaries: Rewind after every chunk, including chunks without
            a match.  Disable to reproduce the legacy rewind rule, which can
            miss a match straddling the end of a chunk that had no match.

    Returns:
        Total number of matches in the file.

    Raises:
        OSError: The file cannot be opened, sought or read.
    """
    if not pattern:
        raise ValueError('pattern must not be empty')
    if buffer_size < len(pattern):
        raise ValueError(f'buffer_size {buffer_size} is smaller than the pattern ({len(pattern)} bytes)')

    buffer = bytearray(buffer_size)
    total = 0
    with open(path, 'rb') as f:
        filesize = os.fstat(f.fileno()).st_size
        offset = 0
        while True:
            f.seek(offset)
            bytes_read = f.readinto(buffer)
            if not bytes_read:
                break
            chunk = buffer if bytes_read == buffer_size else buffer[:bytes_read]
            count, last_match_start = count_in_chunk(chunk, pattern)
            total += count
            if offset + bytes_read >= filesize:
                break
            offset = next_offset(
                offset,
                bytes_read,
                count,
                last_match_start,
                len(pattern),
                strict_boundaries=strict_boundaries,
            )
            if offset > filesize:
                break
    return total
