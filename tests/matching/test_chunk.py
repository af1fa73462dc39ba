"""Tests for the chunk matcher."""

import random

import pytest

from substring_counter.matching.chunk import count_in_chunk


def naive_count(data: bytes, pattern: bytes) -> int:
    count = 0
    i = 0
    while i < len(data):
        if data[i:i + len(pattern)] == pattern:
            count += 1
            i += len(pattern)
        else:
            i += 1
    return count


class TestCountInChunk:
    """Test cases for count_in_chunk."""

    @pytest.mark.parametrize(
        "chunk, pattern, expected",
        [
            (b"ababababab", b"ab", (5, 8)),
            (b"ababababab", b"aba", (2, 4)),
        ],
    )
    def test_known_cases(self, chunk, pattern, expected) -> None:
        assert count_in_chunk(chunk, pattern) == expected

    def test_no_match_reports_zero_position(self) -> None:
        assert count_in_chunk(b"xxxxxxxx", b"ab") == (0, 0)

    def test_empty_chunk(self) -> None:
        assert count_in_chunk(b"", b"a") == (0, 0)

    def test_matches_are_non_overlapping(self) -> None:
        """After a match the scan resumes past its end."""
        assert count_in_chunk(b"aaaaa", b"aa") == (2, 2)

    def test_match_at_very_end(self) -> None:
        assert count_in_chunk(b"xxxab", b"ab") == (1, 3)

    def test_pattern_longer_than_chunk(self) -> None:
        assert count_in_chunk(b"ab", b"abc") == (0, 0)

    def test_accepts_bytearray(self) -> None:
        assert count_in_chunk(bytearray(b"abcabc"), b"bc") == (2, 4)

    def test_empty_pattern_rejected(self) -> None:
        with pytest.raises(ValueError):
            count_in_chunk(b"abc", b"")

    def test_agrees_with_naive_scan(self) -> None:
        """Random inputs over a tiny alphabet produce plenty of near misses."""
        rng = random.Random(1234)
        for _ in range(300):
            data = bytes(rng.choice(b"ab") for _ in range(rng.randint(0, 64)))
            pattern = bytes(rng.choice(b"ab") for _ in range(rng.randint(1, 4)))
            count, _ = count_in_chunk(data, pattern)
            assert count == naive_count(data, pattern), (data, pattern)
