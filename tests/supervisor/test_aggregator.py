"""Tests for the result aggregator."""

import threading

import pytest

from substring_counter.supervisor.aggregator import ResultAggregator


class TestResultAggregator:
    """Test cases for ResultAggregator."""

    def test_collects_events(self) -> None:
        with ResultAggregator() as aggregator:
            aggregator.submit("a", 1)
            aggregator.submit("b", 2)
            results = aggregator.close()
        assert dict(results) == {"a": 1, "b": 2}

    def test_later_value_replaces_earlier(self) -> None:
        with ResultAggregator() as aggregator:
            aggregator.submit("a", 1)
            aggregator.submit("a", 5)
            results = aggregator.close()
        assert dict(results) == {"a": 5}

    def test_result_is_read_only(self) -> None:
        with ResultAggregator() as aggregator:
            aggregator.submit("a", 1)
            results = aggregator.close()
        with pytest.raises(TypeError):
            results["b"] = 2  # type: ignore[index]

    def test_no_lost_updates_under_concurrency(self) -> None:
        aggregator = ResultAggregator().start()

        def producer(worker: int) -> None:
            for i in range(500):
                aggregator.submit(f"{worker}/{i}", i)

        threads = [threading.Thread(target=producer, args=(w,)) for w in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        results = aggregator.close()
        assert len(results) == 8 * 500
        assert results["7/499"] == 499

    def test_submit_after_close_rejected(self) -> None:
        aggregator = ResultAggregator().start()
        aggregator.close()
        with pytest.raises(RuntimeError):
            aggregator.submit("a", 1)

    def test_close_is_idempotent(self) -> None:
        aggregator = ResultAggregator().start()
        aggregator.submit("a", 1)
        assert dict(aggregator.close()) == dict(aggregator.close()) == {"a": 1}

    def test_close_before_start_rejected(self) -> None:
        with pytest.raises(RuntimeError):
            ResultAggregator().close()
