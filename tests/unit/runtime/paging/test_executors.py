"""Unit tests for the parallel and sequential aggregators."""

from __future__ import annotations

import json

import pytest

from wedata.fetch.core import FetchMode
from wedata.fetch.runtime.paging import FetchConfig, ParallelAggregator, SequentialAggregator
from wedata.fetch.sinks import FileSink, InMemorySink


class TestParallelAggregator:
    """Test ParallelAggregator functionality."""

    @pytest.mark.asyncio
    async def test_concrete_scenario(self, stub_query):
        """Test page_size=2, total=5 yields ids 0..4 in order."""
        query = stub_query(5)
        aggregator = ParallelAggregator(FetchConfig(page_size=2))

        result = await aggregator.execute(query)

        assert result.documents == [{"id": i} for i in range(5)]
        assert result.count == 5
        assert result.total == 5
        assert result.pages_used == 3
        assert sorted(query.offsets) == [0, 2, 4]

    @pytest.mark.asyncio
    async def test_first_page_requested_before_others(self, stub_query):
        """Test the first query is at offset 0 with the page size as limit."""
        query = stub_query(25)

        await ParallelAggregator(FetchConfig(page_size=10)).execute(query)

        assert query.calls[0] == (10, 0)

    @pytest.mark.asyncio
    async def test_empty_collection_single_query(self, stub_query):
        """Test total == 0 returns nothing after one query."""
        query = stub_query(0)

        result = await ParallelAggregator(FetchConfig(page_size=10)).execute(query)

        assert result.documents == []
        assert result.count == 0
        assert query.calls == [(10, 0)]

    @pytest.mark.asyncio
    async def test_single_page_collection_single_query(self, stub_query):
        """Test no second query when the first page holds every record."""
        query = stub_query(10)

        result = await ParallelAggregator(FetchConfig(page_size=10)).execute(query)

        assert result.count == 10
        assert query.calls == [(10, 0)]

    @pytest.mark.asyncio
    async def test_order_restored_when_later_pages_finish_first(self, stub_query):
        """Test results follow offset order, not completion order."""
        delays = {10: 0.05, 20: 0.03, 30: 0.01, 40: 0.0}
        query = stub_query(45, delays=delays)

        result = await ParallelAggregator(FetchConfig(page_size=10)).execute(query)

        assert result.documents == [{"id": i} for i in range(45)]

    @pytest.mark.asyncio
    async def test_unbounded_fan_out(self, stub_query):
        """Test every remaining page is in flight at once without a limit."""
        query = stub_query(100)

        await ParallelAggregator(FetchConfig(page_size=10)).execute(query)

        assert query.max_in_flight == 9

    @pytest.mark.asyncio
    async def test_bounded_concurrency(self, stub_query):
        """Test the worker pool caps pages in flight."""
        query = stub_query(100, delays={offset: 0.001 for offset in range(10, 100, 10)})

        result = await ParallelAggregator(FetchConfig(page_size=10, concurrency=3)).execute(query)

        assert query.max_in_flight == 3
        assert result.documents == [{"id": i} for i in range(100)]
        assert sorted(query.offsets) == list(range(0, 100, 10))

    @pytest.mark.asyncio
    async def test_failure_propagates_first_error(self, stub_query):
        """Test a failing page fails the whole aggregation."""
        error = ConnectionError("boom")
        query = stub_query(50, fail_offsets={30}, error=error)

        with pytest.raises(ConnectionError, match="boom") as exc_info:
            await ParallelAggregator(FetchConfig(page_size=10)).execute(query)

        assert exc_info.value is error

    @pytest.mark.asyncio
    async def test_failure_cancels_pages_in_flight(self, stub_query):
        """Test pages still in flight are cancelled after a failure."""
        delays = {20: 5.0, 30: 5.0}
        query = stub_query(40, delays=delays, fail_offsets={10})

        with pytest.raises(RuntimeError):
            await ParallelAggregator(FetchConfig(page_size=10)).execute(query)

        assert query.cancelled == 2
        assert query.in_flight == 0

    @pytest.mark.asyncio
    async def test_failure_writes_nothing_to_sink(self, stub_query):
        """Test the sink is untouched when a page fails."""
        sink = InMemorySink()
        query = stub_query(30, fail_offsets={20})

        with pytest.raises(RuntimeError):
            await ParallelAggregator(FetchConfig(page_size=10)).execute(query, sink=sink)

        assert sink.pages_written == 0
        assert not sink.finished

    @pytest.mark.asyncio
    async def test_sink_receives_collection_once(self, stub_query):
        """Test the sink gets the whole collection in one write."""
        sink = InMemorySink()

        await ParallelAggregator(FetchConfig(page_size=10)).execute(stub_query(35), sink=sink)

        assert sink.pages_written == 1
        assert sink.finished
        assert sink.documents == [{"id": i} for i in range(35)]

    @pytest.mark.asyncio
    async def test_accepts_mapping_pages(self):
        """Test queries may return decoded response bodies."""

        async def query(limit: int, offset: int) -> dict:
            docs = [{"n": n} for n in range(offset, min(offset + limit, 3))]
            return {"documents": docs, "total": 3}

        result = await ParallelAggregator(FetchConfig(page_size=2)).execute(query)

        assert result.documents == [{"n": 0}, {"n": 1}, {"n": 2}]

    def test_mode(self):
        """Test aggregator reports its mode."""
        assert ParallelAggregator.mode is FetchMode.PARALLEL


class TestSequentialAggregator:
    """Test SequentialAggregator functionality."""

    @pytest.mark.asyncio
    async def test_concrete_scenario(self, stub_query, tmp_path):
        """Test page_size=2, total=5 streams ids 0..4 to a file."""
        path = tmp_path / "out.json"
        query = stub_query(5)

        result = await SequentialAggregator(FetchConfig(page_size=2)).execute(
            query, FileSink(path)
        )

        assert result.count == 5
        assert result.documents is None
        assert result.pages_used == 3
        assert path.read_text(encoding="utf-8") == (
            '[{"id":0},{"id":1},{"id":2},{"id":3},{"id":4}]'
        )

    @pytest.mark.asyncio
    async def test_pages_requested_in_order_one_at_a_time(self, stub_query):
        """Test only one page is in flight and offsets ascend."""
        query = stub_query(47)

        await SequentialAggregator(FetchConfig(page_size=10)).execute(query, InMemorySink())

        assert query.offsets == [0, 10, 20, 30, 40]
        assert query.max_in_flight == 1

    @pytest.mark.asyncio
    async def test_streams_page_by_page(self, stub_query):
        """Test every page is a separate write on the sink."""
        sink = InMemorySink()

        await SequentialAggregator(FetchConfig(page_size=10)).execute(stub_query(47), sink)

        assert sink.pages_written == 5
        assert sink.finished
        assert sink.documents == [{"id": i} for i in range(47)]

    @pytest.mark.asyncio
    async def test_single_page_written_as_complete_array(self, stub_query, tmp_path):
        """Test a single-page collection is written in one operation."""
        path = tmp_path / "out.json"
        query = stub_query(3)

        result = await SequentialAggregator(FetchConfig(page_size=10)).execute(
            query, FileSink(path)
        )

        assert result.count == 3
        assert query.calls == [(10, 0)]
        assert json.loads(path.read_text(encoding="utf-8")) == [{"id": 0}, {"id": 1}, {"id": 2}]

    @pytest.mark.asyncio
    async def test_empty_collection(self, stub_query, tmp_path):
        """Test total == 0 writes an empty array after one query."""
        path = tmp_path / "out.json"
        query = stub_query(0)

        result = await SequentialAggregator(FetchConfig(page_size=10)).execute(
            query, FileSink(path)
        )

        assert result.count == 0
        assert query.calls == [(10, 0)]
        assert path.read_text(encoding="utf-8") == "[]"

    @pytest.mark.asyncio
    async def test_failure_leaves_truncated_file(self, stub_query, tmp_path):
        """Test a failing page aborts and leaves unparseable output."""
        path = tmp_path / "out.json"
        query = stub_query(50, fail_offsets={30})

        with pytest.raises(RuntimeError):
            await SequentialAggregator(FetchConfig(page_size=10)).execute(query, FileSink(path))

        content = path.read_text(encoding="utf-8")
        assert content.startswith("[")
        assert not content.endswith("]")
        with pytest.raises(json.JSONDecodeError):
            json.loads(content)
        assert json.loads(content + "]") == [{"id": i} for i in range(30)]
        assert query.offsets == [0, 10, 20, 30]

    @pytest.mark.asyncio
    async def test_failure_aborts_sink(self, stub_query):
        """Test the sink is aborted rather than finished on failure."""
        sink = InMemorySink()

        with pytest.raises(RuntimeError):
            await SequentialAggregator(FetchConfig(page_size=10)).execute(
                stub_query(30, fail_offsets={20}), sink
            )

        assert sink.aborted
        assert not sink.finished
        assert sink.count == 20

    @pytest.mark.asyncio
    async def test_failure_with_atomic_sink_keeps_target_absent(self, stub_query, tmp_path):
        """Test an atomic file sink leaves no target and no temporary file."""
        path = tmp_path / "out.json"

        with pytest.raises(RuntimeError):
            await SequentialAggregator(FetchConfig(page_size=10)).execute(
                stub_query(30, fail_offsets={20}), FileSink(path, atomic=True)
            )

        assert not path.exists()
        assert list(tmp_path.iterdir()) == []

    def test_mode(self):
        """Test aggregator reports its mode."""
        assert SequentialAggregator.mode is FetchMode.SEQUENTIAL
