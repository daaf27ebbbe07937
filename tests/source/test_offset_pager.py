"""Tests for OffsetPager: offset/limit pages as list source hooks."""

from __future__ import annotations

import asyncio

import pytest

from listsource.errors import SettingsValidationError
from listsource.source.paginated import PaginatedListSource
from listsource.source.paging import OffsetPager


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_backend(total: int):
    """Return a fetch_page coroutine over *total* rows plus its call log."""
    rows = [f"row-{i}" for i in range(total)]
    calls = []

    async def fetch_page(sort_descriptor, offset, limit):
        calls.append((sort_descriptor, offset, limit))
        ordered = list(reversed(rows)) if sort_descriptor == "desc" else rows
        return ordered[offset : offset + limit]

    return fetch_page, calls, rows


# ---------------------------------------------------------------------------
# OffsetPager
# ---------------------------------------------------------------------------


class TestOffsetPager:
    def test_initial_state(self):
        fetch_page, _, _ = _make_backend(0)
        pager = OffsetPager(fetch_page, page_size=10)
        assert pager.offset == 0
        assert pager.page_size == 10
        assert pager.has_more is True
        assert pager.sort_descriptor is None

    def test_invalid_page_size(self):
        fetch_page, _, _ = _make_backend(0)
        with pytest.raises(ValueError):
            OffsetPager(fetch_page, page_size=0)

    def test_pages_advance_offset(self):
        fetch_page, calls, rows = _make_backend(12)
        pager = OffsetPager(fetch_page, page_size=5)

        async def scenario():
            first = await pager.fetch_initial("asc")
            second = await pager.fetch_more()
            third = await pager.fetch_more()
            return first, second, third

        first, second, third = asyncio.run(scenario())

        assert first == rows[0:5]
        assert second == rows[5:10]
        assert third == rows[10:12]
        assert calls == [("asc", 0, 5), ("asc", 5, 5), ("asc", 10, 5)]
        assert pager.offset == 12
        assert pager.has_more is False

    def test_exhausted_pager_skips_backend(self):
        fetch_page, calls, _ = _make_backend(3)
        pager = OffsetPager(fetch_page, page_size=5)

        async def scenario():
            await pager.fetch_initial()
            return await pager.fetch_more()

        assert asyncio.run(scenario()) == []
        assert len(calls) == 1

    def test_fetch_initial_restarts(self):
        fetch_page, calls, rows = _make_backend(4)
        pager = OffsetPager(fetch_page, page_size=2)

        async def scenario():
            await pager.fetch_initial()
            await pager.fetch_more()
            return await pager.fetch_initial("desc")

        assert asyncio.run(scenario()) == ["row-3", "row-2"]
        assert calls[-1] == ("desc", 0, 2)
        assert pager.offset == 2
        assert pager.sort_descriptor == "desc"

    def test_stale_page_does_not_move_cursor(self):
        gates = []

        async def fetch_page(sort_descriptor, offset, limit):
            gate = asyncio.get_running_loop().create_future()
            gates.append(gate)
            return await gate

        pager = OffsetPager(fetch_page, page_size=2)

        async def scenario():
            old = asyncio.create_task(pager.fetch_initial("old"))
            await asyncio.sleep(0)
            new = asyncio.create_task(pager.fetch_initial("new"))
            await asyncio.sleep(0)
            gates[1].set_result(["n1"])
            await new
            gates[0].set_result(["o1", "o2"])
            await old

        asyncio.run(scenario())
        assert pager.offset == 1
        assert pager.has_more is False
        assert pager.sort_descriptor == "new"

    def test_from_options(self):
        fetch_page, _, _ = _make_backend(0)
        pager = OffsetPager.from_options(fetch_page, {"page_size": 25})
        assert pager.page_size == 25

    def test_from_options_rejects_oversized_page(self):
        fetch_page, _, _ = _make_backend(0)
        with pytest.raises(SettingsValidationError):
            OffsetPager.from_options(fetch_page, {"page_size": 10_000_000})


# ---------------------------------------------------------------------------
# OffsetPager behind a PaginatedListSource
# ---------------------------------------------------------------------------


class TestPagerWithSource:
    def test_infinite_scroll_until_end(self):
        fetch_page, _, rows = _make_backend(7)
        source = PaginatedListSource(OffsetPager(fetch_page, page_size=3))

        async def scenario():
            await source.perform_load()
            results = []
            while await source.perform_load_more():
                results.append(len(source.sections[0]))
            return results

        assert asyncio.run(scenario()) == [6, 7]
        assert source.sections == (tuple(rows),)

    def test_sort_restarts_paging(self):
        fetch_page, _, rows = _make_backend(4)
        source = PaginatedListSource(OffsetPager(fetch_page, page_size=2))

        async def scenario():
            await source.perform_load()
            await source.perform_load_more()
            await source.perform_sort("desc")

        asyncio.run(scenario())
        assert source.sections == (("row-3", "row-2"),)
