"""
Tests for the shared pagination flow.
"""
import pytest
from unittest.mock import AsyncMock

from taskboard.modules.pagination import Page, PageRequest, coerce_positive_int, paginate


@pytest.mark.parametrize("raw, expected", [
    (None, 1),
    ("", 1),
    ("abc", 1),
    ("0", 1),
    ("-3", 1),
    ("2.5", 1),
    ("4", 4),
    (7, 7),
    (True, 1),
])
def test_coerce_positive_int(raw, expected):
    assert coerce_positive_int(raw, 1) == expected


def test_page_request_defaults():
    page = PageRequest.coerce(None, "nope")
    assert page.page_number == 1
    assert page.page_size == 5


def test_page_request_offset_is_zero_based():
    assert PageRequest.coerce(1, 5).offset == 0
    assert PageRequest.coerce(3, 5).offset == 10
    assert PageRequest.coerce(2, 4).limit == 4


@pytest.mark.asyncio
async def test_page_larger_than_count_returns_empty_without_fetch():
    count = AsyncMock(return_value=2)
    fetch = AsyncMock(return_value=["a", "b"])

    page = await paginate(PageRequest.coerce(1, 5), count, fetch)

    assert page.items == []
    assert page.metadata == {"count": 2, "noOfPages": 1, "currentPage": 1}
    fetch.assert_not_awaited()


@pytest.mark.asyncio
async def test_page_number_past_last_page_returns_empty():
    count = AsyncMock(return_value=10)
    fetch = AsyncMock()

    page = await paginate(PageRequest.coerce(3, 5), count, fetch)

    assert page.items == []
    assert page.metadata == {"count": 10, "noOfPages": 2, "currentPage": 3}
    fetch.assert_not_awaited()


@pytest.mark.asyncio
async def test_empty_table():
    page = await paginate(PageRequest.coerce(), AsyncMock(return_value=0), AsyncMock())
    assert page.items == []
    assert page.metadata == {"count": 0, "noOfPages": 0, "currentPage": 1}


@pytest.mark.asyncio
async def test_fetches_requested_page_with_offset():
    count = AsyncMock(return_value=12)
    fetch = AsyncMock(return_value=["f", "g", "h", "i", "j"])

    page = await paginate(PageRequest.coerce("2", "5"), count, fetch)

    fetch.assert_awaited_once_with(5, 5)
    assert page.items == ["f", "g", "h", "i", "j"]
    assert page.metadata == {"count": 12, "noOfPages": 3, "currentPage": 2}


@pytest.mark.asyncio
async def test_last_partial_page():
    fetch = AsyncMock(return_value=["k", "l"])

    page = await paginate(PageRequest.coerce(3, 5), AsyncMock(return_value=12), fetch)

    fetch.assert_awaited_once_with(5, 10)
    assert len(page.items) == 2


def test_page_to_dict_serializes_items():
    page = Page(items=[1, 2], count=7, no_of_pages=2, current_page=1)
    assert page.to_dict(lambda n: {"n": n}) == {
        "items": [{"n": 1}, {"n": 2}],
        "metadata": {"count": 7, "noOfPages": 2, "currentPage": 1},
    }
