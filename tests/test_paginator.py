"""Tests for gameshelf/backend/paginator.py."""

from __future__ import annotations

import pytest

from gameshelf.backend.paginator import (
    PaginationCursor,
    chunk,
    cursor_current,
    cursor_next,
    cursor_page_count,
    cursor_previous,
    paginate,
)
from gameshelf.models.game_entry import GameEntry


# ---------------------------------------------------------------------------
# chunk
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("length, size", [(1, 1), (5, 2), (10, 10), (25, 10), (7, 30)])
def test_chunk_concatenates_back(length, size):
    items = list(range(length))
    pages = chunk(items, size)
    assert [x for page in pages for x in page] == items
    assert all(len(page) == size for page in pages[:-1])
    assert 1 <= len(pages[-1]) <= size


def test_chunk_sizes():
    assert [len(p) for p in chunk(range(25), 10)] == [10, 10, 5]


def test_chunk_empty_input():
    assert chunk([], 10) == ()
    assert chunk([], 0) == ()


@pytest.mark.parametrize("size", [0, -1, -10])
def test_chunk_non_positive_size(size):
    assert chunk([1, 2, 3], size) == ()


def test_chunk_returns_tuples():
    assert chunk(["a", "b", "c"], 2) == (("a", "b"), ("c",))


# ---------------------------------------------------------------------------
# PaginationCursor
# ---------------------------------------------------------------------------

def test_from_pages_empty_is_none():
    assert PaginationCursor.from_pages(()) is None
    assert paginate([], 10) is None
    assert paginate([1, 2], 0) is None


def test_from_pages_starts_at_first_page():
    cursor = PaginationCursor.from_pages(("p0", "p1", "p2"))
    assert cursor.current() == (0, "p0")
    assert cursor.previous() is None
    assert not cursor.has_previous
    assert cursor.has_next


def test_single_page_has_no_neighbours():
    cursor = PaginationCursor.from_pages(("only",))
    assert cursor.next() is None
    assert cursor.previous() is None
    assert cursor.count() == 1


def test_steps_do_not_change_the_original_cursor():
    first = PaginationCursor.from_pages(("p0", "p1"))
    second = first.next()
    assert first.current() == (0, "p0")
    assert second.current() == (1, "p1")


def test_traverse_to_end_and_back():
    pages = tuple(f"p{i}" for i in range(6))
    cursor = PaginationCursor.from_pages(pages)
    seen = [cursor.current()]
    while (moved := cursor.next()) is not None:
        cursor = moved
        seen.append(cursor.current())
    assert seen == list(enumerate(pages))

    while (moved := cursor.previous()) is not None:
        cursor = moved
    assert cursor.current() == (0, "p0")


def test_count_stable_at_every_position():
    pages = tuple(range(5))
    cursor = PaginationCursor.from_pages(pages)
    counts = []
    while cursor is not None:
        counts.append(cursor.count())
        assert cursor.pages() == pages
        cursor = cursor.next()
    assert counts == [5] * 5


def test_pages_rebuilt_after_back_and_forth():
    pages = ("a", "b", "c", "d")
    cursor = PaginationCursor.from_pages(pages).next().next().previous()
    assert cursor.current() == (1, "b")
    assert cursor.pages() == pages


# ---------------------------------------------------------------------------
# Module-level entry points
# ---------------------------------------------------------------------------

def test_paginate_twenty_five_entries_by_ten():
    cursor = paginate(list(range(25)), 10)
    assert cursor_page_count(cursor) == 3

    index, page = cursor_current(cursor)
    assert index == 0
    assert page == tuple(range(10))

    cursor = cursor_next(cursor)
    index, page = cursor_current(cursor)
    assert (index, len(page)) == (1, 10)

    cursor = cursor_next(cursor)
    index, page = cursor_current(cursor)
    assert (index, len(page)) == (2, 5)
    assert page == (20, 21, 22, 23, 24)

    assert cursor_next(cursor) is None
    assert cursor_current(cursor_previous(cursor))[0] == 1


# ---------------------------------------------------------------------------
# Value semantics
# ---------------------------------------------------------------------------

def test_cursor_equality_and_repr_on_long_chain():
    first = paginate(list(range(5000)), 1)
    second = paginate(list(range(5000)), 1)
    assert first == second
    assert hash(first) == hash(second)
    assert first != first.next()
    assert first.next().previous() == first
    assert repr(first.next()) == "PaginationCursor(index=1, count=5000)"


def test_cursor_over_entries_is_hashable():
    entries = [
        GameEntry(name=f"Game {i}", slug=f"game-{i}", store_links={"itch": "u"})
        for i in range(3)
    ]
    cursor = paginate(entries, 2)
    assert cursor in {paginate(entries, 2)}
