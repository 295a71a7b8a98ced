"""Page chunking and the pagination cursor.

:func:`chunk` splits a filtered result into fixed-size pages.
:class:`PaginationCursor` is an immutable list zipper over those pages::

    before (reversed)      current      after
    (p1) -> (p0) -> nil      p2         (p3) -> (p4) -> nil

``before`` and ``after`` are persistent singly-linked lists, so a step is
two cons operations and every cursor ever returned stays valid.  Reaching
either end is signalled by ``None``, never by an exception.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Iterator, Sequence, TypeVar

T = TypeVar("T")


def chunk(items: Sequence[T], page_size: int) -> tuple[tuple[T, ...], ...]:
    """Split *items* into consecutive pages of *page_size*.

    The last page holds the remainder.  Empty input or a non-positive
    page size gives no pages at all (not one empty page).
    """
    if page_size <= 0 or not items:
        return ()
    items = tuple(items)
    return tuple(
        items[start:start + page_size] for start in range(0, len(items), page_size)
    )


# ---------------------------------------------------------------------------
# Persistent stack
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False, repr=False)
class _Link(Generic[T]):
    head: T
    tail: "_Link[T] | None" = None


def _push(value: T, stack: _Link[T] | None) -> _Link[T]:
    return _Link(value, stack)


def _from_sequence(values: Sequence[T]) -> _Link[T] | None:
    stack = None
    for value in reversed(values):
        stack = _Link(value, stack)
    return stack


def _iterate(stack: _Link[T] | None) -> Iterator[T]:
    while stack is not None:
        yield stack.head
        stack = stack.tail


def _length(stack: _Link | None) -> int:
    return sum(1 for _ in _iterate(stack))


# ---------------------------------------------------------------------------
# PaginationCursor
# ---------------------------------------------------------------------------

@dataclass(frozen=True, eq=False, repr=False)
class PaginationCursor(Generic[T]):
    """Position within a page sequence.

    Build one with :meth:`from_pages` or :func:`paginate`; move with
    :meth:`next` / :meth:`previous`, which return a new cursor or ``None``
    at the boundary.
    """

    _before: _Link[T] | None
    _current: T
    _after: _Link[T] | None

    @classmethod
    def from_pages(cls, pages: Sequence[T]) -> "PaginationCursor[T] | None":
        """Return a cursor on the first of *pages*, or ``None`` if there are none."""
        if not pages:
            return None
        return cls(None, pages[0], _from_sequence(pages[1:]))

    def next(self) -> "PaginationCursor[T] | None":
        if self._after is None:
            return None
        return PaginationCursor(
            _push(self._current, self._before), self._after.head, self._after.tail
        )

    def previous(self) -> "PaginationCursor[T] | None":
        if self._before is None:
            return None
        return PaginationCursor(
            self._before.tail, self._before.head, _push(self._current, self._after)
        )

    @property
    def has_next(self) -> bool:
        return self._after is not None

    @property
    def has_previous(self) -> bool:
        return self._before is not None

    def current(self) -> tuple[int, T]:
        """Return ``(index, page)``; the index is 0-based."""
        return _length(self._before), self._current

    def count(self) -> int:
        """Total number of pages, counted afresh on every call."""
        return _length(self._before) + 1 + _length(self._after)

    def pages(self) -> tuple[T, ...]:
        """Rebuild the full page sequence the cursor was made from."""
        before = tuple(_iterate(self._before))
        return tuple(reversed(before)) + (self._current,) + tuple(_iterate(self._after))

    # Iterative: a link chain can run to thousands of pages.
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PaginationCursor):
            return NotImplemented
        return self.current()[0] == other.current()[0] and self.pages() == other.pages()

    def __hash__(self) -> int:
        return hash((self.current()[0], self.pages()))

    def __repr__(self) -> str:
        return f"PaginationCursor(index={self.current()[0]}, count={self.count()})"


# ---------------------------------------------------------------------------
# Module-level entry points
# ---------------------------------------------------------------------------

def paginate(entries: Sequence[T], page_size: int) -> PaginationCursor[tuple[T, ...]] | None:
    """Chunk *entries* and return a cursor on the first page, or ``None``."""
    return PaginationCursor.from_pages(chunk(entries, page_size))


def cursor_current(cursor: PaginationCursor[T]) -> tuple[int, T]:
    return cursor.current()


def cursor_next(cursor: PaginationCursor[T]) -> PaginationCursor[T] | None:
    return cursor.next()


def cursor_previous(cursor: PaginationCursor[T]) -> PaginationCursor[T] | None:
    return cursor.previous()


def cursor_page_count(cursor: PaginationCursor) -> int:
    return cursor.count()
