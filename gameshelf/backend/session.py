"""Browse session — filter and page state for one browsing context.

The session keeps the full catalogue untouched and recomputes the
filtered result and its pages from it on every change (search keystroke,
facet toggle, page size).  A change always lands on the first page.
"""

from __future__ import annotations

import logging
from typing import Iterable

from gameshelf.backend.facets import DEFAULT_FACETS, EMPTY_STATE, FacetFilterSet, FacetState
from gameshelf.backend.paginator import PaginationCursor, paginate
from gameshelf.backend.query import filter_catalog
from gameshelf.backend.search import EMPTY_KEY, NormalizedSearchKey, normalize_search
from gameshelf.models.game_entry import GameEntry

log = logging.getLogger(__name__)


class BrowseSession:
    """Holds the catalogue, the filter state and the current page."""

    def __init__(
        self,
        catalog: Iterable[GameEntry],
        page_size: int,
        *,
        facet_set: FacetFilterSet = DEFAULT_FACETS,
    ) -> None:
        self._catalog: tuple[GameEntry, ...] = tuple(catalog)
        self._facet_set = facet_set
        self._page_size = page_size
        self._key: NormalizedSearchKey = EMPTY_KEY
        self._facets: FacetState = EMPTY_STATE
        self._results: list[GameEntry] = []
        self._cursor: PaginationCursor | None = None
        self._refresh()

    # ── State ─────────────────────────────────────────────────────────────

    @property
    def catalog(self) -> tuple[GameEntry, ...]:
        return self._catalog

    @property
    def facet_set(self) -> FacetFilterSet:
        return self._facet_set

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def search_key(self) -> NormalizedSearchKey:
        return self._key

    @property
    def facets(self) -> FacetState:
        return self._facets

    @property
    def results(self) -> list[GameEntry]:
        """The filtered entries across all pages (a copy)."""
        return list(self._results)

    @property
    def cursor(self) -> PaginationCursor | None:
        """Cursor on the current page, or ``None`` when nothing matches."""
        return self._cursor

    @property
    def page_index(self) -> int:
        return self._cursor.current()[0] if self._cursor else 0

    @property
    def page_entries(self) -> tuple[GameEntry, ...]:
        return self._cursor.current()[1] if self._cursor else ()

    @property
    def page_count(self) -> int:
        return self._cursor.count() if self._cursor else 0

    @property
    def has_next(self) -> bool:
        return self._cursor is not None and self._cursor.has_next

    @property
    def has_previous(self) -> bool:
        return self._cursor is not None and self._cursor.has_previous

    # ── Filter changes ────────────────────────────────────────────────────

    def set_search_text(self, text: str) -> None:
        key = normalize_search(text)
        if key == self._key:
            return
        self._key = key
        self._refresh()

    def set_facet(self, name: str, active: bool) -> None:
        if name not in self._facet_set:
            log.warning("Ignoring unknown facet %r", name)
            return
        self._replace_facets(self._facets.with_flag(name, active))

    def set_genre(self, genre_id: int, active: bool) -> None:
        self._replace_facets(self._facets.with_genre(genre_id, active))

    def set_theme(self, theme_id: int, active: bool) -> None:
        self._replace_facets(self._facets.with_theme(theme_id, active))

    def clear_facets(self) -> None:
        self._replace_facets(self._facets.cleared())

    def set_page_size(self, page_size: int) -> None:
        if page_size == self._page_size:
            return
        self._page_size = page_size
        self._repaginate()

    # ── Paging ────────────────────────────────────────────────────────────

    def next_page(self) -> bool:
        """Move to the next page; return False if already on the last one."""
        moved = self._cursor.next() if self._cursor else None
        if moved is None:
            return False
        self._cursor = moved
        return True

    def previous_page(self) -> bool:
        """Move to the previous page; return False if already on the first one."""
        moved = self._cursor.previous() if self._cursor else None
        if moved is None:
            return False
        self._cursor = moved
        return True

    # ── Internals ─────────────────────────────────────────────────────────

    def _replace_facets(self, facets: FacetState) -> None:
        if facets == self._facets:
            return
        self._facets = facets
        self._refresh()

    def _refresh(self) -> None:
        self._results = filter_catalog(self._catalog, self._key, self._facets, self._facet_set)
        log.debug(
            "Filter %r %r matched %d of %d entries",
            self._key.text, self._facets, len(self._results), len(self._catalog),
        )
        self._repaginate()

    def _repaginate(self) -> None:
        self._cursor = paginate(self._results, self._page_size)
