"""Tests for gameshelf/backend/session.py."""

from __future__ import annotations

import logging

from gameshelf.backend.facets import EMPTY_STATE
from gameshelf.backend.search import search_names_for
from gameshelf.backend.session import BrowseSession
from gameshelf.models.game_entry import NO_MULTIPLAYER, GameEntry, LimitedMultiplayer


def _catalog(count: int) -> list[GameEntry]:
    games = []
    for i in range(count):
        name = f"Game {i:02d}"
        games.append(GameEntry(
            name=name,
            slug=f"game-{i:02d}",
            search_names=search_names_for(name),
            genres=frozenset({1} if i % 2 == 0 else {2}),
            offline_coop=LimitedMultiplayer(4) if i % 5 == 0 else NO_MULTIPLAYER,
            has_single_player=i < 3,
        ))
    return games


# ---------------------------------------------------------------------------
# Initial state and paging
# ---------------------------------------------------------------------------

def test_initial_state_shows_first_page():
    session = BrowseSession(_catalog(25), 10)
    assert session.facets == EMPTY_STATE
    assert session.page_count == 3
    assert session.page_index == 0
    assert len(session.page_entries) == 10
    assert not session.has_previous
    assert session.has_next


def test_next_and_previous_page():
    session = BrowseSession(_catalog(25), 10)
    assert session.next_page()
    assert session.next_page()
    assert session.page_index == 2
    assert len(session.page_entries) == 5
    assert not session.next_page()
    assert session.page_index == 2
    assert session.previous_page()
    assert session.previous_page()
    assert not session.previous_page()
    assert session.page_index == 0


def test_empty_catalog_has_no_cursor():
    session = BrowseSession([], 10)
    assert session.cursor is None
    assert session.page_count == 0
    assert session.page_entries == ()
    assert not session.next_page()
    assert not session.previous_page()


def test_non_positive_page_size_is_empty_state():
    session = BrowseSession(_catalog(5), 0)
    assert session.cursor is None
    assert len(session.results) == 5


# ---------------------------------------------------------------------------
# Recompute from the full catalogue
# ---------------------------------------------------------------------------

def test_filter_change_resets_to_first_page():
    session = BrowseSession(_catalog(25), 5)
    session.next_page()
    session.set_genre(1, True)
    assert session.page_index == 0
    assert len(session.results) == 13


def test_toggling_facet_off_restores_everything():
    catalog = _catalog(25)
    session = BrowseSession(catalog, 10)
    session.set_facet("single_player", True)
    session.set_facet("offline_coop", True)
    assert [e.slug for e in session.results] == ["game-00"]
    session.set_facet("single_player", False)
    assert [e.slug for e in session.results] == ["game-00", "game-05", "game-10", "game-15", "game-20"]
    session.set_facet("offline_coop", False)
    assert session.results == catalog


def test_search_text_narrows_and_widens():
    session = BrowseSession(_catalog(25), 10)
    session.set_search_text("game 1")
    assert len(session.results) == 10
    session.set_search_text("  GAME   12!! ")
    assert [e.slug for e in session.results] == ["game-12"]
    assert session.search_key.text == "game 12"
    session.set_search_text("")
    assert len(session.results) == 25


def test_clear_facets():
    session = BrowseSession(_catalog(10), 10)
    session.set_genre(2, True)
    session.set_theme(99, True)
    assert session.cursor is None
    session.clear_facets()
    assert session.facets == EMPTY_STATE
    assert len(session.results) == 10


def test_unknown_facet_ignored(caplog):
    session = BrowseSession(_catalog(3), 10)
    with caplog.at_level(logging.WARNING):
        session.set_facet("no-such-facet", True)
    assert "no-such-facet" in caplog.text
    assert session.facets == EMPTY_STATE


def test_set_page_size_repaginates():
    session = BrowseSession(_catalog(25), 10)
    session.next_page()
    session.set_page_size(30)
    assert session.page_count == 1
    assert session.page_index == 0
    assert len(session.page_entries) == 25


def test_catalog_is_copied():
    catalog = _catalog(3)
    session = BrowseSession(catalog, 10)
    catalog.clear()
    assert len(session.catalog) == 3
    assert len(session.results) == 3
