"""Tests for gameshelf/backend/query.py."""

from __future__ import annotations

from gameshelf.backend.facets import EMPTY_STATE
from gameshelf.backend.query import filter_catalog
from gameshelf.backend.search import EMPTY_KEY, normalize_search, search_names_for
from gameshelf.models.game_entry import GameEntry, LimitedMultiplayer


def _game(name: str, *alternatives: str, **kwargs) -> GameEntry:
    return GameEntry(
        name=name,
        slug=name.lower().replace(" ", "-"),
        search_names=search_names_for(name, *alternatives),
        **kwargs,
    )


A = _game("Alpha", genres=frozenset({1, 2}))
B = _game("Beta", genres=frozenset({1}))
C = _game("Gamma", genres=frozenset({2}))


def test_no_filters_returns_everything_in_order():
    assert filter_catalog([A, B, C], EMPTY_KEY, EMPTY_STATE) == [A, B, C]


def test_genre_facet_preserves_original_order():
    state = EMPTY_STATE.with_genre(1, True)
    assert filter_catalog([A, B, C], EMPTY_KEY, state) == [A, B]


def test_capped_offline_coop_counts_as_supported():
    coop = _game("Couch Party", offline_coop=LimitedMultiplayer(4))
    state = EMPTY_STATE.with_flag("offline_coop", True)
    assert filter_catalog([A, coop], EMPTY_KEY, state) == [coop]


def test_search_matches_alternative_names():
    witcher = _game("The Witcher 3: Wild Hunt", "Wiedźmin 3: Dziki Gon")
    catalog = [A, witcher, B]
    assert filter_catalog(catalog, normalize_search("dziki"), EMPTY_STATE) == [witcher]
    assert filter_catalog(catalog, normalize_search("WILD hunt"), EMPTY_STATE) == [witcher]


def test_search_and_facets_combine():
    catalog = [A, B, C]
    state = EMPTY_STATE.with_genre(2, True)
    assert filter_catalog(catalog, normalize_search("a"), state) == [A, C]
    assert filter_catalog(catalog, normalize_search("gam"), state) == [C]


def test_no_match_returns_empty_list():
    assert filter_catalog([A, B, C], normalize_search("zelda"), EMPTY_STATE) == []


def test_input_catalog_not_mutated():
    catalog = [A, B, C]
    result = filter_catalog(catalog, EMPTY_KEY, EMPTY_STATE)
    result.clear()
    assert catalog == [A, B, C]


def test_entries_without_search_names_only_match_empty_key():
    nameless = GameEntry(name="???", slug="unknown")
    assert filter_catalog([nameless], EMPTY_KEY, EMPTY_STATE) == [nameless]
    assert filter_catalog([nameless], normalize_search("x"), EMPTY_STATE) == []
