"""Catalogue query — one filtering pass over the full catalogue."""

from __future__ import annotations

from typing import Iterable

from gameshelf.backend.facets import DEFAULT_FACETS, FacetFilterSet, FacetState
from gameshelf.backend.search import NormalizedSearchKey
from gameshelf.models.game_entry import GameEntry


def filter_catalog(
    catalog: Iterable[GameEntry],
    key: NormalizedSearchKey,
    facets: FacetState,
    facet_set: FacetFilterSet = DEFAULT_FACETS,
) -> list[GameEntry]:
    """Return the entries matching *facets* and *key*, in catalogue order.

    Always pass the full catalogue, never a previously filtered result:
    switching a facet off cannot be undone against a narrowed list.
    Facets are checked before the search names since they usually reject
    more entries.
    """
    return [
        entry
        for entry in catalog
        if facet_set.matches(entry, facets) and key.matches(entry.search_names)
    ]
