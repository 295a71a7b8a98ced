"""Facet filters — independent, toggleable predicates over a game.

A :class:`FacetState` records which facets the user switched on; a
:class:`FacetFilterSet` knows how to evaluate each named facet.  Active
facets are AND-ed together and inactive ones impose no constraint, so the
order in which facets were switched on never changes the result.

Predicate shapes are kept deliberately separate:

- :func:`boolean_facet` reads a plain ``bool`` field as-is.
- :func:`multiplayer_facet` treats both supported multiplayer variants as
  truthy, whatever the player cap (0 included).
- :func:`store_facet` checks for a non-empty storefront link.
- :func:`graphics_facet` compares the graphics style.

Genre and theme membership are not named facets: they are sets of
required ids on the state and must all be present on the entry.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Iterator

from gameshelf.models.game_entry import STORE_LABELS, STORES, GameEntry

Predicate = Callable[[GameEntry], bool]


# ---------------------------------------------------------------------------
# FacetState
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class FacetState:
    """Which facets must hold.  Replace, never edit.

    ``flags`` holds the names whose must-have flag is on; a name that is
    absent is off.
    """

    flags: frozenset[str] = frozenset()
    genres: frozenset[int] = frozenset()
    themes: frozenset[int] = frozenset()

    @property
    def is_empty(self) -> bool:
        return not (self.flags or self.genres or self.themes)

    def is_active(self, name: str) -> bool:
        return name in self.flags

    def with_flag(self, name: str, active: bool) -> "FacetState":
        return FacetState(_toggled(self.flags, name, active), self.genres, self.themes)

    def with_genre(self, genre_id: int, active: bool) -> "FacetState":
        return FacetState(self.flags, _toggled(self.genres, genre_id, active), self.themes)

    def with_theme(self, theme_id: int, active: bool) -> "FacetState":
        return FacetState(self.flags, self.genres, _toggled(self.themes, theme_id, active))

    def cleared(self) -> "FacetState":
        return EMPTY_STATE


EMPTY_STATE = FacetState()


def _toggled(values: frozenset, value, active: bool) -> frozenset:
    return values | {value} if active else values - {value}


# ---------------------------------------------------------------------------
# Predicate constructors
# ---------------------------------------------------------------------------

def boolean_facet(attr: str) -> Predicate:
    """Predicate on a plain boolean field of the entry."""
    def predicate(entry: GameEntry) -> bool:
        return getattr(entry, attr) is True
    return predicate


def multiplayer_facet(attr: str) -> Predicate:
    """Predicate on a tri-state multiplayer field: any supported variant passes."""
    def predicate(entry: GameEntry) -> bool:
        return getattr(entry, attr).supported
    return predicate


def store_facet(store: str) -> Predicate:
    """Predicate: the entry links to *store*."""
    def predicate(entry: GameEntry) -> bool:
        return bool(entry.store_links.get(store))
    return predicate


def graphics_facet(style: str) -> Predicate:
    def predicate(entry: GameEntry) -> bool:
        return entry.graphics == style
    return predicate


def has_all(required: frozenset[int], ids: frozenset[int]) -> bool:
    """True if every id in *required* is in *ids* (empty requirement passes)."""
    return len(required & ids) == len(required)


# ---------------------------------------------------------------------------
# FacetFilterSet
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Facet:
    """A named, labelled predicate the user can switch on."""

    name: str
    label: str
    predicate: Predicate = field(compare=False)


class FacetFilterSet:
    """Registry of named facets, evaluated against a :class:`FacetState`."""

    def __init__(self, facets: Iterable[Facet] = ()) -> None:
        self._facets: dict[str, Facet] = {}
        for facet in facets:
            if facet.name in self._facets:
                raise ValueError(f"Duplicate facet name: {facet.name!r}")
            self._facets[facet.name] = facet

    def __contains__(self, name: str) -> bool:
        return name in self._facets

    def __iter__(self) -> Iterator[Facet]:
        return iter(self._facets.values())

    def matches(self, entry: GameEntry, state: FacetState) -> bool:
        """Return True if *entry* satisfies every active facet in *state*."""
        if not has_all(state.genres, entry.genres):
            return False
        if not has_all(state.themes, entry.themes):
            return False
        for name in state.flags:
            facet = self._facets.get(name)
            if facet is not None and not facet.predicate(entry):
                return False
        return True

    def predicate(self, state: FacetState) -> Predicate:
        """Compose the active facets of *state* into a single predicate."""
        return lambda entry: self.matches(entry, state)


def _default_facets() -> list[Facet]:
    facets = [
        Facet("single_player", "Single Player", boolean_facet("has_single_player")),
        Facet("coop_campaign", "Co-op Campaign", boolean_facet("has_coop_campaign")),
        Facet("offline_coop", "Local Co-op", multiplayer_facet("offline_coop")),
        Facet("offline_pvp", "Local PvP", multiplayer_facet("offline_pvp")),
        Facet("online_coop", "Online Co-op", multiplayer_facet("online_coop")),
        Facet("online_pvp", "Online PvP", multiplayer_facet("online_pvp")),
        Facet("pixelated", "Pixel Art", graphics_facet("pixelated")),
    ]
    facets.extend(Facet(store, STORE_LABELS[store], store_facet(store)) for store in STORES)
    return facets


DEFAULT_FACETS = FacetFilterSet(_default_facets())
