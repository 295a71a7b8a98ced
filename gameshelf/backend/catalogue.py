"""Catalogue snapshot loading.

games.json format
-----------------
The snapshot is the combined output of the server's ``/games``,
``/genres`` and ``/themes`` endpoints::

    {
      "games":  [ { ...GameEntry fields... }, ... ],
      "genres": [ {"id": 12, "name": "Role-playing (RPG)"}, ... ],
      "themes": [ {"id": 1, "name": "Action"}, ... ]
    }

A bare JSON array of games is also accepted.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from gameshelf.models.game_entry import GameEntry

log = logging.getLogger(__name__)


class CatalogueError(Exception):
    """Raised when the catalogue snapshot cannot be read."""


@dataclass(frozen=True, slots=True)
class Genre:
    id: int
    name: str

    @classmethod
    def from_dict(cls, data: dict) -> "Genre":
        return cls(id=int(data["id"]), name=data["name"])


@dataclass(frozen=True, slots=True)
class Theme:
    id: int
    name: str

    @classmethod
    def from_dict(cls, data: dict) -> "Theme":
        return cls(id=int(data["id"]), name=data["name"])


@dataclass(frozen=True, slots=True)
class Catalogue:
    """A decoded snapshot.  ``games`` is sorted by name."""

    games: tuple[GameEntry, ...] = ()
    genres: tuple[Genre, ...] = ()
    themes: tuple[Theme, ...] = ()

    def genre_name(self, genre_id: int) -> str:
        for genre in self.genres:
            if genre.id == genre_id:
                return genre.name
        return str(genre_id)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def load_catalogue(path: str | Path) -> Catalogue:
    """Read and decode the snapshot at *path*.

    Malformed game entries are skipped with a warning.  When two entries
    share a slug the first one is kept.
    """
    raw = _read_json(Path(path))

    if isinstance(raw, list):
        games_raw, genres_raw, themes_raw = raw, [], []
    elif isinstance(raw, dict):
        games_raw = raw.get("games", [])
        genres_raw = raw.get("genres", [])
        themes_raw = raw.get("themes", [])
    else:
        raise CatalogueError(f"{path} has an unexpected top-level type")

    catalogue = Catalogue(
        games=_decode_games(games_raw),
        genres=tuple(sorted(_decode_all(Genre, genres_raw, "genre"), key=lambda g: g.name)),
        themes=tuple(sorted(_decode_all(Theme, themes_raw, "theme"), key=lambda t: t.name)),
    )
    log.info(
        "Loaded %d games, %d genres, %d themes from %s",
        len(catalogue.games), len(catalogue.genres), len(catalogue.themes), path,
    )
    return catalogue


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _read_json(path: Path) -> dict | list:
    try:
        data = path.read_bytes()
    except FileNotFoundError as exc:
        raise CatalogueError(f"Catalogue not found: {path}") from exc
    except OSError as exc:
        raise CatalogueError(f"Could not read {path}: {exc}") from exc
    try:
        return json.loads(data)
    except json.JSONDecodeError as exc:
        raise CatalogueError(f"Invalid JSON at {path}: {exc}") from exc


def _decode_games(items: list) -> tuple[GameEntry, ...]:
    games: dict[str, GameEntry] = {}
    for item in items:
        try:
            entry = GameEntry.from_dict(item)
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            slug = item.get("slug") if isinstance(item, dict) else None
            log.warning("Skipping malformed catalogue entry %r: %s", slug, exc)
            continue
        if entry.slug in games:
            log.warning("Skipping duplicate catalogue entry %r", entry.slug)
            continue
        games[entry.slug] = entry
    return tuple(sorted(games.values(), key=lambda e: e.name))


def _decode_all(cls, items: list, kind: str) -> list:
    decoded = []
    for item in items:
        try:
            decoded.append(cls.from_dict(item))
        except (KeyError, TypeError, ValueError) as exc:
            log.warning("Skipping malformed %s %r: %s", kind, item, exc)
    return decoded
