"""Game catalogue entry.

A single ``GameEntry`` carries everything the browser needs: search
names for the free-text filter, facet fields (genres, themes, game modes,
storefront links, graphics style) and the display/distribution metadata
shown on a card.  Entries are immutable; the filter engine never edits
them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Literal, Mapping, Union

from gameshelf.backend.search import search_names_for

# Storefront ids accepted as flat keys in ``games.json``.
STORES: tuple[str, ...] = (
    "steam",
    "gog",
    "itch",
    "epic",
    "google_play",
    "apple_phone",
    "apple_pad",
)

STORE_LABELS: dict[str, str] = {
    "steam":       "Steam",
    "gog":         "GOG",
    "itch":        "itch.io",
    "epic":        "Epic Games",
    "google_play": "Google Play",
    "apple_phone": "iPhone",
    "apple_pad":   "iPad",
}


# ---------------------------------------------------------------------------
# Multiplayer — tri-state mode support
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class NoMultiplayer:
    """The mode is not supported."""

    @property
    def supported(self) -> bool:
        return False

    def to_json(self) -> str:
        return "None"


@dataclass(frozen=True, slots=True)
class UnlimitedMultiplayer:
    """The mode is supported and no player cap is known."""

    @property
    def supported(self) -> bool:
        return True

    def to_json(self) -> str:
        return "Some"


@dataclass(frozen=True, slots=True)
class LimitedMultiplayer:
    """The mode is supported up to *max_players*."""

    max_players: int

    @property
    def supported(self) -> bool:
        # Any cap counts, including 0.
        return True

    def to_json(self) -> dict:
        return {"Limited": self.max_players}


Multiplayer = Union[NoMultiplayer, UnlimitedMultiplayer, LimitedMultiplayer]

NO_MULTIPLAYER = NoMultiplayer()
UNLIMITED_MULTIPLAYER = UnlimitedMultiplayer()


def multiplayer_from_json(value) -> Multiplayer:
    """Decode ``"None"``, ``"Some"``, ``{"Limited": n}`` or ``null``."""
    if value is None or value == "None":
        return NO_MULTIPLAYER
    if value == "Some":
        return UNLIMITED_MULTIPLAYER
    if isinstance(value, dict) and set(value) == {"Limited"}:
        cap = value["Limited"]
        if isinstance(cap, bool) or not isinstance(cap, int):
            raise ValueError(f"Multiplayer cap must be an integer: {cap!r}")
        return LimitedMultiplayer(cap)
    raise ValueError(f"Unknown multiplayer value: {value!r}")


# ---------------------------------------------------------------------------
# Media
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Image:
    """An image hosted by the metadata provider, referenced by id."""

    id: str
    width: int = 0
    height: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "Image":
        return cls(
            id=data["id"],
            width=int(data.get("width", 0)),
            height=int(data.get("height", 0)),
        )

    def to_dict(self) -> dict:
        return {"id": self.id, "width": self.width, "height": self.height}


# ---------------------------------------------------------------------------
# GameEntry
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class GameEntry:
    """Complete record for one game in the catalogue.

    Fields are grouped by concern:

    *Identity* — required; ``slug`` is the stable key.
    *Search* — pre-normalised keys matched by the free-text filter.
    *Facets* — genre/theme ids, game modes, graphics style, storefronts.
    *Media* — cover, screenshots and embeddable video URLs.
    *Distribution* — where the installer lives on the server.
    """

    # ── Identity (required) ───────────────────────────────────────────────
    name: str
    slug: str

    # ── Search ────────────────────────────────────────────────────────────
    search_names: tuple[str, ...] = ()

    # ── Facets ────────────────────────────────────────────────────────────
    summary: str = ""
    genres: frozenset[int] = frozenset()
    themes: frozenset[int] = frozenset()
    has_single_player: bool = False
    has_coop_campaign: bool = False
    offline_coop: Multiplayer = NO_MULTIPLAYER
    offline_pvp: Multiplayer = NO_MULTIPLAYER
    online_coop: Multiplayer = NO_MULTIPLAYER
    online_pvp: Multiplayer = NO_MULTIPLAYER
    graphics: Literal["pixelated", "smooth"] = "smooth"
    store_links: Mapping[str, str] = field(default_factory=dict, hash=False)

    # ── Media ─────────────────────────────────────────────────────────────
    cover: Image | None = None
    screenshots: tuple[Image, ...] = ()
    videos: tuple[str, ...] = ()

    # ── Distribution ──────────────────────────────────────────────────────
    path: str = ""
    size_bytes: int = 0
    version: str = ""

    def __post_init__(self) -> None:
        # Read-only copy; excluded from the hash.
        object.__setattr__(self, "store_links", MappingProxyType(dict(self.store_links)))

    @property
    def is_multiplayer(self) -> bool:
        """True if any multiplayer mode is supported."""
        return any(
            mode.supported
            for mode in (self.offline_coop, self.offline_pvp, self.online_coop, self.online_pvp)
        )

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------

    @classmethod
    def from_dict(cls, data: dict) -> "GameEntry":
        graphics = str(data.get("graphics", "smooth")).lower()
        if graphics not in ("pixelated", "smooth"):
            raise ValueError(f"Unknown graphics style: {graphics!r}")

        name = data["name"]
        if "search_names" in data:
            search_names = search_names_for(*data["search_names"])
        else:
            search_names = search_names_for(name, *data.get("alternative_names", []))

        store_links = {
            store: url
            for store, url in dict(data.get("store_links", {})).items()
            if url
        }
        for store in STORES:
            if data.get(store):
                store_links[store] = data[store]

        cover_raw = data.get("cover")

        return cls(
            name=name,
            slug=data["slug"],
            search_names=search_names,
            summary=data.get("summary") or "",
            genres=frozenset(int(g) for g in data.get("genres", [])),
            themes=frozenset(int(t) for t in data.get("themes", [])),
            has_single_player=bool(data.get("has_single_player", False)),
            has_coop_campaign=bool(data.get("has_coop_campaign", False)),
            offline_coop=multiplayer_from_json(data.get("offline_coop")),
            offline_pvp=multiplayer_from_json(data.get("offline_pvp")),
            online_coop=multiplayer_from_json(data.get("online_coop")),
            online_pvp=multiplayer_from_json(data.get("online_pvp")),
            graphics=graphics,
            store_links=store_links,
            cover=Image.from_dict(cover_raw) if cover_raw else None,
            screenshots=tuple(Image.from_dict(s) for s in data.get("screenshots", [])),
            videos=tuple(data.get("videos", [])),
            path=data.get("path", ""),
            size_bytes=int(data.get("size_bytes", 0)),
            version=data.get("version") or "",
        )

    def to_dict(self) -> dict:
        """Serialise to a ``games.json``-compatible dict.

        Empty strings, empty collections, and ``None`` values are omitted
        to keep the JSON readable.  Multiplayer modes are always written.
        """
        d: dict = {
            "name": self.name,
            "slug": self.slug,
            "search_names": list(self.search_names),
        }
        _opt_str(d, "summary", self.summary)
        _opt_seq(d, "genres", tuple(sorted(self.genres)))
        _opt_seq(d, "themes", tuple(sorted(self.themes)))
        d["has_single_player"] = self.has_single_player
        d["has_coop_campaign"] = self.has_coop_campaign
        d["offline_coop"] = self.offline_coop.to_json()
        d["offline_pvp"] = self.offline_pvp.to_json()
        d["online_coop"] = self.online_coop.to_json()
        d["online_pvp"] = self.online_pvp.to_json()
        d["graphics"] = self.graphics
        if self.store_links:
            d["store_links"] = dict(self.store_links)
        if self.cover is not None:
            d["cover"] = self.cover.to_dict()
        if self.screenshots:
            d["screenshots"] = [s.to_dict() for s in self.screenshots]
        _opt_seq(d, "videos", self.videos)
        _opt_str(d, "path", self.path)
        if self.size_bytes:
            d["size_bytes"] = self.size_bytes
        _opt_str(d, "version", self.version)
        return d


# ---------------------------------------------------------------------------
# Serialisation helpers
# ---------------------------------------------------------------------------

def _opt_str(d: dict, key: str, value: str) -> None:
    if value:
        d[key] = value


def _opt_seq(d: dict, key: str, value: tuple) -> None:
    if value:
        d[key] = list(value)
