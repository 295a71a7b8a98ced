"""Persistent application configuration.

Stored as a JSON file in the user's XDG data directory:

    ~/.local/share/gameshelf/config.json

Schema::

    {
      "catalogue": "/srv/games/games.json",   // path to the snapshot
      "page_size": 30                          // games per page
    }
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

log = logging.getLogger(__name__)

_CONFIG_FILE = "config.json"

DEFAULT_PAGE_SIZE = 30

# Offered in the page size menu.
PAGE_SIZES: tuple[int, ...] = (10, 30, 60, 120)


def data_dir() -> Path:
    """Return (and create if needed) the Gameshelf data directory."""
    xdg = os.environ.get("XDG_DATA_HOME")
    base = Path(xdg) if xdg else Path.home() / ".local" / "share"
    d = base / "gameshelf"
    d.mkdir(parents=True, exist_ok=True)
    return d


def _config_path() -> Path:
    return data_dir() / _CONFIG_FILE


# ---------------------------------------------------------------------------
# Low-level read/write
# ---------------------------------------------------------------------------

def _load() -> dict:
    path = _config_path()
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as exc:
        log.warning("Could not read config: %s", exc)
        return {}
    if not isinstance(data, dict):
        log.warning("Ignoring config with unexpected top-level type")
        return {}
    return data


def _save(data: dict) -> None:
    _config_path().write_text(
        json.dumps(data, indent=2, ensure_ascii=False),
        encoding="utf-8",
    )


# ---------------------------------------------------------------------------
# Catalogue path helpers
# ---------------------------------------------------------------------------

def load_catalogue_path() -> str | None:
    """Return the configured snapshot path, or None if unset."""
    return _load().get("catalogue") or None


def save_catalogue_path(path: str | None) -> None:
    """Persist the snapshot path.  Pass ``None`` to clear it."""
    cfg = _load()
    if path is None:
        cfg.pop("catalogue", None)
    else:
        cfg["catalogue"] = path
    _save(cfg)


# ---------------------------------------------------------------------------
# Page size helpers
# ---------------------------------------------------------------------------

def load_page_size() -> int:
    """Return the stored page size, defaulting to ``DEFAULT_PAGE_SIZE``."""
    size = _load().get("page_size", DEFAULT_PAGE_SIZE)
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        log.warning("Invalid page size in config: %r", size)
        return DEFAULT_PAGE_SIZE
    return size


def save_page_size(size: int) -> None:
    cfg = _load()
    cfg["page_size"] = size
    _save(cfg)
