"""Free-text search normalisation.

Both sides of a search comparison go through :func:`normalize_search`:
the user's query on every keystroke, and each game's display and
alternative names once when the catalogue is decoded.  Matching is then a
plain substring test on the canonical form.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass

_SEARCH_ALPHABET = frozenset("abcdefghijklmnopqrstuvwxyz0123456789 ")


@dataclass(frozen=True, slots=True)
class NormalizedSearchKey:
    """Canonical search text: ``[a-z0-9 ]`` only, single spaces, trimmed.

    Only :func:`normalize_search` should construct one.
    """

    text: str = ""

    def __bool__(self) -> bool:
        return bool(self.text)

    def __str__(self) -> str:
        return self.text

    def matches(self, search_names) -> bool:
        """Return True if any of *search_names* contains this key.

        An empty key matches everything, including entries with no names.
        """
        if not self.text:
            return True
        return any(self.text in name for name in search_names)


EMPTY_KEY = NormalizedSearchKey()


def normalize_search(raw: str) -> NormalizedSearchKey:
    """Fold *raw* into a :class:`NormalizedSearchKey`.

    Lower-cases, drops everything outside ``[a-z0-9 ]``, keeps only the
    first space of each run, then trims.  Idempotent.
    """
    folded: list[str] = []
    for ch in raw.lower():
        if ch not in _SEARCH_ALPHABET:
            continue
        if ch == " " and folded and folded[-1] == " ":
            continue
        folded.append(ch)
    return NormalizedSearchKey("".join(folded).strip(" "))


def search_names_for(*names: str) -> tuple[str, ...]:
    """Build the pre-normalised search names for a game.

    Each name is NFKD-decomposed and stripped of non-ASCII code points
    first, so accented titles stay searchable by their base letters
    ("Pokémon" → "pokemon").  Empty results are dropped and duplicates
    removed while preserving order.
    """
    seen: set[str] = set()
    result: list[str] = []
    for name in names:
        ascii_name = "".join(
            ch for ch in unicodedata.normalize("NFKD", name) if ch.isascii()
        )
        key = normalize_search(ascii_name).text
        if key and key not in seen:
            seen.add(key)
            result.append(key)
    return tuple(result)
