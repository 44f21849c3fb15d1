"""City name canonicalization.

Members type the same city many ways ("Coeur D'Alene", "coeur d’alene").
:func:`normalize_city` builds a lookup key from a spelling; the key is never
shown to users. :func:`dedupe_cities` collapses a list of spellings down to
one display string per city.
"""

from __future__ import annotations

import re
from typing import Iterable, Optional

# Curly quotes, acute accent and backtick all become a straight apostrophe
_APOSTROPHES = re.compile("[’‘´`]")

CANONICAL_CITIES: dict[str, str] = {
    "coeur d'alene": "Coeur d'Alene",
}


def normalize_city(city: str) -> str:
    return _APOSTROPHES.sub("'", city.strip().lower())


def canonical_city(city: str) -> str:
    """Preferred display spelling, or the trimmed input when none is known."""
    return CANONICAL_CITIES.get(normalize_city(city), city.strip())


def dedupe_cities(cities: Iterable[Optional[str]]) -> list[str]:
    """One display string per city, sorted alphabetically.

    Blank and missing entries are skipped. Known cities use their canonical
    spelling; for the rest the first spelling seen wins.
    """
    seen: set[str] = set()
    kept: list[str] = []
    for raw in cities:
        if raw is None or not raw.strip():
            continue
        key = normalize_city(raw)
        if key in seen:
            continue
        seen.add(key)
        kept.append(CANONICAL_CITIES.get(key, raw.strip()))
    return sorted(kept)
