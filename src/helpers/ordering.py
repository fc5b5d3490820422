"""Pure ordering, filtering and "zone of the day" helpers.

Nothing here touches Streamlit or the network so the gallery behaviour can
be checked without a live page.
"""
from __future__ import annotations

import unicodedata
from datetime import date
from enum import Enum
from typing import List, Optional, Sequence

from src.zones.models import PopularityIndex, ZoneRecord


class SortKey(str, Enum):
    NAME = "name"
    ID = "id"
    POPULARITY = "popularity"

    @classmethod
    def parse(cls, value: "str | SortKey") -> "SortKey":
        """Accept enum members, their values, and the legacy ``popular`` spelling."""
        if isinstance(value, cls):
            return value
        value = str(value).strip().lower()
        if value == "popular":
            return cls.POPULARITY
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"Unknown sort key: {value}") from None

    @property
    def label(self) -> str:
        return {"name": "Name", "id": "ID", "popularity": "Popular"}[self.value]


def _collation_key(name: str) -> tuple[str, str, str]:
    # Letters first, then accents, then case with lowercase ahead of uppercase
    decomposed = unicodedata.normalize("NFKD", name)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), decomposed.casefold(), name.swapcase()


def pin_sentinel(zones: Sequence[ZoneRecord]) -> List[ZoneRecord]:
    """Move the sentinel entry to the front, leaving everything else in place."""
    return sorted(zones, key=lambda z: not z.is_sentinel)


def sort_zones(
    zones: Sequence[ZoneRecord],
    key: "str | SortKey",
    popularity: Optional[PopularityIndex] = None,
) -> List[ZoneRecord]:
    """Return a new list of *zones* ordered by *key*, sentinel first."""
    key = SortKey.parse(key)
    popularity = popularity or PopularityIndex.empty()

    if key is SortKey.NAME:
        ordered = sorted(zones, key=lambda z: _collation_key(z.name))
    elif key is SortKey.ID:
        ordered = sorted(zones, key=lambda z: z.id)
    else:
        ordered = sorted(zones, key=lambda z: -popularity.hits(z.id))

    return pin_sentinel(ordered)


def filter_zones(zones: Sequence[ZoneRecord], query: str | None) -> List[ZoneRecord]:
    """Case-insensitive substring match on the zone name."""
    needle = (query or "").lower()
    return [z for z in zones if needle in z.name.lower()]


def zone_of_the_day_index(today: date, length: int) -> Optional[int]:
    """Index of the featured zone for *today* in a catalog of *length* entries.

    The seed is the calendar date as ``YYYYMMDD``, so every visitor sees the
    same pick on a given day while the catalog size stays the same.
    """
    if length <= 0:
        return None
    seed = today.year * 10000 + today.month * 100 + today.day
    return seed % length
