"""Zone records, template resolution and the popularity index.

Manifest objects look like::

    {"id": 12, "name": "Alpha", "cover": "{COVER_URL}/12.png", "url": "{HTML_URL}/12.html"}

``url`` may also be a fully-qualified address, in which case the zone is a
plain redirect rather than embedded content.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping
from urllib.parse import urlparse

from src.zones.errors import ParseError

logger = logging.getLogger(__name__)

SENTINEL_ID = -1

COVER_TOKEN = "{COVER_URL}"
HTML_TOKEN = "{HTML_URL}"

# Statistics rows name the file they count, e.g. "/123.html"
_STATS_FILE_RE = re.compile(r"/(\d+)\.html$")


def resolve_template(template: str, cover_base: str, html_base: str) -> str:
    """Substitute the first ``{COVER_URL}`` and ``{HTML_URL}`` tokens in *template*."""
    return template.replace(COVER_TOKEN, cover_base, 1).replace(HTML_TOKEN, html_base, 1)


def is_external_address(value: str) -> bool:
    """True when *value* is a fully-qualified http(s) address."""
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


@dataclass(frozen=True)
class ZoneRecord:
    """One catalog entry."""
    id: int
    name: str
    cover: str
    url: str

    @property
    def is_sentinel(self) -> bool:
        return self.id == SENTINEL_ID

    @property
    def is_external(self) -> bool:
        return is_external_address(self.url)

    def cover_url(self, settings) -> str:
        return resolve_template(self.cover, settings.cover_url, settings.html_url)

    def content_url(self, settings) -> str:
        if self.is_external:
            return self.url
        return resolve_template(self.url, settings.cover_url, settings.html_url)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the manifest shape for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "cover": self.cover,
            "url": self.url,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "ZoneRecord":
        """Create from one manifest object, raising ParseError on bad shape."""
        if not isinstance(data, Mapping):
            raise ParseError(f"Zone entry must be an object, got {type(data).__name__}")

        zone_id = data.get("id")
        # bool is an int subclass; a manifest saying "id": true is still malformed
        if isinstance(zone_id, bool) or not isinstance(zone_id, int):
            raise ParseError(f"Zone entry has invalid id: {zone_id!r}")

        fields = {}
        for key in ("name", "cover", "url"):
            value = data.get(key)
            if not isinstance(value, str):
                raise ParseError(f"Zone {zone_id} has invalid {key}: {value!r}")
            fields[key] = value

        return cls(id=zone_id, **fields)


def parse_manifest(payload: Any) -> List[ZoneRecord]:
    """Turn the decoded manifest into records, enforcing unique ids."""
    if not isinstance(payload, list):
        raise ParseError("Zone manifest must be a JSON array")

    records: List[ZoneRecord] = []
    seen: set[int] = set()
    for item in payload:
        record = ZoneRecord.from_dict(item)
        if record.id in seen:
            raise ParseError(f"Duplicate zone id in manifest: {record.id}")
        seen.add(record.id)
        records.append(record)
    return records


class PopularityIndex:
    """Zone id → hit count. Lookups for unknown ids return 0."""

    def __init__(self, hits: Mapping[int, int] | None = None):
        self._hits: Dict[int, int] = dict(hits or {})

    def hits(self, zone_id: int) -> int:
        return self._hits.get(zone_id, 0)

    def __len__(self) -> int:
        return len(self._hits)

    def __bool__(self) -> bool:
        return bool(self._hits)

    def __repr__(self) -> str:
        return f"PopularityIndex({len(self._hits)} zones)"

    def to_dict(self) -> Dict[int, int]:
        return dict(self._hits)

    @classmethod
    def empty(cls) -> "PopularityIndex":
        return cls()

    @classmethod
    def from_stats(cls, rows: Iterable[Any]) -> "PopularityIndex":
        """Build the index from statistics rows.

        Each useful row carries a ``name`` such as ``/gh/.../123.html`` and a
        ``hits`` object with a ``total``. Rows that do not match are skipped.
        """
        if not isinstance(rows, list):
            raise ParseError("Popularity data must be a JSON array")

        hits: Dict[int, int] = {}
        for row in rows:
            if not isinstance(row, Mapping):
                continue
            name = row.get("name")
            if not isinstance(name, str):
                continue
            match = _STATS_FILE_RE.search(name)
            if not match:
                continue
            hit_stats = row.get("hits")
            total = hit_stats.get("total") if isinstance(hit_stats, Mapping) else None
            if isinstance(total, bool) or not isinstance(total, (int, float)):
                continue
            if not math.isfinite(total) or total < 0:
                continue
            hits[int(match.group(1))] = int(total)

        logger.debug("Parsed popularity for %d zones", len(hits))
        return cls(hits)
