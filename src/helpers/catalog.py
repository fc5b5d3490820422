"""Business-logic for loading the zone catalog.

The controller owns everything the gallery needs between reruns: the
manifest as fetched, the current display order, the popularity index and
the last load error. UI code reads from it and never keeps its own copy.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, List, Mapping, Optional
from urllib.parse import urlencode

from src.config.settings import SETTINGS, CatalogSettings
from src.helpers.ordering import SortKey, sort_zones, zone_of_the_day_index
from src.zones.client import ZoneClient
from src.zones.errors import ZoneError
from src.zones.models import PopularityIndex, ZoneRecord, parse_manifest

logger = logging.getLogger(__name__)

# Query-string parameters: the zone to open straight after loading, plus the
# gallery ordering and search text to restore with it
ZONE_ID_PARAM = "id"
SORT_PARAM = "sort"
QUERY_PARAM = "q"


class CatalogController:
    """Explicit catalog state plus the operations that change it."""

    def __init__(
        self,
        settings: CatalogSettings | None = None,
        client: ZoneClient | None = None,
    ):
        self.settings = settings or SETTINGS
        self.client = client or ZoneClient.from_settings(self.settings)

        self.manifest: List[ZoneRecord] = []
        self.zones: List[ZoneRecord] = []
        self.popularity = PopularityIndex.empty()
        self.sort_key = SortKey.parse(self.settings.default_sort)
        self.error: Optional[ZoneError] = None
        self.loaded = False

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load(self) -> List[ZoneRecord]:
        """Fetch the manifest and popularity data, then apply the active sort.

        Raises the manifest's ``ZoneError`` after recording it on
        ``self.error``; nothing from a failed load is kept.
        """
        self.error = None
        try:
            payload = self.client.get_json(self.settings.zones_url)
            records = parse_manifest(payload)
        except ZoneError as exc:
            logger.error(f"Error loading zones: {exc}")
            self.manifest, self.zones = [], []
            self.error = exc
            self.loaded = False
            raise

        self.manifest = records
        logger.info("Loaded %d zones", len(records))
        self.load_popularity()
        self.sort()
        self.loaded = True
        return self.zones

    def load_popularity(self) -> PopularityIndex:
        """Best-effort fetch of hit counts; any failure leaves an empty index."""
        try:
            rows = self.client.get_json(self.settings.popularity_url)
            self.popularity = PopularityIndex.from_stats(rows)
        except ZoneError as exc:
            logger.warning(f"Popularity data unavailable, continuing without it: {exc}")
            self.popularity = PopularityIndex.empty()
        return self.popularity

    # ------------------------------------------------------------------
    # Ordering / lookup
    # ------------------------------------------------------------------

    def sort(self, key: "str | SortKey | None" = None) -> List[ZoneRecord]:
        """Re-order the full catalog and make it the new display order."""
        if key is not None:
            self.sort_key = SortKey.parse(key)
        self.zones = sort_zones(self.manifest, self.sort_key, self.popularity)
        return self.zones

    def find(self, zone_id: Any) -> Optional[ZoneRecord]:
        """Look a zone up by id; ``"5"`` and ``5`` both match zone 5."""
        if zone_id is None:
            return None
        wanted = str(zone_id)
        for zone in self.manifest:
            if str(zone.id) == wanted:
                return zone
        return None

    def zone_of_the_day(self, today: date | None = None) -> Optional[ZoneRecord]:
        """Featured zone, picked from manifest order so sorting does not move it."""
        index = zone_of_the_day_index(today or date.today(), len(self.manifest))
        if index is None:
            return None
        return self.manifest[index]


def _first_param(query_params: Mapping[str, Any], name: str) -> Optional[str]:
    value = query_params.get(name)
    if isinstance(value, (list, tuple)):
        value = value[0] if value else None
    if value is None or str(value).strip() == "":
        return None
    return str(value).strip()


def initial_zone_id(query_params: Mapping[str, Any]) -> Optional[str]:
    """Return the zone id requested in the page address, if any."""
    return _first_param(query_params, ZONE_ID_PARAM)


def initial_sort_key(query_params: Mapping[str, Any]) -> Optional[SortKey]:
    """Sort key carried in the page address; unknown values are ignored."""
    value = _first_param(query_params, SORT_PARAM)
    if value is None:
        return None
    try:
        return SortKey.parse(value)
    except ValueError:
        logger.warning(f"Ignoring unknown sort key in address: {value}")
        return None


def initial_query(query_params: Mapping[str, Any]) -> str:
    return _first_param(query_params, QUERY_PARAM) or ""


def zone_link(zone_id: Any, sort_key: "str | SortKey | None" = None, query: str | None = "") -> str:
    """Relative address that reopens the gallery on *zone_id* with the same view."""
    params = {ZONE_ID_PARAM: str(zone_id)}
    if sort_key is not None:
        params[SORT_PARAM] = SortKey.parse(sort_key).value
    if query:
        params[QUERY_PARAM] = query
    return "?" + urlencode(params)
