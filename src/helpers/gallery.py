"""Framework-free model of what the gallery shows on one rerun."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

from src.helpers.catalog import CatalogController, zone_link
from src.helpers.ordering import filter_zones
from src.zones.models import ZoneRecord

STATUS_OK = "ok"
STATUS_EMPTY = "empty"
STATUS_ERROR = "error"

EMPTY_MESSAGE = "No zones found."


def error_message(exc: Exception) -> str:
    return f"Error loading zones: {exc}"


def zone_count_label(count: int) -> str:
    return f"Total Games: {count}"


@dataclass(frozen=True)
class GalleryRow:
    zone: ZoneRecord
    cover_src: str
    # Whole-row activation target: the page reopened on ``?id=`` with the
    # current sort and search carried along
    link: str

    @property
    def key(self) -> str:
        """Stable widget key for the row's explicit open control."""
        return f"open_zone_{self.zone.id}"


@dataclass
class GalleryView:
    status: str
    rows: List[GalleryRow] = field(default_factory=list)
    message: str = ""
    featured: Optional[GalleryRow] = None

    @property
    def count_label(self) -> str:
        return zone_count_label(len(self.rows))


def build_view(
    controller: CatalogController,
    query: str | None = "",
    today: date | None = None,
) -> GalleryView:
    """Filter the controller's display order and describe the result."""
    if controller.error is not None:
        return GalleryView(status=STATUS_ERROR, message=error_message(controller.error))

    settings = controller.settings

    def row(zone: ZoneRecord) -> GalleryRow:
        return GalleryRow(zone, zone.cover_url(settings), zone_link(zone.id, controller.sort_key, query))

    featured_zone = controller.zone_of_the_day(today)
    featured = row(featured_zone) if featured_zone else None

    visible = filter_zones(controller.zones, query)
    if not visible:
        return GalleryView(status=STATUS_EMPTY, message=EMPTY_MESSAGE, featured=featured)

    rows = [row(zone) for zone in visible]
    return GalleryView(status=STATUS_OK, rows=rows, featured=featured)
