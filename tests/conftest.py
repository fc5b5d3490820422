from __future__ import annotations

import pytest

from src.config.settings import update_from_kwargs
from src.helpers.catalog import CatalogController
from src.zones.errors import FetchError, NetworkError

ZONES_URL = "https://zones.test/zones.json"
POPULARITY_URL = "https://stats.test/files"
COVER_BASE = "https://covers.test"
HTML_BASE = "https://html.test"


class FakeClient:
    """Stands in for ZoneClient: URL → payload, or URL → exception to raise."""

    def __init__(self, json_routes=None, text_routes=None):
        self.json_routes = dict(json_routes or {})
        self.text_routes = dict(text_routes or {})
        self.calls: list[str] = []

    def _lookup(self, routes, url):
        self.calls.append(url)
        if url not in routes:
            raise FetchError(404, url)
        value = routes[url]
        if isinstance(value, Exception):
            raise value
        if callable(value):
            return value()
        return value

    def get_json(self, url):
        return self._lookup(self.json_routes, url)

    def get_text(self, url):
        return self._lookup(self.text_routes, url)


def zone(zone_id, name, url=None, cover=None):
    return {
        "id": zone_id,
        "name": name,
        "cover": cover or f"{{COVER_URL}}/{zone_id}.png",
        "url": url or f"{{HTML_URL}}/{zone_id}.html",
    }


def stats_row(zone_id, total):
    return {"name": f"/{zone_id}.html", "hits": {"total": total, "dates": {}}}


@pytest.fixture
def settings():
    return update_from_kwargs(
        zones_url=ZONES_URL,
        popularity_url=POPULARITY_URL,
        cover_url=COVER_BASE,
        html_url=HTML_BASE,
        default_sort="name",
    )


@pytest.fixture
def manifest():
    return [
        zone(1, "Alpha"),
        zone(-1, "Pinned"),
        zone(2, "Beta"),
    ]


@pytest.fixture
def make_controller(settings):
    def _make(manifest=None, stats=None, text_routes=None, manifest_error=None):
        json_routes = {}
        json_routes[ZONES_URL] = manifest_error if manifest_error is not None else manifest
        json_routes[POPULARITY_URL] = (
            stats if stats is not None else NetworkError("stats offline")
        )
        client = FakeClient(json_routes, text_routes)
        return CatalogController(settings, client)

    return _make
