"""
Tests — CatalogController loading, popularity merge and lookups
"""
from __future__ import annotations

import json
from datetime import date
from urllib.parse import parse_qsl

import pytest

from src.helpers.catalog import initial_query, initial_sort_key, initial_zone_id, zone_link
from src.helpers.ordering import SortKey
from src.zones.errors import FetchError, NetworkError, ParseError

from conftest import ZONES_URL, stats_row, zone


class TestLoad:
    def test_load_sorts_with_default_key(self, make_controller, manifest):
        controller = make_controller(manifest)
        zones = controller.load()
        assert [z.name for z in zones] == ["Pinned", "Alpha", "Beta"]
        assert controller.loaded
        assert controller.error is None

    def test_manifest_order_kept_separately(self, make_controller, manifest):
        controller = make_controller(manifest)
        controller.load()
        assert [z.id for z in controller.manifest] == [1, -1, 2]

    def test_popularity_merged(self, make_controller, manifest):
        controller = make_controller(manifest, stats=[stats_row(1, 5), stats_row(2, 9)])
        controller.load()
        assert controller.popularity.hits(2) == 9
        assert controller.popularity.hits(-1) == 0

    def test_popularity_failure_is_swallowed(self, make_controller, manifest):
        controller = make_controller(manifest)  # stats route raises NetworkError
        controller.load()
        assert controller.error is None
        assert not controller.popularity
        assert [z.id for z in controller.sort("popularity")] == [-1, 1, 2]

    def test_malformed_popularity_is_swallowed(self, make_controller, manifest):
        controller = make_controller(manifest, stats={"unexpected": "shape"})
        controller.load()
        assert controller.loaded
        assert controller.popularity.hits(1) == 0

    def test_non_finite_popularity_totals_do_not_break_load(self, make_controller, manifest):
        stats = json.loads(
            '[{"name": "/1.html", "hits": {"total": NaN}},'
            ' {"name": "/2.html", "hits": {"total": Infinity}}]'
        )
        controller = make_controller(manifest, stats=stats)
        controller.load()
        assert controller.loaded
        assert controller.error is None
        assert not controller.popularity

    @pytest.mark.parametrize("error", [
        FetchError(503, ZONES_URL),
        NetworkError("connection refused"),
        ParseError("Zone manifest must be a JSON array"),
    ])
    def test_manifest_failure_recorded_and_raised(self, make_controller, error):
        controller = make_controller(manifest_error=error)
        with pytest.raises(type(error)):
            controller.load()
        assert controller.error is error
        assert controller.zones == []
        assert not controller.loaded

    def test_malformed_manifest_keeps_no_partial_catalog(self, make_controller):
        controller = make_controller([zone(1, "Ok"), {"id": "broken"}])
        with pytest.raises(ParseError):
            controller.load()
        assert controller.manifest == []
        assert controller.zones == []

    def test_fetch_error_message_carries_status(self):
        assert str(FetchError(404)) == "HTTP error! status: 404"


class TestSort:
    def test_scenario_popularity_pins_sentinel(self, make_controller):
        controller = make_controller(
            [zone(1, "Alpha"), zone(-1, "Pinned"), zone(2, "Beta")],
            stats=[stats_row(1, 5), stats_row(2, 9)],
        )
        controller.load()
        assert [z.name for z in controller.sort(SortKey.POPULARITY)] == ["Pinned", "Beta", "Alpha"]
        assert controller.sort_key is SortKey.POPULARITY

    def test_sort_by_id(self, make_controller, manifest):
        controller = make_controller(manifest)
        controller.load()
        assert [z.name for z in controller.sort("id")] == ["Pinned", "Alpha", "Beta"]

    def test_resort_replaces_display_order(self, make_controller, manifest):
        controller = make_controller(manifest, stats=[stats_row(2, 9)])
        controller.load()
        first = controller.zones
        controller.sort("popularity")
        assert controller.zones is not first
        assert [z.id for z in controller.zones] == [-1, 2, 1]


class TestLookup:
    @pytest.mark.parametrize("wanted", [2, "2"])
    def test_find_matches_string_form(self, make_controller, manifest, wanted):
        controller = make_controller(manifest)
        controller.load()
        assert controller.find(wanted).name == "Beta"

    def test_find_miss(self, make_controller, manifest):
        controller = make_controller(manifest)
        controller.load()
        assert controller.find(99) is None
        assert controller.find(None) is None

    def test_zone_of_the_day_uses_manifest_order(self, make_controller, manifest):
        controller = make_controller(manifest)
        controller.load()
        day = date(2026, 10, 19)  # 20261019 % 3 == 0
        expected = controller.manifest[20261019 % 3]
        assert controller.zone_of_the_day(day) == expected
        controller.sort("id")
        assert controller.zone_of_the_day(day) == expected

    def test_zone_of_the_day_empty_catalog(self, make_controller):
        controller = make_controller([])
        controller.load()
        assert controller.zone_of_the_day(date(2026, 1, 1)) is None


class TestInitialZoneId:
    def test_reads_id_param(self):
        assert initial_zone_id({"id": "12"}) == "12"

    def test_list_valued_params(self):
        assert initial_zone_id({"id": ["12", "13"]}) == "12"

    @pytest.mark.parametrize("params", [{}, {"id": ""}, {"id": []}, {"other": "1"}])
    def test_absent(self, params):
        assert initial_zone_id(params) is None


class TestViewParams:
    def test_sort_and_query_restored_from_link(self):
        params = dict(parse_qsl(zone_link(7, SortKey.POPULARITY, "run & jump")[1:]))
        assert initial_zone_id(params) == "7"
        assert initial_sort_key(params) is SortKey.POPULARITY
        assert initial_query(params) == "run & jump"

    def test_link_without_view_state(self):
        assert zone_link(7) == "?id=7"

    @pytest.mark.parametrize("params", [{}, {"sort": ""}, {"sort": "rating"}])
    def test_missing_or_unknown_sort_ignored(self, params):
        assert initial_sort_key(params) is None

    def test_popular_alias_accepted(self):
        assert initial_sort_key({"sort": ["popular"]}) is SortKey.POPULARITY

    def test_query_defaults_to_empty(self):
        assert initial_query({}) == ""
