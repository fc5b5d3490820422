"""
Tests — configuration parsing and the fetch_zones command
"""
from __future__ import annotations

import json
from unittest.mock import patch

import pytest

import fetch_zones
from src.config.core import parse_args
from src.config.settings import SETTINGS, update_from_kwargs
from src.zones.errors import NetworkError

from conftest import FakeClient, stats_row, zone

ZONES = "https://mirror.test/zones.json"
STATS = "https://mirror.test/stats"
ARGS = ["--zones-url", ZONES, "--popularity-url", STATS]


def _run(argv, client, capsys):
    with patch.object(fetch_zones.ZoneClient, "from_settings", return_value=client):
        code = fetch_zones.main(argv)
    out, err = capsys.readouterr()
    return code, out, err


class TestSettings:
    def test_update_from_kwargs_overrides_only_given_fields(self):
        custom = update_from_kwargs(zones_url=ZONES)
        assert custom.zones_url == ZONES
        assert custom.html_url == SETTINGS.html_url

    def test_base_addresses_lose_trailing_slash(self):
        assert update_from_kwargs(cover_url="https://c.test/").cover_url == "https://c.test"

    def test_parse_args_ignores_unknown_flags(self):
        cli = parse_args(ARGS + ["--sort", "id", "--timeout", "2.5"])
        settings = cli.to_catalog_settings()
        assert settings.zones_url == ZONES
        assert settings.popularity_url == STATS
        assert settings.request_timeout_sec == 2.5


class TestFetchZones:
    @pytest.fixture
    def client(self):
        return FakeClient({
            ZONES: [zone(1, "Alpha"), zone(-1, "Pinned"), zone(2, "Beta")],
            STATS: [stats_row(1, 5), stats_row(2, 9)],
        })

    def test_prints_popularity_order(self, client, capsys):
        code, out, _ = _run(ARGS + ["--sort", "popular"], client, capsys)
        assert code == 0
        rows = json.loads(out)
        assert [r["name"] for r in rows] == ["Pinned", "Beta", "Alpha"]
        assert rows[1]["hits"] == 9

    def test_query_filters_output(self, client, capsys):
        _, out, _ = _run(ARGS + ["--query", "alp"], client, capsys)
        assert [r["id"] for r in json.loads(out)] == [1]

    def test_today_prints_single_zone(self, client, capsys):
        _, out, _ = _run(ARGS + ["--today"], client, capsys)
        assert json.loads(out)["id"] in {1, -1, 2}

    def test_unknown_sort_key(self, client, capsys):
        code, _, err = _run(ARGS + ["--sort", "rating"], client, capsys)
        assert code == 2
        assert "Unknown sort key" in err

    def test_manifest_failure(self, capsys):
        client = FakeClient({ZONES: NetworkError("offline")})
        code, out, err = _run(ARGS, client, capsys)
        assert code == 1
        assert out == ""
        assert "Error loading zones: offline" in err

    def test_help_lists_script_flags(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            fetch_zones.main(["--help"])
        assert excinfo.value.code == 0
        out = capsys.readouterr().out
        for flag in ("--sort", "--query", "--today", "--zones-url", "--timeout"):
            assert flag in out
