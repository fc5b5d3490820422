"""Per-session wiring of the catalog controller and zone loader.

Streamlit re-executes the page on every interaction, so the controller and
loader are created once per browser session and kept in ``st.session_state``.
Manifest and statistics payloads are also cached across sessions, so a row
link that reloads the page does not hit the network again.
"""
from __future__ import annotations

import logging
from typing import Any

import streamlit as st

from src.config.settings import SETTINGS, CatalogSettings
from src.helpers.catalog import (
    CatalogController,
    initial_query,
    initial_sort_key,
    initial_zone_id,
)
from src.helpers.viewer import StateNavigator, StateSurface, ZoneLoader
from src.zones.client import ZoneClient
from src.zones.errors import ZoneError, ZoneLoadError

logger = logging.getLogger(__name__)

CONTROLLER_KEY = "zone_catalog"
ALERT_KEY = "zone_alert"

# Widget keys of the gallery controls
QUERY_KEY = "zone_query"
SORT_KEY = "zone_sort"


@st.cache_data(ttl=SETTINGS.catalog_ttl_sec, show_spinner=False)
def _fetch_json(url: str, timeout: float, user_agent: str) -> Any:
    # Failures raise and are therefore never cached
    client = ZoneClient(timeout=timeout, user_agent=user_agent)
    try:
        return client.get_json(url)
    finally:
        client.close()


class CachedZoneClient(ZoneClient):
    """ZoneClient whose JSON fetches go through the app-wide cache.

    Zone content (``get_text``) is always fetched fresh.
    """

    def get_json(self, url: str) -> Any:
        return _fetch_json(url, self.timeout, self.user_agent)


def build_controller(settings: CatalogSettings | None = None) -> CatalogController:
    settings = settings or SETTINGS
    return CatalogController(settings, CachedZoneClient.from_settings(settings))


def get_controller() -> CatalogController:
    """Return the session's controller, loading the catalog on first use.

    A new session also picks up ``?sort=``, ``?q=`` and ``?id=`` from the
    page address: the first two restore the gallery view, the last opens a
    zone once the catalog has loaded.
    """
    if CONTROLLER_KEY not in st.session_state:
        controller = build_controller()
        sort_key = initial_sort_key(st.query_params)
        if sort_key is not None:
            controller.sort_key = sort_key
        query = initial_query(st.query_params)
        if query and QUERY_KEY not in st.session_state:
            st.session_state[QUERY_KEY] = query

        with st.spinner("Loading zones..."):
            try:
                controller.load()
            except ZoneError as exc:
                # Kept on controller.error; the gallery renders it in place of the grid
                logger.debug(f"Initial load failed: {exc}")
        st.session_state[CONTROLLER_KEY] = controller

        if controller.loaded:
            requested = initial_zone_id(st.query_params)
            if requested:
                open_zone_by_id(requested, controller=controller)
    return st.session_state[CONTROLLER_KEY]


def get_surface() -> StateSurface:
    return StateSurface(st.session_state)


def get_navigator() -> StateNavigator:
    return StateNavigator(st.session_state)


def get_loader(controller: CatalogController | None = None) -> ZoneLoader:
    return ZoneLoader(controller or get_controller(), get_surface(), get_navigator())


def raise_alert(message: str) -> None:
    st.session_state[ALERT_KEY] = message


def pop_alert() -> str | None:
    return st.session_state.pop(ALERT_KEY, None)


def open_zone_by_id(zone_id, controller: CatalogController | None = None) -> None:
    """Button / startup callback: open a zone and turn failures into an alert."""
    try:
        get_loader(controller).open_by_id(zone_id)
    except ZoneLoadError as exc:
        raise_alert(str(exc))


def close_zone() -> None:
    get_loader().close()


def open_zone_in_new_context() -> None:
    try:
        get_loader().open_in_new_context()
    except ZoneLoadError as exc:
        raise_alert(str(exc))
