"""Zone loading: fetch a zone's markup and hand it to an isolated surface.

The surface and navigator are abstract so the loader can run against the
Streamlit session (see ``src.ui.viewer``) or against plain dictionaries in
tests.
"""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, MutableMapping, Optional

from src.helpers.catalog import CatalogController
from src.zones.errors import ZoneError, ZoneLoadError
from src.zones.models import ZoneRecord

logger = logging.getLogger(__name__)


class DisplaySurface(ABC):
    """Isolated view that hosts one zone's markup at a time."""

    @abstractmethod
    def write(self, html: str) -> None:
        """Replace the whole content with *html*."""

    @abstractmethod
    def set_labels(self, name: str, zone_id: int) -> None:
        """Update the visible name / id labels."""

    @abstractmethod
    def show(self) -> None: ...

    @abstractmethod
    def hide(self) -> None: ...

    @abstractmethod
    def reset(self) -> None:
        """Throw away the current content and start from a fresh surface."""

    @property
    @abstractmethod
    def generation(self) -> int:
        """Incremented on every ``reset``."""

    @property
    @abstractmethod
    def current_zone_id(self) -> Optional[int]: ...


class Navigator(ABC):
    """Page-level actions that leave the embedded surface."""

    @abstractmethod
    def navigate(self, url: str) -> None:
        """Replace the whole page with *url*."""

    @abstractmethod
    def open_new_context(self, html: str) -> None:
        """Open a fresh top-level window showing *html*."""


# ---------------------------------------------------------------------------
# Mapping-backed implementations (Streamlit passes st.session_state)
# ---------------------------------------------------------------------------

class StateSurface(DisplaySurface):
    """Surface whose state lives in a mutable mapping under a key prefix."""

    def __init__(self, state: MutableMapping[str, Any], prefix: str = "viewer"):
        self._state = state
        self._prefix = prefix
        self._state.setdefault(self._k("html"), None)
        self._state.setdefault(self._k("visible"), False)
        self._state.setdefault(self._k("generation"), 0)
        self._state.setdefault(self._k("name"), "")
        self._state.setdefault(self._k("zone_id"), None)

    def _k(self, name: str) -> str:
        return f"{self._prefix}_{name}"

    def write(self, html: str) -> None:
        self._state[self._k("html")] = html

    def set_labels(self, name: str, zone_id: int) -> None:
        self._state[self._k("name")] = name
        self._state[self._k("zone_id")] = zone_id

    def show(self) -> None:
        self._state[self._k("visible")] = True

    def hide(self) -> None:
        self._state[self._k("visible")] = False

    def reset(self) -> None:
        self._state[self._k("html")] = None
        self._state[self._k("generation")] += 1

    @property
    def generation(self) -> int:
        return self._state[self._k("generation")]

    @property
    def html(self) -> Optional[str]:
        return self._state[self._k("html")]

    @property
    def visible(self) -> bool:
        return self._state[self._k("visible")]

    @property
    def name(self) -> str:
        return self._state[self._k("name")]

    @property
    def current_zone_id(self) -> Optional[int]:
        return self._state[self._k("zone_id")]


class StateNavigator(Navigator):
    """Records pending page actions; the UI performs them on the next render."""

    def __init__(self, state: MutableMapping[str, Any], prefix: str = "nav"):
        self._state = state
        self._nav_key = f"{prefix}_redirect"
        self._popup_key = f"{prefix}_popup_html"

    def navigate(self, url: str) -> None:
        self._state[self._nav_key] = url

    def open_new_context(self, html: str) -> None:
        self._state[self._popup_key] = html

    def pop_redirect(self) -> Optional[str]:
        return self._state.pop(self._nav_key, None)

    def pop_popup(self) -> Optional[str]:
        return self._state.pop(self._popup_key, None)


# ---------------------------------------------------------------------------
# Loader
# ---------------------------------------------------------------------------

class ZoneLoader:
    """Opens zones into a display surface, or navigates away for external ones."""

    def __init__(
        self,
        controller: CatalogController,
        surface: DisplaySurface,
        navigator: Navigator,
    ):
        self.controller = controller
        self.surface = surface
        self.navigator = navigator

    @property
    def client(self):
        return self.controller.client

    def _fetch(self, zone: ZoneRecord) -> str:
        url = zone.content_url(self.controller.settings)
        try:
            return self.client.get_text(url)
        except ZoneError as exc:
            logger.error(f"Failed to load zone {zone.id} from {url}: {exc}")
            raise ZoneLoadError(f"Failed to load zone: {exc}") from exc

    def open(self, zone: ZoneRecord) -> None:
        """Show *zone*; raises ZoneLoadError and leaves the viewer as it was on failure."""
        if zone.is_external:
            logger.info("Zone %s is external, navigating to %s", zone.id, zone.url)
            self.navigator.navigate(zone.url)
            return

        generation = self.surface.generation
        html = self._fetch(zone)

        if self.surface.generation != generation:
            # Closed while the fetch was in flight; the result belongs to a dead surface.
            logger.info("Discarding content for zone %s: viewer was closed", zone.id)
            return

        self.surface.write(html)
        self.surface.set_labels(zone.name, zone.id)
        self.surface.show()
        logger.info("Opened zone %s (%s)", zone.id, zone.name)

    def open_by_id(self, zone_id: Any) -> bool:
        """Open the zone with *zone_id*; unknown ids are ignored."""
        zone = self.controller.find(zone_id)
        if zone is None:
            logger.debug("No zone with id %s", zone_id)
            return False
        self.open(zone)
        return True

    def close(self) -> None:
        self.surface.hide()
        self.surface.reset()

    def open_in_new_context(self) -> None:
        """Fetch the current zone again and show it in a new top-level window."""
        zone = self.controller.find(self.surface.current_zone_id)
        if zone is None:
            return
        if zone.is_external:
            self.navigator.navigate(zone.url)
            return
        self.navigator.open_new_context(self._fetch(zone))
