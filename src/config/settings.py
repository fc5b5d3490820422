"""Minimal configuration for the zone gallery.

Only parameters that the current codebase still uses are kept.
• ZONES_URL           – manifest of zone records (JSON array).
• COVER_URL/HTML_URL  – base addresses substituted into record templates.
• POPULARITY_URL      – best-effort hit statistics used by the popularity sort.
• CATALOG_TTL_SEC     – how long the app reuses those two payloads.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv  # type: ignore

# Load variables from .env if present (shared with other config modules)
load_dotenv()

DEFAULT_ZONES_URL = "https://cdn.jsdelivr.net/gh/gn-math/assets@main/zones.json"
DEFAULT_COVER_URL = "https://cdn.jsdelivr.net/gh/gn-math/covers@main"
DEFAULT_HTML_URL = "https://cdn.jsdelivr.net/gh/gn-math/html@main"
DEFAULT_POPULARITY_URL = (
    "https://data.jsdelivr.com/v1/stats/packages/gh/gn-math/html@main/files?period=year"
)


@dataclass(frozen=True)
class CatalogSettings:
    """Immutable container for runtime parameters."""

    # --- Remote endpoints ------------------------------------------------
    zones_url: str = os.getenv("ZONES_URL", DEFAULT_ZONES_URL)
    popularity_url: str = os.getenv("POPULARITY_URL", DEFAULT_POPULARITY_URL)

    # --- Template bases ({COVER_URL} / {HTML_URL}) -----------------------
    cover_url: str = os.getenv("COVER_URL", DEFAULT_COVER_URL)
    html_url: str = os.getenv("HTML_URL", DEFAULT_HTML_URL)

    # --- HTTP -------------------------------------------------------------
    request_timeout_sec: float = float(os.getenv("REQUEST_TIMEOUT_SEC", "15"))
    user_agent: str = os.getenv("ZONES_USER_AGENT", "zone-gallery/0.1")

    # --- Presentation -----------------------------------------------------
    default_sort: str = os.getenv("DEFAULT_SORT", "name")
    # Seconds a fetched manifest / statistics payload is reused across page loads
    catalog_ttl_sec: int = int(os.getenv("CATALOG_TTL_SEC", "300"))
    viewer_height: int = int(os.getenv("VIEWER_HEIGHT", "640"))

    def __post_init__(self):
        """Normalise base addresses so template substitution never doubles slashes."""
        # Use object.__setattr__ because dataclass is frozen
        object.__setattr__(self, "cover_url", self.cover_url.rstrip("/"))
        object.__setattr__(self, "html_url", self.html_url.rstrip("/"))


# Singleton used by most callers
SETTINGS = CatalogSettings()


def update_from_kwargs(**overrides):  # type: ignore[override]
    """Return a new CatalogSettings with supplied overrides."""

    return CatalogSettings(
        zones_url=overrides.get("zones_url", SETTINGS.zones_url),
        popularity_url=overrides.get("popularity_url", SETTINGS.popularity_url),
        cover_url=overrides.get("cover_url", SETTINGS.cover_url),
        html_url=overrides.get("html_url", SETTINGS.html_url),
        request_timeout_sec=overrides.get("request_timeout_sec", SETTINGS.request_timeout_sec),
        user_agent=overrides.get("user_agent", SETTINGS.user_agent),
        default_sort=overrides.get("default_sort", SETTINGS.default_sort),
        catalog_ttl_sec=overrides.get("catalog_ttl_sec", SETTINGS.catalog_ttl_sec),
        viewer_height=overrides.get("viewer_height", SETTINGS.viewer_height),
    )
