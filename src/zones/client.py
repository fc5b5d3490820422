"""HTTP access for the zone manifest, statistics and zone content.

All failures are mapped onto :mod:`src.zones.errors` so callers only ever
handle the catalog's own taxonomy:

- transport failure          → ``NetworkError``
- HTTP status >= 400         → ``FetchError`` (carries ``status_code``)
- undecodable JSON body      → ``ParseError``
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from src.config.settings import SETTINGS
from src.zones.errors import FetchError, NetworkError, ParseError

logger = logging.getLogger(__name__)


class ZoneClient:
    """Thin wrapper around a ``requests.Session``."""

    def __init__(
        self,
        timeout: float | None = None,
        user_agent: str | None = None,
        session: requests.Session | None = None,
    ):
        self.timeout = timeout if timeout is not None else SETTINGS.request_timeout_sec
        self.user_agent = user_agent or SETTINGS.user_agent
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": self.user_agent})

    @classmethod
    def from_settings(cls, settings) -> "ZoneClient":
        return cls(timeout=settings.request_timeout_sec, user_agent=settings.user_agent)

    def _get(self, url: str) -> requests.Response:
        logger.info("GET %s", url)
        try:
            response = self._session.get(url, timeout=self.timeout)
        except requests.RequestException as exc:
            logger.warning(f"Request to {url} failed: {exc}")
            raise NetworkError(str(exc)) from exc

        if not response.ok:
            logger.warning(f"{url} answered {response.status_code}")
            raise FetchError(response.status_code, url)
        return response

    def get_json(self, url: str) -> Any:
        """Fetch *url* and decode the body as JSON."""
        response = self._get(url)
        try:
            return response.json()
        except ValueError as exc:
            raise ParseError(f"Invalid JSON from {url}: {exc}") from exc

    def get_text(self, url: str) -> str:
        """Fetch *url* and return the body as text."""
        return self._get(url).text

    def close(self) -> None:
        self._session.close()
