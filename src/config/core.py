import argparse
import os
from dataclasses import dataclass

from dotenv import load_dotenv  # type: ignore

from src.config.settings import SETTINGS, CatalogSettings, update_from_kwargs

# Load .env if present
load_dotenv()


@dataclass
class CliSettings:
    zones_url: str
    popularity_url: str
    cover_url: str
    html_url: str
    timeout: float

    def to_catalog_settings(self) -> CatalogSettings:
        return update_from_kwargs(
            zones_url=self.zones_url,
            popularity_url=self.popularity_url,
            cover_url=self.cover_url,
            html_url=self.html_url,
            request_timeout_sec=self.timeout,
        )


def parse_args(
    argv: list[str] | None = None,
    parents: list[argparse.ArgumentParser] | None = None,
) -> CliSettings:
    # Script-specific parsers passed as parents show up in --help as well
    parser = argparse.ArgumentParser(description="Zone catalog configuration", parents=parents or [])
    parser.add_argument("--zones-url", dest="zones_url", help="Zone manifest address", default=os.getenv("ZONES_URL", SETTINGS.zones_url))
    parser.add_argument(
        "--popularity-url",
        dest="popularity_url",
        help="Hit statistics address used for popularity ordering",
        default=os.getenv("POPULARITY_URL", SETTINGS.popularity_url),
    )
    parser.add_argument(
        "--cover-url",
        dest="cover_url",
        help="Base address substituted for {COVER_URL}",
        default=os.getenv("COVER_URL", SETTINGS.cover_url),
    )
    parser.add_argument(
        "--html-url",
        dest="html_url",
        help="Base address substituted for {HTML_URL}",
        default=os.getenv("HTML_URL", SETTINGS.html_url),
    )
    parser.add_argument(
        "--timeout",
        dest="timeout",
        type=float,
        help="HTTP timeout in seconds",
        default=float(os.getenv("REQUEST_TIMEOUT_SEC", SETTINGS.request_timeout_sec)),
    )

    # Use parse_known_args so that scripts can define additional CLI flags
    # (e.g., --sort) without config.core failing due to unknown args.
    args = parser.parse_known_args(argv)[0]

    if not args.zones_url:
        parser.error("Provide --zones-url or set ZONES_URL in environment.")

    return CliSettings(
        zones_url=args.zones_url,
        popularity_url=args.popularity_url,
        cover_url=args.cover_url,
        html_url=args.html_url,
        timeout=args.timeout,
    )
