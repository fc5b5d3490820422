"""Zone catalog data access.

This package separates the wire-level concerns (HTTP, manifest and statistics
payloads, error taxonomy) from the Streamlit app. Import from:

    from src.zones.client import ZoneClient
    from src.zones.models import ZoneRecord, PopularityIndex
    from src.zones.errors import FetchError, NetworkError, ParseError
"""

__all__ = []
