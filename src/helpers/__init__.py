"""Common helper utilities used across the Streamlit app.

The helpers package is meant to hold the catalog business-logic (loading,
ordering, the gallery model and the zone loader) so it can be called from the
Streamlit UI, from ``fetch_zones.py`` or from tests without a live page.
"""
