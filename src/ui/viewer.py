"""Streamlit UI for the zone viewer.

Zone markup is rendered with ``components.html``, which places it in its own
iframe so a zone's scripts and styles never touch the gallery page.
"""
from __future__ import annotations

import json

import streamlit as st
import streamlit.components.v1 as components

from src.ui import state

# Room for the fallback button shown when the browser blocks the pop-up
POPUP_HEIGHT = 56


def _js_string(value: str) -> str:
    # "</script>" inside the payload must not close our own script tag
    return json.dumps(value).replace("</", "<\\/")


def _redirect_script(url: str) -> str:
    return f"<script>window.parent.location.href = {_js_string(url)};</script>"


def _popup_script(markup: str) -> str:
    """Open *markup* in a new window, with a button for when pop-ups are blocked.

    The automatic attempt runs outside the user's click, so browsers may
    refuse it; clicking the button is a fresh gesture they allow.
    """
    return (
        '<button id="zone-popup" style="display:none;padding:6px 14px;cursor:pointer;">'
        "Open zone in new tab</button>"
        '<span id="zone-popup-done" style="display:none;font:14px sans-serif;">'
        "Opened in a new tab.</span>"
        "<script>"
        f"const markup = {_js_string(markup)};"
        "function openZone() {"
        '  const w = window.open("about:blank", "_blank");'
        "  if (!w) return false;"
        "  w.document.open();"
        "  w.document.write(markup);"
        "  w.document.close();"
        "  return true;"
        "}"
        'const button = document.getElementById("zone-popup");'
        'const done = document.getElementById("zone-popup-done");'
        "function opened() {"
        '  button.style.display = "none";'
        '  done.style.display = "inline";'
        "}"
        "button.onclick = () => { if (openZone()) opened(); };"
        'if (openZone()) { opened(); } else { button.style.display = "inline-block"; }'
        "</script>"
    )


@st.dialog("Zone unavailable")
def _alert(message: str) -> None:
    st.error(message)
    if st.button("OK", key="zone_alert_ok"):
        st.rerun()


def render_pending_actions() -> None:
    """Perform navigation / pop-up requests queued by the zone loader."""
    navigator = state.get_navigator()

    redirect = navigator.pop_redirect()
    if redirect:
        components.html(_redirect_script(redirect), height=0)
        st.info("Opening external zone...")
        st.link_button("Continue", redirect)
        # Leaving the page: nothing below should render
        st.stop()

    popup = navigator.pop_popup()
    if popup:
        components.html(_popup_script(popup), height=POPUP_HEIGHT)

    message = state.pop_alert()
    if message:
        _alert(message)


def render_viewer() -> None:
    """Show the open zone (if any) with its labels and controls."""
    surface = state.get_surface()
    if not surface.visible or surface.html is None:
        return

    col_title, col_new, col_close = st.columns([6, 1, 1])
    with col_title:
        st.markdown(f"### {surface.name}")
        st.caption(f"ID: `{surface.current_zone_id}`")
    with col_new:
        st.button(
            "↗️ New tab",
            key="zone_new_context",
            on_click=state.open_zone_in_new_context,
            help="Open this zone in a separate window",
        )
    with col_close:
        st.button("✖️ Close", key="zone_close", on_click=state.close_zone)

    height = state.get_controller().settings.viewer_height
    components.html(surface.html, height=height, scrolling=True)
    st.divider()
