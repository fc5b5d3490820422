"""Streamlit UI for the searchable / sortable zone gallery."""
from __future__ import annotations

import html

import streamlit as st

from src.helpers import gallery as gv
from src.helpers.ordering import SortKey
from src.ui import state

GRID_COLUMNS = 5


def _cover_link(row: gv.GalleryRow) -> str:
    """Cover image that reopens the page on ``?id=``: the whole-row activation."""
    return (
        f'<a href="{html.escape(row.link)}" target="_self" title="{html.escape(row.zone.name)}">'
        f'<img src="{html.escape(row.cover_src)}" alt="{html.escape(row.zone.name)}" '
        'style="width:100%;aspect-ratio:1/1;object-fit:cover;border-radius:8px;" loading="lazy"/>'
        "</a>"
    )


def _render_row(row: gv.GalleryRow, key: str | None = None) -> None:
    st.markdown(_cover_link(row), unsafe_allow_html=True)
    # The button runs its own callback; it is not nested in the link, so one
    # click opens the zone exactly once.
    st.button(
        row.zone.name,
        key=key or row.key,
        on_click=state.open_zone_by_id,
        args=(row.zone.id,),
        use_container_width=True,
    )


def _render_featured(row: gv.GalleryRow | None) -> None:
    if row is None:
        return
    st.markdown("#### 🎮 Game of the Day")
    col, _ = st.columns([1, GRID_COLUMNS - 1])
    with col:
        _render_row(row, key=f"featured_{row.zone.id}")


def _render_controls(controller) -> str:
    col_search, col_sort = st.columns([3, 1])
    with col_search:
        query = st.text_input(
            "Search zones",
            key=state.QUERY_KEY,
            placeholder="Search by name...",
            label_visibility="collapsed",
        )
    with col_sort:
        options = list(SortKey)
        selected = st.selectbox(
            "Sort by",
            options,
            index=options.index(controller.sort_key),
            format_func=lambda k: k.label,
            key=state.SORT_KEY,
            label_visibility="collapsed",
        )
    if selected != controller.sort_key:
        controller.sort(selected)
    return query


def render_gallery() -> None:
    """Render search, sort, the featured card and the zone grid."""
    controller = state.get_controller()

    query = _render_controls(controller)
    view = gv.build_view(controller, query)

    if view.status == gv.STATUS_ERROR:
        st.error(view.message)
        return

    _render_featured(view.featured)

    if view.status == gv.STATUS_EMPTY:
        st.info(view.message)
        return

    st.caption(view.count_label)

    for start in range(0, len(view.rows), GRID_COLUMNS):
        cols = st.columns(GRID_COLUMNS)
        for col, row in zip(cols, view.rows[start:start + GRID_COLUMNS]):
            with col:
                _render_row(row)
