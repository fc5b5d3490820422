import logging

import streamlit as st

# UI modules
from src.ui.gallery import render_gallery
from src.ui.state import get_controller
from src.ui.viewer import render_pending_actions, render_viewer

logging.basicConfig(level=logging.INFO)

# Quiet per-request noise from the HTTP stack
logging.getLogger("urllib3").setLevel(logging.WARNING)


def main():
    st.set_page_config(
        page_title="Zones",
        page_icon="🎮",
        layout="wide",
        initial_sidebar_state="collapsed"
    )

    # Clean header styling
    st.markdown("""
    <style>
    .main-header {
        background: #f8f9fa;
        padding: 1.5rem;
        border-radius: 8px;
        margin-bottom: 1.5rem;
        border-left: 4px solid #667eea;
    }
    .main-header h1 {
        color: #333;
        margin: 0;
        font-size: 2rem;
        font-weight: 600;
    }
    .main-header p {
        color: #666;
        margin: 0.5rem 0 0 0;
        font-size: 1rem;
    }
    </style>
    """, unsafe_allow_html=True)

    st.markdown("""
    <div class="main-header">
        <h1>🎮 Zones</h1>
        <p>Pick a game and play it right here</p>
    </div>
    """, unsafe_allow_html=True)

    # Loads the catalog (and honours ?id=) on the session's first run
    get_controller()

    render_pending_actions()
    render_viewer()
    render_gallery()


if __name__ == "__main__":
    main()
