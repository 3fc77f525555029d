"""
Vector-Cloud: Embeddings in Three Dimensions
Main Streamlit application.

Run with: streamlit run app.py
"""

import logging

import streamlit as st
from dotenv import load_dotenv

from vector_cloud.ui import AppState, init_session_state, inject_styles, render_header
from vector_cloud.ui.details import render_item_details
from vector_cloud.ui.docs import render_architecture_tab, render_methodology_tab
from vector_cloud.ui.main_view import render_camera_controls, render_viewer
from vector_cloud.ui.sidebar import render_sidebar
from vector_cloud.ui.styles import render_error
from vector_cloud.errors import ResourceInitError
import config


# -----------------------------------------------------------------------------
# Page Configuration
# -----------------------------------------------------------------------------

st.set_page_config(
    page_title="Vector-Cloud",
    page_icon="✨",
    layout="wide",
    initial_sidebar_state="expanded"
)

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

load_dotenv()
inject_styles()
init_session_state()


# -----------------------------------------------------------------------------
# Main Application
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    render_header()

    try:
        viz = AppState.visualizer()
    except ResourceInitError as e:
        logger.exception("Could not create the visualizer")
        render_error(f"Could not create the 3D view: {e}")
        st.stop()

    # Main tabs
    tab_explore, tab_methodology, tab_architecture = st.tabs([
        "🔍 Explore", "📚 Methodology", "🏗️ Architecture"
    ])

    with tab_explore:
        render_sidebar(viz)

        # Two-column layout for visualization and details
        col_viz, col_details = st.columns([3, 2])

        with col_viz:
            st.markdown("### Embedding Space")
            if viz.model is not None:
                render_camera_controls(viz)
            render_viewer()

        with col_details:
            render_item_details(viz)

    with tab_methodology:
        render_methodology_tab()

    with tab_architecture:
        render_architecture_tab()


if __name__ == "__main__":
    main()
