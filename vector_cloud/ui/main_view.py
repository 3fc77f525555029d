"""Main view UI components (rendered point cloud and camera controls)."""

import logging
from typing import Any, Optional

import streamlit as st
from PIL import Image
from streamlit_image_coordinates import streamlit_image_coordinates

from vector_cloud.errors import VisualizerError
from vector_cloud.ui.state import AppState
from vector_cloud.ui.styles import render_error, render_info
from vector_cloud.visualization.events import (
    POINTER_DOWN,
    POINTER_MOVE,
    POINTER_UP,
    WHEEL,
    PointerEvent,
)
from vector_cloud.visualizer import EmbeddingVisualizer
import config

logger = logging.getLogger(__name__)


def render_camera_controls(viz: EmbeddingVisualizer) -> None:
    """Zoom and reset buttons; dragging on the image rotates."""
    col1, col2, col3 = st.columns(3)

    with col1:
        if st.button("Zoom In", use_container_width=True):
            _dispatch_wheel(viz, -1)
    with col2:
        if st.button("Zoom Out", use_container_width=True):
            _dispatch_wheel(viz, 1)
    with col3:
        if st.button("Reset View", use_container_width=True) and viz.controls is not None:
            viz.controls.reset()


def _dispatch_wheel(viz: EmbeddingVisualizer, direction: int) -> None:
    for _ in range(config.ZOOM_STEP_NOTCHES):
        viz.surface.dispatch(PointerEvent(WHEEL, delta_y=direction))


@st.fragment(run_every=config.FRAME_INTERVAL)
def render_viewer() -> None:
    """Advance the render loop by one frame and show it."""
    viz = AppState.visualizer()
    if viz.model is None:
        render_info("Enter some strings in the sidebar and click <b>Generate Embeddings</b>.")
        return

    try:
        AppState.scheduler().run_pending()
    except VisualizerError as e:
        logger.exception("Rendering failed")
        render_error(f"Rendering failed: {e}")
        AppState.discard_visualizer()
        return

    frame = viz.last_frame
    if frame is None:
        return

    value = streamlit_image_coordinates(
        Image.fromarray(frame),
        key="viewer_image",
        click_and_drag=True,
    )
    label_before = viz.display_label
    if _dispatch_pointer(viz, value) and viz.display_label != label_before:
        # Label panel lives outside this fragment
        st.rerun()

    st.caption("Tip: click a point to select it, drag to rotate, use the buttons to zoom")


def _dispatch_pointer(viz: EmbeddingVisualizer, value: Optional[dict[str, Any]]) -> bool:
    """
    Turn an image-coordinates result into pointer events.

    A click becomes a tap (move, window click, hover dropped); a drag
    becomes down/move/up on the canvas so the orbit controls rotate.

    Returns:
        True if the value was new and events were dispatched
    """
    if not value or value == st.session_state.last_pointer:
        return False
    st.session_state.last_pointer = value

    scale_x = viz.surface.width / value.get("width", viz.surface.width)
    scale_y = viz.surface.height / value.get("height", viz.surface.height)

    if "x1" in value:
        x1, y1 = value["x1"] * scale_x, value["y1"] * scale_y
        x2, y2 = value["x2"] * scale_x, value["y2"] * scale_y
        if (x1, y1) != (x2, y2):
            viz.surface.dispatch(PointerEvent(POINTER_DOWN, x1, y1))
            viz.surface.dispatch(PointerEvent(POINTER_MOVE, x2, y2))
            viz.surface.dispatch(PointerEvent(POINTER_UP, x2, y2))
            viz.clear_hover()
            return True
        x, y = x1, y1
    else:
        x, y = value["x"] * scale_x, value["y"] * scale_y

    viz.tap(x, y)
    return True
