"""Sidebar UI components for Vector-Cloud."""

import logging
import os

import streamlit as st

from vector_cloud.core.model import NO_INDEX
from vector_cloud.embedders import EmbeddingError, get_embedder
from vector_cloud.errors import VisualizerError
from vector_cloud.ui.state import AppState
from vector_cloud.ui.styles import render_error, render_warning
from vector_cloud.visualizer import EmbeddingVisualizer
import config

logger = logging.getLogger(__name__)

MAX_BROWSE_ITEMS = 500


def render_sidebar(viz: EmbeddingVisualizer) -> None:
    """Render the complete sidebar."""
    with st.sidebar:
        render_input_form(viz)
        st.markdown("---")
        render_batch_info(viz)
        st.markdown("---")
        render_browse_items(viz)


def parse_input_lines(text: str) -> list[str]:
    """One item per non-blank line, surrounding whitespace removed."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def render_input_form(viz: EmbeddingVisualizer) -> None:
    """Render the text/embedder/key form and the generate button."""
    st.markdown("### Input")

    text = st.text_area(
        "Strings",
        value=st.session_state.input_text,
        placeholder="Enter strings (one per line)",
        height=200,
        label_visibility="collapsed",
    )
    st.session_state.input_text = text

    keys = list(config.AVAILABLE_EMBEDDERS.keys())
    current = st.session_state.embedder_name
    embedder_name = st.radio(
        "Embedder:",
        keys,
        format_func=lambda k: config.AVAILABLE_EMBEDDERS[k]["label"],
        index=keys.index(current) if current in keys else 0,
        help="Where the vectors come from",
    )
    st.session_state.embedder_name = embedder_name
    st.caption(config.AVAILABLE_EMBEDDERS[embedder_name]["description"])

    api_key = None
    if config.AVAILABLE_EMBEDDERS[embedder_name]["needs_api_key"]:
        api_key = st.text_input(
            "API key",
            type="password",
            placeholder="Enter OpenAI API Key",
            help="Falls back to OPENAI_API_KEY from the environment",
        )
        if not api_key and not os.getenv("OPENAI_API_KEY"):
            render_warning("No API key entered and OPENAI_API_KEY is not set")

    if st.button("Generate Embeddings", type="primary", use_container_width=True):
        _generate(viz, parse_input_lines(text), embedder_name, api_key)

    if AppState.has_error():
        render_error(st.session_state.last_error)


def _generate(
    viz: EmbeddingVisualizer,
    labels: list[str],
    embedder_name: str,
    api_key: str | None,
) -> None:
    """Fetch vectors for the labels and load them into the visualizer."""
    AppState.clear_error()
    kwargs = {"api_key": api_key} if api_key else {}

    try:
        with st.spinner("Loading..."):
            embedder = get_embedder(embedder_name, **kwargs)
            vectors = embedder.embed_labels(labels)
    except (EmbeddingError, ValueError) as e:
        logger.exception("Embedding request failed")
        AppState.set_error(f"Error fetching embeddings: {e}")
        return

    try:
        viz.load_batch(labels, vectors)
    except VisualizerError as e:
        logger.warning(f"Batch rejected: {e}")
        AppState.set_error(str(e))
        return

    AppState.set_batch()
    st.rerun()


def render_batch_info(viz: EmbeddingVisualizer) -> None:
    """Render batch summary and the clear button."""
    st.markdown("### Batch")
    model = viz.model
    if model is None:
        st.caption("No embeddings loaded")
        return

    st.markdown(f'<span class="vc-badge">{len(model):,} items</span>', unsafe_allow_html=True)
    if st.button("Clear", use_container_width=True):
        viz.clear()
        AppState.clear_batch()
        st.rerun()


def render_browse_items(viz: EmbeddingVisualizer) -> None:
    """Render item browser dropdown that pins a selection."""
    model = viz.model
    if model is None:
        return

    st.markdown("### Browse Items")
    if len(model) > MAX_BROWSE_ITEMS:
        st.caption(f"Showing first {MAX_BROWSE_ITEMS} of {len(model):,} items")

    labels = model.labels[:MAX_BROWSE_ITEMS]
    options = ["-- Select an item --"] + [_format_item_label(label) for label in labels]

    key = f"item_selector_{st.session_state.batch_id}"
    # Follow selections made elsewhere (canvas click, Clear Selection)
    selected = model.highlight.selected
    st.session_state[key] = selected + 1 if 0 <= selected < len(labels) else 0

    st.selectbox(
        "Select item:",
        range(len(options)),
        format_func=lambda x: options[x],
        key=key,
        on_change=_on_browse_change,
        args=(viz, key),
    )


def _on_browse_change(viz: EmbeddingVisualizer, key: str) -> None:
    """Pin the item picked in the dropdown; the placeholder clears it."""
    choice = st.session_state[key]
    viz.select(choice - 1 if choice > 0 else NO_INDEX)


def _format_item_label(label: str) -> str:
    """Truncate a label for the dropdown."""
    return label[:50] + ("..." if len(label) > 50 else "")
