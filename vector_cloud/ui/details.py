"""Item details panel components."""

import streamlit as st

from vector_cloud.visualization.charts import VarianceChartBuilder
from vector_cloud.visualizer import EmbeddingVisualizer


def render_item_details(viz: EmbeddingVisualizer) -> None:
    """Render the hovered/selected item, projection quality and item table."""
    model = viz.model
    if model is None:
        render_getting_started()
        return

    render_label_card(st.session_state.display_label or viz.display_label)

    if model.highlight.has_selection:
        if st.button("Clear Selection", use_container_width=True):
            viz.clear_selection()
            st.rerun()

    if model.explained_variance_ratio is not None:
        st.markdown("### Projection Quality")
        fig = VarianceChartBuilder().build(model.explained_variance_ratio)
        st.plotly_chart(fig, use_container_width=True, key="variance_chart")

    with st.expander("Items"):
        st.dataframe(
            model.to_frame().round(3),
            hide_index=True,
            use_container_width=True,
        )


def render_label_card(label: str) -> None:
    """Render the currently hovered or selected string."""
    if not label:
        st.caption("Click a point to see which string it represents.")
        return

    st.markdown(f"""
    <div class="vc-label-card">
        <div class="vc-label-caption">Selected/Hovered String</div>
        <div class="vc-label-text">{_escape_html(label)}</div>
    </div>
    """, unsafe_allow_html=True)


def render_getting_started() -> None:
    """Render getting started guide."""
    st.markdown("""
    ### Getting Started

    **Input:** Type one string per line in the sidebar

    **Embed:** Pick OpenAI (needs an API key) or the offline embedder and click **Generate Embeddings**

    **Explore:** Drag on the cloud to rotate, use the buttons to zoom

    **Select:** Click a point (or pick one from **Browse Items**) to pin it

    Each point is one string, placed by the three directions along which the
    embeddings vary most. Strings with similar meaning end up close together.
    """)


def _escape_html(text: str) -> str:
    """Escape HTML special characters."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#39;")
    )
