"""
Theme constants and CSS injection for Vector-Cloud.
The rendered frame itself is light; the page chrome around it is dark.
"""

import streamlit as st
from dataclasses import dataclass


@dataclass(frozen=True)
class Theme:
    """Page colors. The cloud's own colors come from the render device."""
    accent: str = "#667eea"
    accent_alt: str = "#764ba2"
    highlight: str = "#facc15"  # matches the shader's highlight color

    page_bg: str = "#111827"
    panel_bg: str = "rgba(31, 41, 55, 0.85)"
    sidebar_bg: str = "rgba(17, 24, 39, 0.96)"

    text: str = "#e5e7eb"
    text_dim: str = "#9ca3af"

    outline: str = "rgba(102, 126, 234, 0.35)"

    error: str = "239, 68, 68"
    warning: str = "245, 158, 11"
    info: str = "102, 126, 234"


THEME = Theme()


def _message_rule(name: str, rgb: str, text_color: str) -> str:
    return f"""
    .vc-{name} {{
        background: rgba({rgb}, 0.1);
        border: 1px solid rgba({rgb}, 0.35);
        border-radius: 8px;
        padding: 0.75rem 1rem;
        margin: 0.5rem 0;
        color: {text_color};
        font-size: 0.88rem;
    }}
"""


def get_css() -> str:
    """Build the stylesheet from THEME."""
    gradient = f"linear-gradient(90deg, {THEME.accent} 0%, {THEME.accent_alt} 100%)"
    messages = "".join([
        _message_rule("error", THEME.error, "#fca5a5"),
        _message_rule("warning", THEME.warning, "#fcd34d"),
        _message_rule("info", THEME.info, THEME.text),
    ])
    return f"""
<style>
    [data-testid="stAppViewContainer"] {{
        background: {THEME.page_bg};
    }}

    [data-testid="stSidebar"] {{
        background: {THEME.sidebar_bg};
    }}

    .vc-title {{
        font-family: 'JetBrains Mono', 'Fira Code', monospace;
        background: {gradient};
        -webkit-background-clip: text;
        -webkit-text-fill-color: transparent;
        background-clip: text;
        font-size: 2.4rem;
        font-weight: 700;
        margin-bottom: 0;
    }}

    .vc-tagline {{
        color: {THEME.text_dim};
        margin-top: 0.2rem;
    }}

    /* Hovered/selected string */
    .vc-label-card {{
        background: {THEME.panel_bg};
        border: 1px solid {THEME.outline};
        border-left: 4px solid {THEME.highlight};
        border-radius: 10px;
        padding: 1rem 1.25rem;
        margin: 0.75rem 0;
    }}

    .vc-label-caption {{
        color: {THEME.text_dim};
        font-size: 0.8rem;
        text-transform: uppercase;
        letter-spacing: 0.04em;
        margin-bottom: 0.35rem;
    }}

    .vc-label-text {{
        color: {THEME.text};
        font-size: 1.05rem;
        white-space: pre-wrap;
        word-break: break-word;
        max-height: 240px;
        overflow-y: auto;
    }}

    .vc-badge {{
        background: {gradient};
        color: white;
        padding: 0.2rem 0.7rem;
        border-radius: 999px;
        font-size: 0.8rem;
        font-weight: 600;
        display: inline-block;
    }}
{messages}
    /* Rendered frame */
    [data-testid="stImage"] img, iframe[title*="image_coordinates"] {{
        border: 1px solid {THEME.outline};
        border-radius: 8px;
    }}

    [data-baseweb="tab"][aria-selected="true"] {{
        background: {gradient};
        color: white;
        border-radius: 8px 8px 0 0;
    }}

    .stButton > button[kind="primary"] {{
        background: {gradient};
        border: none;
    }}
</style>
"""


def inject_styles() -> None:
    """Inject CSS styles into the Streamlit app."""
    st.markdown(get_css(), unsafe_allow_html=True)


def render_header() -> None:
    st.markdown('<h1 class="vc-title">Vector-Cloud</h1>', unsafe_allow_html=True)
    st.markdown('<p class="vc-tagline">Embeddings in three dimensions</p>', unsafe_allow_html=True)


def render_error(message: str) -> None:
    """Render a styled error message."""
    st.markdown(f'<div class="vc-error">{message}</div>', unsafe_allow_html=True)


def render_warning(message: str) -> None:
    st.markdown(f'<div class="vc-warning">{message}</div>', unsafe_allow_html=True)


def render_info(message: str) -> None:
    st.markdown(f'<div class="vc-info">{message}</div>', unsafe_allow_html=True)
