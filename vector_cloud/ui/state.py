"""
Centralized session state management for Vector-Cloud.
Provides typed accessors and clear state transition methods.
"""

from dataclasses import dataclass
from typing import Optional, Any
import streamlit as st

from vector_cloud.visualization.events import EventTarget, Surface
from vector_cloud.visualization.loop import ManualScheduler
from vector_cloud.visualizer import EmbeddingVisualizer
import config


@dataclass
class StateDefaults:
    """Default values for all session state variables."""
    input_text: str = ""
    embedder_name: str = config.DEFAULT_EMBEDDER
    batch_id: int = 0
    display_label: str = ""
    last_pointer: Optional[Any] = None
    last_error: Optional[str] = None


class AppState:
    """
    Wrapper around Streamlit session state with type hints and defaults.
    Provides clear API for state transitions.
    """

    @classmethod
    def init(cls) -> None:
        """Initialize all session state with defaults."""
        defaults = StateDefaults()
        for field_name in defaults.__dataclass_fields__:
            if field_name not in st.session_state:
                st.session_state[field_name] = getattr(defaults, field_name)

    @classmethod
    def visualizer(cls) -> EmbeddingVisualizer:
        """The session's single visualizer, created and mounted on first use."""
        if st.session_state.get("visualizer") is None:
            scheduler = ManualScheduler()
            viz = EmbeddingVisualizer(
                Surface(config.VIEWPORT_WIDTH, config.VIEWPORT_HEIGHT),
                EventTarget(),
                scheduler,
                on_label=cls.set_display_label,
            )
            viz.mount()
            st.session_state.scheduler = scheduler
            st.session_state.visualizer = viz
        return st.session_state.visualizer

    @staticmethod
    def scheduler() -> ManualScheduler:
        return st.session_state.scheduler

    @classmethod
    def discard_visualizer(cls) -> None:
        """Tear down the visualizer; the next visualizer() call builds a fresh one."""
        viz = st.session_state.get("visualizer")
        if viz is not None:
            viz.teardown()
        st.session_state.visualizer = None
        st.session_state.scheduler = None
        st.session_state.display_label = ""
        st.session_state.last_pointer = None

    @classmethod
    def set_batch(cls) -> None:
        """Record a freshly loaded batch and clear transient state."""
        st.session_state.batch_id += 1
        st.session_state.last_pointer = None
        st.session_state.last_error = None

    @classmethod
    def clear_batch(cls) -> None:
        st.session_state.last_pointer = None
        st.session_state.display_label = ""

    @staticmethod
    def set_display_label(label: str) -> None:
        st.session_state.display_label = label

    @classmethod
    def set_error(cls, message: str) -> None:
        """Record an error for display."""
        st.session_state.last_error = message

    @classmethod
    def clear_error(cls) -> None:
        """Clear any recorded error."""
        st.session_state.last_error = None

    @staticmethod
    def has_error() -> bool:
        """Check if there's an error to display."""
        return st.session_state.get("last_error") is not None


def init_session_state() -> None:
    """Convenience function to initialize session state."""
    AppState.init()
