from __future__ import annotations

import pytest
from streamlit.testing.v1 import AppTest


def _button(at: AppTest, label: str):
    return next(button for button in at.button if button.label == label)


@pytest.fixture
def app() -> AppTest:
    at = AppTest.from_file("../app.py", default_timeout=60)
    at.run()
    at.text_area[0].input("cat\ndog\ncar")
    at.radio[0].set_value("hashing")
    at.run()
    _button(at, "Generate Embeddings").click()
    at.run()
    assert not at.exception
    return at


def test_generate_loads_the_batch(app) -> None:
    viz = app.session_state["visualizer"]

    assert viz.model is not None
    assert viz.model.labels == ("cat", "dog", "car")


def test_browse_pick_does_not_override_later_selections(app) -> None:
    viz = app.session_state["visualizer"]
    key = f"item_selector_{app.session_state['batch_id']}"

    app.selectbox(key=key).set_value(2)
    app.run()
    assert viz.model.highlight.selected == 1
    assert app.session_state["display_label"] == "dog"

    _button(app, "Clear Selection").click()
    app.run()
    assert viz.model.highlight.selected == -1
    assert app.session_state["display_label"] == ""
    assert app.selectbox(key=key).value == 0

    # A canvas click between reruns
    viz.select(0)
    app.run()
    assert viz.model.highlight.selected == 0
    assert app.selectbox(key=key).value == 1
