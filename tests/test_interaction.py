from __future__ import annotations

import numpy as np
import pytest

from vector_cloud.core.model import NO_INDEX, PointCloudModel
from vector_cloud.interaction.controller import InteractionController
from vector_cloud.interaction.picking import PickingEngine
from vector_cloud.visualization.camera import PerspectiveCamera, project_to_screen
from vector_cloud.visualization.events import (
    CLICK,
    POINTER_MOVE,
    EventTarget,
    PointerEvent,
    Surface,
)
from vector_cloud.visualization.shader import HighlightShader

POSITIONS = np.array([
    [-1.0, -1.0, 1.0],
    [1.0, 0.0, -1.0],
    [0.0, 1.0, 1.0],
])


class _Harness:
    def __init__(self) -> None:
        self.surface = Surface(400, 300)
        self.window = EventTarget()
        self.snapshot = PerspectiveCamera(aspect=400 / 300).snapshot(400, 300)
        self.labels: list[str] = []
        self.model = PointCloudModel(labels=("alpha", "beta", "gamma"), positions=POSITIONS)
        self.shader = HighlightShader()
        self.controller = InteractionController(
            self.surface,
            PickingEngine(),
            lambda: self.snapshot,
            on_label=self.labels.append,
        )
        self.controller.attach(self.model, self.shader)
        self.controller.bind(self.window)

    def pixel_of(self, index: int) -> tuple[float, float]:
        x, y = project_to_screen(POSITIONS[index:index + 1], self.snapshot).pixels[0]
        return float(x), float(y)

    def move(self, x: float, y: float) -> None:
        self.surface.dispatch(PointerEvent(POINTER_MOVE, x, y))

    def click(self, x: float, y: float) -> None:
        self.window.dispatch(PointerEvent(CLICK, x, y))


@pytest.fixture
def harness() -> _Harness:
    return _Harness()


def test_hover_updates_state_uniform_and_label(harness) -> None:
    harness.move(*harness.pixel_of(1))

    assert harness.model.highlight.hovered == 1
    assert harness.shader.uniforms["hovered_index"].value == 1.0
    assert harness.labels == ["beta"]


def test_hover_label_only_fires_on_change(harness) -> None:
    x, y = harness.pixel_of(1)
    harness.move(x, y)
    harness.move(x + 1, y)

    assert harness.labels == ["beta"]

    harness.move(1, 1)
    assert harness.model.highlight.hovered == NO_INDEX
    assert harness.labels == ["beta", ""]


def test_click_selects_and_miss_clears(harness) -> None:
    harness.click(*harness.pixel_of(2))

    assert harness.model.highlight.selected == 2
    assert harness.shader.uniforms["selected_index"].value == 2.0
    assert harness.labels[-1] == "gamma"

    harness.click(1, 1)

    assert harness.model.highlight.selected == NO_INDEX
    assert harness.shader.uniforms["selected_index"].value == -1.0


def test_hover_wins_over_selection_for_the_label(harness) -> None:
    harness.click(*harness.pixel_of(0))
    harness.move(*harness.pixel_of(2))
    assert harness.labels[-1] == "gamma"

    harness.move(1, 1)
    assert harness.labels[-1] == "alpha"


def test_clicking_does_not_clear_hover(harness) -> None:
    harness.move(*harness.pixel_of(1))
    harness.click(1, 1)

    assert harness.model.highlight.hovered == 1


def test_select_by_index(harness) -> None:
    harness.controller.select(1)
    assert harness.model.highlight.selected == 1

    with pytest.raises(IndexError):
        harness.controller.select(3)
    assert harness.model.highlight.selected == 1


def test_events_without_a_batch_are_ignored(harness) -> None:
    harness.controller.attach(None, None)

    harness.move(*harness.pixel_of(1))
    harness.click(*harness.pixel_of(1))

    assert harness.labels == []


def test_unbind_removes_listeners(harness) -> None:
    harness.controller.unbind()

    assert harness.surface.listener_count() == 0
    assert harness.window.listener_count() == 0


def test_clear_hover_keeps_the_selection(harness) -> None:
    harness.click(*harness.pixel_of(0))
    harness.move(*harness.pixel_of(1))

    harness.controller.clear_hover()

    assert harness.model.highlight.hovered == NO_INDEX
    assert harness.model.highlight.selected == 0
    assert harness.shader.uniforms["hovered_index"].value == -1.0
    assert harness.labels[-1] == "alpha"

    harness.controller.clear_hover()
    assert harness.labels.count("alpha") == 2
