from __future__ import annotations

import numpy as np
import pytest

from vector_cloud.visualization.camera import PerspectiveCamera
from vector_cloud.visualization.controls import OrbitControls
from vector_cloud.visualization.events import (
    POINTER_DOWN,
    POINTER_MOVE,
    POINTER_UP,
    WHEEL,
    PointerEvent,
    Surface,
)

START_DISTANCE = float(np.sqrt(75.0))


def _controls(**kwargs) -> tuple[OrbitControls, Surface]:
    surface = Surface(400, 300)
    controls = OrbitControls(PerspectiveCamera(), **kwargs)
    controls.connect(surface)
    return controls, surface


def test_wheel_zooms_in_and_out() -> None:
    controls, surface = _controls()

    surface.dispatch(PointerEvent(WHEEL, delta_y=-1))
    controls.update()
    assert controls.distance == pytest.approx(START_DISTANCE * 0.95)

    surface.dispatch(PointerEvent(WHEEL, delta_y=1))
    controls.update()
    assert controls.distance == pytest.approx(START_DISTANCE)


def test_zoom_is_clamped() -> None:
    controls, surface = _controls(max_distance=10.0)

    for _ in range(50):
        surface.dispatch(PointerEvent(WHEEL, delta_y=1))
    controls.update()

    assert controls.distance == pytest.approx(10.0)


def test_drag_rotates_around_the_target() -> None:
    controls, surface = _controls(enable_damping=False)
    before = controls.camera.position.copy()

    surface.dispatch(PointerEvent(POINTER_DOWN, 200, 150))
    surface.dispatch(PointerEvent(POINTER_MOVE, 260, 150))
    surface.dispatch(PointerEvent(POINTER_UP, 260, 150))

    assert controls.update()
    assert not np.allclose(controls.camera.position, before)
    assert controls.distance == pytest.approx(START_DISTANCE)
    # Horizontal drag keeps the height
    assert controls.camera.position[1] == pytest.approx(before[1])


def test_move_without_button_does_not_rotate() -> None:
    controls, surface = _controls()

    surface.dispatch(PointerEvent(POINTER_MOVE, 260, 150))

    assert not controls.update()


def test_damping_spreads_rotation_over_frames() -> None:
    controls, surface = _controls()
    surface.dispatch(PointerEvent(POINTER_DOWN, 200, 150))
    surface.dispatch(PointerEvent(POINTER_MOVE, 200, 200))
    surface.dispatch(PointerEvent(POINTER_UP, 200, 200))

    first = controls.camera.position.copy()
    controls.update()
    second = controls.camera.position.copy()
    controls.update()
    third = controls.camera.position.copy()

    step1 = np.linalg.norm(second - first)
    step2 = np.linalg.norm(third - second)
    assert step1 > 0
    assert 0 < step2 < step1


def test_reset_restores_the_start_view() -> None:
    controls, surface = _controls(enable_damping=False)
    surface.dispatch(PointerEvent(WHEEL, delta_y=-1))
    surface.dispatch(PointerEvent(POINTER_DOWN, 0, 0))
    surface.dispatch(PointerEvent(POINTER_MOVE, 80, 40))
    controls.update()

    controls.reset()
    controls.update()

    assert np.allclose(controls.camera.position, [5.0, 5.0, 5.0])


def test_dispose_removes_listeners() -> None:
    controls, surface = _controls()
    assert surface.listener_count() == 4

    controls.dispose()

    assert surface.listener_count() == 0
