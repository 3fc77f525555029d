from __future__ import annotations

import pytest

from vector_cloud.visualization.loop import ManualScheduler, RenderLoop


def test_each_tick_requests_the_next_frame() -> None:
    scheduler = ManualScheduler()
    deltas: list[float] = []
    loop = RenderLoop(scheduler, deltas.append)

    loop.start()
    assert scheduler.pending == 1

    for _ in range(3):
        assert scheduler.run_pending() == 1

    assert deltas == [0.016, 0.016, 0.016]
    assert loop.frame_count == 3
    assert scheduler.pending == 1


def test_start_twice_schedules_once() -> None:
    scheduler = ManualScheduler()
    loop = RenderLoop(scheduler, lambda dt: None)

    loop.start()
    loop.start()

    assert scheduler.pending == 1


def test_stop_cancels_the_pending_frame() -> None:
    scheduler = ManualScheduler()
    deltas: list[float] = []
    loop = RenderLoop(scheduler, deltas.append)
    loop.start()
    scheduler.run_pending()

    loop.stop()

    assert not loop.is_running
    assert scheduler.pending == 0
    assert scheduler.run_pending() == 0
    assert len(deltas) == 1


def test_stop_from_inside_a_frame_ends_the_loop() -> None:
    scheduler = ManualScheduler()
    loop = RenderLoop(scheduler, lambda dt: loop.stop())

    loop.start()
    scheduler.run_pending()

    assert scheduler.pending == 0


def test_failing_frame_stops_the_loop_and_propagates() -> None:
    scheduler = ManualScheduler()

    def explode(dt: float) -> None:
        raise RuntimeError("boom")

    loop = RenderLoop(scheduler, explode)
    loop.start()

    with pytest.raises(RuntimeError):
        scheduler.run_pending()

    assert not loop.is_running
    assert scheduler.pending == 0


def test_custom_time_step() -> None:
    scheduler = ManualScheduler()
    deltas: list[float] = []
    RenderLoop(scheduler, deltas.append, time_step=0.5).start()

    scheduler.run_pending()

    assert deltas == [0.5]
