from __future__ import annotations

import numpy as np
import pytest

from vector_cloud.visualization.events import EventTarget, Surface
from vector_cloud.visualization.loop import ManualScheduler
from vector_cloud.visualizer import EmbeddingVisualizer


@pytest.fixture
def surface() -> Surface:
    return Surface(400, 300)


@pytest.fixture
def window() -> EventTarget:
    return EventTarget()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def labels_seen() -> list[str]:
    return []


@pytest.fixture
def visualizer(surface, window, scheduler, labels_seen):
    viz = EmbeddingVisualizer(surface, window, scheduler, on_label=labels_seen.append)
    viz.mount()
    yield viz
    viz.teardown()


@pytest.fixture
def animal_vectors() -> tuple[list[str], list[list[float]]]:
    """cat and dog nearly identical, car far from both."""
    labels = ["cat", "dog", "car"]
    vectors = [
        [1.0, 0.0, 0.0, 0.0],
        [0.98, 0.05, 0.0, 0.0],
        [0.0, 0.0, 1.0, 0.2],
    ]
    return labels, vectors


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(7)
