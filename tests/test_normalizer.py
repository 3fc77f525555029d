from __future__ import annotations

import numpy as np
import pytest

from vector_cloud.core.normalizer import compute_range, normalize
from vector_cloud.errors import DegenerateRangeError


def _pairwise(points: np.ndarray) -> np.ndarray:
    diff = points[:, None, :] - points[None, :, :]
    return np.linalg.norm(diff, axis=-1)


def test_global_extremes_map_to_cube_corners() -> None:
    points = np.array([[0.0, 0.0, 0.0], [2.0, 1.0, 0.0]])

    normalized = normalize(points)

    assert normalized.dtype == np.float32
    assert np.allclose(normalized, [[-1.0, -1.0, -1.0], [1.0, 0.0, -1.0]])


def test_output_stays_inside_unit_cube(rng) -> None:
    normalized = normalize(rng.normal(scale=50.0, size=(200, 3)))

    assert normalized.min() == pytest.approx(-1.0)
    assert normalized.max() == pytest.approx(1.0)


def test_shape_is_preserved(rng) -> None:
    points = rng.normal(size=(15, 3)) * [10.0, 1.0, 0.1]

    before = _pairwise(points)
    after = _pairwise(normalize(points).astype(np.float64))

    mask = ~np.eye(len(points), dtype=bool)
    ratios = after[mask] / before[mask]
    assert np.allclose(ratios, ratios[0], rtol=1e-4)


def test_range_and_scale() -> None:
    span = compute_range(np.array([[-3.0, 1.0, 5.0]]))

    assert span.min == -3.0
    assert span.max == 5.0
    assert span.scale == pytest.approx(0.25)


def test_normalize_is_the_affine_map_of_the_range() -> None:
    points = np.array([[1.0, 4.0, -2.0], [0.5, 3.0, 7.0], [2.0, 2.0, 2.0]])
    span = compute_range(points)

    normalized = normalize(points)

    assert np.allclose(normalized, (points - span.min) * span.scale - 1.0, atol=1e-6)


def test_constant_coordinates_are_rejected() -> None:
    with pytest.raises(DegenerateRangeError):
        normalize(np.full((4, 3), 0.7))


def test_empty_and_non_finite_input_is_rejected() -> None:
    with pytest.raises(DegenerateRangeError):
        normalize(np.zeros((0, 3)))
    with pytest.raises(DegenerateRangeError):
        normalize(np.array([[0.0, np.inf, 1.0]]))
