from __future__ import annotations

import numpy as np
import pytest

from vector_cloud.core.projector import PCAProjector
from vector_cloud.errors import DegenerateRangeError, InsufficientDataError


def test_fit_transform_returns_three_columns(rng) -> None:
    embeddings = rng.normal(size=(12, 20))

    coords = PCAProjector().fit_transform(embeddings)

    assert coords.shape == (12, 3)


def test_rows_keep_their_input_position(rng) -> None:
    embeddings = rng.normal(size=(12, 20))
    embeddings[5] += 40.0

    coords = PCAProjector().fit_transform(embeddings)

    # The outlier dominates the first component wherever it sits
    assert np.argmax(np.abs(coords[:, 0])) == 5


def test_fit_transform_is_deterministic(rng) -> None:
    embeddings = rng.normal(size=(30, 64))

    first = PCAProjector().fit_transform(embeddings)
    second = PCAProjector().fit_transform(embeddings)

    assert np.array_equal(first, second)


def test_low_dimensional_input_is_zero_padded() -> None:
    embeddings = np.array([[0.0, 1.0], [1.0, 0.0], [2.0, 2.0], [3.0, 1.0]])

    projector = PCAProjector()
    coords = projector.fit_transform(embeddings)

    assert coords.shape == (4, 3)
    assert np.all(coords[:, 2] == 0.0)
    assert projector.explained_variance_ratio[2] == 0.0


def test_two_vectors_are_enough() -> None:
    coords = PCAProjector().fit_transform(np.array([[0.0, 0.0, 1.0], [1.0, 1.0, 1.0]]))

    assert coords.shape == (2, 3)
    assert np.isclose(abs(coords[0, 0] - coords[1, 0]), np.sqrt(2.0))


def test_explained_variance_ratio_has_one_entry_per_axis(rng) -> None:
    projector = PCAProjector()
    assert np.all(projector.explained_variance_ratio == 0.0)

    projector.fit_transform(rng.normal(size=(25, 10)))
    ratio = projector.explained_variance_ratio

    assert ratio.shape == (3,)
    assert np.all(np.diff(ratio) <= 1e-12)
    assert 0.0 < ratio.sum() <= 1.0 + 1e-9


def test_single_vector_is_rejected() -> None:
    with pytest.raises(InsufficientDataError):
        PCAProjector().fit_transform(np.ones((1, 5)))


def test_identical_vectors_are_rejected() -> None:
    with pytest.raises(DegenerateRangeError):
        PCAProjector().fit_transform(np.tile([0.3, -1.0, 2.0], (4, 1)))

