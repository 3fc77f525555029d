from __future__ import annotations

import numpy as np
import pytest

from vector_cloud.core.model import NO_INDEX, EmbeddingBatch, PointCloudModel
from vector_cloud.errors import (
    DimensionMismatchError,
    InsufficientDataError,
    InvalidVectorError,
)


def test_batch_keeps_labels_and_vectors_aligned() -> None:
    batch = EmbeddingBatch.from_sequences(["a", "b", "c"], [[1, 2], [3, 4], [5, 6]])

    assert len(batch) == 3
    assert batch.dimension == 2
    assert batch.labels == ("a", "b", "c")
    assert batch.vectors[1].tolist() == [3.0, 4.0]
    assert not batch.vectors.flags.writeable


def test_ragged_vectors_are_rejected() -> None:
    with pytest.raises(DimensionMismatchError):
        EmbeddingBatch.from_sequences(["a", "b"], [[1.0, 2.0], [1.0, 2.0, 3.0]])


def test_label_count_must_match() -> None:
    with pytest.raises(DimensionMismatchError):
        EmbeddingBatch.from_sequences(["a"], [[1.0], [2.0]])


def test_fewer_than_two_vectors_are_rejected() -> None:
    with pytest.raises(InsufficientDataError):
        EmbeddingBatch.from_sequences([], [])
    with pytest.raises(InsufficientDataError):
        EmbeddingBatch.from_sequences(["only"], [[1.0, 2.0]])


def test_non_finite_values_are_rejected() -> None:
    with pytest.raises(InvalidVectorError):
        EmbeddingBatch.from_sequences(["a", "b"], [[1.0, float("nan")], [0.0, 1.0]])


def test_display_label_prefers_hover_over_selection() -> None:
    model = PointCloudModel(labels=("a", "b", "c"), positions=np.zeros((3, 3)))
    assert model.display_label() == ""

    model.highlight.selected = 0
    assert model.display_label() == "a"

    model.highlight.hovered = 2
    assert model.display_label() == "c"

    model.highlight.hovered = NO_INDEX
    assert model.display_label() == "a"


def test_positions_are_read_only_float32() -> None:
    model = PointCloudModel(labels=("a", "b"), positions=np.array([[0, 0, 0], [1, 1, 1]]))

    assert model.positions.dtype == np.float32
    with pytest.raises(ValueError):
        model.positions[0, 0] = 5.0


def test_positions_must_be_three_dimensional() -> None:
    with pytest.raises(DimensionMismatchError):
        PointCloudModel(labels=("a", "b"), positions=np.zeros((2, 2)))


def test_frame_lists_every_item() -> None:
    model = PointCloudModel(labels=("x", "y"), positions=np.array([[0.0, 0.5, 1.0], [-1.0, 0.0, 0.0]]))

    frame = model.to_frame()

    assert list(frame.columns) == ["index", "label", "x", "y", "z"]
    assert frame["label"].tolist() == ["x", "y"]
    assert frame.loc[0, "z"] == pytest.approx(1.0)
