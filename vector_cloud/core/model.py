"""
Data model shared by projection, rendering, and picking.
Index i refers to the same item in every structure.
"""

from dataclasses import dataclass, field
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from vector_cloud.errors import (
    DimensionMismatchError,
    InsufficientDataError,
    InvalidVectorError,
)
import config

NO_INDEX = -1


@dataclass(frozen=True)
class EmbeddingBatch:
    """Ordered labels and their embedding vectors, index-aligned."""
    labels: tuple[str, ...]
    vectors: np.ndarray  # (n, dim)

    @classmethod
    def from_sequences(
        cls,
        labels: Sequence[str],
        vectors: Sequence[Sequence[float]],
    ) -> "EmbeddingBatch":
        """
        Validate raw input and build a batch.

        Args:
            labels: One label per vector
            vectors: Embedding vectors, all of the same length

        Returns:
            EmbeddingBatch with a read-only float64 matrix

        Raises:
            DimensionMismatchError: Ragged vectors or label/vector count mismatch
            InsufficientDataError: Fewer than two vectors
            InvalidVectorError: NaN or infinite values
        """
        rows = [np.asarray(v, dtype=np.float64).reshape(-1) for v in vectors]

        dims = {len(row) for row in rows}
        if len(dims) > 1:
            raise DimensionMismatchError(
                f"Vectors have inconsistent lengths: {sorted(dims)}"
            )

        if len(labels) != len(rows):
            raise DimensionMismatchError(
                f"Got {len(labels)} labels for {len(rows)} vectors"
            )

        if len(rows) < config.MIN_BATCH_SIZE:
            raise InsufficientDataError(
                f"Need at least {config.MIN_BATCH_SIZE} vectors to project, got {len(rows)}"
            )

        matrix = np.vstack(rows)
        if matrix.shape[1] == 0:
            raise DimensionMismatchError("Vectors are empty")
        if not np.all(np.isfinite(matrix)):
            raise InvalidVectorError("Vectors contain NaN or infinite values")

        matrix.setflags(write=False)
        return cls(labels=tuple(str(label) for label in labels), vectors=matrix)

    def __len__(self) -> int:
        return len(self.labels)

    @property
    def dimension(self) -> int:
        return self.vectors.shape[1]


@dataclass
class HighlightState:
    """Selected and hovered indices; NO_INDEX means none."""
    selected: int = NO_INDEX
    hovered: int = NO_INDEX

    def reset(self) -> None:
        self.selected = NO_INDEX
        self.hovered = NO_INDEX

    @property
    def has_selection(self) -> bool:
        return self.selected != NO_INDEX

    @property
    def has_hover(self) -> bool:
        return self.hovered != NO_INDEX


@dataclass
class PointCloudModel:
    """
    Geometry and highlight state for one loaded batch.

    Positions are written once and never change; a new batch gets a new model.
    """
    labels: tuple[str, ...]
    positions: np.ndarray  # (n, 3) float32 in [-1, 1]
    explained_variance_ratio: Optional[np.ndarray] = None
    highlight: HighlightState = field(default_factory=HighlightState)

    def __post_init__(self) -> None:
        if self.positions.ndim != 2 or self.positions.shape[1] != 3:
            raise DimensionMismatchError(
                f"Expected positions of shape (n, 3), got {self.positions.shape}"
            )
        if len(self.labels) != len(self.positions):
            raise DimensionMismatchError(
                f"Got {len(self.labels)} labels for {len(self.positions)} points"
            )
        self.positions = np.array(self.positions, dtype=np.float32)
        self.positions.setflags(write=False)

    def __len__(self) -> int:
        return len(self.labels)

    def is_valid_index(self, index: int) -> bool:
        return 0 <= index < len(self.labels)

    def label_for(self, index: int) -> str:
        """Label at index, or empty string for NO_INDEX."""
        if not self.is_valid_index(index):
            return ""
        return self.labels[index]

    def display_label(self) -> str:
        """Hovered label if any, otherwise the selected label."""
        if self.highlight.has_hover:
            return self.label_for(self.highlight.hovered)
        return self.label_for(self.highlight.selected)

    def to_frame(self) -> pd.DataFrame:
        """Items with their normalized coordinates, for display."""
        return pd.DataFrame({
            "index": np.arange(len(self.labels)),
            "label": list(self.labels),
            "x": self.positions[:, 0],
            "y": self.positions[:, 1],
            "z": self.positions[:, 2],
        })
