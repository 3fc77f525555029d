"""
PCA projection for dimensionality reduction.
Reduces embedding batches to 3D coordinates along the directions of greatest variance.
"""

import logging
from typing import Optional

import numpy as np
from sklearn.decomposition import PCA

from vector_cloud.errors import DegenerateRangeError, InsufficientDataError
import config

logger = logging.getLogger(__name__)


class PCAProjector:
    """
    PCA-based dimensionality reduction for embedding visualization.

    Features:
    - Deterministic for a fixed batch (full SVD, no randomized solver)
    - Always returns n_components columns, zero-filling components the
      batch is too small to support
    """

    def __init__(self, n_components: int = config.PCA_N_COMPONENTS):
        """
        Initialize PCA projector.

        Args:
            n_components: Output dimensions (default: 3)
        """
        self.n_components = n_components
        self._model: Optional[PCA] = None

    def fit_transform(self, embeddings: np.ndarray) -> np.ndarray:
        """
        Fit PCA on a batch and return its projected coordinates.

        Args:
            embeddings: Array of shape (n, embedding_dim)

        Returns:
            Array of shape (n, n_components), same row order as the input

        Raises:
            InsufficientDataError: Fewer than two vectors
            DegenerateRangeError: All vectors are identical
        """
        embeddings = np.asarray(embeddings, dtype=np.float64)
        if embeddings.ndim != 2:
            raise ValueError(f"Expected a 2D array, got shape {embeddings.shape}")

        n_items, dim = embeddings.shape
        if n_items < config.MIN_BATCH_SIZE:
            raise InsufficientDataError(
                f"PCA needs at least {config.MIN_BATCH_SIZE} vectors, got {n_items}"
            )

        # Zero variance would make every component arbitrary
        if not np.any(np.ptp(embeddings, axis=0) > 0):
            raise DegenerateRangeError("All vectors are identical; nothing to project")

        n_fit = min(self.n_components, n_items, dim)
        logger.debug(f"Fitting PCA ({n_fit} of {self.n_components} components) on {embeddings.shape}")

        self._model = PCA(n_components=n_fit, svd_solver="full")
        coords = self._model.fit_transform(embeddings)

        coords = self._pad(coords)
        logger.debug(f"Projected sample: {coords[:2].tolist()}")
        return coords

    def _pad(self, coords: np.ndarray) -> np.ndarray:
        missing = self.n_components - coords.shape[1]
        if missing > 0:
            coords = np.hstack([coords, np.zeros((coords.shape[0], missing))])
        return coords

    @property
    def explained_variance_ratio(self) -> np.ndarray:
        """Variance share per output component, zero for padded components."""
        if self._model is None:
            return np.zeros(self.n_components)
        ratio = np.nan_to_num(self._model.explained_variance_ratio_)
        return np.pad(ratio, (0, self.n_components - len(ratio)))
