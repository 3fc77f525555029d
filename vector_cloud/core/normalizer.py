"""
Rescale projected coordinates into the [-1, 1] visual cube.

One scale is shared by x, y and z so relative shape is preserved.
"""

import logging
from dataclasses import dataclass

import numpy as np

from vector_cloud.errors import DegenerateRangeError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalizationRange:
    """Global range of a projected batch and the derived scale."""
    min: float
    max: float

    @property
    def scale(self) -> float:
        return 2.0 / (self.max - self.min)


def compute_range(points: np.ndarray) -> NormalizationRange:
    """
    Compute min and max over every coordinate of every point.

    Raises:
        DegenerateRangeError: If the range is empty or not finite
    """
    points = np.asarray(points, dtype=np.float64)
    if points.size == 0:
        raise DegenerateRangeError("No points to normalize")

    lo = float(points.min())
    hi = float(points.max())

    if not np.isfinite(lo) or not np.isfinite(hi):
        raise DegenerateRangeError(f"Non-finite coordinate range [{lo}, {hi}]")
    if hi == lo:
        raise DegenerateRangeError(f"All coordinates equal {lo}; cannot scale")

    return NormalizationRange(min=lo, max=hi)


def normalize(points: np.ndarray) -> np.ndarray:
    """
    Map points into [-1, 1] with normalized = (raw - min) * scale - 1.

    Args:
        points: Array of shape (n, 3)

    Returns:
        float32 array of shape (n, 3); the global minimum maps to -1 and
        the global maximum to +1
    """
    points = np.asarray(points, dtype=np.float64)
    rng = compute_range(points)
    logger.debug(f"Normalizing {len(points)} points, min={rng.min:.4f} max={rng.max:.4f}")

    normalized = (points - rng.min) * rng.scale - 1.0
    # Rounding can overshoot the endpoints by an ulp
    np.clip(normalized, -1.0, 1.0, out=normalized)
    return normalized.astype(np.float32)

