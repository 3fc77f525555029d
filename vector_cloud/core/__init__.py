"""
Core components for Vector-Cloud.
"""

from .model import NO_INDEX, EmbeddingBatch, HighlightState, PointCloudModel
from .normalizer import NormalizationRange, compute_range, normalize
from .projector import PCAProjector

__all__ = [
    "NO_INDEX",
    "EmbeddingBatch",
    "HighlightState",
    "PointCloudModel",
    "NormalizationRange",
    "compute_range",
    "normalize",
    "PCAProjector",
]
