"""
Error taxonomy for Vector-Cloud.

Data-shape errors are raised before any render resource is touched.
Rendering errors are fatal to the visualizer instance.
"""


class VisualizerError(Exception):
    """Base class for all Vector-Cloud errors."""


class InsufficientDataError(VisualizerError, ValueError):
    """Batch is too small to project (fewer than two vectors)."""


class DegenerateRangeError(VisualizerError, ValueError):
    """Projected coordinates collapse to a single value."""


class DimensionMismatchError(VisualizerError, ValueError):
    """Vectors have inconsistent lengths or do not line up with the labels."""


class InvalidVectorError(VisualizerError, ValueError):
    """A vector contains NaN or infinite values."""


class ResourceInitError(VisualizerError, RuntimeError):
    """Rendering surface or device is unavailable."""


class ContextLostError(ResourceInitError):
    """The render device was lost; the visualizer cannot recover."""
