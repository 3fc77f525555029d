"""
Vector-Cloud: interactive 3D point clouds of text embeddings.
"""

from .visualizer import EmbeddingVisualizer

__all__ = ["EmbeddingVisualizer"]
