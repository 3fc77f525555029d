"""
Embedding providers for Vector-Cloud.
"""

from .base import BaseEmbedder, EmbeddingError, get_embedder, list_embedders
from .openai_embedder import OpenAIEmbedder
from .hashing_embedder import HashingEmbedder

__all__ = [
    "BaseEmbedder",
    "EmbeddingError",
    "OpenAIEmbedder",
    "HashingEmbedder",
    "get_embedder",
    "list_embedders",
]
