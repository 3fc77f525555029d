"""
Embedding providers turn the user's strings into vectors.
The visualizer never embeds text itself; it only receives finished vectors.
"""

import logging
from abc import ABC, abstractmethod

import numpy as np

logger = logging.getLogger(__name__)


class EmbeddingError(Exception):
    """A provider could not return one vector per input string."""


class BaseEmbedder(ABC):
    """
    Abstract base class for text embedding providers.

    Subclasses implement embed(); callers should go through embed_labels(),
    which checks that the result lines up with the input.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    @abstractmethod
    def dimension(self) -> int:
        pass

    @abstractmethod
    def embed(self, texts: list[str]) -> np.ndarray:
        """
        Embed texts into vectors.

        Args:
            texts: Strings to embed, in display order

        Returns:
            Array of shape (len(texts), dimension), row i for texts[i]
        """
        pass

    def embed_labels(self, labels: list[str]) -> np.ndarray:
        """
        Embed labels and verify the shape of the result.

        Raises:
            EmbeddingError: Provider failure or a result that does not match the input
        """
        if not labels:
            return np.zeros((0, self.dimension), dtype=np.float32)

        try:
            vectors = np.asarray(self.embed(labels), dtype=np.float32)
        except EmbeddingError:
            raise
        except Exception as e:
            raise EmbeddingError(f"{self.name} failed: {e}") from e

        if vectors.ndim != 2 or len(vectors) != len(labels):
            raise EmbeddingError(
                f"{self.name} returned {vectors.shape} for {len(labels)} strings"
            )
        logger.info(f"{self.name}: embedded {len(labels)} strings ({vectors.shape[1]} dims)")
        return vectors

    @staticmethod
    def normalize(vectors: np.ndarray) -> np.ndarray:
        """Scale each row to unit length; zero rows are left as they are."""
        norms = np.linalg.norm(vectors, axis=1, keepdims=True)
        return vectors / np.where(norms == 0, 1, norms)


_EMBEDDER_REGISTRY: dict[str, type[BaseEmbedder]] = {}


def register_embedder(name: str):
    """
    Class decorator that makes an embedder available to get_embedder().

    Usage:
        @register_embedder("hashing")
        class HashingEmbedder(BaseEmbedder):
            ...
    """
    def decorator(cls: type[BaseEmbedder]):
        _EMBEDDER_REGISTRY[name] = cls
        return cls
    return decorator


def get_embedder(name: str, **kwargs) -> BaseEmbedder:
    """
    Instantiate a registered embedder.

    Raises:
        ValueError: If no embedder is registered under name
    """
    try:
        cls = _EMBEDDER_REGISTRY[name]
    except KeyError:
        raise ValueError(
            f"Unknown embedder '{name}'. Available: {sorted(_EMBEDDER_REGISTRY)}"
        ) from None
    return cls(**kwargs)


def list_embedders() -> list[str]:
    return list(_EMBEDDER_REGISTRY)
