"""
Offline embedding provider.
Hashes character n-grams into a fixed number of buckets; no network, no key.
"""

import hashlib

import numpy as np

from .base import BaseEmbedder, register_embedder
import config


@register_embedder("hashing")
class HashingEmbedder(BaseEmbedder):
    """
    Deterministic bag-of-n-grams vectors.

    Texts that share many character n-grams land close together, which is
    enough to try the visualizer without an API key. It captures spelling,
    not meaning.
    """

    def __init__(self, dimension: int = config.HASHING_EMBEDDING_DIM, ngram: int = 3):
        self._dimension = dimension
        self.ngram = ngram

    @property
    def name(self) -> str:
        return f"hashing_{self.ngram}gram_{self._dimension}"

    @property
    def dimension(self) -> int:
        return self._dimension

    def _ngrams(self, text: str) -> list[str]:
        padded = f" {text.lower().strip()} "
        if len(padded) <= self.ngram:
            return [padded]
        return [padded[i:i + self.ngram] for i in range(len(padded) - self.ngram + 1)]

    def _embed_one(self, text: str) -> np.ndarray:
        vector = np.zeros(self._dimension, dtype=np.float32)
        for gram in self._ngrams(text):
            digest = hashlib.md5(gram.encode("utf-8")).digest()
            bucket = int.from_bytes(digest[:4], "little") % self._dimension
            sign = 1.0 if digest[4] & 1 else -1.0
            vector[bucket] += sign
        return vector

    def embed(self, texts: list[str]) -> np.ndarray:
        if not texts:
            return np.zeros((0, self._dimension), dtype=np.float32)
        return self.normalize(np.vstack([self._embed_one(t) for t in texts]))
