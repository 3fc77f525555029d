from __future__ import annotations

from dataclasses import dataclass

import numpy as np
import pytest

from vector_cloud.embedders import (
    EmbeddingError,
    HashingEmbedder,
    OpenAIEmbedder,
    get_embedder,
    list_embedders,
)


@dataclass
class _Item:
    index: int
    embedding: list[float]


@dataclass
class _Response:
    data: list[_Item]


class _FakeEmbeddings:
    def __init__(self, fail_times: int = 0) -> None:
        self.calls: list[list[str]] = []
        self.fail_times = fail_times

    def create(self, model: str, input: list[str]) -> _Response:
        self.calls.append(list(input))
        if self.fail_times:
            self.fail_times -= 1
            raise RuntimeError("429 rate limit reached")
        items = [_Item(i, [float(len(text)), 1.0]) for i, text in enumerate(input)]
        # The API does not promise to return items in request order
        return _Response(data=list(reversed(items)))


class _FakeClient:
    def __init__(self, fail_times: int = 0) -> None:
        self.embeddings = _FakeEmbeddings(fail_times)


def test_registry_lists_both_embedders() -> None:
    assert {"openai", "hashing"} <= set(list_embedders())
    with pytest.raises(ValueError):
        get_embedder("does-not-exist")


def test_hashing_embedder_is_deterministic_and_normalized() -> None:
    embedder = get_embedder("hashing")
    texts = ["the cat sat", "the cat sat", "quantum chromodynamics"]

    vectors = embedder.embed(texts)

    assert vectors.shape == (3, embedder.dimension)
    assert np.allclose(np.linalg.norm(vectors, axis=1), 1.0)
    assert np.array_equal(vectors[0], vectors[1])
    assert not np.allclose(vectors[0], vectors[2])


def test_hashing_embedder_groups_similar_spelling() -> None:
    vectors = HashingEmbedder().embed(["running", "runner", "zebra"])

    assert vectors[0] @ vectors[1] > vectors[0] @ vectors[2]


def test_hashing_embedder_handles_empty_input() -> None:
    assert HashingEmbedder(dimension=16).embed([]).shape == (0, 16)


def test_openai_embedder_keeps_input_order() -> None:
    client = _FakeClient()
    embedder = OpenAIEmbedder(client=client)

    vectors = embedder.embed(["a", "bbb", "cc"])

    raw = np.array([[1.0, 1.0], [3.0, 1.0], [2.0, 1.0]])
    expected = raw / np.linalg.norm(raw, axis=1, keepdims=True)
    assert np.allclose(vectors, expected)
    assert client.embeddings.calls == [["a", "bbb", "cc"]]


def test_openai_embedder_splits_large_requests() -> None:
    client = _FakeClient()
    embedder = OpenAIEmbedder(client=client, batch_size=2)

    vectors = embedder.embed(["one", "two", "three", "four", "five"])

    assert [len(call) for call in client.embeddings.calls] == [2, 2, 1]
    assert vectors.shape == (5, 2)


def test_openai_embedder_retries_rate_limits(monkeypatch) -> None:
    monkeypatch.setattr("vector_cloud.embedders.openai_embedder.time.sleep", lambda s: None)
    client = _FakeClient(fail_times=2)

    vectors = OpenAIEmbedder(client=client).embed(["x", "y"])

    assert len(client.embeddings.calls) == 3
    assert vectors.shape == (2, 2)


def test_openai_embedder_replaces_blank_text() -> None:
    client = _FakeClient()

    OpenAIEmbedder(client=client).embed(["", "  ok  "])

    assert client.embeddings.calls == [[" ", "ok"]]


def test_openai_embedder_requires_a_key(monkeypatch) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)

    with pytest.raises(ValueError):
        OpenAIEmbedder()


def test_embed_labels_wraps_provider_failures() -> None:
    class _Offline:
        def create(self, model: str, input: list[str]) -> _Response:
            raise ConnectionError("offline")

    client = _FakeClient()
    client.embeddings = _Offline()

    with pytest.raises(EmbeddingError, match="offline"):
        OpenAIEmbedder(client=client).embed_labels(["a", "b"])


def test_embed_labels_rejects_misaligned_results() -> None:
    class _Short(HashingEmbedder):
        def embed(self, texts):
            return super().embed(texts[:-1])

    with pytest.raises(EmbeddingError):
        _Short().embed_labels(["a", "b", "c"])


def test_embed_labels_of_nothing_is_empty() -> None:
    assert HashingEmbedder(dimension=8).embed_labels([]).shape == (0, 8)
