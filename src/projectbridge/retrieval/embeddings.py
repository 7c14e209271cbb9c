# src/projectbridge/retrieval/embeddings.py
"""
Optional embedding similarity between skill names.

This is public API for callers that want it; the gap analysis pipeline and
the UI do not use it. It is network-bound and nondeterministic, so the matcher
never calls it. Callers pass an explicit EmbeddingCache (one per session)
instead of relying on module state.
"""
from collections import OrderedDict
from typing import Callable, List, Optional, Sequence

import numpy as np
from openai import OpenAI

from projectbridge.utils.config import settings

EmbedFn = Callable[[List[str]], List[List[float]]]


class EmbeddingCache:
    """Skill text -> vector. Unbounded unless max_size is set, then oldest entries go first."""

    def __init__(self, max_size: Optional[int] = None):
        self.max_size = max_size
        self._data: "OrderedDict[str, np.ndarray]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def get(self, key: str) -> Optional[np.ndarray]:
        return self._data.get(key)

    def put(self, key: str, vector: Sequence[float]) -> None:
        self._data[key] = np.asarray(vector, dtype=float)
        self._data.move_to_end(key)
        while self.max_size is not None and len(self._data) > self.max_size:
            self._data.popitem(last=False)

    def clear(self) -> None:
        self._data.clear()


def embed_texts(texts: List[str], model: str | None = None, client: OpenAI | None = None) -> List[List[float]]:
    model = model or settings.EMBED_MODEL
    client = client or OpenAI(api_key=settings.OPENAI_API_KEY)
    # OpenAI Python SDK v1 returns .data with embeddings in order
    resp = client.embeddings.create(model=model, input=texts)
    return [d.embedding for d in resp.data]


def cosine(a: Sequence[float], b: Sequence[float]) -> float:
    va, vb = np.asarray(a, dtype=float), np.asarray(b, dtype=float)
    denom = np.linalg.norm(va) * np.linalg.norm(vb)
    if denom == 0:
        return 0.0
    return float(np.dot(va, vb) / denom)


def _key(text: str) -> str:
    return text.strip().lower()


def semantic_similarity(a: str, b: str, cache: EmbeddingCache, embed_fn: EmbedFn = embed_texts) -> float:
    """Cosine similarity of two skill names; only uncached names are sent to `embed_fn`, in one batch."""
    keys = [_key(a), _key(b)]
    vectors = {k: cache.get(k) for k in keys if k in cache}
    todo = [k for k in dict.fromkeys(keys) if k not in vectors]
    if todo:
        for k, vec in zip(todo, embed_fn(todo)):
            cache.put(k, vec)
            vectors[k] = vec
    return cosine(vectors[keys[0]], vectors[keys[1]])
