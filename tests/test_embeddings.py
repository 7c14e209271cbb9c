"""Tests for the optional embedding similarity and its cache."""

import unittest

from projectbridge.retrieval.embeddings import EmbeddingCache, cosine, semantic_similarity

VECTORS = {"react": [1.0, 0.0], "reactjs": [1.0, 0.0], "docker": [0.0, 1.0], "go": [0.6, 0.8]}


class _FakeEmbedder:
    def __init__(self):
        self.calls = []

    def __call__(self, texts):
        self.calls.append(list(texts))
        return [VECTORS[t] for t in texts]


class EmbeddingCacheTests(unittest.TestCase):
    def test_unbounded_by_default(self) -> None:
        cache = EmbeddingCache()
        for i in range(100):
            cache.put(str(i), [float(i)])
        self.assertEqual(len(cache), 100)

    def test_oldest_entries_are_evicted(self) -> None:
        cache = EmbeddingCache(max_size=2)
        cache.put("a", [1.0])
        cache.put("b", [2.0])
        cache.put("c", [3.0])
        self.assertNotIn("a", cache)
        self.assertIsNone(cache.get("a"))
        self.assertEqual(list(cache.get("c")), [3.0])
        cache.clear()
        self.assertEqual(len(cache), 0)


class SemanticSimilarityTests(unittest.TestCase):
    def test_only_uncached_names_are_embedded(self) -> None:
        cache, embed = EmbeddingCache(), _FakeEmbedder()
        self.assertAlmostEqual(semantic_similarity("React", " ReactJS ", cache, embed_fn=embed), 1.0)
        self.assertAlmostEqual(semantic_similarity("react", "Docker", cache, embed_fn=embed), 0.0)
        self.assertEqual(embed.calls, [["react", "reactjs"], ["docker"]])

    def test_same_name_is_embedded_once(self) -> None:
        cache, embed = EmbeddingCache(), _FakeEmbedder()
        self.assertAlmostEqual(semantic_similarity("Go", "go", cache, embed_fn=embed), 1.0)
        self.assertEqual(embed.calls, [["go"]])

    def test_tiny_cache(self) -> None:
        cache, embed = EmbeddingCache(max_size=1), _FakeEmbedder()
        self.assertAlmostEqual(semantic_similarity("react", "docker", cache, embed_fn=embed), 0.0)
        self.assertEqual(len(cache), 1)

    def test_cosine(self) -> None:
        self.assertAlmostEqual(cosine([1.0, 1.0], [2.0, 2.0]), 1.0)
        self.assertEqual(cosine([0.0, 0.0], [1.0, 0.0]), 0.0)


if __name__ == "__main__":
    unittest.main()
