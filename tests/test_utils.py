"""
Tests for deduplication, batching and the response cache.
"""

import pytest

from utils.batching import build_batches
from utils.cache import ResponseCache, make_cache_key
from utils.text import deduplicate_texts, split_whitespace


# =============================================================================
# Deduplication
# =============================================================================


class TestDeduplicateTexts:
    def test_first_occurrence_order(self):
        result = deduplicate_texts(["b", "a", "b", "c", "a"])

        assert result.unique_texts == ["b", "a", "c"]
        assert result.index_map == [0, 1, 0, 2, 1]

    def test_index_map_covers_every_position(self):
        texts = ["x", "y", "x", "x"]
        result = deduplicate_texts(texts)

        assert len(result.index_map) == len(texts)
        assert all(0 <= idx < len(result.unique_texts) for idx in result.index_map)

    def test_expand_restores_original_order(self):
        texts = ["a", "b", "a"]
        result = deduplicate_texts(texts)

        assert result.expand(result.unique_texts) == texts
        assert result.expand(["A", "B"]) == ["A", "B", "A"]

    def test_empty_input(self):
        result = deduplicate_texts([])

        assert result.unique_texts == []
        assert result.index_map == []

    def test_strings_are_opaque(self):
        result = deduplicate_texts(["a", "a ", "A"])

        assert result.unique_texts == ["a", "a ", "A"]


class TestSplitWhitespace:
    def test_splits_surrounding_whitespace(self):
        assert split_whitespace("\n  Halo dunia \t") == ("\n  ", "Halo dunia", " \t")

    def test_blank_text(self):
        assert split_whitespace("   ") == ("   ", "", "")


# =============================================================================
# Batching
# =============================================================================


class TestBuildBatches:
    def test_200_texts_split_80_80_40(self):
        texts = [f"t{i}" for i in range(200)]
        batches = build_batches(texts, list(range(200)), max_size=80)

        assert [len(batch) for batch in batches] == [80, 80, 40]
        assert batches[1].texts[0] == "t80"
        assert batches[2].indices[-1] == 199

    def test_indices_cover_input_exactly_once(self):
        indices = [3, 5, 6, 9, 11]
        batches = build_batches(["a", "b", "c", "d", "e"], indices, max_size=2)

        flattened = [idx for batch in batches for idx in batch.indices]
        assert flattened == indices

    def test_empty(self):
        assert build_batches([], [], max_size=80) == []

    def test_length_mismatch(self):
        with pytest.raises(ValueError):
            build_batches(["a"], [0, 1], max_size=80)

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            build_batches(["a"], [0], max_size=0)


# =============================================================================
# ResponseCache
# =============================================================================


class TestResponseCache:
    def test_put_get(self):
        cache = ResponseCache()
        cache.put("en", "Halo", "Hello")

        assert cache.get("en", "Halo") == "Hello"
        assert ("en", "Halo") in cache
        assert len(cache) == 1

    def test_languages_are_separate(self):
        cache = ResponseCache()
        cache.put("en", "Halo", "Hello")

        assert cache.get("fr", "Halo") is None
        assert ("fr", "Halo") not in cache

    def test_overwrite(self):
        cache = ResponseCache()
        cache.put("en", "Halo", "Hello")
        cache.put("en", "Halo", "Hello")

        assert len(cache) == 1

    def test_clear(self):
        cache = ResponseCache()
        cache.put("en", "Halo", "Hello")
        cache.clear()

        assert cache.get("en", "Halo") is None

    def test_cache_key(self):
        assert make_cache_key("Halo", "en") == "en::Halo"
