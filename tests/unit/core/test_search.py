"""Тесты SemanticSearch."""

import pytest

from semantic_notes.core import EmbeddingCache, EmbeddingProvider, SemanticSearch
from semantic_notes.errors import EmbeddingUnavailable

from conftest import TableEmbedder

# Запрос "Query" ближе всего к Alpha, затем Beta, затем Gamma
SEARCH_VECTORS = {
    "Query": [1.0, 0.0, 0.0],
    "Alpha": [0.95, 0.31224989, 0.0],
    "Beta": [0.6, 0.8, 0.0],
    "Gamma": [0.1, 0.0, 0.99498744],
}


@pytest.fixture
def embedder():
    return TableEmbedder(SEARCH_VECTORS)


@pytest.fixture
def search(embedder):
    return SemanticSearch(EmbeddingProvider(lambda: embedder, dimension=3))


@pytest.fixture
def notes(make_note):
    return [
        make_note(3, "Gamma", "taxes"),
        make_note(2, "Beta", "kittens"),
        make_note(1, "Alpha", "cats"),
    ]


class TestSemanticSearch:
    """Ранжирование и отказоустойчивость."""

    def test_results_sorted_by_similarity(self, search, notes):
        hits = search.search(notes, "Query")

        assert [hit.id for hit in hits] == [1, 2, 3]
        assert hits[0].similarity == pytest.approx(0.95, abs=1e-5)
        assert hits[0].title == "Alpha"

    def test_limit(self, search, notes):
        assert [hit.id for hit in search.search(notes, "Query", limit=2)] == [1, 2]

    def test_notes_without_embedding_are_skipped(self, search, notes, make_note):
        notes.append(make_note(9, "Unknown", "no vector"))

        hits = search.search(notes, "Query", limit=10)

        assert 9 not in [hit.id for hit in hits]
        assert len(hits) == 3

    def test_unembeddable_query_raises(self, search, notes):
        with pytest.raises(EmbeddingUnavailable):
            search.search(notes, "   ")

        with pytest.raises(EmbeddingUnavailable):
            search.search(notes, "Unknown words")

    def test_equal_scores_keep_input_order(self, search, make_note):
        notes = [make_note(5, "Beta", "one"), make_note(4, "Beta", "two")]

        hits = search.search(notes, "Query")

        assert [hit.id for hit in hits] == [5, 4]

    def test_cache_is_reused(self, search, notes, embedder):
        cache = EmbeddingCache()

        search.search(notes, "Query", cache=cache)
        search.search(notes, "Query", cache=cache)

        # 3 заметки один раз + запрос дважды
        assert len(embedder.calls) == 5
        assert len(cache) == 3

    def test_empty_notes(self, search):
        assert search.search([], "Query") == []
