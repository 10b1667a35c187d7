"""Семантический поиск по заметкам.

Классы:
    SemanticSearch
        Ранжирование заметок по сходству с текстом запроса.
"""

import time
from typing import Optional, Sequence

from semantic_notes.core.embedding_cache import EmbeddingCache
from semantic_notes.core.embedding_provider import EmbeddingProvider, embed_notes
from semantic_notes.core.similarity import cosine_similarity
from semantic_notes.domain import Note, SearchHit
from semantic_notes.errors import EmbeddingUnavailable
from semantic_notes.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_LIMIT = 5


class SemanticSearch:
    """Поиск ближайших заметок к запросу.

    Attributes:
        provider: Источник эмбеддингов.
    """

    def __init__(self, provider: EmbeddingProvider):
        self.provider = provider

    def search(
        self,
        notes: Sequence[Note],
        query: str,
        limit: int = DEFAULT_LIMIT,
        cache: Optional[EmbeddingCache] = None,
    ) -> list[SearchHit]:
        """Top-N заметок по косинусному сходству.

        Заметки без эмбеддинга пропускаются. При равном сходстве
        сохраняется порядок входного списка.

        Raises:
            EmbeddingUnavailable: Если не удалось векторизовать запрос.
        """
        start_time = time.perf_counter()

        query_vector = self.provider.embed(query)
        if query_vector is None:
            raise EmbeddingUnavailable("Failed to generate embedding", reason="query")

        if limit <= 0:
            return []

        vectors = embed_notes(self.provider, notes, cache)

        hits: list[SearchHit] = []
        for note in notes:
            vector = vectors.get(note.id)
            if vector is None:
                continue
            hits.append(
                SearchHit(
                    id=note.id,
                    title=note.title,
                    similarity=cosine_similarity(query_vector, vector),
                )
            )
            # Повторный id во входе не дублирует выдачу
            vectors.pop(note.id)

        hits.sort(key=lambda hit: hit.similarity, reverse=True)
        results = hits[:limit]

        logger.info(
            "Search completed",
            query_length=len(query),
            candidates=len(hits),
            results=len(results),
            latency_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return results
