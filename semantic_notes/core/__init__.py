"""Ядро: эмбеддинги, сходство, граф связей, автосохранение, поиск.

Классы:
    EmbeddingProvider
        Ленивая однократная загрузка модели, нормализация векторов.
    EmbeddingCache
        Векторы заметок в памяти процесса.
    RelationshipGraphBuilder
        Граф явных и семантических связей.
    AutosaveScheduler
        Debounce-сохранение черновика редактора.
    SemanticSearch
        Ранжирование заметок по запросу.

Функции:
    cosine_similarity, derive_text, strip_markup, embed_notes
"""

from semantic_notes.core.autosave import AutosaveScheduler
from semantic_notes.core.embedding_cache import EmbeddingCache
from semantic_notes.core.embedding_provider import EmbeddingProvider, embed_notes
from semantic_notes.core.graph_builder import (
    DEFAULT_SEMANTIC_THRESHOLD,
    RelationshipGraphBuilder,
)
from semantic_notes.core.search import SemanticSearch
from semantic_notes.core.similarity import cosine_similarity
from semantic_notes.core.text import derive_text, strip_markup

__all__ = [
    "AutosaveScheduler",
    "EmbeddingCache",
    "EmbeddingProvider",
    "embed_notes",
    "DEFAULT_SEMANTIC_THRESHOLD",
    "RelationshipGraphBuilder",
    "SemanticSearch",
    "cosine_similarity",
    "derive_text",
    "strip_markup",
]
