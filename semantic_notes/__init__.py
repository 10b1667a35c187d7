"""Semantic Notes - локальное ядро заметок с графом смысловых связей.

Архитектура:
    Domain: Чистые DTO (Note, NoteDraft, GraphData, SearchHit).
    Interfaces: Контракты (BaseEmbedder, BaseNoteStore).
    Infrastructure: Реализации (PeeweeNoteStore, SentenceTransformerEmbedder).
    Core: Эмбеддинги, граф связей, автосохранение, поиск.
    Pipeline: Фасад (NotesCore).

Пример:
    >>> from semantic_notes import NotesCore, NoteDraft
    >>> from semantic_notes.config import get_config
    >>>
    >>> core = NotesCore.from_config(get_config(db_path="notes.db"))
    >>> cats = core.save_note(NoteDraft(title="Cats", content="<p>Cats purr</p>"))
    >>> core.save_note(NoteDraft(title="Kittens", content="Young cats", links=[cats.id]))
    >>>
    >>> graph = core.build_graph()
    >>> graph.to_dict()["links"]
    [{'source': 2, 'target': 1, 'value': 1.0, 'isExplicit': True}]
"""

# Domain Layer
from semantic_notes.domain import (
    ApiKey,
    EdgeOrigin,
    GraphData,
    GraphEdge,
    GraphNode,
    NodeKind,
    Note,
    NoteDraft,
    SearchHit,
)

# Errors
from semantic_notes.errors import (
    EmbeddingUnavailable,
    NoteNotFoundError,
    NotesError,
    StorageFailure,
)

# Interfaces Layer
from semantic_notes.interfaces import BaseEmbedder, BaseNoteStore

# Infrastructure Layer
from semantic_notes.infrastructure.storage import (
    PeeweeApiKeyStore,
    PeeweeNoteStore,
    PeeweeSettingsStore,
    init_peewee_database,
)

# Core Layer
from semantic_notes.core import (
    AutosaveScheduler,
    EmbeddingCache,
    EmbeddingProvider,
    RelationshipGraphBuilder,
    SemanticSearch,
    cosine_similarity,
)

# Pipeline
from semantic_notes.pipeline import NotesCore

__version__ = "0.3.0"

__all__ = [
    # Domain
    "ApiKey",
    "EdgeOrigin",
    "GraphData",
    "GraphEdge",
    "GraphNode",
    "NodeKind",
    "Note",
    "NoteDraft",
    "SearchHit",
    # Errors
    "EmbeddingUnavailable",
    "NoteNotFoundError",
    "NotesError",
    "StorageFailure",
    # Interfaces
    "BaseEmbedder",
    "BaseNoteStore",
    # Infrastructure
    "PeeweeApiKeyStore",
    "PeeweeNoteStore",
    "PeeweeSettingsStore",
    "init_peewee_database",
    # Core
    "AutosaveScheduler",
    "EmbeddingCache",
    "EmbeddingProvider",
    "RelationshipGraphBuilder",
    "SemanticSearch",
    "cosine_similarity",
    # Pipeline
    "NotesCore",
]
