"""Доменный слой: чистые DTO без зависимостей от ORM и моделей.

Классы:
    Note, NoteDraft
        Заметка и полезная нагрузка для её сохранения.
    GraphNode, GraphEdge, GraphData, EdgeSet
        Граф связей между заметками.
    NodeKind, EdgeOrigin
        Перечисления для узлов и рёбер.
    SearchHit
        Результат семантического поиска.
    ApiKey
        Ключ внешнего моста.
"""

from semantic_notes.domain.note import (
    DEFAULT_OWNER_ID,
    UNTITLED,
    Note,
    NoteDraft,
    coerce_note_id,
    normalize_links,
)
from semantic_notes.domain.graph import (
    EdgeOrigin,
    EdgeSet,
    GraphData,
    GraphEdge,
    GraphNode,
    NodeKind,
    Theme,
    canonical_pair,
)
from semantic_notes.domain.search_result import SearchHit
from semantic_notes.domain.api_key import ApiKey

__all__ = [
    "DEFAULT_OWNER_ID",
    "UNTITLED",
    "Note",
    "NoteDraft",
    "coerce_note_id",
    "normalize_links",
    "EdgeOrigin",
    "EdgeSet",
    "GraphData",
    "GraphEdge",
    "GraphNode",
    "NodeKind",
    "Theme",
    "canonical_pair",
    "SearchHit",
    "ApiKey",
]
