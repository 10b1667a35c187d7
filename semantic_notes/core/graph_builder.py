"""Построение графа связей между заметками.

Классы:
    RelationshipGraphBuilder
        Узлы по фильтру, явные рёбра по ссылкам, семантические по сходству.
"""

import time
from itertools import combinations
from typing import Optional, Sequence

from semantic_notes.core.embedding_cache import EmbeddingCache
from semantic_notes.core.embedding_provider import EmbeddingProvider, embed_notes
from semantic_notes.core.similarity import cosine_similarity
from semantic_notes.domain import (
    EdgeOrigin,
    EdgeSet,
    GraphData,
    GraphEdge,
    GraphNode,
    NodeKind,
    Note,
    Theme,
    normalize_links,
)
from semantic_notes.domain.graph import MATCH_COLOR, NODE_COLORS
from semantic_notes.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_SEMANTIC_THRESHOLD = 0.75


class RelationshipGraphBuilder:
    """Строит GraphData для визуализации.

    Результат детерминирован для одинаковых входов (заметки, фильтр,
    тема, эмбеддинги). Рёбра: сначала явные в порядке заметок и их
    ссылок, затем семантические в порядке пар (i < j).

    Attributes:
        provider: Источник эмбеддингов.
        threshold: Семантическое ребро создаётся при сходстве строго больше.
    """

    def __init__(
        self,
        provider: EmbeddingProvider,
        threshold: float = DEFAULT_SEMANTIC_THRESHOLD,
    ):
        self.provider = provider
        self.threshold = threshold

    def build(
        self,
        notes: Sequence[Note],
        filter_text: str = "",
        theme: Theme = "dark",
        cache: Optional[EmbeddingCache] = None,
    ) -> GraphData:
        """Строит граф.

        Args:
            notes: Все заметки владельца.
            filter_text: Подстрока для отбора узлов (без учёта регистра);
                пустая строка оставляет все заметки.
            theme: "dark" или "light", влияет только на цвет узлов.
            cache: Кэш эмбеддингов; недостающие векторы дописываются в него.

        Returns:
            GraphData с узлами видимых заметок и рёбрами между ними.
        """
        start_time = time.perf_counter()
        needle = (filter_text or "").lower()

        visible = self._select(notes, needle)
        nodes = [self._make_node(note, needle, theme) for note in visible]
        visible_ids = {note.id for note in visible}

        edges = EdgeSet()

        for note in visible:
            for target in normalize_links(note.links):
                if target in visible_ids:
                    edges.add(GraphEdge(note.id, target, 1.0, EdgeOrigin.EXPLICIT))

        vectors = embed_notes(self.provider, visible, cache)

        for left, right in combinations(visible, 2):
            if (left.id, right.id) in edges:
                continue

            a = vectors.get(left.id)
            b = vectors.get(right.id)
            if a is None or b is None:
                continue

            similarity = cosine_similarity(a, b)
            if similarity > self.threshold:
                edges.add(GraphEdge(left.id, right.id, similarity, EdgeOrigin.SEMANTIC))

        graph = GraphData(nodes=nodes, edges=edges.to_list())

        logger.info(
            "Graph built",
            nodes=len(graph.nodes),
            explicit=len(graph.explicit_edges),
            semantic=len(graph.semantic_edges),
            filtered=bool(needle),
            latency_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return graph

    @staticmethod
    def _select(notes: Sequence[Note], needle: str) -> list[Note]:
        selected: list[Note] = []
        seen: set[int] = set()

        for note in notes:
            # Несохранённые и повторные заметки в граф не попадают
            if note.id is None or note.id in seen:
                continue
            if needle and needle not in (note.title or "").lower() and needle not in (
                note.content or ""
            ).lower():
                continue
            seen.add(note.id)
            selected.append(note)

        return selected

    @staticmethod
    def _make_node(note: Note, needle: str, theme: Theme) -> GraphNode:
        matched = bool(needle) and needle in (note.title or "").lower()
        kind = NodeKind.MATCH if matched else NodeKind.NORMAL
        color = MATCH_COLOR if matched else NODE_COLORS.get(theme, NODE_COLORS["dark"])
        return GraphNode(id=note.id, label=note.display_title, kind=kind, color=color)
