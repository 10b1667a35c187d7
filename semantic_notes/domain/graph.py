"""Модели графа связей между заметками.

Классы:
    NodeKind
        Класс отрисовки узла (совпал с фильтром / обычный).
    EdgeOrigin
        Происхождение ребра (явная ссылка / семантическая близость).
    GraphNode
        Узел графа — одна видимая заметка.
    GraphEdge
        Неориентированное ребро между двумя заметками.
    EdgeSet
        Коллекция рёбер с дедупликацией по неупорядоченной паре.
    GraphData
        Результат построения графа.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterator, Literal

Theme = Literal["dark", "light"]

# Цвета узлов: подсказка для визуализации, на структуру не влияют
MATCH_COLOR = "#f43f5e"
NODE_COLORS: dict[str, str] = {
    "dark": "#6366f1",
    "light": "#4f46e5",
}


class NodeKind(str, Enum):
    """Класс отрисовки узла.

    Attributes:
        MATCH: Заголовок совпал с активным фильтром.
        NORMAL: Обычный узел.
    """

    MATCH = "match"
    NORMAL = "normal"


class EdgeOrigin(str, Enum):
    """Происхождение ребра.

    Attributes:
        EXPLICIT: Ссылка, объявленная автором заметки.
        SEMANTIC: Выведено из сходства эмбеддингов.
    """

    EXPLICIT = "explicit"
    SEMANTIC = "semantic"


@dataclass(frozen=True)
class GraphNode:
    """Узел графа.

    Attributes:
        id: Идентификатор заметки.
        label: Заголовок или "Untitled".
        kind: MATCH или NORMAL.
        color: Цвет с учётом темы.
        val: Размер узла.
    """

    id: int
    label: str
    kind: NodeKind = NodeKind.NORMAL
    color: str = NODE_COLORS["dark"]
    val: int = 1

    @property
    def highlighted(self) -> bool:
        return self.kind is NodeKind.MATCH

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.label,
            "val": self.val,
            "color": self.color,
            "highlighted": self.highlighted,
        }


@dataclass(frozen=True)
class GraphEdge:
    """Ребро графа.

    source/target сохраняют порядок, в котором ребро было найдено
    (для явной ссылки — от ссылающейся заметки), но идентичность
    ребра определяется неупорядоченной парой.

    Attributes:
        source: Id первой заметки.
        target: Id второй заметки.
        weight: 1.0 для явных рёбер, сходство для семантических.
        origin: EXPLICIT или SEMANTIC.
    """

    source: int
    target: int
    weight: float
    origin: EdgeOrigin

    @property
    def explicit(self) -> bool:
        return self.origin is EdgeOrigin.EXPLICIT

    @property
    def pair(self) -> tuple[int, int]:
        """Каноническая пара (min, max)."""
        return canonical_pair(self.source, self.target)

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "target": self.target,
            "value": self.weight,
            "isExplicit": self.explicit,
        }


def canonical_pair(a: int, b: int) -> tuple[int, int]:
    return (a, b) if a <= b else (b, a)


class EdgeSet:
    """Рёбра графа, не более одного на неупорядоченную пару.

    Example:
        >>> edges = EdgeSet()
        >>> edges.add(GraphEdge(1, 2, 1.0, EdgeOrigin.EXPLICIT))
        True
        >>> edges.add(GraphEdge(2, 1, 0.9, EdgeOrigin.SEMANTIC))
        False
    """

    def __init__(self) -> None:
        self._edges: dict[tuple[int, int], GraphEdge] = {}

    def __contains__(self, pair: tuple[int, int]) -> bool:
        return canonical_pair(*pair) in self._edges

    def __len__(self) -> int:
        return len(self._edges)

    def __iter__(self) -> Iterator[GraphEdge]:
        return iter(self._edges.values())

    def add(self, edge: GraphEdge) -> bool:
        """Добавляет ребро.

        Петли не принимаются. Явное ребро вытесняет семантическое для
        той же пары, обратное невозможно.

        Returns:
            True если ребро добавлено или заменило семантическое.
        """
        if edge.source == edge.target:
            return False

        existing = self._edges.get(edge.pair)
        if existing is not None and (existing.explicit or not edge.explicit):
            return False

        self._edges[edge.pair] = edge
        return True

    def get(self, a: int, b: int) -> GraphEdge | None:
        return self._edges.get(canonical_pair(a, b))

    def to_list(self) -> list[GraphEdge]:
        return list(self._edges.values())


@dataclass
class GraphData:
    """Узлы и рёбра для визуализации.

    Attributes:
        nodes: Узлы в порядке входного списка заметок.
        edges: Явные рёбра, затем семантические.
    """

    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)

    @property
    def explicit_edges(self) -> list[GraphEdge]:
        return [edge for edge in self.edges if edge.explicit]

    @property
    def semantic_edges(self) -> list[GraphEdge]:
        return [edge for edge in self.edges if not edge.explicit]

    def edge_between(self, a: int, b: int) -> GraphEdge | None:
        pair = canonical_pair(a, b)
        return next((edge for edge in self.edges if edge.pair == pair), None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "nodes": [node.to_dict() for node in self.nodes],
            "links": [edge.to_dict() for edge in self.edges],
        }
