"""Тесты RelationshipGraphBuilder.

Проверяет:
- Отбор узлов по фильтру и подсветку совпадений.
- Явные рёбра (ссылки-строки, петли, ссылки на скрытые заметки).
- Семантические рёбра строго выше порога.
- Не более одного ребра на пару, явное побеждает.
- Пропуск заметок без эмбеддинга.
"""

import numpy as np
import pytest

from semantic_notes.core import EmbeddingCache, EmbeddingProvider, RelationshipGraphBuilder
from semantic_notes.domain import EdgeOrigin, EdgeSet, GraphEdge, NodeKind
from semantic_notes.domain.graph import MATCH_COLOR, NODE_COLORS

from conftest import TableEmbedder


@pytest.fixture
def builder(scenario_provider):
    return RelationshipGraphBuilder(scenario_provider)


@pytest.fixture
def abc_notes(make_note):
    """Alpha ссылается на Beta; Gamma без ссылок."""
    return [
        make_note(1, "Alpha", "<p>first</p>", links=[2]),
        make_note(2, "Beta", "second"),
        make_note(3, "Gamma", "third"),
    ]


class TestScenario:
    """Сценарий A/B/C со сходствами 0.9 / 0.5 / 0.2."""

    def test_only_explicit_edge_survives(self, builder, abc_notes):
        """Семантическое A-B подавлено явным, A-C и B-C ниже порога."""
        graph = builder.build(abc_notes)

        assert [edge.to_dict() for edge in graph.edges] == [
            {"source": 1, "target": 2, "value": 1.0, "isExplicit": True}
        ]

    def test_semantic_edge_without_link(self, builder, abc_notes):
        abc_notes[0].links = []

        graph = builder.build(abc_notes)

        assert len(graph.edges) == 1
        edge = graph.edges[0]
        assert edge.origin is EdgeOrigin.SEMANTIC
        assert edge.pair == (1, 2)
        assert edge.weight == pytest.approx(0.9, abs=1e-5)

    def test_nodes_in_input_order(self, builder, abc_notes):
        graph = builder.build(abc_notes)

        assert [node.id for node in graph.nodes] == [1, 2, 3]
        assert all(node.kind is NodeKind.NORMAL for node in graph.nodes)

    def test_deterministic(self, builder, abc_notes):
        assert builder.build(abc_notes).to_dict() == builder.build(abc_notes).to_dict()


class TestThreshold:
    """Порог строгий."""

    def _provider(self, similarity):
        table = {
            "Left": [1.0, 0.0],
            "Right": [similarity, float(np.sqrt(1 - similarity**2))],
        }
        embedder = TableEmbedder(table)
        return EmbeddingProvider(lambda: embedder, dimension=2)

    def test_exactly_threshold_is_not_an_edge(self, make_note):
        """Ортогональные векторы дают ровно 0.0, при пороге 0.0 ребра нет."""
        builder = RelationshipGraphBuilder(self._provider(0.0), threshold=0.0)
        notes = [make_note(1, "Left"), make_note(2, "Right")]

        assert builder.build(notes).edges == []

    def test_above_threshold_is_an_edge(self, make_note):
        builder = RelationshipGraphBuilder(self._provider(0.76))
        notes = [make_note(1, "Left"), make_note(2, "Right")]

        graph = builder.build(notes)

        assert len(graph.semantic_edges) == 1

    def test_below_default_threshold(self, make_note):
        builder = RelationshipGraphBuilder(self._provider(0.74))
        notes = [make_note(1, "Left"), make_note(2, "Right")]

        assert builder.build(notes).edges == []


class TestFilter:
    """Фильтр узлов."""

    def test_filter_matches_title_or_content_case_insensitive(self, builder, abc_notes):
        graph = builder.build(abc_notes, filter_text="SECOND")

        assert [node.id for node in graph.nodes] == [2]
        assert graph.nodes[0].kind is NodeKind.NORMAL

    def test_title_match_is_highlighted(self, builder, abc_notes):
        graph = builder.build(abc_notes, filter_text="alp")

        node = graph.nodes[0]
        assert node.id == 1
        assert node.kind is NodeKind.MATCH
        assert node.highlighted is True
        assert node.color == MATCH_COLOR

    def test_links_to_hidden_notes_are_dropped(self, builder, abc_notes):
        graph = builder.build(abc_notes, filter_text="alpha")

        assert graph.edges == []

    def test_theme_colors(self, builder, abc_notes):
        dark = builder.build(abc_notes, theme="dark")
        light = builder.build(abc_notes, theme="light")

        assert dark.nodes[0].color == NODE_COLORS["dark"]
        assert light.nodes[0].color == NODE_COLORS["light"]

    def test_untitled_label(self, builder, make_note):
        graph = builder.build([make_note(5, "", "Alpha body")])

        assert graph.nodes[0].label == "Untitled"


class TestExplicitEdges:
    """Явные ссылки."""

    def test_string_links_and_self_links(self, builder, make_note):
        notes = [
            make_note(1, "Alpha", links=["3", 1, "junk"]),
            make_note(3, "Gamma", links=[1]),
        ]

        graph = builder.build(notes)

        assert len(graph.edges) == 1
        edge = graph.edges[0]
        assert (edge.source, edge.target) == (1, 3)
        assert edge.explicit

    def test_duplicate_notes_are_one_node(self, builder, make_note):
        note = make_note(1, "Alpha")

        graph = builder.build([note, note])

        assert len(graph.nodes) == 1

    def test_at_most_one_edge_per_pair(self, builder, abc_notes):
        abc_notes[1].links = [1]

        graph = builder.build(abc_notes)
        pairs = [edge.pair for edge in graph.edges]

        assert len(pairs) == len(set(pairs))
        assert graph.edge_between(2, 1).explicit


class TestMissingEmbeddings:
    """Заметки без эмбеддинга не участвуют в семантических рёбрах."""

    def test_failed_note_is_skipped(self, scenario_provider, make_note):
        builder = RelationshipGraphBuilder(scenario_provider, threshold=0.0)
        notes = [make_note(1, "Alpha"), make_note(2, "Unknown"), make_note(3, "Beta")]

        graph = builder.build(notes)

        assert [edge.pair for edge in graph.edges] == [(1, 3)]
        assert len(graph.nodes) == 3

    def test_model_unavailable_gives_explicit_only(self, abc_notes):
        def broken():
            raise OSError("no model")

        builder = RelationshipGraphBuilder(EmbeddingProvider(broken, dimension=3))

        graph = builder.build(abc_notes)

        assert [edge.explicit for edge in graph.edges] == [True]

    def test_cache_is_filled_and_reused(self, builder, abc_notes, scenario_embedder):
        cache = EmbeddingCache()

        builder.build(abc_notes, cache=cache)
        calls = len(scenario_embedder.calls)
        builder.build(abc_notes, cache=cache)

        assert calls == 3
        assert len(scenario_embedder.calls) == 3
        assert len(cache) == 3


class TestEdgeSet:
    """Дедупликация по канонической паре."""

    def test_explicit_replaces_semantic(self):
        edges = EdgeSet()
        edges.add(GraphEdge(2, 1, 0.9, EdgeOrigin.SEMANTIC))

        assert edges.add(GraphEdge(1, 2, 1.0, EdgeOrigin.EXPLICIT)) is True
        assert edges.get(2, 1).explicit
        assert len(edges) == 1

    def test_semantic_never_replaces_explicit(self):
        edges = EdgeSet()
        edges.add(GraphEdge(1, 2, 1.0, EdgeOrigin.EXPLICIT))

        assert edges.add(GraphEdge(2, 1, 0.99, EdgeOrigin.SEMANTIC)) is False
        assert (2, 1) in edges

    def test_self_loop_rejected(self):
        edges = EdgeSet()

        assert edges.add(GraphEdge(4, 4, 1.0, EdgeOrigin.EXPLICIT)) is False
        assert len(edges) == 0

    def test_no_key_collisions(self):
        """Пары (1, 23) и (12, 3) различны."""
        edges = EdgeSet()
        edges.add(GraphEdge(1, 23, 1.0, EdgeOrigin.EXPLICIT))
        edges.add(GraphEdge(12, 3, 1.0, EdgeOrigin.EXPLICIT))

        assert len(edges) == 2
