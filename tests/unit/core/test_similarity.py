"""Тесты cosine_similarity и подготовки текста."""

import numpy as np
import pytest

from semantic_notes.core import cosine_similarity, derive_text, strip_markup
from semantic_notes.domain import Note


class TestCosineSimilarity:
    """Свойства косинусного сходства."""

    @pytest.mark.parametrize("seed", [0, 1, 2, 3])
    def test_self_similarity_is_one(self, seed):
        vector = np.random.default_rng(seed).standard_normal(384).astype(np.float32)

        assert cosine_similarity(vector, vector) == pytest.approx(1.0)

    def test_zero_vector_gives_zero(self):
        vector = np.ones(8, dtype=np.float32)

        assert cosine_similarity(vector, np.zeros(8, dtype=np.float32)) == 0.0

    def test_symmetric(self):
        rng = np.random.default_rng(7)
        a = rng.standard_normal(16)
        b = rng.standard_normal(16)

        assert cosine_similarity(a, b) == cosine_similarity(b, a)

    def test_orthogonal_and_opposite(self):
        a = np.array([1.0, 0.0])

        assert cosine_similarity(a, np.array([0.0, 3.0])) == pytest.approx(0.0)
        assert cosine_similarity(a, np.array([-2.0, 0.0])) == pytest.approx(-1.0)

    def test_none_gives_zero(self):
        assert cosine_similarity(None, np.ones(4)) == 0.0
        assert cosine_similarity(np.ones(4), None) == 0.0

    def test_length_mismatch_gives_zero(self):
        assert cosine_similarity(np.ones(3), np.ones(4)) == 0.0

    def test_result_is_clipped(self):
        vector = np.full(384, 0.1, dtype=np.float32)

        assert -1.0 <= cosine_similarity(vector, vector) <= 1.0


class TestText:
    """Производный текст заметки."""

    def test_strip_markup_removes_tags_and_unescapes(self):
        assert strip_markup("<p>Cats &amp; <b>dogs</b></p>") == "Cats & dogs"

    def test_strip_markup_handles_empty(self):
        assert strip_markup("") == ""

    def test_derive_text_joins_title_and_content(self):
        note = Note(id=1, title="Cats", content="<p>purr</p>")

        assert derive_text(note) == "Cats purr"

    def test_derive_text_of_empty_note_is_blank(self):
        assert derive_text(Note(id=1)).strip() == ""
