"""
Конфигурация pytest для semantic_notes.

Определяет фикстуры для:
- In-memory базы данных и хранилища заметок
- Детерминированных эмбеддеров (без загрузки модели)
- Сборки NotesCore с чистым состоянием на каждый тест
"""

import hashlib
from datetime import datetime
from typing import Optional

import numpy as np
import pytest

from semantic_notes.config import reset_config
from semantic_notes.core import EmbeddingCache, EmbeddingProvider
from semantic_notes.domain import Note
from semantic_notes.infrastructure.storage import PeeweeNoteStore, init_peewee_database
from semantic_notes.interfaces import BaseEmbedder
from semantic_notes.pipeline import NotesCore

DIMENSION = 384


class HashEmbedder(BaseEmbedder):
    """Детерминированный эмбеддер: вектор из md5 текста.

    Одинаковый текст -> одинаковый вектор, разный текст -> почти
    ортогональные векторы. Считает вызовы.
    """

    def __init__(self, dimension: int = DIMENSION):
        self._dimension = dimension
        self.calls: list[str] = []

    @property
    def dimension(self) -> int:
        return self._dimension

    def embed(self, text: str) -> np.ndarray:
        self.calls.append(text)
        seed = int(hashlib.md5(text.encode()).hexdigest()[:8], 16)
        return np.random.default_rng(seed).standard_normal(self._dimension).astype(np.float32)


class TableEmbedder(BaseEmbedder):
    """Эмбеддер по таблице: вектор выбирается по первому слову текста.

    Первое слово производного текста - заголовок заметки. Для слов
    вне таблицы бросает RuntimeError (как упавшая модель).
    """

    def __init__(self, table: dict[str, list[float]]):
        self.table = {word: np.array(vector, dtype=np.float32) for word, vector in table.items()}
        self._dimension = len(next(iter(table.values())))
        self.calls: list[str] = []

    @property
    def dimension(self) -> int:
        return self._dimension

    def embed(self, text: str) -> np.ndarray:
        self.calls.append(text)
        word = text.strip().split(" ", 1)[0]
        if word not in self.table:
            raise RuntimeError(f"no vector for {word!r}")
        return self.table[word]


# Попарные сходства: Alpha-Beta 0.9, Alpha-Gamma 0.5, Beta-Gamma 0.2
SCENARIO_VECTORS: dict[str, list[float]] = {
    "Alpha": [1.0, 0.0, 0.0],
    "Beta": [0.9, 0.435889894, 0.0],
    "Gamma": [0.5, -0.573539334, 0.648885268],
}


@pytest.fixture(autouse=True)
def _clean_config():
    """Глобальный конфиг не переживает тест."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def in_memory_db():
    """Подключённая in-memory БД."""
    db = init_peewee_database(":memory:")
    yield db
    db.close()


@pytest.fixture
def store(in_memory_db):
    """Хранилище заметок с созданной схемой."""
    return PeeweeNoteStore(in_memory_db)


@pytest.fixture
def mock_embedder():
    return HashEmbedder()


@pytest.fixture
def provider(mock_embedder):
    return EmbeddingProvider(lambda: mock_embedder, dimension=DIMENSION)


@pytest.fixture
def scenario_embedder():
    return TableEmbedder(SCENARIO_VECTORS)


@pytest.fixture
def scenario_provider(scenario_embedder):
    return EmbeddingProvider(lambda: scenario_embedder, dimension=3)


@pytest.fixture
def cache():
    return EmbeddingCache()


@pytest.fixture
def core(store, provider):
    """NotesCore на in-memory БД и hash-эмбеддере."""
    return NotesCore(store=store, provider=provider)


@pytest.fixture
def make_note():
    """Фабрика заметок в памяти (без хранилища)."""

    def _make(
        note_id: int,
        title: str = "",
        content: str = "",
        links: Optional[list] = None,
    ) -> Note:
        now = datetime(2024, 1, 1, 12, 0, 0)
        return Note(
            id=note_id,
            title=title,
            content=content,
            links=list(links or []),
            created_at=now,
            updated_at=now,
        )

    return _make
