"""Ленивый провайдер эмбеддингов с кэшированием модели.

Классы:
    EmbeddingProvider
        Однократная загрузка бэкенда, нормализация, политика отказа.

Функции:
    embed_notes
        Эмбеддинги набора заметок с использованием кэша.
"""

import threading
import time
from typing import Callable, Iterable, Literal, Optional

import numpy as np

from semantic_notes.core.embedding_cache import EmbeddingCache
from semantic_notes.core.text import derive_text
from semantic_notes.domain import Note
from semantic_notes.errors import EmbeddingUnavailable
from semantic_notes.interfaces import BaseEmbedder
from semantic_notes.utils.logger import get_logger

logger = get_logger(__name__)

FallbackPolicy = Literal["absent", "random"]


class EmbeddingProvider:
    """Единая точка получения векторов.

    Бэкенд создаётся фабрикой при первом обращении, ровно один раз на
    экземпляр провайдера: конкурентные вызовы ждут на блокировке и
    получают ту же модель. Неудачная загрузка запоминается до reset(),
    повторных попыток на каждом embed() нет.

    Ошибки бэкенда не пробрасываются: они логируются как
    EmbeddingUnavailable, а вызывающий получает None (политика
    ``absent``) или случайный вектор (политика ``random``).

    Attributes:
        dimension: Размерность векторов процесса.
        fallback: Политика при недоступной модели.

    Example:
        >>> provider = EmbeddingProvider(lambda: create_embedder(config))
        >>> vector = provider.embed("Cats purr")
        >>> vector.shape
        (384,)
        >>> provider.embed("   ") is None
        True
    """

    def __init__(
        self,
        embedder_factory: Callable[[], BaseEmbedder],
        dimension: int = 384,
        fallback: FallbackPolicy = "absent",
    ):
        self._factory = embedder_factory
        self.dimension = dimension
        self.fallback = fallback

        self._lock = threading.Lock()
        self._embedder: Optional[BaseEmbedder] = None
        self._init_error: Optional[EmbeddingUnavailable] = None

    @property
    def is_ready(self) -> bool:
        """Модель загружена."""
        return self._embedder is not None

    @property
    def last_error(self) -> Optional[EmbeddingUnavailable]:
        """Причина неудачной загрузки, если она была."""
        return self._init_error

    def initialize(self) -> bool:
        """Загружает бэкенд, если он ещё не загружен.

        Returns:
            True если модель готова к работе.
        """
        if self._embedder is not None:
            return True

        with self._lock:
            if self._embedder is not None:
                return True
            if self._init_error is not None:
                return False

            start_time = time.perf_counter()
            try:
                embedder = self._factory()
            except Exception as e:
                self._init_error = EmbeddingUnavailable(
                    f"Embedding model failed to load: {e}", reason="load"
                )
                logger.error(
                    "Embedding model unavailable",
                    reason="load",
                    error_type=type(e).__name__,
                    error=str(e),
                )
                return False

            if embedder.dimension != self.dimension:
                self._init_error = EmbeddingUnavailable(
                    f"Model dimension {embedder.dimension} != {self.dimension}",
                    reason="dimension",
                )
                logger.error(
                    "Embedding model unavailable",
                    reason="dimension",
                    expected=self.dimension,
                    actual=embedder.dimension,
                )
                return False

            self._embedder = embedder
            logger.debug(
                "Embedding provider ready",
                dimension=self.dimension,
                latency_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )
            return True

    def reset(self) -> None:
        """Забывает модель и ошибку загрузки: следующий embed() загрузит заново."""
        with self._lock:
            self._embedder = None
            self._init_error = None

    def embed(self, text: Optional[str]) -> Optional[np.ndarray]:
        """Вектор текста, L2-нормализованный.

        Args:
            text: Текст. Пустой или из пробелов -> None без обращения к модели.

        Returns:
            float32 вектор длины ``dimension`` или None.
        """
        if not text or not text.strip():
            return None

        if not self.initialize():
            return self._fallback(self._init_error)

        try:
            vector = np.asarray(self._embedder.embed(text), dtype=np.float32).ravel()
        except Exception as e:
            return self._fallback(
                EmbeddingUnavailable(f"Embedding inference failed: {e}", reason="inference")
            )

        if vector.shape != (self.dimension,):
            return self._fallback(
                EmbeddingUnavailable(
                    f"Vector length {vector.size} != {self.dimension}",
                    reason="dimension",
                )
            )

        logger.trace("Text embedded", text_length=len(text))
        return self._normalize_vector(vector)

    def _fallback(self, error: Optional[EmbeddingUnavailable]) -> Optional[np.ndarray]:
        logger.warning(
            "Embedding unavailable",
            reason=error.reason if error else None,
            error=str(error) if error else None,
            fallback=self.fallback,
        )

        if self.fallback == "random":
            vector = np.random.default_rng().standard_normal(self.dimension)
            return self._normalize_vector(vector.astype(np.float32))
        return None

    @staticmethod
    def _normalize_vector(vector: np.ndarray) -> np.ndarray:
        norm = np.linalg.norm(vector)
        if norm == 0 or not np.isfinite(norm):
            return vector
        return (vector / norm).astype(np.float32)


def embed_notes(
    provider: EmbeddingProvider,
    notes: Iterable[Note],
    cache: Optional[EmbeddingCache] = None,
) -> dict[int, Optional[np.ndarray]]:
    """Эмбеддинги заметок: из кэша, а недостающие считаются и дописываются в него.

    Каждая заметка векторизуется не более одного раза за вызов.

    Returns:
        id заметки -> вектор (None, если текст пуст или модель недоступна).
    """
    vectors: dict[int, Optional[np.ndarray]] = {}
    computed = 0

    for note in notes:
        if note.id is None or note.id in vectors:
            continue

        text = derive_text(note)
        vector = cache.get(note.id, text=text) if cache is not None else None
        if vector is None:
            vector = provider.embed(text)
            computed += 1
            if vector is not None and cache is not None:
                cache.set(note.id, vector, text=text)
        vectors[note.id] = vector

    logger.debug("Note embeddings resolved", total=len(vectors), computed=computed)
    return vectors
