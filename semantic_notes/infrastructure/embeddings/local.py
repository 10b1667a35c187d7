"""Локальный бэкенд эмбеддингов на sentence-transformers.

Классы:
    SentenceTransformerEmbedder
        Модель all-MiniLM-L6-v2 (384 измерения, mean pooling) в процессе.
"""

import time
from typing import Optional

import numpy as np

from semantic_notes.interfaces import BaseEmbedder
from semantic_notes.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_MODEL = "sentence-transformers/all-MiniLM-L6-v2"


class SentenceTransformerEmbedder(BaseEmbedder):
    """Адаптер для sentence-transformers.

    Конструктор загружает веса (при первом запуске скачивает их),
    поэтому экземпляр создаётся один раз через EmbeddingProvider.

    Attributes:
        model_name: Имя модели на Hugging Face Hub.
        model: Загруженный SentenceTransformer.
    """

    def __init__(
        self,
        model_name: str = DEFAULT_MODEL,
        device: Optional[str] = None,
    ):
        # Импорт здесь: torch грузится только при первом эмбеддинге
        from sentence_transformers import SentenceTransformer

        start_time = time.perf_counter()
        self.model_name = model_name
        self.model = SentenceTransformer(model_name, device=device)
        self._dimension = int(self.model.get_sentence_embedding_dimension())

        logger.info(
            "Embedding model loaded",
            model=model_name,
            dimension=self._dimension,
            latency_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )

    @property
    def dimension(self) -> int:
        return self._dimension

    def embed(self, text: str) -> np.ndarray:
        try:
            vector = self.model.encode(
                text,
                convert_to_numpy=True,
                normalize_embeddings=True,
                show_progress_bar=False,
            )
        except Exception as e:
            raise RuntimeError(f"Ошибка при генерации эмбеддинга: {e}") from e

        logger.trace("Embedding generated", text_length=len(text), dimension=len(vector))
        return np.asarray(vector, dtype=np.float32)
