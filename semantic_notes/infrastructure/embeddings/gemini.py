"""Удалённый бэкенд эмбеддингов через Google Gemini API.

Классы:
    GeminiEmbedder
        Адаптер Gemini Embedding с MRL-усечением до нужной размерности.
"""

import google.generativeai as genai
import numpy as np

from semantic_notes.interfaces import BaseEmbedder
from semantic_notes.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_MODEL = "models/gemini-embedding-001"


class GeminiEmbedder(BaseEmbedder):
    """Адаптер для Google Gemini Embedding API.

    output_dimensionality равен размерности процесса. Векторы разных
    бэкендов между собой несравнимы.

    Attributes:
        model_name: Название модели.
    """

    def __init__(
        self,
        api_key: str,
        model_name: str = DEFAULT_MODEL,
        dimension: int = 384,
    ):
        self.model_name = model_name
        self._dimension = dimension

        genai.configure(api_key=api_key)
        logger.debug("Embedder initialized", model=model_name, dimension=dimension)

    @property
    def dimension(self) -> int:
        return self._dimension

    def embed(self, text: str) -> np.ndarray:
        logger.trace("Generating embedding", text_length=len(text))

        try:
            result = genai.embed_content(
                model=self.model_name,
                content=text,
                task_type="SEMANTIC_SIMILARITY",
                output_dimensionality=self._dimension,
            )
        except Exception as e:
            logger.error("Embedding generation failed", error_type=type(e).__name__)
            raise RuntimeError(f"Ошибка при генерации эмбеддинга: {e}") from e

        return np.array(result["embedding"], dtype=np.float32)
