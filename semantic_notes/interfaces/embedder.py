"""Интерфейс для моделей эмбеддингов.

Классы:
    BaseEmbedder
        ABC для бэкендов векторизации (локальная модель, Gemini).
"""

from abc import ABC, abstractmethod

import numpy as np


class BaseEmbedder(ABC):
    """Абстрактный бэкенд «текст -> вектор».

    Создание экземпляра — это загрузка модели, поэтому бэкенды
    конструируются лениво через EmbeddingProvider.
    """

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Размерность выдаваемых векторов."""
        raise NotImplementedError

    @abstractmethod
    def embed(self, text: str) -> np.ndarray:
        """Векторизует один текст.

        Args:
            text: Непустой текст.

        Returns:
            Вектор float32 (mean pooling, без гарантий нормализации).

        Raises:
            RuntimeError: Если модель вернула ошибку.
        """
        raise NotImplementedError
