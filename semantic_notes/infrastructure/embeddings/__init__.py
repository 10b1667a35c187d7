"""Бэкенды векторизации текста.

Модули:
    local
        SentenceTransformerEmbedder (по умолчанию).
    gemini
        GeminiEmbedder (нужен GEMINI_API_KEY).

Функции:
    create_embedder
        Создаёт бэкенд по конфигурации.
"""

from typing import TYPE_CHECKING

from semantic_notes.interfaces import BaseEmbedder

if TYPE_CHECKING:
    from semantic_notes.config import NotesConfig


def create_embedder(config: "NotesConfig") -> BaseEmbedder:
    """Создаёт (и тем самым загружает) бэкенд из конфигурации.

    Модули бэкендов импортируются по требованию: тяжёлые зависимости
    (torch, grpc) не грузятся, пока эмбеддинги не понадобились.

    Raises:
        ValueError: Для gemini без API ключа.
    """
    if config.embedding_backend == "gemini":
        from semantic_notes.infrastructure.embeddings.gemini import (
            DEFAULT_MODEL,
            GeminiEmbedder,
        )

        # Имена моделей Gemini начинаются с "models/"
        model_name = config.embedding_model
        if not model_name.startswith("models/"):
            model_name = DEFAULT_MODEL

        return GeminiEmbedder(
            api_key=config.require_api_key(),
            model_name=model_name,
            dimension=config.embedding_dimension,
        )

    from semantic_notes.infrastructure.embeddings.local import (
        SentenceTransformerEmbedder,
    )

    return SentenceTransformerEmbedder(model_name=config.embedding_model)


__all__ = ["create_embedder"]
