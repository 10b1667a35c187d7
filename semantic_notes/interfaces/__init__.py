"""Интерфейсы (контракты) компонентов.

Классы:
    BaseEmbedder
        Бэкенд векторизации текста.
    BaseNoteStore
        Хранилище заметок.
"""

from semantic_notes.interfaces.embedder import BaseEmbedder
from semantic_notes.interfaces.note_store import BaseNoteStore

__all__ = [
    "BaseEmbedder",
    "BaseNoteStore",
]
