"""Кэш эмбеддингов заметок в памяти процесса.

Классы:
    EmbeddingCache
        Отображение «id заметки -> (отпечаток текста, вектор)».
"""

from dataclasses import dataclass
from typing import Optional

import numpy as np

from semantic_notes.core.text import text_digest
from semantic_notes.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class _Entry:
    digest: Optional[str]
    vector: np.ndarray


class EmbeddingCache:
    """Кэш векторов по id заметки.

    Вместе с вектором хранится отпечаток текста, из которого он
    посчитан. Если при чтении передан текущий текст и отпечаток не
    совпал, запись считается устаревшей и не возвращается.
    Не персистится; при конкурентной записи побеждает последняя.

    Example:
        >>> cache = EmbeddingCache()
        >>> cache.set(1, vector, text="Cats purr")
        >>> cache.get(1, text="Cats purr") is vector
        True
        >>> cache.get(1, text="Dogs bark") is None
        True
    """

    def __init__(self) -> None:
        self._entries: dict[int, _Entry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, note_id: int) -> bool:
        return note_id in self._entries

    def get(self, note_id: int, text: Optional[str] = None) -> Optional[np.ndarray]:
        """Вектор заметки или None.

        Args:
            note_id: Идентификатор заметки.
            text: Текущий текст заметки; если передан, запись с другим
                отпечатком считается промахом.
        """
        entry = self._entries.get(note_id)
        if entry is None:
            return None
        if text is not None and entry.digest is not None and entry.digest != text_digest(text):
            logger.trace("Stale embedding skipped", note_id=note_id)
            return None
        return entry.vector

    def set(self, note_id: int, vector: np.ndarray, text: Optional[str] = None) -> None:
        digest = text_digest(text) if text is not None else None
        self._entries[note_id] = _Entry(digest=digest, vector=vector)

    def invalidate(self, note_id: int) -> None:
        self._entries.pop(note_id, None)

    def clear(self) -> None:
        self._entries.clear()
