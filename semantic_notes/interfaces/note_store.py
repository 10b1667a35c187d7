"""Интерфейс хранилища заметок.

Классы:
    BaseNoteStore
        Контракт CRUD-хранилища заметок.
"""

from abc import ABC, abstractmethod
from typing import Optional

from semantic_notes.domain import Note, NoteDraft


class BaseNoteStore(ABC):
    """Долговременное отображение «id заметки -> заметка».

    Все методы, обращающиеся к движку хранения, пробрасывают его
    ошибки как StorageFailure.
    """

    @abstractmethod
    def list_all(self, owner_id: str) -> list[Note]:
        """Все заметки владельца. Порядок не гарантируется."""
        raise NotImplementedError

    @abstractmethod
    def get(self, note_id: int | str) -> Optional[Note]:
        """Заметка по id или None, если её нет."""
        raise NotImplementedError

    @abstractmethod
    def save(self, owner_id: str, draft: NoteDraft) -> Note:
        """Создаёт (draft.is_new) или частично обновляет заметку.

        Returns:
            Полная сохранённая запись с идентификатором.

        Raises:
            NoteNotFoundError: draft.id задан, но такой заметки нет.
            StorageFailure: Ошибка движка хранения.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, note_id: int | str) -> None:
        """Удаляет заметку. Отсутствующий id — no-op."""
        raise NotImplementedError

    @abstractmethod
    def count(self, owner_id: Optional[str] = None) -> int:
        """Количество заметок (всех или одного владельца)."""
        raise NotImplementedError
