"""Иерархия исключений semantic_notes.

Классы:
    NotesError
        Базовое исключение пакета.
    StorageFailure
        Ошибка движка хранения (I/O, блокировка, повреждение БД).
    NoteNotFoundError
        Обновление заметки с несуществующим id.
    EmbeddingUnavailable
        Модель эмбеддингов не загрузилась или упала на инференсе.

Поиск по id и удаление отсутствующей заметки исключений не бросают:
первый возвращает None, второе — no-op.
"""

from typing import Optional


class NotesError(Exception):
    """Базовое исключение semantic_notes."""


class StorageFailure(NotesError):
    """Ошибка хранилища, пробрасывается вызывающему коду.

    Attributes:
        operation: Операция хранилища (list/get/save/delete/...).
    """

    def __init__(self, operation: str, message: str):
        self.operation = operation
        super().__init__(f"Storage {operation} failed: {message}")


class NoteNotFoundError(NotesError):
    """Попытка обновить заметку, которой нет в хранилище.

    Attributes:
        note_id: Запрошенный идентификатор.
    """

    def __init__(self, note_id: object):
        self.note_id = note_id
        super().__init__(f"Note {note_id!r} not found")


class EmbeddingUnavailable(NotesError):
    """Эмбеддинг не может быть получен.

    Внутри EmbeddingProvider перехватывается и логируется; наружу
    выходит только из семантического поиска, когда не удалось
    векторизовать сам запрос.

    Attributes:
        reason: Краткая причина (load/inference/dimension).
    """

    def __init__(self, message: str, reason: Optional[str] = None):
        self.reason = reason
        super().__init__(message)
