"""Модель заметки.

Классы:
    Note
        Сохранённая заметка (DTO, не привязан к ORM).
    NoteDraft
        Данные для записи: создание или частичное обновление.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Optional

DEFAULT_OWNER_ID = "local-user"
UNTITLED = "Untitled"


def coerce_note_id(value: Any) -> Optional[int]:
    """Приводит внешний идентификатор ("42", 42) к int.

    Returns:
        Положительный int или None, если значение не похоже на id.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value > 0 else None
    try:
        number = int(str(value).strip())
    except ValueError:
        return None
    return number if number > 0 else None


def normalize_links(links: Optional[Iterable[Any]]) -> list[int]:
    """Чистит список явных ссылок: int, без мусора и повторов, порядок сохраняется."""
    result: list[int] = []
    for raw in links or ():
        target = coerce_note_id(raw)
        if target is not None and target not in result:
            result.append(target)
    return result


@dataclass
class Note:
    """Заметка в локальном хранилище.

    Attributes:
        id: Локальный идентификатор, назначается хранилищем при вставке.
        user_id: Владелец (в однопользовательском режиме всегда один).
        title: Заголовок.
        content: Текст в HTML-разметке редактора.
        created_at: Дата создания.
        updated_at: Дата последнего сохранения (>= created_at).
        links: Идентификаторы заметок, на которые ссылается эта.
        is_synced: Флаг синхронизации, в локальном режиме всегда True.
        last_synced_at: Сохраняется для совместимости схемы.
    """

    id: Optional[int] = None
    user_id: str = DEFAULT_OWNER_ID
    title: str = ""
    content: str = ""
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)
    links: list[int] = field(default_factory=list)
    is_synced: bool = True
    last_synced_at: Optional[datetime] = None

    @property
    def display_title(self) -> str:
        """Заголовок для списков и графа."""
        return self.title or UNTITLED

    def to_dict(self) -> dict[str, Any]:
        """Сериализация в JSON-совместимый словарь (camelCase, как в схеме v2)."""
        return {
            "id": self.id,
            "userId": self.user_id,
            "title": self.title,
            "content": self.content,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
            "links": list(self.links),
            "isSynced": self.is_synced,
            "lastSyncedAt": (
                self.last_synced_at.isoformat() if self.last_synced_at else None
            ),
        }

    def __repr__(self) -> str:
        return f"Note(id={self.id}, title='{self.title[:30]}')"


@dataclass
class NoteDraft:
    """Полезная нагрузка для NoteStore.save().

    None у поля означает «не передано»: при обновлении такие поля
    не трогаются. Пустая строка — это значение.

    Attributes:
        id: Идентификатор обновляемой заметки; None, 0 или "" — создать новую.
        title: Новый заголовок.
        content: Новый HTML-контент.
        links: Новый список явных ссылок.
    """

    id: Optional[int] = None
    title: Optional[str] = None
    content: Optional[str] = None
    links: Optional[list[int]] = None

    @property
    def is_new(self) -> bool:
        """Без id (None, 0 или "") заметка создаётся заново."""
        return not self.id

    def changes(self) -> dict[str, Any]:
        """Переданные поля без идентификатора."""
        payload = {
            "title": self.title,
            "content": self.content,
            "links": self.links,
        }
        return {key: value for key, value in payload.items() if value is not None}

    @classmethod
    def from_note(cls, note: Note) -> "NoteDraft":
        return cls(
            id=note.id,
            title=note.title,
            content=note.content,
            links=list(note.links),
        )
