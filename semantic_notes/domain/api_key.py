"""Ключ доступа для внешнего моста инструментов.

Классы:
    ApiKey
        Сгенерированный ключ (хранится в той же БД, что и заметки).
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass
class ApiKey:
    """Запись таблицы api_keys.

    Attributes:
        key: Значение вида ``sk_<32 hex>``.
        name: Отображаемое имя ("Key 1", "Key 2", ...).
        id: Автоинкремент, заполняется после сохранения.
        created_at: Дата генерации.
    """

    key: str
    name: str
    id: Optional[int] = None
    created_at: datetime = field(default_factory=datetime.now)

    @property
    def masked(self) -> str:
        """Ключ для отображения: префикс и последние 4 символа."""
        return f"{self.key[:3]}…{self.key[-4:]}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "key": self.key,
            "name": self.name,
            "createdAt": self.created_at.isoformat(),
        }
