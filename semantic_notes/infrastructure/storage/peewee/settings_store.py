"""Вспомогательные таблицы в той же БД, что и заметки.

Классы:
    PeeweeSettingsStore
        Настройки ключ-значение (значения сериализуются в JSON).
    PeeweeApiKeyStore
        Ключи доступа для внешнего моста инструментов.
"""

import json
import uuid
from typing import Any, Optional

from semantic_notes.domain import ApiKey
from semantic_notes.infrastructure.storage.peewee.adapter import storage_errors
from semantic_notes.infrastructure.storage.peewee.engine import NotesDatabase
from semantic_notes.utils.logger import get_logger

logger = get_logger(__name__)

API_KEY_PREFIX = "sk_"


class PeeweeSettingsStore:
    """Таблица settings.

    Таблицы создаются PeeweeNoteStore; этот класс работает с моделью
    той же БД.

    Example:
        >>> settings = PeeweeSettingsStore(db)
        >>> settings.set("theme", "dark")
        >>> settings.get("theme")
        'dark'
    """

    def __init__(self, database: NotesDatabase):
        self.db = database
        self.model = database.models.setting

    def get(self, key: str, default: Any = None) -> Any:
        with storage_errors("settings.get"):
            row = self.model.get_or_none(self.model.key == key)
        if row is None or row.value is None:
            return default
        return json.loads(row.value)

    def set(self, key: str, value: Any) -> None:
        with storage_errors("settings.set"):
            self.model.replace(key=key, value=json.dumps(value)).execute()
        logger.debug("Setting stored", setting=key)

    def delete(self, key: str) -> None:
        with storage_errors("settings.delete"):
            self.model.delete().where(self.model.key == key).execute()

    def all(self) -> dict[str, Any]:
        with storage_errors("settings.all"):
            rows = list(self.model.select())
        return {row.key: json.loads(row.value) if row.value else None for row in rows}


class PeeweeApiKeyStore:
    """Таблица api_keys."""

    def __init__(self, database: NotesDatabase):
        self.db = database
        self.model = database.models.api_key

    def generate(self, name: Optional[str] = None) -> ApiKey:
        """Создаёт ключ ``sk_<uuid4 hex>``.

        Args:
            name: Имя ключа; по умолчанию "Key N" (N = число ключей + 1).
        """
        with storage_errors("api_keys.generate"):
            if name is None:
                name = f"Key {self.model.select().count() + 1}"
            row = self.model.create(
                key=f"{API_KEY_PREFIX}{uuid.uuid4().hex}",
                name=name,
            )

        logger.info("API key generated", key_id=row.id)
        return ApiKey(key=row.key, name=row.name, id=row.id, created_at=row.created_at)

    def list(self) -> list[ApiKey]:
        with storage_errors("api_keys.list"):
            rows = list(self.model.select().order_by(self.model.id))
        return [
            ApiKey(key=row.key, name=row.name, id=row.id, created_at=row.created_at)
            for row in rows
        ]

    def delete(self, key_id: int) -> None:
        with storage_errors("api_keys.delete"):
            deleted = self.model.delete().where(self.model.id == key_id).execute()
        if deleted:
            logger.info("API key deleted", key_id=key_id)

    def verify(self, key: str) -> bool:
        """Проверяет, что ключ выдан и не удалён."""
        with storage_errors("api_keys.verify"):
            return self.model.select().where(self.model.key == key).exists()
