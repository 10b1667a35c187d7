"""Хранилище на Peewee + SQLite.

Модули:
    engine
        Подключение к SQLite и миграции схемы.
    models
        Внутренние ORM модели.
    adapter
        Реализация BaseNoteStore.
    settings_store
        Таблицы settings и api_keys.
"""

from semantic_notes.infrastructure.storage.peewee.adapter import PeeweeNoteStore
from semantic_notes.infrastructure.storage.peewee.engine import (
    SCHEMA_VERSION,
    init_peewee_database,
)
from semantic_notes.infrastructure.storage.peewee.settings_store import (
    PeeweeApiKeyStore,
    PeeweeSettingsStore,
)

__all__ = [
    "PeeweeNoteStore",
    "PeeweeSettingsStore",
    "PeeweeApiKeyStore",
    "SCHEMA_VERSION",
    "init_peewee_database",
]
