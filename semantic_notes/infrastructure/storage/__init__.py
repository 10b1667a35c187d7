"""Адаптеры хранилища заметок.

Модули:
    peewee
        Реализация BaseNoteStore для SQLite + Peewee.
"""

from semantic_notes.infrastructure.storage.peewee import (
    PeeweeApiKeyStore,
    PeeweeNoteStore,
    PeeweeSettingsStore,
    init_peewee_database,
)

__all__ = [
    "PeeweeNoteStore",
    "PeeweeSettingsStore",
    "PeeweeApiKeyStore",
    "init_peewee_database",
]
