"""Реализация BaseNoteStore для Peewee + SQLite.

Классы:
    PeeweeNoteStore
        Хранилище заметок на SQLite.

Функции:
    storage_errors
        Контекст-менеджер: ошибки движка -> StorageFailure.
"""

import json
import sqlite3
import time
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, Optional

from peewee import PeeweeException

from semantic_notes.domain import Note, NoteDraft, coerce_note_id, normalize_links
from semantic_notes.errors import NoteNotFoundError, StorageFailure
from semantic_notes.interfaces import BaseNoteStore
from semantic_notes.infrastructure.storage.peewee.engine import (
    NotesDatabase,
    ensure_schema_compatibility,
)
from semantic_notes.infrastructure.storage.peewee.models import NoteModel
from semantic_notes.utils.logger import get_logger

logger = get_logger(__name__)


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Переводит ошибки peewee/sqlite3 в StorageFailure.

    Args:
        operation: Имя операции для сообщения об ошибке.

    Raises:
        StorageFailure: Если внутри блока упал движок хранения.
    """
    try:
        yield
    except (PeeweeException, sqlite3.Error) as e:
        logger.error(
            "Storage operation failed",
            operation=operation,
            error_type=type(e).__name__,
            error=str(e),
        )
        raise StorageFailure(operation, str(e)) from e


def _to_domain(model: NoteModel) -> Note:
    try:
        links = normalize_links(json.loads(model.links or "[]"))
    except (TypeError, ValueError):
        logger.warning("Corrupted links column, ignoring", note_id=model.id)
        links = []

    return Note(
        id=model.id,
        user_id=model.user_id,
        title=model.title or "",
        content=model.content or "",
        created_at=model.created_at,
        updated_at=model.updated_at,
        links=links,
        is_synced=bool(model.is_synced),
        last_synced_at=model.last_synced_at,
    )


class PeeweeNoteStore(BaseNoteStore):
    """Хранилище заметок на SQLite.

    Идентификаторы назначает SQLite (AUTOINCREMENT),
    клиентские id для новых заметок не принимаются.

    Attributes:
        db: Экземпляр NotesDatabase.
        model: Модель заметок, привязанная к db.
    """

    def __init__(self, database: NotesDatabase):
        """Создаёт таблицы в БД.

        Args:
            database: Подключённый экземпляр NotesDatabase.

        Raises:
            StorageFailure: Если не удалось создать или мигрировать схему.
        """
        self.db = database
        self.model = database.models.note

        with storage_errors("migrate"):
            self.db.create_tables(database.models.all, safe=True)
            ensure_schema_compatibility(self.db)

        logger.debug("PeeweeNoteStore initialized")

    def list_all(self, owner_id: str) -> list[Note]:
        with storage_errors("list"):
            models = list(self.model.select().where(self.model.user_id == owner_id))

        logger.debug("Notes listed", owner_id=owner_id, count=len(models))
        return [_to_domain(model) for model in models]

    def get(self, note_id: int | str) -> Optional[Note]:
        key = coerce_note_id(note_id)
        if key is None:
            logger.debug("Invalid note id requested", requested=repr(note_id))
            return None

        with storage_errors("get"):
            model = self.model.get_or_none(self.model.id == key)

        if model is None:
            logger.debug("Note not found", note_id=key)
            return None
        return _to_domain(model)

    def save(self, owner_id: str, draft: NoteDraft) -> Note:
        start_time = time.perf_counter()

        if draft.is_new:
            note = self._insert(owner_id, draft)
            action = "Note created"
        else:
            note = self._update(owner_id, draft)
            action = "Note updated"

        logger.info(
            action,
            owner_id=owner_id,
            note_id=note.id,
            latency_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )
        return note

    def _insert(self, owner_id: str, draft: NoteDraft) -> Note:
        now = datetime.now()

        with storage_errors("insert"):
            model = self.model.create(
                user_id=owner_id,
                title=draft.title or "",
                content=draft.content or "",
                links=json.dumps(normalize_links(draft.links)),
                created_at=now,
                updated_at=now,
                is_synced=True,
            )

        return _to_domain(model)

    def _update(self, owner_id: str, draft: NoteDraft) -> Note:
        key = coerce_note_id(draft.id)
        if key is None:
            raise NoteNotFoundError(draft.id)

        # id в payload не попадает: первичный ключ неизменяем
        payload = draft.changes()
        if "links" in payload:
            payload["links"] = json.dumps(normalize_links(payload["links"]))

        with storage_errors("update"):
            with self.db.atomic():
                current = self.model.get_or_none(self.model.id == key)
                if current is None:
                    raise NoteNotFoundError(key)

                payload.update(
                    user_id=owner_id,
                    is_synced=True,
                    # Часы могли уйти назад: updated_at не раньше created_at
                    updated_at=max(datetime.now(), current.created_at),
                )
                self.model.update(**payload).where(self.model.id == key).execute()
                model = self.model.get_by_id(key)

        return _to_domain(model)

    def delete(self, note_id: int | str) -> None:
        key = coerce_note_id(note_id)
        if key is None:
            return

        with storage_errors("delete"):
            deleted = self.model.delete().where(self.model.id == key).execute()

        if deleted:
            logger.info("Note deleted", note_id=key)
        else:
            logger.debug("Delete of missing note ignored", note_id=key)

    def count(self, owner_id: Optional[str] = None) -> int:
        with storage_errors("count"):
            query = self.model.select()
            if owner_id is not None:
                query = query.where(self.model.user_id == owner_id)
            return query.count()
