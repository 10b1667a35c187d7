"""Инициализация SQLite БД для заметок.

Функции:
    init_peewee_database
        Создаёт и настраивает подключение.
    ensure_schema_compatibility
        Доводит схему старых баз до текущей версии.
"""

import sqlite3
from pathlib import Path

from playhouse.sqlite_ext import SqliteExtDatabase

from semantic_notes.infrastructure.storage.peewee.models import BoundModels, bind_models
from semantic_notes.utils.logger import get_logger

logger = get_logger(__name__)

# Версия схемы хранится в PRAGMA user_version
SCHEMA_VERSION = 2

MEMORY_PATH = ":memory:"


class NotesDatabase(SqliteExtDatabase):
    """SQLite БД заметок.

    Для файла peewee открывает по соединению на поток, и таймер
    автосохранения пишет в тот же файл через своё соединение. In-memory
    БД существует только внутри своего соединения, поэтому для
    ":memory:" init_peewee_database включает одно общее соединение.

    Attributes:
        models: Модели, привязанные к этому экземпляру.
    """

    def __init__(self, database: str | Path, *args, **kwargs):
        super().__init__(database, *args, **kwargs)
        self.models: BoundModels = bind_models(self)
        logger.debug("NotesDatabase created", path=str(database))

    def _add_conn_hooks(self, conn: sqlite3.Connection) -> None:
        super()._add_conn_hooks(conn)
        logger.trace("SQLite connection opened")


def init_peewee_database(db_path: str | Path) -> NotesDatabase:
    """Создаёт подключение к БД заметок.

    Args:
        db_path: Путь к файлу БД или ":memory:".

    Returns:
        Подключённый экземпляр NotesDatabase.
    """
    db_path = str(db_path)
    options = {}
    if db_path == MEMORY_PATH:
        # Одно соединение на все потоки, иначе поток таймера увидит пустую БД
        options = {"thread_safe": False, "check_same_thread": False}
    else:
        Path(db_path).expanduser().parent.mkdir(parents=True, exist_ok=True)

    logger.info("Initializing database", path=db_path)

    database = NotesDatabase(
        db_path,
        pragmas={
            "journal_mode": "wal",
            "cache_size": -1024 * 16,  # 16MB
            "foreign_keys": 1,
            "busy_timeout": 5000,
            "synchronous": 1,  # NORMAL: заметки не должны теряться при сбое
        },
        **options,
    )
    database.connect()

    return database


def ensure_schema_compatibility(database: NotesDatabase) -> None:
    """Миграция схемы для баз, созданных ранними версиями.

    Миграции:
        - notes.links: JSON-список явных ссылок (версия 2).
        - PRAGMA user_version = SCHEMA_VERSION.

    Args:
        database: Подключённая БД с уже созданными таблицами.
    """
    cursor = database.execute_sql("PRAGMA table_info(notes)")
    existing_columns = {row[1] for row in cursor.fetchall()}

    if "links" not in existing_columns:
        database.execute_sql("ALTER TABLE notes ADD COLUMN links TEXT NOT NULL DEFAULT '[]'")
        logger.info("Added column 'notes.links'")

    version = database.execute_sql("PRAGMA user_version").fetchone()[0]
    if version < SCHEMA_VERSION:
        database.execute_sql(f"PRAGMA user_version = {SCHEMA_VERSION}")
        logger.info(
            "Schema version updated",
            from_version=version,
            to_version=SCHEMA_VERSION,
        )
