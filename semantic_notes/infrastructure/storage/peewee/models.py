"""Внутренние ORM модели (скрыты от внешнего API).

Классы:
    BaseModel
        Базовая модель без БД.
    NoteModel
        Таблица notes.
    SettingModel
        Таблица settings (ключ-значение).
    ApiKeyModel
        Таблица api_keys.
    BoundModels
        Копии моделей, привязанные к одному экземпляру БД.

Функции:
    bind_models
        Создаёт BoundModels для БД.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from peewee import (
    AutoField,
    BooleanField,
    DateTimeField,
    Model,
    TextField,
)
from playhouse.sqlite_ext import AutoIncrementField


class BaseModel(Model):
    """Базовая модель без привязки к БД.

    Запросы выполняются через подклассы из bind_models(): у каждой БД
    свои классы, поэтому два хранилища не делят _meta.database.
    """

    class Meta:
        database = None


class NoteModel(BaseModel):
    """Заметка.

    Attributes:
        id: AUTOINCREMENT, id удалённых заметок не переиспользуются.
        user_id: Владелец.
        title: Заголовок.
        content: HTML-контент редактора.
        links: JSON-список id заметок, на которые есть явные ссылки.
        created_at: Дата создания.
        updated_at: Дата последнего сохранения.
        is_synced: Всегда True в локальном режиме.
        last_synced_at: Не заполняется, поле оставлено для совместимости.
    """

    id = AutoIncrementField()
    user_id = TextField(index=True)
    title = TextField(default="")
    content = TextField(default="")
    links = TextField(default="[]")
    created_at = DateTimeField(default=datetime.now)
    updated_at = DateTimeField(default=datetime.now, index=True)
    is_synced = BooleanField(default=True)
    last_synced_at = DateTimeField(null=True)

    class Meta:
        table_name = "notes"


class SettingModel(BaseModel):
    """Настройка приложения (ключ-значение, значение — JSON)."""

    key = TextField(primary_key=True)
    value = TextField(null=True)

    class Meta:
        table_name = "settings"


class ApiKeyModel(BaseModel):
    """Ключ доступа для внешнего моста инструментов."""

    id = AutoField(primary_key=True)
    key = TextField(unique=True)
    name = TextField()
    created_at = DateTimeField(default=datetime.now)

    class Meta:
        table_name = "api_keys"


@dataclass(frozen=True)
class BoundModels:
    """Модели одной БД.

    Attributes:
        note: Подкласс NoteModel.
        setting: Подкласс SettingModel.
        api_key: Подкласс ApiKeyModel.
    """

    note: type[NoteModel]
    setting: type[SettingModel]
    api_key: type[ApiKeyModel]

    @property
    def all(self) -> list[type[BaseModel]]:
        return [self.note, self.setting, self.api_key]


def _bind(model: type[BaseModel], database: Any) -> type[BaseModel]:
    # Подкласс наследует поля и первичный ключ, table_name задаётся явно
    meta = type("Meta", (), {"database": database, "table_name": model._meta.table_name})
    return type(model.__name__, (model,), {"Meta": meta, "__module__": model.__module__})


def bind_models(database: Any) -> BoundModels:
    """Привязывает копии моделей к БД, не трогая классы модуля."""
    return BoundModels(
        note=_bind(NoteModel, database),
        setting=_bind(SettingModel, database),
        api_key=_bind(ApiKeyModel, database),
    )
