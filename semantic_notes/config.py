"""Единая конфигурация semantic_notes.

Загружает настройки из (в порядке приоритета):
1. Аргументы конструктора / CLI (переданные как kwargs)
2. Environment variables (NOTES_*, GEMINI_API_KEY)
3. .env файл
4. notes.toml в текущей или родительских директориях
5. Default values

Классы:
    NotesConfig
        Pydantic Settings с поддержкой TOML и env variables.

Функции:
    get_config
        Получить конфигурацию с возможными override'ами.
    find_config_file
        Найти notes.toml в текущей или родительских директориях.

Example:
    >>> from semantic_notes.config import get_config
    >>> config = get_config(db_path="/tmp/notes.db", log_level="DEBUG")
    >>> config.semantic_threshold
    0.75
"""

import tomllib
from pathlib import Path
from typing import Any, Literal, Optional

from pydantic import Field, field_validator, model_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from semantic_notes.domain import DEFAULT_OWNER_ID
from semantic_notes.utils.logger import get_logger

logger = get_logger(__name__)

CONFIG_FILE_NAME = "notes.toml"

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
EmbeddingBackend = Literal["local", "gemini"]
EmbeddingFallback = Literal["absent", "random"]

# (секция, ключ) в notes.toml -> поле конфига
TOML_MAPPING: dict[tuple[str, str], str] = {
    ("database", "path"): "db_path",
    ("database", "owner_id"): "owner_id",
    ("embedding", "backend"): "embedding_backend",
    ("embedding", "model"): "embedding_model",
    ("embedding", "dimension"): "embedding_dimension",
    ("embedding", "fallback"): "embedding_fallback",
    ("graph", "semantic_threshold"): "semantic_threshold",
    ("autosave", "delay_ms"): "autosave_delay_ms",
    ("search", "limit"): "search_limit",
    ("logging", "level"): "log_level",
    ("logging", "file"): "log_file",
}


def find_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Найти notes.toml в текущей или родительских директориях.

    Args:
        start_dir: Начальная директория поиска (по умолчанию cwd).

    Returns:
        Path к notes.toml или None если не найден.
    """
    current = start_dir or Path.cwd()

    # Не выше 10 уровней
    for _ in range(10):
        config_path = current / CONFIG_FILE_NAME
        if config_path.exists():
            return config_path

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def load_toml(path: Path) -> dict[str, Any]:
    """Загружает notes.toml и выравнивает секции в плоский словарь.

    [embedding]
    backend = "local"

    превращается в ``{"embedding_backend": "local"}``. Плоские ключи
    верхнего уровня тоже принимаются.
    """
    try:
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to load TOML", path=str(path), error=str(e))
        return {}

    flat: dict[str, Any] = {}

    for (section, key), field_name in TOML_MAPPING.items():
        if isinstance(raw.get(section), dict) and key in raw[section]:
            flat[field_name] = raw[section][key]

    for field_name in TOML_MAPPING.values():
        if field_name in raw:
            flat[field_name] = raw[field_name]

    return flat


class TomlFileSource(PydanticBaseSettingsSource):
    """Источник настроек из notes.toml (ниже env и .env по приоритету)."""

    def __init__(self, settings_cls: type[BaseSettings]):
        super().__init__(settings_cls)
        path = find_config_file()
        self._data: dict[str, Any] = load_toml(path) if path else {}
        if path:
            logger.debug("Loaded config from TOML", path=str(path))

    def get_field_value(self, field: FieldInfo, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, False

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


class NotesConfig(BaseSettings):
    """Конфигурация semantic_notes.

    Attributes:
        db_path: Путь к SQLite базе данных (":memory:" для тестов).
        owner_id: Владелец заметок в однопользовательском режиме.
        embedding_backend: local (sentence-transformers) или gemini.
        embedding_model: Имя модели выбранного бэкенда.
        embedding_dimension: Размерность векторов процесса.
        embedding_fallback: Что делать, если модель недоступна:
            absent — заметка остаётся без эмбеддинга,
            random — случайный вектор (старое поведение).
        gemini_api_key: Ключ для бэкенда gemini.
        semantic_threshold: Порог сходства для семантических рёбер (строго больше).
        autosave_delay_ms: Пауза бездействия перед автосохранением.
        search_limit: Количество результатов поиска по умолчанию.
        log_level: Уровень логирования консоли.
        log_file: Путь к файлу логов.

    Environment Variables:
        GEMINI_API_KEY: API ключ (без префикса NOTES_).
        NOTES_DB_PATH, NOTES_EMBEDDING_BACKEND, NOTES_LOG_LEVEL, ...
    """

    # === Database ===
    db_path: Path = Field(
        default=Path("notes.db"),
        description="Путь к SQLite базе данных",
    )

    owner_id: str = Field(
        default=DEFAULT_OWNER_ID,
        min_length=1,
        description="Владелец заметок",
    )

    # === Embeddings ===
    embedding_backend: EmbeddingBackend = Field(
        default="local",
        description="Бэкенд эмбеддингов",
    )

    embedding_model: str = Field(
        default="sentence-transformers/all-MiniLM-L6-v2",
        description="Модель эмбеддингов",
    )

    embedding_dimension: int = Field(
        default=384,
        ge=1,
        le=3072,
        description="Размерность векторов",
    )

    embedding_fallback: EmbeddingFallback = Field(
        default="absent",
        description="Поведение при недоступной модели",
    )

    gemini_api_key: Optional[str] = Field(
        default=None,
        description="API ключ для Google Gemini",
        validation_alias="GEMINI_API_KEY",
    )

    # === Graph ===
    semantic_threshold: float = Field(
        default=0.75,
        ge=-1.0,
        le=1.0,
        description="Порог косинусного сходства для семантических рёбер",
    )

    # === Autosave ===
    autosave_delay_ms: int = Field(
        default=1000,
        ge=0,
        le=60_000,
        description="Пауза бездействия перед автосохранением",
    )

    # === Search ===
    search_limit: int = Field(
        default=5,
        ge=1,
        le=100,
        description="Количество результатов по умолчанию",
    )

    # === Logging ===
    log_level: LogLevel = Field(
        default="INFO",
        description="Уровень логирования",
    )

    log_file: Optional[Path] = Field(
        default=None,
        description="Путь к файлу логов (None = только консоль)",
    )

    model_config = SettingsConfigDict(
        env_prefix="NOTES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # === Validators ===
    @field_validator("db_path", mode="before")
    @classmethod
    def validate_db_path(cls, v: Any) -> Path:
        if v is None:
            return Path("notes.db")
        if str(v) == ":memory:":
            return Path(":memory:")
        return Path(v).expanduser()

    @field_validator("log_file", mode="before")
    @classmethod
    def validate_log_file(cls, v: Any) -> Optional[Path]:
        if v is None or v == "":
            return None
        return Path(v).expanduser()

    @field_validator("gemini_api_key", mode="before")
    @classmethod
    def strip_whitespace(cls, v: Any) -> Optional[str]:
        """Убирает пробелы из ключа."""
        if v is None or v == "":
            return None
        return str(v).strip()

    @model_validator(mode="after")
    def log_config_source(self) -> "NotesConfig":
        logger.debug(
            "Config loaded",
            db_path=str(self.db_path),
            backend=self.embedding_backend,
            fallback=self.embedding_fallback,
            has_api_key=self.gemini_api_key is not None,
        )
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlFileSource(settings_cls),
            file_secret_settings,
        )

    # === Utility Methods ===

    @property
    def autosave_delay(self) -> float:
        """Пауза автосохранения в секундах."""
        return self.autosave_delay_ms / 1000

    def require_api_key(self) -> str:
        """Получить API ключ или выбросить исключение.

        Raises:
            ValueError: Если ключ не настроен.
        """
        if not self.gemini_api_key:
            raise ValueError(
                "GEMINI_API_KEY not configured. "
                f"Set it via environment variable or in {CONFIG_FILE_NAME}"
            )
        return self.gemini_api_key

    def to_toml_dict(self) -> dict[str, Any]:
        """Структура для записи в notes.toml (без API ключа)."""
        return {
            "database": {
                "path": str(self.db_path),
                "owner_id": self.owner_id,
            },
            "embedding": {
                "backend": self.embedding_backend,
                "model": self.embedding_model,
                "dimension": self.embedding_dimension,
                "fallback": self.embedding_fallback,
            },
            "graph": {
                "semantic_threshold": self.semantic_threshold,
            },
            "autosave": {
                "delay_ms": self.autosave_delay_ms,
            },
            "search": {
                "limit": self.search_limit,
            },
            "logging": {
                "level": self.log_level,
                **({"file": str(self.log_file)} if self.log_file else {}),
            },
        }


# === Global Config Accessor ===

_config: Optional[NotesConfig] = None


def get_config(**overrides: Any) -> NotesConfig:
    """Получить конфигурацию с возможными override'ами.

    При первом вызове создаёт конфигурацию. Если переданы overrides,
    всегда создаёт новый экземпляр.

    Args:
        **overrides: CLI аргументы для переопределения.
    """
    global _config

    if overrides or _config is None:
        _config = NotesConfig(**overrides)

    return _config


def reset_config() -> None:
    """Сбросить глобальный конфиг (для тестов)."""
    global _config
    _config = None


__all__ = [
    "NotesConfig",
    "get_config",
    "reset_config",
    "find_config_file",
    "load_toml",
    "LogLevel",
    "EmbeddingBackend",
    "EmbeddingFallback",
]
