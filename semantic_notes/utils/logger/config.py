"""Конфигурация логирования.

Классы:
    LoggingConfig
        Pydantic-модель с чтением переменных окружения NOTES_LOG_*.

Environment Variables:
    NOTES_LOG_LEVEL: Уровень консольного вывода.
    NOTES_LOG_FILE: Путь к файлу логов.
    NOTES_LOG_JSON: JSON-формат для файла (true/false).
    NOTES_LOG_REDACT: Маскировать ключи (true/false).
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingConfig(BaseSettings):
    """Настройки логирования.

    Приоритет: явный параметр > переменная окружения > значение по умолчанию.

    Attributes:
        level: Минимальный уровень для консоли.
        file_level: Минимальный уровень для файла.
        log_file: Путь к файлу логов (None — только консоль).
        json_format: Писать контекст в файл как JSON.
        show_path: Показывать модуль и строку в консоли.
        redact_secrets: Маскировать API-ключи.

    Example:
        >>> config = LoggingConfig(level="DEBUG", log_file="/tmp/notes.log")
    """

    level: LogLevel = Field(
        default="INFO",
        description="Минимальный уровень для консольного вывода",
    )

    file_level: LogLevel = Field(
        default="TRACE",
        description="Минимальный уровень для файлового вывода",
    )

    log_file: Path | None = Field(
        default=None,
        alias="file",
        description="Путь к файлу логов (None = только консоль)",
    )

    json_format: bool = Field(
        default=False,
        alias="json",
        description="JSON-формат контекста в файле",
    )

    show_path: bool = Field(
        default=False,
        description="Показывать путь к модулю в консоли",
    )

    redact_secrets: bool = Field(
        default=True,
        alias="redact",
        description="Маскировать API-ключи в логах",
    )

    model_config = SettingsConfigDict(
        env_prefix="NOTES_LOG_",
        env_file=None,
        extra="forbid",
        frozen=True,
        populate_by_name=True,
    )
