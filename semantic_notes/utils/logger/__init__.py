"""Логирование semantic_notes: rich-консоль, файл, маскирование секретов.

Функции:
    get_logger(name: str) -> NotesLogger
        Логгер модуля (ленивая настройка с дефолтами).
    setup_logging(config: LoggingConfig | None = None) -> None
        Настройка хендлеров корневого логгера пакета.

Environment Variables:
    NOTES_LOG_LEVEL, NOTES_LOG_FILE, NOTES_LOG_JSON, NOTES_LOG_REDACT.

Example:
    >>> from semantic_notes.utils.logger import get_logger
    >>> logger = get_logger(__name__)
    >>> logger.info("Graph rebuilt", nodes=12, edges=7)
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

from .config import LoggingConfig
from .filters import SensitiveDataFilter
from .formatters import FileFormatter, JSONFormatter
from .levels import TRACE, install_trace_level
from .logger import NotesLogger

install_trace_level()

_logging_configured: bool = False
_current_config: LoggingConfig | None = None

ROOT_LOGGER_NAME: str = "semantic_notes"


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Настраивает корневой логгер ``semantic_notes``.

    Безопасно вызывать повторно: старые хендлеры снимаются.

    Args:
        config: Конфигурация. None — значения из окружения/дефолты.
    """
    global _logging_configured, _current_config

    config = config or LoggingConfig()
    _current_config = config

    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    # Фильтрация по уровням делается на хендлерах
    root_logger.setLevel(TRACE)

    sensitive_filter = SensitiveDataFilter() if config.redact_secrets else None

    # markup=False: префиксы [owner/note] не должны разбираться как rich-стили
    # Логи в stderr: stdout занят выводом CLI (в том числе --json)
    console_handler = RichHandler(
        console=Console(stderr=True),
        level=logging.getLevelName(config.level),
        show_time=True,
        show_level=False,
        show_path=config.show_path,
        rich_tracebacks=True,
        markup=False,
    )
    if sensitive_filter:
        console_handler.addFilter(sensitive_filter)
    root_logger.addHandler(console_handler)

    if config.log_file:
        file_handler = logging.FileHandler(config.log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(logging.getLevelName(config.file_level))
        file_handler.setFormatter(FileFormatter(json_context=config.json_format))
        if sensitive_filter:
            file_handler.addFilter(sensitive_filter)
        root_logger.addHandler(file_handler)

    root_logger.propagate = False

    _logging_configured = True


def get_logger(name: str) -> NotesLogger:
    """Логгер для модуля (обычно ``get_logger(__name__)``)."""
    if not _logging_configured:
        setup_logging()

    return NotesLogger(name)


def get_current_config() -> LoggingConfig:
    """Активная конфигурация логирования или дефолтная."""
    return _current_config or LoggingConfig()


__all__ = [
    "TRACE",
    "get_logger",
    "setup_logging",
    "get_current_config",
    "NotesLogger",
    "LoggingConfig",
    "FileFormatter",
    "JSONFormatter",
    "SensitiveDataFilter",
]
