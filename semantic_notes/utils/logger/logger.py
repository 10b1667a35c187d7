"""Логгер со структурированным контекстом.

Классы:
    NotesLogger
        Обёртка над logging.Logger: kwargs-контекст, bind(), эмодзи модуля.
"""

from __future__ import annotations

import logging
from typing import Any

from .formatters import CONTEXT_ID_KEYS, LEVEL_EMOJI, get_module_emoji
from .levels import TRACE


class NotesLogger:
    """Адаптер для структурированного логирования.

    Контекст передаётся именованными аргументами и попадает в
    ``LogRecord`` через ``extra``. Ключи из ``CONTEXT_ID_KEYS``
    дополнительно выносятся в префикс сообщения.

    Example:
        >>> logger = NotesLogger("semantic_notes.pipeline")
        >>> log = logger.bind(owner_id="local-user")
        >>> log.info("Note saved", note_id=3)  # -> 📥 [local-user/3] Note saved
    """

    def __init__(self, name: str, context: dict[str, Any] | None = None) -> None:
        self.name = name
        self._logger = logging.getLogger(name)
        self._context: dict[str, Any] = context or {}

    def bind(self, **context: Any) -> NotesLogger:
        """Возвращает новый логгер с объединённым контекстом."""
        return NotesLogger(self.name, {**self._context, **context})

    def _log(
        self, level: int, msg: str, exc_info: bool = False, **context: Any
    ) -> None:
        if not self._logger.isEnabledFor(level):
            return

        extra = {**self._context, **context}

        ids = [str(extra[key]) for key in CONTEXT_ID_KEYS if extra.get(key) is not None]
        prefix = f"[{'/'.join(ids)}] " if ids else ""

        # Эмодзи уровня важнее эмодзи модуля (кроме INFO)
        emoji = LEVEL_EMOJI.get(level, "") or get_module_emoji(self.name)

        self._logger.log(level, f"{emoji} {prefix}{msg}", exc_info=exc_info, extra=extra)

    def trace(self, msg: str, **context: Any) -> None:
        """TRACE (5): тексты для эмбеддингов, размеры векторов."""
        self._log(TRACE, msg, **context)

    def debug(self, msg: str, **context: Any) -> None:
        self._log(logging.DEBUG, msg, **context)

    def info(self, msg: str, **context: Any) -> None:
        self._log(logging.INFO, msg, **context)

    def warning(self, msg: str, **context: Any) -> None:
        self._log(logging.WARNING, msg, **context)

    def error(self, msg: str, **context: Any) -> None:
        self._log(logging.ERROR, msg, **context)

    def critical(self, msg: str, **context: Any) -> None:
        self._log(logging.CRITICAL, msg, **context)

    def exception(self, msg: str, **context: Any) -> None:
        """ERROR с traceback текущего исключения."""
        self._log(logging.ERROR, msg, exc_info=True, **context)

    def is_enabled_for(self, level: int) -> bool:
        return self._logger.isEnabledFor(level)

    @property
    def level(self) -> int:
        """Эффективный уровень обёрнутого логгера."""
        return self._logger.getEffectiveLevel()
