"""Форматтеры логов с семантическими эмодзи.

Классы:
    FileFormatter
        Однострочный формат для файла (plain или JSON-контекст).
    JSONFormatter
        Полностью структурированный JSON для агрегаторов логов.
"""

import json
import logging
from datetime import datetime
from typing import Any

from .levels import TRACE

# Паттерн имени модуля -> эмодзи
EMOJI_MAP: dict[str, str] = {
    "pipeline": "📥",
    "core": "📥",
    "storage": "💾",
    "adapter": "💾",
    "peewee": "💾",
    "settings_store": "💾",
    "engine": "🗄️",
    "models": "🗄️",
    "embeddings": "🧠",
    "embedding_provider": "🧠",
    "embedding_cache": "🧠",
    "local": "🧠",
    "gemini": "🧠",
    "similarity": "📐",
    "graph_builder": "🕸️",
    "autosave": "⏱️",
    "search": "🔍",
    "tools": "🔌",
    "integrations": "🔌",
    "config": "⚙️",
    "cli": "🖥️",
    "commands": "🖥️",
}

LEVEL_EMOJI: dict[int, str] = {
    logging.CRITICAL: "💀",
    logging.ERROR: "❌",
    logging.WARNING: "⚠️",
    logging.INFO: "",  # для INFO берётся эмодзи модуля
    logging.DEBUG: "🔧",
    TRACE: "🔬",
}

FALLBACK_EMOJI: str = "📌"

# Ключи, которые выносятся в префикс сообщения
CONTEXT_ID_KEYS: tuple[str, ...] = (
    "owner_id",
    "note_id",
    "request_id",
)

_STANDARD_FIELDS = frozenset(
    {
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "stack_info",
        "exc_info",
        "exc_text",
        "thread",
        "threadName",
        "taskName",
        "message",
    }
)


def get_module_emoji(logger_name: str) -> str:
    """Подбирает эмодзи по имени логгера (с конца, от частного к общему)."""
    for part in reversed(logger_name.lower().split(".")):
        if part in EMOJI_MAP:
            return EMOJI_MAP[part]
    return FALLBACK_EMOJI


def format_extra_context(record: logging.LogRecord) -> dict[str, Any]:
    """Возвращает пользовательский контекст записи без стандартных полей."""
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_FIELDS
        and key not in CONTEXT_ID_KEYS
        and not key.startswith("_")
    }


class FileFormatter(logging.Formatter):
    """Формат: 2026-10-16 14:20:02 | STORAGE | INFO | 💾 [local-user/3] Note saved | k=v"""

    def __init__(self, json_context: bool = False) -> None:
        super().__init__()
        self.json_context = json_context

    def format(self, record: logging.LogRecord) -> str:
        time_str = datetime.fromtimestamp(record.created).strftime("%Y-%m-%d %H:%M:%S")
        module = record.name.split(".")[-1].upper()
        message = record.getMessage()

        parts = [time_str, module, record.levelname, message]

        extra = format_extra_context(record)
        if extra:
            if self.json_context:
                parts.append(json.dumps(extra, ensure_ascii=False, default=str))
            else:
                parts.append(" ".join(f"{k}={v}" for k, v in extra.items()))

        result = " | ".join(parts)
        if record.exc_info:
            result += "\n" + self.formatException(record.exc_info)
        return result


class JSONFormatter(logging.Formatter):
    """JSON-форматтер.

    Формат:
        {
            "timestamp": "2026-10-16T14:30:00.123Z",
            "level": "INFO",
            "logger": "semantic_notes.pipeline",
            "message": "Note saved",
            "context": {"note_id": 3},
            "extra": {"latency_ms": 1.2}
        }
    """

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = {
            key: getattr(record, key)
            for key in CONTEXT_ID_KEYS
            if getattr(record, key, None) is not None
        }
        if context:
            data["context"] = context

        extra = format_extra_context(record)
        if extra:
            data["extra"] = extra

        if record.exc_info:
            data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        return json.dumps(data, ensure_ascii=False, default=str)
