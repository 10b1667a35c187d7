"""Фильтр секретов для логов.

Классы:
    SensitiveDataFilter
        Заменяет API-ключи на ***REDACTED***.
"""

import logging
import re
from typing import Pattern

SENSITIVE_PATTERNS: list[Pattern[str]] = [
    re.compile(r"AIza[0-9A-Za-z_-]{35}"),  # Google API Key
    re.compile(r"sk_[0-9a-f]{32}"),  # Ключи моста заметок
    re.compile(r"sk-[0-9a-zA-Z]{20,}"),
    re.compile(r"hf_[0-9a-zA-Z]{30,}"),  # Hugging Face token
    re.compile(r"(?i)bearer\s+[a-zA-Z0-9_-]{20,}"),
]

REDACTED: str = "***REDACTED***"


class SensitiveDataFilter(logging.Filter):
    """Маскирует секреты в сообщении, аргументах и extra-контексте записи.

    Запись никогда не отбрасывается, только модифицируется.
    """

    def __init__(
        self,
        patterns: list[Pattern[str]] | None = None,
        redacted: str = REDACTED,
        name: str = "",
    ) -> None:
        super().__init__(name)
        self.patterns = patterns or SENSITIVE_PATTERNS
        self.redacted = redacted

    def _redact_string(self, text: str) -> str:
        for pattern in self.patterns:
            text = pattern.sub(self.redacted, text)
        return text

    def _redact_value(self, value: object) -> object:
        if isinstance(value, str):
            return self._redact_string(value)
        if isinstance(value, dict):
            return {k: self._redact_value(v) for k, v in value.items()}
        if isinstance(value, (list, tuple)):
            return type(value)(self._redact_value(item) for item in value)
        return value

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = self._redact_string(record.msg)

        if record.args:
            if isinstance(record.args, dict):
                record.args = {k: self._redact_value(v) for k, v in record.args.items()}
            elif isinstance(record.args, tuple):
                record.args = tuple(self._redact_value(arg) for arg in record.args)

        # Ключи могут прийти и через structured-контекст (logger.info(..., key=...))
        for attr in ("api_key", "key"):
            value = getattr(record, attr, None)
            if isinstance(value, str):
                setattr(record, attr, self._redact_string(value))

        return True
