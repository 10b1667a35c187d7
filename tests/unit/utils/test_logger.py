"""Тесты для модуля логирования semantic_notes.utils.logger.

Покрытие:
- levels.py: регистрация TRACE
- config.py: LoggingConfig дефолты и валидация
- filters.py: SensitiveDataFilter маскирование ключей
- formatters.py: get_module_emoji, FileFormatter, JSONFormatter
- logger.py: NotesLogger, bind(), префикс контекста
"""

import json
import logging

import pytest
from pydantic import ValidationError

from semantic_notes.utils.logger import (
    TRACE,
    LoggingConfig,
    NotesLogger,
    get_logger,
    setup_logging,
)
from semantic_notes.utils.logger.filters import REDACTED, SensitiveDataFilter
from semantic_notes.utils.logger.formatters import (
    EMOJI_MAP,
    FALLBACK_EMOJI,
    FileFormatter,
    JSONFormatter,
    get_module_emoji,
)
from semantic_notes.utils.logger.levels import install_trace_level

NOTES_KEY = "sk_" + "0123456789abcdef" * 2
GOOGLE_KEY = "AIza" + "A" * 35


class _Capture(logging.Handler):
    def __init__(self):
        super().__init__(level=TRACE)
        self.records: list[logging.LogRecord] = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def captured():
    """Перехватывает записи логгера semantic_notes.tests.capture."""
    handler = _Capture()
    target = logging.getLogger("semantic_notes.tests.capture")
    target.addHandler(handler)
    target.setLevel(TRACE)
    yield handler
    target.removeHandler(handler)
    target.setLevel(logging.NOTSET)


def _record(msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="semantic_notes.core.search",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=msg,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestLevels:
    """Тесты для levels.py."""

    def test_trace_registered(self):
        assert TRACE == 5
        assert logging.getLevelName(TRACE) == "TRACE"
        assert hasattr(logging.getLogger("test.trace"), "trace")

    def test_install_idempotent(self):
        install_trace_level()
        install_trace_level()
        assert logging.getLevelName(TRACE) == "TRACE"


class TestLoggingConfig:
    """Тесты для LoggingConfig."""

    def test_defaults(self, monkeypatch):
        for name in ("NOTES_LOG_LEVEL", "NOTES_LOG_FILE", "NOTES_LOG_JSON", "NOTES_LOG_REDACT"):
            monkeypatch.delenv(name, raising=False)

        config = LoggingConfig()

        assert config.level == "INFO"
        assert config.file_level == "TRACE"
        assert config.log_file is None
        assert config.show_path is False
        assert config.redact_secrets is True

    def test_invalid_level(self):
        with pytest.raises(ValidationError):
            LoggingConfig(level="VERBOSE")

    def test_frozen(self):
        config = LoggingConfig()
        with pytest.raises(ValidationError):
            config.level = "DEBUG"


class TestSensitiveDataFilter:
    """Тесты для SensitiveDataFilter."""

    def test_redacts_bridge_key_in_message(self):
        record = _record(f"Key issued: {NOTES_KEY}")

        assert SensitiveDataFilter().filter(record) is True
        assert NOTES_KEY not in record.msg
        assert REDACTED in record.msg

    def test_redacts_google_key_in_args(self):
        record = _record("Configured %s")
        record.args = (GOOGLE_KEY,)

        SensitiveDataFilter().filter(record)

        assert record.getMessage() == f"Configured {REDACTED}"

    def test_redacts_structured_context(self):
        record = _record("Verifying key", key=NOTES_KEY)

        SensitiveDataFilter().filter(record)

        assert record.key == REDACTED

    def test_plain_text_untouched(self):
        record = _record("Note saved")
        SensitiveDataFilter().filter(record)
        assert record.msg == "Note saved"


class TestFormatters:
    """Тесты для formatters.py."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("semantic_notes.core.search", EMOJI_MAP["search"]),
            ("semantic_notes.core.autosave", EMOJI_MAP["autosave"]),
            ("semantic_notes.infrastructure.storage.peewee.adapter", EMOJI_MAP["adapter"]),
            ("semantic_notes.core.unknown_module", EMOJI_MAP["core"]),
            ("thirdparty.module", FALLBACK_EMOJI),
        ],
    )
    def test_module_emoji(self, name, expected):
        assert get_module_emoji(name) == expected

    def test_file_formatter_plain_context(self):
        line = FileFormatter().format(_record("Search done", hits=3, note_id=7))

        assert "| SEARCH | INFO | Search done" in line
        assert "hits=3" in line
        # note_id уходит в префикс, а не в хвост контекста
        assert "note_id=7" not in line

    def test_file_formatter_json_context(self):
        line = FileFormatter(json_context=True).format(_record("Search done", hits=3))
        assert line.endswith('{"hits": 3}')

    def test_json_formatter(self):
        data = json.loads(
            JSONFormatter().format(_record("Note saved", owner_id="alice", latency_ms=1.5))
        )

        assert data["level"] == "INFO"
        assert data["logger"] == "semantic_notes.core.search"
        assert data["message"] == "Note saved"
        assert data["context"] == {"owner_id": "alice"}
        assert data["extra"] == {"latency_ms": 1.5}


class TestNotesLogger:
    """Тесты для NotesLogger."""

    def test_get_logger_returns_wrapper(self):
        logger = get_logger("semantic_notes.tests.capture")
        assert isinstance(logger, NotesLogger)

    def test_context_passed_as_extra(self, captured):
        NotesLogger("semantic_notes.tests.capture").info("Graph built", nodes=3)

        record = captured.records[-1]
        assert record.nodes == 3
        assert record.getMessage().endswith("Graph built")

    def test_bind_builds_prefix(self, captured):
        log = NotesLogger("semantic_notes.tests.capture").bind(owner_id="alice")

        log.info("Note saved", note_id=3)

        record = captured.records[-1]
        assert "[alice/3] Note saved" in record.getMessage()
        assert record.owner_id == "alice"

    def test_bind_does_not_mutate_parent(self, captured):
        parent = NotesLogger("semantic_notes.tests.capture")
        parent.bind(owner_id="alice")

        parent.info("Plain")

        assert "[alice]" not in captured.records[-1].getMessage()

    def test_level_emoji_overrides_module(self, captured):
        NotesLogger("semantic_notes.tests.capture").warning("Careful")
        assert captured.records[-1].getMessage().startswith("⚠️")

    def test_trace_level(self, captured):
        NotesLogger("semantic_notes.tests.capture").trace("Vector dump", size=384)

        assert captured.records[-1].levelno == TRACE


class TestSetupLogging:
    """Тесты для setup_logging()."""

    def test_file_handler_writes_redacted(self, tmp_path):
        log_file = tmp_path / "notes.log"
        setup_logging(LoggingConfig(level="ERROR", log_file=log_file))
        try:
            get_logger("semantic_notes.tests.file").info(f"Issued {NOTES_KEY}")
            for handler in logging.getLogger("semantic_notes").handlers:
                handler.flush()

            content = log_file.read_text(encoding="utf-8")
            assert "Issued" in content
            assert NOTES_KEY not in content
        finally:
            setup_logging(LoggingConfig())

    def test_repeated_setup_replaces_handlers(self):
        setup_logging(LoggingConfig())
        setup_logging(LoggingConfig())

        assert len(logging.getLogger("semantic_notes").handlers) == 1
