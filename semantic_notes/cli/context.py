"""CLI Context — контейнер зависимостей для команд.

Компоненты создаются лениво, чтобы --help работал мгновенно.

Classes:
    CLIContext: Контейнер с ленивой загрузкой NotesCore и хранилищ.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Optional

from rich.console import Console

from semantic_notes.cli.console import console as default_console
from semantic_notes.config import NotesConfig, get_config

if TYPE_CHECKING:
    from semantic_notes.infrastructure.storage import PeeweeApiKeyStore
    from semantic_notes.pipeline import NotesCore


@dataclass
class CLIContext:
    """Контейнер зависимостей для CLI команд.

    Attributes:
        db_path: Override пути к БД из CLI.
        log_level: Override уровня логирования из CLI.
        json_output: Режим JSON вывода (для скриптов).
        console: Rich Console для вывода.

    Example:
        >>> ctx = CLIContext(db_path=Path("/tmp/notes.db"))
        >>> core = ctx.get_core()  # БД открывается здесь, модель - при первом эмбеддинге
    """

    db_path: Optional[Path] = None
    log_level: Optional[str] = None
    json_output: bool = False
    console: Console = field(default_factory=lambda: default_console)

    _config: Optional[NotesConfig] = field(default=None, init=False, repr=False)
    _core: Optional["NotesCore"] = field(default=None, init=False, repr=False)
    _api_keys: Optional["PeeweeApiKeyStore"] = field(default=None, init=False, repr=False)
    _logging_configured: bool = field(default=False, init=False, repr=False)

    def get_config(self) -> NotesConfig:
        """Конфигурация с учётом CLI overrides."""
        if self._config is None:
            overrides = {}
            if self.db_path:
                overrides["db_path"] = self.db_path
            if self.log_level:
                overrides["log_level"] = self.log_level.upper()

            self._config = get_config(**overrides)
        return self._config

    def get_core(self) -> "NotesCore":
        if self._core is None:
            from semantic_notes.pipeline import NotesCore

            config = self.get_config()
            self._ensure_logging(config)
            self._core = NotesCore.from_config(config)
        return self._core

    def get_api_keys(self) -> "PeeweeApiKeyStore":
        """Хранилище API ключей на той же БД, что и заметки."""
        if self._api_keys is None:
            from semantic_notes.infrastructure.storage import PeeweeApiKeyStore

            self._api_keys = PeeweeApiKeyStore(self.get_core().store.db)
        return self._api_keys

    def _ensure_logging(self, config: NotesConfig) -> None:
        """Настройка логирования из конфига (один раз)."""
        if self._logging_configured:
            return

        from semantic_notes.utils.logger import LoggingConfig, setup_logging

        setup_logging(LoggingConfig(level=config.log_level, log_file=config.log_file))
        self._logging_configured = True


__all__ = ["CLIContext"]
