"""Дополнительный уровень логирования TRACE.

Функции:
    install_trace_level()
        Регистрирует TRACE (5) в модуле logging.

Константы:
    TRACE: int
        Уровень ниже DEBUG — дампы векторов, тексты для эмбеддингов.
"""

import logging
from typing import Any

TRACE: int = 5

_installed: bool = False


def _trace(self: logging.Logger, message: str, *args: Any, **kwargs: Any) -> None:
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kwargs)


def install_trace_level() -> None:
    """Регистрирует имя уровня TRACE и метод Logger.trace().

    Повторные вызовы ничего не делают.
    """
    global _installed

    if _installed:
        return

    logging.addLevelName(TRACE, "TRACE")
    logging.TRACE = TRACE  # type: ignore[attr-defined]
    logging.Logger.trace = _trace  # type: ignore[attr-defined]

    _installed = True


install_trace_level()
