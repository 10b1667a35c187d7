"""CLI команды.

Модули:
    notes: notes list / show / save / delete — работа с заметками.
    search: notes search — семантический поиск.
    graph: notes graph — граф связей.
    keys: notes keys — ключи внешнего моста.
    config_cmd: notes config — просмотр конфигурации.
"""

from semantic_notes.cli.commands import config_cmd, graph, keys, notes, search

__all__ = [
    "config_cmd",
    "graph",
    "keys",
    "notes",
    "search",
]
