"""Интеграции с внешними потребителями ядра.

Модули:
    tools
        NoteTools: операции над заметками для ассистента.
"""

from semantic_notes.integrations.tools import NoteTools

__all__ = ["NoteTools"]
