"""Подготовка текста заметки к векторизации.

Функции:
    strip_markup
        HTML редактора -> обычный текст.
    derive_text
        Текст, по которому считается эмбеддинг заметки.
    text_digest
        Отпечаток текста для проверки свежести кэша.
"""

import hashlib
import html
import re

from semantic_notes.domain import Note

_TAG_RE = re.compile(r"<[^>]*>")


def strip_markup(content: str) -> str:
    """Убирает теги и раскрывает HTML-сущности (&amp; -> &)."""
    return html.unescape(_TAG_RE.sub("", content or ""))


def derive_text(note: Note) -> str:
    """Заголовок + пробел + контент без разметки.

    Example:
        >>> derive_text(Note(title="Cats", content="<p>purr &amp; nap</p>"))
        'Cats purr & nap'
    """
    return f"{note.title or ''} {strip_markup(note.content)}"


def text_digest(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()
