"""Результат семантического поиска.

Классы:
    SearchHit
        Заметка из выдачи с оценкой сходства.
"""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class SearchHit:
    """Элемент выдачи семантического поиска.

    Attributes:
        id: Идентификатор заметки.
        title: Заголовок заметки.
        similarity: Косинусное сходство с запросом (-1.0 .. 1.0).
    """

    id: int
    title: str
    similarity: float

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "title": self.title, "similarity": self.similarity}

    def __repr__(self) -> str:
        return f"SearchHit(id={self.id}, title='{self.title[:30]}', similarity={self.similarity:.3f})"
