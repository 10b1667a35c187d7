"""Мост инструментов для внешнего ассистента.

Операции над заметками в виде «имя + JSON-аргументы -> JSON-ответ».
Транспорт (stdio, HTTP) сюда не входит.

Классы:
    NoteTools
        Реестр инструментов list_notes / get_note / save_note /
        delete_note / semantic_search.
"""

from typing import Any, Callable, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from semantic_notes.domain import NoteDraft
from semantic_notes.errors import EmbeddingUnavailable, NoteNotFoundError
from semantic_notes.pipeline import NotesCore
from semantic_notes.utils.logger import get_logger

logger = get_logger(__name__)

NOT_FOUND = {"error": "Note not found"}
EMBEDDING_FAILED = {"error": "Failed to generate embedding"}

NoteId = Union[int, str]


class ListNotesArgs(BaseModel):
    pass


class GetNoteArgs(BaseModel):
    id: NoteId = Field(description="The ID of the note to retrieve")


class SaveNoteArgs(BaseModel):
    id: Optional[NoteId] = Field(default=None, description="Optional ID of the note to update")
    title: str = Field(description="The title of the note")
    content: str = Field(description="The HTML content of the note")
    links: Optional[list[NoteId]] = Field(
        default=None, description="Optional IDs of notes this note links to"
    )


class DeleteNoteArgs(BaseModel):
    id: NoteId = Field(description="The ID of the note to delete")


class SemanticSearchArgs(BaseModel):
    query: str = Field(description="The search query")
    limit: int = Field(default=5, ge=1, le=100, description="Max number of results to return")


class NoteTools:
    """Инструменты над заметками одного NotesCore.

    Каждый метод возвращает JSON-сериализуемую структуру. Ошибки
    «не найдено» и «нет эмбеддинга» возвращаются как ``{"error": ...}``,
    ошибки хранилища (StorageFailure) пробрасываются.

    Example:
        >>> tools = NoteTools(core)
        >>> tools.call("get_note", {"id": "42"})
        {'error': 'Note not found'}
    """

    def __init__(self, core: NotesCore):
        self.core = core
        self._registry: dict[str, tuple[str, type[BaseModel], Callable[..., Any]]] = {
            "list_notes": ("List all notes in the app", ListNotesArgs, self.list_notes),
            "get_note": ("Get a single note by its ID", GetNoteArgs, self.get_note),
            "save_note": ("Create or update a note", SaveNoteArgs, self.save_note),
            "delete_note": ("Delete a note by its ID", DeleteNoteArgs, self.delete_note),
            "semantic_search": (
                "Search notes using semantic similarity",
                SemanticSearchArgs,
                self.semantic_search,
            ),
        }

    @property
    def names(self) -> list[str]:
        return list(self._registry)

    def definitions(self) -> list[dict[str, Any]]:
        """Описания инструментов: имя, описание, JSON Schema аргументов."""
        return [
            {
                "name": name,
                "description": description,
                "schema": args_model.model_json_schema(),
            }
            for name, (description, args_model, _) in self._registry.items()
        ]

    def call(self, name: str, arguments: Optional[dict[str, Any]] = None) -> Any:
        """Вызывает инструмент по имени.

        Returns:
            Результат инструмента или ``{"error": ...}`` для неизвестного
            имени и невалидных аргументов.
        """
        entry = self._registry.get(name)
        if entry is None:
            logger.warning("Unknown tool requested", tool=name)
            return {"error": f"Unknown tool: {name}"}

        _, args_model, handler = entry
        try:
            args = args_model.model_validate(arguments or {})
        except ValidationError as e:
            logger.warning("Invalid tool arguments", tool=name, errors=e.error_count())
            return {"error": "Invalid arguments", "details": e.errors(include_url=False)}

        logger.debug("Tool called", tool=name)
        return handler(**args.model_dump())

    # === Инструменты ===

    def list_notes(self) -> list[dict[str, Any]]:
        return [{"id": note.id, "title": note.title} for note in self.core.list_notes()]

    def get_note(self, id: NoteId) -> dict[str, Any]:
        note = self.core.get_note(id)
        return note.to_dict() if note else dict(NOT_FOUND)

    def save_note(
        self,
        title: str,
        content: str,
        id: Optional[NoteId] = None,
        links: Optional[list[NoteId]] = None,
    ) -> dict[str, Any]:
        draft = NoteDraft(id=id, title=title, content=content, links=links)

        try:
            note = self.core.save_note(draft)
        except NoteNotFoundError:
            return dict(NOT_FOUND)
        return note.to_dict()

    def delete_note(self, id: NoteId) -> dict[str, Any]:
        self.core.delete_note(id)
        return {"success": True}

    def semantic_search(self, query: str, limit: int = 5) -> Any:
        try:
            hits = self.core.semantic_search(query, limit=limit)
        except EmbeddingUnavailable:
            return dict(EMBEDDING_FAILED)
        return [hit.to_dict() for hit in hits]
