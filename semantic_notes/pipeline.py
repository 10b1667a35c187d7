"""Фасад локального ядра заметок.

Классы:
    NotesCore
        Явно сконструированный контекст: хранилище, эмбеддинги, граф, поиск.
"""

from typing import TYPE_CHECKING, Callable, Optional

from semantic_notes.core import (
    AutosaveScheduler,
    EmbeddingCache,
    EmbeddingProvider,
    RelationshipGraphBuilder,
    SemanticSearch,
)
from semantic_notes.domain import (
    DEFAULT_OWNER_ID,
    GraphData,
    Note,
    NoteDraft,
    SearchHit,
    Theme,
    coerce_note_id,
)
from semantic_notes.interfaces import BaseNoteStore
from semantic_notes.utils.logger import get_logger

if TYPE_CHECKING:
    from semantic_notes.config import NotesConfig

logger = get_logger(__name__)


class NotesCore:
    """Главный объект ядра заметок.

    Все компоненты передаются явно (Dependency Injection), глобального
    состояния нет: в тестах достаточно собрать NotesCore с in-memory
    БД и фиктивным эмбеддером.

    Attributes:
        store: Хранилище заметок.
        provider: Провайдер эмбеддингов.
        cache: Кэш эмбеддингов заметок.
        builder: Построитель графа.
        search: Семантический поиск.
        owner_id: Владелец заметок.
        search_limit: Лимит выдачи по умолчанию.
        autosave_delay: Пауза автосохранения в секундах.

    Example:
        >>> core = NotesCore.from_config(get_config())
        >>> note = core.save_note(NoteDraft(title="Cats", content="<p>purr</p>"))
        >>> graph = core.build_graph(filter_text="cat")
        >>> hits = core.semantic_search("kittens")
    """

    def __init__(
        self,
        store: BaseNoteStore,
        provider: EmbeddingProvider,
        cache: Optional[EmbeddingCache] = None,
        builder: Optional[RelationshipGraphBuilder] = None,
        search: Optional[SemanticSearch] = None,
        owner_id: str = DEFAULT_OWNER_ID,
        search_limit: int = 5,
        autosave_delay: float = 1.0,
    ):
        self.store = store
        self.provider = provider
        self.cache = cache if cache is not None else EmbeddingCache()
        self.builder = builder or RelationshipGraphBuilder(provider)
        self.search = search or SemanticSearch(provider)
        self.owner_id = owner_id
        self.search_limit = search_limit
        self.autosave_delay = autosave_delay

        self.log = logger.bind(owner_id=owner_id)

    @classmethod
    def from_config(cls, config: "NotesConfig") -> "NotesCore":
        """Собирает ядро из конфигурации.

        Модель эмбеддингов не загружается здесь: провайдер создаст её
        при первом обращении.
        """
        from semantic_notes.infrastructure.embeddings import create_embedder
        from semantic_notes.infrastructure.storage import (
            PeeweeNoteStore,
            init_peewee_database,
        )

        database = init_peewee_database(config.db_path)
        store = PeeweeNoteStore(database)
        provider = EmbeddingProvider(
            lambda: create_embedder(config),
            dimension=config.embedding_dimension,
            fallback=config.embedding_fallback,
        )

        return cls(
            store=store,
            provider=provider,
            builder=RelationshipGraphBuilder(provider, threshold=config.semantic_threshold),
            owner_id=config.owner_id,
            search_limit=config.search_limit,
            autosave_delay=config.autosave_delay,
        )

    # === Notes ===

    def list_notes(self) -> list[Note]:
        """Заметки владельца, последние изменённые первыми."""
        notes = self.store.list_all(self.owner_id)
        return sorted(notes, key=lambda note: note.updated_at, reverse=True)

    def get_note(self, note_id: int | str) -> Optional[Note]:
        return self.store.get(note_id)

    def save_note(self, draft: NoteDraft) -> Note:
        """Создаёт или обновляет заметку.

        Raises:
            NoteNotFoundError: Обновление несуществующей заметки.
            StorageFailure: Ошибка хранилища.
        """
        return self.store.save(self.owner_id, draft)

    def delete_note(self, note_id: int | str) -> None:
        """Удаляет заметку и её вектор из кэша."""
        self.store.delete(note_id)

        key = coerce_note_id(note_id)
        if key is not None:
            self.cache.invalidate(key)
            self.log.debug("Note evicted from cache", note_id=key)

    # === Graph & search ===

    def build_graph(self, filter_text: str = "", theme: Theme = "dark") -> GraphData:
        return self.builder.build(
            self.list_notes(),
            filter_text=filter_text,
            theme=theme,
            cache=self.cache,
        )

    def semantic_search(self, query: str, limit: Optional[int] = None) -> list[SearchHit]:
        """Поиск заметок по смыслу.

        Raises:
            EmbeddingUnavailable: Запрос не удалось векторизовать.
        """
        return self.search.search(
            self.list_notes(),
            query,
            limit=limit if limit is not None else self.search_limit,
            cache=self.cache,
        )

    # === Editor ===

    def create_autosave(
        self,
        note: Optional[Note] = None,
        on_saved: Optional[Callable[[Note], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
        **kwargs,
    ) -> AutosaveScheduler:
        """Планировщик автосохранения для открытой в редакторе заметки.

        Args:
            note: Загруженная заметка или None для новой.
            on_saved: Вызывается после каждого успешного сохранения.
            on_error: Вызывается с исключением при неудачном сохранении.
            **kwargs: Передаются в AutosaveScheduler (например, timer_factory).
        """
        kwargs.setdefault("delay", self.autosave_delay)
        return AutosaveScheduler(
            self.save_note,
            note=note,
            on_saved=on_saved,
            on_error=on_error,
            **kwargs,
        )
