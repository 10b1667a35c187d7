"""Отложенное автосохранение редактируемой заметки.

Классы:
    AutosaveScheduler
        Владелец черновика: debounce-таймер, немедленное сохранение, отмена.
"""

import threading
from typing import Any, Callable, Optional

from semantic_notes.domain import Note, NoteDraft, normalize_links
from semantic_notes.errors import NotesError
from semantic_notes.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_DELAY = 1.0

Saver = Callable[[NoteDraft], Note]
TimerFactory = Callable[..., Any]


class AutosaveScheduler:
    """Черновик одной открытой заметки и его сохранение.

    Редактор меняет черновик через update_*, таймер при срабатывании
    читает актуальное состояние черновика, а не снимок на момент
    планирования.

    - schedule_save() перезапускает таймер тишины (по умолчанию 1 с).
    - save_now() отменяет таймер и сохраняет сразу (вставка картинки, blur).
    - switch_note() / close() отменяют таймер без сохранения.

    Первое сохранение новой заметки запоминает назначенный id, дальше
    идут только обновления. Сохранения сериализуются блокировкой.

    Attributes:
        delay: Пауза тишины в секундах.

    Example:
        >>> autosave = AutosaveScheduler(lambda d: store.save("local-user", d))
        >>> autosave.update_title("Cats")
        >>> autosave.schedule_save()
        >>> autosave.save_now()  # таймер отменён, одна запись
        Note(id=1, title='Cats')
    """

    def __init__(
        self,
        saver: Saver,
        note: Optional[Note] = None,
        delay: float = DEFAULT_DELAY,
        on_saved: Optional[Callable[[Note], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
        timer_factory: TimerFactory = threading.Timer,
    ):
        self._saver = saver
        self.delay = delay
        self.on_saved = on_saved
        self.on_error = on_error
        self._timer_factory = timer_factory

        # Состояние черновика и таймера
        self._state_lock = threading.Lock()
        # Сериализация записей в хранилище
        self._save_lock = threading.Lock()

        self._timer: Optional[Any] = None
        self._ticket = 0
        self._generation = 0
        self._saving = False
        self._closed = False

        self._load(note)

    # === Черновик ===

    @property
    def note_id(self) -> Optional[int]:
        return self._note_id

    @property
    def draft(self) -> NoteDraft:
        """Снимок текущего черновика."""
        with self._state_lock:
            return self._snapshot()

    @property
    def is_saving(self) -> bool:
        return self._saving

    @property
    def pending(self) -> bool:
        """Запланировано отложенное сохранение."""
        return self._timer is not None

    def update_title(self, title: str) -> None:
        with self._state_lock:
            self._title = title

    def update_content(self, content: str) -> None:
        with self._state_lock:
            self._content = content

    def update_links(self, links: list[int]) -> None:
        with self._state_lock:
            self._links = normalize_links(links)

    # === Планирование ===

    def schedule_save(self) -> None:
        """Перезапускает таймер тишины."""
        with self._state_lock:
            if self._closed:
                logger.debug("Autosave closed, schedule ignored")
                return

            self._cancel_timer()
            self._ticket += 1
            timer = self._timer_factory(
                self.delay, self._fire, args=(self._ticket, self._generation)
            )
            timer.daemon = True
            self._timer = timer

        timer.start()
        logger.trace("Autosave scheduled", note_id=self._note_id, delay=self.delay)

    def save_now(self) -> Optional[Note]:
        """Отменяет таймер и сохраняет черновик сразу.

        Returns:
            Сохранённая заметка или None, если сохранение не удалось
            (ошибка передана в on_error) или планировщик закрыт.
        """
        with self._state_lock:
            if self._closed:
                return None
            self._cancel_timer()
            self._ticket += 1
            generation = self._generation

        return self._persist(generation)

    def switch_note(self, note: Optional[Note]) -> None:
        """Загружает другую заметку (None - новая), отложенное сохранение отменяется."""
        with self._state_lock:
            self._cancel_timer()
            self._ticket += 1
            self._generation += 1
            self._load(note)

        logger.debug("Autosave switched note", note_id=self._note_id)

    def close(self) -> None:
        """Отменяет отложенное сохранение без записи (редактор закрыт)."""
        with self._state_lock:
            self._cancel_timer()
            self._ticket += 1
            self._generation += 1
            self._closed = True

        logger.debug("Autosave closed", note_id=self._note_id)

    # === Внутреннее ===

    def _load(self, note: Optional[Note]) -> None:
        self._note_id = note.id if note else None
        self._title = note.title if note else ""
        self._content = note.content if note else ""
        self._links = list(note.links) if note else []

    def _snapshot(self) -> NoteDraft:
        return NoteDraft(
            id=self._note_id,
            title=self._title,
            content=self._content,
            links=list(self._links),
        )

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self, ticket: int, generation: int) -> None:
        with self._state_lock:
            # Таймер уже перезапущен или отменён
            if ticket != self._ticket:
                return
            self._timer = None

        self._persist(generation)

    def _persist(self, generation: int) -> Optional[Note]:
        with self._save_lock:
            with self._state_lock:
                if generation != self._generation:
                    logger.debug("Stale autosave dropped")
                    return None
                draft = self._snapshot()

            self._saving = True
            try:
                note = self._saver(draft)
            except NotesError as e:
                logger.error(
                    "Autosave failed",
                    note_id=draft.id,
                    error_type=type(e).__name__,
                    error=str(e),
                )
                if self.on_error:
                    self.on_error(e)
                return None
            finally:
                self._saving = False

            with self._state_lock:
                if generation == self._generation and self._note_id is None:
                    self._note_id = note.id

        logger.debug("Autosave persisted", note_id=note.id)
        if self.on_saved:
            self.on_saved(note)
        return note
