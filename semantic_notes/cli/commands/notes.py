"""Команды работы с заметками.

Usage:
    notes list
    notes show 3
    notes save --title "Cats" --content "<p>purr</p>" --link 2
    notes save --id 3 --content "<p>updated</p>"
    notes delete 3
"""

import json
from typing import Optional

import typer
from rich.panel import Panel
from rich.table import Table

from semantic_notes.cli.console import console
from semantic_notes.core import strip_markup
from semantic_notes.domain import Note, NoteDraft
from semantic_notes.errors import NoteNotFoundError, NotesError


def _fail(message: str, json_output: bool) -> None:
    if json_output:
        console.print_json(json.dumps({"error": message}))
    else:
        console.print(f"[red]❌ {message}[/red]")
    raise typer.Exit(1)


def _preview(note: Note, width: int = 60) -> str:
    text = strip_markup(note.content).strip()
    return text if len(text) <= width else text[:width] + "..."


def list_notes() -> None:
    """Список заметок, последние изменённые первыми."""
    from semantic_notes.cli.app import get_cli_context

    cli_ctx = get_cli_context()
    try:
        notes = cli_ctx.get_core().list_notes()
    except NotesError as e:
        _fail(str(e), cli_ctx.json_output)

    if cli_ctx.json_output:
        data = [
            {"id": note.id, "title": note.title, "updatedAt": note.updated_at.isoformat()}
            for note in notes
        ]
        console.print_json(json.dumps(data, ensure_ascii=False))
        return

    if not notes:
        console.print("[yellow]Заметок пока нет[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Заголовок", style="cyan")
    table.add_column("Изменена")
    table.add_column("Текст", overflow="fold")

    for note in notes:
        table.add_row(
            str(note.id),
            note.display_title,
            note.updated_at.strftime("%Y-%m-%d %H:%M"),
            _preview(note),
        )

    console.print(table)


def show_note(
    note_id: str = typer.Argument(..., help="ID заметки"),
) -> None:
    """Показать заметку целиком."""
    from semantic_notes.cli.app import get_cli_context

    cli_ctx = get_cli_context()
    try:
        note = cli_ctx.get_core().get_note(note_id)
    except NotesError as e:
        _fail(str(e), cli_ctx.json_output)

    if note is None:
        _fail("Note not found", cli_ctx.json_output)

    if cli_ctx.json_output:
        console.print_json(json.dumps(note.to_dict(), ensure_ascii=False))
        return

    links = ", ".join(str(target) for target in note.links) or "—"
    console.print(
        Panel(
            strip_markup(note.content).strip() or "[dim]пусто[/dim]",
            title=f"📝 #{note.id} {note.display_title}",
            subtitle=f"изменена {note.updated_at:%Y-%m-%d %H:%M} · ссылки: {links}",
        )
    )


def save_note(
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Заголовок"),
    content: Optional[str] = typer.Option(None, "--content", "-c", help="HTML-контент"),
    note_id: Optional[int] = typer.Option(
        None, "--id", help="ID обновляемой заметки (без него создаётся новая)"
    ),
    links: Optional[list[int]] = typer.Option(
        None, "--link", help="ID заметки, на которую ссылается эта (можно повторять)"
    ),
) -> None:
    """Создать заметку или обновить переданные поля существующей."""
    from semantic_notes.cli.app import get_cli_context

    cli_ctx = get_cli_context()

    draft = NoteDraft(
        id=note_id,
        title=title,
        content=content,
        links=links or None,
    )
    if draft.is_new:
        draft.title = title or ""
        draft.content = content or ""

    try:
        note = cli_ctx.get_core().save_note(draft)
    except NoteNotFoundError:
        _fail("Note not found", cli_ctx.json_output)
    except NotesError as e:
        _fail(str(e), cli_ctx.json_output)

    if cli_ctx.json_output:
        console.print_json(json.dumps(note.to_dict(), ensure_ascii=False))
        return

    action = "создана" if draft.is_new else "обновлена"
    console.print(f"[green]✅ Заметка #{note.id} {action}[/green]")


def delete_note(
    note_id: str = typer.Argument(..., help="ID заметки"),
) -> None:
    """Удалить заметку (отсутствующий ID не ошибка)."""
    from semantic_notes.cli.app import get_cli_context

    cli_ctx = get_cli_context()
    try:
        cli_ctx.get_core().delete_note(note_id)
    except NotesError as e:
        _fail(str(e), cli_ctx.json_output)

    if cli_ctx.json_output:
        console.print_json(json.dumps({"success": True}))
    else:
        console.print(f"[green]🗑️  Заметка #{note_id} удалена[/green]")
