"""Команда search — семантический поиск по заметкам.

Usage:
    notes search "кошки"
    notes search "кошки" --limit 10
"""

import json
from typing import Optional

import typer
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from semantic_notes.cli.console import console
from semantic_notes.domain import SearchHit
from semantic_notes.errors import EmbeddingUnavailable, NotesError


def search(
    query: str = typer.Argument(..., help="Поисковый запрос"),
    limit: Optional[int] = typer.Option(
        None,
        "--limit",
        "-n",
        help="Максимальное количество результатов",
        min=1,
        max=100,
    ),
) -> None:
    """Найти заметки, близкие к запросу по смыслу."""
    from semantic_notes.cli.app import get_cli_context

    cli_ctx = get_cli_context()

    try:
        hits = cli_ctx.get_core().semantic_search(query, limit=limit)
    except EmbeddingUnavailable:
        _render_error("Failed to generate embedding", cli_ctx.json_output)
        raise typer.Exit(1)
    except NotesError as e:
        _render_error(str(e), cli_ctx.json_output)
        raise typer.Exit(1)

    if cli_ctx.json_output:
        console.print_json(json.dumps([hit.to_dict() for hit in hits], ensure_ascii=False))
    else:
        _render_rich(query, hits)


def _render_error(message: str, json_output: bool) -> None:
    if json_output:
        console.print_json(json.dumps({"error": message}))
    else:
        console.print(Panel(f"[red]Ошибка поиска: {message}[/red]", title="❌ Ошибка"))


def _render_rich(query: str, hits: list[SearchHit]) -> None:
    if not hits:
        console.print(Panel("[yellow]Ничего не найдено[/yellow]", title=f"🔍 Поиск: {query}"))
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", width=3)
    table.add_column("Сходство", justify="right", width=9)
    table.add_column("ID", justify="right")
    table.add_column("Заголовок", overflow="fold")

    for i, hit in enumerate(hits, 1):
        if hit.similarity >= 0.75:
            style = "green"
        elif hit.similarity >= 0.5:
            style = "yellow"
        else:
            style = "red"
        table.add_row(
            str(i),
            Text(f"{hit.similarity:.3f}", style=style),
            str(hit.id),
            hit.title or "Untitled",
        )

    console.print(Panel(f"[cyan]Найдено: {len(hits)}[/cyan]", title=f"🔍 Поиск: [bold]{query}[/bold]"))
    console.print(table)
