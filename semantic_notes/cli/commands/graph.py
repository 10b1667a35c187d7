"""Команда graph — граф связей между заметками.

Usage:
    notes graph
    notes graph --filter cat --theme light
    notes --json graph > graph.json
    notes graph --output graph.json
"""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from semantic_notes.cli.console import console
from semantic_notes.domain import GraphData
from semantic_notes.errors import NotesError


def graph(
    filter_text: str = typer.Option(
        "", "--filter", "-f", help="Оставить заметки, содержащие подстроку"
    ),
    theme: str = typer.Option("dark", "--theme", help="Тема для цветов узлов: dark, light"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Записать JSON графа в файл"
    ),
) -> None:
    """Построить граф явных и семантических связей."""
    from semantic_notes.cli.app import get_cli_context

    if theme not in ("dark", "light"):
        raise typer.BadParameter(f"Неверная тема: {theme}. Допустимые значения: dark, light")

    cli_ctx = get_cli_context()

    try:
        data = cli_ctx.get_core().build_graph(filter_text=filter_text, theme=theme)
    except NotesError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    payload = data.to_dict()

    if output is not None:
        output.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        console.print(f"[green]✅ Граф записан в {output}[/green]")
        return

    if cli_ctx.json_output:
        console.print_json(json.dumps(payload, ensure_ascii=False))
        return

    _render_rich(data)


def _render_rich(data: GraphData) -> None:
    titles = {node.id: node.label for node in data.nodes}

    console.print(
        f"[bold]🕸️  Узлов: {len(data.nodes)}[/bold]  "
        f"явных связей: {len(data.explicit_edges)}  "
        f"семантических: {len(data.semantic_edges)}"
    )

    if not data.edges:
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Откуда", style="cyan")
    table.add_column("Куда", style="cyan")
    table.add_column("Тип")
    table.add_column("Вес", justify="right")

    for edge in data.edges:
        table.add_row(
            titles.get(edge.source, str(edge.source)),
            titles.get(edge.target, str(edge.target)),
            "🔗 явная" if edge.explicit else "🧠 смысловая",
            f"{edge.weight:.3f}",
        )

    console.print(table)
