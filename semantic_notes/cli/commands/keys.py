"""Команда keys — ключи доступа для внешнего моста.

Подкоманды:
    generate: Создать ключ.
    list: Показать ключи (маскированные).
    delete: Удалить ключ.
"""

import json
from typing import Optional

import typer
from rich.table import Table

from semantic_notes.cli.console import console
from semantic_notes.errors import NotesError

app = typer.Typer(
    help="🔑 Ключи доступа для внешнего моста инструментов.",
    no_args_is_help=True,
)


@app.command("generate")
def generate(
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Имя ключа (по умолчанию Key N)"),
) -> None:
    """Создать новый ключ. Значение показывается один раз."""
    from semantic_notes.cli.app import get_cli_context

    cli_ctx = get_cli_context()
    try:
        api_key = cli_ctx.get_api_keys().generate(name)
    except NotesError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    if cli_ctx.json_output:
        console.print_json(json.dumps(api_key.to_dict(), ensure_ascii=False))
        return

    console.print(f"[green]✅ {api_key.name}[/green]: {api_key.key}")


@app.command("list")
def list_keys(
    reveal: bool = typer.Option(False, "--reveal", "-r", help="Показать ключи без маскировки."),
) -> None:
    """Показать ключи."""
    from semantic_notes.cli.app import get_cli_context

    cli_ctx = get_cli_context()
    try:
        keys = cli_ctx.get_api_keys().list()
    except NotesError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    if cli_ctx.json_output:
        data = []
        for api_key in keys:
            item = api_key.to_dict()
            if not reveal:
                item["key"] = api_key.masked
            data.append(item)
        console.print_json(json.dumps(data, ensure_ascii=False))
        return

    if not keys:
        console.print("[yellow]Ключей нет[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Имя", style="cyan")
    table.add_column("Ключ")
    table.add_column("Создан")

    for api_key in keys:
        table.add_row(
            str(api_key.id),
            api_key.name,
            api_key.key if reveal else api_key.masked,
            api_key.created_at.strftime("%Y-%m-%d %H:%M"),
        )

    console.print(table)


@app.command("delete")
def delete(
    key_id: int = typer.Argument(..., help="ID ключа"),
) -> None:
    """Удалить ключ."""
    from semantic_notes.cli.app import get_cli_context

    cli_ctx = get_cli_context()
    try:
        cli_ctx.get_api_keys().delete(key_id)
    except NotesError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1)

    if cli_ctx.json_output:
        console.print_json(json.dumps({"success": True}))
    else:
        console.print(f"[green]🗑️  Ключ #{key_id} удалён[/green]")
