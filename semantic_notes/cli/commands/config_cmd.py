"""Команда config — просмотр конфигурации.

Usage:
    notes config show
    notes --json config show --reveal
"""

import json
from typing import Optional

import typer
from rich.table import Table

from semantic_notes.cli.console import console
from semantic_notes.config import find_config_file

app = typer.Typer(
    help="🔧 Просмотр конфигурации.",
    no_args_is_help=True,
)


def _mask_secret(value: Optional[str]) -> str:
    if not value:
        return "not set"
    if len(value) <= 8:
        return "****"
    return f"{value[:4]}***{value[-4:]}"


@app.command("show")
def show(
    reveal_secrets: bool = typer.Option(
        False,
        "--reveal",
        "-r",
        help="Показать API ключ без маскировки.",
    ),
) -> None:
    """Показать текущую конфигурацию."""
    from semantic_notes.cli.app import get_cli_context

    cli_ctx = get_cli_context()

    try:
        config = cli_ctx.get_config()
    except ValueError as e:
        console.print(f"[red]❌ Ошибка загрузки конфигурации: {e}[/red]")
        raise typer.Exit(1)

    toml_path = find_config_file()
    api_key = config.gemini_api_key if reveal_secrets else _mask_secret(config.gemini_api_key)

    if cli_ctx.json_output:
        data = {
            "source": str(toml_path) if toml_path else None,
            "config": config.to_toml_dict(),
        }
        data["config"]["embedding"]["api_key"] = api_key
        console.print_json(json.dumps(data, ensure_ascii=False))
        return

    source = str(toml_path) if toml_path else "defaults + environment"
    console.print("\n[bold]⚙️  Текущая конфигурация[/bold]")
    console.print(f"[dim]Источник: {source}[/dim]\n")

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Настройка", style="cyan")
    table.add_column("Значение")

    for section, values in config.to_toml_dict().items():
        for key, value in values.items():
            table.add_row(f"{section}.{key}", str(value))
    table.add_row("embedding.api_key", api_key)

    console.print(table)
