"""Typer приложение — главный CLI.

Определяет глобальные опции и монтирует команды.

Attributes:
    app: Главное Typer приложение.
"""

from pathlib import Path
from typing import Optional

import typer

from semantic_notes.cli.context import CLIContext

app = typer.Typer(
    name="notes",
    help="📝 Semantic Notes CLI — локальные заметки с графом связей.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Контекст между callback и командами
_cli_context: Optional[CLIContext] = None


def get_cli_context() -> CLIContext:
    """Текущий CLI контекст (дефолтный, если команда вызвана напрямую)."""
    if _cli_context is None:
        return CLIContext()
    return _cli_context


def version_callback(value: bool) -> None:
    if value:
        from semantic_notes import __version__

        typer.echo(f"Semantic Notes CLI v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    ctx: typer.Context,
    db_path: Optional[Path] = typer.Option(
        None,
        "--db-path",
        "-d",
        help="Путь к SQLite базе данных.",
        envvar="NOTES_DB_PATH",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Уровень логирования: TRACE, DEBUG, INFO, WARNING, ERROR.",
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        "-j",
        help="Вывод в формате JSON (для скриптов).",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Показать версию и выйти.",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """📝 Semantic Notes CLI — локальные заметки с графом связей."""
    global _cli_context

    _cli_context = CLIContext(
        db_path=db_path,
        log_level=log_level,
        json_output=json_output,
    )
    ctx.obj = _cli_context


# === Монтирование команд ===

from semantic_notes.cli.commands import config_cmd, graph, keys, notes, search  # noqa: E402

app.command("list")(notes.list_notes)
app.command("show")(notes.show_note)
app.command("save")(notes.save_note)
app.command("delete")(notes.delete_note)
app.command("search")(search.search)
app.command("graph")(graph.graph)
app.add_typer(keys.app, name="keys")
app.add_typer(config_cmd.app, name="config")


__all__ = ["app", "get_cli_context"]
