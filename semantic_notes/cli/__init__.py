"""Semantic Notes CLI.

Functions:
    main: Точка входа CLI.

Example:
    $ notes save --title "Cats" --content "<p>purr</p>"
    $ notes graph --filter cat --json
    $ notes search "kittens"
"""

from semantic_notes.cli.app import app


def main() -> None:
    """Точка входа для CLI."""
    app()


__all__ = ["main", "app"]
