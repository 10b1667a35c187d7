"""Rich Console для CLI.

Attributes:
    console: Общий Rich Console для всех команд.
"""

from rich.console import Console

console = Console()


__all__ = ["console"]
