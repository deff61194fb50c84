from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.text import Text

# Singleton console for consistent output across the app
_CONSOLE: Optional[Console] = None


def get_console() -> Console:
    global _CONSOLE
    if _CONSOLE is None:
        _CONSOLE = Console(highlight=False, soft_wrap=False)
    return _CONSOLE


def section(title: str) -> None:
    """Renders a section divider with a title."""
    console = get_console()
    line = "─" * max(10, min(70, len(title) + 8))
    console.print(Text(f"╭{line}╮", style="bright_cyan"))
    console.print(Text(f"  {title}", style="bold bright_white"))
    console.print(Text(f"╰{line}╯", style="bright_cyan"))


def info(message: str) -> None:
    get_console().print(f"[bold cyan]ℹ[/bold cyan] {message}")


def success(message: str) -> None:
    get_console().print(f"[bold green]✓[/bold green] {message}")


def warn(message: str) -> None:
    get_console().print(f"[bold yellow]![/bold yellow] {message}")


def error(message: str) -> None:
    get_console().print(f"[bold red]✗[/bold red] {message}")
