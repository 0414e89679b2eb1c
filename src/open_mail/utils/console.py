"""Centralised console management module"""

from io import StringIO
from typing import Optional

from rich.console import Console

_console: Optional[Console] = None


def get_console() -> Console:
    """Get the shared Console instance"""
    global _console

    if _console is None:
        _console = Console()

    return _console

def get_buffer_console(width: int = 120) -> tuple[Console, StringIO]:
    """Get a Console for capturing output to a buffer (Daemon use)"""
    buffer = StringIO()

    console = Console(
        file=buffer,
        force_terminal=False,
        width=width,
        legacy_windows=False,
        record=True
    )

    return console, buffer

def reset_console() -> None:
    """Reset the shared Console instance (for testing purposes)"""
    global _console
    _console = None


## Convenience Print Functions

def print_output(text: str, console: Optional[Console] = None) -> None:
    """Print rendered output verbatim, with no markup or highlighting"""
    output_console = console or get_console()
    output_console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)

def print_error(message: str, console: Optional[Console] = None) -> None:
    """Print an error message to the console"""
    output_console = console or get_console()
    output_console.print(f"[red]{message}[/]")

def print_warning(message: str, console: Optional[Console] = None) -> None:
    """Print a warning message to the console"""
    output_console = console or get_console()
    output_console.print(f"[yellow]{message}[/]")
