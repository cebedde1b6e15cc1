"""Shared Rich consoles for CLI output.

Status messages go to stderr so stdout carries only command results.
"""

import os
from functools import wraps

from rich.console import Console
from rich.markup import escape

_console = Console(soft_wrap=True)
_status_console = Console(stderr=True, soft_wrap=True)


def _should_print() -> bool:
    """Check if status output is enabled."""
    return os.environ.get("MASON_CONSOLE_ENABLED", "true").lower() == "true"


def _console_output(func):
    """Skip the call when status output is disabled."""

    @wraps(func)
    def wrapper(*args, **kwargs):
        if _should_print():
            return func(*args, **kwargs)

    return wrapper


def print_result(text: str) -> None:
    """Write a command result to stdout without markup processing."""
    _console.print(text, markup=False, highlight=False)


@_console_output
def print_success(message: str):
    _status_console.print(f"[green]{escape(message)}[/green]")


def print_error(message: str):
    """Print error message to stderr; never suppressed."""
    _status_console.print(f"[red]{escape(message)}[/red]")


@_console_output
def print_info(message: str):
    _status_console.print(f"[cyan]{escape(message)}[/cyan]")

