"""Shared utilities for KSail CLI modules."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from ksail.scaffold.emitter import EventAction, ScaffoldEvent


def setup_file_logging(log_file: Optional[str] = None, verbose: bool = False) -> Optional[Path]:
    """Set up file logging for CLI commands.

    Args:
        log_file: Path to log file; KSAIL_LOG_FILE is used when omitted
        verbose: Record debug messages in the file

    Returns:
        The log file path, or None when file logging stays off
    """
    from ksail.core.logger import setup_file_logging as _setup_file_logging
    return _setup_file_logging(log_file=log_file, verbose=verbose)


def handle_cli_error(
    e: Exception,
    console: Console,
    verbose: bool = False,
    exit_code: int = 1
) -> None:
    """Handle CLI errors with consistent formatting.

    Args:
        e: Exception to handle
        console: Rich console for output
        verbose: Show exception traceback if True
        exit_code: Exit code to use
    """
    console.print(f"[red]Error:[/red] {escape(str(e))}")
    if verbose:
        console.print_exception()
    raise typer.Exit(exit_code)


def print_event(console: Console, event: ScaffoldEvent) -> None:
    """Render a scaffold event; skips are shown as warnings."""
    if event.action == EventAction.SKIPPED:
        print_warning(console, event.message)
    else:
        print_success(console, event.message)


def print_success(console: Console, message: str, prefix: str = "✓") -> None:
    """Print success message with consistent formatting.

    Args:
        console: Rich console for output
        message: Success message
        prefix: Prefix symbol (default: ✓)
    """
    console.print(f"[green]{prefix}[/green] {escape(message)}", soft_wrap=True)


def print_error(console: Console, message: str, prefix: str = "✗") -> None:
    """Print error message with consistent formatting.

    Args:
        console: Rich console for output
        message: Error message
        prefix: Prefix symbol (default: ✗)
    """
    console.print(f"[red]{prefix}[/red] {escape(message)}", soft_wrap=True)


def print_warning(console: Console, message: str, prefix: str = "⚠") -> None:
    """Print warning message with consistent formatting.

    Args:
        console: Rich console for output
        message: Warning message
        prefix: Prefix symbol (default: ⚠)
    """
    console.print(f"[yellow]{prefix}[/yellow] {escape(message)}", soft_wrap=True)
