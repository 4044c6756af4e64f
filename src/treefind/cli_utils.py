"""Shared helpers for the treefind command line."""

import logging

from rich.console import Console
from rich.logging import RichHandler

# Exit codes
EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_CONFIG_ERROR = 2
EXIT_INTERRUPTED = 130

# Matches go to stdout; diagnostics go to stderr so output stays pipeable
console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def _setup_logging(verbose: bool, quiet: bool) -> None:
    """Configure root logging for a CLI run.

    Args:
        verbose: Enable DEBUG output
        quiet: Only show errors

    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=verbose, rich_tracebacks=True)],
        force=True,
    )


def _error(message: str) -> None:
    """Print an error message to stderr."""
    err_console.print(f"[red]Error:[/red] {message}", soft_wrap=True)


def _warning(message: str) -> None:
    """Print a warning message to stderr."""
    err_console.print(f"[yellow]Warning:[/yellow] {message}", soft_wrap=True)
