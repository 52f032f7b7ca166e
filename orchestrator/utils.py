"""Utility functions for the orchestrator."""
import logging
import typing as t

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

console = Console()
err_console = Console(stderr=True)


def notify(message: str) -> None:
    """Show a user-facing notice on the shared console."""
    console.print(message, style="cyan", markup=False)


def setup_logging(verbose: bool = False) -> None:
    """Route log records through rich; DEBUG with --verbose, INFO otherwise.

    Args:
        verbose: Whether to include debug records.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=verbose)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


def fail(message: str) -> t.NoReturn:
    """Print an error and exit with status 1.

    Raises:
        SystemExit: Always.
    """
    err_console.print(Text.assemble(("Error: ", "red"), message))
    raise SystemExit(1)
