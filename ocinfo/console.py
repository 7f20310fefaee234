"""Console output — severity-coloured status lines and verbatim report text."""

from __future__ import annotations

import logging
from enum import Enum

import click
from rich.console import Console
from rich.logging import RichHandler

console = Console()
err_console = Console(stderr=True)


class Severity(str, Enum):
    ERROR = "error"
    WARN = "warn"
    OK = "ok"


_STYLES = {
    Severity.ERROR: "red",
    Severity.WARN: "yellow",
    Severity.OK: "green",
}


def log(message: str, severity: Severity | None = None) -> None:
    """Print a status line; errors go to stderr."""
    target = err_console if severity is Severity.ERROR else console
    target.print(
        message,
        style=_STYLES.get(severity),
        markup=False,
        emoji=False,
        highlight=False,
        soft_wrap=True,
    )


def echo_text(text: str, err: bool = False) -> None:
    """Print text exactly as given (tabs and brackets untouched)."""
    click.echo(text, err=err)


def setup_logging(verbose: bool) -> None:
    """Route library logging to stderr through rich."""
    handler = RichHandler(console=err_console, show_path=False, markup=False)
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )
    # httpx/httpcore are chatty at DEBUG; keep them at INFO
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.INFO if verbose else logging.WARNING)
