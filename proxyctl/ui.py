"""Terminal output helpers."""
from typing import Optional

import typer

STYLES = {
    "header": {"bold": True},
    "error": {"fg": typer.colors.RED, "err": True},
    "warning": {"fg": typer.colors.YELLOW, "err": True},
}


def output(message: str, style: Optional[str] = None) -> None:
    """Write a line to the terminal with an optional semantic style.

    Errors and warnings go to stderr; everything else to stdout. Text that
    already ends in a newline is written as-is.
    """
    kwargs = STYLES.get(style, {}) if style else {}
    typer.secho(message, nl=not message.endswith("\n"), **kwargs)
