"""Interactive confirmation for destructive operations."""

import logging
from typing import Callable, Optional

import click

logger = logging.getLogger(__name__)

ReadLine = Callable[[], Optional[str]]

AFFIRMATIVE = "yes"


def confirm_destructive(
    prompt: str,
    read_line: ReadLine,
    echo: Callable[[str], None] = click.echo,
) -> bool:
    """Show ``prompt`` and read exactly one line of response.

    Only ``yes`` (case-insensitive, surrounding whitespace ignored) confirms.
    Anything else, including EOF and read failures, declines.
    """
    echo(prompt)
    try:
        response = read_line()
    except (OSError, EOFError, UnicodeDecodeError) as e:
        logger.debug("Failed to read confirmation: %s", e)
        return False

    if response is None:
        return False
    return response.strip().lower() == AFFIRMATIVE
