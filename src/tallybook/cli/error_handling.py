"""CLI error handling helpers."""

from typing import NoReturn

import click

from tallybook.domain.errors import ConfigError, DomainError, StoreError
from tallybook.logging_setup import get_logger

logger = get_logger("tallybook.cli")

EXIT_FAILURE = 1


def handle_domain_error(ctx: click.Context, error: DomainError) -> NoReturn:
    """Print ``Error: <message>`` to stderr and exit with status 1.

    Store and config failures are logged with their cause so ``--log-level
    DEBUG`` shows the underlying API or database error.
    """
    if isinstance(error, (StoreError, ConfigError)):
        logger.debug("%s: %s", type(error).__name__, error, exc_info=error.__cause__)
    click.echo(f"Error: {error}", err=True)
    ctx.exit(EXIT_FAILURE)
