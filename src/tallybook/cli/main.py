"""Main CLI entry point."""

import click

from tallybook.domain.errors import DomainError
from tallybook.cli.error_handling import handle_domain_error
from tallybook.logging_setup import configure_logging
from tallybook.store.factories import STORE_BACKENDS, create_store

# Import and register all commands at module level
from tallybook.cli.commands import add, view, dashboard


@click.group()
@click.option(
    "--store",
    "store_backend",
    type=click.Choice(STORE_BACKENDS),
    default="sqlite",
    show_default=True,
    envvar="TALLYBOOK_STORE",
    help="Where transactions are kept (overrides TALLYBOOK_STORE)",
)
@click.option(
    "--db-path",
    type=click.Path(),
    envvar="TALLYBOOK_DB_PATH",
    help="Path to SQLite database file (overrides TALLYBOOK_DB_PATH environment variable)",
)
@click.option(
    "--log-level",
    envvar="TALLYBOOK_LOG_LEVEL",
    help="Logging level, e.g. INFO or DEBUG (overrides TALLYBOOK_LOG_LEVEL)",
)
@click.pass_context
def cli(ctx, store_backend: str, db_path: str | None, log_level: str | None):
    """Tallybook - Personal income and expense tracker.

    Record transactions into a Google spreadsheet or a local SQLite file and
    review them on a dashboard grouped by day, week, month or year.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Open the store only when actually running a command (not when showing help)
    if ctx.invoked_subcommand is not None and "store" not in ctx.obj:
        try:
            store = create_store(store_backend, database_path=db_path)
        except DomainError as e:
            handle_domain_error(ctx, e)
        ctx.obj["store"] = store
        ctx.call_on_close(store.close)


# Register all commands
add.register_commands(cli)
view.register_commands(cli)
dashboard.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
