"""Add transaction command."""

import click

from tallybook.cli.error_handling import handle_domain_error
from tallybook.domain.categories import ENTRY_CATEGORIES
from tallybook.domain.errors import DomainError
from tallybook.domain.transaction import DEFAULT_CATEGORY, TransactionService
from tallybook.utils.amount_parser import parse_amount
from tallybook.utils.date_parser import date_to_timestamp, parse_date


@click.command("add")
@click.option("--description", required=True, help="Transaction description")
@click.option("--amount", required=True, help="Positive amount (e.g., 123.45)")
@click.option(
    "--type",
    "txn_type",
    type=click.Choice(["income", "expense"]),
    default="expense",
    show_default=True,
    help="Transaction type",
)
@click.option(
    "--category",
    default=DEFAULT_CATEGORY,
    show_default=True,
    help=f"Category ({', '.join(ENTRY_CATEGORIES)}, or any other text)",
)
@click.option(
    "--date",
    help="Transaction date (YYYY-MM-DD or 'today', 'yesterday'); defaults to now",
)
@click.pass_context
def add_transaction(
    ctx,
    description: str,
    amount: str,
    txn_type: str,
    category: str,
    date: str | None,
):
    """Add a transaction.

    Examples:
        tallybook add --description "Groceries" --amount 42.50 --category Food
        tallybook add --description "Salary" --amount 1000 --type income --date 2024-03-01
    """
    service = TransactionService(ctx.obj["store"])

    # Parse amount
    try:
        txn_amount = parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount: {e}", err=True)
        ctx.exit(1)

    # Parse date
    timestamp = None
    if date:
        try:
            timestamp = date_to_timestamp(parse_date(date))
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    try:
        txn = service.create_transaction(
            description=description,
            amount=txn_amount,
            type=txn_type,
            category=category,
            date=timestamp,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created transaction {txn.id}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Description: {txn.description}")
    click.echo(f"  Type: {txn.type.value}")
    click.echo(f"  Category: {txn.category}")
    click.echo(f"  Amount: ${txn.amount:,.2f}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
