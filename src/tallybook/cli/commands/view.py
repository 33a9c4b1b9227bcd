"""Transaction viewing command."""

import click

from tallybook.cli.error_handling import handle_domain_error
from tallybook.domain.errors import DomainError
from tallybook.domain.transaction import TransactionService


@click.command("view")
@click.option("--verbose", "-v", is_flag=True, help="Show transaction IDs and full timestamps")
@click.pass_context
def view_transactions(ctx, verbose: bool):
    """View recorded transactions and the current balance."""
    service = TransactionService(ctx.obj["store"])

    try:
        transactions = service.load()
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    if verbose:
        click.echo("=" * 100)
        for txn in transactions:
            click.echo(f"\nTransaction ID: {txn.id}")
            click.echo(f"  Date: {txn.date}")
            click.echo(f"  Description: {txn.description}")
            click.echo(f"  Type: {txn.type.value}")
            click.echo(f"  Category: {txn.category}")
            click.echo(f"  Amount: ${txn.amount:,.2f}")
            click.echo("-" * 100)
    else:
        click.echo("-" * 90)
        click.echo(
            f"{'Date':<12} {'Type':<8} {'Category':<16} {'Amount':>14}  {'Description':<36}"
        )
        click.echo("-" * 90)
        for txn in transactions:
            sign = "+" if txn.is_income else "-"
            amount_str = f"{sign}${txn.amount:,.2f}"
            click.echo(
                f"{txn.date[:10]:<12} {txn.type.value:<8} {txn.category[:16]:<16} "
                f"{amount_str:>14}  {txn.description[:36]:<36}"
            )

    click.echo("-" * 90)
    click.echo(f"Balance: ${service.balance():,.2f}")


def register_commands(cli):
    """Register view command with main CLI."""
    cli.add_command(view_transactions)
