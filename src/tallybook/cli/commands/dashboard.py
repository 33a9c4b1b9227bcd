"""Dashboard command."""

import click

from tallybook.cli.error_handling import handle_domain_error
from tallybook.domain.dashboard import Dashboard, DashboardService
from tallybook.domain.entities import Period
from tallybook.domain.errors import DomainError

_BAR_WIDTH = 30


def _bar(value: float, largest: float) -> str:
    if largest <= 0:
        return ""
    return "#" * round(_BAR_WIDTH * value / largest)


def _display_totals(dashboard: Dashboard) -> None:
    result = dashboard.result
    click.echo(f"{'Total Income':<20} ${result.total_income:>14,.2f}")
    click.echo(f"{'Total Expenses':<20} ${result.total_expenses:>14,.2f}")
    click.echo(f"{'Balance':<20} ${dashboard.balance:>14,.2f}")


def _display_buckets(dashboard: Dashboard) -> None:
    """Income vs expenses table, one row per bucket."""
    buckets = dashboard.result.buckets
    click.echo(f"\nIncome vs Expenses ({dashboard.period.value})")
    click.echo("-" * 60)
    if not buckets:
        click.echo("No data for this period.")
        return

    click.echo(f"{'Period':<16} {'Income':>14} {'Expenses':>14} {'Net':>14}")
    click.echo("-" * 60)
    for bucket in buckets:
        net = bucket.income - bucket.expenses
        click.echo(
            f"{bucket.key:<16} {bucket.income:>14,.2f} {bucket.expenses:>14,.2f} {net:>14,.2f}"
        )


def _display_categories(dashboard: Dashboard) -> None:
    """Expense breakdown with each category's share."""
    totals = dashboard.result.category_totals.as_dict()
    largest = max(totals.values())
    click.echo("\nExpense Categories")
    click.echo("-" * 60)
    for name, value in totals.items():
        share = dashboard.category_shares.get(name, 0.0)
        click.echo(
            f"{name.capitalize():<12} {value:>12,.2f} {share:>5.0f}%  {_bar(value, largest)}"
        )


@click.command("dashboard")
@click.option(
    "--period",
    type=click.Choice([period.value for period in Period]),
    default=Period.MONTHLY.value,
    show_default=True,
    help="Time period to group transactions by",
)
@click.pass_context
def dashboard(ctx, period: str):
    """Show income, expenses and the category breakdown."""
    service = DashboardService(ctx.obj["store"])

    try:
        view = service.build_dashboard(period)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if view.transaction_count == 0:
        click.echo("No transactions found.")
        return

    click.echo(f"\nDashboard ({view.period.value})")
    click.echo("=" * 60)
    _display_totals(view)
    _display_buckets(view)
    _display_categories(view)


def register_commands(cli):
    """Register dashboard command with main CLI."""
    cli.add_command(dashboard)
