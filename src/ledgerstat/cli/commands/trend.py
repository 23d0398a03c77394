"""Monthly trend command."""

import click

from ledgerstat.cli.month_filters import resolve_cli_timephase, window_options
from ledgerstat.domain.months import format_month
from ledgerstat.domain.summary import SummaryService


@click.command("trend")
@window_options
@click.option("--account", type=int, help="Account ID")
@click.option("--category", type=int, help="Category ID")
@click.option("--percent", is_flag=True, help="Show each month as a share of the window total")
@click.pass_context
def trend(ctx, start: str, end: str, months: int, account: int, category: int, percent: bool):
    """Show income, spending and net month by month.

    Without a window, the last 3 months are shown.
    """
    ledger = ctx.obj["ledger"]
    user_id = ctx.obj["user_id"]
    currency = ctx.obj["currency"]

    timephase = resolve_cli_timephase(
        ctx, start=start, end=end, months=months, default_months=3
    )
    line = SummaryService(ledger).data_linetrend(
        user_id, timephase, account_id=account, category_id=category
    )
    if percent:
        line = line.normalize()

    unit = "%" if percent else currency
    click.echo(f"\nMonthly Trend ({unit})")
    click.echo("=" * 60)
    click.echo(f"{'Month':<10} {'Income':>15} {'Spending':>15} {'Net':>15}")
    click.echo("-" * 60)
    for key, income, outcome, net in line.points():
        if percent:
            click.echo(
                f"{format_month(key):<10} {income * 100:>14.1f}% {outcome * 100:>14.1f}% {net * 100:>14.1f}%"
            )
        else:
            click.echo(f"{format_month(key):<10} {income:>15,.2f} {abs(outcome):>15,.2f} {net:>15,.2f}")


def register_commands(cli):
    """Register trend command with main CLI."""
    cli.add_command(trend)
