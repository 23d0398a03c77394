"""Summary command."""

import click

from ledgerstat.cli.error_handling import handle_domain_error
from ledgerstat.cli.month_filters import resolve_cli_timephase, window_options
from ledgerstat.domain.account import AccountService
from ledgerstat.domain.entities import Purpose
from ledgerstat.domain.errors import DomainError
from ledgerstat.domain.months import format_month
from ledgerstat.domain.summary import SummaryService

_LABELS = {
    Purpose.OUTCOME: "Total spending",
    Purpose.INCOME: "Total income",
    Purpose.NET: "Total net income/outcome",
}


@click.command("summary")
@window_options
@click.option(
    "--kind",
    type=click.Choice(["spend", "income", "net"]),
    default="spend",
    show_default=True,
    help="Which total to compute",
)
@click.option("--account", type=int, help="Account ID")
@click.option("--category", type=int, help="Category ID")
@click.pass_context
def summary(ctx, start: str, end: str, months: int, kind: str, account: int, category: int):
    """Show one total over a month window.

    Spending is reported as a positive amount.
    """
    ledger = ctx.obj["ledger"]
    user_id = ctx.obj["user_id"]
    currency = ctx.obj["currency"]
    account_service = AccountService(ledger)

    timephase = resolve_cli_timephase(ctx, start=start, end=end, months=months)
    try:
        if account is not None:
            account_service.require_account(account)
        if category is not None:
            account_service.require_category(category)
    except DomainError as e:
        handle_domain_error(ctx, e)

    purpose = Purpose.parse(kind)
    total = SummaryService(ledger).month_summary(
        user_id, timephase, account_id=account, category_id=category, purpose=purpose
    )
    if purpose is Purpose.OUTCOME:
        total = abs(total)

    first, last = timephase
    click.echo(
        f"{_LABELS[purpose]} from {format_month(first)} to {format_month(last)} "
        f"is {total:.2f} {currency}."
    )


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)
