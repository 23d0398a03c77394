"""Top-K ranking command."""

import click

from ledgerstat.cli.month_filters import resolve_cli_timephase, window_options
from ledgerstat.domain.account import AccountService
from ledgerstat.domain.entities import Purpose
from ledgerstat.domain.summary import SummaryService


@click.command("top")
@click.argument("dimension", type=click.Choice(["categories", "accounts"]))
@window_options
@click.option("--top-k", type=int, default=5, show_default=True, help="How many to show")
@click.option(
    "--kind",
    type=click.Choice(["spend", "income", "net"]),
    default="spend",
    show_default=True,
    help="Which total to rank by",
)
@click.option("--percent", is_flag=True, help="Also show each share of the ranked total")
@click.pass_context
def top(ctx, dimension: str, start: str, end: str, months: int, top_k: int, kind: str, percent: bool):
    """Rank categories or accounts over a window.

    Spending is ranked by absolute value. Without a window, the current
    month is used.
    """
    ledger = ctx.obj["ledger"]
    user_id = ctx.obj["user_id"]
    currency = ctx.obj["currency"]
    account_service = AccountService(ledger)
    service = SummaryService(ledger)

    timephase = resolve_cli_timephase(
        ctx, start=start, end=end, months=months, default_months=1
    )
    purpose = Purpose.parse(kind)
    if dimension == "categories":
        ranked = service.top_category(user_id, timephase, top_k, purpose=purpose)
        names = [account_service.category_display_name(key) for key in ranked.axis]
    else:
        ranked = service.top_account(user_id, timephase, top_k, purpose=purpose)
        names = [account_service.display_name(key) for key in ranked.axis]

    if ranked.is_empty:
        click.echo("No entries found.")
        return

    shares = ranked.normalize() if percent else None
    for index, name in enumerate(names):
        value = ranked.value(index, purpose)
        if purpose is Purpose.OUTCOME:
            value = abs(value)
        line = f"- {name:<30} {value:>15,.2f} {currency}"
        if shares is not None:
            line += f" {shares.value(index, purpose) * 100:>6.1f}%"
        click.echo(line)


def register_commands(cli):
    """Register top command with main CLI."""
    cli.add_command(top)
