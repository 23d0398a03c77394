"""Reconcile command."""

import json

import click

from ledgerstat.cli.error_handling import handle_domain_error
from ledgerstat.cli.month_filters import resolve_cli_timephase, window_options
from ledgerstat.domain.account import AccountService
from ledgerstat.domain.errors import DomainError
from ledgerstat.domain.months import format_month
from ledgerstat.domain.reconcile import ReconcileService
from ledgerstat.utils.amount_parser import parse_amount


@click.command("reconcile")
@click.argument("balance")
@window_options
@click.option("--account", type=int, help="Account ID")
@click.option("--top-k", type=int, default=10, show_default=True, help="Maximum suspicious entries")
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON")
@click.pass_context
def reconcile(
    ctx, balance: str, start: str, end: str, months: int, account: int, top_k: int, as_json: bool
):
    """Compare the window's net with an external BALANCE.

    On a mismatch, lists the entries whose amount alone comes closest to
    the difference. Put -- before a negative BALANCE.
    """
    ledger = ctx.obj["ledger"]
    user_id = ctx.obj["user_id"]
    account_service = AccountService(ledger)

    timephase = resolve_cli_timephase(ctx, start=start, end=end, months=months)
    try:
        external = float(parse_amount(balance))
        if account is not None:
            account_service.require_account(account)
    except (DomainError, ValueError) as e:
        handle_domain_error(ctx, e)

    result = ReconcileService(ledger).reconcile(user_id, account, external, timephase, top_k)

    first, last = timephase
    if as_json:
        payload = result.as_dict()
        payload["start"] = format_month(first)
        payload["end"] = format_month(last)
        click.echo(json.dumps(payload, indent=2))
        return

    click.echo(f"Time range: {format_month(first)} ~ {format_month(last)}")
    click.echo(
        f"Internal: {result.internal_balance:+.2f}   External: {result.external_balance:+.2f}   "
        f"Diff: {result.difference:+.2f}"
    )
    click.echo(f"Status: {'OK' if result.good else 'MISMATCH'}")

    if result.good:
        return
    if not result.suspicious_entries:
        click.echo("No suspicious entries found.")
        return

    click.echo("\nSuspicious Entries")
    click.echo(f"{'ID':<6} {'Date':<10} {'Account':<12} {'Category':<14} {'Amount':>10} Note")
    for entry in result.suspicious_entries:
        tx = ledger.get_transaction(entry.transaction_id)
        date_str = tx.occur_date.isoformat() if tx is not None else "-"
        click.echo(
            f"{entry.id:<6} {date_str:<10} {account_service.display_name(entry.account_id):<12} "
            f"{account_service.category_display_name(entry.category_id):<14} "
            f"{float(entry.amount):>10.2f} {entry.note or ''}"
        )


def register_commands(cli):
    """Register reconcile command with main CLI."""
    cli.add_command(reconcile)
