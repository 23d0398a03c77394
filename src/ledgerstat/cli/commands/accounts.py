"""Account balance command."""

import click

from ledgerstat.domain.account import AccountService


@click.command("accounts")
@click.pass_context
def accounts(ctx):
    """List all-time account balances."""
    ledger = ctx.obj["ledger"]
    user_id = ctx.obj["user_id"]

    summaries = AccountService(ledger).all_account_summary(user_id)
    if not summaries:
        click.echo("No accounts found.")
        return

    click.echo(f"{'ID':<5} {'Name':<25} {'Type':<10} {'Balance':>15} {'Currency':<8}")
    click.echo("-" * 67)
    for summary in summaries:
        click.echo(
            f"{summary.account_id:<5} {summary.name:<25} {summary.account_type.value:<10} "
            f"{summary.balance:>15,.2f} {summary.currency:<8}"
        )


def register_commands(cli):
    """Register accounts command with main CLI."""
    cli.add_command(accounts)
