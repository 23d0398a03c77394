"""Main CLI entry point."""

import logging

import click

from ledgerstat.cli.ledger_source import load_ledger_or_exit
from ledgerstat.config import get_settings

# Import and register all commands at module level
from ledgerstat.cli.commands import (
    accounts,
    reconcile,
    summary,
    top,
    trend,
)


@click.group()
@click.option(
    "--ledger",
    "ledger_path",
    type=click.Path(),
    help="Path to a JSON ledger snapshot (overrides LEDGERSTAT_LEDGER)",
    envvar="LEDGERSTAT_LEDGER",
)
@click.option(
    "--database-url",
    help="SQLAlchemy URL of a ledger database (overrides LEDGERSTAT_DATABASE_URL)",
    envvar="LEDGERSTAT_DATABASE_URL",
)
@click.option("--user", help="User ID to report on (defaults to the first user)", envvar="LEDGERSTAT_USER")
@click.option("--demo", is_flag=True, help="Use the built-in demo ledger")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, ledger_path: str | None, database_url: str | None, user: str | None, demo: bool, verbose: bool):
    """Ledgerstat - ledger analytics.

    Summaries, trends, rankings and balance reconciliation over a ledger
    snapshot or database.
    """
    ctx.ensure_object(dict)
    settings = get_settings()
    logging.basicConfig(level=logging.DEBUG if verbose else settings.log_level)

    # Load the ledger only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        ledger, user_id = load_ledger_or_exit(
            ctx,
            ledger_path=ledger_path,
            database_url=database_url,
            user=user,
            demo=demo,
        )
        ctx.obj["ledger"] = ledger
        ctx.obj["user_id"] = user_id
        ctx.obj["currency"] = settings.currency


# Register all commands
summary.register_commands(cli)
trend.register_commands(cli)
top.register_commands(cli)
accounts.register_commands(cli)
reconcile.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
