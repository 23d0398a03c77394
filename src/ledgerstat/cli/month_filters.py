"""CLI helpers for month window resolution."""

from typing import Optional

import click

from ledgerstat.cli.error_handling import handle_domain_error
from ledgerstat.domain.entities import Timephase
from ledgerstat.domain.errors import ValidationError
from ledgerstat.domain.months import order_timephase, parse_month, timephase_from_now


def resolve_cli_timephase(
    ctx: click.Context,
    *,
    start: Optional[str],
    end: Optional[str],
    months: Optional[int],
    default_months: Optional[int] = None,
) -> Timephase:
    """Resolve a month window from --start/--end or --months.

    --end defaults to --start. The window is put in chronological order.
    """
    if months is not None and (start or end):
        click.echo("Error: --months cannot be combined with --start or --end.", err=True)
        ctx.exit(1)

    if months is not None:
        return timephase_from_now(months)

    if not start and not end:
        if default_months is not None:
            return timephase_from_now(default_months)
        click.echo("Error: Specify a window with --start [--end] or --months.", err=True)
        ctx.exit(1)

    try:
        first = parse_month(start or end)
        last = parse_month(end) if end else first
    except ValidationError as e:
        handle_domain_error(ctx, e)
    return order_timephase(first, last)


def window_options(func):
    """Attach the shared --start/--end/--months options to a command."""
    func = click.option(
        "--months",
        type=click.IntRange(min=1),
        help="Last N months, counting the current month as 1",
    )(func)
    func = click.option("--end", help="Last month of the window (YYYY-MM, defaults to --start)")(func)
    func = click.option("--start", help="First month of the window (YYYY-MM)")(func)
    return func
