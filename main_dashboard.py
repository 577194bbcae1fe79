"""Mini README: Entry point CLI for the daily P&L tracker.

This script exposes a Typer CLI with two commands: ``run`` starts the
FastAPI service through uvicorn, and ``summary`` prints the dashboard
figures (latest day, month comparison, watch list, gas stock) straight
from the configured store for a quick look in a terminal.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

import typer
import uvicorn

from pnltracker.configuration import get_settings
from pnltracker.interface import build_ledger
from pnltracker.logging_utils import configure_root_logger, level_for_environment
from pnltracker.metrics import NEVER
from pnltracker.utils import format_compact, format_signed_amount

cli = typer.Typer(help="Run and inspect the daily P&L tracker.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(level_for_environment(settings.environment))

    # Browsers cannot open 0.0.0.0, so point at localhost instead.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting P&L tracker on {effective_host}:{effective_port}.\n"
        f"API docs at http://{browser_host}:{effective_port}/docs"
    )
    uvicorn.run(
        "pnltracker.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def summary(
    today: Optional[str] = typer.Option(None, help="Reference date (YYYY-MM-DD), defaults to today."),
    chart_filter: str = typer.Option("WEEK", help="Trend window: WEEK, MONTH or YEAR."),
) -> None:
    """Print the dashboard figures for the configured store."""

    settings = get_settings()
    configure_root_logger(level_for_environment(settings.environment))
    reference = date.fromisoformat(today) if today else date.today()
    ledger = build_ledger(settings)
    figures = ledger.dashboard(
        reference,
        tracked_items=settings.tracked_items,
        chart_filter=chart_filter,
        cost_categories=settings.cost_categories,
        watch_alert_days=settings.watch_alert_days,
    )
    symbol = settings.currency_symbol

    pulse = figures["pulse"]
    if pulse is None:
        typer.echo("No past records found.")
    elif pulse["is_closed"]:
        typer.echo(f"{pulse['label']} ({pulse['date']}): Shop Closed")
    else:
        typer.echo(
            f"{pulse['label']} ({pulse['date']}): {format_signed_amount(pulse['profit'], symbol)} "
            f"(sales {symbol}{format_compact(pulse['sales'])}, "
            f"expenses {symbol}{format_compact(pulse['expenses'])})"
        )

    month = figures["month"]
    current = month["current"]
    typer.echo(
        f"This month: sales {symbol}{format_compact(current['total_sales'])}, "
        f"profit {format_signed_amount(current['profit'], symbol)}, "
        f"avg/day change {month['profit_delta_percent']:+.1f}%"
    )
    for name, ratio in current["cost_ratios"].items():
        typer.echo(f"  {name}: {ratio:.1f}% of sales")

    for alert in figures["watchlist"]:
        days = "never bought" if alert["days_ago"] == NEVER else f"{alert['days_ago']}d ago"
        marker = "!" if alert["overdue"] else " "
        typer.echo(f"{marker} {alert['name']}: {days}")

    gas = figures["gas"]
    typer.echo(f"Gas: {gas['current_stock']} full, {gas['empty_cylinders']} empty shells")


if __name__ == "__main__":
    cli()
