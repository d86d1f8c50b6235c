"""
Billing reports CLI.

Runs the reports against a JSON snapshot exported from the order store:

    billing-reports revenue snapshot.json
    billing-reports overdue snapshot.json --as-of 2025-03-15
    billing-reports dishes snapshot.json --timeframe week
    billing-reports serve
"""

import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError as SchemaValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from shared.config.logging import setup_logging, cli_logger as logger
from shared.config.settings import settings
from shared.utils.clock import as_local, local_now
from shared.utils.currency import format_currency
from shared.utils.schemas import ReportSnapshot
from reports_api.services.domain import (
    RecordingObserver,
    build_dashboard_summary,
    build_dish_analytics_report,
    calculate_monthly_bills,
    calculate_overdue_bills,
    calculate_revenue,
)
from reports_api.services.domain.customer_service import (
    format_customer_number,
    get_customer_display_name,
    next_customer_number,
    search_customers,
)
from reports_api.services.domain.dish_analytics_service import (
    format_trend,
    get_star_rating,
)

app = typer.Typer(
    name="billing-reports",
    help="Restaurant billing reports and dish analytics",
    add_completion=False,
)
console = Console()

SNAPSHOT_ARG = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="JSON snapshot file")
AS_OF_OPT = typer.Option(None, "--as-of", help="Report as of this local date/time instead of now")


@app.callback()
def main() -> None:
    setup_logging()


def load_snapshot(path: Path) -> ReportSnapshot:
    try:
        return ReportSnapshot.model_validate_json(path.read_text(encoding="utf-8"))
    except SchemaValidationError as e:
        console.print(f"[red]✗ Invalid snapshot {path}: {e.error_count()} error(s)[/red]")
        console.print(str(e), markup=False)
        raise typer.Exit(1)


def resolve_now(snapshot: ReportSnapshot, as_of: Optional[datetime]) -> datetime:
    """--as-of wins over the snapshot's asOf, which wins over the clock."""
    if as_of is not None:
        return as_local(as_of)
    if snapshot.as_of is not None:
        return as_local(snapshot.as_of)
    return local_now()


def print_warnings(observer: RecordingObserver) -> None:
    for event, data in observer.warnings:
        logger.warning(event, **data)
        details = ", ".join(f"{k}={v}" for k, v in data.items())
        console.print(f"[yellow]! {event}: {escape(details)}[/yellow]")


# =============================================================================
# Billing Commands
# =============================================================================

@app.command()
def revenue(snapshot_file: Path = SNAPSHOT_ARG, as_of: Optional[datetime] = AS_OF_OPT):
    """Walk-in revenue and monthly payments for the current month."""
    snapshot = load_snapshot(snapshot_file)
    observer = RecordingObserver()
    report = calculate_revenue(
        snapshot.orders,
        snapshot.customers,
        now=resolve_now(snapshot, as_of),
        observer=observer,
    )

    table = Table(title=f"Revenue {report.window_start:%Y-%m-%d} - {report.window_end:%Y-%m-%d}")
    table.add_column("Source", style="cyan")
    table.add_column("Amount", style="green", justify="right")

    table.add_row("Walk-in", format_currency(report.walk_in_revenue))
    table.add_row("Monthly payments", format_currency(report.monthly_payments_revenue))
    table.add_row("[bold]Total[/bold]", f"[bold]{format_currency(report.total_revenue)}[/bold]")

    console.print(table)
    console.print(f"{len(report.revenue_orders)} walk-in orders counted")
    print_warnings(observer)


@app.command("monthly-bills")
def monthly_bills(snapshot_file: Path = SNAPSHOT_ARG, as_of: Optional[datetime] = AS_OF_OPT):
    """Outstanding balances of monthly customers."""
    snapshot = load_snapshot(snapshot_file)
    observer = RecordingObserver()
    report = calculate_monthly_bills(
        snapshot.orders,
        snapshot.customers,
        now=resolve_now(snapshot, as_of),
        observer=observer,
    )

    if not report.customers_with_bills:
        console.print("[green]✓ No outstanding monthly bills[/green]")
        return

    table = Table(title="Monthly Bills")
    table.add_column("Customer", style="cyan")
    table.add_column("No.", style="dim")
    table.add_column("Balance", style="yellow", justify="right")
    table.add_column("This month", justify="right")
    table.add_column("Orders", justify="right")

    for bill in report.customers_with_bills:
        table.add_row(
            escape(bill.customer.name),
            format_customer_number(bill.customer.customer_number),
            format_currency(bill.unpaid_amount),
            format_currency(bill.current_period_total),
            str(len(bill.orders)),
        )

    console.print(table)
    console.print(
        f"[bold]{report.total_customers} customers owe {format_currency(report.total_monthly_bills)}[/bold]"
    )
    print_warnings(observer)


@app.command()
def overdue(snapshot_file: Path = SNAPSHOT_ARG, as_of: Optional[datetime] = AS_OF_OPT):
    """Monthly customers with unpaid orders from before this month."""
    snapshot = load_snapshot(snapshot_file)
    observer = RecordingObserver()
    report = calculate_overdue_bills(
        snapshot.orders,
        snapshot.customers,
        now=resolve_now(snapshot, as_of),
        observer=observer,
    )

    if not report.customers_with_overdue:
        console.print("[green]✓ No overdue bills[/green]")
        return

    table = Table(title="Overdue Bills")
    table.add_column("Customer", style="cyan")
    table.add_column("Owed", justify="right")
    table.add_column("Oldest order")
    table.add_column("Overdue")
    table.add_column("Severity")

    for bill in report.customers_with_overdue:
        table.add_row(
            escape(get_customer_display_name(bill.customer)),
            format_currency(bill.overdue_amount),
            f"{bill.oldest_order_date:%Y-%m-%d}",
            bill.days_overdue_label,
            f"[{bill.severity_color}]{bill.severity}[/]",
        )

    console.print(table)
    console.print(
        f"[bold]{report.total_customers} overdue, {format_currency(report.total_overdue_bills)} total[/bold]"
    )
    print_warnings(observer)


@app.command()
def dashboard(snapshot_file: Path = SNAPSHOT_ARG, as_of: Optional[datetime] = AS_OF_OPT):
    """Admin dashboard tiles for the current month."""
    snapshot = load_snapshot(snapshot_file)
    observer = RecordingObserver()
    summary = build_dashboard_summary(
        snapshot.orders,
        snapshot.customers,
        now=resolve_now(snapshot, as_of),
        observer=observer,
    )

    table = Table(title=f"Dashboard as of {summary.as_of:%Y-%m-%d %H:%M}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green", justify="right")

    table.add_row("Total revenue", format_currency(summary.total_revenue))
    table.add_row("Walk-in revenue", format_currency(summary.walk_in_revenue))
    table.add_row("Monthly payments", format_currency(summary.monthly_payments_revenue))
    table.add_row("Monthly bills", f"{format_currency(summary.total_monthly_bills)} ({summary.monthly_bill_customers})")
    table.add_row("Overdue bills", f"{format_currency(summary.total_overdue_bills)} ({summary.overdue_customers})")
    table.add_row("Completed orders", str(summary.completed_orders))
    table.add_row("Active customers", str(summary.active_customers))

    console.print(table)
    print_warnings(observer)


# =============================================================================
# Analytics Commands
# =============================================================================

@app.command()
def dishes(
    snapshot_file: Path = SNAPSHOT_ARG,
    timeframe: str = typer.Option("month", help="week, month or all"),
    limit: int = typer.Option(settings.analytics_default_limit, min=1, help="Entries per highlight list"),
    as_of: Optional[datetime] = AS_OF_OPT,
):
    """Dish performance, trends and insights."""
    if timeframe not in ("week", "month", "all"):
        console.print(f"[red]✗ Unknown timeframe: {timeframe}[/red]")
        raise typer.Exit(2)

    snapshot = load_snapshot(snapshot_file)
    observer = RecordingObserver()
    report = build_dish_analytics_report(
        snapshot.orders,
        snapshot.dishes,
        timeframe,
        now=resolve_now(snapshot, as_of),
        limit=limit,
        observer=observer,
    )

    table = Table(title=f"Dish Performance ({timeframe})")
    table.add_column("Dish", style="cyan")
    table.add_column("Orders", justify="right")
    table.add_column("Revenue", justify="right")
    table.add_column("Rating")
    table.add_column("Trend", justify="right")

    for dish in sorted(report.performance, key=lambda p: p.total_revenue, reverse=True):
        filled, empty = get_star_rating(dish.average_rating)
        name = escape(dish.dish_name) if dish.is_available else f"{escape(dish.dish_name)} [dim](unavailable)[/dim]"
        table.add_row(
            name,
            str(dish.order_count),
            format_currency(dish.total_revenue),
            "★" * filled + "☆" * empty,
            format_trend(dish.trend_percentage),
        )

    console.print(table)
    for insight in report.insights:
        console.print(f"[blue]• {escape(insight)}[/blue]")
    print_warnings(observer)


# =============================================================================
# Customer Commands
# =============================================================================

@app.command()
def customers(
    snapshot_file: Path = SNAPSHOT_ARG,
    term: Optional[str] = typer.Option(None, "--search", "-s", help="Name or email fragment"),
    limit: int = typer.Option(10, min=1),
):
    """List or search customers and show the next free customer number."""
    snapshot = load_snapshot(snapshot_file)
    found = search_customers(snapshot.customers, term, limit) if term else snapshot.customers[:limit]

    table = Table(title="Customers")
    table.add_column("No.", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Email")
    table.add_column("Billing")
    table.add_column("Balance", justify="right")

    for customer in found:
        table.add_row(
            format_customer_number(customer.customer_number),
            escape(customer.name),
            escape(customer.email),
            customer.payment_type,
            format_currency(customer.monthly_balance),
        )

    console.print(table)
    console.print(f"Next customer number: {format_customer_number(next_customer_number(snapshot.customers))}")


# =============================================================================
# Server Commands
# =============================================================================

@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", help="Bind address"),
    port: int = typer.Option(settings.rest_api_port, help="Port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Run the reports API with uvicorn."""
    import uvicorn

    console.print(f"[blue]Starting reports API on {host}:{port}[/blue]")
    uvicorn.run("reports_api.main:app", host=host, port=port, reload=reload)


@app.command()
def version():
    """Show version information."""
    table = Table(title="Billing Reports Version")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")

    table.add_row("API", "0.1.0")
    table.add_row("Python", sys.version.split()[0])
    table.add_row("Timezone", settings.timezone)
    table.add_row("Currency", settings.currency_code)

    console.print(table)


if __name__ == "__main__":
    app()
