"""CLI application for EventEase."""

import asyncio
import json
import logging
from typing import Any, Coroutine, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from eventease.core.config import Config
from eventease.core.exceptions import EventEaseError
from eventease.dashboard import filter_events, load_dashboard_stats, sort_events
from eventease.models.records import CheckInStatus, EventStatus
from eventease.models.results import StoreResult
from eventease.storage.backends import FileKeyValueStorage
from eventease.store.interfaces import EventFilters
from eventease.store.record_store import LocalRecordStore
from eventease.wizard import EventAuthoringWizard, WizardPhase

app = typer.Typer(
    name="eventease",
    help="EventEase - Local event records and authoring",
    no_args_is_help=True,
)

console = Console()

STATUS_STYLES = {
    EventStatus.DRAFT: "yellow",
    EventStatus.PUBLISHED: "green",
    EventStatus.ONGOING: "cyan",
    EventStatus.COMPLETED: "blue",
    EventStatus.CANCELLED: "red",
}


@app.callback()
def configure(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Configure logging for every command."""
    level = "DEBUG" if verbose else Config.from_env().log_level.upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def get_store() -> LocalRecordStore:
    """Create a record store over the configured storage directory."""
    try:
        config = Config.from_env()
        config.validate()
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    try:
        storage = FileKeyValueStorage(config.storage_dir)
    except OSError as e:
        console.print(f"[red]Error:[/red] Cannot use storage at {config.storage_dir}: {e}")
        raise typer.Exit(1)
    return LocalRecordStore(storage=storage, config=config)


def run(coro: Coroutine[Any, Any, StoreResult]) -> Any:
    """Run a store call and return its payload, exiting on failure."""
    result = asyncio.run(coro)
    if not result.success:
        console.print(f"[red]Error:[/red] {result.error}")
        for name, message in result.field_errors.items():
            console.print(f"  - {name}: {message}")
        raise typer.Exit(1)
    return result.payload


def print_result(result: dict, title: str = "Result") -> None:
    """Print result as formatted JSON."""
    console.print(Panel(
        json.dumps(result, indent=2, default=str),
        title=title,
        border_style="green",
    ))


def _status(status: EventStatus) -> str:
    style = STATUS_STYLES.get(status, "white")
    return f"[{style}]{status.value}[/{style}]"


@app.command("events")
def list_events(
    status: Optional[EventStatus] = typer.Option(None, "--status", "-s", help="Filter by status"),
    category: str = typer.Option("all", "--category", "-c", help="Filter by category"),
    organizer: Optional[str] = typer.Option(None, "--organizer", "-o", help="Filter by organizer"),
    search: str = typer.Option("", "--search", "-q", help="Search title or category"),
    sort: str = typer.Option("date", "--sort", help="Sort by date, title, created_at, status"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Maximum rows"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """List events."""
    store = get_store()
    events = run(store.list_events(EventFilters(status=status, organizer_id=organizer)))
    events = filter_events(events, search=search, category=category)
    try:
        events = sort_events(events, key=sort)
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    if limit is not None:
        events = events[:limit]

    if json_output:
        console.print(json.dumps([e.to_dict() for e in events], indent=2, default=str))
        return

    table = Table(title=f"Events ({len(events)})")
    table.add_column("ID", style="cyan")
    table.add_column("Title", style="white")
    table.add_column("Category")
    table.add_column("Date")
    table.add_column("Status")
    table.add_column("Venue")
    for event in events:
        table.add_row(
            event.id,
            event.title,
            event.category,
            f"{event.date} {event.time}".strip(),
            _status(event.status),
            event.venue.name,
        )
    console.print(table)


@app.command("show")
def show_event(event_id: str = typer.Argument(..., help="Event ID")) -> None:
    """Show one event."""
    event = run(get_store().get_event(event_id))
    print_result(event.to_dict(), event.title)


@app.command("create")
def create_event(
    title: str = typer.Option(..., "--title", "-t", help="Event title"),
    date: str = typer.Option(..., "--date", "-d", help="Event date (YYYY-MM-DD)"),
    category: str = typer.Option(..., "--category", "-c", help="Event category"),
    organizer: str = typer.Option("organizer_user_1", "--organizer", "-o", help="Organizer ID"),
    time: str = typer.Option("", "--time", help="Start time (HH:MM)"),
    end_time: str = typer.Option("", "--end-time", help="End time (HH:MM)"),
    description: str = typer.Option("", "--description", help="Event description"),
    venue: str = typer.Option("", "--venue", "-l", help="Venue name"),
    capacity: int = typer.Option(0, "--capacity", help="Venue capacity"),
    ticket: list[str] = typer.Option(
        [],
        "--ticket",
        help="Ticket type as NAME:PRICE:QUANTITY (repeatable)",
    ),
    publish: bool = typer.Option(False, "--publish", help="Publish instead of saving a draft"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Author an event through the wizard and save or publish it."""
    store = get_store()

    ticket_types = []
    for spec in ticket:
        try:
            name, price, quantity = spec.split(":")
            ticket_types.append({"name": name, "price": float(price), "quantity": int(quantity)})
        except ValueError:
            console.print(f"[red]Error:[/red] Invalid ticket '{spec}', expected NAME:PRICE:QUANTITY")
            raise typer.Exit(1)

    wizard = EventAuthoringWizard(store, organizer_id=organizer)
    try:
        wizard.set_summary(event_name=title, start_date=date)
        wizard.update(
            WizardPhase.REQUIREMENTS, title=title, category=category, description=description
        )
        wizard.update(
            WizardPhase.DESIGN, date=date, time=time, end_time=end_time, venue_name=venue
        )
        wizard.update(
            WizardPhase.IMPLEMENTATION, capacity=capacity, ticket_types=ticket_types
        )
    except EventEaseError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    while True:
        errors = wizard.validate_phase()
        if errors:
            console.print(f"[red]Invalid {wizard.phase.value} details:[/red]")
            for name, message in errors.items():
                console.print(f"  - {name}: {message}")
            raise typer.Exit(1)
        if wizard.phase.is_last:
            break
        wizard.next()

    outcome = asyncio.run(wizard.publish() if publish else wizard.save_draft())
    if outcome.show_upgrade_prompt:
        console.print("[yellow]Your plan does not allow this. Upgrade to continue.[/yellow]")
        raise typer.Exit(2)
    if not outcome.success:
        console.print(f"[red]Error:[/red] {outcome.message}")
        for name, message in outcome.field_errors.items():
            console.print(f"  - {name}: {message}")
        raise typer.Exit(1)

    for warning in outcome.warnings:
        console.print(f"[yellow]Warning:[/yellow] {warning}")
    if json_output:
        console.print(json.dumps(outcome.to_dict(), indent=2, default=str))
    else:
        console.print(f"[green]Event {outcome.status.value}:[/green] {outcome.event.id}")


@app.command("publish")
def publish_event(event_id: str = typer.Argument(..., help="Event ID")) -> None:
    """Publish a draft event."""
    event = run(get_store().publish_event(event_id))
    console.print(f"[green]Published:[/green] {event.id} ({event.title})")


@app.command("cancel")
def cancel_event(event_id: str = typer.Argument(..., help="Event ID")) -> None:
    """Cancel an event."""
    event = run(get_store().cancel_event(event_id))
    console.print(f"[yellow]Cancelled:[/yellow] {event.id} ({event.title})")


@app.command("delete")
def delete_event(
    event_id: str = typer.Argument(..., help="Event ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete an event with its tickets, attendees, analytics and campaigns."""
    if not yes:
        typer.confirm(f"Delete {event_id} and all of its records?", abort=True)
    run(get_store().delete_event(event_id))
    console.print(f"[green]Deleted:[/green] {event_id}")


@app.command("tickets")
def list_tickets(event_id: str = typer.Argument(..., help="Event ID")) -> None:
    """List the ticket types of an event."""
    tickets = run(get_store().list_ticket_types(event_id))
    table = Table(title=f"Ticket types for {event_id}")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Price", justify="right")
    table.add_column("Sold", justify="right")
    table.add_column("Remaining", justify="right", style="green")
    table.add_column("Active")
    for t in tickets:
        table.add_row(
            t.id,
            t.name,
            f"{t.price:.2f} {t.currency}",
            f"{t.sold}/{t.quantity}",
            str(t.remaining),
            "yes" if t.is_active else "no",
        )
    console.print(table)


@app.command("attendees")
def list_attendees(event_id: str = typer.Argument(..., help="Event ID")) -> None:
    """List the attendees of an event."""
    attendees = run(get_store().list_attendees(event_id))
    table = Table(title=f"Attendees for {event_id}")
    table.add_column("ID", style="cyan")
    table.add_column("User")
    table.add_column("Ticket")
    table.add_column("Check-in")
    table.add_column("Payment")
    for a in attendees:
        table.add_row(
            a.id,
            a.user_id,
            a.ticket_type_id or "-",
            a.check_in_status.value,
            a.payment_status.value,
        )
    console.print(table)


@app.command("check-in")
def check_in(
    attendee_id: str = typer.Argument(..., help="Attendee ID"),
    status: CheckInStatus = typer.Option(
        CheckInStatus.CHECKED_IN, "--status", "-s", help="New check-in status"
    ),
) -> None:
    """Update an attendee's check-in status."""
    attendee = run(get_store().set_attendee_check_in(attendee_id, status))
    console.print(f"[green]{attendee.id}:[/green] {attendee.check_in_status.value}")


@app.command("analytics")
def show_analytics(
    event_id: str = typer.Argument(..., help="Event ID"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
) -> None:
    """Show the analytics snapshot of an event."""
    snapshot = run(get_store().get_analytics(event_id))
    if json_output:
        console.print(json.dumps(snapshot.to_dict(), indent=2, default=str))
        return
    table = Table(title=f"Analytics for {event_id}", show_header=False)
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("Views", str(snapshot.views))
    table.add_row("Registrations", str(snapshot.registrations))
    table.add_row("Conversion", f"{snapshot.conversion_rate:.1%}")
    table.add_row("Revenue", f"{snapshot.revenue:,.2f}")
    table.add_row("Top referrers", ", ".join(snapshot.top_referrers) or "-")
    console.print(table)


@app.command("stats")
def show_stats(
    organizer: Optional[str] = typer.Option(None, "--organizer", "-o", help="Organizer ID"),
) -> None:
    """Show dashboard statistics."""
    stats = run(load_dashboard_stats(get_store(), organizer_id=organizer))
    print_result(stats.to_dict(), "Dashboard")


@app.command("reset")
def reset_store(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Replace all records with the fixture data."""
    if not yes:
        typer.confirm("Discard all records and restore the fixtures?", abort=True)
    run(get_store().reset())
    console.print("[green]Store reset.[/green]")


@app.command("info")
def show_info() -> None:
    """Show configuration and storage information."""
    config = Config.from_env()
    table = Table(title="EventEase Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="white")
    table.add_row("Storage directory", str(config.storage_dir))
    table.add_row("Seed fixtures", str(config.seed_fixtures))
    table.add_row("Simulated latency", f"{config.latency_min}s - {config.latency_max}s")
    table.add_row("Session lifetime", f"{config.session_ttl_hours}h")
    table.add_row("Admin session lifetime", f"{config.admin_session_ttl_hours}h")
    table.add_row("Security log limit", str(config.security_log_limit))
    console.print(table)

    console.print("\n[yellow]Environment Variables:[/yellow]")
    console.print("  EVENTEASE_STORAGE_DIR    Where records are stored")
    console.print("  EVENTEASE_LATENCY_MIN    Minimum simulated latency (default: 0.2)")
    console.print("  EVENTEASE_LATENCY_MAX    Maximum simulated latency (default: 0.5)")
    console.print("  EVENTEASE_LOG_LEVEL      Log level (default: INFO)")


@app.command("version")
def show_version() -> None:
    """Show version information."""
    from eventease import __version__
    console.print(f"EventEase v{__version__}")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
