"""
Main CLI application using Typer.
"""

import json
import logging
from pathlib import Path
from typing import Annotated, Optional

import pendulum
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from ..adapters.json_booking_source import InMemoryBookingSource, JsonBookingSource
from ..config import AppConfig, get_default_config_path
from ..domain.exceptions import SlotPlannerError
from ..domain.models import Slots
from ..services.availability_service import AvailabilityService

app = typer.Typer(
    name="slotplanner",
    help="Propose bookable time slots from a weekly availability pattern",
    add_completion=False
)

console = Console()

WEEKDAY_NAMES = {
    1: "Monday",
    2: "Tuesday",
    3: "Wednesday",
    4: "Thursday",
    5: "Friday",
    6: "Saturday",
    7: "Sunday",
}


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )


def _parse_now(value: Optional[str], tz: str) -> pendulum.DateTime:
    """Parse the --now option, defaulting to the current time in tz."""
    if not value:
        return pendulum.now(tz)
    try:
        return pendulum.parse(value, tz=tz)
    except ValueError as e:
        console.print(f"[red]Error parsing --now: {e}[/red]")
        raise typer.Exit(1)


def _print_slots(slots: Slots, tz: str) -> None:
    if not slots:
        console.print(
            "[yellow]⚠ No available slots found.[/yellow]\n"
            "Try a longer calendar, a shorter duration or less advance notice."
        )
        return

    total = sum(len(day_slots) for day_slots in slots.values())
    console.print(f"[bold green]✓ {total} available slot(s) found ({tz}):[/bold green]\n")

    for date_key, day_slots in slots.items():
        day = pendulum.parse(date_key)
        table = Table(
            title=f"{WEEKDAY_NAMES[day.isoweekday()]}, {date_key}",
            show_header=True,
            header_style="bold cyan"
        )
        table.add_column("From", style="bold yellow")
        table.add_column("To")
        table.add_column("Minutes", justify="right", style="dim")

        for slot in day_slots:
            table.add_row(
                slot.start.format("HH:mm"),
                slot.end.format("YYYY-MM-DD HH:mm") if slot.end.to_date_string() != date_key else slot.end.format("HH:mm"),
                f"{slot.duration_minutes():g}"
            )

        console.print(table)


@app.command()
def find(
    config_file: Annotated[Optional[Path], typer.Option("--config", "-c", help="Path to config file. Defaults to ./config.yaml")] = None,
    now: Annotated[Optional[str], typer.Option("--now", help="Reference time (ISO-8601). Defaults to the current time.")] = None,
    days: Annotated[Optional[int], typer.Option("--days", help="Number of calendar days to search")] = None,
    duration: Annotated[Optional[int], typer.Option("--duration", "-d", help="Slot duration in minutes")] = None,
    notice: Annotated[Optional[float], typer.Option("--notice", help="Minimum advance notice in hours")] = None,
    bookings: Annotated[Optional[Path], typer.Option("--bookings", help="JSON file with existing bookings")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print slots as JSON.")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
):
    """
    Find bookable slots for the configured availability.

    Examples:

        slotplanner find

        slotplanner find --days 14 --duration 30

        slotplanner find --now 2024-12-18T10:53 --notice 4 --json
    """
    _configure_logging(verbose)

    try:
        config_path = config_file or get_default_config_path()
        config = AppConfig.load_from_yaml(config_path)
        tz = config.timezone

        reference = _parse_now(now, tz)

        bookings_path = bookings or config.bookings_file
        if bookings_path is not None:
            source = JsonBookingSource(bookings_path)
        else:
            source = InMemoryBookingSource()

        service = AvailabilityService(booking_source=source)
        slots = service.find_slots(
            now=reference,
            config=config,
            duration_minutes=duration,
            must_book_hours_before=notice,
            calendar_length_days=days,
        )

    except (SlotPlannerError, FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if as_json:
        payload = {
            date_key: [slot.to_dict() for slot in day_slots]
            for date_key, day_slots in slots.items()
        }
        typer.echo(json.dumps(payload, indent=2))
        return

    console.print()
    _print_slots(slots, tz)
    console.print()


@app.command()
def windows(
    config_file: Optional[Path] = typer.Option(
        None,
        "--config", "-c",
        help="Path to config file"
    )
):
    """
    List the configured weekly availability windows.
    """
    try:
        config_path = config_file or get_default_config_path()
        config = AppConfig.load_from_yaml(config_path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    if not config.availability:
        console.print("[yellow]No availability windows defined in the config file.[/yellow]")
        return

    table = Table(
        title=f"Availability ({config.timezone})",
        show_header=True,
        header_style="bold cyan"
    )
    table.add_column("From", style="bold yellow")
    table.add_column("To")

    for window in config.availability:
        table.add_row(
            f"{WEEKDAY_NAMES.get(window.from_.weekday, window.from_.weekday)} {window.from_.hour:02d}:{window.from_.minute:02d}",
            f"{WEEKDAY_NAMES.get(window.to.weekday, window.to.weekday)} {window.to.hour:02d}:{window.to.minute:02d}",
        )

    console.print()
    console.print(table)
    console.print()


@app.command()
def version():
    """
    Show version information.
    """
    from .. import __version__
    console.print(f"\n[bold cyan]slotplanner[/bold cyan] version [bold]{__version__}[/bold]\n")


if __name__ == "__main__":
    app()
