from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from .aggregate import DeviceReading, aggregate_readings
from .collector import collect_readings, resolve_command
from .errors import BatteryError
from .icons import icon_for
from .monitor import exit_on_termination_signals, run_monitor
from .notify import DEFAULT_APP_NAME, DEFAULT_NOTIFY_SEND, Notifier
from .snapshot import BatterySnapshot, build_snapshot
from .state import classify
from .timestring import format_hours, format_percentage
from .upower import DEFAULT_UPOWER

app = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)
console = Console()
log = logging.getLogger(__name__)

UPOWER_ENV = "WAYBAR_BATTERY_UPOWER"
NOTIFY_SEND_ENV = "WAYBAR_BATTERY_NOTIFY_SEND"


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO, format="%(message)s"
    )


@app.command("run")
def run_command(
    upower: Optional[str] = typer.Option(
        None, help=f"upower executable (or set {UPOWER_ENV})"
    ),
    notify_send: Optional[str] = typer.Option(
        None, help=f"notify-send executable (or set {NOTIFY_SEND_ENV})"
    ),
    app_name: str = typer.Option(
        DEFAULT_APP_NAME, help="Application name shown on notifications"
    ),
    notify: bool = typer.Option(
        True, "--notify/--no-notify", help="Send desktop notifications"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Print one waybar JSON line per upower event, forever."""
    configure_logging(verbose)
    notifier = Notifier(
        command=resolve_command(notify_send, NOTIFY_SEND_ENV, DEFAULT_NOTIFY_SEND),
        app_name=app_name,
        enabled=notify,
    )
    exit_on_termination_signals()
    try:
        run_monitor(resolve_command(upower, UPOWER_ENV, DEFAULT_UPOWER), notifier)
    except BatteryError as exc:
        log.error("%s", exc)
        raise typer.Exit(code=1)


@app.command("show")
def show_command(
    upower: Optional[str] = typer.Option(
        None, help=f"upower executable (or set {UPOWER_ENV})"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Show every battery upower reports and the combined status once."""
    configure_logging(verbose)
    try:
        readings = collect_readings(resolve_command(upower, UPOWER_ENV, DEFAULT_UPOWER))
        if not readings:
            console.print("No battery found.")
            raise typer.Exit(code=1)
        snapshot = build_snapshot(aggregate_readings(readings))
    except BatteryError as exc:
        log.error("%s", exc)
        raise typer.Exit(code=1)

    console.print(_devices_table(readings))
    console.print(_summary_table(snapshot))


def _format_energy(value: float, unit: str) -> str:
    return f"{value:.2f}{unit}"


def _devices_table(readings: list[DeviceReading]) -> Table:
    devices = Table(
        title="Batteries",
        show_lines=False,
        box=box.SIMPLE,
        header_style="bold",
    )
    devices.add_column("Device")
    devices.add_column("State", no_wrap=True)
    devices.add_column("Energy", justify="right")
    devices.add_column("Full", justify="right")
    devices.add_column("Rate", justify="right")

    for reading in readings:
        devices.add_row(
            Path(reading.device).name,
            ",".join(state.value for state in reading.states) or "--",
            _format_energy(reading.energy, "Wh"),
            _format_energy(reading.energy_full, "Wh"),
            _format_energy(reading.energy_rate, "W"),
        )
    return devices


def _summary_table(snapshot: BatterySnapshot) -> Table:
    summary = Table(
        title="Combined status",
        show_lines=False,
        box=box.SIMPLE,
        header_style="bold",
    )
    summary.add_column("Field")
    summary.add_column("Value")
    summary.add_row("Charge", format_percentage(snapshot.percentage))
    summary.add_row("Direction", "discharging" if snapshot.discharging else "charging")
    if snapshot.hours_left is None:
        time_left = "--"
    else:
        time_left = format_hours(snapshot.hours_left) or "now"
    summary.add_row("Time left", time_left)
    summary.add_row("Class", classify(snapshot).value)
    summary.add_row("Icon", icon_for(snapshot.percentage, snapshot.discharging))
    return summary


def main() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    main()
