"""meetstats-tracker: samples open Google Meet tabs and reports sessions to the backend."""

from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from meetstats.errors import NetworkError
from meetstats.logging import setup_logging
from meetstats.tracker.client import SessionApiClient
from meetstats.tracker.config import TrackerConfig
from meetstats.tracker.identity import get_or_create_user_id
from meetstats.tracker.manager import LifecycleManager
from meetstats.tracker.probe import DevToolsTabProbe
from meetstats.tracker.state import StateStore

app = typer.Typer(
    name="meetstats-tracker",
    help="Track time spent in Google Meet tabs.",
    no_args_is_help=True,
)

console = Console()


def build_manager(config: TrackerConfig) -> LifecycleManager:
    """Wire probe, API client, identity and state store from config."""
    return LifecycleManager(
        api=SessionApiClient(config.api_url, timeout=config.request_timeout),
        probe=DevToolsTabProbe(config.devtools_url, config.url_pattern, timeout=config.request_timeout),
        user_id=get_or_create_user_id(config.identity_path),
        store=StateStore(config.state_path),
    )


@app.callback()
def main(
    ctx: typer.Context,
    debug: Annotated[bool, typer.Option("--debug", help="Verbose console logging")] = False,
) -> None:
    """MeetStats tracker."""
    config = TrackerConfig()
    if debug:
        config.debug = True
    setup_logging(config.debug)
    ctx.obj = config


@app.command("run")
def run(
    ctx: typer.Context,
    interval: Annotated[float | None, typer.Option("--interval", "-i", help="Seconds between samples")] = None,
) -> None:
    """Sample tabs on a fixed interval until interrupted."""
    config: TrackerConfig = ctx.obj
    manager = build_manager(config)
    try:
        manager.run_forever(interval if interval is not None else config.check_interval)
    except KeyboardInterrupt:
        console.print("[dim]Stopped.[/dim]")


@app.command("tick")
def tick(ctx: typer.Context) -> None:
    """Sample tabs once and apply a single transition."""
    config: TrackerConfig = ctx.obj
    state = build_manager(config).tick()
    console.print(f"Phase: [cyan]{state.phase}[/cyan]")


@app.command("status")
def status(ctx: typer.Context) -> None:
    """Show the user id and the currently open session, if any."""
    config: TrackerConfig = ctx.obj
    current = build_manager(config).status()

    table = Table(title="Tracker status")
    table.add_column("Key", style="cyan")
    table.add_column("Value")
    table.add_row("User", current.user_id)
    table.add_row("Active", "yes" if current.is_active else "no")
    table.add_row("Session", str(current.session_id) if current.session_id else "-")
    table.add_row("Started", current.started_at.isoformat() if current.started_at else "-")
    console.print(table)


@app.command("whoami")
def whoami(ctx: typer.Context) -> None:
    """Print the user id used for the dashboard URL."""
    config: TrackerConfig = ctx.obj
    typer.echo(get_or_create_user_id(config.identity_path))


@app.command("stats")
def stats(ctx: typer.Context) -> None:
    """Fetch this user's totals from the backend."""
    config: TrackerConfig = ctx.obj
    user_id = get_or_create_user_id(config.identity_path)
    client = SessionApiClient(config.api_url, timeout=config.request_timeout)
    try:
        data = client.get_user_stats(user_id)
    except NetworkError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1) from e

    summary = data.get("summary", {})
    table = Table(title="Meeting time")
    table.add_column("Period", style="cyan")
    table.add_column("Sessions", justify="right")
    table.add_column("Duration", justify="right")
    table.add_row("Total", str(summary.get("totalSessions", 0)), format_duration(summary.get("totalDuration", 0)))
    for label, key in (("This month", "thisMonth"), ("This year", "thisYear")):
        period = summary.get(key, {})
        table.add_row(label, str(period.get("count", 0)), format_duration(period.get("duration", 0)))
    console.print(table)


def format_duration(milliseconds: int) -> str:
    minutes = milliseconds // 60_000
    return f"{minutes // 60}h {minutes % 60:02d}m"
