from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import typer

from cli.client import ApiClient
from cli.config import CLIConfig, load_config
from cli.render import render_message, render_reading


@dataclass
class CLIState:
    config: CLIConfig
    client: ApiClient


app = typer.Typer(
    help="Utilities for interacting with the weather lookup service.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    state = ctx.obj
    if not isinstance(state, CLIState):
        typer.secho("CLI state is uninitialized.", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    return state


@app.callback()
def main(
    ctx: typer.Context,
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        "-b",
        help="Weather service base URL (defaults to API_BASE_URL env or http://localhost:8000).",
    ),
    timeout: Optional[float] = typer.Option(
        None,
        "--timeout",
        help="Seconds to wait for a response; future dates make ten upstream calls.",
    ),
) -> None:
    """Entry point for the CLI."""
    config = load_config(base_url=base_url, timeout=timeout)
    client = ApiClient(config)
    ctx.obj = CLIState(config=config, client=client)
    ctx.call_on_close(client.close)


@app.command("lookup")
def lookup_command(
    ctx: typer.Context,
    location: str = typer.Argument(..., help="City, address, or lat,lon."),
    date: str = typer.Argument(..., help="Date as YYYY-MM-DD; future dates are estimated."),
) -> None:
    """Show the temperatures for a location on a date."""
    state = _get_state(ctx)
    render_reading(state.client.lookup(location, date))


@app.command("preload")
def preload_command(
    ctx: typer.Context,
    location: str = typer.Argument(..., help="City, address, or lat,lon."),
    date: str = typer.Argument(..., help="Last day of the year to store (YYYY-MM-DD)."),
) -> None:
    """Store the year of readings ending on DATE for offline lookups."""
    state = _get_state(ctx)
    typer.echo(f"Loading one year of readings for {location} ...")
    render_message(state.client.preload(location, date))


@app.command("range")
def range_command(
    ctx: typer.Context,
    location: str = typer.Argument(..., help="City, address, or lat,lon."),
    start_date: str = typer.Argument(..., help="First day (YYYY-MM-DD)."),
    end_date: str = typer.Argument(..., help="Last day (YYYY-MM-DD)."),
) -> None:
    """Store every reading between two dates."""
    state = _get_state(ctx)
    render_message(state.client.load_range(location, start_date, end_date))


@app.command("cached")
def cached_command(
    ctx: typer.Context,
    date: str = typer.Argument(..., help="Stored date to read (YYYY-MM-DD)."),
) -> None:
    """Show a stored reading without contacting the weather provider."""
    state = _get_state(ctx)
    render_reading(state.client.get_cached(date))
