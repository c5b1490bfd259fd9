from __future__ import annotations

from typing import Any, Dict, Iterable

import typer


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def _celsius(value: Any) -> str:
    if value is None:
        return "n/a"
    return f"{float(value):.1f}°C"


def render_reading(payload: Dict[str, Any]) -> None:
    reading = payload.get("result") or {}
    echo_heading("Weather")
    if not reading:
        typer.echo("No reading available.")
        return
    echo_key_values(
        [
            ("date", reading.get("date")),
            ("max_temp", _celsius(reading.get("max_temp_celsius"))),
            ("min_temp", _celsius(reading.get("min_temp_celsius"))),
            ("description", reading.get("description") or "Description not available"),
        ]
    )


def render_message(payload: Dict[str, Any]) -> None:
    message = payload.get("success_message")
    if message:
        typer.secho(f"Success: {message}", fg=typer.colors.GREEN)
    error = payload.get("error_message")
    if error:
        typer.secho(f"Error: {error}", fg=typer.colors.RED, err=True)
