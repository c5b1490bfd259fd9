"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DESCRIPTION_NOT_AVAILABLE = "Description not available"


@dataclass(frozen=True, slots=True)
class DailyReading:
    """One day's temperatures in Fahrenheit for a location."""

    date: str
    max_temp: float
    min_temp: float
    description: Optional[str] = None


def fahrenheit_to_celsius(value: float) -> float:
    """Convert for display only; stored values stay Fahrenheit."""
    return (value - 32) * 5 / 9
