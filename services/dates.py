"""Calendar helpers used to validate requests and walk back through past years."""

from __future__ import annotations

import calendar
import re
from datetime import date, datetime

from services.errors import InvalidDateFormat

_ISO_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
ISO_DATE_FORMAT = "%Y-%m-%d"


def parse_iso_date(value: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` string, rejecting impossible calendar dates."""
    if not isinstance(value, str) or not _ISO_DATE_PATTERN.fullmatch(value):
        raise InvalidDateFormat(value)
    try:
        return datetime.strptime(value, ISO_DATE_FORMAT).date()
    except ValueError as exc:
        raise InvalidDateFormat(value) from exc


def format_iso_date(value: date) -> str:
    return value.strftime(ISO_DATE_FORMAT)


def is_future(value: date, today: date) -> bool:
    return value > today


def _replace_year(value: date, year: int) -> date:
    day = value.day
    if value.month == 2 and day == 29 and not calendar.isleap(year):
        day = 28
    return date(year, value.month, day)


def subtract_years(value: date, years: int) -> date:
    """Step back whole years; February 29 falls back to February 28."""
    return _replace_year(value, value.year - years)


def adjusted_anchor_date(entered: date, today: date) -> date:
    """Most recent past occurrence of ``entered``'s month and day, in last year.

    Whether the entered date is next year or further out, the lookback starts
    from ``today.year - 1``.
    """
    return _replace_year(entered, today.year - 1)
