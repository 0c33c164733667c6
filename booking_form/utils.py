"""Shared utilities used across the booking form."""

import calendar
from datetime import date
from typing import Optional


def is_blank(value: Optional[str]) -> bool:
    """True for None, empty or whitespace-only strings."""
    return value is None or not value.strip()


def format_slot_time(hour: int, minute: int) -> str:
    """Format a slot as a zero-padded 24-hour ``HH:MM`` string.

    Examples:
        >>> format_slot_time(9, 0)
        '09:00'
        >>> format_slot_time(17, 30)
        '17:30'
    """
    return f"{hour:02d}:{minute:02d}"


def add_months(start: date, months: int) -> date:
    """Shift a date by whole months, clamping to the last day of the month.

    Examples:
        >>> add_months(date(2025, 1, 15), 3)
        datetime.date(2025, 4, 15)
        >>> add_months(date(2025, 11, 30), 3)
        datetime.date(2026, 2, 28)
    """
    month_index = start.month - 1 + months
    year = start.year + month_index // 12
    month = month_index % 12 + 1
    day = min(start.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)
