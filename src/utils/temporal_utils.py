"""
Temporal Utility Functions.

This module provides utility functions for working with dates and calendar
months, particularly for recurring charge detection.
"""

import calendar
from datetime import date
from typing import Sequence

import numpy as np


def subtract_months(day: date, months: int) -> date:
    """
    Move a date back by a number of calendar months.

    The day of month is clamped to the length of the target month, so
    31 March minus one month is the last day of February.

    Args:
        day: Date to move back from
        months: Number of calendar months (may be zero)

    Returns:
        The shifted date
    """
    month_index = day.year * 12 + (day.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(day.day, last_day))


def month_key(day: date) -> str:
    """Return the ``YYYY-MM`` bucket a date falls into."""
    return f"{day.year:04d}-{day.month:02d}"


def day_gaps(dates: Sequence[date]) -> np.ndarray:
    """
    Calculate day intervals between consecutive dates.

    Args:
        dates: Dates sorted ascending

    Returns:
        Array of ``len(dates) - 1`` gaps in whole days
    """
    if len(dates) < 2:
        return np.array([], dtype=float)
    ordinals = np.array([d.toordinal() for d in dates], dtype=float)
    return np.diff(ordinals)
