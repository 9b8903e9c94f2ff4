"""Expansion of a recurring lesson into its calendar dates."""
from datetime import date, timedelta
from typing import List

FREQUENCY_STEPS = {
    "daily": timedelta(days=1),
    "weekly": timedelta(days=7),
}


def expand_recurring_dates(start: date, end: date, frequency: str) -> List[date]:
    """
    One date per occurrence from start to end, both inclusive.

    Plain calendar arithmetic: no timezone handling, no skipped days, no
    de-duplication against existing lessons. An end before start yields [].
    """
    step = FREQUENCY_STEPS.get(frequency)
    if step is None:
        raise ValueError(f"Unsupported frequency: {frequency}")

    occurrences = []
    current = start
    while current <= end:
        occurrences.append(current)
        current += step
    return occurrences
