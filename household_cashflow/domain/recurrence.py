"""Recurrence expansion for weekly through yearly schedules"""

import logging
from datetime import date, timedelta
from typing import List, Tuple

from household_cashflow.domain.exceptions import InvalidFrequencyError
from household_cashflow.domain.models import Frequency
from household_cashflow.utils.date_utils import add_months

logger = logging.getLogger(__name__)

# (days, months) advanced per step
_STEPS = {
    Frequency.WEEKLY: (7, 0),
    Frequency.FORTNIGHTLY: (14, 0),
    Frequency.MONTHLY: (0, 1),
    Frequency.QUARTERLY: (0, 3),
    Frequency.YEARLY: (0, 12),
}

FALLBACK_STEP_DAYS = 30


def _step_for(frequency) -> Tuple[int, int]:
    try:
        return _STEPS[Frequency.parse(frequency)]
    except InvalidFrequencyError:
        logger.warning(
            "Unrecognised frequency, falling back to %d-day step",
            FALLBACK_STEP_DAYS,
            extra={"frequency": str(frequency)},
        )
        return FALLBACK_STEP_DAYS, 0


def _step_from(day: date, step: Tuple[int, int]) -> date:
    """
    One step after ``day``.

    Each occurrence is stepped from the previous one, so an anchor on the 31st
    clamps to the 28th in February and stays on the 28th from then on.
    """
    days, months = step
    if months:
        return add_months(day, months)
    return day + timedelta(days=days)


def advance_one_step(day: date, frequency) -> date:
    """Return the date one frequency step after ``day``"""
    return _step_from(day, _step_for(frequency))


def expand_occurrences(anchor: date, frequency, window_start: date, window_end: date) -> List[date]:
    """
    Every occurrence of a schedule inside ``[window_start, window_end]``.

    The anchor is stepped forward until it reaches or passes ``window_start``,
    then dates are emitted while they are on or before ``window_end``. An
    anchor that already lies inside the window is the first occurrence.

    Example:
        anchor 2024-01-31, monthly, window 2024-02-01..2024-04-30
        -> [2024-02-29, 2024-03-29, 2024-04-29]
    """
    step = _step_for(frequency)
    occurrences: List[date] = []

    current = anchor
    while current < window_start:
        current = _step_from(current, step)

    while current <= window_end:
        occurrences.append(current)
        current = _step_from(current, step)

    return occurrences


def next_occurrence_after(anchor: date, frequency, after: date) -> date:
    """First occurrence of the schedule strictly after ``after``"""
    step = _step_for(frequency)
    current = anchor
    while current <= after:
        current = _step_from(current, step)
    return current


def first_occurrences(anchor: date, frequency, count: int) -> List[date]:
    """The first ``count`` occurrences starting at ``anchor`` itself"""
    step = _step_for(frequency)
    occurrences: List[date] = []
    current = anchor
    for _ in range(count):
        occurrences.append(current)
        current = _step_from(current, step)
    return occurrences
