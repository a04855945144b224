"""
Service module for cycle day arithmetic.

This module maps calendar dates onto positions within a repeating cycle and
derives the cycle length to use from the configuration and its history.
Every function takes the reference dates explicitly; nothing here reads the
clock.

Typical usage:
    length = effective_cycle_length(config, history)
    cycle_day = cycle_day_for_date(today, config.cycle_start_date, length)
    selected_date = date_for_cycle_day(12, cycle_day, today)
"""
import math
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Union

from aws_lambda_powertools import Logger

from lunarium.models.cycle import CycleConfig, CycleHistoryEntry
from lunarium.services.constants import (
    DEFAULT_CYCLE_LENGTH,
    MAX_CYCLE_LENGTH,
    MIN_CYCLE_LENGTH,
)
from lunarium.utils.dates import parse_date, to_date

logger = Logger()


def coerce_cycle_length(cycle_length) -> int:
    """
    Return a usable cycle length, falling back to the default.

    Args:
        cycle_length: Configured value, possibly missing or non-numeric

    Returns:
        The value as a positive int, or DEFAULT_CYCLE_LENGTH
    """
    if isinstance(cycle_length, bool):
        return DEFAULT_CYCLE_LENGTH
    try:
        value = int(cycle_length)
    except (TypeError, ValueError):
        return DEFAULT_CYCLE_LENGTH
    return value if value >= 1 else DEFAULT_CYCLE_LENGTH


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up."""
    return math.floor(value + 0.5)


def cycle_day_for_date(
    target_date: Union[date, datetime],
    reference_start_date: Optional[Union[date, datetime, str]],
    cycle_length: int
) -> int:
    """
    Calculate the 1-based cycle day of a calendar date.

    Whole days are counted from the reference start date and wrapped into
    the cycle. There is no day 0: a multiple of the cycle length maps to the
    last day, so the reference start date itself is day ``cycle_length`` and
    the following day is day 1. Dates before the reference start wrap
    backwards the same way.

    Args:
        target_date: Date to place in the cycle
        reference_start_date: Start date of the active cycle
        cycle_length: Cycle length in days

    Returns:
        Cycle day in [1, cycle_length]; 1 if the reference start is missing

    Example:
        >>> cycle_day_for_date(date(2025, 1, 2), date(2025, 1, 1), 28)
        1
        >>> cycle_day_for_date(date(2024, 12, 31), date(2025, 1, 1), 28)
        27
    """
    reference = parse_date(reference_start_date)
    if reference is None or target_date is None:
        return 1

    length = coerce_cycle_length(cycle_length)
    elapsed_days = (to_date(target_date) - reference).days
    day = ((elapsed_days % length) + length) % length
    return day or length


def date_for_cycle_day(
    target_day: int,
    current_cycle_day: int,
    today: Union[date, datetime]
) -> date:
    """
    Find the date of a cycle day relative to today's position.

    Args:
        target_day: Cycle day to locate
        current_cycle_day: Cycle day of today
        today: Reference date

    Returns:
        Today shifted by the difference between the two cycle days
    """
    return to_date(today) + timedelta(days=target_day - current_cycle_day)


def average_cycle_length(history: Iterable[CycleHistoryEntry]) -> int:
    """
    Calculate the mean length of past cycles.

    Args:
        history: Past cycles with derived lengths

    Returns:
        Mean length rounded half up, or DEFAULT_CYCLE_LENGTH with no history
    """
    lengths = [entry.length for entry in history]
    if not lengths:
        return DEFAULT_CYCLE_LENGTH
    return round_half_up(sum(lengths) / len(lengths))


def effective_cycle_length(
    config: CycleConfig,
    history: Optional[Iterable[CycleHistoryEntry]] = None
) -> int:
    """
    Pick the cycle length used for phase calculations.

    The history average wins over the configured length as soon as any past
    cycle is known. Averages outside the supported range are clamped, since
    the phase table is only defined within it.

    Args:
        config: Active cycle configuration
        history: Optional past cycles

    Returns:
        Cycle length in days
    """
    history = list(history or [])
    if not history:
        return coerce_cycle_length(config.cycle_length)

    average = average_cycle_length(history)
    clamped = min(max(average, MIN_CYCLE_LENGTH), MAX_CYCLE_LENGTH)
    if clamped != average:
        logger.warning("Average cycle length outside supported range", extra={
            "average_length": average,
            "clamped_length": clamped,
            "history_size": len(history)
        })
    return clamped
