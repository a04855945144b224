"""
Service module for cycle phase classification.

This module maps a cycle day onto its phase and the presentation details
for that exact day. Boundaries are asymmetric and counted from both ends of
the cycle: menstruation from day 1, the fertile window around
``cycle_length - 14``, and the luteal/PMS tail from the last day.

Typical usage:
    >>> info = phase_info(14, 28)
    >>> info.name
    <PhaseName.OVULATION: 'Ovulation'>
    >>> info = phase_for_date(today, config, history)
"""
from datetime import date, datetime
from typing import Iterable, Optional, Union

from lunarium.models.cycle import CycleConfig, CycleHistoryEntry
from lunarium.models.phase import PhaseInfo, PhaseName
from lunarium.services.constants import (
    FERTILE_DAYS_AFTER_OVULATION,
    FERTILE_DAYS_BEFORE_OVULATION,
    FERTILE_WINDOW_PALETTE,
    FOLLICULAR_STYLE,
    LUTEAL_PHASE_DAYS,
    LUTEAL_STYLE,
    LUTEAL_TRANSITION_STYLE,
    MENSTRUATION_DAYS,
    MENSTRUATION_PALETTE,
    PHASE_DESCRIPTIONS,
    PHASE_SHORT_NAMES,
    PMS_STYLE,
    PMS_TRANSITION_STYLE,
    TRANSITION_SHORT_NAME,
)
from lunarium.services.cycle import cycle_day_for_date, effective_cycle_length


def ovulation_day(cycle_length: int) -> int:
    """Cycle day of ovulation, a fixed luteal span before the end."""
    return cycle_length - LUTEAL_PHASE_DAYS


def _build(name: PhaseName, style: tuple, short_name: Optional[str] = None) -> PhaseInfo:
    color, border, text = style
    return PhaseInfo(
        name=name,
        short_name=short_name or PHASE_SHORT_NAMES[name],
        color=color,
        border=border,
        text=text,
        description=PHASE_DESCRIPTIONS[name]
    )


def phase_info(cycle_day: int, cycle_length: int) -> PhaseInfo:
    """
    Classify a cycle day and return its presentation details.

    Rules are checked in order:
        1. Days 1-5: menstruation, one colour per day
        2. Day 6 up to the fertile window: follicular
        3. Ovulation - 5 to ovulation + 1: fertile window, blended at both edges
        4. cycle_length - 3: luteal, blending into PMS
        5. cycle_length - 2: PMS
        6. Last two days: PMS, blending into the next menstruation
        7. Anything else: luteal

    Args:
        cycle_day: Day in the cycle (1-based)
        cycle_length: Cycle length in days, expected within [21, 35]

    Returns:
        PhaseInfo for the day

    Example:
        >>> phase_info(1, 28).name
        <PhaseName.MENSTRUATION: 'Menstruation'>
        >>> phase_info(25, 28).is_gradient
        True
    """
    ovulation = ovulation_day(cycle_length)
    fertile_start = ovulation - FERTILE_DAYS_BEFORE_OVULATION
    fertile_end = ovulation + FERTILE_DAYS_AFTER_OVULATION

    if 1 <= cycle_day <= MENSTRUATION_DAYS:
        return _build(PhaseName.MENSTRUATION, MENSTRUATION_PALETTE[cycle_day - 1])

    if MENSTRUATION_DAYS < cycle_day < fertile_start:
        return _build(PhaseName.FOLLICULAR, FOLLICULAR_STYLE)

    if fertile_start <= cycle_day <= fertile_end:
        return _build(PhaseName.OVULATION, FERTILE_WINDOW_PALETTE[cycle_day - fertile_start])

    if cycle_day == cycle_length - 3:
        return _build(PhaseName.LUTEAL, LUTEAL_TRANSITION_STYLE, TRANSITION_SHORT_NAME)

    if cycle_day == cycle_length - 2:
        return _build(PhaseName.PMS, PMS_STYLE)

    if cycle_length - 1 <= cycle_day <= cycle_length:
        return _build(PhaseName.PMS, PMS_TRANSITION_STYLE, TRANSITION_SHORT_NAME)

    return _build(PhaseName.LUTEAL, LUTEAL_STYLE)


def phase_for_date(
    target_date: Union[date, datetime],
    config: CycleConfig,
    history: Optional[Iterable[CycleHistoryEntry]] = None
) -> PhaseInfo:
    """
    Get the phase of a calendar date for a cycle configuration.

    Args:
        target_date: Date to classify
        config: Active cycle configuration
        history: Optional past cycles, used for the cycle length

    Returns:
        PhaseInfo for the date
    """
    length = effective_cycle_length(config, history)
    cycle_day = cycle_day_for_date(target_date, config.cycle_start_date, length)
    return phase_info(cycle_day, length)
