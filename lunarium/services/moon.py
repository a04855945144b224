"""
Lunar phase of a calendar day, counted from a known new moon.
"""
import math
from datetime import date, datetime, time, timezone
from typing import Union

from lunarium.models.moon import MoonInfo
from lunarium.services.constants import (
    KNOWN_NEW_MOON,
    LUNAR_CYCLE_DAYS,
    MOON_EMOJIS,
    MOON_NAMES,
)


def _as_utc(moment: Union[date, datetime]) -> datetime:
    if not isinstance(moment, datetime):
        moment = datetime.combine(moment, time.min)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def moon_info(moment: Union[date, datetime]) -> MoonInfo:
    """
    Get the moon phase for a date or time.

    Dates count as midnight UTC and naive datetimes as UTC.

    Args:
        moment: Date or datetime to look up

    Returns:
        MoonInfo with emoji, French phase name and age in days

    Example:
        >>> moon_info(date(2025, 11, 6)).name
        'Pleine lune'
    """
    elapsed = (_as_utc(moment) - KNOWN_NEW_MOON).total_seconds() / 86400
    age = elapsed % LUNAR_CYCLE_DAYS  # non-negative for dates before the reference too
    phase = min(int(math.floor(age / LUNAR_CYCLE_DAYS * 8)), len(MOON_NAMES) - 1)

    return MoonInfo(
        emoji=MOON_EMOJIS[phase],
        name=MOON_NAMES[phase],
        age=round(age, 1)
    )
