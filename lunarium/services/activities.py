"""
Service module for shaping synced calendar events and tasks.

The calendar/task provider is called elsewhere; this module only converts
the items it returns into activities keyed by calendar day, and assembles
the detail view of one day.

Typical usage:
    activities = activities_from_provider(items, {"primary": "#a4bdfc"})
    details = get_day_details(day, config, history, activities)
"""
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Union

from aws_lambda_powertools import Logger

from lunarium.models.activity import Activity, DayDetails
from lunarium.models.cycle import CycleConfig, CycleHistoryEntry
from lunarium.services.constants import DEFAULT_ACTIVITY_COLOR, UNTITLED_ACTIVITY
from lunarium.services.cycle import cycle_day_for_date, effective_cycle_length
from lunarium.services.moon import moon_info
from lunarium.services.phase import phase_info
from lunarium.utils.colors import google_color, text_color_for_background
from lunarium.utils.dates import format_date, parse_date, to_date

logger = Logger()

ActivitiesByDay = Dict[str, List[Activity]]


def _parse_time_bounds(item: Dict[str, Any]):
    """Return (day, start_time, end_time) of a provider item, or None."""
    start = item.get("start") or {}
    end = item.get("end") or {}
    if not isinstance(start, dict):
        return None
    if not isinstance(end, dict):
        end = {}

    if start.get("dateTime"):
        start_dt = datetime.fromisoformat(start["dateTime"].replace("Z", "+00:00"))
        end_time = ""
        if end.get("dateTime"):
            end_dt = datetime.fromisoformat(end["dateTime"].replace("Z", "+00:00"))
            end_time = end_dt.strftime("%H:%M")
        return start_dt.date(), start_dt.strftime("%H:%M"), end_time

    day = parse_date(start.get("date"))
    if day is None:
        return None
    return day, "", ""


def activities_from_provider(
    items: Iterable[Dict[str, Any]],
    calendar_colors: Optional[Dict[str, str]] = None
) -> ActivitiesByDay:
    """
    Group provider events and tasks by calendar day.

    Timed items keep their local start and end times as ``HH:MM``; all-day
    items and tasks have empty times. Items without a usable start are
    skipped.

    Args:
        items: Provider items with ``id``, ``summary``, ``start``/``end``
            (``dateTime`` or ``date``) and optional task fields
        calendar_colors: Colour per calendar id

    Returns:
        Dictionary of YYYY-MM-DD keys to activities in provider order
    """
    calendar_colors = calendar_colors or {}
    grouped: ActivitiesByDay = {}
    skipped = 0

    for item in items:
        try:
            bounds = _parse_time_bounds(item)
        except (ValueError, TypeError, AttributeError):
            bounds = None
        if bounds is None:
            skipped += 1
            continue
        day, start_time, end_time = bounds

        if item.get("colorId"):
            color = google_color(item["colorId"])
        else:
            color = calendar_colors.get(item.get("calendarId"), DEFAULT_ACTIVITY_COLOR)

        try:
            text_color = text_color_for_background(color)
        except ValueError:
            logger.warning("Unreadable activity colour, using default", extra={
                "color": color,
                "activity_id": item.get("id")
            })
            color = DEFAULT_ACTIVITY_COLOR
            text_color = text_color_for_background(color)

        activity = Activity(
            id=str(item.get("id", "")),
            title=item.get("summary") or UNTITLED_ACTIVITY,
            day=day,
            start_time=start_time,
            end_time=end_time,
            color=color,
            text_color=text_color,
            calendar_id=item.get("calendarId"),
            is_task=bool(item.get("isTask", False)),
            task_list_id=item.get("taskListId"),
            task_list_title=item.get("taskListTitle"),
            status=item.get("status"),
            has_no_due_date=bool(item.get("hasNoDueDate", False))
        )
        grouped.setdefault(format_date(day), []).append(activity)

    if skipped:
        logger.warning("Skipped provider items without a start", extra={
            "skipped": skipped
        })
    return grouped


def activities_for_day(activities: ActivitiesByDay, day: Union[date, datetime]) -> List[Activity]:
    """Activities of one day, timed ones sorted by start, all-day first."""
    day_activities = activities.get(format_date(day), [])
    return sorted(day_activities, key=lambda a: (not a.is_all_day, a.start_time))


def get_day_details(
    day: Union[date, datetime],
    config: CycleConfig,
    history: Optional[Iterable[CycleHistoryEntry]] = None,
    activities: Optional[ActivitiesByDay] = None
) -> DayDetails:
    """
    Assemble the detail view of one calendar day.

    Args:
        day: Day to describe
        config: Active cycle configuration
        history: Optional past cycles
        activities: Optional activities by day

    Returns:
        DayDetails with cycle day, phase, moon and activities
    """
    day = to_date(day)
    length = effective_cycle_length(config, history)
    cycle_day = cycle_day_for_date(day, config.cycle_start_date, length)

    return DayDetails(
        day=day,
        cycle_day=cycle_day,
        cycle_length=length,
        phase=phase_info(cycle_day, length),
        moon=moon_info(day),
        activities=activities_for_day(activities or {}, day)
    )
