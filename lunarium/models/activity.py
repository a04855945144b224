"""
Activity models for synced calendar events and tasks.
"""
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field

from lunarium.models.moon import MoonInfo
from lunarium.models.phase import PhaseInfo


class Activity(BaseModel):
    """
    A calendar event or task attached to a single calendar day.
    """
    id: str
    title: str
    day: date
    start_time: str = ""
    end_time: str = ""
    color: str = "#3b82f6"
    text_color: str = "#ffffff"
    calendar_id: Optional[str] = None
    is_task: bool = False
    task_list_id: Optional[str] = None
    task_list_title: Optional[str] = None
    status: Optional[str] = None
    has_no_due_date: bool = False

    @property
    def is_completed(self) -> bool:
        """Check if this is a completed task."""
        return self.is_task and self.status == "completed"

    @property
    def is_all_day(self) -> bool:
        return not self.start_time


class DayDetails(BaseModel):
    """
    Everything shown for one calendar day: its place in the cycle,
    the moon and the day's activities.
    """
    day: date
    cycle_day: int
    cycle_length: int
    phase: PhaseInfo
    moon: MoonInfo
    activities: List[Activity] = Field(default_factory=list)
