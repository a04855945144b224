"""
Cycle configuration and history models.

These mirror the two persisted settings documents: the active cycle
configuration and the list of past cycle start dates.
"""
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from lunarium.utils.dates import parse_date


class CycleConfig(BaseModel):
    """
    The currently active cycle.

    Attributes:
        cycle_start_date: Day 1 of the active cycle, without time of day
        cycle_length: Configured length in days
    """
    model_config = ConfigDict(populate_by_name=True)

    cycle_start_date: date = Field(..., alias="cycleStartDate")
    cycle_length: int = Field(28, alias="cycleLength")

    @field_validator("cycle_start_date", mode="before")
    @classmethod
    def _normalize_start(cls, value):
        parsed = parse_date(value)
        if parsed is None:
            raise ValueError(f"Invalid cycle start date: {value!r}")
        return parsed


class RawHistoryEntry(BaseModel):
    """A past cycle start date as edited by the user, possibly empty."""
    model_config = ConfigDict(populate_by_name=True)

    start_date: Optional[str] = Field("", alias="startDate")


class CycleHistoryEntry(BaseModel):
    """
    A past cycle with its derived length.

    The length is never user-entered: it is the number of days until the
    next known cycle start.
    """
    model_config = ConfigDict(populate_by_name=True)

    start_date: str = Field(..., alias="startDate")
    length: int

    @property
    def start(self) -> Optional[date]:
        """Start date parsed from its storage key."""
        return parse_date(self.start_date)
