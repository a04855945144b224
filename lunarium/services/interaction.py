"""
Day selection state for the cycle wheel.

Clicking a wedge selects its cycle day for the detail panel. Without a
selection the panel shows today. Any change to the cycle configuration
invalidates the day numbering and clears the selection.
"""
from datetime import date, datetime
from typing import Optional, Union

from aws_lambda_powertools import Logger

from lunarium.models.cycle import CycleConfig
from lunarium.models.phase import PhaseInfo
from lunarium.services.cycle import coerce_cycle_length, cycle_day_for_date, date_for_cycle_day
from lunarium.services.phase import phase_info
from lunarium.utils.dates import to_date

logger = Logger()


class WheelInteraction:
    """Tracks which cycle day is displayed in detail."""

    def __init__(
        self,
        config: CycleConfig,
        today: Union[date, datetime],
        cycle_length: Optional[int] = None
    ):
        """
        Args:
            config: Cycle configuration snapshot
            today: Reference date anchoring the wheel
            cycle_length: Length to use instead of the configured one,
                e.g. the history average
        """
        self.today = to_date(today)
        self.config = config
        self.cycle_length = coerce_cycle_length(cycle_length or config.cycle_length)
        self.selected_day: Optional[int] = None
        self.selected_date: Optional[date] = None

    @property
    def current_day(self) -> int:
        return cycle_day_for_date(self.today, self.config.cycle_start_date, self.cycle_length)

    @property
    def display_day(self) -> int:
        return self.selected_day if self.selected_day is not None else self.current_day

    @property
    def display_date(self) -> date:
        return self.selected_date if self.selected_date is not None else self.today

    def select(self, day: int) -> date:
        """
        Select a wedge.

        Args:
            day: Cycle day of the clicked wedge

        Returns:
            Calendar date of the selected day in the current cycle

        Raises:
            ValueError: If the day is not on the wheel
        """
        if not 1 <= day <= self.cycle_length:
            raise ValueError(f"Cycle day {day} is outside 1-{self.cycle_length}")

        self.selected_day = day
        self.selected_date = date_for_cycle_day(day, self.current_day, self.today)
        return self.selected_date

    def clear(self) -> None:
        """Go back to showing today."""
        self.selected_day = None
        self.selected_date = None

    def update_config(self, config: CycleConfig, cycle_length: Optional[int] = None) -> None:
        """Replace the configuration snapshot, clearing the selection if it changed."""
        new_length = coerce_cycle_length(cycle_length or config.cycle_length)
        changed = (
            config.cycle_start_date != self.config.cycle_start_date
            or new_length != self.cycle_length
        )
        self.config = config
        self.cycle_length = new_length
        if changed:
            logger.debug("Cycle configuration changed, clearing selection", extra={
                "cycle_start_date": config.cycle_start_date.isoformat(),
                "cycle_length": new_length
            })
            self.clear()

    def display_phase(self) -> PhaseInfo:
        """Phase of the displayed day."""
        return phase_info(self.display_day, self.cycle_length)
