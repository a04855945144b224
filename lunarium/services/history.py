"""
Service module for cycle history derivation.

Users only enter the start date (day 1) of past cycles. The length of each
past cycle is derived from the next known start date, which is why entries
are always sorted chronologically before lengths are computed.

Typical usage:
    draft = HistoryDraft(stored_entries)
    draft.add_entry("2025-01-01")
    history = draft.derived(config.cycle_start_date)
"""
from datetime import date, datetime
from typing import Any, Iterable, List, Optional, Union

from aws_lambda_powertools import Logger

from lunarium.models.cycle import CycleHistoryEntry, RawHistoryEntry
from lunarium.services.constants import MAX_HISTORY_ENTRIES
from lunarium.services.cycle import round_half_up
from lunarium.services.exceptions import HistoryCapacityError
from lunarium.utils.dates import parse_date

logger = Logger()


def _start_date_of(entry: Any) -> Optional[str]:
    if isinstance(entry, (RawHistoryEntry, CycleHistoryEntry)):
        return entry.start_date
    if isinstance(entry, dict):
        return entry.get("startDate", entry.get("start_date"))
    return None


def derive_lengths(
    raw_entries: Iterable[Any],
    current_cycle_start: Union[date, datetime, str]
) -> List[CycleHistoryEntry]:
    """
    Derive the length of each past cycle from its successor's start date.

    Args:
        raw_entries: Past cycle start dates, in any order. Accepts
            RawHistoryEntry, CycleHistoryEntry or dicts with ``startDate``
        current_cycle_start: Start date of the active cycle, which ends the
            most recent past cycle

    Returns:
        Entries sorted oldest first, each with the day count until the next
        known start date

    Example:
        >>> history = derive_lengths(
        ...     [{"startDate": "2025-02-01"}, {"startDate": "2025-01-01"}],
        ...     date(2025, 3, 1)
        ... )
        >>> [(h.start_date, h.length) for h in history]
        [('2025-01-01', 31), ('2025-02-01', 28)]
    """
    dated = []
    for entry in raw_entries:
        start_date = _start_date_of(entry)
        if not start_date:
            continue
        parsed = parse_date(start_date)
        if parsed is None:
            logger.warning("Skipping unparseable history entry", extra={
                "start_date": str(start_date)
            })
            continue
        dated.append((parsed, start_date))

    dated.sort(key=lambda item: item[0])
    current_start = parse_date(current_cycle_start)

    result = []
    for i, (start, start_date) in enumerate(dated):
        if i < len(dated) - 1:
            next_start = dated[i + 1][0]
        else:
            next_start = current_start
        if next_start is None:
            continue
        result.append(CycleHistoryEntry(
            start_date=start_date,
            length=(next_start - start).days
        ))

    return result


class HistoryDraft:
    """
    Editable list of past cycle start dates.

    Holds the raw entries in insertion order while the user edits them.
    Lengths are derived on demand and only persisted on save.
    """

    def __init__(self, entries: Optional[Iterable[Any]] = None):
        self.entries: List[RawHistoryEntry] = [
            RawHistoryEntry(start_date=_start_date_of(entry) or "")
            for entry in (entries or [])
        ]
        if len(self.entries) > MAX_HISTORY_ENTRIES:
            raise HistoryCapacityError(
                f"Cycle history holds at most {MAX_HISTORY_ENTRIES} entries"
            )

    @property
    def is_full(self) -> bool:
        return len(self.entries) >= MAX_HISTORY_ENTRIES

    def add_entry(self, start_date: str = "") -> RawHistoryEntry:
        """
        Append a past cycle start date.

        Raises:
            HistoryCapacityError: If the history is already full
        """
        if self.is_full:
            raise HistoryCapacityError(
                f"Cycle history holds at most {MAX_HISTORY_ENTRIES} entries"
            )
        entry = RawHistoryEntry(start_date=start_date)
        self.entries.append(entry)
        return entry

    def update_entry(self, index: int, start_date: str) -> None:
        """Replace the start date of an entry. Raises IndexError on a bad index."""
        self.entries[index] = RawHistoryEntry(start_date=start_date)

    def remove_entry(self, index: int) -> None:
        """Remove an entry. Raises IndexError on a bad index."""
        del self.entries[index]

    def derived(self, current_cycle_start: Union[date, datetime, str]) -> List[CycleHistoryEntry]:
        """Derive lengths for the current draft."""
        return derive_lengths(self.entries, current_cycle_start)

    def average_with_current(
        self,
        current_cycle_start: Union[date, datetime, str],
        cycle_length: int
    ) -> Optional[int]:
        """
        Average of the derived past lengths and the current cycle length.

        Returns:
            Rounded average, or None while no past cycle has a start date
        """
        derived = self.derived(current_cycle_start)
        if not derived:
            return None
        total = sum(entry.length for entry in derived) + cycle_length
        return round_half_up(total / (len(derived) + 1))
