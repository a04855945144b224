"""
Pytest configuration and shared fixtures.
"""
import pytest
from datetime import date, timedelta
from typing import List

from lunarium.models.cycle import CycleConfig, CycleHistoryEntry, RawHistoryEntry

@pytest.fixture
def sample_config() -> CycleConfig:
    """Create a 28 day cycle that started on 2025-01-01."""
    return CycleConfig(cycle_start_date=date(2025, 1, 1), cycle_length=28)

@pytest.fixture
def regular_history() -> List[CycleHistoryEntry]:
    """Create four past cycles of exactly 28 days."""
    start = date(2025, 1, 1) - timedelta(days=4 * 28)
    return [
        CycleHistoryEntry(
            start_date=(start + timedelta(days=i * 28)).isoformat(),
            length=28
        )
        for i in range(4)
    ]

@pytest.fixture
def irregular_raw_history() -> List[RawHistoryEntry]:
    """Create irregular past cycle starts, in entry order."""
    return [
        RawHistoryEntry(start_date="2024-10-06"),  # 24 days
        RawHistoryEntry(start_date="2024-09-12"),  # 24 days
        RawHistoryEntry(start_date="2024-10-30"),  # 31 days
        RawHistoryEntry(start_date="2024-11-30"),  # 32 days
    ]
