"""
Tests for cycle settings persistence.
"""
import json
import pytest
from datetime import date
from unittest.mock import Mock, patch

from lunarium.models.cycle import CycleConfig, CycleHistoryEntry
from lunarium.services.exceptions import (
    HistoryCapacityError,
    InvalidCycleLengthError,
    InvalidHistoryError,
    SettingsStoreError,
)
from lunarium.services.settings import CycleSettingsStore, validate_cycle_length

TODAY = date(2025, 4, 10)

@pytest.fixture
def store():
    """Create CycleSettingsStore instance with mocked DynamoDB."""
    with patch('lunarium.services.settings.get_dynamo') as mock_get_dynamo:
        mock_dynamo = Mock()
        mock_get_dynamo.return_value = mock_dynamo
        yield CycleSettingsStore(), mock_dynamo

def config_item(data):
    return {"PK": "USER#42", "SK": "SETTINGS#cycleConfig", "data": json.dumps(data)}

def history_item(data):
    return {"PK": "USER#42", "SK": "SETTINGS#cycleHistory", "data": json.dumps(data)}

def test_validate_cycle_length():
    """Only integers within 21-35 are accepted."""
    assert validate_cycle_length(21) == 21
    assert validate_cycle_length(35) == 35
    for value in (20, 36, "28", 28.0, None, True):
        with pytest.raises(InvalidCycleLengthError):
            validate_cycle_length(value)

def test_load_defaults_when_nothing_stored(store):
    """A new user gets a 28 day cycle starting today and no history."""
    store_service, mock_dynamo = store
    mock_dynamo.query_items.return_value = []

    config, history = store_service.load("42", TODAY)

    assert config == CycleConfig(cycle_start_date=TODAY, cycle_length=28)
    assert history == []
    mock_dynamo.query_items.assert_called_once_with("PK", "USER#42", "SETTINGS#")

def test_load_stored_settings(store):
    """Both documents are parsed from their JSON payloads."""
    store_service, mock_dynamo = store
    mock_dynamo.query_items.return_value = [
        config_item({"cycleLength": 30, "cycleStartDate": "2025-04-01T04:00:00.000Z"}),
        history_item([{"startDate": "2025-03-01", "length": 31}]),
    ]

    config, history = store_service.load("42", TODAY)

    assert config.cycle_start_date == date(2025, 4, 1)
    assert config.cycle_length == 30
    assert history == [CycleHistoryEntry(start_date="2025-03-01", length=31)]

def test_load_corrupt_config_falls_back(store):
    """Unreadable payloads never break loading."""
    store_service, mock_dynamo = store
    mock_dynamo.query_items.return_value = [
        {"PK": "USER#42", "SK": "SETTINGS#cycleConfig", "data": "{not json"},
        {"PK": "USER#42", "SK": "SETTINGS#cycleHistory", "data": "[{\"startDate\": 3}]"},
    ]

    config, history = store_service.load("42", TODAY)

    assert config == CycleConfig(cycle_start_date=TODAY, cycle_length=28)
    assert history == []

def test_load_config_with_bad_length_keeps_start_date(store):
    """A non-numeric length falls back to 28 without losing the start date."""
    store_service, mock_dynamo = store
    mock_dynamo.get_item.return_value = config_item(
        {"cycleLength": "abc", "cycleStartDate": "2025-04-01"}
    )

    config = store_service.load_config("42", TODAY)

    assert config == CycleConfig(cycle_start_date=date(2025, 4, 1), cycle_length=28)
    mock_dynamo.get_item.assert_called_once_with({"PK": "USER#42", "SK": "SETTINGS#cycleConfig"})

def test_load_config_without_start_date_uses_today(store):
    """A missing start date becomes today."""
    store_service, mock_dynamo = store
    mock_dynamo.get_item.return_value = config_item({"cycleLength": 30})

    config = store_service.load_config("42", TODAY)

    assert config.cycle_start_date == TODAY
    assert config.cycle_length == 30

def test_load_history_absent(store):
    """Missing history is empty."""
    store_service, mock_dynamo = store
    mock_dynamo.get_item.return_value = None

    assert store_service.load_history("42") == []

def test_load_error_is_wrapped(store):
    """DynamoDB failures surface as SettingsStoreError."""
    store_service, mock_dynamo = store
    mock_dynamo.query_items.side_effect = RuntimeError("throttled")

    with pytest.raises(SettingsStoreError):
        store_service.load("42", TODAY)

def test_save_derives_and_writes_both_documents(store):
    """Saving derives lengths and writes config and history in one transaction."""
    store_service, mock_dynamo = store
    config = CycleConfig(cycle_start_date=date(2025, 4, 1), cycle_length=29)
    raw = [{"startDate": "2025-03-01"}, {"startDate": ""}, {"startDate": "2025-02-01"}]

    saved_config, history = store_service.save("42", config, raw)

    assert saved_config == config
    assert [(h.start_date, h.length) for h in history] == [("2025-02-01", 28), ("2025-03-01", 31)]

    mock_dynamo.put_items_atomically.assert_called_once()
    written = mock_dynamo.put_items_atomically.call_args.args[0]
    assert [item["SK"] for item in written] == ["SETTINGS#cycleConfig", "SETTINGS#cycleHistory"]
    assert all(item["PK"] == "USER#42" for item in written)
    assert json.loads(written[0]["data"]) == {"cycleStartDate": "2025-04-01", "cycleLength": 29}
    assert json.loads(written[1]["data"]) == [
        {"startDate": "2025-02-01", "length": 28},
        {"startDate": "2025-03-01", "length": 31},
    ]

def test_save_rejects_out_of_range_length(store):
    """The configuration boundary enforces 21-35 days."""
    store_service, mock_dynamo = store
    config = CycleConfig(cycle_start_date=date(2025, 4, 1), cycle_length=40)

    with pytest.raises(InvalidCycleLengthError):
        store_service.save("42", config, [])
    mock_dynamo.put_items_atomically.assert_not_called()

def test_save_rejects_history_after_current_start(store):
    """A past cycle cannot start on or after the current one."""
    store_service, mock_dynamo = store
    config = CycleConfig(cycle_start_date=date(2025, 4, 1), cycle_length=28)

    with pytest.raises(InvalidHistoryError):
        store_service.save("42", config, [{"startDate": "2025-04-05"}])
    mock_dynamo.put_items_atomically.assert_not_called()

def test_save_rejects_too_many_entries(store):
    """No more than 12 past cycles are stored."""
    store_service, _ = store
    config = CycleConfig(cycle_start_date=date(2025, 4, 1), cycle_length=28)
    raw = [{"startDate": f"2024-{month:02d}-01"} for month in range(1, 13)]
    raw.append({"startDate": "2025-01-01"})

    with pytest.raises(HistoryCapacityError):
        store_service.save("42", config, raw)

def test_failed_save_leaves_no_partial_write(store):
    """A rejected transaction surfaces as SettingsStoreError with nothing else written."""
    store_service, mock_dynamo = store
    mock_dynamo.put_items_atomically.side_effect = RuntimeError("throttled")
    config = CycleConfig(cycle_start_date=date(2025, 4, 1), cycle_length=28)

    with pytest.raises(SettingsStoreError):
        store_service.save("42", config, [{"startDate": "2025-03-01"}])

    mock_dynamo.put_items_atomically.assert_called_once()
    assert not mock_dynamo.put_item.called

def test_clear_deletes_both_documents(store):
    """Clearing removes config and history."""
    store_service, mock_dynamo = store

    store_service.clear("42")

    keys = [call.args[0]["SK"] for call in mock_dynamo.delete_item.call_args_list]
    assert keys == ["SETTINGS#cycleConfig", "SETTINGS#cycleHistory"]
