"""
Cycle settings persistence service.

Settings live in two documents per user, always written together in one
transaction:
    - ``cycleConfig``: ``{cycleLength, cycleStartDate}`` with an ISO-8601 date
    - ``cycleHistory``: the derived history array serialised as JSON

Typical usage:
    store = CycleSettingsStore()
    config, history = store.load(user_id, today)
    config, history = store.save(user_id, new_config, raw_history)
"""
import json
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Tuple

from aws_lambda_powertools import Logger
from pydantic import ValidationError

from lunarium.models.cycle import CycleConfig, CycleHistoryEntry
from lunarium.services.constants import (
    DEFAULT_CYCLE_LENGTH,
    MAX_CYCLE_LENGTH,
    MIN_CYCLE_LENGTH,
)
from lunarium.services.exceptions import (
    InvalidCycleLengthError,
    InvalidHistoryError,
    SettingsStoreError,
)
from lunarium.services.cycle import coerce_cycle_length
from lunarium.services.history import HistoryDraft
from lunarium.utils.dates import parse_date
from lunarium.utils.dynamo import create_pk, create_settings_sk, get_dynamo

logger = Logger()

CONFIG_KEY = "cycleConfig"
HISTORY_KEY = "cycleHistory"


def default_config(today: date) -> CycleConfig:
    """Configuration used when nothing valid is stored."""
    return CycleConfig(cycle_start_date=today, cycle_length=DEFAULT_CYCLE_LENGTH)


def validate_cycle_length(cycle_length: Any) -> int:
    """
    Check a user-entered cycle length.

    Raises:
        InvalidCycleLengthError: If not an integer within [21, 35]
    """
    if isinstance(cycle_length, bool) or not isinstance(cycle_length, int):
        raise InvalidCycleLengthError(f"Cycle length must be an integer, got {cycle_length!r}")
    if not MIN_CYCLE_LENGTH <= cycle_length <= MAX_CYCLE_LENGTH:
        raise InvalidCycleLengthError(
            f"Cycle length of {cycle_length} days is outside the supported range "
            f"({MIN_CYCLE_LENGTH}-{MAX_CYCLE_LENGTH} days)"
        )
    return cycle_length


class CycleSettingsStore:
    """Service for loading and saving cycle settings."""

    def __init__(self):
        """Initialize settings store."""
        self.dynamo = get_dynamo()

    def _key(self, user_id: str, name: str) -> Dict[str, str]:
        return {"PK": create_pk(user_id), "SK": create_settings_sk(name)}

    def _parse_config(self, item: Optional[Dict[str, Any]], today: date) -> CycleConfig:
        if not item:
            return default_config(today)
        try:
            data = json.loads(item["data"])
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Stored cycle config is unreadable, using defaults", extra={
                "error": str(e),
                "error_type": e.__class__.__name__
            })
            return default_config(today)
        if not isinstance(data, dict):
            return default_config(today)

        start_date = parse_date(data.get("cycleStartDate"))
        if start_date is None:
            logger.warning("Stored cycle config has no start date, using today", extra={
                "cycle_start_date": str(data.get("cycleStartDate"))
            })
            start_date = today
        return CycleConfig(
            cycle_start_date=start_date,
            cycle_length=coerce_cycle_length(data.get("cycleLength"))
        )

    def _parse_history(self, item: Optional[Dict[str, Any]]) -> List[CycleHistoryEntry]:
        if not item:
            return []
        try:
            return [CycleHistoryEntry.model_validate(entry) for entry in json.loads(item["data"])]
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            logger.warning("Stored cycle history is unreadable, ignoring it", extra={
                "error": str(e),
                "error_type": e.__class__.__name__
            })
            return []

    def load(self, user_id: str, today: date) -> Tuple[CycleConfig, List[CycleHistoryEntry]]:
        """
        Load configuration and history in a single query.

        Args:
            user_id: User identifier
            today: Start date for the default configuration

        Returns:
            Tuple of (config, history), defaults when nothing is stored

        Raises:
            SettingsStoreError: If DynamoDB cannot be read
        """
        try:
            items = self.dynamo.query_items("PK", create_pk(user_id), create_settings_sk(""))
        except Exception as e:
            logger.error("Error loading cycle settings", extra={
                "user_id": user_id,
                "error": str(e),
                "error_type": e.__class__.__name__
            })
            raise SettingsStoreError(f"Failed to load cycle settings: {str(e)}") from e

        by_key = {item.get("SK"): item for item in items}
        config = self._parse_config(by_key.get(create_settings_sk(CONFIG_KEY)), today)
        history = self._parse_history(by_key.get(create_settings_sk(HISTORY_KEY)))

        logger.info("Loaded cycle settings", extra={
            "user_id": user_id,
            "has_config": create_settings_sk(CONFIG_KEY) in by_key,
            "history_size": len(history)
        })
        return config, history

    def load_config(self, user_id: str, today: date) -> CycleConfig:
        """Load the active cycle configuration, defaulting to a cycle starting today."""
        try:
            item = self.dynamo.get_item(self._key(user_id, CONFIG_KEY))
        except Exception as e:
            logger.error("Error loading cycle config", extra={
                "user_id": user_id,
                "error": str(e),
                "error_type": e.__class__.__name__
            })
            raise SettingsStoreError(f"Failed to load cycle config: {str(e)}") from e
        return self._parse_config(item, today)

    def load_history(self, user_id: str) -> List[CycleHistoryEntry]:
        """Load the derived cycle history, empty when absent."""
        try:
            item = self.dynamo.get_item(self._key(user_id, HISTORY_KEY))
        except Exception as e:
            logger.error("Error loading cycle history", extra={
                "user_id": user_id,
                "error": str(e),
                "error_type": e.__class__.__name__
            })
            raise SettingsStoreError(f"Failed to load cycle history: {str(e)}") from e
        return self._parse_history(item)

    def save(
        self,
        user_id: str,
        config: CycleConfig,
        raw_history: Iterable[Any]
    ) -> Tuple[CycleConfig, List[CycleHistoryEntry]]:
        """
        Validate, derive and persist cycle settings.

        Args:
            user_id: User identifier
            config: New active cycle configuration
            raw_history: Past cycle start dates in any order

        Returns:
            Tuple of (config, derived history) as stored

        Raises:
            InvalidCycleLengthError: If the cycle length is out of range
            HistoryCapacityError: If more than 12 past cycles are given
            InvalidHistoryError: If a past cycle does not start before the next one
            SettingsStoreError: If DynamoDB cannot be written
        """
        validate_cycle_length(config.cycle_length)

        history = HistoryDraft(raw_history).derived(config.cycle_start_date)
        invalid = [entry.start_date for entry in history if entry.length < 1]
        if invalid:
            raise InvalidHistoryError(
                f"Past cycles must start before the next cycle: {', '.join(invalid)}"
            )

        config_data = json.dumps(config.model_dump(mode="json", by_alias=True))
        history_data = json.dumps([entry.model_dump(mode="json", by_alias=True) for entry in history])

        try:
            self.dynamo.put_items_atomically([
                {**self._key(user_id, CONFIG_KEY), "data": config_data},
                {**self._key(user_id, HISTORY_KEY), "data": history_data},
            ])
        except Exception as e:
            logger.error("Error saving cycle settings", extra={
                "user_id": user_id,
                "error": str(e),
                "error_type": e.__class__.__name__
            })
            raise SettingsStoreError(f"Failed to save cycle settings: {str(e)}") from e

        logger.info("Saved cycle settings", extra={
            "user_id": user_id,
            "cycle_start_date": config.cycle_start_date.isoformat(),
            "cycle_length": config.cycle_length,
            "history_size": len(history)
        })
        return config, history

    def clear(self, user_id: str) -> None:
        """Delete both settings documents."""
        try:
            self.dynamo.delete_item(self._key(user_id, CONFIG_KEY))
            self.dynamo.delete_item(self._key(user_id, HISTORY_KEY))
        except Exception as e:
            logger.error("Error clearing cycle settings", extra={
                "user_id": user_id,
                "error": str(e),
                "error_type": e.__class__.__name__
            })
            raise SettingsStoreError(f"Failed to clear cycle settings: {str(e)}") from e
