"""
Service-level exceptions.

This module contains exceptions that can be raised by various services
in the application.
"""

class CycleError(Exception):
    """Base exception for cycle configuration errors."""
    pass

class InvalidCycleLengthError(CycleError):
    """Raised when a configured cycle length is outside the supported range."""
    pass

class HistoryError(CycleError):
    """Base exception for cycle history errors."""
    pass

class HistoryCapacityError(HistoryError):
    """Raised when adding a cycle to an already full history."""
    pass

class InvalidHistoryError(HistoryError):
    """Raised when a past cycle does not start before the next one."""
    pass

class SettingsStoreError(Exception):
    """Raised when cycle settings cannot be read or written."""
    pass
