"""Error types raised by the HabitFlow data layer."""

from __future__ import annotations


class HabitFlowError(Exception):
    """Base class for every HabitFlow error."""


class StorageError(HabitFlowError):
    """Reading from or writing to the underlying store failed."""


class NotFoundError(HabitFlowError):
    """A referenced habit or category does not exist."""


class ValidationError(HabitFlowError, ValueError):
    """Input rejected before it reached the store."""
