"""Value wrapper that tracks validity and per-cycle change flags.

A host observing a field polls ``value_changed`` and ``validity_changed`` to
decide what to redraw. The owner resets both flags at the start of every update
cycle, so after the cycle they describe only that cycle's mutations.
"""

from __future__ import annotations

from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class IconRef(Enum):
    """Status icon shown next to a field."""

    CHECKMARK = "checkmark"
    WARNING = "warning"


class ValidatedField(Generic[T]):
    """A value of type T plus a validity flag and two change bits."""

    def __init__(self, value: T, is_valid: bool) -> None:
        self._value = value
        self._is_valid = is_valid
        # First render always reflects the initial state
        self.value_changed = True
        self.validity_changed = True

    @classmethod
    def valid(cls, value: T) -> ValidatedField[T]:
        """Create a field whose value passed validation."""
        return cls(value, True)

    @classmethod
    def invalid(cls, value: T) -> ValidatedField[T]:
        """Create a field whose value failed validation."""
        return cls(value, False)

    @property
    def value(self) -> T:
        return self._value

    @property
    def is_valid(self) -> bool:
        return self._is_valid

    def set_validity(self, is_valid: bool) -> None:
        """Record a validation result.

        The validity flag is marked changed on every call, even when the result
        equals the previous one.
        """
        self._is_valid = is_valid
        self.validity_changed = True

    def replace_value(self, value: T) -> None:
        """Replace the value and mark it changed, equal or not."""
        self._value = value
        self.value_changed = True

    def reset_change_flags(self) -> None:
        """Clear both change bits before a new update cycle."""
        self.value_changed = False
        self.validity_changed = False

    def status_icon(self) -> IconRef:
        """Icon matching the current validity."""
        return IconRef.CHECKMARK if self._is_valid else IconRef.WARNING

    def __repr__(self) -> str:
        return (
            f"ValidatedField(value={self._value!r}, is_valid={self._is_valid}, "
            f"value_changed={self.value_changed}, validity_changed={self.validity_changed})"
        )
