"""Farm configuration: validated farm entries and their owning collection.

This package tracks each farm's directory and size together with their
validity and change flags, validates them (the directory asynchronously) and
reports validity flips to the owning collection.
"""

from __future__ import annotations

from .exceptions import ConfigError, FarmConfigError, SenderClosedError, UnknownEntryError
from .farm_entry import FarmEntry
from .farm_list import FarmList
from .models import (
    Delete,
    Farm,
    FarmEntryInit,
    FarmEntryOutput,
    OpenDirectory,
    StableId,
    ValidityUpdate,
)
from .sender import OutputSender
from .validated_field import IconRef, ValidatedField
from .validation import MIN_FARM_SIZE, is_directory_writable, is_size_valid, parse_byte_size

__all__ = [
    "ConfigError",
    "Delete",
    "Farm",
    "FarmConfigError",
    "FarmEntry",
    "FarmEntryInit",
    "FarmEntryOutput",
    "FarmList",
    "IconRef",
    "MIN_FARM_SIZE",
    "OpenDirectory",
    "OutputSender",
    "SenderClosedError",
    "StableId",
    "UnknownEntryError",
    "ValidatedField",
    "ValidityUpdate",
    "is_directory_writable",
    "is_size_valid",
    "parse_byte_size",
]
