"""Custom exceptions for farm configuration.

This module defines a hierarchy of exceptions for the few failures this layer
reports. Probe and parse failures are never raised; they become invalid fields.
"""


class FarmConfigError(Exception):
    """Base exception for all farm configuration errors."""


class ConfigError(FarmConfigError):
    """Raised when the farms file is invalid or cannot be loaded."""


class SenderClosedError(FarmConfigError):
    """Raised when an entry emits an event after its collection was torn down."""


class UnknownEntryError(FarmConfigError):
    """Raised when a collection operation names an identity it does not own."""
