"""Standardized exception hierarchy for the dispatch registry."""

from typing import Any


class RegistryError(Exception):
    """Base exception for all registry errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class TransientError(RegistryError):
    """Errors that may succeed on retry."""

    pass


class NoDriverAvailableError(TransientError):
    """No driver is eligible for a new assignment right now.

    An expected business condition, not a bug. Callers may retry later;
    the registry itself never retries.
    """

    pass


class PermanentError(RegistryError):
    """Errors that will not succeed on retry."""

    pass


class ValidationError(PermanentError):
    """Invalid input or data format."""

    pass


class InvalidIdError(ValidationError):
    """Identifier is not a positive integer."""

    pass


class RecordError(ValidationError):
    """A raw record failed boundary validation."""

    pass


class NotFoundError(PermanentError):
    """Requested entity does not exist."""

    pass


class StateError(PermanentError):
    """Invalid state transition."""

    pass


class ConfigurationError(PermanentError):
    """Missing or invalid configuration."""

    pass


class FatalError(RegistryError):
    """Critical errors requiring initialization to abort."""

    pass


class LinkIntegrityError(NotFoundError, FatalError):
    """A loaded trip references a passenger or driver that does not exist."""

    pass
