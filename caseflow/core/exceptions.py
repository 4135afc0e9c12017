"""
Core Exceptions
================

Custom exceptions for the application following clean architecture principles.

Every validation failure is scoped to a single entity. Callers catch these
at the batch boundary and decide whether to reject the edit or prompt for
correction; nothing here is retried or repaired.
"""

from typing import Optional, Any


class ApplicationException(Exception):
    """Base exception for all application errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ValidationException(ApplicationException):
    """Exception for validation errors."""


class ConfigurationException(ApplicationException):
    """Exception for configuration errors."""


class MissingRequiredDateException(ValidationException):
    """A mandatory date field is absent."""

    def __init__(
        self,
        entity_id: Optional[str],
        field: str,
        details: Optional[dict] = None
    ):
        self.entity_id = entity_id
        self.field = field
        super().__init__(
            f"{field} is required for {entity_id or 'unidentified entity'}",
            details or {"entity_id": entity_id, "field": field}
        )


class InvalidDateOrderException(ValidationException):
    """A response or completion date precedes the date it answers."""

    def __init__(
        self,
        entity_id: Optional[str],
        earlier_field: str,
        later_field: str,
        earlier: Any = None,
        later: Any = None,
        details: Optional[dict] = None
    ):
        self.entity_id = entity_id
        self.earlier_field = earlier_field
        self.later_field = later_field
        super().__init__(
            f"{later_field} ({later}) precedes {earlier_field} ({earlier}) "
            f"for {entity_id or 'unidentified entity'}",
            details or {
                "entity_id": entity_id,
                "earlier_field": earlier_field,
                "later_field": later_field,
            }
        )


class UnknownEnumValueException(ValidationException):
    """A priority/status value outside the fixed vocabulary."""

    def __init__(
        self,
        vocabulary: str,
        value: Any,
        details: Optional[dict] = None
    ):
        self.vocabulary = vocabulary
        self.value = value
        super().__init__(
            f"Unknown {vocabulary} value: {value!r}",
            details or {"vocabulary": vocabulary, "value": value}
        )
