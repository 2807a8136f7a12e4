"""Custom exceptions for CrossQuery library.

This module defines all custom exceptions raised while translating search
payloads into backend queries. Failures raised by a backend handle are not
wrapped: they reach the caller unchanged.
"""

from typing import Any, Dict


# Base exception
class CrossQueryError(Exception):
    """Base exception for all CrossQuery errors.

    Attributes:
        message: Error message
        details: Additional error context as key-value pairs
    """

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        """Initialize exception with message and additional details.

        Args:
            message: Human-readable error message
            **kwargs: Additional context (e.g., field, operator, relationship)
        """
        self.message = message
        self.details: Dict[str, Any] = kwargs
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the complete error message with details."""
        if not self.details:
            return self.message

        details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
        if self.message:
            return f"{self.message} ({details_str})"
        return details_str

    def __repr__(self) -> str:
        """Return detailed representation of the exception."""
        return f"{self.__class__.__name__}(message={self.message!r}, details={self.details!r})"


# Configuration exceptions
class ConfigurationError(CrossQueryError):
    """Raised when the search configuration handed to a builder is inconsistent.

    Example:
        >>> raise ConfigurationError("Invalid configuration", setting="related_entities")
    """


class UnknownRelationshipError(ConfigurationError):
    """Raised when a criterion or projection path names a relationship that is not mapped.

    Example:
        >>> raise UnknownRelationshipError("Relationship not found in related entities", relationship="profile")
    """


# Validation exceptions
class ValidationError(CrossQueryError):
    """Raised when a search payload is malformed.

    Example:
        >>> raise ValidationError("Invalid payload", field="pagination")
    """


class InvalidCriterionError(ValidationError):
    """Raised when a criterion carries values its operator cannot use.

    Example:
        >>> raise InvalidCriterionError("BETWEEN needs two values", field="age", operator="BETWEEN", values=["1"])
    """


class InvalidStageError(ValidationError):
    """Raised when a lookup sub-pipeline contains a stage outside the allowed set.

    Example:
        >>> raise InvalidStageError("Stage not allowed in lookup pipeline", stage="$group", lookup="comments")
    """
