"""Custom exceptions for querycodec library.

This module defines all custom exceptions used throughout the library for
consistent error handling and clear error messaging. The codec's happy path
raises none of them; they surface only from opt-in features (callable hooks,
depth limits, filter compilation, request preparation, configuration).
"""

from typing import Any, Dict


# Base exception
class QueryCodecError(Exception):
    """Base exception for all querycodec errors.

    Attributes:
        message: Error message
        details: Additional error context as key-value pairs
    """

    def __init__(self, message: str = "", **kwargs: Any) -> None:
        """Initialize exception with message and additional details.

        Args:
            message: Human-readable error message
            **kwargs: Additional context (e.g., tag, text, field)
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


# Codec exceptions
class EncodeError(QueryCodecError):
    """Raised when a value cannot be encoded.

    Example:
        >>> raise EncodeError("Cannot encode value", value_type="bytes")
    """


class DecodeError(QueryCodecError):
    """Raised when a query string cannot be decoded.

    Example:
        >>> raise DecodeError("Cannot decode segment", segment="x=")
    """


class CallableDecodeError(DecodeError):
    """Raised when `f`-tagged text cannot be turned into a callable.

    Example:
        >>> raise CallableDecodeError("No callable hook configured", text="mymodule.handler")
    """


class DepthLimitError(EncodeError):
    """Raised when a value nests deeper than the configured limit.

    Raised by both directions; it derives from EncodeError because the limit
    guards the recursion, not the wire format.

    Example:
        >>> raise DepthLimitError("Nesting too deep", max_depth=32)
    """


# Validation exceptions
class ValidationError(QueryCodecError):
    """Raised when caller input is invalid.

    Example:
        >>> raise ValidationError("Invalid input", field="method", expected="create|read|update|patch|delete")
    """


class InvalidFieldError(ValidationError):
    """Raised when a field has an invalid value or an unsupported lookup.

    Example:
        >>> raise InvalidFieldError("Unsupported lookup", field="age", lookup="between")
    """


# Configuration exceptions
class ConfigurationError(QueryCodecError):
    """Raised when configuration is invalid or missing.

    Example:
        >>> raise ConfigurationError("Invalid configuration", setting="QUERY_MAX_DEPTH", value=-1)
    """


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid.

    Example:
        >>> raise InvalidConfigError("Cannot load callable hook", config_key="QUERY_CALLABLE_HOOK", value="nope")
    """
