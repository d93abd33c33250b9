"""
Custom exception classes for the page asset engine.

Two kinds of failure matter to callers: usage errors, which the user can fix
(typically by rebuilding), and internal assertion failures, which point at a
bug in the build pipeline or in the engine itself.
"""

from __future__ import annotations

from typing import Any


class PageAssetsError(Exception):
    """Base exception for all engine errors."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
        user_message: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.user_message = user_message or self._get_default_user_message()

    def _get_default_user_message(self) -> str:
        """Provide a user-friendly version of the error message."""
        return "An unexpected error occurred. Please try again."

    def __str__(self) -> str:
        return f"{self.__class__.__name__}: {self.message}"


class UsageError(PageAssetsError):
    """Raised when the user has to act, e.g. rebuild the app."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message=message, details=details, user_message=message)


class InternalError(PageAssetsError, AssertionError):
    """
    Raised when an internal invariant is violated.

    Subclasses AssertionError so callers treating invariant violations as
    assertion failures keep working. ``details`` holds the failing value.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            details=details,
            user_message="An internal error occurred while resolving page assets.",
        )


class ManifestNotFoundError(UsageError):
    """Raised when a production manifest file is missing."""

    def __init__(self, manifest_path: str):
        self.manifest_path = manifest_path
        super().__init__(
            message=(
                f"Build manifest not found at {manifest_path}. "
                "You need to build your app before running it in production."
            ),
            details={"manifest_path": manifest_path},
        )


class ConfigurationError(PageAssetsError):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.config_key = config_key
        super().__init__(
            message=message,
            details=details or {"config_key": config_key},
            user_message="Configuration error. Please check your settings.",
        )


def assert_internal(condition: object, message: str, **details: Any) -> None:
    """
    Raise InternalError unless ``condition`` is truthy.

    Example:
        >>> assert_internal(entry is not None, "Manifest entry missing", id=entry_id)
    """
    if not condition:
        raise InternalError(message, details=details)


def assert_usage(condition: object, message: str, **details: Any) -> None:
    """Raise UsageError unless ``condition`` is truthy."""
    if not condition:
        raise UsageError(message, details=details)


def create_user_friendly_error_message(error: Exception) -> str:
    """
    Create a user-friendly error message from any exception.

    Only UsageError messages are meant to be shown verbatim.

    Example:
        >>> error = UsageError("You need to re-build your app.")
        >>> create_user_friendly_error_message(error)
        'You need to re-build your app.'
    """
    if isinstance(error, PageAssetsError):
        return error.user_message
    return "An unexpected error occurred. Please try again or contact support."


def log_error_details(error: Exception, context: dict[str, Any] | None = None) -> dict[str, Any]:
    """
    Create structured error details for logging.

    Args:
        error: The exception to log
        context: Additional context information

    Returns:
        Dictionary with structured error details
    """
    details = {
        "error_type": type(error).__name__,
        "error_message": str(error),
        "context": context or {},
    }

    if isinstance(error, PageAssetsError):
        details.update({"user_message": error.user_message, "error_details": error.details})

    return details
