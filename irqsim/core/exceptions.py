"""Custom exceptions used throughout the interrupt simulator package."""

from typing import Any, Iterable, Optional


class SimulatorError(Exception):
    """Base exception for all simulator errors.

    All simulator-specific exceptions should inherit from this class.
    This allows catching all simulator errors with a single except clause.
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        """Initialize the exception.

        Args:
            message: Human-readable error message
            details: Additional context about the error
        """

        super().__init__(message)
        self.details = details or {}


class ConfigurationError(SimulatorError):
    """Raised when there's an error in configuration.

    This includes:
    - Invalid configuration value
    - Missing required configuration
    - Duplicate interrupt ids in a catalog
    """

    def __init__(
        self,
        config_key: Optional[str] = None,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        """Initialize configuration error.

        Args:
            config_key: The configuration key that caused the error
            message: Description of what's wrong. If omitted, config_key is
                treated as the message and the key defaults to "configuration".
            details: Additional context
        """
        if message is None:
            message = config_key or "Invalid configuration"
            config_key = "configuration"
        if config_key is None:
            config_key = "configuration"

        full_message = f"Configuration error for '{config_key}': {message}"
        super().__init__(message=full_message, details=details)
        self.config_key = config_key


class UnknownInterruptKind(SimulatorError):
    """Raised when an interrupt id is not registered in the catalog.

    Recoverable: the engine rejects the request before mutating any state.
    """

    def __init__(
        self,
        kind_id: str,
        available: Optional[Iterable[str]] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        available_ids = list(available) if available is not None else []
        message = f"Unknown interrupt kind '{kind_id}'"
        if available_ids:
            message += f". Available: {available_ids}"
        details = details or {}
        details["kind_id"] = kind_id
        super().__init__(message=message, details=details)
        self.kind_id = kind_id
        self.available = available_ids


class ContextStateError(SimulatorError):
    """Base exception for saved-context invariant violations.

    These indicate a scheduler bug; the dispatch state machine never lets
    their preconditions arise during normal operation.
    """


class DoubleSaveError(ContextStateError):
    """Raised when saving a context while the saved-context slot is occupied."""

    def __init__(self, details: Optional[dict[str, Any]] = None):
        super().__init__(
            message="Saved-context slot is already occupied; nested dispatch is not supported",
            details=details,
        )


class NoSavedContextError(ContextStateError):
    """Raised when restoring a context while the saved-context slot is empty."""

    def __init__(self, details: Optional[dict[str, Any]] = None):
        super().__init__(
            message="No saved context to restore",
            details=details,
        )
