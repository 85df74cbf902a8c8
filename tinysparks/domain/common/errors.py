"""Domain error types."""
from typing import Optional


class DomainError(Exception):
    """Base domain error."""
    pass


class ValidationError(DomainError):
    """Validation error."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConflictError(DomainError):
    """Resource conflict error."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ConfigurationError(DomainError):
    """A required setting (e.g. the LLM API key) is missing."""
    def __init__(self, message: str = "API Key is missing. Please check your configuration."):
        self.message = message
        super().__init__(message)


class GenerationError(DomainError):
    """The completion service failed or returned unusable output.

    ``message`` is safe to show to the user; ``reason`` is the internal cause and is only logged.
    """
    def __init__(
        self,
        reason: Optional[str] = None,
        message: str = "Failed to generate activities. Please try again.",
    ):
        self.message = message
        self.reason = reason
        super().__init__(message)


class GenerationInProgressError(ConflictError):
    """A plan request is already in flight."""
    def __init__(self, message: str = "An activity plan is already being generated. Please wait."):
        super().__init__(message)


class PersistenceReadError(DomainError):
    """Stored data is missing or corrupt. Recovered locally; never surfaced to the user."""
    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Could not read stored value for {key!r}: {reason}")


class PersistenceError(DomainError):
    """Writing to the key-value storage failed."""
    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        self.message = "Could not save favorites. Please try again."
        super().__init__(f"Could not write stored value for {key!r}: {reason}")
