class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConfigurationError(DomainError):
    """Raised when schedules or credentials are misconfigured.

    Callers must halt instead of guessing a fallback.
    """


class ProviderError(DomainError):
    """Raised when the attendance provider API fails or answers unexpectedly."""
