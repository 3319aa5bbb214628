# core/exceptions.py

class DomainError(Exception):
    """Base class for domain-level errors."""
    def __init__(self, message: str, *, code: str | None = None, field: str | None = None):
        super().__init__(message)
        self.code = code or self.__class__.__name__
        self.field = field


class ValidationError(DomainError):
    """Raised when data is invalid or violates constraints."""


class NotFoundError(DomainError):
    """Raised when an entity is not found."""


class BusinessRuleError(DomainError):
    """Raised when business rules are violated (e.g., submitting a closed wizard)."""


class CalculationError(DomainError):
    """Reported when a derived value cannot be computed (e.g., zero unit rate)."""


class BackendError(DomainError):
    """Raised when the financial line backend fails to load or persist data."""
