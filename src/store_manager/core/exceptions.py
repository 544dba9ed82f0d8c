class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced store, employee, driver or vendor does not exist."""


class ConflictError(DomainError):
    """Raised when a write collides with an existing record."""
