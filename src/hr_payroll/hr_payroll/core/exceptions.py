class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced employee, payroll record or leave does not exist."""


class AuthorizationError(DomainError):
    """Raised when the acting user lacks permission for an action."""
