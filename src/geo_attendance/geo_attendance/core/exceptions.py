class DomainError(Exception):
    """Base exception for business rule violations."""

    http_status = 400


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    http_status = 400


class NotFoundError(DomainError):
    """Raised when a user, location, record or request does not exist."""

    http_status = 404


class ConflictError(DomainError):
    """Raised when the current state forbids the action (duplicates, already processed)."""

    http_status = 409


class AuthorizationError(DomainError):
    """Raised when a user acts on data owned by someone else."""

    http_status = 403
