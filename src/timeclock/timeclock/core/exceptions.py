class DomainError(Exception):
    """Base exception for business rule violations."""

    code = "domain_error"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "validation_error"


class PermissionDenied(DomainError):
    """Raised when the authorization policy rejects an action."""

    code = "permission_denied"


class NotFound(DomainError):
    """Raised when a referenced entity does not exist."""

    code = "not_found"


class Conflict(DomainError):
    """Raised when an action would break a state invariant."""

    code = "conflict"


class StorageError(DomainError):
    """Raised when the underlying datastore fails."""

    code = "storage_error"
