class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a user opens a view that belongs to another role."""


class RecordStoreError(DomainError):
    """Raised when a Record Store call fails, whatever the cause."""


class AttendanceWriteError(DomainError):
    """Raised when marking attendance could not be persisted."""
