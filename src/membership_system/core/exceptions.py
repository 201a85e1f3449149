class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a requested record does not exist."""


class OrganizationNotFoundError(NotFoundError):
    """Raised when no organization matches an owner or id."""


class ClientNotFoundError(NotFoundError):
    """Raised when a client id or check-in token matches no client."""


class PackageNotFoundError(NotFoundError):
    """Raised when a catalog entry or assignment does not exist."""


class StorageError(DomainError):
    """Raised when the persistence layer fails (opaque cause)."""
