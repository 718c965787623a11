"""Custom domain exceptions for the store."""

# Stable, machine-readable error codes for API consumers.
EMPTY_FIELD = "EMPTY_FIELD"
NEGATIVE_VALUE = "NEGATIVE_VALUE"
QUANTITY_EXCEEDED = "QUANTITY_EXCEEDED"
NOT_FOUND = "NOT_FOUND"
STORAGE_ERROR = "STORAGE_ERROR"


class DomainError(Exception):
    """Base exception for domain/business logic errors."""

    pass


class EmptyFieldError(DomainError):
    """Raised when a required text field (name, brand, category) is blank or missing."""

    pass


class NegativeValueError(DomainError):
    """Raised when a price or quantity violates its non-negative or positive lower bound."""

    pass


class QuantityExceededError(DomainError):
    """Raised when a requested sale quantity exceeds the product's current stock."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested product or sale does not exist."""

    pass


class StorageError(DomainError):
    """Raised by storage adapters when a snapshot cannot be loaded or saved."""

    pass
