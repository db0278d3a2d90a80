"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidQuantity(ValidationError):
    """A quantity was negative, zero where it must be positive, or not an int."""


class InsufficientStock(ValidationError):
    """A guarded removal would drive a stock quantity below zero."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class OrderNotFound(EntityNotFoundError):
    pass


class ResourceNotFound(EntityNotFoundError):
    pass


class PersistenceFailure(DomainException):
    """The underlying ledger store could not be read or written."""
