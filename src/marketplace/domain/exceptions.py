"""Domain-level exceptions.

All business rule violations and backend failures are expressed as
subclasses of DomainException so the CLI layer can catch them uniformly
and display user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class EmptyCartError(DomainException):
    """Checkout was attempted with nothing in the cart."""


class InvalidTransitionError(DomainException):
    """The requested status change is illegal for this state and actor."""


class StaleStateError(DomainException):
    """The order no longer holds the status the caller expected.

    The caller must re-fetch the order and decide again.
    """


class NetworkError(DomainException):
    """A transient backend failure. Safe to retry."""


class AuthError(DomainException):
    """The backend rejected the credential (missing, expired or forbidden)."""
