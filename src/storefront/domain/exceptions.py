"""Domain-level exceptions.

All business rule violations and backend failures are expressed as
subclasses of DomainException so the CLI layer can catch them uniformly
and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class EmptyCartError(DomainException):
    """Checkout was attempted with nothing in the cart."""


class AuthenticationRequiredError(DomainException):
    """The operation needs a signed-in user."""


class PermissionDeniedError(DomainException):
    """The signed-in user is not allowed to perform the operation."""


class BackendError(DomainException):
    """A call to the backend (hosted or local) failed."""


class CheckoutValidationError(ValidationError):
    """The checkout form has missing or malformed fields.

    ``field_errors`` maps each offending form field to its message.
    """

    def __init__(self, field_errors: dict[str, str]) -> None:
        self.field_errors = dict(field_errors)
        details = "; ".join(f"{name}: {msg}" for name, msg in self.field_errors.items())
        super().__init__(f"Please correct the highlighted fields ({details})")


class CheckoutFailedError(DomainException):
    """Placing the order failed; the cart is left intact for a retry."""
