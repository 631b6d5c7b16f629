"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Each subclass carries a stable ``code`` a client can switch on.
"""


class DomainException(Exception):
    """Base class for all domain errors."""

    code = "DOMAIN_ERROR"


class ValidationError(DomainException):
    """A business rule or invariant was violated."""

    code = "VALIDATION_ERROR"


class EmptyCartError(ValidationError):
    """Checkout was attempted on a cart with no items."""

    code = "EMPTY_CART"


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    code = "NOT_FOUND"


class ItemNotFoundError(EntityNotFoundError):
    """The product is not a line of the user's cart."""

    code = "ITEM_NOT_FOUND"


class InsufficientStockError(DomainException):
    """Not enough stock to satisfy the requested quantity."""

    code = "INSUFFICIENT_STOCK"


class ProductUnavailableError(DomainException):
    """The product exists but is no longer sold."""

    code = "PRODUCT_UNAVAILABLE"


class InvalidTransitionError(DomainException):
    """The order status change is not in the transition table."""

    code = "INVALID_TRANSITION"


class InvalidStateError(DomainException):
    """The operation is not allowed in the order's current status."""

    code = "INVALID_STATE"
