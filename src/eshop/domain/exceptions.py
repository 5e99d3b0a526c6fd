"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI and HTTP layers can catch them uniformly and display
user-friendly messages.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """One or more business rules or invariants were violated.

    Every violation is kept in ``messages`` so callers can report all of
    them at once instead of only the first.
    """

    def __init__(self, *messages: str) -> None:
        super().__init__("; ".join(messages))
        self.messages = list(messages)


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class InventoryError(DomainException):
    """Stock could not be reserved for an order."""


class ProductNotFound(InventoryError):

    def __init__(self, product_id: str) -> None:
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class InsufficientStock(InventoryError):

    def __init__(self, product_id: str, title: str, available: int, requested: int) -> None:
        super().__init__(
            f"Insufficient stock for product '{title}'. "
            f"Available: {available}, requested: {requested}"
        )
        self.product_id = product_id
        self.title = title
        self.available = available
        self.requested = requested


class PersistenceFailure(DomainException):
    """The storage layer failed while committing a unit of work."""
