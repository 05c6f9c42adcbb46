# inventory_tracker/exceptions.py
"""
Typed exceptions raised by the catalog, stock ledger and analytics services.

Every exception carries a machine-readable ``code``; validation errors also
carry per-field messages so that a form can show them next to the right input.

    InventoryError
    |
    +-- ValidationError          VALIDATION_ERROR
    |   +-- DuplicateNameError   DUPLICATE_NAME
    |   +-- InvalidQuantityError INVALID_QUANTITY
    |
    +-- NotFoundError            NOT_FOUND
    |   +-- ProductNotFoundError PRODUCT_NOT_FOUND
    |
    +-- InsufficientStockError   INSUFFICIENT_STOCK
    |
    +-- ConcurrencyConflictError CONCURRENCY_CONFLICT

No write happens when any of these is raised.
"""
from typing import Dict, List, Optional


class InventoryError(Exception):
    """Base class for all domain errors."""

    code: str = "INVENTORY_ERROR"


class ValidationError(InventoryError):
    """One or more fields failed validation."""

    code: str = "VALIDATION_ERROR"

    def __init__(self, errors: Dict[str, List[str]], message: Optional[str] = None):
        self.errors = errors
        if message is None:
            field, messages = next(iter(errors.items()))
            message = f"{field}: {messages[0]}"
        super().__init__(message)

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls({field: [message]})


class DuplicateNameError(ValidationError):
    code: str = "DUPLICATE_NAME"

    def __init__(self, entity: str, name: str, field: str = "name"):
        self.entity = entity
        self.name = name
        super().__init__({field: [f"A {entity.lower()} with this name already exists."]})


class InvalidQuantityError(ValidationError):
    code: str = "INVALID_QUANTITY"

    def __init__(self, quantity, field: str = "quantity"):
        self.quantity = quantity
        super().__init__({field: ["Quantity must be greater than 0."]})


class NotFoundError(InventoryError):
    code: str = "NOT_FOUND"

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} not found")


class ProductNotFoundError(NotFoundError):
    code: str = "PRODUCT_NOT_FOUND"

    def __init__(self, product_id):
        super().__init__("Product", product_id)


class InsufficientStockError(InventoryError):
    """Stock-out would take the product's quantity below zero."""

    code: str = "INSUFFICIENT_STOCK"

    def __init__(self, product_id, current_quantity: int, requested: int):
        self.product_id = product_id
        self.current_quantity = current_quantity
        self.requested = requested
        super().__init__(f"Not enough stock. Current quantity: {current_quantity}")


class ConcurrencyConflictError(InventoryError):
    """The product kept changing underneath us after every retry."""

    code: str = "CONCURRENCY_CONFLICT"

    def __init__(self, product_id, attempts: int):
        self.product_id = product_id
        self.attempts = attempts
        super().__init__(
            f"Product {product_id} was modified concurrently "
            f"({attempts} attempts). Please try again."
        )
