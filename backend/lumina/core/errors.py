# backend/lumina/core/errors.py


class InventoryError(Exception):
    """Base class for errors raised by the inventory core."""


class ValidationError(InventoryError):
    """Malformed creation/update input (e.g. empty name)."""


class NotFoundError(InventoryError):
    def __init__(self, product_id: int):
        super().__init__(f"Product {product_id} not found")
        self.product_id = product_id


class InvalidCriteriaError(InventoryError):
    """Unrecognized sort field, sort order, stock filter or category."""


class EmptyInputError(InventoryError):
    """Export requested for zero records."""


class ExternalServiceFailure(InventoryError):
    """Text-generation call failed. Never leaves the insights client."""
