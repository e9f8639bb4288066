"""
Input and business-rule validation exceptions.
"""

from .base import FashionHubException


class ValidationException(FashionHubException):
    """Raised for malformed or business-rule-violating input."""
    pass


class EmptyOrderException(ValidationException):
    """Raised when an order is submitted without items."""

    def __init__(self):
        super().__init__("Please add items to your order")


class InsufficientStockException(ValidationException):
    """Raised when the requested quantity exceeds the product's stock."""

    def __init__(self, product_id: int, product_name: str, requested: int, available: int):
        super().__init__(
            f"Insufficient stock for product: {product_name}",
            details={'product_id': product_id, 'requested': requested, 'available': available}
        )
        self.product_id = product_id
        self.product_name = product_name
        self.requested = requested
        self.available = available


class InvalidQuantityException(ValidationException):
    """Raised when a line quantity is below 1."""

    def __init__(self, product_id: int, quantity: int):
        super().__init__(
            f"Quantity must be at least 1 (got {quantity} for product {product_id})",
            details={'product_id': product_id, 'quantity': quantity}
        )
        self.product_id = product_id
        self.quantity = quantity


class ProductInUseException(ValidationException):
    """Raised when deleting a product that existing orders still reference."""

    def __init__(self, product_id: int):
        super().__init__(
            f"Product {product_id} is referenced by existing orders and cannot be deleted",
            details={'product_id': product_id}
        )
        self.product_id = product_id
