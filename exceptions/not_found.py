"""
Missing-entity exceptions.
"""

from .base import FashionHubException


class NotFoundException(FashionHubException):
    """Base exception for entities that do not exist."""
    pass


class ProductNotFoundException(NotFoundException):
    """Raised when product is not found in database."""

    def __init__(self, product_id: int):
        super().__init__(
            f"Product not found with id: {product_id}",
            details={'product_id': product_id}
        )
        self.product_id = product_id


class OrderNotFoundException(NotFoundException):
    """Raised when order is not found in database."""

    def __init__(self, order_id: int):
        super().__init__(
            f"Order not found with id of {order_id}",
            details={'order_id': order_id}
        )
        self.order_id = order_id
