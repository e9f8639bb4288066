"""
Authentication and authorization exceptions.
"""

from .base import FashionHubException


class AuthenticationException(FashionHubException):
    """Raised when the caller is not authenticated (missing or invalid token)."""

    def __init__(self, reason: str = "Not authorized to access this route"):
        super().__init__(reason)
        self.reason = reason


class AuthorizationException(FashionHubException):
    """Raised when an authenticated caller lacks permission."""

    def __init__(self, message: str = "Not authorized to access this route", details: dict | None = None):
        super().__init__(message, details)


class OrderOwnershipException(AuthorizationException):
    """Raised when user attempts to access an order they don't own."""

    def __init__(self, order_id: int, user_id: int):
        super().__init__(
            "Not authorized to access this order",
            details={'order_id': order_id, 'user_id': user_id}
        )
        self.order_id = order_id
        self.user_id = user_id
