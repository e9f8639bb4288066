"""
Storefront client exceptions.
"""

from .base import FashionHubException


class ApiRequestException(FashionHubException):
    """Raised by the API client when a request fails or returns an error envelope."""

    def __init__(self, message: str, status: int | None = None, path: str | None = None):
        super().__init__(message, details={'status': status, 'path': path})
        self.status = status
        self.path = path


class EmptyCartException(FashionHubException):
    """Raised when checkout is started with an empty cart."""

    def __init__(self):
        super().__init__("Your cart is empty")
