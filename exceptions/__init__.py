"""
Custom exceptions for FashionHub.

Exception Hierarchy:
--------------------
FashionHubException (base)
├── ValidationException                 -> 400
│   ├── EmptyOrderException
│   ├── InsufficientStockException
│   ├── InvalidQuantityException
│   └── ProductInUseException
├── NotFoundException                   -> 404
│   ├── ProductNotFoundException
│   └── OrderNotFoundException
├── AuthenticationException             -> 401
├── AuthorizationException              -> 403
│   └── OrderOwnershipException         -> 401
├── ApiRequestException                 (client side)
└── EmptyCartException                  (client side)

Usage:
------
Services raise specific exceptions:
    raise ProductNotFoundException(product_id=123)

The web layer converts them into JSON error envelopes
(see utils/error_handler.py).
"""

from .base import FashionHubException
from .validation import (
    ValidationException,
    EmptyOrderException,
    InsufficientStockException,
    InvalidQuantityException,
    ProductInUseException,
)
from .not_found import NotFoundException, ProductNotFoundException, OrderNotFoundException
from .auth import AuthenticationException, AuthorizationException, OrderOwnershipException
from .api import ApiRequestException, EmptyCartException

__all__ = [
    # Base
    'FashionHubException',

    # Validation
    'ValidationException',
    'EmptyOrderException',
    'InsufficientStockException',
    'InvalidQuantityException',
    'ProductInUseException',

    # Not found
    'NotFoundException',
    'ProductNotFoundException',
    'OrderNotFoundException',

    # Auth
    'AuthenticationException',
    'AuthorizationException',
    'OrderOwnershipException',

    # Client
    'ApiRequestException',
    'EmptyCartException',
]
