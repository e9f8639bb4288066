from enum import Enum


class PaymentStatus(str, Enum):
    """Payment lifecycle, independent of OrderStatus."""
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"
