from enum import Enum


class OrderStatus(str, Enum):
    """
    Fulfilment status of an order.

    Admins may set any value at any time; no transition is guarded.
    """
    PENDING = "pending"          # Order received
    PROCESSING = "processing"    # Being prepared
    SHIPPED = "shipped"          # Handed to carrier
    DELIVERED = "delivered"      # Arrived at customer
    CANCELLED = "cancelled"      # Cancelled by admin

    @property
    def tracking_text(self) -> str:
        return _TRACKING_TEXT[self]


_TRACKING_TEXT = {
    OrderStatus.PENDING: "Order received",
    OrderStatus.PROCESSING: "Order is being processed",
    OrderStatus.SHIPPED: "Order has been shipped",
    OrderStatus.DELIVERED: "Order has been delivered",
    OrderStatus.CANCELLED: "Order was cancelled",
}
