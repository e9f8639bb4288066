from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field
from sqlalchemy import Column, Integer, Float, DateTime, ForeignKey, JSON, CheckConstraint, Index, func
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import relationship

from enums.order_status import OrderStatus
from enums.payment_method import PaymentMethod
from enums.payment_status import PaymentStatus
from models.base import Base
from models.orderItem import OrderItemDTO, OrderCustomizationDTO


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Order(Base):
    __tablename__ = 'orders'

    id = Column(Integer, primary_key=True, unique=True)
    user_id = Column(Integer, ForeignKey('users.id'), nullable=False)
    # Server-computed sum of price * quantity over all lines
    total_amount = Column(Float, nullable=False)
    status = Column(SQLEnum(OrderStatus, values_callable=_enum_values), nullable=False, default=OrderStatus.PENDING)
    payment_status = Column(SQLEnum(PaymentStatus, values_callable=_enum_values), nullable=False,
                            default=PaymentStatus.PENDING)
    payment_method = Column(SQLEnum(PaymentMethod, values_callable=_enum_values), nullable=False)
    # Format: {"street": ..., "city": ..., "state": ..., "zip_code": ..., "country": ...}
    shipping_address = Column(JSON, nullable=False)
    created_at = Column(DateTime, default=func.now(), nullable=False)
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now(), nullable=False)

    items = relationship('OrderItem', back_populates='order', cascade='all, delete-orphan',
                         order_by='OrderItem.position', lazy='selectin')

    __table_args__ = (
        CheckConstraint('total_amount >= 0', name='check_order_total_amount_non_negative'),
        Index('ix_orders_user_created', 'user_id', 'created_at'),
        Index('ix_orders_status', 'status'),
        Index('ix_orders_payment_status', 'payment_status'),
    )


class ShippingAddressDTO(BaseModel):
    street: str = Field(..., min_length=1)
    city: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    zip_code: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)


class OrderTrackingDTO(BaseModel):
    current_status: str
    order_date: datetime | None = None
    last_update: datetime | None = None


class OrderDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    user_id: int | None = None
    items: list[OrderItemDTO] = Field(default_factory=list)
    total_amount: float | None = None
    status: OrderStatus | None = None
    payment_status: PaymentStatus | None = None
    payment_method: PaymentMethod | None = None
    shipping_address: ShippingAddressDTO | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @computed_field
    @property
    def tracking(self) -> OrderTrackingDTO:
        return OrderTrackingDTO(
            current_status=self.status.tracking_text if self.status else OrderStatus.PENDING.tracking_text,
            order_date=self.created_at,
            last_update=self.updated_at,
        )


class OrderLineRequestDTO(BaseModel):
    product_id: int
    quantity: int = 1
    customization: OrderCustomizationDTO | None = None


class OrderRequestDTO(BaseModel):
    items: list[OrderLineRequestDTO] = Field(default_factory=list)
    shipping_address: ShippingAddressDTO
    payment_method: PaymentMethod


class DailyOrdersDTO(BaseModel):
    date: str
    count: int
    revenue: float


class OrderStatsDTO(BaseModel):
    total_orders: int
    total_revenue: float
    average_order_value: float
    status_distribution: dict[OrderStatus, int]
    daily_orders: list[DailyOrdersDTO]
