from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy import Column, Integer, Float, ForeignKey, CheckConstraint, Index, JSON
from sqlalchemy.orm import relationship

from enums.garment_size import GarmentSize
from enums.print_location import PrintLocation
from models.base import Base


class OrderItem(Base):
    __tablename__ = 'order_items'

    __table_args__ = (
        CheckConstraint('quantity >= 1', name='ck_order_item_quantity_positive'),
        CheckConstraint('price >= 0', name='ck_order_item_price_non_negative'),
        Index('ix_order_items_order_id', 'order_id'),
        Index('ix_order_items_product_id', 'product_id'),
    )

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey('orders.id', ondelete='CASCADE'), nullable=False)
    product_id = Column(Integer, ForeignKey('products.id'), nullable=False)
    # Position of the line within the order request
    position = Column(Integer, nullable=False, default=0)
    quantity = Column(Integer, nullable=False)
    # Unit price at purchase time
    price = Column(Float, nullable=False)
    # Snapshot of the requested customization, see OrderCustomizationDTO
    customization = Column(JSON, nullable=True)

    order = relationship("Order", back_populates="items")


class OrderCustomizationDTO(BaseModel):
    color: str | None = None
    size: GarmentSize | None = None
    print_location: PrintLocation | None = None
    custom_text: str | None = None
    design_url: str | None = None


class OrderItemDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None = None
    order_id: int | None = None
    product_id: int | None = None
    position: int | None = None
    quantity: int | None = Field(None, ge=1)
    price: float | None = None
    customization: OrderCustomizationDTO | None = None
