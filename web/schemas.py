"""
Request bodies and response envelopes for the REST API.
"""

from typing import Any

from pydantic import BaseModel, Field

from enums.order_status import OrderStatus
from enums.payment_status import PaymentStatus
from enums.product_category import ProductCategory
from models.product import CustomizationOptionsDTO, ProductDTO
from utils.pagination import Pagination


class StatusUpdateRequest(BaseModel):
    status: OrderStatus


class PaymentStatusUpdateRequest(BaseModel):
    payment_status: PaymentStatus


class ProductCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1, max_length=1000)
    price: float = Field(..., ge=0)
    category: ProductCategory
    stock: int = Field(0, ge=0)
    image_url: str = Field(..., min_length=1)
    is_customizable: bool = False
    customization_options: CustomizationOptionsDTO | None = None

    def to_dto(self) -> ProductDTO:
        return ProductDTO(**self.model_dump())


class ProductUpdateRequest(BaseModel):
    name: str | None = Field(None, min_length=1, max_length=100)
    description: str | None = Field(None, min_length=1, max_length=1000)
    price: float | None = Field(None, ge=0)
    category: ProductCategory | None = None
    stock: int | None = Field(None, ge=0)
    image_url: str | None = Field(None, min_length=1)
    is_customizable: bool | None = None
    customization_options: CustomizationOptionsDTO | None = None

    def to_dto(self) -> ProductDTO:
        # Only fields sent by the client end up in fields_set
        return ProductDTO(**self.model_dump(exclude_unset=True))


def success(data: Any) -> dict:
    if isinstance(data, BaseModel):
        data = data.model_dump(mode='json')
    return {"success": True, "data": data}


def success_page(items: list[BaseModel], pagination: Pagination) -> dict:
    return {
        "success": True,
        "count": len(items),
        "pagination": pagination.model_dump(exclude_none=True),
        "data": [item.model_dump(mode='json') for item in items],
    }
