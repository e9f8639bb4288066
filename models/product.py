from datetime import datetime

from pydantic import BaseModel, Field, field_validator
from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, JSON, CheckConstraint, Index, func
from sqlalchemy import Enum as SQLEnum

from enums.garment_size import GarmentSize
from enums.print_location import PrintLocation
from enums.product_category import ProductCategory
from models.base import Base


class Product(Base):
    __tablename__ = 'products'

    id = Column(Integer, primary_key=True, unique=True)
    name = Column(String(100), nullable=False)
    description = Column(String(1000), nullable=False)
    price = Column(Float, nullable=False)
    category = Column(SQLEnum(ProductCategory, values_callable=lambda e: [c.value for c in e]), nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    image_url = Column(String, nullable=False)
    is_customizable = Column(Boolean, nullable=False, default=False)

    # Customization option sets, stored as JSON lists of enum values
    # Format: {"colors": ["black", "white"], "sizes": ["S", "M"], "print_locations": ["front"]}
    customization_options = Column(JSON, nullable=True)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    __table_args__ = (
        CheckConstraint('price >= 0', name='check_product_price_non_negative'),
        CheckConstraint('stock >= 0', name='check_product_stock_non_negative'),
        Index('ix_products_category', 'category'),
        Index('ix_products_price', 'price'),
    )


class CustomizationOptionsDTO(BaseModel):
    colors: list[str] = Field(default_factory=list)
    sizes: list[GarmentSize] = Field(default_factory=list)
    print_locations: list[PrintLocation] = Field(default_factory=list)

    @field_validator('colors')
    @classmethod
    def strip_colors(cls, v: list[str]) -> list[str]:
        return [color.strip() for color in v if color.strip()]


class ProductDTO(BaseModel):
    id: int | None = None
    name: str | None = Field(None, max_length=100)
    description: str | None = Field(None, max_length=1000)
    price: float | None = Field(None, ge=0)
    category: ProductCategory | None = None
    stock: int | None = Field(None, ge=0)
    image_url: str | None = None
    is_customizable: bool | None = None
    customization_options: CustomizationOptionsDTO | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator('category', mode='before')
    @classmethod
    def normalize_category(cls, v):
        if isinstance(v, str):
            return ProductCategory.from_string(v)
        return v

    @field_validator('name', mode='before')
    @classmethod
    def strip_name(cls, v):
        return v.strip() if isinstance(v, str) else v

    def to_row(self) -> dict:
        """Column values for an insert/update, skipping unset fields."""
        data = self.model_dump(exclude_unset=True, exclude={'id', 'created_at', 'updated_at'}, mode='json')
        if 'category' in data and data['category'] is not None:
            data['category'] = ProductCategory(data['category'])
        return data


class CategoryStatsDTO(BaseModel):
    category: ProductCategory
    count: int
    avg_price: float
    min_price: float
    max_price: float
    total_stock: int
