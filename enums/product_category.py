from enum import Enum


class ProductCategory(str, Enum):
    T_SHIRTS = "t-shirts"
    HOODIES = "hoodies"
    JACKETS = "jackets"
    PANTS = "pants"
    ACCESSORIES = "accessories"

    @classmethod
    def from_string(cls, value: str) -> 'ProductCategory':
        """Case-insensitive lookup ("T-Shirts" -> T_SHIRTS)."""
        normalized = value.strip().lower()
        for category in cls:
            if category.value == normalized:
                return category
        valid = ', '.join(c.value for c in cls)
        raise ValueError(f"Unknown category '{value}'. Valid categories: {valid}")
