from enum import Enum


class CatalogSort(str, Enum):
    """Sort orders for the storefront catalog view."""
    NONE = "none"              # Keep source order
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"
    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"
