"""
Catalog slice: the product list plus the filtered/sorted view derived from it.

`filtered_items` is always recomputed from `items` and the active filters;
it is never edited directly.
"""

import locale

from enums.catalog_sort import CatalogSort
from enums.garment_size import GarmentSize
from enums.product_category import ProductCategory
from models.product import ProductDTO
from store.base import Action, FrozenState


class PriceRange(FrozenState):
    min: float
    max: float


class CatalogFilters(FrozenState):
    category: ProductCategory | None = None
    # Kept for navigation breadcrumbs; products carry no subcategory to filter on
    subcategory: str | None = None
    price_range: PriceRange | None = None
    sizes: tuple[GarmentSize, ...] = ()
    sort_by: CatalogSort = CatalogSort.NONE


class CatalogState(FrozenState):
    items: tuple[ProductDTO, ...] = ()
    filtered_items: tuple[ProductDTO, ...] = ()
    loading: bool = False
    error: str | None = None
    filters: CatalogFilters = CatalogFilters()


class SetProducts(Action):
    products: tuple[ProductDTO, ...]


class SetLoading(Action):
    loading: bool


class SetError(Action):
    message: str


class SetFilters(Action):
    """Partial filter update: only the fields passed to the constructor are merged."""
    category: ProductCategory | None = None
    subcategory: str | None = None
    price_range: PriceRange | None = None
    sizes: tuple[GarmentSize, ...] = ()
    sort_by: CatalogSort = CatalogSort.NONE


class ClearFilters(Action):
    pass


def _name_key(product: ProductDTO):
    name = product.name or ''
    return locale.strxfrm(name.casefold()), name


def apply_filters(items: tuple[ProductDTO, ...], filters: CatalogFilters) -> tuple[ProductDTO, ...]:
    filtered = list(items)

    if filters.category is not None:
        filtered = [item for item in filtered if item.category == filters.category]

    if filters.price_range is not None:
        low, high = filters.price_range.min, filters.price_range.max
        filtered = [item for item in filtered if item.price is not None and low <= item.price <= high]

    if filters.sizes:
        wanted = set(filters.sizes)
        filtered = [
            item for item in filtered
            if item.customization_options is not None and wanted.intersection(item.customization_options.sizes)
        ]

    # sorted() is stable, so equal keys keep catalog order
    if filters.sort_by == CatalogSort.PRICE_ASC:
        filtered = sorted(filtered, key=lambda item: item.price or 0.0)
    elif filters.sort_by == CatalogSort.PRICE_DESC:
        filtered = sorted(filtered, key=lambda item: item.price or 0.0, reverse=True)
    elif filters.sort_by == CatalogSort.NAME_ASC:
        filtered = sorted(filtered, key=_name_key)
    elif filters.sort_by == CatalogSort.NAME_DESC:
        filtered = sorted(filtered, key=_name_key, reverse=True)

    return tuple(filtered)


def catalog_reducer(state: CatalogState, action: Action) -> CatalogState:
    if isinstance(action, SetProducts):
        return state.model_copy(update={
            'items': action.products,
            'filtered_items': apply_filters(action.products, state.filters),
            'loading': False,
            'error': None,
        })

    if isinstance(action, SetLoading):
        return state.model_copy(update={'loading': action.loading})

    if isinstance(action, SetError):
        return state.model_copy(update={'error': action.message, 'loading': False})

    if isinstance(action, SetFilters):
        changes = {field: getattr(action, field) for field in action.model_fields_set}
        filters = state.filters.model_copy(update=changes)
        return state.model_copy(update={
            'filters': filters,
            'filtered_items': apply_filters(state.items, filters),
        })

    if isinstance(action, ClearFilters):
        return state.model_copy(update={'filters': CatalogFilters(), 'filtered_items': state.items})

    return state
