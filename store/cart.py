"""
Cart slice.

Lines are keyed by (product id, size, canonical customization JSON): adding
a line that matches an existing key increments its quantity. The total is
recomputed after every mutation.
"""

import json

from pydantic import Field

from enums.garment_size import GarmentSize
from enums.print_location import PrintLocation
from store.base import Action, FrozenState


class Position(FrozenState):
    x: float = 0.0
    y: float = 0.0


class CartCustomization(FrozenState):
    design_url: str | None = None
    position: Position | None = None
    scale: float | None = None
    rotation: float | None = None
    color: str | None = None
    print_location: PrintLocation | None = None
    custom_text: str | None = None

    def canonical(self) -> str:
        return json.dumps(self.model_dump(mode='json', exclude_none=True), sort_keys=True, separators=(',', ':'))


LineKey = tuple[int, str | None, str]


class CartItem(FrozenState):
    product_id: int
    name: str
    image_url: str | None = None
    price: float = Field(..., ge=0)
    quantity: int = Field(1, ge=1)
    size: GarmentSize | None = None
    customization: CartCustomization | None = None

    @property
    def key(self) -> LineKey:
        return line_key(self.product_id, self.size, self.customization)

    @property
    def subtotal(self) -> float:
        return self.price * self.quantity


def line_key(product_id: int, size: GarmentSize | None, customization: CartCustomization | None) -> LineKey:
    return (
        product_id,
        size.value if size is not None else None,
        customization.canonical() if customization is not None else '',
    )


class CartState(FrozenState):
    items: tuple[CartItem, ...] = ()
    total: float = 0.0

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @property
    def is_empty(self) -> bool:
        return not self.items


class AddItem(Action):
    item: CartItem


class RemoveItem(Action):
    key: LineKey


class SetQuantity(Action):
    key: LineKey
    quantity: int


class ClearCart(Action):
    pass


def _with_items(items: list[CartItem]) -> CartState:
    return CartState(items=tuple(items), total=sum(item.subtotal for item in items))


def cart_reducer(state: CartState, action: Action) -> CartState:
    if isinstance(action, AddItem):
        items = list(state.items)
        for index, existing in enumerate(items):
            if existing.key == action.item.key:
                items[index] = existing.model_copy(update={'quantity': existing.quantity + action.item.quantity})
                break
        else:
            items.append(action.item)
        return _with_items(items)

    if isinstance(action, (RemoveItem, SetQuantity)) and not any(item.key == action.key for item in state.items):
        return state

    if isinstance(action, RemoveItem):
        return _with_items([item for item in state.items if item.key != action.key])

    if isinstance(action, SetQuantity):
        if action.quantity <= 0:
            return _with_items([item for item in state.items if item.key != action.key])
        return _with_items([
            item.model_copy(update={'quantity': action.quantity}) if item.key == action.key else item
            for item in state.items
        ])

    if isinstance(action, ClearCart):
        return CartState()

    return state
