"""
Unit Tests for the cart slice reducer.
"""

import pytest

from enums.garment_size import GarmentSize
from store.cart import (
    AddItem,
    CartCustomization,
    CartItem,
    CartState,
    ClearCart,
    Position,
    RemoveItem,
    SetQuantity,
    cart_reducer,
    line_key,
)


def tee(quantity: int = 1, size: GarmentSize = GarmentSize.M, customization: CartCustomization | None = None,
        price: float = 10.0) -> CartItem:
    return CartItem(product_id=1, name="Classic Tee", price=price, quantity=quantity, size=size,
                    customization=customization)


def cap(quantity: int = 1) -> CartItem:
    return CartItem(product_id=2, name="Logo Cap", price=5.0, quantity=quantity)


def assert_total_consistent(state: CartState):
    assert state.total == sum(item.price * item.quantity for item in state.items)


class TestAddItem:

    def test_add_new_lines(self):
        state = cart_reducer(CartState(), AddItem(item=tee(quantity=2)))
        state = cart_reducer(state, AddItem(item=cap()))

        assert len(state.items) == 2
        assert state.total == 25.0
        assert state.item_count == 3

    def test_matching_line_is_incremented(self):
        state = cart_reducer(CartState(), AddItem(item=tee(quantity=1)))
        state = cart_reducer(state, AddItem(item=tee(quantity=2)))

        assert len(state.items) == 1
        assert state.items[0].quantity == 3
        assert_total_consistent(state)

    def test_increment_keeps_first_price_snapshot(self):
        state = cart_reducer(CartState(), AddItem(item=tee(price=10.0)))
        state = cart_reducer(state, AddItem(item=tee(price=12.0)))

        assert state.items[0].price == 10.0
        assert state.total == 20.0

    def test_different_size_is_separate_line(self):
        state = cart_reducer(CartState(), AddItem(item=tee(size=GarmentSize.M)))
        state = cart_reducer(state, AddItem(item=tee(size=GarmentSize.L)))

        assert len(state.items) == 2

    def test_customization_is_part_of_key(self):
        front = CartCustomization(design_url="https://cdn.example.com/a.png", position=Position(x=10, y=20))
        moved = CartCustomization(design_url="https://cdn.example.com/a.png", position=Position(x=11, y=20))
        state = cart_reducer(CartState(), AddItem(item=tee(customization=front)))
        state = cart_reducer(state, AddItem(item=tee(customization=moved)))
        state = cart_reducer(state, AddItem(item=tee(customization=front)))

        assert [item.quantity for item in state.items] == [2, 1]

    def test_key_is_independent_of_field_order(self):
        first = CartCustomization.model_validate({"scale": 1.5, "rotation": 90, "design_url": "d.png"})
        second = CartCustomization.model_validate({"design_url": "d.png", "rotation": 90, "scale": 1.5})

        assert line_key(1, GarmentSize.S, first) == line_key(1, GarmentSize.S, second)

    def test_state_is_not_mutated(self):
        original = CartState()
        cart_reducer(original, AddItem(item=tee()))

        assert original.items == ()
        assert original.total == 0.0


class TestRemoveAndQuantity:

    @pytest.fixture
    def filled(self) -> CartState:
        state = cart_reducer(CartState(), AddItem(item=tee(quantity=2)))
        return cart_reducer(state, AddItem(item=cap()))

    def test_remove_deletes_only_that_line(self, filled):
        state = cart_reducer(filled, RemoveItem(key=tee().key))

        assert [item.name for item in state.items] == ["Logo Cap"]
        assert state.total == 5.0

    def test_remove_unknown_key_returns_same_state(self, filled):
        state = cart_reducer(filled, RemoveItem(key=(99, None, '')))

        assert state is filled

    @pytest.mark.parametrize("quantity", [0, 3])
    def test_set_quantity_unknown_key_returns_same_state(self, filled, quantity):
        state = cart_reducer(filled, SetQuantity(key=(99, None, ''), quantity=quantity))

        assert state is filled

    def test_set_quantity(self, filled):
        state = cart_reducer(filled, SetQuantity(key=cap().key, quantity=4))

        assert state.items[1].quantity == 4
        assert state.total == 40.0

    @pytest.mark.parametrize("quantity", [0, -3])
    def test_set_quantity_to_zero_or_below_removes(self, filled, quantity):
        state = cart_reducer(filled, SetQuantity(key=tee().key, quantity=quantity))

        assert [item.name for item in state.items] == ["Logo Cap"]
        assert_total_consistent(state)

    def test_clear(self, filled):
        state = cart_reducer(filled, ClearCart())

        assert state.items == ()
        assert state.total == 0.0
        assert state.is_empty
