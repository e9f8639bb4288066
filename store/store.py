"""
Client-side application store.

All state changes go through `Store.dispatch`: the action is passed to
every slice reducer and the resulting RootState replaces the old one.
Reducers are pure and synchronous; subscribers are notified after each
dispatch that changed the state.
"""

import logging
from typing import Callable

from store.auth import AuthState, auth_reducer
from store.base import Action, FrozenState
from store.cart import CartState, cart_reducer
from store.catalog import CatalogState, catalog_reducer
from store.checkout import CheckoutState, checkout_reducer
from store.customization import CustomizationState, customization_reducer

logger = logging.getLogger(__name__)

Listener = Callable[['RootState'], None]


class RootState(FrozenState):
    auth: AuthState = AuthState()
    cart: CartState = CartState()
    catalog: CatalogState = CatalogState()
    checkout: CheckoutState = CheckoutState()
    customization: CustomizationState = CustomizationState()


class Store:

    def __init__(self, state: RootState | None = None):
        self._state = state if state is not None else RootState()
        self._listeners: list[Listener] = []
        self._dispatching = False

    @property
    def state(self) -> RootState:
        return self._state

    def dispatch(self, action: Action) -> RootState:
        if self._dispatching:
            raise RuntimeError("Reducers may not dispatch actions")

        previous = self._state
        self._dispatching = True
        try:
            updated = RootState.model_construct(
                auth=auth_reducer(previous.auth, action),
                cart=cart_reducer(previous.cart, action),
                catalog=catalog_reducer(previous.catalog, action),
                checkout=checkout_reducer(previous.checkout, action),
                customization=customization_reducer(previous.customization, action),
            )
        finally:
            self._dispatching = False

        if all(getattr(updated, name) is getattr(previous, name) for name in RootState.model_fields):
            return previous

        self._state = updated
        logger.debug(f"Dispatched {type(action).__name__}")
        for listener in list(self._listeners):
            listener(updated)
        return updated

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; the returned callable unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
