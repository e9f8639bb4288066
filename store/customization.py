"""
Customization slice: design elements on the garment canvas with linear undo/redo.

Every element mutation pushes the previous element list onto `past` and
clears `future`. `past` is bounded by `history_limit`; the oldest snapshot
is dropped first. View, product selection and canvas settings are not
part of the history.
"""

from typing import Any

from pydantic import Field

import config
from enums.canvas_view import CanvasView
from enums.design_element_kind import DesignElementKind
from enums.garment_size import GarmentSize
from store.base import Action, FrozenState
from store.cart import Position


class DesignElement(FrozenState):
    id: str
    kind: DesignElementKind
    content: str
    position: Position = Position()
    scale: float = 1.0
    rotation: float = 0.0
    color: str | None = None
    font_size: int | None = None
    font_family: str | None = None


class SelectedProduct(FrozenState):
    id: int
    color: str | None = None
    size: GarmentSize | None = None


class CanvasSettings(FrozenState):
    width: int = 800
    height: int = 600
    zoom: float = 1.0


class CustomizationState(FrozenState):
    elements: tuple[DesignElement, ...] = ()
    past: tuple[tuple[DesignElement, ...], ...] = ()
    future: tuple[tuple[DesignElement, ...], ...] = ()
    view: CanvasView = CanvasView.FLAT
    selected_product: SelectedProduct | None = None
    canvas: CanvasSettings = CanvasSettings()
    history_limit: int = Field(default_factory=lambda: config.CUSTOMIZATION_HISTORY_LIMIT, ge=1)

    @property
    def can_undo(self) -> bool:
        return bool(self.past)

    @property
    def can_redo(self) -> bool:
        return bool(self.future)


class AddElement(Action):
    element: DesignElement


class UpdateElement(Action):
    element_id: str
    changes: dict[str, Any]


class RemoveElement(Action):
    element_id: str


class ClearElements(Action):
    pass


class ToggleView(Action):
    pass


class Undo(Action):
    pass


class Redo(Action):
    pass


class SelectProduct(Action):
    product: SelectedProduct | None = None


class SetCanvasSize(Action):
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)


class SetZoom(Action):
    zoom: float = Field(..., gt=0)


def _commit(state: CustomizationState, elements: tuple[DesignElement, ...]) -> CustomizationState:
    past = (state.past + (state.elements,))[-state.history_limit:]
    return state.model_copy(update={'elements': elements, 'past': past, 'future': ()})


def _updated(element: DesignElement, changes: dict[str, Any]) -> DesignElement:
    # Re-validate so bad field values fail here, not at render time
    return DesignElement.model_validate({**element.model_dump(), **changes, 'id': element.id})


def customization_reducer(state: CustomizationState, action: Action) -> CustomizationState:
    if isinstance(action, AddElement):
        return _commit(state, state.elements + (action.element,))

    if isinstance(action, UpdateElement):
        if not any(element.id == action.element_id for element in state.elements):
            return state
        return _commit(state, tuple(
            _updated(element, action.changes) if element.id == action.element_id else element
            for element in state.elements
        ))

    if isinstance(action, RemoveElement):
        remaining = tuple(element for element in state.elements if element.id != action.element_id)
        if len(remaining) == len(state.elements):
            return state
        return _commit(state, remaining)

    if isinstance(action, ClearElements):
        if not state.elements:
            return state
        return _commit(state, ())

    if isinstance(action, Undo):
        if not state.past:
            return state
        return state.model_copy(update={
            'elements': state.past[-1],
            'past': state.past[:-1],
            'future': (state.elements,) + state.future,
        })

    if isinstance(action, Redo):
        if not state.future:
            return state
        return state.model_copy(update={
            'elements': state.future[0],
            'past': (state.past + (state.elements,))[-state.history_limit:],
            'future': state.future[1:],
        })

    if isinstance(action, ToggleView):
        return state.model_copy(update={'view': state.view.toggled()})

    if isinstance(action, SelectProduct):
        return state.model_copy(update={'selected_product': action.product})

    if isinstance(action, SetCanvasSize):
        return state.model_copy(update={'canvas': state.canvas.model_copy(
            update={'width': action.width, 'height': action.height})})

    if isinstance(action, SetZoom):
        return state.model_copy(update={'canvas': state.canvas.model_copy(update={'zoom': action.zoom})})

    return state
