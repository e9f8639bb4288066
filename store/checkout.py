from enums.checkout_status import CheckoutStatus
from store.base import Action, FrozenState


class CheckoutState(FrozenState):
    status: CheckoutStatus = CheckoutStatus.IDLE
    error: str | None = None
    last_order_id: int | None = None


class CheckoutStarted(Action):
    pass


class CheckoutSucceeded(Action):
    order_id: int


class CheckoutFailed(Action):
    message: str


class CheckoutReset(Action):
    pass


def checkout_reducer(state: CheckoutState, action: Action) -> CheckoutState:
    if isinstance(action, CheckoutStarted):
        return state.model_copy(update={'status': CheckoutStatus.SUBMITTING, 'error': None})

    if isinstance(action, CheckoutSucceeded):
        return CheckoutState(status=CheckoutStatus.SUCCEEDED, last_order_id=action.order_id)

    if isinstance(action, CheckoutFailed):
        return state.model_copy(update={'status': CheckoutStatus.FAILED, 'error': action.message})

    if isinstance(action, CheckoutReset):
        return CheckoutState()

    return state
