from models.user import UserDTO
from store.base import Action, FrozenState


class AuthState(FrozenState):
    user: UserDTO | None = None
    token: str | None = None
    loading: bool = False
    error: str | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None and self.token is not None


class SetUser(Action):
    user: UserDTO
    token: str


class SetAuthLoading(Action):
    loading: bool


class SetAuthError(Action):
    message: str


class Logout(Action):
    # Shown on the login page, e.g. after an inactivity timeout
    message: str | None = None


def auth_reducer(state: AuthState, action: Action) -> AuthState:
    if isinstance(action, SetUser):
        return AuthState(user=action.user, token=action.token)

    if isinstance(action, SetAuthLoading):
        return state.model_copy(update={'loading': action.loading})

    if isinstance(action, SetAuthError):
        return state.model_copy(update={'error': action.message, 'loading': False})

    if isinstance(action, Logout):
        return AuthState(error=action.message)

    return state
