"""
Route guard for the admin area with an inactivity timeout.

The gate is `active` while an administrator is logged in and has interacted
within the timeout. Each activity event restarts the timer. On timeout the
session is cleared and the caller is sent to the login page with a message.
"""

import asyncio
import logging
from typing import Callable

import config
from enums.activity_event import ActivityEvent
from enums.session_state import SessionState
from store.auth import Logout
from store.store import RootState, Store
from utils.permission_utils import is_admin

logger = logging.getLogger(__name__)

Redirect = Callable[[str, str | None], None]


class AuthGate:

    LOGIN_PATH = "/login"
    TIMEOUT_MESSAGE = "Your session has expired due to inactivity. Please log in again."

    def __init__(self, store: Store, on_redirect: Redirect, timeout_seconds: float | None = None):
        self.store = store
        self.on_redirect = on_redirect
        self.timeout_seconds = timeout_seconds or config.SESSION_TIMEOUT_MINUTES * 60
        self.state = SessionState.EXPIRED
        self._timer: asyncio.TimerHandle | None = None
        self._unsubscribe: Callable[[], None] | None = None

    def guard(self) -> bool:
        """
        Admit the current user to the protected area.

        Returns:
            True if an administrator is logged in (the inactivity timer is armed),
            False after redirecting to the login page
        """
        if not is_admin(self.store.state.auth.user):
            self._deactivate()
            self.on_redirect(self.LOGIN_PATH, None)
            return False

        if self.state != SessionState.ACTIVE:
            self.state = SessionState.ACTIVE
            self._unsubscribe = self.store.subscribe(self._on_state_change)
        self._arm_timer()
        return True

    def record_activity(self, event: ActivityEvent | str) -> None:
        ActivityEvent(event)  # rejects unknown event names
        if self.state == SessionState.ACTIVE:
            self._arm_timer()

    def logout(self) -> None:
        self._deactivate()
        self.store.dispatch(Logout())
        self.on_redirect(self.LOGIN_PATH, None)

    def _arm_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
        self._timer = asyncio.get_running_loop().call_later(self.timeout_seconds, self._expire)

    def _expire(self) -> None:
        self._timer = None
        if self.state != SessionState.ACTIVE:
            return
        self._deactivate()
        logger.info(f"Session expired after {self.timeout_seconds:.0f}s of inactivity")
        self.store.dispatch(Logout(message=self.TIMEOUT_MESSAGE))
        self.on_redirect(self.LOGIN_PATH, self.TIMEOUT_MESSAGE)

    def _on_state_change(self, state: RootState) -> None:
        # Logged out elsewhere (another tab, API 401 handling)
        if self.state == SessionState.ACTIVE and state.auth.user is None:
            self._deactivate()
            self.on_redirect(self.LOGIN_PATH, state.auth.error)

    def _deactivate(self) -> None:
        self.state = SessionState.EXPIRED
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None
