from enum import Enum


class SessionState(str, Enum):
    ACTIVE = "active"
    EXPIRED = "expired"
