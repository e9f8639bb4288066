from enum import Enum


class ActivityEvent(str, Enum):
    """User interactions that keep an authenticated session alive."""
    MOUSEDOWN = "mousedown"
    MOUSEMOVE = "mousemove"
    KEYPRESS = "keypress"
    SCROLL = "scroll"
    TOUCHSTART = "touchstart"
    CLICK = "click"
