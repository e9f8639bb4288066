from enum import Enum


class PrintLocation(str, Enum):
    FRONT = "front"
    BACK = "back"
    LEFT_SLEEVE = "left-sleeve"
    RIGHT_SLEEVE = "right-sleeve"
