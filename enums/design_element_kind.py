from enum import Enum


class DesignElementKind(str, Enum):
    TEXT = "text"
    IMAGE = "image"
