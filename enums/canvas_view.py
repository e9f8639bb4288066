from enum import Enum


class CanvasView(str, Enum):
    FLAT = "2d"
    MODEL = "3d"

    def toggled(self) -> 'CanvasView':
        return CanvasView.MODEL if self == CanvasView.FLAT else CanvasView.FLAT
