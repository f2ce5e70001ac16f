# boresight/calibration/calibration_point.py
"""
Точка на изображении в пиксельных координатах.
"""
import math
from enum import Enum
from dataclasses import dataclass


class PointRole(Enum):
    """Как ядро использовало клик по изображению (определяет цвет маркера)."""
    REFERENCE = "reference"
    MARKED = "marked"


@dataclass(frozen=True)
class PixelPoint:
    """
    Точка изображения в пикселях. Неизменяема после создания.

    Attributes:
        x: Координата X (вправо), пиксели.
        y: Координата Y (вниз), пиксели.
    """
    x: float
    y: float

    def __post_init__(self):
        x, y = float(self.x), float(self.y)
        if not (math.isfinite(x) and math.isfinite(y)):
            raise ValueError(f"Координаты точки должны быть конечными числами: ({self.x}, {self.y})")
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)

    def __str__(self) -> str:
        return f"({self.x:.1f}, {self.y:.1f})"
