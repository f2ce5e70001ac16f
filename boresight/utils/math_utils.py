# boresight/utils/math_utils.py
"""
Вспомогательные геометрические функции для пиксельных координат.
"""
import math
from typing import Tuple

MILLIRADIANS_PER_RADIAN = 1000.0


def pixel_distance(x1: float, y1: float, x2: float, y2: float) -> float:
    """
    Евклидово расстояние между двумя точками изображения в пикселях.

    Args:
        x1, y1: Координаты первой точки.
        x2, y2: Координаты второй точки.

    Returns:
        Расстояние в пикселях. Равно нулю только для совпадающих точек.
    """
    return math.hypot(x2 - x1, y2 - y1)


def midpoint(x1: float, y1: float, x2: float, y2: float) -> Tuple[float, float]:
    """Середина отрезка между двумя точками изображения."""
    return (x1 + x2) / 2, (y1 + y2) / 2


def radians_to_milliradians(value: float) -> float:
    """Преобразует радианы в миллирадианы (умножение на 1000, без округления)."""
    return value * MILLIRADIANS_PER_RADIAN
