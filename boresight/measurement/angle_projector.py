# boresight/measurement/angle_projector.py
"""
Преобразование отмеченной точки в угловое смещение относительно
середины калибровочных точек.
"""
import math
from dataclasses import dataclass
from typing import List, Sequence

from boresight.calibration.calibration_data import CalibrationSession
from boresight.calibration.calibration_point import PixelPoint
from boresight.utils.math_utils import radians_to_milliradians


@dataclass(frozen=True)
class AngleSample:
    """Угловое смещение точки, радианы. Знак совпадает с направлением смещения в пикселях."""
    traverse: float
    elevation: float

    @property
    def traverse_mrad(self) -> float:
        return radians_to_milliradians(self.traverse)

    @property
    def elevation_mrad(self) -> float:
        return radians_to_milliradians(self.elevation)


def project_point(session: CalibrationSession, point: PixelPoint) -> AngleSample:
    """
    Проецирует точку изображения в углы при дальности сессии.

    Смещение от середины калибровочных точек переводится в линейные
    единицы масштабом сессии, угол берётся через atan2 (знак сохраняется).
    Коррекции для точек далеко от оси нет.

    Raises:
        NotCalibratedError: калибровка сессии не завершена.
    """
    mid_x, mid_y = session.reference_midpoint()
    dx = (point.x - mid_x) * session.scale
    dy = (point.y - mid_y) * session.scale
    return AngleSample(
        traverse=math.atan2(dx, session.range),
        elevation=math.atan2(dy, session.range),
    )


def project_points(session: CalibrationSession, points: Sequence[PixelPoint]) -> List[AngleSample]:
    return [project_point(session, p) for p in points]
