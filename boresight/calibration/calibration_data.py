# boresight/calibration/calibration_data.py
"""
Данные калибровки: ввод оператора и сессия калибровки.
"""
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from boresight.calibration.calibration_point import PixelPoint
from boresight.utils.exceptions import InvalidCalibrationInputError, NotCalibratedError
from boresight.utils.math_utils import midpoint


class CalibrationInput(BaseModel):
    """
    Введённые оператором реальная дистанция между калибровочными точками
    и дальность до цели. Обе величины в одной линейной единице.
    """
    model_config = ConfigDict(frozen=True)

    real_distance: float = Field(..., gt=0, allow_inf_nan=False,
                                 description="Реальное расстояние между калибровочными точками")
    range: float = Field(..., gt=0, allow_inf_nan=False,
                         description="Дальность до плоскости изображения")

    @field_validator('real_distance', 'range', mode='before')
    @classmethod
    def _reject_non_numeric(cls, v):
        # bool - подкласс int, pydantic принял бы True как 1.0
        if v is None or isinstance(v, bool):
            raise ValueError("значение должно быть числом")
        if isinstance(v, str):
            # Текстовое поле может содержать десятичную запятую
            v = v.strip().replace(',', '.')
        return v

    @classmethod
    def from_values(cls, real_distance, range_) -> 'CalibrationInput':
        """
        Создаёт ввод из сырых значений (числа или строки из текстовых полей).

        Raises:
            InvalidCalibrationInputError: значение отсутствует, не число или не положительно.
        """
        try:
            return cls(real_distance=real_distance, range=range_)
        except ValidationError as e:
            details = "; ".join(
                f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
            )
            raise InvalidCalibrationInputError(f"Неверные данные калибровки: {details}") from e


@dataclass
class CalibrationSession:
    """
    Одна сессия калибровки: создаётся действием «Задать дистанцию»
    и заменяется новой при повторной калибровке или сбросе.
    """
    calibration_input: CalibrationInput
    generation: int
    reference_points: List[PixelPoint] = field(default_factory=list)
    marked_points: List[PixelPoint] = field(default_factory=list)
    # Метров (единиц дистанции) на пиксель; None, пока нет двух точек
    scale: Optional[float] = None

    @property
    def range(self) -> float:
        return self.calibration_input.range

    @property
    def real_distance(self) -> float:
        return self.calibration_input.real_distance

    @property
    def is_complete(self) -> bool:
        """Обе калибровочные точки получены и масштаб рассчитан."""
        return self.scale is not None and len(self.reference_points) == 2

    def reference_midpoint(self) -> Tuple[float, float]:
        """Середина между калибровочными точками - начало отсчёта углов."""
        if not self.is_complete:
            raise NotCalibratedError("Калибровка сессии не завершена")
        p1, p2 = self.reference_points
        return midpoint(p1.x, p1.y, p2.x, p2.y)

    def add_marked_point(self, point: PixelPoint):
        self.marked_points.append(point)

    def get_marked_point_count(self) -> int:
        return len(self.marked_points)
