# boresight/measurement/statistics_aggregator.py
"""
Статистика по угловым выборкам: среднее и СКО по каждой оси.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

import numpy as np

from boresight.measurement.angle_projector import AngleSample
from boresight.utils.exceptions import InsufficientDataError
from boresight.utils.math_utils import radians_to_milliradians


class AngleMode(Enum):
    TWO_AXIS = "two_axis"
    TRAVERSE_ONLY = "traverse_only"


@dataclass(frozen=True)
class StatisticsResult:
    """
    Итоговая статистика, миллирадианы.

    СКО - генеральное (деление на N). В режиме TRAVERSE_ONLY
    поля вертикальной оси равны None.
    """
    mean_traverse: float
    std_dev_traverse: float
    mean_elevation: Optional[float]
    std_dev_elevation: Optional[float]
    sample_count: int

    def format(self, decimal_places: int = 4) -> str:
        """Текст для отображения с фиксированным числом знаков после запятой."""
        fmt = f".{decimal_places}f"
        lines = [
            f"Точек: {self.sample_count}",
            f"Горизонталь: среднее {self.mean_traverse:{fmt}} мрад, СКО {self.std_dev_traverse:{fmt}} мрад",
        ]
        if self.mean_elevation is not None:
            lines.append(
                f"Вертикаль: среднее {self.mean_elevation:{fmt}} мрад, СКО {self.std_dev_elevation:{fmt}} мрад"
            )
        return "\n".join(lines)


def _sequential_sum(arr: np.ndarray) -> float:
    """Сумма строго слева направо, как последовательное сложение float64."""
    return float(np.add.accumulate(arr)[-1])


def _axis_statistics(values: Sequence[float]) -> Tuple[float, float]:
    """Среднее и генеральное СКО в исходных единицах (float64)."""
    arr = np.asarray(values, dtype=np.float64)
    n = arr.size
    mean = _sequential_sum(arr) / n
    deviations = arr - mean
    std_dev = np.sqrt(_sequential_sum(deviations * deviations) / n)
    return mean, float(std_dev)


def compute_statistics(samples: Sequence[AngleSample],
                       angle_mode: AngleMode = AngleMode.TWO_AXIS) -> StatisticsResult:
    """
    Сводит угловые выборки (радианы) в статистику (миллирадианы).

    Raises:
        InsufficientDataError: выборок нет.
    """
    if not samples:
        raise InsufficientDataError("Нет угловых выборок для расчёта статистики")

    mean_t, std_t = _axis_statistics([s.traverse for s in samples])
    mean_e: Optional[float] = None
    std_e: Optional[float] = None
    if angle_mode == AngleMode.TWO_AXIS:
        mean_e, std_e = _axis_statistics([s.elevation for s in samples])
        mean_e = radians_to_milliradians(mean_e)
        std_e = radians_to_milliradians(std_e)

    return StatisticsResult(
        mean_traverse=radians_to_milliradians(mean_t),
        std_dev_traverse=radians_to_milliradians(std_t),
        mean_elevation=mean_e,
        std_dev_elevation=std_e,
        sample_count=len(samples),
    )
