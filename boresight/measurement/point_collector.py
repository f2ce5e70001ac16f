# boresight/measurement/point_collector.py
"""
Накопление отмеченных точек после завершения калибровки.
"""
from typing import List, Optional, Callable

from boresight.calibration.calibration_point import PixelPoint
from boresight.calibration.calibration_service import CalibrationService
from boresight.utils.logger import DataLogger, LogCategory
from boresight.utils.exceptions import NotCalibratedError


class PointCollector:
    """
    Добавляет отмеченные точки в текущую сессию калибровки.
    Собственного хранилища не имеет: точки живут в сессии.
    """
    def __init__(self, calibration_service: CalibrationService, logger: DataLogger):
        self._calibration_service = calibration_service
        self._logger = logger

        # Callbacks
        self.on_point_added: Optional[Callable[[PixelPoint, int], None]] = None  # (точка, всего точек)

    def submit_marked_point(self, point: PixelPoint) -> int:
        """
        Добавляет отмеченную точку.

        Returns:
            Количество отмеченных точек после добавления.

        Raises:
            NotCalibratedError: калибровка не завершена.
        """
        session = self._calibration_service.current_session
        if not self._calibration_service.is_calibrated() or session is None:
            self._logger.log_warn(LogCategory.MEASUREMENT, f"Точка {point} отклонена: калибровка не завершена")
            raise NotCalibratedError("Калибровка не завершена")

        session.add_marked_point(point)
        count = session.get_marked_point_count()
        self._logger.log_info(LogCategory.MEASUREMENT, f"Точка {count} отмечена: {point}")
        if self.on_point_added:
            self.on_point_added(point, count)
        return count

    def get_marked_points(self) -> List[PixelPoint]:
        """Копия списка отмеченных точек текущей сессии (в порядке добавления)."""
        session = self._calibration_service.current_session
        if session is None:
            return []
        return list(session.marked_points)

    def get_point_count(self) -> int:
        session = self._calibration_service.current_session
        return session.get_marked_point_count() if session else 0
