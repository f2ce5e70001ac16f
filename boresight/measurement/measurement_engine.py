# boresight/measurement/measurement_engine.py
"""
Движок измерений. Внешний интерфейс ядра для UI: загрузка изображения,
калибровка, клики, расчёт статистики и сброс.
"""
from typing import List, Optional, Callable

from boresight.calibration.calibration_point import PixelPoint, PointRole
from boresight.calibration.calibration_service import CalibrationService, CalibrationState
from boresight.measurement.angle_projector import AngleSample, project_points
from boresight.measurement.point_collector import PointCollector
from boresight.measurement.result_writer import OutputFormat, ResultWriter
from boresight.measurement.statistics_aggregator import AngleMode, StatisticsResult, compute_statistics
from boresight.utils.logger import DataLogger, LogCategory
from boresight.utils.exceptions import InsufficientDataError, InvalidPointError, NotCalibratedError


class MeasurementEngine:
    """
    Движок измерений. Все операции синхронны и выполняются до конца
    до обработки следующего события UI.
    """
    def __init__(self, logger: DataLogger, decimal_places: int = 4,
                 angle_mode: AngleMode = AngleMode.TWO_AXIS):
        self._logger = logger
        self._decimal_places = decimal_places
        self._angle_mode = angle_mode

        self._calibration = CalibrationService(logger)
        self._collector = PointCollector(self._calibration, logger)
        self._last_result: Optional[StatisticsResult] = None

        self._calibration.on_status_changed = self._on_status_changed

        # Callbacks
        self.on_status: Optional[Callable[[str], None]] = None
        self.on_result: Optional[Callable[[StatisticsResult], None]] = None

    @property
    def calibration_service(self) -> CalibrationService:
        return self._calibration

    @property
    def point_collector(self) -> PointCollector:
        return self._collector

    @property
    def state(self) -> CalibrationState:
        return self._calibration.state

    @property
    def last_status(self) -> str:
        return self._calibration.last_status

    @property
    def last_result(self) -> Optional[StatisticsResult]:
        return self._last_result

    # --- Входы от UI ---
    def load_image_known(self):
        """Изображение готово (пиксели остаются у UI)."""
        self._last_result = None
        self._calibration.image_loaded()

    def set_calibration(self, real_distance, range_):
        """
        Задаёт дистанцию и дальность и начинает калибровку.

        Raises:
            PreconditionError: нет изображения или значения неверны.
        """
        self._calibration.begin_calibration(real_distance, range_)
        self._last_result = None

    def click_at(self, x: float, y: float) -> PointRole:
        """
        Обрабатывает клик по изображению.

        Returns:
            PointRole.REFERENCE во время калибровки, PointRole.MARKED после неё.

        Raises:
            InvalidPointError: координаты не числа или не конечны.
            NotCalibratedError: калибровка не начата.
            DegenerateCalibrationError: вторая калибровочная точка совпала с первой.
        """
        try:
            point = PixelPoint(x, y)
        except (TypeError, ValueError) as e:
            self._logger.log_warn(LogCategory.MEASUREMENT, f"Клик отклонён: {e}")
            raise InvalidPointError(str(e)) from e
        state = self._calibration.state
        if state == CalibrationState.CALIBRATING:
            self._calibration.submit_reference_point(point)
            return PointRole.REFERENCE
        if state == CalibrationState.CALIBRATED:
            self._collector.submit_marked_point(point)
            return PointRole.MARKED
        self._logger.log_warn(LogCategory.MEASUREMENT, f"Клик {point} в состоянии {state.value} отклонён")
        raise NotCalibratedError("Калибровка не начата")

    def compute(self) -> StatisticsResult:
        """
        Рассчитывает статистику по всем отмеченным точкам.

        Raises:
            NotCalibratedError: калибровка не завершена.
            InsufficientDataError: нет отмеченных точек.
        """
        if not self._calibration.is_calibrated():
            self._logger.log_warn(LogCategory.MEASUREMENT, "Расчёт до завершения калибровки")
            raise NotCalibratedError("Калибровка не завершена")

        samples = self.get_angle_samples()
        if not samples:
            self._logger.log_warn(LogCategory.MEASUREMENT, "Расчёт без отмеченных точек")
            raise InsufficientDataError("Нет отмеченных точек")

        result = compute_statistics(samples, self._angle_mode)
        self._last_result = result
        self._logger.log_info(
            LogCategory.MEASUREMENT,
            f"Статистика по {result.sample_count} точкам: " + self.format_result(result).replace("\n", "; ")
        )
        if self.on_result:
            self.on_result(result)
        return result

    def reset(self):
        """Сбрасывает калибровку и все точки."""
        self._last_result = None
        self._calibration.reset()

    # --- Данные для отображения ---
    def get_reference_points(self) -> List[PixelPoint]:
        session = self._calibration.current_session
        return list(session.reference_points) if session else []

    def get_marked_points(self) -> List[PixelPoint]:
        return self._collector.get_marked_points()

    def get_angle_samples(self) -> List[AngleSample]:
        """Угловые выборки всех отмеченных точек текущей сессии."""
        session = self._calibration.current_session
        if session is None or not session.is_complete:
            return []
        return project_points(session, session.marked_points)

    def format_result(self, result: StatisticsResult) -> str:
        return result.format(self._decimal_places)

    def export_results(self, file_path: str, output_format: OutputFormat) -> str:
        """
        Сохраняет точки и статистику в файл.

        Raises:
            NotCalibratedError, InsufficientDataError, ResultWriterException
        """
        result = self.compute()
        session = self._calibration.current_session
        rows = list(zip(session.marked_points, project_points(session, session.marked_points)))
        writer = ResultWriter(file_path, output_format, self._decimal_places)
        writer.write(session, rows, result)
        self._logger.log_info(LogCategory.MEASUREMENT, f"Результаты сохранены в {file_path}")
        return file_path

    def _on_status_changed(self, status: str):
        if self.on_status:
            self.on_status(status)
