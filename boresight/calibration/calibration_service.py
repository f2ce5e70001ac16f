# boresight/calibration/calibration_service.py
"""
Сервис для управления процессом калибровки пиксель -> угол.
"""
from enum import Enum
from typing import Optional, Callable

from boresight.calibration.calibration_data import CalibrationInput, CalibrationSession
from boresight.calibration.calibration_point import PixelPoint
from boresight.utils.logger import DataLogger, LogCategory
from boresight.utils.exceptions import (
    CalibrationStateError, DegenerateCalibrationError, InvalidCalibrationInputError, NoImageError
)
from boresight.utils.math_utils import pixel_distance


class CalibrationState(Enum):
    """Состояния процесса калибровки."""
    IDLE = "idle"                                              # нет изображения
    AWAITING_CALIBRATION_INPUT = "awaiting_calibration_input"  # изображение есть, дистанция не задана
    CALIBRATING = "calibrating"                                # получено 0 или 1 калибровочных точек
    CALIBRATED = "calibrated"                                  # две точки, масштаб рассчитан


# Сообщения статуса для UI
STATUS_IDLE = "Загрузите изображение."
STATUS_IMAGE_LOADED = "Изображение загружено. Введите дистанцию и дальность, затем нажмите «Задать дистанцию»."
STATUS_CALIBRATION_STARTED = "Калибровка: отметьте первую калибровочную точку."
STATUS_FIRST_POINT = "Калибровка: отметьте вторую калибровочную точку."
STATUS_CALIBRATED = "Калибровка завершена. Отмечайте точки и нажмите «Рассчитать»."
STATUS_RESET = "Сброс выполнен. Введите дистанцию и дальность, затем нажмите «Задать дистанцию»."


class CalibrationService:
    """
    Машина состояний калибровки. Единственный владелец текущей
    сессии калибровки: все изменения проходят через её методы.
    """
    def __init__(self, logger: DataLogger):
        self._logger = logger

        self._state = CalibrationState.IDLE
        self._session: Optional[CalibrationSession] = None
        self._generation = 0
        self._last_status = STATUS_IDLE

        # Callbacks
        self.on_status_changed: Optional[Callable[[str], None]] = None
        self.on_calibration_started: Optional[Callable[[CalibrationSession], None]] = None
        self.on_reference_point_added: Optional[Callable[[PixelPoint], None]] = None
        self.on_calibration_finished: Optional[Callable[[CalibrationSession], None]] = None
        self.on_error: Optional[Callable[[str], None]] = None

    @property
    def state(self) -> CalibrationState:
        return self._state

    @property
    def current_session(self) -> Optional[CalibrationSession]:
        """Текущая сессия калибровки или None."""
        return self._session

    @property
    def last_status(self) -> str:
        return self._last_status

    def has_image(self) -> bool:
        """Изображение известно во всех состояниях, кроме IDLE."""
        return self._state != CalibrationState.IDLE

    def is_calibrated(self) -> bool:
        return self._state == CalibrationState.CALIBRATED

    def image_loaded(self):
        """
        Уведомление о загруженном изображении. Старая сессия отбрасывается:
        её пиксельные координаты к новому изображению не относятся.
        """
        self._session = None
        self._transition(CalibrationState.AWAITING_CALIBRATION_INPUT, STATUS_IMAGE_LOADED)

    def begin_calibration(self, real_distance, range_) -> CalibrationSession:
        """
        Начинает новую калибровку с заданными дистанцией и дальностью.

        Raises:
            NoImageError: изображение не загружено.
            InvalidCalibrationInputError: значения не положительные или не числа.
        """
        if not self.has_image():
            self._report_error("Попытка калибровки без изображения")
            raise NoImageError("Изображение не загружено")

        try:
            calibration_input = CalibrationInput.from_values(real_distance, range_)
        except InvalidCalibrationInputError as e:
            self._report_error(str(e))
            raise

        self._generation += 1
        self._session = CalibrationSession(calibration_input=calibration_input,
                                           generation=self._generation)
        self._logger.log_info(
            LogCategory.CALIBRATION,
            f"Начало калибровки #{self._generation}: дистанция={calibration_input.real_distance}, "
            f"дальность={calibration_input.range}"
        )
        self._transition(CalibrationState.CALIBRATING, STATUS_CALIBRATION_STARTED)
        if self.on_calibration_started:
            self.on_calibration_started(self._session)
        return self._session

    def submit_reference_point(self, point: PixelPoint) -> CalibrationSession:
        """
        Добавляет калибровочную точку. Вторая точка завершает калибровку.

        Raises:
            CalibrationStateError: калибровка не идёт.
            DegenerateCalibrationError: вторая точка совпадает с первой.
        """
        if self._state != CalibrationState.CALIBRATING or self._session is None:
            self._report_error(f"Калибровочная точка в состоянии {self._state.value}")
            raise CalibrationStateError("Калибровка не начата")

        session = self._session
        if not session.reference_points:
            session.reference_points.append(point)
            self._logger.log_info(LogCategory.CALIBRATION, f"Первая калибровочная точка: {point}")
            if self.on_reference_point_added:
                self.on_reference_point_added(point)
            self._emit_status(STATUS_FIRST_POINT)
            return session

        first = session.reference_points[0]
        distance_px = pixel_distance(first.x, first.y, point.x, point.y)
        if distance_px == 0:
            self._report_error(f"Калибровочные точки совпадают: {first} и {point}")
            raise DegenerateCalibrationError(f"Нулевое расстояние между точками {first} и {point}")

        session.reference_points.append(point)
        session.scale = session.real_distance / distance_px
        self._logger.log_info(
            LogCategory.CALIBRATION,
            f"Вторая калибровочная точка: {point}. Расстояние {distance_px:.3f} px, "
            f"масштаб {session.scale:.6g} ед./px"
        )
        if self.on_reference_point_added:
            self.on_reference_point_added(point)
        self._transition(CalibrationState.CALIBRATED, STATUS_CALIBRATED)
        if self.on_calibration_finished:
            self.on_calibration_finished(session)
        return session

    def reset(self):
        """Сбрасывает сессию. Повторный вызов ничего не меняет."""
        self._session = None
        if self.has_image():
            self._transition(CalibrationState.AWAITING_CALIBRATION_INPUT, STATUS_RESET)
        else:
            self._transition(CalibrationState.IDLE, STATUS_IDLE)

    # --- Вспомогательные методы ---
    def _transition(self, new_state: CalibrationState, status: str):
        if new_state != self._state:
            self._logger.log_debug(
                LogCategory.CALIBRATION, f"Состояние: {self._state.value} -> {new_state.value}"
            )
        self._state = new_state
        self._emit_status(status)

    def _emit_status(self, status: str):
        self._last_status = status
        self._logger.log_info(LogCategory.CALIBRATION, status)
        if self.on_status_changed:
            self.on_status_changed(status)

    def _report_error(self, message: str):
        self._logger.log_warn(LogCategory.CALIBRATION, message)
        if self.on_error:
            self.on_error(message)
