# boresight/utils/exceptions.py
"""
Пользовательские исключения для проекта.

У каждого исключения есть атрибут ``advisory`` - текст подсказки,
который UI показывает оператору.
"""


class BoreSightException(Exception):
    """Базовый класс для всех исключений приложения."""
    advisory = "Операция не выполнена."


# --- Исключения для калибровки ---
class CalibrationException(BoreSightException):
    """Базовый класс для исключений калибровки."""
    advisory = "Ошибка калибровки."


class PreconditionError(CalibrationException):
    """Калибровка начата без изображения или с неверными входными данными."""
    advisory = "Калибровку нельзя начать: проверьте изображение и введённые значения."


class NoImageError(PreconditionError):
    """Калибровка начата до загрузки изображения."""
    advisory = "Сначала загрузите изображение."


class InvalidCalibrationInputError(PreconditionError):
    """Дистанция или дальность не заданы, не числа или не положительны."""
    advisory = "Введите положительные числовые значения дистанции и дальности."


class DegenerateCalibrationError(CalibrationException):
    """Две калибровочные точки совпадают (нулевое расстояние в пикселях)."""
    advisory = "Калибровочные точки совпадают. Выберите вторую точку в другом месте."


class CalibrationStateError(CalibrationException):
    """Операция недопустима в текущем состоянии калибровки."""
    advisory = "Сейчас калибровочные точки не принимаются. Нажмите «Задать дистанцию»."


# --- Исключения для измерений ---
class MeasurementException(BoreSightException):
    """Базовый класс для исключений измерений."""
    advisory = "Ошибка измерения."


class NotCalibratedError(MeasurementException):
    """Отметка точек или расчёт до завершения калибровки."""
    advisory = "Сначала завершите калибровку: задайте дистанцию и отметьте две точки."


class InsufficientDataError(MeasurementException):
    """Расчёт статистики без отмеченных точек."""
    advisory = "Нет отмеченных точек для расчёта."


class InvalidPointError(MeasurementException):
    """Координаты клика не числа или не конечны."""
    advisory = "Клик вне изображения или с неверными координатами. Повторите отметку."


class ResultWriterException(MeasurementException):
    """Исключение для ошибок записи результатов."""
    advisory = "Не удалось сохранить результаты."


# --- Исключения для конфигурации ---
class ConfigException(BoreSightException):
    """Базовый класс для исключений конфигурации."""
    advisory = "Ошибка конфигурации."


class ConfigManagerException(ConfigException):
    """Исключение для ошибок менеджера конфигурации."""
    pass
