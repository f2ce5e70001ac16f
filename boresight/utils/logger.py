# boresight/utils/logger.py
"""
Модуль для ведения логов приложения.
"""
import logging
from enum import Enum
from typing import Optional, Callable
from pathlib import Path

LINE_FORMAT = '%(asctime)s [%(levelname)-8s] [%(category)s] %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class LogCategory(Enum):
    """Категории логов для классификации сообщений."""
    GENERAL = "GENERAL"
    CALIBRATION = "CALIBRATION"
    MEASUREMENT = "MEASUREMENT"
    CONFIG = "CONFIG"
    UI = "UI"


class _CallbackHandler(logging.Handler):
    """Передаёт отформатированную строку в DataLogger.on_line_logged."""

    def __init__(self, owner: "DataLogger"):
        super().__init__(logging.DEBUG)
        self._owner = owner

    def emit(self, record: logging.LogRecord):
        callback = self._owner.on_line_logged
        if callback is None:
            return
        try:
            callback(self.format(record))
        except Exception as e:
            # Ошибка в UI не должна ломать логгер
            print(f"[LOGGER ERROR] Ошибка в on_line_logged callback: {e}")


class DataLogger:
    """
    Логгер приложения с категориями. Обёртка над стандартным logging:
    консоль, необязательный файл и строка для окна UI.

    Поддерживает ``with``: обработчики закрываются на выходе.
    """

    def __init__(self, log_file_path: Optional[str] = None, console_level: int = logging.INFO):
        """
        Args:
            log_file_path (str, optional): Файл лога (DEBUG и выше). Директории создаются.
                Без пути лог пишется только в консоль.
            console_level (int): Уровень консольного обработчика.
        """
        self.logger = logging.getLogger(f"BoreSight.{id(self)}")
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False
        self.logger.handlers.clear()

        self.log_file_path = log_file_path
        self.on_line_logged: Optional[Callable[[str], None]] = None

        formatter = logging.Formatter(LINE_FORMAT, datefmt=DATE_FORMAT)
        handlers = [logging.StreamHandler(), _CallbackHandler(self)]
        handlers[0].setLevel(console_level)
        if log_file_path:
            Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)
            handlers.append(logging.FileHandler(log_file_path, encoding='utf-8'))
        for handler in handlers:
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

        self.log_debug(LogCategory.GENERAL, "DataLogger инициализирован.")

    def __enter__(self) -> "DataLogger":
        return self

    def __exit__(self, exc_type, exc_value, tb):
        self.close()

    def _log(self, level: int, category: LogCategory, message: str, exc_info: Optional[Exception] = None):
        self.logger.log(level, message, exc_info=exc_info, extra={"category": category.value})

    def log_debug(self, category: LogCategory, message: str):
        self._log(logging.DEBUG, category, message)

    def log_info(self, category: LogCategory, message: str):
        self._log(logging.INFO, category, message)

    def log_warn(self, category: LogCategory, message: str):
        self._log(logging.WARNING, category, message)

    def log_error(self, category: LogCategory, message: str, exc_info: Optional[Exception] = None):
        """Сообщение уровня ERROR; ``exc_info`` добавляет трассировку."""
        self._log(logging.ERROR, category, message, exc_info)

    def close(self):
        """Закрывает обработчики и освобождает файл лога. Повторный вызов безопасен."""
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)
