# boresight/main.py
"""
Точка входа в приложение BoreSight.
Инициализирует логгер и конфигурацию, создаёт движок измерений и запускает главное окно UI.
"""
import sys
import os
import argparse
import logging
import traceback
from pathlib import Path
from typing import Optional

from boresight.config.config_manager import ConfigManager
from boresight.measurement.measurement_engine import MeasurementEngine
from boresight.measurement.statistics_aggregator import AngleMode
from boresight.utils.logger import DataLogger, LogCategory

APP_NAME = "BoreSight"


def create_app_dirs(app_name: str = APP_NAME) -> Path:
    """
    Создает директорию данных приложения в пользовательском пространстве.
    Возвращает путь к ней.
    """
    try:
        if os.name == 'nt':  # Windows
            base_dir = Path(os.environ.get('APPDATA', Path.home() / 'AppData' / 'Roaming'))
        else:  # Linux/macOS
            base_dir = Path.home() / '.local' / 'share'

        app_dir = base_dir / app_name
        app_dir.mkdir(parents=True, exist_ok=True)
        return app_dir
    except OSError as e:
        print(f"[ERROR] Не удалось создать директории приложения по умолчанию: {e}. Используется текущая директория.")
        fallback_dir = Path.cwd() / f".{app_name.lower()}_data"
        fallback_dir.mkdir(exist_ok=True)
        return fallback_dir


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="boresight",
        description="BoreSight - угловые отклонения точек на фотографии (мрад)",
        epilog="Примеры:\n"
               "  boresight                          # Запуск с config.json из директории данных\n"
               "  boresight --config my_conf.json    # Использовать другой JSON-конфиг\n"
               "  boresight --image target.jpg       # Сразу открыть изображение\n"
               "  boresight --debug                  # Включить подробное логирование",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument('--debug', action='store_true', help='Включить подробное логирование (DEBUG)')
    parser.add_argument('--config', type=str, default=None,
                        help='Путь к файлу конфигурации JSON (по умолчанию: config.json в директории данных)')
    parser.add_argument('--image', type=str, default=None, help='Изображение, открываемое при запуске')
    return parser


def main(argv: Optional[list] = None):
    """Основная точка входа в приложение."""
    args = build_parser().parse_args(argv)

    # --- 1. Инициализация путей и логгера ---
    app_data_dir = create_app_dirs()
    log_file_path = app_data_dir / "app.log"
    config_path = args.config or str(app_data_dir / "config.json")

    try:
        logger = DataLogger(str(log_file_path), console_level=logging.DEBUG if args.debug else logging.INFO)
    except OSError as e:
        print(f"[CRITICAL] Не удалось инициализировать логгер: {e}")
        sys.exit(1)

    logger.log_info(LogCategory.GENERAL,
                    f"=== Запуск приложения {APP_NAME} (Уровень лога: {'DEBUG' if args.debug else 'INFO'}) ===")
    logger.log_info(LogCategory.GENERAL, f"Директория данных приложения: {app_data_dir}")

    # --- 2. Загрузка конфигурации ---
    try:
        logger.log_info(LogCategory.CONFIG, f"Загрузка конфигурации из '{config_path}'")
        config = ConfigManager.load(config_path)
    except Exception as e:
        logger.log_error(LogCategory.CONFIG, f"Критическая ошибка загрузки конфигурации: {e}")
        logger.log_error(LogCategory.CONFIG, traceback.format_exc())
        sys.exit(1)

    # --- 3. Движок измерений ---
    engine = MeasurementEngine(
        logger,
        decimal_places=config.decimal_places,
        angle_mode=AngleMode(config.angle_mode),
    )
    logger.log_debug(LogCategory.GENERAL,
                     f"MeasurementEngine создан (знаков: {config.decimal_places}, режим: {config.angle_mode})")

    # --- 4. Запуск графического интерфейса ---
    exit_code = 0
    try:
        from PyQt5.QtWidgets import QApplication
        from boresight.ui.main_window import MainWindow

        app = QApplication(sys.argv[:1])
        app.setApplicationName(APP_NAME)
        app.setApplicationVersion("1.0.0")

        main_window = MainWindow(engine=engine, config=config, logger=logger)
        main_window.show()
        if args.image:
            main_window.load_image(args.image)

        logger.log_info(LogCategory.GENERAL, "Главное окно отображено. Запуск цикла событий Qt.")
        exit_code = app.exec_()
        logger.log_info(LogCategory.GENERAL, f"Цикл событий Qt завершен с кодом {exit_code}")

    except ImportError as e:
        logger.log_error(LogCategory.GENERAL, f"Не удалось импортировать PyQt5 или UI модули: {e}")
        print(f"[ERROR] Зависимость не найдена: {e}")
        exit_code = 1
    except Exception as e:
        logger.log_error(LogCategory.GENERAL, f"Критическая ошибка при запуске GUI: {e}")
        logger.log_error(LogCategory.GENERAL, traceback.format_exc())
        exit_code = 1
    finally:
        logger.log_info(LogCategory.GENERAL, "=== Приложение завершено ===")
        logger.close()

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
