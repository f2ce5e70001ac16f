# boresight/config/config_manager.py
"""
Управление загрузкой, сохранением и валидацией конфигурации.
"""
import json
import os

from pydantic import ValidationError

from boresight.config.config_model import AppConfig
from boresight.utils.exceptions import ConfigManagerException


class ConfigManager:
    """
    Менеджер конфигурации приложения.
    """
    @staticmethod
    def load(path: str = "config.json") -> AppConfig:
        """
        Загружает конфигурацию из файла JSON.
        Если файл не найден, создает конфигурацию по умолчанию и сохраняет её.
        Если файл поврежден, используется конфигурация по умолчанию, а файл перезаписывается.
        """
        if not os.path.exists(path):
            print(f"[INFO] Файл конфигурации {path} не найден. Создаю конфигурацию по умолчанию.")
            default_config = AppConfig.default()
            default_config.config_file_path = path
            ConfigManager.save(path, default_config)
            return default_config

        try:
            with open(path, 'r', encoding='utf-8') as f:
                content = f.read().strip()
            if not content:
                raise ValueError("Empty config file")
            data = json.loads(content)
            if not isinstance(data, dict):
                raise ValueError("Config root must be a JSON object")
            config = AppConfig(**data)
            config.config_file_path = path
            print(f"[INFO] Конфигурация загружена из {path}")
            return config
        except (json.JSONDecodeError, ValidationError, ValueError) as e:
            print(f"[ERROR] Ошибка загрузки конфигурации из {path}: {e}. Использую конфигурацию по умолчанию.")
            default_config = AppConfig.default()
            default_config.config_file_path = path
            ConfigManager.save(path, default_config)
            return default_config
        except OSError as e:
            raise ConfigManagerException(f"Не удалось прочитать конфигурацию {path}: {e}") from e

    @staticmethod
    def save(path: str, config: AppConfig):
        """
        Сохраняет конфигурацию в файл JSON.

        Raises:
            ConfigManagerException: файл не удалось записать.
        """
        try:
            dirname = os.path.dirname(path)
            if dirname:
                os.makedirs(dirname, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                json.dump(config.model_dump(mode="json"), f, indent=4, ensure_ascii=False)
            print(f"[INFO] Конфигурация сохранена в {path}")
        except OSError as e:
            raise ConfigManagerException(f"Ошибка сохранения конфигурации в {path}: {e}") from e
