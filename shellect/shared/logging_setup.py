"""
Настройка логирования.

Отвечает за конфигурацию вывода логов.
Пока открыт альтернативный экран, любая запись в терминал рисуется поверх меню,
поэтому по умолчанию выводятся только предупреждения и ошибки (в stderr),
а подробный лог можно направить в файл через `SHELLECT_LOG_FILE`.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'


def setup_global_logging(log_level: Union[int, str] = logging.WARNING,
                         log_file: Optional[Union[str, Path]] = None):
    """
    Настройка корневого логгера приложения.

    Может вызываться повторно: старые хендлеры удаляются.

    Args:
        log_level (int | str): Уровень логирования (DEBUG, INFO, WARNING...).
        log_file (str | Path | None): Путь к файлу лога. Если не задан, пишем в stderr.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    # Удаляем старые хендлеры, чтобы избежать дублирования логов
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if log_file:
        # Гарантируем существование папки
        log_dir = os.path.dirname(os.fspath(log_file))
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    else:
        handler = logging.StreamHandler(sys.stderr)

    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)

    # prompt_toolkit пишет отладку парсера ввода, она не нужна даже в DEBUG
    logging.getLogger('prompt_toolkit').setLevel(logging.WARNING)


def flush_logging():
    """Сбрасывает буферы всех хендлеров корневого логгера (перед exec)."""
    for handler in logging.getLogger().handlers:
        handler.flush()
