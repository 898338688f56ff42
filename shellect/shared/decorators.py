"""
Модуль-декоратор для безопасного запуска точек входа.
"""

import sys
import logging
import functools
from typing import Callable, Any

from rich.console import Console
from rich.markup import escape

from shellect.shared.errors import ShellectError
from shellect.shared.logging_setup import setup_global_logging


def safe_entry(func: Callable) -> Callable:
    """
    Декоратор для main-функций лаунчера.

    Автоматически выполняет:
    1. Инициализирует глобальное логирование (stderr, WARNING).
       Сама функция может перенастроить его, когда прочитает настройки.
    2. Глобальный перехват ошибок (Try/Except):
       - `ShellectError` - печать сообщения в stderr, код выхода 1;
       - `KeyboardInterrupt` - тихий выход с кодом 0;
       - любая другая ошибка - лог с трассировкой, код выхода 1.

    К моменту, когда ошибка доходит сюда, терминал уже восстановлен
    (это делает `run_launch_flow` в блоке finally).

    Args:
        func (Callable): Целевая функция `main`.

    Returns:
        Callable: Обернутая функция, готовая к запуску в блоке `if __name__ == "__main__":`.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs) -> Any:
        # Логирование
        setup_global_logging()
        logger = logging.getLogger("shellect")

        # Запуск
        try:
            return func(*args, **kwargs)

        except KeyboardInterrupt:
            sys.exit(0)

        except ShellectError as e:
            logger.debug("Ошибка лаунчера", exc_info=True)
            Console(stderr=True).print(f"[bold red]shellect:[/bold red] {escape(str(e))}", markup=True, highlight=False)
            sys.exit(1)

        except Exception as e:
            logger.critical(f"🔥 Критическая ошибка: {e}", exc_info=True)
            sys.exit(1)

    return wrapper
