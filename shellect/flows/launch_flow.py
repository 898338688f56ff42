"""
Сценарий запуска лаунчера.

Порядок шагов строго последовательный:
    1. Настройки окружения (HOME, логирование).
    2. Чтение ~/.shellect.toml.
    3. Меню в терминале.
    4. exec выбранной оболочки (или выход при отмене).

Эта функция - единственное место верхнего уровня, которое гарантирует
восстановление терминала до того, как ошибка будет показана пользователю.
"""

import logging
from typing import Optional

from shellect.adapters.cli.menu import run_menu
from shellect.adapters.terminal.session import TerminalSession
from shellect.core.interfaces import BaseTerminal
from shellect.infrastructure.process import replace_process
from shellect.services.config_loader import load_config
from shellect.shared.config import load_settings
from shellect.shared.logging_setup import setup_global_logging

logger = logging.getLogger(__name__)


def run_launch_flow(terminal: Optional[BaseTerminal] = None) -> None:
    """
    Выполняет полный цикл: настройки -> конфиг -> меню -> exec.

    Args:
        terminal (BaseTerminal | None): Терминал для меню. По умолчанию
            создается `TerminalSession` на stdin/stdout.

    Raises:
        ConfigError: Проблемы с окружением или файлом конфигурации.
        TerminalError: Сбой работы с терминалом.
        ExecError: Выбранную оболочку не удалось запустить.
    """
    settings = load_settings()
    setup_global_logging(settings.LOG_LEVEL, settings.LOG_FILE)

    config = load_config(settings.CONFIG_PATH)

    terminal = terminal or TerminalSession()
    try:
        result = run_menu(config, terminal)
    finally:
        # Повторный вызов безопасен: меню обычно уже восстановило терминал
        terminal.restore(raise_errors=False)

    if result.cancelled:
        return

    replace_process(config.shells[result.index])
