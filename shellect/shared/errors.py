"""
Иерархия исключений приложения.

Все ошибки пробрасываются наверх, в `safe_entry`, который печатает
сообщение в stderr и завершает процесс с кодом 1.
"""


class ShellectError(Exception):
    """Базовая ошибка лаунчера. Сообщение показывается пользователю как есть."""
    pass


class ConfigError(ShellectError):
    """
    Ошибка конфигурации: нет HOME, файл не читается или не проходит валидацию.

    Возникает до входа в режим терминала, поэтому очистка терминала не нужна.
    """
    pass


class TerminalError(ShellectError):
    """Сбой при работе с терминалом (raw mode, альтернативный экран, ввод/вывод)."""
    pass


class ExecError(ShellectError):
    """Не удалось запустить выбранную оболочку (нет файла, нет прав и т.п.)."""
    pass
