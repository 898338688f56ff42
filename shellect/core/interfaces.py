"""
Модуль интерфейсов и абстракций (Ports).

Определяет контракт терминала, с которым работает цикл меню.
Это позволяет циклу не зависеть от prompt_toolkit и rich напрямую
и тестироваться с поддельным терминалом.
"""

from abc import ABC, abstractmethod

from rich.console import Console

from shellect.shared.primitives import TerminalEvent


class BaseTerminal(ABC):
    """
    Абстракция терминала как ограниченного во времени ресурса.

    Режим raw и альтернативный экран - глобальное состояние ОС,
    поэтому захватываются одним вызовом `enter()` и освобождаются
    одним вызовом `restore()` на любом пути выхода.
    """

    @property
    @abstractmethod
    def console(self) -> Console:
        """Консоль rich, в которую рисуется меню."""
        raise NotImplementedError

    @abstractmethod
    def enter(self) -> None:
        """
        Переводит терминал в интерактивный режим.

        Raises:
            TerminalError: Если режим не удалось включить.
        """
        raise NotImplementedError

    @abstractmethod
    def restore(self, raise_errors: bool = True) -> None:
        """
        Возвращает терминал в исходное состояние.

        Идемпотентен: повторный вызов ничего не делает.

        Args:
            raise_errors (bool): Пробрасывать ли `TerminalError` при сбое.
                False используется в блоках finally, чтобы не подменять исходную ошибку.
        """
        raise NotImplementedError

    @abstractmethod
    def read_event(self) -> TerminalEvent:
        """Блокируется до следующего события терминала (без таймаута)."""
        raise NotImplementedError

    def __enter__(self) -> "BaseTerminal":
        self.enter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        # Если уже летит исключение, ошибка восстановления не должна его подменить
        self.restore(raise_errors=exc_type is None)
