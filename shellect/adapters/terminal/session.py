"""
Терминальная сессия лаунчера (scoped guard).

Захватывает три части глобального состояния терминала (в этом порядке):
    1. Raw mode ввода (через prompt_toolkit `Input.raw_mode`).
    2. Альтернативный экран (через rich `Console.set_alt_screen`).
    3. Видимость курсора (`Console.show_cursor`).

`restore()` отпускает их в обратном порядке (курсор, экран, raw mode), пытается выполнить каждый шаг
даже если предыдущий упал, и безопасно вызывается повторно.

Ожидание ввода: на POSIX через selectors по дескриптору stdin,
в Windows через ожидание консольного хэндла.
"""

import logging
import selectors
import sys
from collections import deque
from contextlib import ExitStack
from typing import Any, Callable, Deque, List, Optional

from prompt_toolkit.input import Input, create_input
from prompt_toolkit.key_binding.key_processor import KeyPress
from rich.console import Console

from shellect.adapters.terminal.keys import translate_key_presses
from shellect.core.interfaces import BaseTerminal
from shellect.shared.errors import TerminalError
from shellect.shared.primitives import TerminalEvent

logger = logging.getLogger(__name__)

# Сколько ждать продолжения после одиночного Escape (секунды).
# Если байты не пришли, это отдельное нажатие Esc, а не начало последовательности.
ESCAPE_TIMEOUT = 0.05


class TerminalSession(BaseTerminal):
    """
    Реальный терминал на stdin/stdout.

    Args:
        console (Console | None): Консоль rich для вывода. По умолчанию stdout.
        input_factory (Callable[[], Input]): Фабрика ввода prompt_toolkit.
    """

    def __init__(self, console: Optional[Console] = None,
                 input_factory: Callable[[], Input] = create_input):
        self._console = console or Console()
        self._input_factory = input_factory
        self._input: Optional[Input] = None
        self._stack: Optional[ExitStack] = None
        self._pending: Deque[TerminalEvent] = deque()

    @property
    def console(self) -> Console:
        return self._console

    @property
    def active(self) -> bool:
        """True, пока терминал находится в интерактивном режиме."""
        return self._stack is not None

    def enter(self) -> None:
        if self.active:
            return

        stack = ExitStack()
        try:
            self._input = self._input_factory()
            # Регистрируем откат сразу после каждого шага,
            # чтобы при сбое на середине отпустить уже захваченное.
            # ExitStack снимает в обратном порядке: курсор, экран, raw mode.
            stack.enter_context(self._input.raw_mode())
            self._console.set_alt_screen(True)
            stack.callback(self._console.set_alt_screen, False)
            self._console.show_cursor(False)
            stack.callback(self._console.show_cursor, True)
        except (OSError, ValueError) as e:
            self._close_quietly(stack)
            raise TerminalError(f"Не удалось перевести терминал в интерактивный режим: {e}") from e

        self._stack = stack
        logger.debug("Терминал: альтернативный экран и raw mode включены")

    def restore(self, raise_errors: bool = True) -> None:
        if not self.active:
            return

        stack, self._stack = self._stack, None
        self._pending.clear()

        # ExitStack выполняет все колбэки, даже если какой-то из них упал,
        # и пробрасывает последнюю ошибку.
        try:
            stack.close()
        except (OSError, ValueError) as e:
            logger.warning(f"Терминал восстановлен не полностью: {e}")
            if raise_errors:
                raise TerminalError(f"Не удалось восстановить терминал: {e}") from e
        else:
            logger.debug("Терминал восстановлен")

    def read_event(self) -> TerminalEvent:
        if not self.active:
            raise TerminalError("Чтение событий вне интерактивного режима")

        while not self._pending:
            self._pending.extend(translate_key_presses(self._read_key_presses()))
        return self._pending.popleft()

    def _read_key_presses(self) -> List[KeyPress]:
        """
        Блокируется до прихода хотя бы одного нажатия.
        """
        try:
            while True:
                self._wait_readable(None)
                presses = self._input.read_keys()
                if self._input.closed:
                    raise TerminalError("Ввод терминала закрыт (EOF)")

                if not presses:
                    # Парсер придерживает одиночный Escape как возможное начало последовательности
                    if self._wait_readable(ESCAPE_TIMEOUT):
                        continue
                    presses = self._input.flush_keys()

                if presses:
                    return presses
        except OSError as e:
            raise TerminalError(f"Ошибка чтения из терминала: {e}") from e

    def _wait_readable(self, timeout: Optional[float]) -> bool:
        """Ждет данных во вводе терминала. None - без таймаута."""
        if sys.platform == "win32":
            return _wait_console_handle(self._input.handle, timeout)
        return _wait_fd(self._input.fileno(), timeout)

    @staticmethod
    def _close_quietly(stack: ExitStack) -> None:
        try:
            stack.close()
        except (OSError, ValueError) as e:
            logger.warning(f"Откат режима терминала завершился с ошибкой: {e}")


def _wait_fd(fileno: int, timeout: Optional[float]) -> bool:
    with selectors.DefaultSelector() as selector:
        selector.register(fileno, selectors.EVENT_READ)
        return bool(selector.select(timeout))


def _wait_console_handle(handle: Any, timeout: Optional[float]) -> bool:
    """
    Ожидание консольного хэндла Windows.

    select() в Windows работает только с сокетами, поэтому ждем сам хэндл
    через WaitForMultipleObjects из prompt_toolkit.
    """
    # Модуль проверяет платформу при импорте
    from prompt_toolkit.eventloop.win32 import INFINITE, wait_for_handles

    timeout_ms = INFINITE if timeout is None else int(timeout * 1000)
    return wait_for_handles([handle], timeout_ms) is not None
