"""
Меню выбора оболочки (CLI Controller).

Рисует список оболочек на альтернативном экране и крутит цикл
"отрисовка -> ожидание клавиши -> обработка" до подтверждения или отмены.
Сам процесс здесь не заменяется: меню только возвращает `MenuResult`.
"""

import logging
from typing import Sequence

from rich.color import Color
from rich.console import Console
from rich.control import Control
from rich.style import Style
from rich.text import Text

from shellect.core.interfaces import BaseTerminal
from shellect.core.selection import Selection, initial_selection
from shellect.shared.errors import TerminalError
from shellect.shared.primitives import MenuResult
from shellect.shared.schemas import LaunchTarget, LauncherConfig

logger = logging.getLogger(__name__)

# Цвет для оболочек без `color` в конфиге
NEUTRAL_COLOR = "white"


def format_line(idx: int, target: LaunchTarget, selected: bool) -> str:
    """
    Строка пункта меню.

    Выбранный пункт выделяется стрелками: `0 > zsh <`, остальные: `1   bash`.
    """
    if selected:
        return f"{idx:<2}> {target.name} <"
    return f"{idx:<2}  {target.name}"


def target_style(target: LaunchTarget) -> Style:
    if target.color is None:
        return Style(color=NEUTRAL_COLOR)
    return Style(color=Color.from_rgb(target.color.r, target.color.g, target.color.b))


class MenuRenderer:
    """
    Отрисовка списка оболочек, по одной на строку, начиная с левого верхнего угла.
    """

    def __init__(self, console: Console):
        self.console = console

    def render(self, targets: Sequence[LaunchTarget], selected: int) -> None:
        try:
            self.console.control(Control.home(), Control.clear())
            for idx, target in enumerate(targets):
                self.console.control(Control.move_to(0, idx))
                line = Text(format_line(idx, target, idx == selected), style=target_style(target))
                self.console.print(line, end="", no_wrap=True, overflow="crop", soft_wrap=False)
            self.console.file.flush()
        except (OSError, ValueError) as e:
            raise TerminalError(f"Ошибка вывода в терминал: {e}") from e


def run_menu(config: LauncherConfig, terminal: BaseTerminal) -> MenuResult:
    """
    Показывает меню и ждет выбора.

    Терминал переводится в интерактивный режим здесь же и восстанавливается
    на любом пути выхода: подтверждение, отмена (Ctrl+C) или исключение.

    Args:
        config (LauncherConfig): Список оболочек (непустой).
        terminal (BaseTerminal): Терминал, в котором рисуется меню.

    Returns:
        MenuResult: Индекс выбранной оболочки или отмена.
    """
    selection = Selection(len(config.shells), initial_selection(config))
    renderer = MenuRenderer(terminal.console)

    terminal.enter()
    try:
        while True:
            renderer.render(config.shells, selection.index)
            event = terminal.read_event()
            result = selection.handle(event)
            if result is not None:
                break
    except BaseException:
        terminal.restore(raise_errors=False)
        raise

    terminal.restore()

    if result.cancelled:
        logger.info("Выбор отменен пользователем")
    else:
        logger.info(f"Выбрана оболочка #{result.index}: {config.shells[result.index].name}")
    return result
