"""
Логика выбора пункта меню.

Чистая арифметика индекса без ввода/вывода: курсор двигается с насыщением
(у краев списка стоит на месте, по кругу не переходит), а события клавиатуры
превращаются либо в сдвиг, либо в итоговый `MenuResult`.
"""

from typing import Optional

from shellect.shared.primitives import KeyCode, KeyEvent, KeyEventKind, KeyModifiers, MenuResult, TerminalEvent
from shellect.shared.schemas import LauncherConfig

# Enter подтверждает выбор только без модификаторов или с Shift
CONFIRM_MODIFIERS = (KeyModifiers.NONE, KeyModifiers.SHIFT)


def initial_selection(config: LauncherConfig) -> int:
    """Стартовая позиция курсора: первая оболочка с `default = true`, иначе 0."""
    return config.default_index()


def is_cancel(event: KeyEvent) -> bool:
    return event.code is KeyCode.CHAR and event.char == "c" and event.modifiers == KeyModifiers.CONTROL


def is_confirm(event: KeyEvent) -> bool:
    return event.code is KeyCode.ENTER and event.modifiers in CONFIRM_MODIFIERS


class Selection:
    """
    Текущая позиция курсора в списке из `count` элементов.

    Attributes:
        index (int): Выбранный индекс, всегда в диапазоне [0, count - 1].
        count (int): Длина списка (больше нуля).
    """

    def __init__(self, count: int, index: int = 0):
        if count <= 0:
            raise ValueError("Selection: список пуст")
        if not 0 <= index < count:
            raise ValueError(f"Selection: индекс {index} вне диапазона [0, {count - 1}]")
        self.count = count
        self.index = index

    def move_up(self) -> int:
        self.index = max(self.index - 1, 0)
        return self.index

    def move_down(self) -> int:
        self.index = min(self.index + 1, self.count - 1)
        return self.index

    def handle(self, event: TerminalEvent) -> Optional[MenuResult]:
        """
        Применяет событие к выбору.

        Returns:
            MenuResult | None: Итог меню (подтверждение или отмена),
                либо None, если цикл нужно продолжать.
        """
        # Реагируем только на нажатия клавиш, остальное просто перерисует меню
        if not isinstance(event, KeyEvent) or event.kind is not KeyEventKind.PRESS:
            return None

        if is_cancel(event):
            return MenuResult(index=None)

        if is_confirm(event):
            return MenuResult(index=self.index)

        if event.modifiers == KeyModifiers.NONE:
            if event.code is KeyCode.UP:
                self.move_up()
            elif event.code is KeyCode.DOWN:
                self.move_down()

        return None
