"""
Модуль базовых примитивов данных.

Содержит перечисления (Enums) и структуры данных (Dataclasses).
Используются для типизации событий клавиатуры, цвета пунктов меню
и результата работы меню.
"""

import re
from dataclasses import dataclass
from enum import IntFlag, StrEnum
from typing import Optional, Union

_HEX_COLOR_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


class KeyCode(StrEnum):
    """
    Код нажатой клавиши.
    Для печатных символов используется `CHAR`, сам символ лежит в `KeyEvent.char`.
    """
    CHAR = "char"
    ENTER = "enter"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    HOME = "home"
    END = "end"
    PAGE_UP = "pageup"
    PAGE_DOWN = "pagedown"
    TAB = "tab"
    BACKSPACE = "backspace"
    DELETE = "delete"
    INSERT = "insert"
    ESC = "escape"
    F = "function"      # F1..F24, номер в `char`
    OTHER = "other"     # Клавиша, которую мы не различаем


class KeyModifiers(IntFlag):
    """Набор модификаторов, зажатых вместе с клавишей."""
    NONE = 0
    SHIFT = 1
    CONTROL = 2
    ALT = 4


class KeyEventKind(StrEnum):
    """
    Тип события клавиши.
    Терминал в режиме VT100 присылает только нажатия, но меню
    явно реагирует только на PRESS.
    """
    PRESS = "press"
    REPEAT = "repeat"
    RELEASE = "release"


@dataclass(frozen=True)
class KeyEvent:
    """
    Событие клавиатуры.

    Attributes:
        code (KeyCode): Код клавиши.
        modifiers (KeyModifiers): Зажатые модификаторы.
        kind (KeyEventKind): Нажатие, повтор или отпускание.
        char (str): Символ для `KeyCode.CHAR` (или номер для `KeyCode.F`).
    """
    code: KeyCode
    modifiers: KeyModifiers = KeyModifiers.NONE
    kind: KeyEventKind = KeyEventKind.PRESS
    char: str = ""


@dataclass(frozen=True)
class OtherEvent:
    """Любое событие терминала, не являющееся клавишей (мышь, вставка, ответ CPR)."""
    name: str


TerminalEvent = Union[KeyEvent, OtherEvent]


@dataclass(frozen=True)
class MenuResult:
    """
    Итог работы меню.

    `index is None` означает отмену (Ctrl+C), иначе это индекс выбранной оболочки.
    """
    index: Optional[int] = None

    @property
    def cancelled(self) -> bool:
        return self.index is None


@dataclass(frozen=True)
class RgbColor:
    """Цвет пункта меню в виде RGB-тройки (каждый канал 0..255)."""
    r: int
    g: int
    b: int

    @classmethod
    def from_hex(cls, value: str) -> "RgbColor":
        """
        Разбирает строку вида `#RRGGBB` или сокращенную `#RGB`.

        Raises:
            ValueError: Если строка не начинается с `#`, имеет неверную
                длину или содержит не шестнадцатеричные символы.
        """
        if not isinstance(value, str) or not _HEX_COLOR_RE.match(value):
            raise ValueError(f"ожидается цвет в формате #RRGGBB, получено {value!r}")

        digits = value[1:]
        if len(digits) == 3:
            digits = "".join(ch * 2 for ch in digits)

        return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))
