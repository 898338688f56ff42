"""
Перевод нажатий prompt_toolkit в события лаунчера.

prompt_toolkit разбирает VT100-последовательности в `KeyPress`, где имя
клавиши кодирует модификаторы префиксами: `c-` (Control), `s-` (Shift),
например `c-s-up`. Alt терминал передает как Escape перед клавишей,
поэтому пара (Escape, X) из одного чтения склеивается в X с модификатором ALT.
"""

from typing import Iterable, List, Tuple

from prompt_toolkit.key_binding.key_processor import KeyPress
from prompt_toolkit.keys import Keys

from shellect.shared.primitives import KeyCode, KeyEvent, KeyModifiers, OtherEvent, TerminalEvent

_PREFIX_MODIFIERS = {
    "c": KeyModifiers.CONTROL,
    "s": KeyModifiers.SHIFT,
}

# Базовые имена клавиш prompt_toolkit -> KeyCode
_NAMED_KEYS = {
    "up": KeyCode.UP,
    "down": KeyCode.DOWN,
    "left": KeyCode.LEFT,
    "right": KeyCode.RIGHT,
    "home": KeyCode.HOME,
    "end": KeyCode.END,
    "pageup": KeyCode.PAGE_UP,
    "pagedown": KeyCode.PAGE_DOWN,
    "delete": KeyCode.DELETE,
    "insert": KeyCode.INSERT,
    "escape": KeyCode.ESC,
    "tab": KeyCode.TAB,
}

# Control-сочетания, которые терминал присылает вместо отдельных клавиш.
# c-j (\n) в raw mode - это именно Ctrl+J, а не Enter.
_CONTROL_ALIASES = {
    "m": KeyCode.ENTER,
    "i": KeyCode.TAB,
    "h": KeyCode.BACKSPACE,
}


def _split_key_name(name: str) -> Tuple[KeyModifiers, str]:
    """`c-s-up` -> (CONTROL | SHIFT, 'up')."""
    modifiers = KeyModifiers.NONE
    parts = name.split("-")
    while len(parts) > 1 and parts[0] in _PREFIX_MODIFIERS:
        modifiers |= _PREFIX_MODIFIERS[parts.pop(0)]
    return modifiers, "-".join(parts)


def translate_key(key) -> TerminalEvent:
    """
    Переводит одну клавишу prompt_toolkit (`Keys` или символ) в событие.
    """
    if not isinstance(key, Keys):
        # Печатный символ (в том числе '-' или пробел)
        return KeyEvent(KeyCode.CHAR, char=key)

    name = key.value
    if name.startswith("<"):
        # Псевдоклавиши: мышь, вставка, ответ CPR, прокрутка, sigint
        return OtherEvent(name.strip("<>"))

    modifiers, base = _split_key_name(name)

    if modifiers & KeyModifiers.CONTROL and base in _CONTROL_ALIASES:
        return KeyEvent(_CONTROL_ALIASES[base], modifiers & ~KeyModifiers.CONTROL)

    if base in _NAMED_KEYS:
        return KeyEvent(_NAMED_KEYS[base], modifiers)

    if base == "backspace":
        return KeyEvent(KeyCode.BACKSPACE, modifiers)

    if len(base) > 1 and base[0] == "f" and base[1:].isdigit():
        return KeyEvent(KeyCode.F, modifiers, char=base[1:])

    if len(base) == 1:
        return KeyEvent(KeyCode.CHAR, modifiers, char=base)

    return KeyEvent(KeyCode.OTHER, modifiers, char=base)


def translate_key_presses(presses: Iterable[KeyPress]) -> List[TerminalEvent]:
    """
    Переводит пачку нажатий, прочитанную за один раз.

    Escape, за которым в той же пачке идет клавиша, считается префиксом Alt.
    """
    events: List[TerminalEvent] = []
    alt_pending = False

    for press in presses:
        if press.key == Keys.Escape and not alt_pending:
            alt_pending = True
            continue

        event = translate_key(press.key)
        if alt_pending:
            alt_pending = False
            if isinstance(event, KeyEvent):
                event = KeyEvent(event.code, event.modifiers | KeyModifiers.ALT, event.kind, event.char)
            else:
                events.append(KeyEvent(KeyCode.ESC))
        events.append(event)

    if alt_pending:
        events.append(KeyEvent(KeyCode.ESC))

    return events
