import io
from collections import deque
from contextlib import contextmanager
from typing import Iterable, List

import pytest
from rich.console import Console

from shellect.core.interfaces import BaseTerminal
from shellect.shared.errors import TerminalError
from shellect.shared.primitives import KeyCode, KeyEvent, KeyModifiers

THREE_SHELLS_TOML = """
[[shells]]
name = "bash"
path = "/bin/bash"
args = []
color = "#ffffff"

[[shells]]
name = "zsh"
path = "/bin/zsh"
args = ["-l"]
color = "#33ccff"

[[shells]]
name = "fish"
path = "fish"
args = ["--login", "--private"]
color = "#abc"
"""

# Короткие имена для сценариев ввода
UP = KeyEvent(KeyCode.UP)
DOWN = KeyEvent(KeyCode.DOWN)
ENTER = KeyEvent(KeyCode.ENTER)
CTRL_C = KeyEvent(KeyCode.CHAR, KeyModifiers.CONTROL, char="c")


@pytest.fixture(autouse=True)
def keep_root_logging(monkeypatch):
    """
    Точки входа перенастраивают корневой логгер. В тестах это ломает
    перехват логов pytest, поэтому подменяем настройку на пустышку.
    """
    monkeypatch.setattr("shellect.shared.decorators.setup_global_logging", lambda *a, **k: None)
    monkeypatch.setattr("shellect.flows.launch_flow.setup_global_logging", lambda *a, **k: None)


@pytest.fixture
def home_dir(tmp_path, monkeypatch):
    """Временная домашняя директория, выставленная в HOME."""
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.delenv("SHELLECT_LOG_LEVEL", raising=False)
    monkeypatch.delenv("SHELLECT_LOG_FILE", raising=False)
    return tmp_path


@pytest.fixture
def write_config(home_dir):
    """Записывает ~/.shellect.toml и возвращает путь к нему."""
    def _write(text: str):
        path = home_dir / ".shellect.toml"
        path.write_text(text, encoding="utf-8")
        return path
    return _write


def make_console(stream: io.StringIO) -> Console:
    return Console(file=stream, force_terminal=True, color_system="truecolor", width=80)


# --- Вспомогательные классы-заглушки ---
class FakeTerminal(BaseTerminal):
    """
    Терминал со сценарием событий.

    Элемент сценария - событие или исключение, которое нужно выбросить из read_event.
    """

    def __init__(self, events: Iterable = ()):
        self.events = deque(events)
        self.output = io.StringIO()
        self._console = make_console(self.output)
        self.active = False
        self.enter_calls = 0
        self.restore_calls: List[bool] = []

    @property
    def console(self) -> Console:
        return self._console

    def enter(self) -> None:
        self.enter_calls += 1
        self.active = True

    def restore(self, raise_errors: bool = True) -> None:
        self.restore_calls.append(raise_errors)
        self.active = False

    def read_event(self):
        if not self.active:
            raise TerminalError("read_event вне интерактивного режима")
        if not self.events:
            raise TerminalError("сценарий событий закончился")
        event = self.events.popleft()
        if isinstance(event, BaseException):
            raise event
        return event


class FakeInput:
    """
    Подмена prompt_toolkit Input: отдает заранее заданные пачки нажатий.
    Когда пачки заканчиваются, ведет себя как закрытый stdin (EOF).
    """

    def __init__(self, batches: Iterable = (), held: Iterable = (), raw_error: Exception = None,
                 log: List[str] = None):
        self.batches = deque(list(batch) for batch in batches)
        self.held = list(held)
        self.raw_error = raw_error
        self.raw = False
        self.closed = False
        self.log = log if log is not None else []
        self.handle = object()  # Консольный хэндл для ожидания в Windows

    @contextmanager
    def raw_mode(self):
        if self.raw_error is not None:
            raise self.raw_error
        self.raw = True
        self.log.append("raw on")
        try:
            yield
        finally:
            self.raw = False
            self.log.append("raw off")

    def read_keys(self):
        if not self.batches:
            self.closed = True
            return []
        return self.batches.popleft()

    def flush_keys(self):
        held, self.held = self.held, []
        return held

    def fileno(self) -> int:
        return 0


@pytest.fixture
def fake_terminal():
    return FakeTerminal
