"""
Замена текущего процесса выбранной оболочкой.

На POSIX используется exec: образ процесса заменяется, PID сохраняется,
и в случае успеха функция не возвращается. Там, где exec нет (Windows),
оболочка запускается дочерним процессом, а лаунчер выходит с ее кодом.
Аргументы передаются как есть, без интерпретации шеллом.
"""

import logging
import os
import subprocess
import sys
from typing import List, NoReturn

from shellect.shared.errors import ExecError
from shellect.shared.logging_setup import flush_logging
from shellect.shared.schemas import LaunchTarget

logger = logging.getLogger(__name__)


def build_argv(target: LaunchTarget) -> List[str]:
    """argv для запуска: путь к оболочке как argv[0], затем аргументы из конфига."""
    return [target.path, *target.args]


def _flush_std_streams() -> None:
    # exec не сбрасывает буферы Python, недописанный вывод пропал бы
    flush_logging()
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except (OSError, ValueError):
            pass


def exec_target(target: LaunchTarget) -> NoReturn:
    """
    Заменяет процесс через `os.execvp` (путь без `/` ищется в PATH).

    Raises:
        ExecError: Если оболочку не удалось запустить.
    """
    argv = build_argv(target)
    logger.info(f"exec: {argv}")
    _flush_std_streams()
    try:
        os.execvp(target.path, argv)
    except OSError as e:
        raise ExecError(f"Не удалось запустить {target.name} ({target.path}): {e.strerror or e}") from e


def spawn_target(target: LaunchTarget) -> NoReturn:
    """
    Запасной вариант без exec: дочерний процесс, ожидание, выход с тем же кодом.
    PID при этом будет другим.

    Raises:
        ExecError: Если оболочку не удалось запустить.
    """
    argv = build_argv(target)
    logger.info(f"spawn: {argv}")
    _flush_std_streams()
    try:
        completed = subprocess.run(argv)
    except OSError as e:
        raise ExecError(f"Не удалось запустить {target.name} ({target.path}): {e.strerror or e}") from e
    sys.exit(completed.returncode)


def replace_process(target: LaunchTarget) -> NoReturn:
    """Запускает оболочку способом, доступным на текущей платформе."""
    if os.name == "posix":
        exec_target(target)
    spawn_target(target)
