"""
Загрузка списка оболочек.

Читает ~/.shellect.toml, разбирает TOML и валидирует структуру через
pydantic-схемы из `shellect.shared.schemas`. Любая проблема превращается
в `ConfigError` с понятным сообщением: дальше этой точки старт не идет,
и терминал еще не переведен в raw mode.
"""

import logging
import tomllib
from pathlib import Path
from typing import Union

from pydantic import ValidationError

from shellect.shared.errors import ConfigError
from shellect.shared.schemas import LauncherConfig

logger = logging.getLogger(__name__)


def _format_validation_error(error: ValidationError) -> str:
    """
    Превращает ошибки pydantic в строки вида `shells.1.color: ...`.
    """
    lines = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"]) or "<root>"
        lines.append(f"  {location}: {err['msg']}")
    return "\n".join(lines)


def parse_config(text: str, source: str = "<string>") -> LauncherConfig:
    """
    Разбирает текст конфигурации.

    Args:
        text (str): Содержимое TOML-файла.
        source (str): Имя источника для сообщений об ошибках.

    Returns:
        LauncherConfig: Провалидированный конфиг.

    Raises:
        ConfigError: Синтаксическая ошибка TOML или несоответствие схеме.
    """
    try:
        raw = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{source}: ошибка синтаксиса TOML: {e}") from e

    try:
        config = LauncherConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(f"{source}: некорректная конфигурация:\n{_format_validation_error(e)}") from e

    defaults = [shell.name for shell in config.shells if shell.default]
    if len(defaults) > 1:
        logger.warning(f"{source}: несколько оболочек помечены default = true ({', '.join(defaults)}), "
                       f"используется первая: {defaults[0]}")

    return config


def load_config(path: Union[str, Path]) -> LauncherConfig:
    """
    Читает и разбирает файл конфигурации.

    Raises:
        ConfigError: Файл отсутствует, недоступен, не в UTF-8 или некорректен.
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise ConfigError(f"Файл конфигурации не найден: {path}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Не удалось прочитать {path}: {e}") from e

    config = parse_config(text, source=str(path))
    logger.info(f"Загружено оболочек: {len(config.shells)} из {path}")
    return config
