"""
Модуль конфигурации приложения.

Этот модуль определяет класс `AppSettings` - настройки окружения лаунчера.
Он использует библиотеку `pydantic-settings` для:
1. Чтения обязательной переменной окружения `HOME`.
2. Чтения необязательных настроек логирования (`SHELLECT_LOG_LEVEL`, `SHELLECT_LOG_FILE`).
3. Валидации значений с понятным сообщением об ошибке.

Путь к файлу со списком оболочек фиксирован: `$HOME/.shellect.toml`.
В отличие от настроек логирования, переопределить его нельзя.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shellect.shared.errors import ConfigError

CONFIG_FILE_NAME = ".shellect.toml"


class AppSettings(BaseSettings):
    """
    Основной класс настроек.

    Наследуется от `BaseSettings`, что позволяет автоматически
    загружать переменные окружения в атрибуты класса.
    """

    # --- Pydantic Config ---
    model_config = SettingsConfigDict(
        env_prefix="SHELLECT_",  # SHELLECT_LOG_LEVEL, SHELLECT_LOG_FILE
        extra="ignore"  # Игнорировать лишние переменные, не выбрасывая ошибку
    )

    # Домашняя директория пользователя. Префикс не применяется: читаем именно HOME.
    HOME: Path = Field(validation_alias="HOME")

    # Настройки логирования
    LOG_LEVEL: str = "WARNING"
    LOG_FILE: Optional[Path] = None

    @field_validator("HOME", mode="before")
    @classmethod
    def _check_home(cls, value):
        if value is None or not str(value).strip():
            raise ValueError("переменная окружения HOME пуста")
        return value

    @field_validator("LOG_LEVEL")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"неизвестный уровень логирования: {value!r}")
        return level

    @property
    def CONFIG_PATH(self) -> Path:
        """Путь к файлу со списком оболочек."""
        return self.HOME / CONFIG_FILE_NAME


def load_settings() -> AppSettings:
    """
    Собирает настройки из окружения.

    Raises:
        ConfigError: Если `HOME` не задана или настройки логирования некорректны.
    """
    try:
        return AppSettings()
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'env'}: {err['msg']}" for err in e.errors()
        )
        raise ConfigError(f"Некорректное окружение: {problems}") from e
