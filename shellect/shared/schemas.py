"""
Схемы конфигурационного файла ~/.shellect.toml.

Модели неизменяемы (frozen): конфиг читается один раз при старте
и живет до выхода или замены процесса.
"""

from typing import Annotated, Any, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, PlainValidator, StrictBool, StrictStr, \
    field_validator, model_validator

from shellect.shared.primitives import RgbColor


def _parse_color(value: Any) -> RgbColor:
    if isinstance(value, RgbColor):
        return value
    return RgbColor.from_hex(value)


HexColor = Annotated[RgbColor, PlainValidator(_parse_color)]


class LaunchTarget(BaseModel):
    """
    Одна оболочка из списка.

    Пример записи в TOML:
        [[shells]]
        name = "zsh"
        path = "/bin/zsh"
        args = ["-l"]
        color = "#33ccff"
        default = true
    """
    model_config = ConfigDict(frozen=True)

    name: StrictStr
    path: StrictStr                      # '/bin/zsh' или просто 'fish' (ищется в PATH)
    args: List[StrictStr]                # Может быть пустым, но ключ обязателен
    color: Optional[HexColor] = None     # None -> нейтральный цвет при отрисовке
    default: Optional[StrictBool] = None


class LauncherConfig(BaseModel):
    """
    Корень конфигурационного файла.

    Список оболочек читается из ключа `shells` или его синонима `shell`.
    Оба ключа одновременно - ошибка, а не слияние списков.
    """
    model_config = ConfigDict(frozen=True)

    shells: List[LaunchTarget] = Field(validation_alias=AliasChoices("shells", "shell"))

    @model_validator(mode="before")
    @classmethod
    def _reject_both_keys(cls, data: Any) -> Any:
        if isinstance(data, dict) and "shells" in data and "shell" in data:
            raise ValueError("ключи `shells` и `shell` заданы одновременно, оставьте только один")
        return data

    @field_validator("shells")
    @classmethod
    def _check_not_empty(cls, value: List[LaunchTarget]) -> List[LaunchTarget]:
        if not value:
            raise ValueError("список оболочек пуст, добавьте хотя бы одну запись [[shells]]")
        return value

    def default_index(self) -> int:
        """Индекс первой оболочки с `default = true`, иначе 0."""
        return next((idx for idx, shell in enumerate(self.shells) if shell.default), 0)
