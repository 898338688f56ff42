import logging

import pytest
from pydantic import ValidationError

from shellect.services.config_loader import load_config, parse_config
from shellect.shared.errors import ConfigError
from shellect.shared.primitives import RgbColor
from shellect.shared.schemas import LaunchTarget, LauncherConfig
from tests.conftest import THREE_SHELLS_TOML


def _single_shell(**fields) -> str:
    """TOML с одной оболочкой; значения передаются уже в TOML-синтаксисе."""
    base = {"name": '"bash"', "path": '"/bin/bash"', "args": "[]", "color": '"#112233"'}
    base.update(fields)
    body = "\n".join(f"{key} = {value}" for key, value in base.items() if value is not None)
    return f"[[shells]]\n{body}\n"


def test_parse_full_config():
    """
    Проверяет разбор полного конфига: порядок, аргументы и оба формата цвета.
    """
    # 1. ДЕЙСТВИЕ (Act)
    config = parse_config(THREE_SHELLS_TOML)

    # 2. ПРОВЕРКА (Assert)
    assert [shell.name for shell in config.shells] == ["bash", "zsh", "fish"]
    assert config.shells[1].path == "/bin/zsh"
    assert config.shells[1].args == ["-l"]
    assert config.shells[2].args == ["--login", "--private"]
    assert config.shells[1].color == RgbColor(0x33, 0xcc, 0xff)
    # Сокращенная запись #abc раскрывается в #aabbcc
    assert config.shells[2].color == RgbColor(0xaa, 0xbb, 0xcc)
    assert all(shell.default is None for shell in config.shells)


def test_singular_alias_gives_identical_config():
    """Ключ `shell` - синоним `shells`, результат должен совпадать полностью."""
    # 1. ДЕЙСТВИЕ (Act)
    plural = parse_config(THREE_SHELLS_TOML)
    singular = parse_config(THREE_SHELLS_TOML.replace("[[shells]]", "[[shell]]"))

    # 2. ПРОВЕРКА (Assert)
    assert plural == singular


def test_both_keys_is_config_error():
    """
    Ключи `shells` и `shell` одновременно - ошибка. Иначе записи
    из одного списка молча терялись бы.
    """
    # 1. ПОДГОТОВКА (Arrange)
    text = THREE_SHELLS_TOML + '[[shell]]\nname = "dash"\npath = "/bin/dash"\nargs = []\n'

    # 2-3. ДЕЙСТВИЕ и ПРОВЕРКА (Act & Assert)
    with pytest.raises(ConfigError, match="одновременно"):
        parse_config(text)


def test_both_keys_rejected_by_schema_directly():
    with pytest.raises(ValidationError):
        LauncherConfig.model_validate({
            "shells": [{"name": "bash", "path": "/bin/bash", "args": []}],
            "shell": [{"name": "zsh", "path": "/bin/zsh", "args": []}],
        })


def test_inline_array_form_is_accepted():
    text = 'shells = [{ name = "sh", path = "/bin/sh", args = ["-i"], color = "#000000", default = true }]'

    config = parse_config(text)

    assert config.shells[0] == LaunchTarget(name="sh", path="/bin/sh", args=["-i"],
                                            color=RgbColor(0, 0, 0), default=True)


@pytest.mark.parametrize("color", ['"33ccff"', '"#33ccf"', '"#33ccfff"', '"#ggcc00"', '""', '"red"', "123"])
def test_malformed_color_is_config_error(color):
    with pytest.raises(ConfigError, match="shells.0.color"):
        parse_config(_single_shell(color=color))


def test_color_is_optional():
    config = parse_config(_single_shell(color=None))

    assert config.shells[0].color is None


@pytest.mark.parametrize("missing", ["name", "path", "args"])
def test_missing_required_field(missing):
    with pytest.raises(ConfigError, match=f"shells.0.{missing}"):
        parse_config(_single_shell(**{missing: None}))


@pytest.mark.parametrize("field, value", [
    ("name", "42"),
    ("path", "true"),
    ("args", '"-l"'),
    ("args", '["-l", 1]'),
    ("default", '"yes"'),
])
def test_wrong_types_are_not_coerced(field, value):
    with pytest.raises(ConfigError):
        parse_config(_single_shell(**{field: value}))


def test_empty_list_is_config_error():
    with pytest.raises(ConfigError, match="пуст"):
        parse_config("shells = []")


def test_missing_shells_key_is_config_error():
    with pytest.raises(ConfigError, match="shells"):
        parse_config('title = "nothing here"')


def test_toml_syntax_error():
    with pytest.raises(ConfigError, match="TOML"):
        parse_config("[[shells]\nname = ")


def test_unknown_keys_are_ignored():
    config = parse_config(_single_shell(icon='"*"'))

    assert config.shells[0].name == "bash"


def test_default_index():
    no_default = parse_config(THREE_SHELLS_TOML)
    text = "".join(_single_shell(name=f'"s{i}"', default="true" if i == 2 else "false") for i in range(4))
    with_default = parse_config(text)

    assert no_default.default_index() == 0
    assert with_default.default_index() == 2


def test_several_defaults_first_wins(caplog):
    """
    Несколько `default = true`: побеждает первая запись, остальные попадают в предупреждение.
    """
    # 1. ПОДГОТОВКА (Arrange)
    text = "".join(_single_shell(name=f'"s{i}"', default="true" if i in (1, 3) else None) for i in range(4))

    # 2. ДЕЙСТВИЕ (Act)
    with caplog.at_level(logging.WARNING, logger="shellect.services.config_loader"):
        config = parse_config(text)

    # 3. ПРОВЕРКА (Assert)
    assert config.default_index() == 1
    assert "s1" in caplog.text and "s3" in caplog.text


def test_config_is_immutable():
    config = parse_config(THREE_SHELLS_TOML)

    with pytest.raises(ValidationError):
        config.shells[0].name = "changed"


def test_launcher_config_rejects_empty_list_directly():
    with pytest.raises(ValidationError):
        LauncherConfig(shells=[])


def test_load_config_reads_file(write_config):
    path = write_config(THREE_SHELLS_TOML)

    config = load_config(path)

    assert len(config.shells) == 3


def test_load_config_missing_file(tmp_path):
    """Отсутствующий файл - понятная ошибка конфигурации, а не трейсбек."""
    with pytest.raises(ConfigError, match="не найден"):
        load_config(tmp_path / ".shellect.toml")


def test_load_config_unreadable_path(tmp_path):
    # Директория вместо файла: чтение падает с OSError
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_error_mentions_file(write_config):
    path = write_config("shells = []")

    with pytest.raises(ConfigError, match=".shellect.toml"):
        load_config(path)
