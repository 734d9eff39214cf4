# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

import os
import tomllib
from pathlib import Path
from typing import Any

from platformdirs import user_config_path

from optionsparser.exceptions import ConfigError

CONFIG_ENV = "OPTIONSPARSER_CONFIG"
CONFIG_NAME = "optionsparser.toml"


class Config(dict[str, Any]):
    def get_value(self, key: str, default: Any | None = None) -> Any | None:
        parts = key.split(".")
        subdict: dict[str, Any] | None = self
        val: Any | None = None

        for part in parts:
            if subdict is None:
                return default

            val = subdict.get(part)
            subdict = val if isinstance(val, dict) else None

        return val if val is not None else default


def get_config_dirs() -> list[Path]:
    return [Path.cwd(), user_config_path("optionsparser")]


def search_config(
    filename: Path | None = None,
    extra_paths: list[Path] | None = None,
) -> Path | None:
    # An absolute filename is an explicit choice of the caller and wins over the env.
    if filename is not None and filename.is_absolute():
        if filename.exists():
            return filename
        raise FileNotFoundError(filename)

    name = filename if filename is not None else Path(CONFIG_NAME)
    if (s := os.getenv(CONFIG_ENV)) is not None:
        if (path := Path(s)).exists():
            return path
        raise FileNotFoundError(s)

    search_paths = get_config_dirs() + (extra_paths if extra_paths is not None else [])

    for dir_ in search_paths:
        if (path := dir_.joinpath(name)).exists():
            return path

    return None


def load_config_file(
    filename: Path | None = None,
    extra_paths: list[Path] | None = None,
) -> tuple[Config, Path | None]:
    if (path := search_config(filename, extra_paths)) is None:
        return Config(), None

    try:
        return Config(tomllib.loads(path.read_text())), path
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(str(path), str(e)) from e
