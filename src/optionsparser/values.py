# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Soft coercion of option values.

Options store whatever was given on the command line or seeded by the caller.
The helpers in this module convert such a stored value into the type a caller
asks for. None of them raise: a value that cannot be interpreted yields the
zero value of the requested type.
"""

import math
import os
import re
from pathlib import Path
from typing import TypeAlias

OptionValue: TypeAlias = str | int | float | bool | Path | None

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def to_string(value: OptionValue) -> str:
    match value:
        case None:
            return ""
        case bool():
            return "1" if value else "0"
        case _:
            return str(value)


def to_int(value: OptionValue) -> int:
    """Leading integer of strings, truncation for floats, zero otherwise."""
    match value:
        case None:
            return 0
        case bool() | int():
            return int(value)
        case float():
            if not math.isfinite(value):
                return 0
            return int(value)
        case _:
            if (m := _INT_PREFIX.match(str(value))) is None:
                return 0
            return int(m.group(1))


def to_float(value: OptionValue) -> float:
    match value:
        case None:
            return 0.0
        case bool() | int() | float():
            return float(value)
        case _:
            if (m := _FLOAT_PREFIX.match(str(value))) is None:
                return 0.0
            return float(m.group(1))


def to_bool(value: OptionValue) -> bool:
    """Numbers are true when non-zero. Strings are true when their leading
    integer is non-zero or when they read ``true`` or ``yes``.
    """
    match value:
        case None:
            return False
        case bool():
            return value
        case int() | float():
            return value != 0
        case _:
            s = str(value)
            return to_int(s) != 0 or s.strip().lower() in ("true", "yes")


def resolve_path(raw: str | Path) -> Path:
    """Makes ``raw`` absolute relative to the current working directory.
    Only the path is computed, the file system is not consulted.
    """
    path = Path(raw)
    if path.is_absolute():
        return path
    return Path(os.path.normpath(Path.cwd().joinpath(path)))


def to_path(value: OptionValue) -> Path | None:
    if isinstance(value, Path):
        return value
    if (s := to_string(value)) == "":
        return None
    return resolve_path(s)
