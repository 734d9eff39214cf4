# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

import math
from pathlib import Path

import pytest

from optionsparser.values import (
    OptionValue,
    resolve_path,
    to_bool,
    to_float,
    to_int,
    to_path,
    to_string,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, 0),
        ("42", 42),
        (" -7", -7),
        ("+3", 3),
        ("12abc", 12),
        ("3.9", 3),
        ("abc", 0),
        ("", 0),
        (True, 1),
        (False, 0),
        (2.9, 2),
        (-2.9, -2),
        (math.inf, 0),
        (math.nan, 0),
        (Path("/tmp"), 0),
    ],
)
def test_to_int(value: OptionValue, expected: int) -> None:
    assert to_int(value) == expected


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, 0.0),
        ("0.25", 0.25),
        ("1e3", 1000.0),
        (".5", 0.5),
        ("-2.", -2.0),
        ("4.5kg", 4.5),
        ("abc", 0.0),
        (7, 7.0),
        (True, 1.0),
    ],
)
def test_to_float(value: OptionValue, expected: float) -> None:
    assert to_float(value) == expected


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, False),
        (True, True),
        (False, False),
        (0, False),
        (2, True),
        (0.0, False),
        (0.1, True),
        ("1", True),
        ("0", False),
        ("true", True),
        (" TRUE ", True),
        ("yes", True),
        ("no", False),
        ("abc", False),
        ("", False),
    ],
)
def test_to_bool(value: OptionValue, expected: bool) -> None:
    assert to_bool(value) is expected


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, ""),
        ("abc", "abc"),
        (5, "5"),
        (1.5, "1.5"),
        (True, "1"),
        (False, "0"),
        (Path("/a/b"), "/a/b"),
    ],
)
def test_to_string(value: OptionValue, expected: str) -> None:
    assert to_string(value) == expected


def test_to_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    assert to_path(None) is None
    assert to_path("") is None
    assert to_path("/abs") == Path("/abs")
    assert to_path("rel") == Path.cwd() / "rel"
    assert to_path(Path("keep")) == Path("keep")


def test_resolve_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)

    assert resolve_path("/abs/path") == Path("/abs/path")
    assert resolve_path("rel/path") == Path.cwd() / "rel" / "path"
    assert resolve_path("rel/../other") == Path.cwd() / "other"
    # Only computed, nothing is created.
    assert not (tmp_path / "rel").exists()
