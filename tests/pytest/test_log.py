# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

import io
import logging
import sys
from logging.handlers import QueueListener
from pathlib import Path

import pytest

from optionsparser import OptionsParser, OptionType
from optionsparser.log import (
    ColorMode,
    Loglevel,
    _ConsoleFormatter,
    add_file_log_handler,
    get_logger,
    resolve_color_mode,
    setup_logging,
)


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("trace", Loglevel.TRACE),
        ("DEBUG", Loglevel.DEBUG),
        ("Warning", Loglevel.WARNING),
        ("40", Loglevel.ERROR),
        ("5", Loglevel.TRACE),
    ],
)
def test_loglevel_from_str(raw: str, expected: Loglevel) -> None:
    assert Loglevel.from_str(raw) == expected


def test_loglevel_from_str_invalid() -> None:
    with pytest.raises(ValueError):
        Loglevel.from_str("loud")


@pytest.mark.skipif(sys.platform == "win32", reason="colors are disabled on windows")
def test_resolve_color_mode(monkeypatch: pytest.MonkeyPatch) -> None:
    stream = io.StringIO()

    assert resolve_color_mode(ColorMode.ALWAYS, stream)
    assert not resolve_color_mode(ColorMode.NEVER, stream)
    assert not resolve_color_mode(ColorMode.AUTO, stream)

    monkeypatch.setenv("NO_COLOR", "1")
    assert not resolve_color_mode(ColorMode.AUTO, stream)


def test_console_formatter() -> None:
    record = logging.makeLogRecord(
        {"name": "optionsparser.parser", "msg": "hello %s", "args": ("world",), "levelno": 10}
    )
    formatter = _ConsoleFormatter()

    line = formatter.format(record)
    assert line.endswith(" optionsparser.parser: hello world\n")

    formatter.colored = True
    assert "\033[" in formatter.format(record)


def test_logger_trace() -> None:
    logger = get_logger("optionsparser.test")
    assert hasattr(logger, "trace")
    logger.trace("not emitted unless enabled")


def read_log(stream: io.StringIO, listener: QueueListener) -> str:
    listener.queue.join()  # type: ignore[attr-defined]
    return stream.getvalue()


def test_parser_logs_matches_and_diagnostics() -> None:
    stream = io.StringIO()
    listener = setup_logging(Loglevel.TRACE, color_mode=ColorMode.NEVER, stream=stream)

    parser = OptionsParser()
    parser.add_option("a", "a", OptionType.BOOLEAN)
    assert not parser.parse_arguments(["-a", "--nope"])

    log = read_log(stream, listener)
    assert "optionsparser.parser: '-a' matches option 'a'\n" in log
    assert "optionsparser.parser: error: Unknown option: --nope\n" in log


def test_parser_logs_duplicate_registration() -> None:
    stream = io.StringIO()
    listener = setup_logging(Loglevel.DEBUG, color_mode=ColorMode.NEVER, stream=stream)

    parser = OptionsParser()
    parser.add_option("dup", "d", OptionType.STRING)
    parser.add_option("dup", "d", OptionType.STRING)
    assert parser.parse_arguments(["-d", "x"])

    log = read_log(stream, listener)
    assert "option id 'dup' already registered" in log
    assert "short flag -d already registered" in log
    assert "matches option" not in log


def test_setup_logging_level_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPTIONSPARSER_LOGLEVEL", "error")
    stream = io.StringIO()
    listener = setup_logging(color_mode=ColorMode.NEVER, stream=stream)

    parser = OptionsParser()
    assert not parser.parse_arguments(["--nope"])
    get_logger("optionsparser.test").error("boom")

    log = read_log(stream, listener)
    assert "optionsparser.test: boom\n" in log
    assert "Unknown option" not in log


def test_setup_logging_default_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OPTIONSPARSER_LOGLEVEL", raising=False)
    stream = io.StringIO()
    listener = setup_logging(color_mode=ColorMode.NEVER, stream=stream)

    logger = get_logger("optionsparser.test")
    logger.info("quiet")
    logger.warning("loud")

    log = read_log(stream, listener)
    assert "loud" in log
    assert "quiet" not in log


def test_file_log_handler(tmp_path: Path) -> None:
    setup_logging(Loglevel.WARNING, color_mode=ColorMode.NEVER, stream=io.StringIO())
    logfile = tmp_path.joinpath("log.txt")
    handler = add_file_log_handler("optionsparser", logfile, Loglevel.DEBUG)

    parser = OptionsParser()
    parser.parse_arguments(["--nope"])

    get_logger("optionsparser").handlers[-1].queue.join()  # type: ignore[attr-defined]
    handler.flush()
    assert handler.level == Loglevel.DEBUG
    assert "optionsparser.parser: error: Unknown option: --nope\n" in logfile.read_text()
