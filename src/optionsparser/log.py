# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import atexit
import datetime
import logging
import os
import sys
import traceback
from enum import Enum, IntEnum, unique
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path
from queue import Queue
from typing import TYPE_CHECKING, Any, TextIO, cast

if TYPE_CHECKING:
    from logging import _ExcInfoType


TRACE = 5
logging.addLevelName(TRACE, "TRACE")


@unique
class ColorMode(Enum):
    """ColorMode is used as an argument to :func:`setup_logging`."""

    #: Colors are always turned on.
    ALWAYS = "always"
    #: Colors are turned off if the target
    #: stream (e.g. stderr) is not a tty.
    AUTO = "auto"
    #: No colors are used. In other words,
    #: no ANSI escape codes are included.
    NEVER = "never"


def resolve_color_mode(mode: ColorMode, stream: TextIO = sys.stderr) -> bool:
    """Decides whether console output is colored.

    :param mode: The available options are described in :class:`ColorMode`.
    :param stream: Used as a reference for :attr:`ColorMode.AUTO`.
    """
    if sys.platform == "win32":
        return False

    match mode:
        case ColorMode.ALWAYS:
            return True
        case ColorMode.AUTO:
            if os.getenv("NO_COLOR") is not None:
                return False
            else:
                return stream.isatty()
        case ColorMode.NEVER:
            return False


@unique
class Loglevel(IntEnum):
    """Python loglevels including the additional ``TRACE`` level,
    which is used for per token output of the parser.
    """

    CRITICAL = logging.CRITICAL
    ERROR = logging.ERROR
    WARNING = logging.WARNING
    INFO = logging.INFO
    DEBUG = logging.DEBUG
    TRACE = TRACE

    @classmethod
    def from_str(cls, string: str) -> Loglevel:
        """Converts a case insensitive level name (e.g. ``debug``)
        or a numeric python loglevel to a :class:`Loglevel`.
        """
        if string.isnumeric():
            return cls(int(string, 0))

        try:
            return cls[string.upper()]
        except KeyError:
            raise ValueError(f"{string} not a valid loglevel") from None


@unique
class _Color(Enum):
    NOP = ""
    RESET = "\033[0m"
    BOLD = "\033[1m"
    RED = "\033[31m"
    YELLOW = "\033[33m"
    GRAY = "\033[0;38;5;245m"


def _colorize_msg(data: str, levelno: int) -> str:
    match levelno:
        case Loglevel.TRACE | Loglevel.DEBUG:
            style = _Color.GRAY.value
        case Loglevel.WARNING:
            style = _Color.YELLOW.value
        case Loglevel.ERROR:
            style = _Color.RED.value
        case Loglevel.CRITICAL:
            style = _Color.RED.value + _Color.BOLD.value
        case _:
            style = _Color.NOP.value

    return f"{style}{data}{_Color.RESET.value}"


class _ConsoleFormatter(logging.Formatter):
    colored: bool = False

    def format(self, record: logging.LogRecord) -> str:
        msg = datetime.datetime.fromtimestamp(record.created).strftime("%b %d %H:%M:%S.%f")[:-3]
        msg += f" {record.name}: "

        data = record.getMessage()
        msg += _colorize_msg(data, record.levelno) if self.colored else data
        msg += "\n"

        if record.exc_info:
            msg += "".join(traceback.format_exception(*record.exc_info))

        return msg


def setup_logging(
    level: Loglevel | None = None,
    color_mode: ColorMode = ColorMode.AUTO,
    logger_name: str = "optionsparser",
    stream: TextIO | None = None,
) -> QueueListener:
    """Enable and configure console logging.

    :param level: The loglevel to enable for the console handler.
                  If this argument is None, the env variable
                  ``OPTIONSPARSER_LOGLEVEL`` is read, falling back to
                  ``WARNING``.
    :param color_mode: The color mode to use for the console.
    :param logger_name: The logger the handler is attached to.
    :param stream: The stream log records are written to, stderr by default.
    :return: The listener forwarding queued records to the console handler.
    """
    if level is None:
        if (raw := os.getenv("OPTIONSPARSER_LOGLEVEL")) is not None:
            level = Loglevel.from_str(raw)
        else:
            level = Loglevel.WARNING
    if stream is None:
        stream = sys.stderr

    logging.logMultiprocessing = False
    logging.logThreads = False
    logging.logProcesses = False

    logger = logging.getLogger(logger_name)
    # LogLevel cannot be 0 (NOTSET), because only the root logger sends it to its handlers then
    logger.setLevel(1)

    while len(logger.handlers) > 0:
        logger.handlers[0].close()
        logger.removeHandler(logger.handlers[0])

    queue: Queue[Any] = Queue()
    logger.addHandler(QueueHandler(queue))

    handler = logging.StreamHandler(stream)
    handler.setLevel(level)
    handler.terminator = ""  # The formatter terminates each record
    formatter = _ConsoleFormatter()
    formatter.colored = resolve_color_mode(color_mode, stream)
    handler.setFormatter(formatter)

    queue_listener = QueueListener(queue, handler, respect_handler_level=True)
    queue_listener.start()
    atexit.register(queue_listener.stop)
    return queue_listener


def add_file_log_handler(logger_name: str, filepath: Path, level: Loglevel) -> logging.Handler:
    """Additionally writes uncolored records of ``logger_name`` to ``filepath``."""
    queue: Queue[Any] = Queue()
    logger = get_logger(logger_name)
    logger.addHandler(QueueHandler(queue))

    file_handler = logging.FileHandler(filepath, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.terminator = ""
    file_handler.setFormatter(_ConsoleFormatter())

    queue_listener = QueueListener(queue, file_handler, respect_handler_level=True)
    queue_listener.start()
    atexit.register(queue_listener.stop)
    return file_handler


class Logger(logging.Logger):
    def trace(
        self,
        msg: Any,
        *args: Any,
        exc_info: _ExcInfoType = None,
        stack_info: bool = False,
        extra: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        if self.isEnabledFor(Loglevel.TRACE):
            self._log(
                Loglevel.TRACE,
                msg,
                args,
                exc_info=exc_info,
                extra=extra,
                stack_info=stack_info,
                **kwargs,
            )


logging.setLoggerClass(Logger)


def get_logger(name: str) -> Logger:
    return cast(Logger, logging.getLogger(name))
