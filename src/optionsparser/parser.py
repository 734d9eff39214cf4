# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Unix style command line parser.

Options are registered on an :class:`OptionsParser`, which then consumes a
list of arguments (without the program name), fills the matched options and
collects diagnostics. Usage::

    options = OptionsParser(header="My console application")

    option = options.add_option("help", "h", OptionType.BOOLEAN)
    option.long_flag = "help"
    option.help_text = "Display this help text and exit"

    option = options.add_option("logfile", "l", OptionType.FILE)
    option.long_flag = "logfile"
    option.help_text = "Set a logfile to enable logging"

    if not options.parse_arguments(sys.argv[1:]):
        print(options.get_error_message())
        sys.exit(exitcode.USAGE)
    if options.get_error_message() != "":  # there can also be warnings
        print(options.get_error_message())
"""

from __future__ import annotations

import dataclasses
from collections.abc import Sequence
from enum import Enum, unique
from pathlib import Path
from typing import Any

from optionsparser.config import Config
from optionsparser.exceptions import ArgumentsError
from optionsparser.log import get_logger
from optionsparser.option import Option, OptionType
from optionsparser.values import (
    resolve_path,
    to_bool,
    to_float,
    to_int,
    to_path,
    to_string,
)

logger = get_logger(__name__)

END_OF_OPTIONS = "--"


@unique
class Severity(Enum):
    #: Makes the parse fail.
    ERROR = "error"
    #: Reported, but the parse still succeeds.
    WARNING = "warning"


@dataclasses.dataclass(frozen=True)
class Diagnostic:
    severity: Severity
    message: str

    def __str__(self) -> str:
        return self.message


@dataclasses.dataclass
class ParseResult:
    """Outcome of one pass over the arguments.

    ``ok`` is false as soon as one diagnostic has :attr:`Severity.ERROR`.
    Warnings are kept in ``diagnostics`` as well, in the order they occurred.
    """

    ok: bool = True
    diagnostics: list[Diagnostic] = dataclasses.field(default_factory=list)

    def add(self, severity: Severity, message: str) -> None:
        logger.debug(f"{severity.value}: {message}")
        self.diagnostics.append(Diagnostic(severity, message))
        if severity == Severity.ERROR:
            self.ok = False

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.WARNING]

    @property
    def error_message(self) -> str:
        return "\n".join(d.message for d in self.diagnostics)

    def raise_for_errors(self) -> None:
        if not self.ok:
            raise ArgumentsError(self.errors)


class OptionsParser:
    """Owns a list of :class:`Option` and parses arguments into them.

    Lookups by id, short flag and long flag scan the options in
    registration order and stop at the first match, so a later option with
    a duplicate id or flag is shadowed by the earlier one.
    """

    def __init__(self, header: str = "", footer: str = "") -> None:
        #: Printed before the option lines of the help text.
        self.header = header
        #: Printed after the option lines of the help text.
        self.footer = footer
        self.options: list[Option] = []
        self.error_message = ""
        self.last_result: ParseResult | None = None

    def add_option(
        self,
        option_id: str,
        short_flag: str,
        type: OptionType,
        required: bool = False,
    ) -> Option:
        """Creates an option and returns it for further setup.

        :param option_id: The key used by the ``get_opt_*`` accessors.
        :param short_flag: Matched as ``-<short_flag>``; empty for none.
        :param type: Determines how the value is consumed and read.
        :param required: Whether :meth:`parse` fails if the option is missing.
        """
        if self.get_option(option_id) is not None:
            logger.debug(f"option id {option_id!r} already registered; lookups return the first")
        if short_flag != "" and any(o.short_flag == short_flag for o in self.options):
            logger.debug(f"short flag -{short_flag} already registered; it matches the first")

        option = Option(id=option_id, short_flag=short_flag, type=type, required=required)
        self.options.append(option)
        return option

    def find_option(self, argument: str, end_of_arguments: bool) -> Option | None:
        """Returns the option ``argument`` refers to.

        A bare argument, or any argument after ``--``, is assigned to the
        first positional option which is not yet set.
        """
        if not end_of_arguments and argument.startswith("--"):
            name = argument[2:]
            for o in self.options:
                if o.long_flag == name:
                    return o
        elif not end_of_arguments and argument.startswith("-"):
            name = argument[1:]
            for o in self.options:
                if o.short_flag == name:
                    return o
        else:
            for o in self.options:
                if o.is_positional and not o.is_set:
                    o.set_value(argument)
                    return o

        return None

    def parse(
        self,
        arguments: Sequence[str],
        fail_on_unknown_option: bool = True,
    ) -> ParseResult:
        """Reads ``arguments`` into the registered options.

        The first occurrence of an option wins; repeated occurrences are
        ignored. User errors never raise, they are recorded in the result.

        :param arguments: The argument vector without the program name.
        :param fail_on_unknown_option: Whether an argument matching no option
                                       is an error or only a warning.
        """
        result = ParseResult()
        end_of_arguments = False

        pos = 0
        while pos < len(arguments):
            argument = arguments[pos]
            pos += 1

            if argument == END_OF_OPTIONS:
                end_of_arguments = True
                continue

            if (option := self.find_option(argument, end_of_arguments)) is None:
                if fail_on_unknown_option:
                    result.add(Severity.ERROR, f"Unknown option: {argument}")
                else:
                    result.add(Severity.WARNING, f"Ignoring unknown option: {argument}")
                continue

            logger.trace(f"{argument!r} matches option {option.id!r}")

            if option.is_set:
                continue

            match option.type:
                case OptionType.BOOLEAN:
                    option.set_value(True)
                case OptionType.FILE:
                    if pos < len(arguments):
                        option.set_value(resolve_path(arguments[pos]))
                        pos += 1
                    else:
                        result.add(Severity.ERROR, f"Missing path for argument {argument}")
                case _:
                    if pos < len(arguments):
                        option.set_value(arguments[pos])
                        pos += 1
                    else:
                        result.add(Severity.ERROR, f"Missing value for argument {argument}")

        for o in self.options:
            if o.required and not o.is_set:
                result.add(Severity.ERROR, f"Argument is required: {o.get_option_name()}")

        return result

    def parse_arguments(
        self,
        arguments: Sequence[str],
        fail_on_unknown_option: bool = True,
    ) -> bool:
        """Like :meth:`parse`, but keeps the diagnostics as text.

        Returns whether all requirements are met. Check
        :meth:`get_error_message` even on success, it may contain warnings.
        """
        self.error_message = ""
        self.last_result = self.parse(arguments, fail_on_unknown_option)
        self.error_message = self.last_result.error_message
        return self.last_result.ok

    def get_error_message(self) -> str:
        return self.error_message

    def get_help_text(self) -> str:
        text = self.header
        for o in self.options:
            if text != "":
                text += "\n"
            text += o.get_help_text()
        if self.footer != "":
            if text != "":
                text += "\n"
            text += self.footer
        return text

    def get_option(self, option_id: str) -> Option | None:
        for o in self.options:
            if o.id == option_id:
                return o
        return None

    def is_option_set(self, option_id: str) -> bool:
        if (o := self.get_option(option_id)) is not None:
            return o.is_set
        return False

    def get_opt_string(self, option_id: str) -> str:
        if (o := self.get_option(option_id)) is not None:
            return to_string(o.value)
        return ""

    def get_opt_file(self, option_id: str) -> Path | None:
        if (o := self.get_option(option_id)) is not None:
            return to_path(o.value)
        return None

    def get_opt_int(self, option_id: str) -> int:
        if (o := self.get_option(option_id)) is not None:
            return to_int(o.value)
        return 0

    def get_opt_double(self, option_id: str) -> float:
        if (o := self.get_option(option_id)) is not None:
            return to_float(o.value)
        return 0.0

    def get_opt_boolean(self, option_id: str) -> bool:
        if (o := self.get_option(option_id)) is not None:
            return to_bool(o.value)
        return False

    def apply_config(self, config: Config, section: str) -> None:
        """Seeds option defaults from the table ``section`` of ``config``.

        Keys are option ids. Seeded values behave like defaults set by the
        caller: they show up in the help text, a command line argument
        overrides them and they do not satisfy ``required``.
        """
        table: Any = config.get_value(section)
        if not isinstance(table, dict):
            return

        for key, value in table.items():
            if (o := self.get_option(key)) is None:
                logger.debug(f"config key {section}.{key} matches no option")
                continue
            if o.is_set:
                continue
            o.value = value if isinstance(value, str | int | float | bool) else str(value)

    def missing_paths(self) -> list[Option]:
        """Returns the set file options with ``must_exist`` whose path does not exist.

        :meth:`parse` never touches the file system; callers decide when to check.
        """
        missing = []
        for o in self.options:
            if o.type != OptionType.FILE or not o.must_exist or not o.is_set:
                continue
            if (path := to_path(o.value)) is None or not path.exists():
                missing.append(o)
        return missing
