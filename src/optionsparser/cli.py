# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

import sys
from collections.abc import Sequence
from importlib.metadata import PackageNotFoundError, version

import exitcode

from optionsparser.config import load_config_file
from optionsparser.exceptions import ConfigError
from optionsparser.log import Loglevel, add_file_log_handler, get_logger, setup_logging
from optionsparser.option import OptionType
from optionsparser.parser import OptionsParser

logger = get_logger(__name__)

CONFIG_SECTION = "optionsparser.demo"


def _version() -> str:
    try:
        return version("optionsparser")
    except PackageNotFoundError:
        return "unknown"


def build_parser() -> OptionsParser:
    options = OptionsParser(
        header=f"optionsparser demo {_version()}\nusage: optionsparser [options] <input>\n",
        footer="Defaults can be set in the [optionsparser.demo] table of optionsparser.toml",
    )

    option = options.add_option("help", "h", OptionType.BOOLEAN)
    option.long_flag = "help"
    option.help_text = "Display this help text and exit"

    option = options.add_option("verbose", "v", OptionType.BOOLEAN)
    option.long_flag = "verbose"
    option.help_text = "Log debug messages to stderr"

    option = options.add_option("logfile", "l", OptionType.FILE)
    option.long_flag = "logfile"
    option.help_text = "Set a logfile to enable logging"

    option = options.add_option("config", "c", OptionType.FILE)
    option.long_flag = "config"
    option.help_text = "Read defaults from this TOML file"

    option = options.add_option("input", "", OptionType.FILE, required=True)
    option.must_exist = True
    option.help_text = "The file to process"

    return options


def run(argv: Sequence[str]) -> int:
    options = build_parser()
    ok = options.parse_arguments(argv)

    if options.get_opt_boolean("help"):
        print(options.get_help_text())
        return exitcode.OK

    try:
        config, config_path = load_config_file(options.get_opt_file("config"))
    except (ConfigError, FileNotFoundError) as e:
        print(f"invalid config: {e}", file=sys.stderr)
        return exitcode.CONFIG
    if config_path is not None:
        options.apply_config(config, CONFIG_SECTION)

    setup_logging(Loglevel.DEBUG if options.get_opt_boolean("verbose") else None)

    if (logfile := options.get_opt_file("logfile")) is not None:
        add_file_log_handler("optionsparser", logfile, Loglevel.DEBUG)

    if config_path is not None:
        logger.debug(f"loaded config: {config_path}")

    if not ok:
        print(options.get_error_message(), file=sys.stderr)
        print("try 'optionsparser --help'", file=sys.stderr)
        return exitcode.USAGE
    if options.get_error_message() != "":
        print(options.get_error_message(), file=sys.stderr)

    if len(missing := options.missing_paths()) > 0:
        for o in missing:
            print(f"No such file: {options.get_opt_file(o.id)}", file=sys.stderr)
        return exitcode.NOINPUT

    for o in options.options:
        if o.value is None:
            continue
        if o.type == OptionType.FILE:
            print(f"{o.id}: {options.get_opt_file(o.id)}")
        else:
            print(f"{o.id}: {options.get_opt_string(o.id)}")

    return exitcode.OK


def main() -> None:
    sys.exit(run(sys.argv[1:]))


if __name__ == "__main__":
    main()
