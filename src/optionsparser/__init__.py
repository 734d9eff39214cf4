# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

"""Unix Style Command Line Option Parsing.

This is the `optionsparser` package. Options with a short flag (``-h``), a
long flag (``--help``) or no flag at all (positional) are registered on an
`OptionsParser`, which parses an argument vector into them and generates
help and error texts.
"""

from optionsparser.exceptions import ArgumentsError, ConfigError, OptionsParserError
from optionsparser.option import Option, OptionType
from optionsparser.parser import Diagnostic, OptionsParser, ParseResult, Severity
from optionsparser.values import OptionValue

# Public Re-Exports
__all__ = (
    "ArgumentsError",
    "ConfigError",
    "Diagnostic",
    "Option",
    "OptionType",
    "OptionValue",
    "OptionsParser",
    "OptionsParserError",
    "ParseResult",
    "Severity",
)
