# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from optionsparser.parser import Diagnostic


class OptionsParserError(Exception):
    pass


class ArgumentsError(OptionsParserError):
    def __init__(self, diagnostics: list[Diagnostic]):
        self.diagnostics = diagnostics

        super().__init__(str(self))

    def __str__(self) -> str:
        return "\n".join(d.message for d in self.diagnostics)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({repr(str(self))})"


class ConfigError(OptionsParserError, ValueError):
    def __init__(self, path: str, message: str):
        self.path = path
        self.message = message

        super().__init__(f"{path}: {message}")
