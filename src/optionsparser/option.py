# SPDX-FileCopyrightText: AISEC Pentesting Team
#
# SPDX-License-Identifier: Apache-2.0

from enum import Enum, unique

from pydantic import BaseModel, PrivateAttr

from optionsparser.values import OptionValue, to_string

# Column at which the description starts in a help line.
HELP_COLUMN = 30


@unique
class OptionType(Enum):
    """OptionType determines how a value is consumed and read back."""

    #: Takes a free form argument.
    STRING = "string"
    #: Takes a path. Relative paths are resolved against the working directory.
    FILE = "file"
    #: Takes an argument that is read back as an integer.
    INTEGER = "integer"
    #: Takes an argument that is read back as a float.
    DOUBLE = "double"
    #: A flag without argument.
    BOOLEAN = "boolean"


class Option(BaseModel):
    """A single command line option.

    An option without ``short_flag`` and ``long_flag`` is positional: it
    is filled by the first bare token that no other positional option took.
    ``value`` may be seeded with a default before parsing; only
    :meth:`set_value` marks the option as set.
    """

    id: str
    short_flag: str = ""
    long_flag: str = ""
    help_text: str = ""
    required: bool = False
    must_exist: bool = False
    type: OptionType = OptionType.STRING
    value: OptionValue = None

    _is_set: bool = PrivateAttr(default=False)

    @property
    def is_set(self) -> bool:
        return self._is_set

    @property
    def is_positional(self) -> bool:
        return self.short_flag == "" and self.long_flag == ""

    def is_option_set(self) -> bool:
        """After parsing, returns whether the user provided this option."""
        return self._is_set

    def set_value(self, value: OptionValue) -> None:
        self.value = value
        self._is_set = True

    def get_option_name(self) -> str:
        """Returns a label for diagnostics, never empty as long as ``id`` is not."""
        if self.short_flag == "":
            if self.long_flag != "":
                return self.long_flag
            return self.id
        if self.long_flag == "":
            return self.short_flag
        return f"{self.short_flag} | {self.long_flag}"

    def get_variable_name(self) -> str:
        match self.type:
            case OptionType.STRING:
                return "<name>"
            case OptionType.FILE:
                return "<filename>"
            case OptionType.INTEGER | OptionType.DOUBLE:
                return "<number>"
            case _:
                return ""

    def get_help_text(self) -> str:
        text = f"  -{self.short_flag}  " if self.short_flag != "" else "      "
        if self.long_flag != "":
            text += f"--{self.long_flag}"
        text += f" {self.get_variable_name()}"

        if self.help_text != "":
            text = text.ljust(HELP_COLUMN) + self.help_text
        if self.value is not None and not self._is_set:
            text += f" (default: {to_string(self.value)})"
        return text
