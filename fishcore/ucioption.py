"""UCI options: typed engine settings looked up by case-insensitive name."""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

OnChange = Callable[["Option"], Optional[str]]
InfoListener = Callable[[Optional[str]], None]

_LEADING_INT = re.compile(r"\s*[+-]?\d+")


class DuplicateOptionError(ValueError):
    """Raised when an option with the same (case-insensitive) name is added twice."""


class OptionType(str, Enum):
    STRING = "string"
    CHECK = "check"
    BUTTON = "button"
    SPIN = "spin"
    COMBO = "combo"


def case_insensitive_key(name: str) -> str:
    """Key under which an option name is stored and compared."""
    return name.lower()


@dataclass(eq=False)
class Option:
    """A single UCI option with its default and current value."""

    type: OptionType
    default_value: str = ""
    current_value: str = ""
    minimum: int = 0
    maximum: int = 0
    on_change: Optional[OnChange] = None
    parent: Optional[OptionsMap] = field(default=None, repr=False)

    @classmethod
    def string(cls, value: str = "", on_change: Optional[OnChange] = None) -> Option:
        return cls(OptionType.STRING, value, value, on_change=on_change)

    @classmethod
    def check(cls, value: bool, on_change: Optional[OnChange] = None) -> Option:
        text = "true" if value else "false"
        return cls(OptionType.CHECK, text, text, on_change=on_change)

    @classmethod
    def button(cls, on_change: Optional[OnChange] = None) -> Option:
        return cls(OptionType.BUTTON, on_change=on_change)

    @classmethod
    def spin(
        cls,
        value: float,
        minimum: int,
        maximum: int,
        on_change: Optional[OnChange] = None,
    ) -> Option:
        text = f"{float(value):f}"
        return cls(OptionType.SPIN, text, text, int(minimum), int(maximum), on_change)

    @classmethod
    def combo(cls, default: str, current: str, on_change: Optional[OnChange] = None) -> Option:
        return cls(OptionType.COMBO, default, current, on_change=on_change)

    def assign(self, value: str) -> Option:
        """Set a new value, silently ignoring values that do not fit the option.

        Raises ValueError when a spin option is given a non-numeric value.
        """
        kind = self.type
        if kind not in (OptionType.BUTTON, OptionType.STRING) and not value:
            return self
        if kind is OptionType.CHECK and value not in ("true", "false"):
            return self
        if kind is OptionType.SPIN:
            number = float(value)
            if number < self.minimum or number > self.maximum:
                return self
        if kind is OptionType.COMBO:
            choices = {case_insensitive_key(token) for token in self.default_value.split()}
            if case_insensitive_key(value) not in choices or value == "var":
                return self

        if kind is OptionType.STRING:
            self.current_value = "" if value == "<empty>" else value
        elif kind is not OptionType.BUTTON:
            self.current_value = value

        if self.on_change is not None:
            message = self.on_change(self)
            if message is not None and self.parent is not None:
                self.parent._notify(message)
        return self

    def matches(self, value: str) -> bool:
        """Case-insensitive comparison of a combo option's current value."""
        if self.type is not OptionType.COMBO:
            raise TypeError("only combo options can be matched against a string")
        return case_insensitive_key(self.current_value) == case_insensitive_key(value)

    def __int__(self) -> int:
        if self.type is OptionType.CHECK:
            return int(self.current_value == "true")
        if self.type is OptionType.SPIN:
            found = _LEADING_INT.match(self.current_value)
            if found is None:
                raise ValueError(f"not an integer: {self.current_value!r}")
            return int(found.group())
        raise TypeError(f"a {self.type.value} option has no integer value")

    def __str__(self) -> str:
        return self.current_value


class OptionsMap:
    """Options keyed by case-insensitive name, kept in insertion order."""

    def __init__(self) -> None:
        self._options: dict[str, tuple[str, Option]] = {}
        self._info: Optional[InfoListener] = None

    def add_info_listener(self, listener: InfoListener) -> None:
        self._info = listener

    def _notify(self, message: Optional[str]) -> None:
        if self._info is not None:
            self._info(message)

    def setoption(self, command: str) -> None:
        """Apply the arguments of a 'setoption' command: 'name <name> value <value>'."""
        tokens = iter(command.split())
        next(tokens, None)  # the "name" keyword

        name_parts = []
        for token in tokens:
            if token == "value":
                break
            name_parts.append(token)
        name = " ".join(name_parts)
        value = " ".join(tokens)

        if name in self:
            self[name].assign(value)
        else:
            print(f"No such option: {name}")

    def __getitem__(self, name: str) -> Option:
        try:
            return self._options[case_insensitive_key(name)][1]
        except KeyError:
            raise KeyError(name) from None

    def add(self, name: str, option: Option) -> None:
        key = case_insensitive_key(name)
        if key in self._options:
            raise DuplicateOptionError(f'Option "{name}" was already added!')
        option.parent = self
        self._options[key] = (name, option)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and case_insensitive_key(name) in self._options

    def __len__(self) -> int:
        return len(self._options)

    def render(self) -> str:
        """The option list as sent in reply to 'uci', each line preceded by a newline."""
        parts = []
        for name, option in self._options.values():
            line = f"\noption name {name} type {option.type.value}"
            if option.type in (OptionType.CHECK, OptionType.COMBO):
                line += f" default {option.default_value}"
            elif option.type is OptionType.STRING:
                line += f" default {option.default_value or '<empty>'}"
            elif option.type is OptionType.SPIN:
                line += (
                    f" default {int(float(option.default_value))}"
                    f" min {option.minimum} max {option.maximum}"
                )
            parts.append(line)
        return "".join(parts)