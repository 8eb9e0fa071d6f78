"""Expose engine parameters as spin options for tuning sessions."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Optional, Union

from .ucioption import Option, OptionsMap

Range = tuple[int, int]


def default_range(value: int) -> Range:
    """Default bounds: from zero to twice the value, on the value's side."""
    return (0, 2 * value) if value > 0 else (2 * value, 0)


class SetRange:
    """Bounds for tuned values: either a function of the value or a fixed pair."""

    def __init__(self, bounds: Union[Callable[[int], Range], int], maximum: Optional[int] = None):
        if callable(bounds):
            if maximum is not None:
                raise TypeError("a range function takes no maximum")
            self._function: Optional[Callable[[int], Range]] = bounds
            self._bounds: Range = (0, 0)
        else:
            if maximum is None:
                raise TypeError("a fixed range needs both minimum and maximum")
            self._function = None
            self._bounds = (int(bounds), int(maximum))

    def __call__(self, value: int) -> Range:
        if self._function is not None:
            return self._function(value)
        return self._bounds


DEFAULT_RANGE = SetRange(default_range)


@dataclass
class Tunable:
    """A mutable integer parameter that tuning can update in place."""

    value: int

    def __int__(self) -> int:
        return self.value


def next_name(names: str) -> tuple[str, str]:
    """Split the first name off a comma-separated list.

    Whitespace is dropped and commas inside parentheses are joined, so a
    name stays whole. Returns the name and the rest of the list.
    """
    name = ""
    while True:
        token, _, names = names.partition(",")
        words = token.split()
        if words:
            name += words[0]
        if name.count("(") == name.count(")"):
            return name, names
        if not names:
            raise ValueError(f"unbalanced parentheses in name: {name!r}")


@dataclass
class _ValueEntry:
    name: str
    get: Callable[[], int]
    set: Callable[[int], None]
    set_range: SetRange


@dataclass
class _PostUpdateEntry:
    name: str
    function: Callable[[], object]


def _tunable_entry(name: str, item: Tunable, set_range: SetRange) -> _ValueEntry:
    def setter(value: int) -> None:
        item.value = value

    return _ValueEntry(name, lambda: item.value, setter, set_range)


def _list_entry(name: str, values: list, index: int, set_range: SetRange) -> _ValueEntry:
    def setter(value: int) -> None:
        values[index] = value

    return _ValueEntry(name, lambda: values[index], setter, set_range)


class Tune:
    """Registry of tuned parameters and the options that drive them."""

    def __init__(self, results: Optional[Mapping[str, int]] = None) -> None:
        self._results = dict(results or {})
        self._entries: list[Union[_ValueEntry, _PostUpdateEntry]] = []
        self._last_option: Optional[Option] = None
        self.update_on_last = False
        self.options: Optional[OptionsMap] = None

    def add(self, names: str, *args: object) -> None:
        """Register parameters named by a comma-separated list, one name per argument.

        Arguments may be Tunable values, (nested) lists of ints or Tunables
        tuned in place, a SetRange that applies to the arguments after it,
        or a function to call after values have been updated.
        """
        set_range = DEFAULT_RANGE
        for arg in args:
            name, names = next_name(names)
            if isinstance(arg, SetRange):
                set_range = arg
            elif isinstance(arg, Tunable):
                self._entries.append(_tunable_entry(name, arg, set_range))
            elif isinstance(arg, list):
                self._add_list(name, arg, set_range)
            elif callable(arg):
                self._entries.append(_PostUpdateEntry(name, arg))
            else:
                raise TypeError(
                    f"cannot tune {name!r} of type {type(arg).__name__}; wrap it in Tunable"
                )

    def _add_list(self, name: str, values: list, set_range: SetRange) -> None:
        for index, item in enumerate(values):
            item_name = f"{name}[{index}]"
            if isinstance(item, list):
                self._add_list(item_name, item, set_range)
            elif isinstance(item, Tunable):
                self._entries.append(_tunable_entry(item_name, item, set_range))
            elif isinstance(item, int) and not isinstance(item, bool):
                self._entries.append(_list_entry(item_name, values, index, set_range))
            else:
                raise TypeError(f"cannot tune {item_name!r} of type {type(item).__name__}")

    def make_option(
        self, options: OptionsMap, name: str, value: int, set_range: SetRange
    ) -> None:
        """Add a spin option for a parameter and print its tuning line."""
        low, high = set_range(value)
        if low == high:
            return
        if name in self._results:
            value = self._results[name]
            low, high = set_range(value)

        options.add(name, Option.spin(value, low, high, self._on_tune))
        self._last_option = options[name]
        print(f"{name},{value},{low},{high},{(high - low) / 20.0:g},0.0020")

    def _on_tune(self, option: Option) -> None:
        if not self.update_on_last or self._last_option is option:
            self.read_options()
        return None

    def init(self, options: OptionsMap) -> None:
        """Create the options for all registered parameters, then read them back."""
        self.options = options
        for entry in self._entries:
            if isinstance(entry, _ValueEntry):
                self.make_option(options, entry.name, entry.get(), entry.set_range)
        self.read_options()

    def read_options(self) -> None:
        """Copy option values into the parameters and run post-update functions."""
        if self.options is None:
            raise RuntimeError("options have not been initialised")
        for entry in self._entries:
            if isinstance(entry, _PostUpdateEntry):
                entry.function()
            elif entry.name in self.options:
                entry.set(int(self.options[entry.name]))