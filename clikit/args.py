"""Positional arguments: parsed argument lists and typed argument definitions."""

from __future__ import annotations

import re
import warnings
from dataclasses import dataclass, field
from datetime import datetime, timezone, tzinfo
from typing import Any, Callable, Iterable, Iterator

from clikit.tracing import tracef

RFC3339 = "%Y-%m-%dT%H:%M:%S%z"
DATE_TIME = "%Y-%m-%d %H:%M:%S"

_INT64_RANGE = (-(1 << 63), (1 << 63) - 1)
_UINT64_RANGE = (0, (1 << 64) - 1)
_LEGACY_OCTAL = re.compile(r"[+-]?0[0-7_]+")


class ArgumentError(ValueError):
    """Raised when a positional argument cannot be parsed."""


@dataclass(frozen=True)
class ParsedArgs:
    """The positional arguments left over after flag parsing."""

    values: tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "values", tuple(self.values))

    def get(self, n):
        """Return the n-th argument, or an empty string."""
        if 0 <= n < len(self.values):
            return self.values[n]
        return ""

    def first(self):
        """Return the first argument, or an empty string."""
        return self.get(0)

    def tail(self):
        """Return every argument but the first."""
        return list(self.values[1:])

    def present(self):
        """Return whether any argument is present."""
        return bool(self.values)

    def slice(self):
        """Return a copy of the arguments as a list."""
        return list(self.values)

    def __len__(self):
        return len(self.values)

    def __iter__(self) -> Iterator[str]:
        return iter(self.values)


def _syntax_error(text):
    return ArgumentError(f'parsing "{text}": invalid syntax')


def _parse_int(text, base, *, signed):
    if not text or text != text.strip():
        raise _syntax_error(text)
    if not signed and text[0] in "+-":
        raise _syntax_error(text)
    if base != 0 and "_" in text:
        raise _syntax_error(text)
    try:
        number = int(text, base)
    except ValueError:
        if base == 0 and _LEGACY_OCTAL.fullmatch(text):
            try:
                number = int(text, 8)
            except ValueError:
                raise _syntax_error(text) from None
        else:
            raise _syntax_error(text) from None
    low, high = _INT64_RANGE if signed else _UINT64_RANGE
    if not low <= number <= high:
        raise ArgumentError(f'parsing "{text}": value out of range')
    return number


def _parse_float(text):
    if not text or text != text.strip() or "_" in text:
        raise _syntax_error(text)
    try:
        return float(text)
    except ValueError:
        raise _syntax_error(text) from None


def _parse_timestamp(text, layouts, tz):
    parsed = None
    if layouts:
        for layout in layouts:
            try:
                parsed = datetime.strptime(text, layout)
                break
            except ValueError:
                continue
        if parsed is None:
            raise ArgumentError(f'parsing time "{text}": does not match any layout')
    else:
        iso = text[:-1] + "+00:00" if text.endswith("Z") else text
        try:
            parsed = datetime.fromisoformat(iso)
        except ValueError:
            raise ArgumentError(f'parsing time "{text}": invalid format') from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz or timezone.utc)
    return parsed


def _parse_string_map(text, trim_space):
    result = {}
    for item in text.split(","):
        key, sep, value = item.partition("=")
        if not sep:
            raise ArgumentError(f'item "{item}" is missing separator "="')
        if trim_space:
            key, value = key.strip(), value.strip()
        result[key] = value
    return result


@dataclass(kw_only=True, eq=False)
class Argument:
    """A single positional argument; ``converter`` turns its word into a value."""

    name: str = ""
    value: Any = None
    destination: Callable[[Any], None] | None = None
    usage_text: str = ""
    converter: Callable[[str], Any] = str
    _parsed: bool = field(default=False, init=False, repr=False)
    _value: Any = field(default=None, init=False, repr=False)

    def has_name(self, name):
        return name == self.name

    def usage(self):
        return self.usage_text or self.name

    def convert(self, text):
        """Turn one command-line word into this argument's value."""
        return self.converter(text)

    def parse(self, args):
        """Consume at most one word from ``args`` and return the rest."""
        remaining = list(args)
        tracef("calling arg %s parse with args %r", self.name, remaining)
        self._value = self.value
        self._parsed = True
        if remaining:
            self._value = self.convert(remaining[0])
            tracef("set arg %s one value %r", self.name, self._value)
        if self.destination is not None:
            self.destination(self._value)
        return remaining[1:]

    def get(self):
        """Return the parsed value, or the default before parsing."""
        return self._value if self._parsed else self.value


@dataclass(kw_only=True, eq=False)
class ArgumentList:
    """A positional argument that may occur between ``min`` and ``max`` times.

    ``max`` of -1 means unlimited; ``max`` of 0 disables parsing.
    """

    name: str = ""
    value: Any = None
    destination: Callable[[list], None] | None = None
    usage_text: str = ""
    min: int = 0
    max: int = 0
    converter: Callable[[str], Any] = str
    _values: list | None = field(default=None, init=False, repr=False)

    def has_name(self, name):
        return name == self.name

    def usage(self):
        if self.usage_text:
            return self.usage_text
        if self.min == 0:
            return f"[{self.name}]" if self.max == 1 else f"[{self.name} ...]"
        return f"{self.name} [{self.name} ...]"

    def convert(self, text):
        """Turn one command-line word into one element of this argument."""
        return self.converter(text)

    def parse(self, args):
        """Consume words from ``args`` within the bounds and return the rest."""
        remaining = list(args)
        tracef("calling arg %s parse with args %r", self.name, remaining)
        if self.max == 0:
            warnings.warn(f"args {self.name} has max 0, not parsing argument", stacklevel=2)
            return remaining
        if self.max != -1 and self.min > self.max:
            warnings.warn(
                f"args {self.name} has min[{self.min}] > max[{self.max}], not parsing argument",
                stacklevel=2,
            )
            return remaining

        self._values = []
        for word in remaining:
            self._values.append(self.convert(word))
            if self.max > -1 and len(self._values) >= self.max:
                break

        count = len(self._values)
        if count < self.min:
            raise ArgumentError(
                f"sufficient count of arg {self.name} not provided, given {count} expected {self.min}"
            )
        if self.destination is not None:
            self.destination(list(self._values))
        return remaining[count:]

    def get(self):
        """Return the parsed values, or an empty list before parsing."""
        return list(self._values) if self._values is not None else []


@dataclass(kw_only=True, eq=False)
class _StringConversion:
    trim_space: bool = False

    def convert(self, text):
        return text.strip() if self.trim_space else text


@dataclass(kw_only=True, eq=False)
class _IntConversion:
    base: int = 0

    def convert(self, text):
        return _parse_int(text, self.base, signed=True)


@dataclass(kw_only=True, eq=False)
class _UintConversion:
    base: int = 0

    def convert(self, text):
        return _parse_int(text, self.base, signed=False)


@dataclass(kw_only=True, eq=False)
class _FloatConversion:
    def convert(self, text):
        return _parse_float(text)


@dataclass(kw_only=True, eq=False)
class _TimestampConversion:
    layouts: tuple[str, ...] = ()
    tz: tzinfo | None = None

    def convert(self, text):
        return _parse_timestamp(text, self.layouts, self.tz)


@dataclass(kw_only=True, eq=False)
class _StringMapConversion:
    trim_space: bool = False

    def convert(self, text):
        return _parse_string_map(text, self.trim_space)


@dataclass(kw_only=True, eq=False)
class StringArg(_StringConversion, Argument):
    value: str = ""


@dataclass(kw_only=True, eq=False)
class IntArg(_IntConversion, Argument):
    value: int = 0


@dataclass(kw_only=True, eq=False)
class UintArg(_UintConversion, Argument):
    value: int = 0


@dataclass(kw_only=True, eq=False)
class FloatArg(_FloatConversion, Argument):
    value: float = 0.0


@dataclass(kw_only=True, eq=False)
class TimestampArg(_TimestampConversion, Argument):
    value: datetime | None = None


@dataclass(kw_only=True, eq=False)
class StringMapArg(_StringMapConversion, Argument):
    value: dict | None = None


@dataclass(kw_only=True, eq=False)
class StringArgs(_StringConversion, ArgumentList):
    value: str = ""


@dataclass(kw_only=True, eq=False)
class IntArgs(_IntConversion, ArgumentList):
    value: int = 0


@dataclass(kw_only=True, eq=False)
class UintArgs(_UintConversion, ArgumentList):
    value: int = 0


@dataclass(kw_only=True, eq=False)
class FloatArgs(_FloatConversion, ArgumentList):
    value: float = 0.0


@dataclass(kw_only=True, eq=False)
class TimestampArgs(_TimestampConversion, ArgumentList):
    value: datetime | None = None


def any_arguments() -> list:
    """Return an argument set that accepts any number of string words."""
    return [StringArgs(max=-1)]


def parse_all(arguments: Iterable, args):
    """Feed ``args`` through each argument in turn and return what is left."""
    remaining = list(args)
    for argument in arguments:
        remaining = argument.parse(remaining)
    return remaining