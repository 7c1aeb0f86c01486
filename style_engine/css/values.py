"""
Typed declaration values: keywords, lengths and colours.
"""

import math
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple

from tinycss2 import color3


class Unit(Enum):
    """Length units understood by the stylesheet parser."""
    PX = "px"
    PERCENT = "%"


class Value:
    """Base class of the declaration value variants."""

    __slots__ = ()

    def _key(self) -> Tuple:
        raise NotImplementedError

    def to_css(self) -> str:
        """Serialize the value in a form the stylesheet parser reads back."""
        raise NotImplementedError

    def to_color(self) -> Optional['Color']:
        """Interpret the value as a colour, or return None if it is not one."""
        return None

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash((type(self).__name__,) + self._key())


class Keyword(Value):
    """A bare identifier such as ``auto`` or ``powderblue``."""

    __slots__ = ('name',)

    def __init__(self, name: str):
        self.name = name

    def _key(self) -> Tuple:
        return (self.name,)

    def to_css(self) -> str:
        return self.name

    def to_color(self) -> Optional['Color']:
        """
        Resolve a CSS colour keyword (``red``, ``transparent``, ...).

        Returns None for keywords that are not colour names, and for
        ``currentColor``, which depends on context the value does not have.
        """
        rgba = color3.parse_color(self.name)
        if rgba is None or isinstance(rgba, str):
            return None
        return Color(*(_channel(c) for c in rgba))

    def __repr__(self):
        return f"Keyword({self.name!r})"


class Length(Value):
    """A number with a unit."""

    __slots__ = ('value', 'unit')

    def __init__(self, value: float, unit: Unit):
        self.value = float(value)
        if not math.isfinite(self.value):
            raise ValueError(f"Length value must be finite, got {value!r}")
        self.unit = unit

    def _key(self) -> Tuple:
        return (self.value, self.unit)

    def to_px(self, reference: float = 0.0) -> float:
        """
        Return the length in pixels.

        Args:
            reference: Length in pixels that percentages are taken of
        """
        if self.unit is Unit.PERCENT:
            return self.value * reference / 100.0
        return self.value

    def to_css(self) -> str:
        return f"{_format_number(self.value)}{self.unit.value}"

    def __repr__(self):
        return f"Length({self.value!r}, {self.unit})"


class Color(Value):
    """An RGBA colour with one byte per channel."""

    __slots__ = ('r', 'g', 'b', 'a')

    def __init__(self, r: int, g: int, b: int, a: int = 255):
        for channel in (r, g, b, a):
            if not 0 <= channel <= 255:
                raise ValueError(f"Colour channel {channel!r} out of range 0-255")
        self.r = r
        self.g = g
        self.b = b
        self.a = a

    def _key(self) -> Tuple:
        return (self.r, self.g, self.b, self.a)

    def to_color(self) -> Optional['Color']:
        return self

    def to_css(self) -> str:
        if self.a != 255:
            raise ValueError(f"{self!r} has an alpha channel, which hex notation cannot express")
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    def __repr__(self):
        return f"Color({self.r}, {self.g}, {self.b}, {self.a})"


def _channel(fraction: float) -> int:
    return max(0, min(255, int(round(fraction * 255))))


def _format_number(number: float) -> str:
    if number == int(number):
        return str(int(number))
    # repr() keeps every significant digit; Decimal drops the exponent form
    return format(Decimal(repr(number)), "f")
