"""
Error types raised by the markup and stylesheet parsers.

Every parse error is fatal for the call that raised it: the parsers never
return a partial tree or rule list.
"""

from typing import Optional


class StyleEngineError(Exception):
    """Base class for all errors raised by the style engine."""


class ParseError(StyleEngineError):
    """
    Raised when markup or stylesheet source cannot be parsed.

    Attributes:
        position: Character offset into the source where parsing failed
    """

    def __init__(self, message: str, position: Optional[int] = None):
        self.position = position
        if position is not None:
            message = f"{message} (at offset {position})"
        super().__init__(message)


class UnexpectedEof(ParseError):
    """The input ended where another character was required."""

    def __init__(self, position: int, expected: Optional[str] = None):
        self.expected = expected
        message = "Unexpected end of input"
        if expected is not None:
            message = f"{message}, expected {expected!r}"
        super().__init__(message, position)


class UnexpectedCharacter(ParseError):
    """A required literal or delimiter did not match the input."""

    def __init__(self, found: str, position: int, expected: Optional[str] = None):
        self.found = found
        self.expected = expected
        message = f"Unexpected character {found!r}"
        if expected is not None:
            message = f"{message}, expected {expected!r}"
        super().__init__(message, position)


class MismatchedTag(ParseError):
    """A closing tag name differs from the element's opening tag name."""

    def __init__(self, expected: str, found: str, position: int):
        self.expected = expected
        self.found = found
        super().__init__(f"Closing tag </{found}> does not match <{expected}>", position)


class UnrecognizedUnit(ParseError):
    """A length carried a unit other than px or %."""

    def __init__(self, unit: str, position: int):
        self.unit = unit
        super().__init__(f"Unrecognized unit {unit!r}", position)


class InvalidHex(ParseError):
    """A colour byte-pair is not two hexadecimal digits."""

    def __init__(self, pair: str, position: int):
        self.pair = pair
        super().__init__(f"Invalid hex pair {pair!r}", position)


class InvalidNumber(ParseError):
    """A length literal could not be read as a number."""

    def __init__(self, text: str, position: int):
        self.text = text
        super().__init__(f"Invalid number {text!r}", position)
