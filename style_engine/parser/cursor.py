"""
Character cursor shared by the markup and stylesheet parsers.
"""

from typing import Callable, Optional

from style_engine.errors import UnexpectedCharacter, UnexpectedEof


class TextCursor:
    """
    Tracks a position in an immutable source string.

    Positions are character offsets, so a multi-byte character is always
    consumed as a single unit.
    """

    def __init__(self, source: str):
        self.source = source
        self.position = 0

    def at_end(self) -> bool:
        return self.position >= len(self.source)

    def peek(self) -> Optional[str]:
        """Return the next character without consuming it, or None at end of input."""
        if self.at_end():
            return None
        return self.source[self.position]

    def starts_with(self, literal: str) -> bool:
        return self.source.startswith(literal, self.position)

    def advance(self) -> str:
        """
        Consume and return the next character.

        Raises:
            UnexpectedEof: If the input is exhausted
        """
        if self.at_end():
            raise UnexpectedEof(self.position)
        char = self.source[self.position]
        self.position += 1
        return char

    def expect(self, literal: str) -> str:
        """
        Consume ``literal`` (a single character) or fail.

        Raises:
            UnexpectedEof: If the input is exhausted
            UnexpectedCharacter: If the next character is not ``literal``
        """
        char = self.peek()
        if char is None:
            raise UnexpectedEof(self.position, expected=literal)
        if char != literal:
            raise UnexpectedCharacter(char, self.position, expected=literal)
        self.position += 1
        return char

    def consume_while(self, predicate: Callable[[str], bool]) -> str:
        """Consume characters while ``predicate`` holds; may return an empty string."""
        start = self.position
        while not self.at_end() and predicate(self.source[self.position]):
            self.position += 1
        return self.source[start:self.position]

    def consume_whitespace(self) -> str:
        return self.consume_while(str.isspace)

    def __repr__(self):
        return f"TextCursor(position={self.position}, length={len(self.source)})"
