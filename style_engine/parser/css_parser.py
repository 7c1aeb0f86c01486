"""
Stylesheet parser.

Grammar:
    stylesheet    := rule*
    rule          := selector-list '{' declaration* '}'
    selector-list := simple-selector ( ',' simple-selector )*
    simple-selector := ( ident | '#' ident | '.' ident | '*' )*
    declaration   := ident ':' value ';'
    value         := length | color | ident
    length        := [0-9.]+ ( 'px' | '%' )
    color         := '#' hex hex hex hex hex hex

The declaration list does not include the braces around it, so the same
routine parses rule bodies and the contents of inline ``style`` attributes.
"""

import logging
import math
import string
from typing import List

from style_engine.css import (
    Color, Declaration, Keyword, Length, Rule, SimpleSelector, StyleSheet,
    Unit, Value,
)
from style_engine.errors import (
    InvalidHex, InvalidNumber, UnexpectedCharacter, UnexpectedEof, UnrecognizedUnit,
)

from .cursor import TextCursor

logger = logging.getLogger(__name__)

UNITS = {
    'px': Unit.PX,
    '%': Unit.PERCENT,
}

HEX_DIGITS = frozenset(string.hexdigits)


def _is_identifier_char(c: str) -> bool:
    return (c.isascii() and c.isalnum()) or c in '-_%'


def _is_number_char(c: str) -> bool:
    return c in '0123456789.'


class CSSParser:
    """Recursive-descent parser for stylesheets and declaration lists."""

    def parse(self, source: str) -> StyleSheet:
        """
        Parse a complete stylesheet.

        Args:
            source: Stylesheet text

        Returns:
            StyleSheet: Rules in source order

        Raises:
            ParseError: If the stylesheet is malformed
        """
        cursor = TextCursor(source)
        rules: List[Rule] = []

        while True:
            cursor.consume_whitespace()
            if cursor.at_end():
                break
            rules.append(self._parse_rule(cursor))

        logger.debug(f"Parsed {len(rules)} rules from {len(source)} characters")
        return StyleSheet(rules)

    def parse_declaration_list(self, source: str) -> List[Declaration]:
        """
        Parse a declaration list that is not enclosed in braces.

        Args:
            source: Text such as ``"color: red; width: 10px;"``

        Returns:
            List[Declaration]: Declarations in source order

        Raises:
            ParseError: If the list is malformed or followed by anything
        """
        cursor = TextCursor(source)
        declarations = self._parse_declarations(cursor)
        if not cursor.at_end():
            raise UnexpectedCharacter(cursor.peek(), cursor.position)
        return declarations

    def _parse_rule(self, cursor: TextCursor) -> Rule:
        selectors = self._parse_selectors(cursor)
        declarations = self._parse_declarations(cursor)
        cursor.expect('}')
        return Rule(selectors, declarations)

    def _parse_selectors(self, cursor: TextCursor) -> List[SimpleSelector]:
        """Parse a selector list up to and including the opening brace."""
        selectors: List[SimpleSelector] = []
        while True:
            selectors.append(self._parse_simple_selector(cursor))
            cursor.consume_whitespace()

            char = cursor.peek()
            if char == ',':
                cursor.advance()
                cursor.consume_whitespace()
            elif char == '{':
                cursor.advance()
                break
            elif char is None:
                raise UnexpectedEof(cursor.position, expected='{')
            else:
                raise UnexpectedCharacter(char, cursor.position, expected='{')

        # sorted() is stable, so equally specific selectors keep source order
        return sorted(selectors, key=lambda selector: selector.specificity, reverse=True)

    def _parse_simple_selector(self, cursor: TextCursor) -> SimpleSelector:
        tag_name = None
        id = None
        classes: List[str] = []

        while True:
            char = cursor.peek()
            if char == '#':
                cursor.advance()
                id = self._parse_identifier(cursor)
            elif char == '.':
                cursor.advance()
                classes.append(self._parse_identifier(cursor))
            elif char == '*':
                cursor.advance()
            elif char is not None and _is_identifier_char(char):
                tag_name = self._parse_identifier(cursor)
            else:
                break

        return SimpleSelector(tag_name, id, classes)

    def _parse_declarations(self, cursor: TextCursor) -> List[Declaration]:
        """Parse declarations until a closing brace or the end of input."""
        declarations: List[Declaration] = []
        while True:
            cursor.consume_whitespace()
            if cursor.at_end() or cursor.peek() == '}':
                break
            declarations.append(self._parse_declaration(cursor))
        return declarations

    def _parse_declaration(self, cursor: TextCursor) -> Declaration:
        name = self._parse_identifier(cursor)
        cursor.consume_whitespace()
        cursor.expect(':')
        cursor.consume_whitespace()
        value = self._parse_value(cursor)
        cursor.consume_whitespace()
        cursor.expect(';')
        return Declaration(name, value)

    def _parse_value(self, cursor: TextCursor) -> Value:
        char = cursor.peek()
        if char is not None and _is_number_char(char):
            return self._parse_length(cursor)
        if char == '#':
            return self._parse_color(cursor)
        return Keyword(self._parse_identifier(cursor))

    def _parse_length(self, cursor: TextCursor) -> Length:
        start = cursor.position
        text = cursor.consume_while(_is_number_char)
        try:
            number = float(text)
        except ValueError:
            raise InvalidNumber(text, start) from None
        if not math.isfinite(number):
            raise InvalidNumber(text, start)

        unit_position = cursor.position
        unit = cursor.consume_while(_is_identifier_char).lower()
        if unit not in UNITS:
            raise UnrecognizedUnit(unit, unit_position)
        return Length(number, UNITS[unit])

    def _parse_color(self, cursor: TextCursor) -> Color:
        cursor.expect('#')
        return Color(
            self._parse_hex_pair(cursor),
            self._parse_hex_pair(cursor),
            self._parse_hex_pair(cursor),
            255,
        )

    def _parse_hex_pair(self, cursor: TextCursor) -> int:
        start = cursor.position
        pair = cursor.advance() + cursor.advance()
        if not all(c in HEX_DIGITS for c in pair):
            raise InvalidHex(pair, start)
        return int(pair, 16)

    def _parse_identifier(self, cursor: TextCursor) -> str:
        identifier = cursor.consume_while(_is_identifier_char)
        if not identifier:
            char = cursor.peek()
            if char is None:
                raise UnexpectedEof(cursor.position)
            raise UnexpectedCharacter(char, cursor.position)
        return identifier


def parse(source: str) -> StyleSheet:
    """Parse stylesheet text into a StyleSheet."""
    return CSSParser().parse(source)


def parse_declaration_list(source: str) -> List[Declaration]:
    """Parse a brace-less declaration list, e.g. an inline ``style`` attribute."""
    return CSSParser().parse_declaration_list(source)
