"""
Markup parser.

Grammar:
    document  := node*
    node      := element | text
    element   := '<' name attribute* '>' node* '</' name '>'
    attribute := attr-name '=' ( '"' [^"]* '"' | "'" [^']* "'" )
    text      := [^<]+

Whitespace before each node and between attributes is skipped. Any
malformed construct raises a ParseError; nothing is recovered.
"""

import logging
from typing import Dict, List, Tuple

from style_engine.dom import Element, Node, Text
from style_engine.errors import MismatchedTag, UnexpectedCharacter, UnexpectedEof

from .cursor import TextCursor

logger = logging.getLogger(__name__)

DEFAULT_ROOT_TAG = "html"

# tag name, attributes, children parsed so far
_OpenElement = Tuple[str, Dict[str, str], List[Node]]


def _is_tag_name_char(c: str) -> bool:
    return c.isascii() and c.isalnum()


def _is_attr_name_char(c: str) -> bool:
    return (c.isascii() and c.isalnum()) or c in '-_'


class HTMLParser:
    """Parser turning markup text into a Node tree."""

    def __init__(self, implicit_root_tag: str = DEFAULT_ROOT_TAG):
        """
        Initialize the markup parser.

        Args:
            implicit_root_tag: Tag of the element synthesized around a document
                that does not consist of exactly one top-level node
        """
        self.implicit_root_tag = implicit_root_tag

    def parse(self, source: str) -> Node:
        """
        Parse a complete document.

        Args:
            source: Markup text

        Returns:
            Node: The single top-level node, or a synthesized root element
            holding all top-level nodes in source order

        Raises:
            ParseError: If the markup is malformed
        """
        cursor = TextCursor(source)
        nodes = self._parse_nodes(cursor)

        if not cursor.at_end():
            # only a closing tag stops the top-level loop early
            raise UnexpectedCharacter(cursor.peek(), cursor.position)

        logger.debug(f"Parsed {len(nodes)} top-level nodes from {len(source)} characters")

        if len(nodes) == 1:
            return nodes[0]
        return Element(self.implicit_root_tag, {}, nodes)

    def _parse_nodes(self, cursor: TextCursor) -> List[Node]:
        """
        Parse top-level nodes until the end of input or an unmatched closing tag.

        Open elements are kept on an explicit stack, so nesting depth is not
        bounded by the interpreter's recursion limit.
        """
        nodes: List[Node] = []
        open_elements: List[_OpenElement] = []
        siblings = nodes

        while True:
            cursor.consume_whitespace()
            if cursor.at_end():
                if open_elements:
                    cursor.expect('<')
                break

            if cursor.starts_with("</"):
                if not open_elements:
                    break
                tag_name, attributes, children = open_elements.pop()
                self._parse_closing_tag(cursor, tag_name)
                siblings = open_elements[-1][2] if open_elements else nodes
                siblings.append(Element(tag_name, attributes, children))
            elif cursor.peek() == '<':
                tag_name, attributes = self._parse_opening_tag(cursor)
                siblings = []
                open_elements.append((tag_name, attributes, siblings))
            else:
                siblings.append(Text(cursor.consume_while(lambda c: c != '<')))

        return nodes

    def _parse_opening_tag(self, cursor: TextCursor) -> Tuple[str, Dict[str, str]]:
        cursor.expect('<')
        tag_name = self._parse_name(cursor, _is_tag_name_char)
        attributes = self._parse_attributes(cursor)
        cursor.expect('>')
        return tag_name, attributes

    def _parse_closing_tag(self, cursor: TextCursor, tag_name: str) -> None:
        cursor.expect('<')
        cursor.expect('/')
        close_position = cursor.position
        closing_name = cursor.consume_while(_is_tag_name_char)
        if closing_name != tag_name:
            raise MismatchedTag(tag_name, closing_name, close_position)
        cursor.expect('>')

    def _parse_name(self, cursor: TextCursor, predicate) -> str:
        name = cursor.consume_while(predicate)
        if not name:
            char = cursor.peek()
            if char is None:
                raise UnexpectedEof(cursor.position)
            raise UnexpectedCharacter(char, cursor.position)
        return name

    def _parse_attributes(self, cursor: TextCursor) -> Dict[str, str]:
        attributes: Dict[str, str] = {}
        while True:
            cursor.consume_whitespace()
            char = cursor.peek()
            if char is None:
                raise UnexpectedEof(cursor.position, expected='>')
            if char == '>':
                break
            name, value = self._parse_attribute(cursor)
            attributes[name] = value
        return attributes

    def _parse_attribute(self, cursor: TextCursor) -> Tuple[str, str]:
        name = self._parse_name(cursor, _is_attr_name_char)
        cursor.expect('=')
        return name, self._parse_attribute_value(cursor)

    def _parse_attribute_value(self, cursor: TextCursor) -> str:
        quote = cursor.peek()
        if quote is None:
            raise UnexpectedEof(cursor.position, expected='"')
        if quote not in ('"', "'"):
            raise UnexpectedCharacter(quote, cursor.position, expected='"')
        cursor.advance()

        value = cursor.consume_while(lambda c: c != quote)
        cursor.expect(quote)
        return value


def parse(source: str, implicit_root_tag: str = DEFAULT_ROOT_TAG) -> Node:
    """Parse markup text into a Node tree."""
    return HTMLParser(implicit_root_tag).parse(source)
