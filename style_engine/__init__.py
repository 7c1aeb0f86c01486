"""
Style Engine - markup and stylesheet parsing with CSS cascade resolution.
"""

import logging

from style_engine.errors import (
    StyleEngineError, ParseError, UnexpectedEof, UnexpectedCharacter,
    MismatchedTag, UnrecognizedUnit, InvalidHex, InvalidNumber,
)
from style_engine.dom import Node, Element, Text
from style_engine.css import (
    StyleSheet, Rule, Declaration, SimpleSelector, Keyword, Length, Color, Unit,
)
from style_engine.parser import parse_html, parse_css, parse_declaration_list
from style_engine.style import StyledNode, style_tree
from style_engine.core import StyleEngine
from style_engine.utils import Config, setup_logging

# Package information
__version__ = "0.1.0"
__description__ = "Markup and stylesheet parsing with CSS cascade resolution"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'StyleEngineError', 'ParseError', 'UnexpectedEof', 'UnexpectedCharacter',
    'MismatchedTag', 'UnrecognizedUnit', 'InvalidHex', 'InvalidNumber',
    'Node', 'Element', 'Text',
    'StyleSheet', 'Rule', 'Declaration', 'SimpleSelector',
    'Keyword', 'Length', 'Color', 'Unit',
    'parse_html', 'parse_css', 'parse_declaration_list',
    'StyledNode', 'style_tree', 'StyleEngine', 'Config', 'setup_logging',
]
