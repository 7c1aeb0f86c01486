"""
Markup and stylesheet parsers.
"""

from .cursor import TextCursor
from .html_parser import HTMLParser
from .css_parser import CSSParser, parse_declaration_list
from . import css_parser, html_parser

parse_html = html_parser.parse
parse_css = css_parser.parse

__all__ = [
    'TextCursor', 'HTMLParser', 'CSSParser',
    'parse_html', 'parse_css', 'parse_declaration_list'
]
