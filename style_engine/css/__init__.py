"""
Stylesheet model: values, selectors and rules.
"""

from .values import Unit, Value, Keyword, Length, Color
from .selector import Selector, SimpleSelector, Specificity, specificity, matches
from .stylesheet import Declaration, Rule, StyleSheet, declarations_to_css

__all__ = [
    'Unit', 'Value', 'Keyword', 'Length', 'Color',
    'Selector', 'SimpleSelector', 'Specificity', 'specificity', 'matches',
    'Declaration', 'Rule', 'StyleSheet', 'declarations_to_css'
]
