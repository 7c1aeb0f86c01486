"""
Cascade resolution producing the styled tree.
"""

from .cascade import (
    PropertyMap, StyledNode, format_styled_tree, match_rule, matching_rules,
    specified_values, style_tree,
)

__all__ = [
    'PropertyMap', 'StyledNode', 'format_styled_tree', 'match_rule',
    'matching_rules', 'specified_values', 'style_tree'
]
