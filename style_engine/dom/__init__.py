"""
Document tree built by the markup parser.
"""

from .node import Node, NodeType, Element, Text, format_tree

__all__ = [
    'Node', 'NodeType', 'Element', 'Text', 'format_tree'
]
