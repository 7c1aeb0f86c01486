"""
Cascade resolution.

Matches stylesheet rules against the elements of a node tree and merges
their declarations into one property map per node. For each element:

1. every rule with a matching selector is collected once, with the
   specificity of its first (most specific) matching selector;
2. the matches are sorted by ascending specificity, source order breaking
   ties;
3. declarations are merged in that order, so later writes win;
4. declarations from the element's ``style`` attribute are merged last.
"""

import logging
from concurrent.futures import Executor
from typing import Dict, List, Optional, Tuple

from style_engine.css import Rule, Specificity, StyleSheet, Value, matches, specificity
from style_engine.dom import Element, Node
from style_engine.parser.css_parser import parse_declaration_list

logger = logging.getLogger(__name__)

PropertyMap = Dict[str, Value]
MatchedRule = Tuple[Specificity, Rule]


class StyledNode:
    """
    A node paired with the property values that apply to it.

    Attributes:
        node: The source node (shared with the source tree, not copied)
        specified_values: Property name to value
        children: Styled children, mirroring ``node.children``
    """

    __slots__ = ('node', 'specified_values', 'children')

    def __init__(self, node: Node, specified_values: PropertyMap,
                 children: List['StyledNode']):
        self.node = node
        self.specified_values = specified_values
        self.children = children

    def value(self, name: str) -> Optional[Value]:
        return self.specified_values.get(name)

    def lookup(self, name: str, fallback_name: str, default: Value) -> Value:
        """
        Return ``name``, else ``fallback_name``, else ``default``.

        Useful for shorthand fallbacks such as ``margin-left`` -> ``margin``.
        """
        value = self.specified_values.get(name)
        if value is not None:
            return value
        return self.specified_values.get(fallback_name, default)

    def __repr__(self):
        return f"StyledNode({self.node!r}, {self.specified_values!r})"


def match_rule(element: Element, rule: Rule) -> Optional[MatchedRule]:
    """
    Match a rule against an element.

    Selectors are stored most specific first, so the first matching one
    determines the specificity.
    """
    for selector in rule.selectors:
        if matches(element, selector):
            return specificity(selector), rule
    return None


def matching_rules(element: Element, stylesheet: StyleSheet) -> List[MatchedRule]:
    matched = []
    for rule in stylesheet.rules:
        match = match_rule(element, rule)
        if match is not None:
            matched.append(match)
    return matched


def specified_values(element: Element, stylesheet: StyleSheet) -> PropertyMap:
    """
    Compute the property map of a single element.

    Raises:
        ParseError: If the element's ``style`` attribute is malformed
    """
    values: PropertyMap = {}
    rules = matching_rules(element, stylesheet)

    # sort() is stable: equal specificities keep source order, so the later rule wins
    rules.sort(key=lambda match: match[0])
    for _, rule in rules:
        for declaration in rule.declarations:
            values[declaration.name] = declaration.value

    inline_style = element.get_attribute('style')
    if inline_style is not None:
        for declaration in parse_declaration_list(inline_style):
            values[declaration.name] = declaration.value

    return values


def style_tree(root: Node, stylesheet: StyleSheet,
               executor: Optional[Executor] = None) -> StyledNode:
    """
    Build the styled tree for ``root``.

    Args:
        root: Root of the node tree
        stylesheet: Rules to apply
        executor: Optional executor used to resolve the root's child subtrees
            concurrently; subtrees share no mutable state

    Returns:
        StyledNode: Styled tree mirroring ``root``

    Raises:
        ParseError: If any inline ``style`` attribute is malformed
    """
    if executor is None or len(root.children) <= 1:
        return _style_subtree(root, stylesheet)

    futures = [executor.submit(_style_subtree, child, stylesheet) for child in root.children]
    children = [future.result() for future in futures]
    return StyledNode(root, _node_values(root, stylesheet), children)


def _style_subtree(root: Node, stylesheet: StyleSheet) -> StyledNode:
    # elements are resolved in document order, without recursion
    styled_root = StyledNode(root, {}, [])
    pending = [styled_root]
    while pending:
        styled = pending.pop()
        styled.specified_values = _node_values(styled.node, stylesheet)
        styled.children = [StyledNode(child, {}, []) for child in styled.node.children]
        pending.extend(reversed(styled.children))
    return styled_root


def _node_values(node: Node, stylesheet: StyleSheet) -> PropertyMap:
    if isinstance(node, Element):
        return specified_values(node, stylesheet)
    return {}


def format_styled_tree(styled: StyledNode, indent: int = 0) -> str:
    """Render a styled tree as an indented outline for debugging."""
    lines: List[str] = []
    pending = [(styled, indent)]
    while pending:
        current, depth = pending.pop()
        prefix = "  " * depth
        node = current.node
        if isinstance(node, Element):
            values = "; ".join(f"{name}: {value.to_css()}" for name, value in current.specified_values.items())
            lines.append(f"{prefix}<{node.tag_name}> {{{values}}}")
        else:
            lines.append(f"{prefix}{node.data!r}")
        pending.extend((child, depth + 1) for child in reversed(current.children))
    return "\n".join(lines)
