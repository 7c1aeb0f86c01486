"""
Document node tree produced by the markup parser.

A tree is built once by the parser and is read-only afterwards: children
are stored as tuples and nodes expose no mutating operations.

Nodes compare and hash by structure, so two identical sibling elements are
equal. Key per-node data by ``id(node)`` when each occurrence must stay
distinct.

Tree walks keep their own stack instead of recursing, so deeply nested
documents do not hit the interpreter's recursion limit.
"""

from enum import IntEnum
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple, Union


class NodeType(IntEnum):
    """Node types, numbered as in the DOM."""
    ELEMENT_NODE = 1
    TEXT_NODE = 3


class Node:
    """
    Base class for document nodes.

    Only the two subclasses below are ever instantiated.
    """

    node_type: NodeType

    def __init__(self, children: Iterable['Node'] = ()):
        self._children: Tuple['Node', ...] = tuple(children)

    @property
    def children(self) -> Tuple['Node', ...]:
        return self._children

    def to_markup(self) -> str:
        """Serialize this node and its descendants back to markup text."""
        raise NotImplementedError


class Text(Node):
    """A run of character data."""

    node_type = NodeType.TEXT_NODE

    def __init__(self, data: str):
        super().__init__()
        self.data = data

    def to_markup(self) -> str:
        if '<' in self.data:
            raise ValueError(f"Text {self.data!r} cannot be serialized: contains '<'")
        return self.data

    def __eq__(self, other):
        if not isinstance(other, Text):
            return NotImplemented
        return self.data == other.data

    def __hash__(self):
        return hash(self.data)

    def __repr__(self):
        return f"Text({self.data!r})"


class Element(Node):
    """An element with a tag name, attributes and child nodes."""

    node_type = NodeType.ELEMENT_NODE

    def __init__(self, tag_name: str, attributes: Optional[Dict[str, str]] = None,
                 children: Iterable[Node] = ()):
        """
        Args:
            tag_name: Element tag name
            attributes: Attribute name to value mapping (copied)
            children: Child nodes in document order
        """
        super().__init__(children)
        self.tag_name = tag_name
        self._attributes: Dict[str, str] = dict(attributes or {})

    @property
    def attributes(self) -> Dict[str, str]:
        """A copy of the attribute mapping."""
        return dict(self._attributes)

    def get_attribute(self, name: str) -> Optional[str]:
        return self._attributes.get(name)

    @property
    def id(self) -> Optional[str]:
        return self._attributes.get('id')

    @property
    def classes(self) -> FrozenSet[str]:
        """Class names listed in the ``class`` attribute."""
        class_attr = self._attributes.get('class')
        if not class_attr:
            return frozenset()
        return frozenset(class_attr.split())

    def to_markup(self) -> str:
        parts: List[str] = []
        pending: List[Union[Node, str]] = [self]
        while pending:
            item = pending.pop()
            if isinstance(item, str):
                parts.append(item)
            elif isinstance(item, Element):
                parts.append(item._start_tag())
                pending.append(f"</{item.tag_name}>")
                pending.extend(reversed(item.children))
            else:
                parts.append(item.to_markup())
        return "".join(parts)

    def _start_tag(self) -> str:
        parts = [f"<{self.tag_name}"]
        for name, value in self._attributes.items():
            if '"' not in value:
                parts.append(f' {name}="{value}"')
            elif "'" not in value:
                parts.append(f" {name}='{value}'")
            else:
                raise ValueError(f"Attribute {name!r} cannot be serialized: value contains both quote kinds")
        parts.append(">")
        return "".join(parts)

    def __eq__(self, other):
        if not isinstance(other, Element):
            return NotImplemented
        pending: List[Tuple[Node, Node]] = [(self, other)]
        while pending:
            left, right = pending.pop()
            if isinstance(left, Element) and isinstance(right, Element):
                if (left.tag_name != right.tag_name
                        or left._attributes != right._attributes
                        or len(left.children) != len(right.children)):
                    return False
                pending.extend(zip(left.children, right.children))
            elif left != right:
                return False
        return True

    def __hash__(self):
        # equal elements share tag, attributes and child count
        return hash((self.tag_name, frozenset(self._attributes.items()), len(self.children)))

    def __repr__(self):
        return f"Element({self.tag_name!r}, {self._attributes!r}, {len(self.children)} children)"


def format_tree(node: Node, indent: int = 0) -> str:
    """Render a node tree as an indented outline for debugging."""
    lines: List[str] = []
    pending = [(node, indent)]
    while pending:
        current, depth = pending.pop()
        prefix = "  " * depth
        if isinstance(current, Text):
            lines.append(f"{prefix}{current.data!r}")
            continue

        attrs = "".join(f' {name}="{value}"' for name, value in current.attributes.items())
        lines.append(f"{prefix}<{current.tag_name}{attrs}>")
        pending.extend((child, depth + 1) for child in reversed(current.children))
    return "\n".join(lines)
