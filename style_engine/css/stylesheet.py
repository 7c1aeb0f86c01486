"""
Stylesheet data model: rules made of selectors and declarations.
"""

from typing import Iterable, List, Tuple

from .selector import Selector
from .values import Value


class Declaration:
    """A single ``name: value`` pair."""

    __slots__ = ('name', 'value')

    def __init__(self, name: str, value: Value):
        self.name = name
        self.value = value

    def to_css(self) -> str:
        return f"{self.name}: {self.value.to_css()};"

    def __eq__(self, other):
        if not isinstance(other, Declaration):
            return NotImplemented
        return self.name == other.name and self.value == other.value

    def __hash__(self):
        return hash((self.name, self.value))

    def __repr__(self):
        return f"Declaration({self.name!r}, {self.value!r})"


class Rule:
    """
    A selector list with the declarations it applies.

    Attributes:
        selectors: Selectors ordered most specific first
        declarations: Declarations in source order
    """

    __slots__ = ('selectors', 'declarations')

    def __init__(self, selectors: Iterable[Selector], declarations: Iterable[Declaration]):
        self.selectors: Tuple[Selector, ...] = tuple(selectors)
        self.declarations: Tuple[Declaration, ...] = tuple(declarations)

    def to_css(self) -> str:
        selectors = ", ".join(selector.to_css() for selector in self.selectors)
        declarations = " ".join(declaration.to_css() for declaration in self.declarations)
        if not declarations:
            return f"{selectors} {{}}"
        return f"{selectors} {{ {declarations} }}"

    def __eq__(self, other):
        if not isinstance(other, Rule):
            return NotImplemented
        return self.selectors == other.selectors and self.declarations == other.declarations

    def __repr__(self):
        return f"Rule(selectors={list(self.selectors)!r}, declarations={list(self.declarations)!r})"


class StyleSheet:
    """An ordered list of rules."""

    __slots__ = ('rules',)

    def __init__(self, rules: Iterable[Rule] = ()):
        self.rules: Tuple[Rule, ...] = tuple(rules)

    def to_css(self) -> str:
        return "\n".join(rule.to_css() for rule in self.rules)

    def __len__(self):
        return len(self.rules)

    def __iter__(self):
        return iter(self.rules)

    def __eq__(self, other):
        if not isinstance(other, StyleSheet):
            return NotImplemented
        return self.rules == other.rules

    def __repr__(self):
        return f"StyleSheet({len(self.rules)} rules)"


def declarations_to_css(declarations: Iterable[Declaration]) -> str:
    """Serialize a brace-less declaration list, as used in ``style`` attributes."""
    parts: List[str] = [declaration.to_css() for declaration in declarations]
    return " ".join(parts)
