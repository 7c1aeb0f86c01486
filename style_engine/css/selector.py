"""
CSS selectors.

``Selector`` is a closed union of selector variants. Only the simple
selector exists today; ``specificity`` and ``matches`` dispatch over every
variant and reject anything else, so adding a variant means extending both.
"""

from typing import Iterable, Optional, Tuple, Union

from style_engine.dom import Element

Specificity = Tuple[int, int, int]


class SimpleSelector:
    """
    A tag name, an id and any number of class names, all optional.

    Every present field is a condition the element has to meet; a selector
    with no fields (``*``) matches every element.
    """

    __slots__ = ('tag_name', 'id', 'classes')

    def __init__(self, tag_name: Optional[str] = None, id: Optional[str] = None,
                 classes: Iterable[str] = ()):
        self.tag_name = tag_name
        self.id = id
        self.classes: Tuple[str, ...] = tuple(classes)

    @property
    def specificity(self) -> Specificity:
        """(id count, class count, tag count)"""
        return (
            1 if self.id is not None else 0,
            len(self.classes),
            1 if self.tag_name is not None else 0,
        )

    def matches(self, element: Element) -> bool:
        if self.tag_name is not None and element.tag_name != self.tag_name:
            return False

        if self.id is not None and element.id != self.id:
            return False

        if self.classes:
            element_classes = element.classes
            if any(name not in element_classes for name in self.classes):
                return False

        return True

    def to_css(self) -> str:
        text = self.tag_name or ""
        if self.id is not None:
            text += f"#{self.id}"
        text += "".join(f".{name}" for name in self.classes)
        return text or "*"

    def __eq__(self, other):
        if not isinstance(other, SimpleSelector):
            return NotImplemented
        return (self.tag_name, self.id, self.classes) == (other.tag_name, other.id, other.classes)

    def __hash__(self):
        return hash((self.tag_name, self.id, self.classes))

    def __repr__(self):
        return f"SimpleSelector(tag_name={self.tag_name!r}, id={self.id!r}, classes={list(self.classes)!r})"


Selector = Union[SimpleSelector]


def specificity(selector: Selector) -> Specificity:
    if isinstance(selector, SimpleSelector):
        return selector.specificity
    raise TypeError(f"Unsupported selector type: {type(selector).__name__}")


def matches(element: Element, selector: Selector) -> bool:
    """Return True if ``selector`` applies to ``element``."""
    if isinstance(selector, SimpleSelector):
        return selector.matches(element)
    raise TypeError(f"Unsupported selector type: {type(selector).__name__}")
