from __future__ import annotations

from collections import deque
from collections.abc import Iterator
from typing import TYPE_CHECKING

from .selector import select, select_unique
from .tokenizer import tag_name_of

if TYPE_CHECKING:
    from .selector import Selector

ROOT_NAME = "root"


class Element:
    """One tag instance in the tree.

    ``name`` is the raw token as it appeared in the markup (brackets and
    attributes included); ``tag_name`` is the bare lower-cased name derived
    from it. ``parent`` is a back reference only: an element belongs to its
    parent's ``children`` list.
    """

    __slots__ = ("attributes", "children", "classes", "id", "inner_html", "name", "parent", "tag_name")

    name: str
    tag_name: str
    attributes: list[str]
    classes: list[str]
    id: str | None
    inner_html: str | None
    parent: Element | None
    children: list[Element]

    def __init__(self, name: str) -> None:
        self.name = name
        self.tag_name = tag_name_of(name)
        self.attributes = []
        self.classes = []
        self.id = None
        self.inner_html = None
        self.parent = None
        self.children = []

    @classmethod
    def root(cls) -> Element:
        """Create the synthetic document root."""
        return cls(ROOT_NAME)

    @property
    def is_root(self) -> bool:
        return self.parent is None and self.name == ROOT_NAME

    def append_child(self, node: Element) -> None:
        self.children.append(node)
        node.parent = self

    def descendants(self, include_self: bool = False) -> Iterator[Element]:
        """Iterate over the subtree breadth-first."""
        queue: deque[Element] = deque([self])
        first = True
        while queue:
            node = queue.popleft()
            if include_self or not first:
                yield node
            first = False
            queue.extend(node.children)

    def ancestors(self) -> Iterator[Element]:
        """Iterate from the parent up to the root."""
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def depth(self) -> int:
        """Number of ancestors; top-level elements have depth 1."""
        return sum(1 for _ in self.ancestors())

    def select(self, selector: Selector | str) -> list[Element]:
        """
        Query this subtree, keeping one result per matching path.

        Args:
            selector: A Selector chain or a selector string

        Returns:
            A list of matching elements in traversal order

        Raises:
            SelectorError: If a selector string is invalid
        """
        return select(self, selector)

    def select_unique(self, selector: Selector | str) -> list[Element]:
        """Query this subtree, returning each matching element once."""
        return select_unique(self, selector)

    def __repr__(self) -> str:
        return f"Element({self.name!r})"
