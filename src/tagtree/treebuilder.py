from __future__ import annotations

import logging
from collections.abc import Iterable

from .errors import UnbalancedTagError
from .metadata import TagMetadata
from .node import Element
from .tokenizer import attribute_value, is_end_tag, is_self_closing_syntax, split_attributes, split_classes

logger = logging.getLogger(__name__)


class TreeBuilder:
    """Turn a flat tag token stream into an element tree.

    The builder keeps a single cursor, the currently open element. A start
    tag is appended to the cursor and becomes the new cursor unless it is
    self-closing; an end tag moves the cursor to its parent. End tag names
    are not checked against the open element.
    """

    __slots__ = ("current", "extract_attributes", "root", "tag_metadata")

    current: Element
    extract_attributes: bool
    root: Element
    tag_metadata: TagMetadata

    def __init__(self, tag_metadata: TagMetadata | None = None, *, extract_attributes: bool = True) -> None:
        self.tag_metadata = tag_metadata or TagMetadata.default()
        self.extract_attributes = extract_attributes
        self.root = Element.root()
        self.current = self.root

    def reset(self) -> None:
        self.root = Element.root()
        self.current = self.root

    def build(self, tokens: Iterable[str]) -> Element:
        """Build a fresh tree from ``tokens`` and return its synthetic root.

        Raises:
            UnbalancedTagError: If an end tag arrives while only the root is open.
        """
        self.reset()
        for index, token in enumerate(tokens):
            self.process_token(token, index)
        self.finish()
        return self.root

    def process_token(self, token: str, index: int = 0) -> None:
        if is_end_tag(token):
            self._close(token, index)
            return

        element = self.create_element(token)
        self.current.append_child(element)
        if not self.is_self_closing(element):
            self.current = element

    def _close(self, token: str, index: int) -> None:
        parent = self.current.parent
        if parent is None:
            logger.debug("End tag %r at token %d has no open element", token, index)
            raise UnbalancedTagError(token, index)
        self.current = parent

    def create_element(self, token: str) -> Element:
        element = Element(token)
        if self.extract_attributes:
            self._populate_attributes(element)
        return element

    def _populate_attributes(self, element: Element) -> None:
        element.attributes = split_attributes(element.name)
        for raw in element.attributes:
            name, value = attribute_value(raw)
            if name == "class" and value:
                for cls in split_classes(value):
                    if cls not in element.classes:
                        element.classes.append(cls)
            elif name == "id" and element.id is None and value is not None:
                element.id = value

    def is_self_closing(self, element: Element) -> bool:
        return is_self_closing_syntax(element.name) or self.tag_metadata.is_self_closing(element.tag_name)

    def finish(self) -> Element:
        if self.current is not self.root:
            # Unclosed elements stay where they are in the tree
            logger.debug("%d element(s) left open at end of input", self.current.depth())
        return self.root


def build_tree(tokens: Iterable[str], tag_metadata: TagMetadata | None = None) -> Element:
    """Build a tree from ``tokens`` with a one-off TreeBuilder."""
    return TreeBuilder(tag_metadata).build(tokens)
