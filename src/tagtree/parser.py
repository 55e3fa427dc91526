"""Minimal tagtree entry point."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .tokenizer import tokenize
from .treebuilder import TreeBuilder

if TYPE_CHECKING:
    from collections.abc import Iterator

    from .metadata import TagMetadata
    from .node import Element
    from .selector import Selector


class TagTree:
    __slots__ = ("root", "tokens", "tree_builder")

    root: Element
    tokens: list[str]
    tree_builder: TreeBuilder

    def __init__(
        self,
        html: str | bytes | bytearray | memoryview | None,
        *,
        tag_metadata: TagMetadata | None = None,
        extract_attributes: bool = True,
        tree_builder: TreeBuilder | None = None,
    ) -> None:
        html_str: str
        if isinstance(html, (bytes, bytearray, memoryview)):
            html_str = bytes(html).decode("utf-8", errors="replace")
        elif html is not None:
            html_str = str(html)
        else:
            html_str = ""

        self.tree_builder = tree_builder or TreeBuilder(tag_metadata, extract_attributes=extract_attributes)
        self.tokens = tokenize(html_str)
        self.root = self.tree_builder.build(self.tokens)

    def elements(self) -> Iterator[Element]:
        """Iterate over every element except the synthetic root, breadth-first."""
        return self.root.descendants()

    def select(self, selector: Selector | str) -> list[Element]:
        """Query the document. Delegates to root.select()."""
        return self.root.select(selector)

    def select_unique(self, selector: Selector | str) -> list[Element]:
        """Query the document without duplicates. Delegates to root.select_unique()."""
        return self.root.select_unique(selector)
