# Selector chains for tagtree
# Supports tag names, ids and classes joined by the descendant combinator

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .node import Element


class SelectorError(ValueError):
    """Raised when a selector string is invalid."""


class Selector:
    """One stage of a selector chain.

    A stage matches an element whose tag name and id equal the stage's (when
    set) and whose classes include every class of the stage. ``child`` is the
    next stage, searched in the subtree of each element this stage matched,
    that element included.
    """

    __slots__ = ("child", "classes", "id", "parent", "tag_name")

    tag_name: str | None
    id: str | None
    classes: list[str]
    parent: Selector | None
    child: Selector | None

    def __init__(
        self,
        tag_name: str | None = None,
        id: str | None = None,  # noqa: A002
        classes: Iterable[str] | None = None,
    ) -> None:
        self.tag_name = tag_name.lower() if tag_name and tag_name != "*" else None
        self.id = id
        self.classes = list(classes) if classes else []
        self.parent = None
        self.child = None

    @classmethod
    def chain(cls, *stages: Selector) -> Selector:
        """Link ``stages`` head to tail and return the head."""
        if not stages:
            raise SelectorError("Empty selector chain")
        head = stages[0]
        for stage in stages[1:]:
            head.then(stage)
        return head

    def then(self, child: Selector) -> Selector:
        """Append ``child`` after the last stage of this chain; returns the head."""
        tail = self
        while tail.child is not None:
            tail = tail.child
        tail.child = child
        child.parent = tail
        return self

    def stages(self) -> Iterator[Selector]:
        stage: Selector | None = self
        while stage is not None:
            yield stage
            stage = stage.child

    def matches(self, element: Element) -> bool:
        """Check this stage alone against one element (the chain is ignored)."""
        if self.tag_name is not None and element.tag_name != self.tag_name:
            return False
        if self.id == "":
            # An empty id requires the element to have no id
            if element.id:
                return False
        elif self.id is not None and element.id != self.id:
            return False
        return all(cls in element.classes for cls in self.classes)

    def _compound_text(self) -> str:
        parts = [self.tag_name or ("" if self.id or self.classes else "*")]
        if self.id:
            parts.append(f"#{self.id}")
        parts.extend(f".{cls}" for cls in self.classes)
        return "".join(parts)

    def __str__(self) -> str:
        return " ".join(stage._compound_text() for stage in self.stages())

    def __repr__(self) -> str:
        return f"Selector({str(self)!r})"


class SelectorTokenizer:
    """Splits a selector string into compound selectors."""

    __slots__ = ("length", "pos", "selector")

    selector: str
    pos: int
    length: int

    def __init__(self, selector: str) -> None:
        self.selector = selector
        self.pos = 0
        self.length = len(selector)

    def _is_name_start(self, ch: str) -> bool:
        # CSS identifier start: letter, underscore, or non-ASCII
        return ch.isalpha() or ch == "_" or ch == "-" or ord(ch) > 127

    def _is_name_char(self, ch: str) -> bool:
        return self._is_name_start(ch) or ch.isdigit()

    def _read_name(self) -> str:
        start = self.pos
        while self.pos < self.length and self._is_name_char(self.selector[self.pos]):
            self.pos += 1
        return self.selector[start : self.pos]

    def parse(self) -> Selector:
        stages: list[Selector] = []
        while self.pos < self.length:
            ch = self.selector[self.pos]
            if ch in " \t\n\r\f":
                self.pos += 1
                continue
            stages.append(self._parse_compound())
        if not stages:
            raise SelectorError("Empty selector")
        return Selector.chain(*stages)

    def _parse_compound(self) -> Selector:
        tag_name: str | None = None
        element_id: str | None = None
        classes: list[str] = []
        start = self.pos

        while self.pos < self.length:
            ch = self.selector[self.pos]

            if ch in " \t\n\r\f":
                break

            if ch in ">+~":
                raise SelectorError(f"Unsupported combinator {ch!r} at position {self.pos}")

            if ch in ",[:":
                raise SelectorError(f"Unsupported selector syntax {ch!r} at position {self.pos}")

            if ch == "*":
                if self.pos != start:
                    raise SelectorError(f"Unexpected * at position {self.pos}")
                self.pos += 1
                continue

            if ch == "#":
                self.pos += 1
                name = self._read_name()
                if not name:
                    raise SelectorError(f"Expected identifier after # at position {self.pos}")
                if element_id is not None:
                    raise SelectorError(f"Multiple ids in one selector at position {self.pos}")
                element_id = name
                continue

            if ch == ".":
                self.pos += 1
                name = self._read_name()
                if not name:
                    raise SelectorError(f"Expected identifier after . at position {self.pos}")
                classes.append(name)
                continue

            if self.pos == start and self._is_name_start(ch):
                tag_name = self._read_name()
                continue

            raise SelectorError(f"Unexpected character {ch!r} at position {self.pos}")

        return Selector(tag_name, element_id, classes)


def parse_selector(selector_string: str) -> Selector:
    """Parse a selector string such as ``"div#main p.note span"`` into a chain."""
    if not selector_string or not selector_string.strip():
        raise SelectorError("Empty selector")
    return SelectorTokenizer(selector_string.strip()).parse()


def _coerce(selector: Selector | str) -> Selector:
    if isinstance(selector, str):
        return parse_selector(selector)
    return selector


def _collect(node: Element, stage: Selector, emit: Callable[[list[Element]], None]) -> None:
    """Match ``stage`` against ``node`` and everything below it, then recurse into each match for the next stage."""
    matched = [
        element for element in node.descendants(include_self=True) if not element.is_root and stage.matches(element)
    ]
    if stage.child is None:
        emit(matched)
        return
    for element in matched:
        _collect(element, stage.child, emit)


def select(root: Element, selector: Selector | str) -> list[Element]:
    """
    Query the subtree of root, keeping every matching path.

    An element reached through more than one match of an earlier stage is
    listed once per path. The synthetic document root is never matched.

    Args:
        root: The element whose subtree is searched
        selector: A Selector chain or a selector string

    Returns:
        A list of matching elements in traversal order
    """
    results: list[Element] = []
    _collect(root, _coerce(selector), results.extend)
    return results


def select_unique(root: Element, selector: Selector | str) -> list[Element]:
    """
    Query the subtree of root, returning each matching element once.

    Elements are compared by identity. The order of the result is not part
    of the contract.
    """
    seen: dict[Element, None] = {}
    _collect(root, _coerce(selector), lambda found: seen.update(dict.fromkeys(found)))
    return list(seen)
