"""Known tag names and the void/self-closing subset.

The tables are two JSON arrays of strings. ``TagMetadata.load()`` reads them
explicitly and fails loudly; there is no degraded mode with empty tables.
"""

from __future__ import annotations

import functools
import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any

from .errors import MetadataLoadError

logger = logging.getLogger(__name__)

ALL_TAGS_FILE = "all_tags.json"
SELF_CLOSING_TAGS_FILE = "self_closing_tags.json"


def _read_table(path: str | Path | None, default_name: str) -> frozenset[str]:
    label = str(path) if path is not None else f"tagtree/data/{default_name}"
    try:
        if path is None:
            text = resources.files("tagtree").joinpath("data").joinpath(default_name).read_text(encoding="utf-8")
        else:
            text = Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise MetadataLoadError("metadata-unreadable", label, str(exc)) from exc

    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise MetadataLoadError("metadata-invalid-json", label, str(exc)) from exc

    if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
        raise MetadataLoadError("metadata-not-string-array", label)

    logger.debug("Loaded %d tag names from %s", len(data), label)
    return frozenset(item.lower() for item in data)


class TagMetadata:
    """Immutable snapshot of the tag tables, injected into the tree builder."""

    __slots__ = ("_all_tags", "_self_closing_tags")

    _all_tags: frozenset[str]
    _self_closing_tags: frozenset[str]

    def __init__(self, all_tags: frozenset[str] | set[str], self_closing_tags: frozenset[str] | set[str]) -> None:
        self._all_tags = frozenset(tag.lower() for tag in all_tags)
        self._self_closing_tags = frozenset(tag.lower() for tag in self_closing_tags)

    @classmethod
    def load(
        cls,
        all_tags_path: str | Path | None = None,
        self_closing_path: str | Path | None = None,
    ) -> TagMetadata:
        """Read both tables, defaulting to the copies bundled with the package.

        Raises:
            MetadataLoadError: If either table is missing, not JSON, or not an
                array of strings.
        """
        return cls(
            _read_table(all_tags_path, ALL_TAGS_FILE),
            _read_table(self_closing_path, SELF_CLOSING_TAGS_FILE),
        )

    @staticmethod
    @functools.cache
    def default() -> TagMetadata:
        """Return the bundled tables, loaded on the first call and shared afterwards."""
        return TagMetadata.load()

    def all_tags(self) -> frozenset[str]:
        return self._all_tags

    def self_closing_tags(self) -> frozenset[str]:
        return self._self_closing_tags

    def is_self_closing(self, tag_name: str) -> bool:
        return tag_name.lower() in self._self_closing_tags

    def is_known(self, tag_name: str) -> bool:
        return tag_name.lower() in self._all_tags

    def __repr__(self) -> str:
        return f"TagMetadata({len(self._all_tags)} tags, {len(self._self_closing_tags)} self-closing)"
