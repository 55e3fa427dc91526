"""Split raw markup into tag tokens.

A tag token is any ``<...>`` run with at least one character between the
brackets. Text between tags is dropped and nothing is validated or decoded.
"""

from __future__ import annotations

import re
from collections.abc import Iterator

_TAG_TOKEN_PATTERN = re.compile(r"<[^>]+>")
_TAG_NAME_PATTERN = re.compile(r"<\s*/?\s*([^\s/>]+)")
_ATTRIBUTE_PATTERN = re.compile(
    r"""([^\s"'>/=]+)(?:\s*=\s*("[^"]*"|'[^']*'|[^\s"'>]+))?""",
)
_WHITESPACE_PATTERN = re.compile(r"\s+")


def iter_tokens(markup: str) -> Iterator[str]:
    """Yield tag tokens from ``markup`` in document order."""
    for match in _TAG_TOKEN_PATTERN.finditer(markup):
        yield match.group(0)


def tokenize(markup: str) -> list[str]:
    """Return every tag token in ``markup``, left to right.

    An unmatched ``<`` produces no token; markup without tags produces an
    empty list.
    """
    return _TAG_TOKEN_PATTERN.findall(markup)


def is_end_tag(token: str) -> bool:
    return token.startswith("</")


def is_self_closing_syntax(token: str) -> bool:
    return token.endswith("/>")


def tag_name_of(token: str) -> str:
    """Return the lower-cased bare tag name of a token, or ``""`` if it has none."""
    match = _TAG_NAME_PATTERN.match(token)
    if not match:
        return ""
    name = match.group(1).lower()
    # Comments carry their text straight after the dashes: <!--note-->
    if name.startswith("!--"):
        return "!--"
    return name


def split_attributes(token: str) -> list[str]:
    """Return the raw attribute strings of a start tag, in source order.

    ``'<a href="/x" hidden>'`` gives ``['href="/x"', 'hidden']``. Comment and
    end tag tokens have no attributes.
    """
    match = _TAG_NAME_PATTERN.match(token)
    if not match or is_end_tag(token) or token.startswith("<!--"):
        return []
    body = token[match.end() : -1]
    if body.endswith("/"):
        body = body[:-1]
    return [m.group(0) for m in _ATTRIBUTE_PATTERN.finditer(body)]


def attribute_value(raw_attribute: str) -> tuple[str, str | None]:
    """Split a raw attribute string into a lower-cased name and its unquoted value."""
    name, sep, value = raw_attribute.partition("=")
    name = name.strip().lower()
    if not sep:
        return name, None
    value = value.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        value = value[1:-1]
    return name, value


def split_classes(value: str) -> list[str]:
    """Split a class attribute value into unique class tokens, keeping first-seen order."""
    return list(dict.fromkeys(part for part in _WHITESPACE_PATTERN.split(value) if part))
