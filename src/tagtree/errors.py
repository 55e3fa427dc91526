"""Exceptions and error messages raised while loading metadata and building trees.

Tokenizing and matching never fail on markup; only metadata loading, tree
building and document loading can raise.
"""

from __future__ import annotations


def generate_error_message(code: str, tag_name: str | None = None) -> str:
    """Generate human-readable error message from error code.

    Args:
        code: The error code string (kebab-case format)
        tag_name: Optional tag name to include in the message for context

    Returns:
        Human-readable error message string
    """
    messages = {
        # Tree builder errors
        "unexpected-end-tag": f"Unexpected </{tag_name}> end tag with no open element",
        "unexpected-end-tag-at-root": f"</{tag_name}> end tag would close the document root",
        # Metadata errors
        "metadata-unreadable": "Tag metadata table could not be read",
        "metadata-invalid-json": "Tag metadata table is not valid JSON",
        "metadata-not-string-array": "Tag metadata table must be a JSON array of strings",
        # Loader errors
        "fetch-failed": "Document could not be fetched",
        "fetch-bad-status": "Document request returned an error status",
    }

    # Return message or fall back to the code itself if not found
    return messages.get(code, code)


class TagTreeError(Exception):
    """Base class for errors raised by tagtree."""

    code: str

    def __init__(self, code: str, message: str | None = None) -> None:
        self.code = code
        super().__init__(message or generate_error_message(code))


class MetadataLoadError(TagTreeError):
    """Raised when a tag metadata table cannot be read or parsed."""

    path: str | None

    def __init__(self, code: str, path: str | None = None, detail: str | None = None) -> None:
        self.path = path
        message = generate_error_message(code)
        if path:
            message = f"{message}: {path}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(code, message)


class UnbalancedTagError(TagTreeError):
    """Raised when a closing tag arrives while no element is open."""

    token: str
    index: int

    def __init__(self, token: str, index: int, tag_name: str | None = None) -> None:
        self.token = token
        self.index = index
        message = generate_error_message("unexpected-end-tag", tag_name or token.strip("</>"))
        super().__init__("unexpected-end-tag", f"{message} (token {index}: {token!r})")


class FetchError(TagTreeError):
    """Raised when a document cannot be loaded from a URL."""

    url: str
    status_code: int | None

    def __init__(self, url: str, status_code: int | None = None, detail: str | None = None) -> None:
        self.url = url
        self.status_code = status_code
        code = "fetch-failed" if status_code is None else "fetch-bad-status"
        message = f"{generate_error_message(code)}: {url}"
        if status_code is not None:
            message = f"{message} (HTTP {status_code})"
        elif detail:
            message = f"{message} ({detail})"
        super().__init__(code, message)
