#!/usr/bin/env python3
"""Command-line interface for tagtree."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import NoReturn

from . import TagTree
from .errors import TagTreeError
from .fetch import load
from .selector import SelectorError


def _get_version() -> str:
    try:
        return version("tagtree")
    except PackageNotFoundError:  # pragma: no cover
        return "dev"


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="tagtree",
        description="Build a tag tree from HTML and list the tags matching a selector.",
        epilog=(
            "Examples:\n"
            "  tagtree page.html\n"
            "  curl -s https://example.com | tagtree -\n"
            "  tagtree https://example.com --selector 'div p'\n"
            "  tagtree page.html --selector 'ul.menu li.active' --unique --count\n"
            "\n"
            "If you don't have the 'tagtree' command available, use:\n"
            "  python -m tagtree ...\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "path",
        nargs="?",
        help="HTML file to parse, an http(s) URL to fetch, or '-' to read from stdin",
    )
    parser.add_argument(
        "--selector",
        help="Selector chain to match (defaults to every element)",
    )
    parser.add_argument(
        "--unique",
        action="store_true",
        help="Report each matching element once, even when reached through several matches",
    )
    parser.add_argument(
        "--first",
        action="store_true",
        help="Only output the first matching element",
    )
    parser.add_argument(
        "--count",
        action="store_true",
        help="Print the number of matches instead of the tags",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log debug output to stderr",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"tagtree {_get_version()}",
    )

    args = parser.parse_args(argv)

    if not args.path:
        parser.print_help(sys.stderr)
        raise SystemExit(1)

    return args


def _read_html(path: str) -> str:
    if path == "-":
        return sys.stdin.read()

    if path.startswith(("http://", "https://")):
        return asyncio.run(load(path))

    return Path(path).read_text()


def main(argv: list[str] | None = None) -> NoReturn | None:
    args = _parse_args(sys.argv[1:] if argv is None else argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        html = _read_html(args.path)
        doc = TagTree(html)
    except TagTreeError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(3) from e

    try:
        if args.selector:
            nodes = doc.select_unique(args.selector) if args.unique else doc.select(args.selector)
        else:
            nodes = list(doc.elements())
    except SelectorError as e:
        print(str(e), file=sys.stderr)
        raise SystemExit(2) from e

    if not nodes:
        if args.count:
            sys.stdout.write("0\n")
        raise SystemExit(1)

    if args.first:
        nodes = [nodes[0]]

    if args.count:
        sys.stdout.write(f"{len(nodes)}\n")
        return None

    sys.stdout.write("\n".join(node.name for node in nodes))
    sys.stdout.write("\n")
    return None


if __name__ == "__main__":
    main()
