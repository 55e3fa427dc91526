from .errors import FetchError, MetadataLoadError, TagTreeError, UnbalancedTagError
from .fetch import load
from .metadata import TagMetadata
from .node import Element
from .parser import TagTree
from .selector import Selector, SelectorError, parse_selector, select, select_unique
from .tokenizer import iter_tokens, tokenize
from .treebuilder import TreeBuilder, build_tree

__all__ = [
    "Element",
    "FetchError",
    "MetadataLoadError",
    "Selector",
    "SelectorError",
    "TagMetadata",
    "TagTree",
    "TagTreeError",
    "TreeBuilder",
    "UnbalancedTagError",
    "build_tree",
    "iter_tokens",
    "load",
    "parse_selector",
    "select",
    "select_unique",
    "tokenize",
]
