"""
Search expression model, parser, writer and rewriting operations.
"""

from .nodes import AND, OR, WHOLE_COLLECTION, Group, Node, Not, Search, SearchNode
from .parser import parse
from .writer import quote, write_node, write_nodes
from .rewrite import Separator, concatenate_searches, negate_search, normalize_search
from .service import SearchRewriter

__all__ = [
    "AND",
    "OR",
    "WHOLE_COLLECTION",
    "Group",
    "Node",
    "Not",
    "Search",
    "SearchNode",
    "SearchRewriter",
    "Separator",
    "concatenate_searches",
    "negate_search",
    "normalize_search",
    "parse",
    "quote",
    "write_node",
    "write_nodes",
]
