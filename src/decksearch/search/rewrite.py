"""
Text-to-text search transformations: normalize, negate and concatenate.
"""

from __future__ import annotations

import enum
from typing import Iterable, List

from ..errors import SearchInvariantError
from .nodes import AND, OR, Group, Node, Not, Search, WholeCollection, is_whole_collection
from .parser import Parser, parse
from .writer import write_node, write_nodes


class Separator(enum.IntEnum):
    """
    Boolean operator joining concatenated searches.

    Crosses serialization boundaries as a plain integer.
    """

    AND = 0
    OR = 1

    @classmethod
    def decode(cls, code: object) -> "Separator":
        """
        Decode an integer ``code``; anything other than the OR code means AND.
        """

        if isinstance(code, bool) or not isinstance(code, int):
            return cls.AND
        return cls.OR if code == cls.OR else cls.AND

    @property
    def node(self) -> Node:
        return OR if self is Separator.OR else AND


def normalize_search(text: str, *, parser: Parser = parse) -> str:
    """
    Convert ``text`` into an equivalent search with canonical syntax.
    """

    return write_nodes(parser(text))


def negate_search(text: str, *, parser: Parser = parse) -> str:
    """
    Return the negated counterpart of ``text``.

    The whole collection stays the whole collection and a negated single
    term loses its negation instead of gaining a second one.
    """

    nodes = parser(text)
    if len(nodes) != 1:
        return write_node(Not(Group(nodes)))
    node = nodes[0]
    if isinstance(node, Not):
        return write_node(node.node)
    if isinstance(node, Search) and isinstance(node.node, WholeCollection):
        return ""
    if isinstance(node, (Group, Search)):
        return write_node(Not(node))
    raise SearchInvariantError(f"Cannot negate a lone '{type(node).__name__}' marker")


def concatenate_searches(separator: object, texts: Iterable[str], *, parser: Parser = parse) -> str:
    """
    Join ``texts`` with the boolean operator selected by ``separator``.

    Whole-collection searches are left out; the first text that fails to
    parse aborts the whole operation.
    """

    operator = Separator.decode(separator).node
    parsed = [parser(text) for text in texts]
    kept = [nodes for nodes in parsed if not is_whole_collection(nodes)]
    joined: List[Node] = []
    for index, nodes in enumerate(kept):
        if index:
            joined.append(operator)
        joined.extend(nodes)
    return write_nodes(joined)
