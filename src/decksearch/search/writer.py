"""
Render expression trees back into canonical search text.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Never, NoReturn

from ..errors import SearchInvariantError
from .nodes import (
    AddedInDays,
    And,
    CardIds,
    CardTemplate,
    Deck,
    DeckIdSearch,
    DueProperty,
    Duplicates,
    EaseProperty,
    EditedInDays,
    Flag,
    Group,
    IntervalProperty,
    LapsesProperty,
    NoCombining,
    Node,
    Not,
    NoteIds,
    NoteType,
    NoteTypeIdSearch,
    Or,
    Property,
    PropertyKind,
    Rated,
    Regex,
    RepsProperty,
    Search,
    SearchNode,
    SingleField,
    State,
    Tag,
    TemplateKind,
    TemplateName,
    TemplateOrdinal,
    UnqualifiedText,
    WholeCollection,
    WordBoundary,
)


def unhandled(node: Never) -> NoReturn:
    """
    Exhaustiveness guard: type checkers reject any call that can be reached.
    """

    raise SearchInvariantError(f"Unhandled node type '{type(node).__name__}'")


def write_nodes(nodes: Iterable[Node]) -> str:
    return "".join(write_node(node) for node in nodes)


def write_node(node: Node) -> str:
    if isinstance(node, And):
        return " AND "
    if isinstance(node, Or):
        return " OR "
    if isinstance(node, Not):
        return f"-{write_node(node.node)}"
    if isinstance(node, Group):
        return f"({write_nodes(node.nodes)})"
    if isinstance(node, Search):
        return write_search_node(node.node)
    unhandled(node)


def write_search_node(node: SearchNode) -> str:
    if isinstance(node, UnqualifiedText):
        return quote(node.text.replace(":", "\\:"))
    if isinstance(node, SingleField):
        return _write_single_field(node.field, node.text, node.is_re)
    if isinstance(node, AddedInDays):
        return f'"added:{node.days}"'
    if isinstance(node, EditedInDays):
        return f'"edited:{node.days}"'
    if isinstance(node, CardTemplate):
        return _write_template(node.template)
    if isinstance(node, Deck):
        return quote(f"deck:{node.name}")
    if isinstance(node, DeckIdSearch):
        return f'"did:{node.deck_id}"'
    if isinstance(node, NoteType):
        return quote(f"note:{node.name}")
    if isinstance(node, NoteTypeIdSearch):
        return f'"mid:{node.note_type_id}"'
    if isinstance(node, Rated):
        return _write_rated(node.days, node.ease)
    if isinstance(node, Tag):
        return quote(f"tag:{node.tag}")
    if isinstance(node, Duplicates):
        return quote(f"dupes:{node.note_type_id},{node.text}")
    if isinstance(node, State):
        return f'"is:{node.kind.value}"'
    if isinstance(node, Flag):
        return f'"flag:{node.flag}"'
    if isinstance(node, NoteIds):
        return f'"nid:{node.ids}"'
    if isinstance(node, CardIds):
        return f'"cid:{node.ids}"'
    if isinstance(node, Property):
        return _write_property(node.operator, node.kind)
    if isinstance(node, WholeCollection):
        return ""
    if isinstance(node, Regex):
        return quote(f"re:{node.pattern}")
    if isinstance(node, NoCombining):
        return quote(f"nc:{node.text}")
    if isinstance(node, WordBoundary):
        return quote(f"w:{node.text}")
    unhandled(node)


def quote(text: str) -> str:
    """
    Escape embedded double quotes and wrap ``text`` in double quotes.
    """

    escaped = text.replace('"', '\\"')
    return f'"{escaped}"'


# Helpers --------------------------------------------------------------
def _write_single_field(field: str, text: str, is_re: bool) -> str:
    prefix = "re:" if is_re else ""
    if not is_re and text.startswith("re:"):
        # keep a literal "re:" from being read back as a regex search
        text = text.replace(":", "\\:", 1)
    field = field.replace(":", "\\:")
    return quote(f"{field}:{prefix}{text}")


def _write_template(template: TemplateKind) -> str:
    if isinstance(template, TemplateOrdinal):
        return f'"card:{template.ordinal}"'
    if isinstance(template, TemplateName):
        # not quote-escaped, unlike the other named searches
        return f'"card:{template.name}"'
    unhandled(template)


def _write_rated(days: int, ease: int | None) -> str:
    if ease is None:
        return f'"rated:{days}"'
    return f'"rated:{days}:{ease}"'


def _write_property(operator: str, kind: PropertyKind) -> str:
    if isinstance(kind, DueProperty):
        return f'"prop:due{operator}{kind.days}"'
    if isinstance(kind, IntervalProperty):
        return f'"prop:ivl{operator}{kind.days}"'
    if isinstance(kind, RepsProperty):
        return f'"prop:reps{operator}{kind.count}"'
    if isinstance(kind, LapsesProperty):
        return f'"prop:lapses{operator}{kind.count}"'
    if isinstance(kind, EaseProperty):
        return f'"prop:ease{operator}{_format_factor(kind.factor)}"'
    unhandled(kind)


def _format_factor(value: float) -> str:
    # positional notation only; the parser does not read exponents
    if float(value).is_integer():
        return str(int(value))
    return format(Decimal(repr(float(value))), "f")
