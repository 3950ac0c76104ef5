"""
Expression tree primitives for search queries.

A parsed query is a flat sequence of nodes interleaving operands and
operator markers, e.g. ``[Search(a), AND, Search(b), OR, Search(c)]``.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import NewType, Tuple, Union


DeckId = NewType("DeckId", int)
NoteTypeId = NewType("NoteTypeId", int)


class StateKind(str, enum.Enum):
    """
    Review states; values are the tokens used in search text.
    """

    NEW = "new"
    REVIEW = "review"
    LEARNING = "learn"
    DUE = "due"
    BURIED = "buried"
    USER_BURIED = "buried-manually"
    SCHED_BURIED = "buried-sibling"
    SUSPENDED = "suspended"


# Template references --------------------------------------------------
@dataclass(frozen=True)
class TemplateOrdinal:
    ordinal: int


@dataclass(frozen=True)
class TemplateName:
    name: str


TemplateKind = Union[TemplateOrdinal, TemplateName]


# Numeric properties ---------------------------------------------------
@dataclass(frozen=True)
class DueProperty:
    days: int


@dataclass(frozen=True)
class IntervalProperty:
    days: int


@dataclass(frozen=True)
class RepsProperty:
    count: int


@dataclass(frozen=True)
class LapsesProperty:
    count: int


@dataclass(frozen=True)
class EaseProperty:
    factor: float


PropertyKind = Union[DueProperty, IntervalProperty, RepsProperty, LapsesProperty, EaseProperty]


# Leaf predicates ------------------------------------------------------
@dataclass(frozen=True)
class UnqualifiedText:
    text: str


@dataclass(frozen=True)
class SingleField:
    field: str
    text: str
    is_re: bool = False


@dataclass(frozen=True)
class AddedInDays:
    days: int


@dataclass(frozen=True)
class EditedInDays:
    days: int


@dataclass(frozen=True)
class CardTemplate:
    template: TemplateKind


@dataclass(frozen=True)
class Deck:
    name: str


@dataclass(frozen=True)
class DeckIdSearch:
    deck_id: DeckId


@dataclass(frozen=True)
class NoteType:
    name: str


@dataclass(frozen=True)
class NoteTypeIdSearch:
    note_type_id: NoteTypeId


@dataclass(frozen=True)
class Rated:
    days: int
    ease: int | None = None


@dataclass(frozen=True)
class Tag:
    tag: str


@dataclass(frozen=True)
class Duplicates:
    note_type_id: NoteTypeId
    text: str


@dataclass(frozen=True)
class State:
    kind: StateKind


@dataclass(frozen=True)
class Flag:
    flag: int


@dataclass(frozen=True)
class NoteIds:
    ids: str


@dataclass(frozen=True)
class CardIds:
    ids: str


@dataclass(frozen=True)
class Property:
    operator: str
    kind: PropertyKind


@dataclass(frozen=True)
class WholeCollection:
    """Matches every item; written as empty text."""


@dataclass(frozen=True)
class Regex:
    pattern: str


@dataclass(frozen=True)
class NoCombining:
    text: str


@dataclass(frozen=True)
class WordBoundary:
    text: str


SearchNode = Union[
    UnqualifiedText,
    SingleField,
    AddedInDays,
    EditedInDays,
    CardTemplate,
    Deck,
    DeckIdSearch,
    NoteType,
    NoteTypeIdSearch,
    Rated,
    Tag,
    Duplicates,
    State,
    Flag,
    NoteIds,
    CardIds,
    Property,
    WholeCollection,
    Regex,
    NoCombining,
    WordBoundary,
]

WHOLE_COLLECTION = WholeCollection()


# Combinators ----------------------------------------------------------
@dataclass(frozen=True)
class And:
    """Positional AND marker between two operands."""


@dataclass(frozen=True)
class Or:
    """Positional OR marker between two operands."""


@dataclass(frozen=True)
class Not:
    node: "Node"


@dataclass(frozen=True)
class Group:
    nodes: Tuple["Node", ...]

    def __init__(self, nodes) -> None:
        object.__setattr__(self, "nodes", tuple(nodes))


@dataclass(frozen=True)
class Search:
    node: SearchNode


Node = Union[And, Or, Not, Group, Search]

AND = And()
OR = Or()


def is_whole_collection(nodes) -> bool:
    """
    Return True when ``nodes`` is exactly the unconstrained search.
    """

    return len(nodes) == 1 and nodes[0] == Search(WHOLE_COLLECTION)
