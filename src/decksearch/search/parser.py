"""
Default parser turning search text into a flat node sequence.

Only the output contract matters to the rewriting operations: operator
markers sit between operands, groups are never empty and ``Not`` wraps a
single ``Group`` or ``Search``.
"""

from __future__ import annotations

import re
from typing import Callable, Dict, List

from ..errors import SearchErrorKind, SearchParseError
from .nodes import (
    AND,
    OR,
    WHOLE_COLLECTION,
    AddedInDays,
    And,
    CardIds,
    CardTemplate,
    Deck,
    DeckId,
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
    NoteTypeId,
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
    StateKind,
    Tag,
    TemplateName,
    TemplateOrdinal,
    UnqualifiedText,
    WordBoundary,
)


Parser = Callable[[str], List[Node]]

_OPERATOR_RE = re.compile(r"(and|or)(?=[\s()]|$)", re.IGNORECASE)
_UNSIGNED_RE = re.compile(r"\d+", re.ASCII)
_SIGNED_RE = re.compile(r"-?\d+", re.ASCII)
_FLOAT_RE = re.compile(r"-?\d+(?:\.\d+)?", re.ASCII)
_RATED_RE = re.compile(r"(\d+)(?::([1-4]))?", re.ASCII)
_FLAG_RE = re.compile(r"[0-7]", re.ASCII)
_IDS_RE = re.compile(r"\d+(?:,\d+)*", re.ASCII)
_DUPES_RE = re.compile(r"(-?\d+),(.*)", re.ASCII | re.DOTALL)
_PROPERTY_RE = re.compile(r"(due|ivl|reps|lapses|ease)(<=|>=|!=|=|<|>)(.+)", re.IGNORECASE | re.DOTALL)
_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)


def parse(text: str) -> List[Node]:
    """
    Parse ``text`` into a flat, interleaved node sequence.

    Blank text is the whole collection.
    """

    if not text.strip():
        return [Search(WHOLE_COLLECTION)]
    return _SearchParser(text).parse()


class _SearchParser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def parse(self) -> List[Node]:
        return self._parse_sequence(depth=0)

    # Structure ---------------------------------------------------------
    def _parse_sequence(self, depth: int) -> List[Node]:
        nodes: List[Node] = []
        while True:
            self._skip_whitespace()
            if self._at_end():
                if depth:
                    raise self._error(SearchErrorKind.UNBALANCED_PARENTHESES, "missing ')'")
                break
            if self.text[self.pos] == ")":
                if not depth:
                    raise self._error(SearchErrorKind.UNBALANCED_PARENTHESES, "unexpected ')'")
                self.pos += 1
                break
            operator = self._read_operator()
            if operator is not None:
                if not nodes or _is_operator(nodes[-1]):
                    raise self._error(SearchErrorKind.MISPLACED_OPERATOR, self._operator_label(operator))
                nodes.append(operator)
                continue
            if nodes and not _is_operator(nodes[-1]):
                nodes.append(AND)
            nodes.append(self._parse_operand(depth))
        if nodes and _is_operator(nodes[-1]):
            raise self._error(SearchErrorKind.MISPLACED_OPERATOR, self._operator_label(nodes[-1]))
        return nodes

    def _parse_operand(self, depth: int) -> Node:
        if self.text[self.pos] == "-" and self._negation_follows():
            self.pos += 1
            return Not(self._parse_group_or_search(depth))
        return self._parse_group_or_search(depth)

    def _parse_group_or_search(self, depth: int) -> Node:
        if self.text[self.pos] == "(":
            self.pos += 1
            nodes = self._parse_sequence(depth + 1)
            if not nodes:
                raise self._error(SearchErrorKind.EMPTY_GROUP)
            return Group(nodes)
        return Search(_parse_search(self._read_term(), self.text))

    def _read_operator(self) -> Node | None:
        match = _OPERATOR_RE.match(self.text, self.pos)
        if match is None:
            return None
        self.pos = match.end()
        return AND if match.group(1).lower() == "and" else OR

    def _read_term(self) -> str:
        chars: List[str] = []
        in_quotes = False
        while not self._at_end():
            char = self.text[self.pos]
            if char == "\\":
                if self.pos + 1 >= len(self.text):
                    raise self._error(SearchErrorKind.DANGLING_ESCAPE, "backslash at end of search")
                following = self.text[self.pos + 1]
                chars.append('"' if following == '"' else char + following)
                self.pos += 2
                continue
            if char == '"':
                in_quotes = not in_quotes
                self.pos += 1
                continue
            if not in_quotes and (char.isspace() or char in "()"):
                break
            chars.append(char)
            self.pos += 1
        if in_quotes:
            raise self._error(SearchErrorKind.UNTERMINATED_QUOTE)
        return "".join(chars)

    # Helpers -----------------------------------------------------------
    def _negation_follows(self) -> bool:
        following = self.pos + 1
        if following >= len(self.text):
            return False
        char = self.text[following]
        return not char.isspace() and char != ")"

    def _skip_whitespace(self) -> None:
        while not self._at_end() and self.text[self.pos].isspace():
            self.pos += 1

    def _at_end(self) -> bool:
        return self.pos >= len(self.text)

    def _operator_label(self, operator: Node) -> str:
        return f"'{'AND' if isinstance(operator, And) else 'OR'}' at position {self.pos}"

    def _error(self, kind: SearchErrorKind, detail: str | None = None) -> SearchParseError:
        return SearchParseError(kind, self.text, detail)


def _is_operator(node: Node) -> bool:
    return isinstance(node, (And, Or))


# Leaf predicates ------------------------------------------------------
def _parse_search(term: str, text: str) -> SearchNode:
    index = _find_unescaped_colon(term)
    if index is None:
        return UnqualifiedText(_unescape_colons(term))
    key, value = term[:index], term[index + 1 :]
    handler = _QUALIFIERS.get(key.lower())
    if handler is not None:
        return handler(value, text)
    field = _unescape_colons(key)
    if value.startswith("re:"):
        return SingleField(field, value[3:], is_re=True)
    return SingleField(field, _unescape_colons(value), is_re=False)


def _find_unescaped_colon(term: str) -> int | None:
    index = 0
    while index < len(term):
        char = term[index]
        if char == "\\":
            index += 2
            continue
        if char == ":":
            return index
        index += 1
    return None


def _unescape_colons(term: str) -> str:
    return _ESCAPE_RE.sub(lambda match: ":" if match.group(1) == ":" else match.group(0), term)


def _parse_unsigned(value: str, text: str, kind: SearchErrorKind = SearchErrorKind.INVALID_NUMBER) -> int:
    if not _UNSIGNED_RE.fullmatch(value):
        raise SearchParseError(kind, text, f"expected a non-negative integer, got {value!r}")
    return int(value)


def _parse_signed(value: str, text: str, kind: SearchErrorKind = SearchErrorKind.INVALID_NUMBER) -> int:
    if not _SIGNED_RE.fullmatch(value):
        raise SearchParseError(kind, text, f"expected an integer, got {value!r}")
    return int(value)


def _parse_template(value: str, text: str) -> SearchNode:
    if _UNSIGNED_RE.fullmatch(value):
        return CardTemplate(TemplateOrdinal(int(value)))
    return CardTemplate(TemplateName(value))


def _parse_rated(value: str, text: str) -> SearchNode:
    match = _RATED_RE.fullmatch(value)
    if match is None:
        raise SearchParseError(SearchErrorKind.INVALID_RATED, text, f"expected days[:1-4], got {value!r}")
    days, ease = match.groups()
    return Rated(int(days), int(ease) if ease is not None else None)


def _parse_duplicates(value: str, text: str) -> SearchNode:
    match = _DUPES_RE.fullmatch(value)
    if match is None:
        raise SearchParseError(
            SearchErrorKind.INVALID_DUPLICATES, text, f"expected note type id and text, got {value!r}"
        )
    note_type_id, dupe_text = match.groups()
    return Duplicates(NoteTypeId(int(note_type_id)), dupe_text)


def _parse_state(value: str, text: str) -> SearchNode:
    try:
        return State(StateKind(value.lower()))
    except ValueError as exc:
        raise SearchParseError(SearchErrorKind.INVALID_STATE, text, f"unknown state {value!r}") from exc


def _parse_flag(value: str, text: str) -> SearchNode:
    if not _FLAG_RE.fullmatch(value):
        raise SearchParseError(SearchErrorKind.INVALID_FLAG, text, f"expected 0-7, got {value!r}")
    return Flag(int(value))


def _parse_ids(value: str, text: str) -> str:
    if not _IDS_RE.fullmatch(value):
        raise SearchParseError(SearchErrorKind.INVALID_IDS, text, f"expected comma-separated ids, got {value!r}")
    return value


def _parse_property(value: str, text: str) -> SearchNode:
    match = _PROPERTY_RE.fullmatch(value)
    if match is None:
        raise SearchParseError(SearchErrorKind.INVALID_PROPERTY, text, f"unrecognised property {value!r}")
    name, operator, amount = match.groups()
    name = name.lower()
    kind: PropertyKind
    if name == "due":
        kind = DueProperty(_parse_signed(amount, text, SearchErrorKind.INVALID_PROPERTY))
    elif name == "ivl":
        kind = IntervalProperty(_parse_unsigned(amount, text, SearchErrorKind.INVALID_PROPERTY))
    elif name == "reps":
        kind = RepsProperty(_parse_unsigned(amount, text, SearchErrorKind.INVALID_PROPERTY))
    elif name == "lapses":
        kind = LapsesProperty(_parse_unsigned(amount, text, SearchErrorKind.INVALID_PROPERTY))
    else:
        if not _FLOAT_RE.fullmatch(amount):
            raise SearchParseError(SearchErrorKind.INVALID_PROPERTY, text, f"expected a number, got {amount!r}")
        kind = EaseProperty(float(amount))
    return Property(operator, kind)


_QUALIFIERS: Dict[str, Callable[[str, str], SearchNode]] = {
    "added": lambda value, text: AddedInDays(_parse_unsigned(value, text)),
    "edited": lambda value, text: EditedInDays(_parse_unsigned(value, text)),
    "card": _parse_template,
    "deck": lambda value, text: Deck(value),
    "did": lambda value, text: DeckIdSearch(DeckId(_parse_signed(value, text))),
    "note": lambda value, text: NoteType(value),
    "mid": lambda value, text: NoteTypeIdSearch(NoteTypeId(_parse_signed(value, text))),
    "rated": _parse_rated,
    "tag": lambda value, text: Tag(value),
    "dupe": _parse_duplicates,
    "dupes": _parse_duplicates,
    "is": _parse_state,
    "flag": _parse_flag,
    "nid": lambda value, text: NoteIds(_parse_ids(value, text)),
    "cid": lambda value, text: CardIds(_parse_ids(value, text)),
    "prop": _parse_property,
    "re": lambda value, text: Regex(value),
    "nc": lambda value, text: NoCombining(value),
    "w": lambda value, text: WordBoundary(value),
}
