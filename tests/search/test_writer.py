import pytest

from decksearch.errors import SearchInvariantError
from decksearch.search.nodes import (
    AND,
    OR,
    WHOLE_COLLECTION,
    AddedInDays,
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
    Not,
    NoteIds,
    NoteType,
    NoteTypeId,
    NoteTypeIdSearch,
    Property,
    Rated,
    Regex,
    RepsProperty,
    Search,
    SingleField,
    State,
    StateKind,
    Tag,
    TemplateName,
    TemplateOrdinal,
    UnqualifiedText,
    WordBoundary,
)
from decksearch.search.writer import quote, write_node, write_nodes, write_search_node


def test_quote_escapes_each_double_quote_once():
    assert quote('say "hi"') == r'"say \"hi\""'
    assert quote("plain") == '"plain"'


def test_quote_does_not_touch_existing_backslashes():
    assert quote(r"a\b") == r'"a\b"'


def test_unqualified_text_escapes_every_colon():
    assert write_search_node(UnqualifiedText("a:b:c")) == r'"a\:b\:c"'


def test_single_field_literal_re_prefix_escapes_first_colon_only():
    assert write_search_node(SingleField("Front", "re:abc", is_re=False)) == r'"Front:re\:abc"'
    assert write_search_node(SingleField("Front", "re:a:b", is_re=False)) == r'"Front:re\:a:b"'


def test_single_field_regex_keeps_text_verbatim():
    assert write_search_node(SingleField("Front", r"\d{3}:x", is_re=True)) == r'"Front:re:\d{3}:x"'


def test_single_field_escapes_colons_in_field_name():
    assert write_search_node(SingleField("Fr:ont", "a:b")) == r'"Fr\:ont:a:b"'


def test_template_name_is_not_quote_escaped():
    # Regression pin: template names skip quote escaping, unlike deck or tag names.
    assert write_search_node(CardTemplate(TemplateName('say "hi"'))) == '"card:say "hi""'
    assert write_search_node(Deck('say "hi"')) == r'"deck:say \"hi\""'


@pytest.mark.parametrize(
    "node, expected",
    [
        (AddedInDays(3), '"added:3"'),
        (EditedInDays(4), '"edited:4"'),
        (CardTemplate(TemplateOrdinal(2)), '"card:2"'),
        (CardTemplate(TemplateName("Reverse")), '"card:Reverse"'),
        (Deck("Lang::JP"), '"deck:Lang::JP"'),
        (DeckIdSearch(DeckId(1234567890123)), '"did:1234567890123"'),
        (NoteType("Basic"), '"note:Basic"'),
        (NoteTypeIdSearch(NoteTypeId(42)), '"mid:42"'),
        (Rated(7), '"rated:7"'),
        (Rated(7, 3), '"rated:7:3"'),
        (Tag("vocab"), '"tag:vocab"'),
        (Duplicates(NoteTypeId(12), "dog"), '"dupes:12,dog"'),
        (Flag(1), '"flag:1"'),
        (NoteIds("1,2,3"), '"nid:1,2,3"'),
        (CardIds("4"), '"cid:4"'),
        (WHOLE_COLLECTION, ""),
        (Regex("a.c"), '"re:a.c"'),
        (NoCombining("uber"), '"nc:uber"'),
        (WordBoundary("cat"), '"w:cat"'),
    ],
)
def test_leaf_rendering(node, expected):
    assert write_search_node(node) == expected


@pytest.mark.parametrize(
    "kind, token",
    [
        (StateKind.NEW, "new"),
        (StateKind.REVIEW, "review"),
        (StateKind.LEARNING, "learn"),
        (StateKind.DUE, "due"),
        (StateKind.BURIED, "buried"),
        (StateKind.USER_BURIED, "buried-manually"),
        (StateKind.SCHED_BURIED, "buried-sibling"),
        (StateKind.SUSPENDED, "suspended"),
    ],
)
def test_state_tokens(kind, token):
    assert write_search_node(State(kind)) == f'"is:{token}"'


@pytest.mark.parametrize(
    "node, expected",
    [
        (Property("<", DueProperty(-3)), '"prop:due<-3"'),
        (Property(">=", IntervalProperty(10)), '"prop:ivl>=10"'),
        (Property("=", RepsProperty(2)), '"prop:reps=2"'),
        (Property("!=", LapsesProperty(1)), '"prop:lapses!=1"'),
        (Property(">", EaseProperty(2.5)), '"prop:ease>2.5"'),
        (Property("<=", EaseProperty(2.0)), '"prop:ease<=2"'),
        (Property(">", EaseProperty(1e-05)), '"prop:ease>0.00001"'),
        (Property(">", EaseProperty(-0.25)), '"prop:ease>-0.25"'),
        (Property("<", EaseProperty(1e20)), '"prop:ease<100000000000000000000"'),
    ],
)
def test_property_rendering(node, expected):
    assert write_search_node(node) == expected


def test_property_operator_is_passed_through():
    assert write_search_node(Property("~~", RepsProperty(1))) == '"prop:reps~~1"'


def test_write_nodes_joins_without_extra_separators():
    nodes = [
        Search(Tag("a")),
        AND,
        Not(Group([Search(Deck("b")), OR, Search(Flag(1))])),
    ]
    assert write_nodes(nodes) == '"tag:a" AND -("deck:b" OR "flag:1")'


def test_write_node_negated_leaf():
    assert write_node(Not(Search(Tag("x")))) == '-"tag:x"'


def test_unknown_node_raises_invariant_error():
    with pytest.raises(SearchInvariantError):
        write_node(object())
    with pytest.raises(SearchInvariantError):
        write_search_node(object())
