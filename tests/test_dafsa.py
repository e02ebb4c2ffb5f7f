from io import StringIO

import pytest
from dafsa.automata.dafsa import DAFSA
from dafsa.automata.states import InvariantError
from dafsa.policy import SAMPLE_LANGUAGE, PolicyViolation, WordSetPolicy
from loguru import logger


def test_insert_and_contains():
    d = DAFSA()
    assert d.insert("alfa") is None
    assert d.insert("alpha") is None
    assert d.contains("alfa")
    assert d.contains("alpha")
    assert "alfa" in d
    assert not d.contains("alf")
    assert not d.contains("alfalfa")
    assert not d.contains("")
    # a, l shared, then f/p branches
    assert len(d) == 1 + 2 + 2 + 3


def test_insert_is_idempotent():
    d = DAFSA()
    d.insert("bravo")
    size = len(d)
    graph = d.export_graph().to_dict()
    d.insert("bravo")
    assert len(d) == size
    assert d.export_graph().to_dict() == graph


def test_contains_does_not_create_states():
    d = DAFSA()
    d.insert("ab")
    size = len(d)
    assert not d.contains("abcdef")
    assert not d.contains("zzz")
    assert len(d) == size
    assert d.store.next_id == size


def test_prefix_becomes_final():
    d = DAFSA()
    d.insert("abc")
    assert not d.contains("ab")
    d.insert("ab")
    assert d.contains("ab")
    assert len(d) == 4


def test_empty_word():
    d = DAFSA()
    d.insert("")
    assert d.contains("")
    assert d.is_final(d.start())
    assert len(d) == 1


def test_code_points():
    d = DAFSA()
    # "e" followed by a combining acute accent is two symbols
    d.insert("e\u0301")
    assert len(d) == 3
    assert d.contains("e\u0301")
    assert not d.contains("\u00e9")
    assert d.next_state(0, "e") == 1
    assert d.next_state(1, "\u0301") == 2


def test_policy_violation():
    d = DAFSA(policy=WordSetPolicy(SAMPLE_LANGUAGE))
    d.insert("aab")
    size = len(d)
    graph = d.export_graph().to_dict()

    result = d.insert("abc")
    assert isinstance(result, PolicyViolation)
    assert result.word == "abc"
    assert str(result) == '"abc" is not part of the accepted language.'
    assert len(d) == size
    assert d.export_graph().to_dict() == graph
    assert not d.contains("abc")


def test_insert_all():
    d = DAFSA(policy=WordSetPolicy(SAMPLE_LANGUAGE))
    violations = d.insert_all(["aa", "c", "bab", "", "aa"])
    assert [v.word for v in violations] == ["c", ""]
    assert list(d) == ["aa", "bab"]


def test_violation_is_logged():
    messages = []
    logger.enable("dafsa")
    handler_id = logger.add(messages.append, level="WARNING", format="{message}")
    try:
        DAFSA(policy=WordSetPolicy(["aa"])).insert("zz")
    finally:
        logger.remove(handler_id)
        logger.disable("dafsa")

    assert len(messages) == 1
    assert '"zz" is not part of the accepted language.' in messages[0]


def test_trace():
    d = DAFSA()
    d.insert_all(["aa", "aab", "aaab"])
    assert d.trace("") == [0]
    assert d.trace("aab") == [0, 1, 2, 3]
    assert d.trace("ab") == [0, 1]
    assert d.trace("b") == [0]


def test_generate_all():
    d = DAFSA()
    words = ["bravo", "alfa", "charlie", "alpha", "al"]
    d.insert_all(words)
    assert list(d.generate_all()) == sorted(words)
    assert list(d.generate_all(d.next_state(0, "a"), "a")) == ["al", "alfa", "alpha"]


def test_reachable_from():
    d = DAFSA()
    d.insert_all(["ab", "c"])
    assert d.reachable_from(0) == {0, 1, 2, 3}
    assert d.reachable_from(1) == {1, 2}
    assert d.reachable_from(1, inclusive=False) == {2}


def test_clear():
    d = DAFSA()
    d.insert_all(["ab", "cd"])
    d.minimize()
    d.clear()
    assert len(d) == 1
    assert list(d) == []
    d.insert("x")
    assert d.trace("x") == [0, 1]


def test_validate():
    d = DAFSA()
    d.insert_all(["ab", "b"])
    d.validate()

    # Dangling target
    d.store[2].arcs["z"] = 42
    with pytest.raises(InvariantError):
        d.validate()
    del d.store[2].arcs["z"]

    # Cycle
    d.store[2].arcs["z"] = 1
    with pytest.raises(InvariantError):
        d.validate()
    del d.store[2].arcs["z"]

    # Orphan
    d.store.new_state()
    with pytest.raises(InvariantError):
        d.validate()


def test_dump():
    d = DAFSA()
    d.insert("ab")
    out = StringIO()
    d.dump(out)
    assert out.getvalue() == "@ 0\n    a -> 1\n  1\n    b -> 2||\n  2\n"


def test_repr():
    d = DAFSA()
    d.insert("ab")
    assert repr(d) == "<DAFSA 3 states>"
    assert d.state_count == 3


def test_generate_long_word():
    d = DAFSA()
    word = "a" * 5000
    d.insert_all([word, "b", word + "b"])
    d.validate()
    assert list(d) == [word, word + "b", "b"]
    d.minimize()
    assert list(d) == [word, word + "b", "b"]
