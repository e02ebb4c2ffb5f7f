from dafsa.automata.signature import signature
from dafsa.automata.states import State


def test_order_independent():
    s1 = State(1)
    s1.arcs["a"] = 4
    s1.arcs["b"] = 5
    s2 = State(2)
    s2.arcs["b"] = 5
    s2.arcs["a"] = 4
    assert signature(s1) == signature(s2)
    assert signature(s1) == ((("a", 4), ("b", 5)), False)


def test_finality_discriminates():
    s1 = State(1)
    s2 = State(2, final=True)
    s1.arcs["a"] = 3
    s2.arcs["a"] = 3
    assert signature(s1) != signature(s2)


def test_targets_compared_as_is():
    s1 = State(1)
    s2 = State(2)
    s1.arcs["a"] = 3
    s2.arcs["a"] = 4
    assert signature(s1) != signature(s2)


def test_resolve():
    s1 = State(1)
    s2 = State(2)
    s1.arcs["a"] = 3
    s2.arcs["a"] = 4
    mapping = {4: 3}
    resolve = lambda n: mapping.get(n, n)
    assert signature(s1, resolve) == signature(s2, resolve)
    # The state itself is untouched
    assert s2.arcs == {"a": 4}


def test_hashable():
    leaf = State(9, final=True)
    seen = {signature(leaf): 9}
    assert seen[signature(State(10, final=True))] == 9
