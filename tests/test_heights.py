import pytest
from dafsa.automata.dafsa import DAFSA
from dafsa.automata.heights import FIRST_VISIT, LONGEST_PATH, compute_heights
from dafsa.automata.states import InvariantError, StateStore


def _shared_store():
    # 0 reaches 2 directly through "x" (walked first) and again via 1
    store = StateStore()
    for _ in range(3):
        store.new_state()
    store[0].arcs["x"] = 2
    store[0].arcs["a"] = 1
    store[1].arcs["b"] = 2
    store[2].arcs["c"] = 3
    store[3].final = True
    return store


def test_trie_heights():
    d = DAFSA()
    for word in ["aa", "aab", "aaab"]:
        d.insert(word)

    for strategy in (FIRST_VISIT, LONGEST_PATH):
        heights, buckets = compute_heights(d.store, strategy)
        assert heights == {0: 4, 1: 3, 2: 2, 3: 0, 4: 1, 5: 0}
        assert buckets == {0: [3, 5], 1: [4], 2: [2], 3: [1], 4: [0]}


def test_first_visit_short_circuit():
    heights, buckets = compute_heights(_shared_store(), FIRST_VISIT)
    # State 1 reaches 2 after it was already walked, so the arc counts as 1
    assert heights == {0: 2, 1: 1, 2: 1, 3: 0}
    assert buckets == {0: [3], 1: [2, 1], 2: [0]}


def test_longest_path():
    heights, buckets = compute_heights(_shared_store(), LONGEST_PATH)
    assert heights == {0: 3, 1: 2, 2: 1, 3: 0}
    assert buckets == {0: [3], 1: [2], 2: [1], 3: [0]}


def test_root_only():
    heights, buckets = compute_heights(StateStore())
    assert heights == {0: 0}
    assert buckets == {0: [0]}


def test_unreachable_states_ignored():
    store = StateStore()
    store.new_state()
    heights, _ = compute_heights(store)
    assert heights == {0: 0}


def test_cycle():
    store = StateStore()
    s = store.new_state()
    store[0].arcs["a"] = s.id
    s.arcs["b"] = 0
    for strategy in (FIRST_VISIT, LONGEST_PATH):
        with pytest.raises(InvariantError):
            compute_heights(store, strategy)


def test_long_word():
    d = DAFSA()
    d.insert("a" * 5000)
    heights, _ = compute_heights(d.store)
    assert heights[0] == 5000


def test_unknown_strategy():
    with pytest.raises(ValueError):
        compute_heights(StateStore(), "widest")


def test_digit_symbols_keep_insertion_order():
    d = DAFSA()
    d.insert_all(["2", "1", "b"])
    _, buckets = compute_heights(d.store)
    # "2" was added first, so its leaf is walked before the leaf of "1"
    assert d.next_state(0, "2") == 1
    assert buckets[0] == [1, 2, 3]
    report = d.minimize()
    assert report.merges == {2: 1, 3: 1}
