from dafsa.automata.dafsa import DAFSA
from dafsa.automata.graph import Edge, GraphSnapshot, Node


def test_empty_graph():
    graph = DAFSA().export_graph()
    assert graph.nodes == (Node(0, False),)
    assert graph.edges == ()
    assert graph.alphabet == frozenset()


def test_trie_graph():
    d = DAFSA()
    d.insert_all(["ab", "b"])
    graph = d.export_graph()
    assert graph.root == 0
    assert graph.nodes == (Node(0), Node(1), Node(2, True), Node(3, True))
    assert graph.edges == (Edge(0, 1, "a"), Edge(0, 3, "b"), Edge(1, 2, "b"))
    assert graph.final_ids == frozenset([2, 3])
    assert graph.alphabet == frozenset("ab")
    assert graph.successors == {0: [1, 3], 1: [2], 2: [], 3: []}


def test_parallel_arcs_grouped():
    d = DAFSA()
    d.insert_all(["a", "b"])
    d.minimize()
    graph = d.export_graph()
    assert graph.edges == (Edge(0, 1, ["a", "b"]),)
    assert graph.edges[0].label == "a, b"
    assert graph.to_dict() == {
        "root": 0,
        "nodes": [{"id": 0, "isFinal": False}, {"id": 1, "isFinal": True}],
        "edges": [{"from": 0, "to": 1, "symbols": ["a", "b"]}],
    }


def test_snapshot_is_detached():
    d = DAFSA()
    d.insert("a")
    graph = d.export_graph()
    d.insert("b")
    assert len(graph.nodes) == 2
    assert len(d.export_graph().nodes) == 3


def test_snapshot_acyclic_after_minimize():
    d = DAFSA()
    d.insert_all(["aa", "aab", "aaab", "aba", "abab", "ba", "baab", "bab", "bba", "bbab"])
    d.minimize()
    succ = d.export_graph().successors

    def walk(node, path):
        assert node not in path
        for dest in succ[node]:
            walk(dest, path | {node})

    walk(0, frozenset())


def test_sorting():
    graph = GraphSnapshot(0, [Node(2), Node(0)], [Edge(2, 3, "x"), Edge(0, 2, "y")])
    assert [n.id for n in graph.nodes] == [0, 2]
    assert [(e.source, e.target) for e in graph.edges] == [(0, 2), (2, 3)]
    assert repr(graph) == "<GraphSnapshot 2 nodes, 2 edges>"


def test_dict_keys_match_visualizer():
    d = DAFSA()
    d.insert("ab")
    data = d.export_graph().to_dict()
    assert [sorted(node) for node in data["nodes"]] == [["id", "isFinal"]] * 3
    assert data["nodes"][2] == {"id": 2, "isFinal": True}
    assert data["edges"][0] == {"from": 0, "to": 1, "symbols": ["a"]}
    assert [sorted(edge) for edge in data["edges"]] == [["from", "symbols", "to"]] * 2
