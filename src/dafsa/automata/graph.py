# Copyright 2024 The dafsa-engine authors. All rights reserved.
#
# Redistribution and use in source and binary forms, with or without
# modification, are permitted provided that the following conditions are met:
#
#    1. Redistributions of source code must retain the above copyright notice,
#       this list of conditions and the following disclaimer.
#
#    2. Redistributions in binary form must reproduce the above copyright
#       notice, this list of conditions and the following disclaimer in the
#       documentation and/or other materials provided with the distribution.
#
# THIS SOFTWARE IS PROVIDED BY THE DAFSA-ENGINE AUTHORS ``AS IS'' AND ANY
# EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED
# WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE
# DISCLAIMED. IN NO EVENT SHALL THE DAFSA-ENGINE AUTHORS OR CONTRIBUTORS BE
# LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR
# CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF
# SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS
# INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN
# CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE)
# ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE
# POSSIBILITY OF SUCH DAMAGE.
#
# The views and conclusions contained in the software and documentation are
# those of the authors and should not be interpreted as representing official
# policies, either expressed or implied, of the dafsa-engine authors.

"""
Read-only snapshots of the automaton for visualizers.

A snapshot holds plain ids, flags and labels only. Styling, layout and
highlighting belong to whoever draws the graph.
"""

from cached_property import cached_property


class Node:
    """
    A state in a graph snapshot.

    Attributes:
        id (int): The state id.
        final (bool): Whether the state is final.
    """

    __slots__ = ("id", "final")

    def __init__(self, id, final=False):
        self.id = id
        self.final = final

    def __repr__(self):
        return "<Node {}{}>".format(self.id, " final" if self.final else "")

    def __eq__(self, other):
        return (
            isinstance(other, self.__class__)
            and self.id == other.id
            and self.final == other.final
        )

    def __hash__(self):
        return hash((self.id, self.final))

    def to_dict(self):
        return {"id": self.id, "isFinal": self.final}


class Edge:
    """
    All arcs joining one ordered pair of states.

    Attributes:
        source (int): The id of the state the arcs leave.
        target (int): The id of the state the arcs enter.
        symbols (frozenset): Every symbol labelling an arc between the two.
    """

    __slots__ = ("source", "target", "symbols")

    def __init__(self, source, target, symbols):
        self.source = source
        self.target = target
        self.symbols = frozenset(symbols)

    def __repr__(self):
        return f"<Edge {self.source}-{self.target} {self.label!r}>"

    def __eq__(self, other):
        return (
            isinstance(other, self.__class__)
            and self.source == other.source
            and self.target == other.target
            and self.symbols == other.symbols
        )

    def __hash__(self):
        return hash((self.source, self.target, self.symbols))

    @property
    def label(self):
        """The sorted symbols joined with ", ", e.g. ``"a, b"``."""

        return ", ".join(sorted(self.symbols))

    def to_dict(self):
        # "from" is a keyword, so only the dict form uses the visualizer names
        return {
            "from": self.source,
            "to": self.target,
            "symbols": sorted(self.symbols),
        }


class GraphSnapshot:
    """
    An immutable picture of the automaton at one point in time.

    Attributes:
        root (int): The id of the root state.
        nodes (tuple): :class:`Node` objects sorted by id.
        edges (tuple): :class:`Edge` objects sorted by ``(source, target)``.
    """

    def __init__(self, root, nodes, edges):
        self.root = root
        self.nodes = tuple(sorted(nodes, key=lambda n: n.id))
        self.edges = tuple(sorted(edges, key=lambda e: (e.source, e.target)))

    def __repr__(self):
        return f"<{type(self).__name__} {len(self.nodes)} nodes, {len(self.edges)} edges>"

    @classmethod
    def from_store(cls, store):
        """
        Builds a snapshot from a :class:`~dafsa.automata.states.StateStore`,
        grouping the symbols of parallel arcs into a single edge.
        """

        nodes = []
        edges = []
        for state in store.values():
            nodes.append(Node(state.id, state.final))
            grouped = {}
            for label, dest in state.arcs.items():
                grouped.setdefault(dest, set()).add(label)
            for dest, labels in grouped.items():
                edges.append(Edge(state.id, dest, labels))
        return cls(store.root, nodes, edges)

    @cached_property
    def alphabet(self):
        """Every symbol that labels at least one edge."""

        symbols = set()
        for edge in self.edges:
            symbols.update(edge.symbols)
        return frozenset(symbols)

    @cached_property
    def final_ids(self):
        return frozenset(node.id for node in self.nodes if node.final)

    @cached_property
    def successors(self):
        """Maps each node id to the ids its edges lead to."""

        succ = {node.id: [] for node in self.nodes}
        for edge in self.edges:
            succ[edge.source].append(edge.target)
        return succ

    def to_dict(self):
        return {
            "root": self.root,
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
        }
