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
Height computation for the minimizer.

The height of a state is the length of the longest directed path from it to a
state with no outgoing arcs. Two strategies are available:

``FIRST_VISIT``
    A depth-first walk from the root with a visited set. A state that is
    reached a second time is not walked again and contributes a height of 0
    to the parent that reached it late, so the parent's height counts that
    arc as 1. A state with several parents therefore propagates its real
    height only to the first parent that visits it. This is the historical
    behavior of the engine and the default.

``LONGEST_PATH``
    A memoized walk that always uses the child's computed height, giving the
    true longest path for every state. With this strategy a parent is always
    strictly taller than each of its children.

Both walks follow arcs in insertion order and only see states reachable
from the root. The historical engine walked JavaScript object keys instead,
which visit integer-like symbols such as "1" first, in ascending order, then
the rest in insertion order. For alphabets with digit symbols the default
mode can therefore pick other representatives than the historical engine
did. The recognized language is the same either way.

Both walks are iterative, so long words do not hit the recursion limit.
"""

from dafsa.automata.states import InvariantError

FIRST_VISIT = "first-visit"
LONGEST_PATH = "longest-path"

STRATEGIES = (FIRST_VISIT, LONGEST_PATH)


def check_strategy(strategy):
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown height strategy {strategy!r}, expected one of {STRATEGIES}")
    return strategy


def compute_heights(store, strategy=FIRST_VISIT):
    """
    Computes the height of every state reachable from the root.

    Args:
        store (StateStore): The states to measure.
        strategy (str): ``FIRST_VISIT`` or ``LONGEST_PATH``.

    Returns:
        tuple: ``(heights, buckets)`` where ``heights`` maps state id to
            height and ``buckets`` maps height to the list of state ids with
            that height, in the order the walk finished them (post-order).

    Raises:
        ValueError: If the strategy is unknown.
        InvariantError: If the walk finds a cycle.
    """

    check_strategy(strategy)
    first_visit = strategy == FIRST_VISIT

    heights = {}
    buckets = {}
    visited = set()
    # Frames are [state id, iterator over target ids, best height so far]
    stack = []

    def enter(state_id):
        visited.add(state_id)
        stack.append([state_id, iter(list(store[state_id].arcs.values())), 0])

    enter(store.root)
    while stack:
        frame = stack[-1]
        for dest in frame[1]:
            if dest not in visited:
                enter(dest)
                break

            if dest not in heights:
                raise InvariantError(f"Cycle through state {dest}")
            if first_visit:
                frame[2] = max(frame[2], 1)
            else:
                frame[2] = max(frame[2], 1 + heights[dest])
        else:
            stack.pop()
            state_id, _, height = frame
            heights[state_id] = height
            buckets.setdefault(height, []).append(state_id)
            if stack:
                parent = stack[-1]
                parent[2] = max(parent[2], 1 + height)

    return heights, buckets
