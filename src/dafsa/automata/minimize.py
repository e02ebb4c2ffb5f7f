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
Height-ordered merging of equivalent states.

Minimization runs in two phases. :func:`plan_merges` walks the height buckets
without touching the store and decides which state is merged into which.
:func:`apply_merges` then rewrites arcs, unions arc tables, propagates final
flags and deletes the merged states.

While planning, each signature is computed through the merges planned so
far, so a state sees its targets exactly as an in-place, one-merge-at-a-time
rewrite would have left them. Splitting the work this way changes nothing
observable, it only avoids deleting from the store while walking it.

Bucket order is a named parameter:

``DESCENDING``
    Tallest bucket first. This is the engine's historical order and the
    default. Parents are compared before their children have been merged,
    so some merges higher up can be missed and a second pass may still
    shrink the automaton.

``ASCENDING``
    Bottom-up, from the leaves. Combined with the ``LONGEST_PATH`` height
    strategy every child is merged before its parents are compared, which
    yields the minimal automaton in a single pass.
"""

from loguru import logger

from dafsa.automata.heights import FIRST_VISIT, check_strategy, compute_heights
from dafsa.automata.signature import signature
from dafsa.util import now

DESCENDING = "descending"
ASCENDING = "ascending"

ORDERS = (DESCENDING, ASCENDING)


def check_order(order):
    if order not in ORDERS:
        raise ValueError(f"Unknown merge order {order!r}, expected one of {ORDERS}")
    return order


class MinimizeReport:
    """
    Describes what a minimization pass did.

    Attributes:
        before (int): Number of live states before the pass.
        after (int): Number of live states after the pass.
        merges (dict): Maps each removed state id to the id that absorbed it,
            in the order the merges were decided.
        order (str): The bucket order used.
        heights (str): The height strategy used.
    """

    __slots__ = ("before", "after", "merges", "order", "heights")

    def __init__(self, before, after, merges, order, heights):
        self.before = before
        self.after = after
        self.merges = merges
        self.order = order
        self.heights = heights

    def __repr__(self):
        return "<{} {}->{} states, {} merges ({}, {})>".format(
            type(self).__name__,
            self.before,
            self.after,
            len(self.merges),
            self.order,
            self.heights,
        )

    @property
    def removed(self):
        return self.before - self.after


def plan_merges(store, order=DESCENDING, heights=FIRST_VISIT):
    """
    Decides which states to merge, without modifying the store.

    States are visited bucket by bucket in the given order, and within a
    bucket in the order the height walk finished them. The first state seen
    with a given signature becomes the representative of that signature;
    every later state with the same signature, in any bucket, is merged into
    it. The root always survives: a reachable state with the same arcs as
    the root would close a cycle, so the root never duplicates anything.

    Args:
        store (StateStore): The states to examine.
        order (str): ``DESCENDING`` or ``ASCENDING``.
        heights (str): A height strategy from :mod:`dafsa.automata.heights`.

    Returns:
        dict: Maps every state to remove to its final survivor.
    """

    check_order(order)
    check_strategy(heights)
    _, buckets = compute_heights(store, heights)

    replaced = {}

    def resolve(state_id):
        while state_id in replaced:
            state_id = replaced[state_id]
        return state_id

    representatives = {}
    for height in sorted(buckets, reverse=order == DESCENDING):
        for state_id in buckets[height]:
            key = signature(store[state_id], resolve)
            rep = representatives.get(key)
            if rep is None:
                representatives[key] = state_id
            else:
                replaced[state_id] = rep
                logger.debug("Planned merge {} -> {} at height {}", state_id, rep, height)

    return {src: resolve(src) for src in replaced}


def apply_merges(store, merges):
    """
    Applies merge decisions to the store.

    For every ``src -> dest`` pair: arcs pointing at ``src`` anywhere in the
    store are redirected to ``dest``, arcs of ``src`` missing on ``dest`` are
    copied over (existing arcs on ``dest`` win), ``dest`` becomes final if
    ``src`` was, and ``src`` is deleted.

    The incoming-arc rewrite scans every live state, which costs
    O(states x alphabet) per pass.

    Args:
        store (StateStore): The store to modify.
        merges (dict): Maps states to remove to their survivors. No survivor
            may itself be a key.
    """

    if not merges:
        return

    for state in store.values():
        for label, dest in list(state.arcs.items()):
            if dest in merges:
                state.arcs[label] = merges[dest]

    for src, dest in merges.items():
        source = store[src]
        target = store[dest]
        for label, next_id in source.arcs.items():
            if label not in target.arcs:
                target.arcs[label] = next_id
        if source.final:
            target.final = True

    for src in merges:
        store.delete(src)


def merge_states(store, src, dest):
    """Merges the single state ``src`` into ``dest``."""

    apply_merges(store, {src: dest})


def minimize(store, order=DESCENDING, heights=FIRST_VISIT):
    """
    Merges structurally equivalent states in place.

    The recognized language does not change and the number of states never
    grows. On a store holding only the root this does nothing.

    Args:
        store (StateStore): The store to minimize.
        order (str): ``DESCENDING`` (default) or ``ASCENDING``.
        heights (str): ``FIRST_VISIT`` (default) or ``LONGEST_PATH``.

    Returns:
        MinimizeReport: What the pass did.
    """

    t = now()
    before = len(store)
    merges = plan_merges(store, order, heights)
    apply_merges(store, merges)
    report = MinimizeReport(before, len(store), merges, order, heights)
    logger.info(
        "Minimized {} -> {} states in {:0.6f} s ({}, {})",
        report.before,
        report.after,
        now() - t,
        order,
        heights,
    )
    return report
