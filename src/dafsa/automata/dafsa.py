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

import sys

from loguru import logger

from dafsa.automata import heights as heightmod
from dafsa.automata.graph import GraphSnapshot
from dafsa.automata.minimize import DESCENDING, check_order, minimize
from dafsa.automata.states import InvariantError, StateStore
from dafsa.policy import PolicyViolation, accept_all


class DAFSA:
    """
    Deterministic acyclic finite state automaton over a set of words.

    Words are added with :meth:`insert`, which extends the underlying trie,
    and :meth:`minimize` later merges equivalent states so common suffixes
    are shared. Insertion and minimization are meant to run in batches: add
    the words, then minimize.

    Words are read one code point at a time. A character made of several code
    points, such as ``"e\\u0301"``, is several symbols.

    The automaton is not thread-safe. A multi-threaded host must hold one
    lock around every call.

    Usage:
    >>> d = DAFSA()
    >>> d.insert("aa")
    >>> d.insert("aab")
    >>> d.contains("aab"), d.contains("a")
    (True, False)
    >>> report = d.minimize()

    Args:
        policy (callable, optional): Decides which words may be inserted.
            Defaults to :func:`~dafsa.policy.accept_all`.
        order (str, optional): Default bucket order for :meth:`minimize`.
        heights (str, optional): Default height strategy for
            :meth:`minimize`.
    """

    def __init__(self, policy=accept_all, order=DESCENDING, heights=heightmod.FIRST_VISIT):
        self.policy = policy
        self.order = check_order(order)
        self.heights = heightmod.check_strategy(heights)
        self.store = StateStore()

    def __repr__(self):
        return f"<{type(self).__name__} {len(self.store)} states>"

    def __len__(self):
        return len(self.store)

    def __contains__(self, word):
        return self.contains(word)

    def __iter__(self):
        return self.generate_all()

    @property
    def state_count(self):
        return len(self.store)

    def start(self):
        return self.store.root

    def next_state(self, state_id, label):
        """Returns the target of ``label`` from ``state_id``, or None."""

        return self.store[state_id].target(label)

    def is_final(self, state_id):
        return self.store[state_id].final

    # Building

    def insert(self, word):
        """
        Adds a word to the automaton.

        The policy is consulted first. If it rejects the word nothing is
        changed and a :class:`~dafsa.policy.PolicyViolation` is returned.
        Otherwise the walk from the root creates a new state for every symbol
        without an existing arc, and the last state reached is marked final.
        Inserting the same word twice changes nothing the second time.

        Existing states are extended in place, so inserting into a minimized
        automaton can also add words that share the extended suffix state.

        Args:
            word (str): The word to add.

        Returns:
            PolicyViolation or None: The rejection, or None if the word was
                added.
        """

        if not self.policy(word):
            violation = PolicyViolation(word)
            logger.warning(violation.message)
            return violation

        store = self.store
        state = store[store.root]
        for label in word:
            dest = state.target(label)
            if dest is None:
                new = store.new_state()
                state.arcs[label] = new.id
                state = new
            else:
                state = store[dest]
        state.final = True
        logger.info('"{}" added to the automaton', word)
        return None

    def insert_all(self, words):
        """
        Inserts each word in turn.

        Returns:
            list: The :class:`~dafsa.policy.PolicyViolation` of every rejected
                word, in input order.
        """

        violations = []
        for word in words:
            violation = self.insert(word)
            if violation is not None:
                violations.append(violation)
        return violations

    def clear(self):
        """Drops every word and state except a fresh root, restarting ids."""

        self.store = StateStore()
        logger.info("Automaton cleared")

    # Searching

    def trace(self, word):
        """
        Returns the ids of the states visited while reading ``word``.

        The list starts with the root and stops at the first symbol without
        an arc, so it is shorter than ``len(word) + 1`` on a miss.
        """

        store = self.store
        state_id = store.root
        path = [state_id]
        for label in word:
            state_id = store[state_id].target(label)
            if state_id is None:
                break
            path.append(state_id)
        return path

    def contains(self, word):
        """
        Returns True if ``word`` is accepted by the automaton.

        Never creates states: a missing arc is an immediate miss.
        """

        store = self.store
        state_id = store.root
        for label in word:
            state_id = store[state_id].target(label)
            if state_id is None:
                return False
        return store[state_id].final

    def generate_all(self, state_id=None, sofar=""):
        """
        Yields every word accepted from ``state_id`` (the root by default),
        in sorted order.

        Each word is prefixed with ``sofar``.
        """

        store = self.store
        stack = [(store.root if state_id is None else state_id, sofar)]
        while stack:
            state_id, sofar = stack.pop()
            state = store[state_id]
            if state.final:
                yield sofar
            # Pushed in reverse so the smallest label is walked first
            for label in sorted(state.arcs, reverse=True):
                stack.append((state.arcs[label], sofar + label))

    def reachable_from(self, src, inclusive=True):
        """
        Returns the set of state ids reachable from ``src``.

        Args:
            src (int): The state to start from.
            inclusive (bool, optional): Whether ``src`` itself is included.
                Defaults to True.
        """

        store = self.store
        reached = set()
        stack = [src]
        while stack:
            state_id = stack.pop()
            for dest in store[state_id].arcs.values():
                if dest not in reached:
                    reached.add(dest)
                    stack.append(dest)
        if inclusive:
            reached.add(src)
        return reached

    # Minimizing

    def minimize(self, order=None, heights=None):
        """
        Merges structurally equivalent states without changing the language.

        Args:
            order (str, optional): Overrides the automaton's bucket order for
                this pass.
            heights (str, optional): Overrides the automaton's height
                strategy for this pass.

        Returns:
            MinimizeReport: What the pass did.
        """

        return minimize(
            self.store,
            order=self.order if order is None else order,
            heights=self.heights if heights is None else heights,
        )

    # Inspection

    def export_graph(self):
        """Returns a read-only :class:`~dafsa.automata.graph.GraphSnapshot`."""

        return GraphSnapshot.from_store(self.store)

    def validate(self):
        """
        Checks the structural invariants of the automaton.

        Raises:
            InvariantError: If an arc points at a state that is not live, if
                a state is unreachable from the root, or if there is a cycle.
        """

        store = self.store
        for state in store.values():
            for label, dest in state.arcs.items():
                if dest not in store:
                    raise InvariantError(
                        f"State {state.id} has arc {label!r} to missing state {dest}"
                    )

        unreachable = set(store) - self.reachable_from(store.root)
        if unreachable:
            raise InvariantError(f"Unreachable states: {sorted(unreachable)}")

        # The height walk raises InvariantError on a cycle
        heightmod.compute_heights(store, heightmod.LONGEST_PATH)

    def dump(self, stream=sys.stdout):
        """
        Prints a textual representation of the automaton to ``stream``.

        The root is marked with ``@`` and final targets with ``||``.

        Example:
            >>> d = DAFSA()
            >>> d.insert("ab")
            >>> d.dump()
            @ 0
                a -> 1
              1
                b -> 2||
              2
        """

        store = self.store
        for state_id in sorted(store):
            beg = "@" if state_id == store.root else " "
            print(beg, state_id, file=stream)
            arcs = store[state_id].arcs
            for label in sorted(arcs):
                dest = arcs[label]
                end = "||" if store[dest].final else ""
                print("   ", label, "->", f"{dest}{end}", file=stream)
