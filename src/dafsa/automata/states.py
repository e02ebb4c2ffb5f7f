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
States and the state store that owns them.

All edges are store-relative integer ids, never object references, so the
automaton is an arena of :class:`State` objects addressed by id.
"""

from loguru import logger


class AutomatonError(Exception):
    """
    Base class for errors raised by the automaton.

    Attributes:
        message (str): Explanation of the error.
    """

    def __init__(self, message):
        """
        Initialize a new instance of AutomatonError.

        Args:
            message (str): Explanation of the error.
        """
        self.message = message
        super().__init__(message)


class UnknownStateError(AutomatonError, KeyError):
    """
    Raised when looking up a state id that is not live in the store.
    """

    def __init__(self, state_id):
        self.state_id = state_id
        super().__init__(f"No live state with id {state_id!r}")

    def __str__(self):
        # KeyError would otherwise repr() the message
        return self.message


class InvariantError(AutomatonError):
    """
    Raised by validation when the automaton breaks one of its structural
    invariants (a cycle, a dangling target or an unreachable state).
    """

    pass


class State:
    """
    A single state of the automaton.

    Attributes:
        id (int): The identifier assigned by the store.
        arcs (dict): Maps a single symbol to the id of the target state.
            A dict cannot hold two targets for one symbol, so the state is
            deterministic by construction.
        final (bool): True if the path reaching this state spells an
            accepted word.
    """

    __slots__ = ("id", "arcs", "final")

    def __init__(self, id, final=False):
        self.id = id
        self.arcs = {}
        self.final = final

    def __repr__(self):
        return "<{}{} {!r}>".format(self.id, "." if self.final else "", self.arcs)

    def __eq__(self, other):
        return (
            isinstance(other, self.__class__)
            and self.id == other.id
            and self.final == other.final
            and self.arcs == other.arcs
        )

    def __hash__(self):
        return hash(self.id)

    def target(self, symbol):
        """Returns the target id for ``symbol``, or None if there is no arc."""

        return self.arcs.get(symbol)

    def is_leaf(self):
        return not self.arcs


class StateStore:
    """
    Holds every live state of one automaton, addressable by id.

    The root state is created with the store and always has id 0. New ids
    come from a monotonic counter (``next_id``) and are never reused within
    the lifetime of the store, even after states are deleted by a merge.

    Usage:
    >>> store = StateStore()
    >>> s = store.new_state()
    >>> store.root, s.id
    (0, 1)
    """

    root = 0

    def __init__(self):
        self.states = {self.root: State(self.root)}
        self.next_id = self.root + 1

    def __len__(self):
        return len(self.states)

    def __contains__(self, state_id):
        return state_id in self.states

    def __iter__(self):
        return iter(self.states)

    def __getitem__(self, state_id):
        try:
            return self.states[state_id]
        except KeyError:
            raise UnknownStateError(state_id) from None

    def values(self):
        return self.states.values()

    def new_state(self):
        """
        Creates a new non-final state with the next unused id.

        Returns:
            State: The new state.
        """

        state = State(self.next_id)
        self.states[state.id] = state
        self.next_id += 1
        logger.debug("Created state {}", state.id)
        return state

    def delete(self, state_id):
        """
        Removes a state from the store. The root can never be deleted.

        Raises:
            AutomatonError: If ``state_id`` is the root.
            UnknownStateError: If there is no live state with this id.
        """

        if state_id == self.root:
            raise AutomatonError("The root state can't be deleted")
        if state_id not in self.states:
            raise UnknownStateError(state_id)
        del self.states[state_id]

    def arc_count(self):
        return sum(len(state.arcs) for state in self.states.values())
