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
Canonical signatures of states.

Two states with equal signatures have the same set of (symbol, target) arcs
and the same final flag, so one can replace the other without changing the
language of the automaton.
"""


def signature(state, resolve=None):
    """
    Returns a hashable key describing the local structure of a state.

    The arcs are sorted, so the order in which they were added never affects
    the key. The final flag is part of the key: a final and a non-final state
    never compare equal, even with identical arcs.

    Target ids are compared as-is. This only detects true equivalence when
    the targets are already in their merged form, which depends on the order
    the minimizer visits states in.

    Args:
        state (State): The state to describe.
        resolve (callable, optional): Maps a target id to the id that will
            replace it once pending merges are applied. Defaults to the
            identity.

    Returns:
        tuple: ``(arcs, final)`` where ``arcs`` is a sorted tuple of
            ``(symbol, target)`` pairs.

    Example:
        >>> s = State(3)
        >>> s.arcs = {"b": 5, "a": 4}
        >>> signature(s)
        ((('a', 4), ('b', 5)), False)
    """

    if resolve is None:
        arcs = tuple(sorted(state.arcs.items()))
    else:
        arcs = tuple(sorted((label, resolve(dest)) for label, dest in state.arcs.items()))
    return arcs, state.final
