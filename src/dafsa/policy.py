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
Acceptance policies decide which words may be inserted.

A policy is any callable taking a word and returning a bool. The automaton
calls it before touching its states and never assumes anything else about
which words are legal.
"""

# A small demonstration language over {a, b}
SAMPLE_LANGUAGE = frozenset(
    ["aa", "aab", "aaab", "aba", "abab", "ba", "baab", "bab", "bba", "bbab"]
)


class PolicyViolation:
    """
    Returned by an insert that the policy rejected.

    This is a result value, not an exception: a rejected insert is an
    expected outcome and leaves the automaton untouched.

    Attributes:
        word (str): The rejected word.
        message (str): A human-readable description of the rejection.
    """

    __slots__ = ("word", "message")

    def __init__(self, word, message=None):
        self.word = word
        self.message = message or f'"{word}" is not part of the accepted language.'

    def __repr__(self):
        return f"<{type(self).__name__} {self.word!r}>"

    def __str__(self):
        return self.message

    def __eq__(self, other):
        return isinstance(other, self.__class__) and self.word == other.word

    def __hash__(self):
        return hash(self.word)


def accept_all(word):
    """A policy that accepts every word."""

    return True


class WordSetPolicy:
    """
    Accepts only the words of a fixed whitelist.

    Usage:
    >>> policy = WordSetPolicy(SAMPLE_LANGUAGE)
    >>> policy("aab"), policy("b")
    (True, False)
    """

    def __init__(self, words):
        self.words = frozenset(words)

    def __repr__(self):
        return f"{type(self).__name__}({sorted(self.words)!r})"

    def __call__(self, word):
        return word in self.words


class AlphabetPolicy:
    """
    Accepts any word whose code points all belong to ``symbols``.

    Args:
        symbols (iterable): The allowed symbols.
        allow_empty (bool): Whether the empty word is accepted. Defaults to
            False.
    """

    def __init__(self, symbols, allow_empty=False):
        self.symbols = frozenset(symbols)
        self.allow_empty = allow_empty

    def __repr__(self):
        return f"{type(self).__name__}({''.join(sorted(self.symbols))!r})"

    def __call__(self, word):
        if not word:
            return self.allow_empty
        return all(char in self.symbols for char in word)
