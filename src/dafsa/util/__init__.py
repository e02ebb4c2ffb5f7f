# Copyright 2007 Matt Chaput. All rights reserved.
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
# THIS SOFTWARE IS PROVIDED BY MATT CHAPUT ``AS IS'' AND ANY EXPRESS OR
# IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE IMPLIED WARRANTIES OF
# MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE ARE DISCLAIMED. IN NO
# EVENT SHALL MATT CHAPUT OR CONTRIBUTORS BE LIABLE FOR ANY DIRECT, INDIRECT,
# INCIDENTAL, SPECIAL, EXEMPLARY, OR CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT
# LIMITED TO, PROCUREMENT OF SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA,
# OR PROFITS; OR BUSINESS INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF
# LIABILITY, WHETHER IN CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING
# NEGLIGENCE OR OTHERWISE) ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE,
# EVEN IF ADVISED OF THE POSSIBILITY OF SUCH DAMAGE.
#
# The views and conclusions contained in the software and documentation are
# those of the authors and should not be interpreted as representing official
# policies, either expressed or implied, of Matt Chaput.


import random
import time

# Symbols used by random_word when no alphabet is given
WORDCHARS = "ab"


now = time.perf_counter


def random_word(size=6, alphabet=WORDCHARS, rng=None):
    """
    Generates a random word over the given alphabet.

    Parameters:
    - size (int): The length of the word to generate. Default is 6.
    - alphabet (str): The symbols to draw from. Default is "ab".
    - rng (random.Random, optional): The random source. Defaults to the
      module-level generator.

    Returns:
    - str: The randomly generated word.
    """
    rng = rng or random
    return "".join(rng.choice(alphabet) for _ in range(size))


def random_words(count, maxsize=6, alphabet=WORDCHARS, seed=None):
    """Returns a list of ``count`` random words of length 0 to ``maxsize``.

    The same ``seed`` always produces the same list.
    """

    rng = random.Random(seed)
    return [random_word(rng.randint(0, maxsize), alphabet, rng) for _ in range(count)]
