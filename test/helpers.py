# overflowguard
#
# Copyright (C) 2025 Genome Research Ltd.
#
# Author: Alex Byrne <ab63@sanger.ac.uk>
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.
import numpy as np

from overflowguard.limits import NUMERIC_TYPE_MAP

INTEGER_TYPES = [t for t in NUMERIC_TYPE_MAP.values() if issubclass(t, np.integer)]
SIGNED_TYPES = [t for t in INTEGER_TYPES if issubclass(t, np.signedinteger)]
UNSIGNED_TYPES = [t for t in INTEGER_TYPES if issubclass(t, np.unsignedinteger)]
REAL_TYPES = [t for t in NUMERIC_TYPE_MAP.values() if issubclass(t, np.floating)]
ALL_TYPES = list(NUMERIC_TYPE_MAP.values())


def accumulate_exact(lowest: int, maximum: int, start: int, step: int, steps: int) -> tuple[int, bool, int]:
    """
    Reference bounded accumulation over python's unbounded ints - apply the step, then test the range.
    Returns (value, succeeded, steps_taken).
    """
    current = start
    for i in range(steps):
        nxt = current + step
        if not lowest <= nxt <= maximum:
            return current, False, i
        current = nxt
    return current, True, steps
