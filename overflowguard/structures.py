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
from dataclasses import dataclass
from typing import Any

import numpy as np

from overflowguard.const import Direction, NumericTypes

# pyright: reportExplicitAny=false


def _jsonable(value: np.integer | np.floating) -> int | float | str:
    if isinstance(value, np.integer):
        return int(value)
    # extended precision does not survive conversion to a python float
    if np.finfo(type(value)).max > np.finfo(np.double).max:
        return np.format_float_scientific(value)
    return float(value)


@dataclass(frozen=True, slots=True)
class AccumulationResult[T: np.integer | np.floating]:
    """
    Outcome of a bounded accumulation.

    Packs the value reached alongside a success flag rather than signalling failure with a sentinel value,
    since any sentinel (e.g. -1) is a valid value for some type, or not representable in others (unsigned types).
        - value: the complete result if every step succeeded, otherwise the last value reached before the rejected step.
          Never a value produced by an operation that left the range of T.
        - succeeded: True iff every step completed within the representable range of T.
        - steps_taken: how many steps were applied to reach value.
    """

    value: T
    succeeded: bool
    steps_taken: int

    @property
    def range_exceeded(self) -> bool:
        return not self.succeeded


@dataclass(frozen=True, slots=True)
class TypeReport:
    """
    Results of testing one numeric type in one direction, once within range and once beyond it.
    """

    type_name: NumericTypes
    direction: Direction
    start: np.integer | np.floating
    step: np.integer | np.floating
    steps: int
    within_range: AccumulationResult[Any]
    beyond_range: AccumulationResult[Any]

    def todict(self) -> dict[str, Any]:
        """
        Plain python representation, with numeric values kept as numbers (never characters) for serialisation.
        """
        return {
            "type": str(self.type_name),
            "direction": str(self.direction),
            "start": _jsonable(self.start),
            "step": _jsonable(self.step),
            "steps": self.steps,
            "within_range": {
                "value": _jsonable(self.within_range.value),
                "range_exceeded": self.within_range.range_exceeded,
                "steps_taken": self.within_range.steps_taken,
            },
            "beyond_range": {
                "value": _jsonable(self.beyond_range.value),
                "range_exceeded": self.beyond_range.range_exceeded,
                "steps_taken": self.beyond_range.steps_taken,
            },
        }
