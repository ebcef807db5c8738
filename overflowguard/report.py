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
import json
from collections.abc import Iterable, Iterator

import numpy as np

from overflowguard.const import STAR_LINE, Direction
from overflowguard.structures import TypeReport

BANNER_START = "Starting Numeric Underflow / Overflow Tests!"
BANNER_END = "All Numeric Underflow / Overflow Tests Complete!"

_TITLES: dict[Direction, tuple[str, str]] = {
    Direction.OVERFLOW: ("Overflow", "Adding"),
    Direction.UNDERFLOW: ("Underflow", "Subtracting"),
}


def format_bool(b: bool) -> str:
    return "true" if b else "false"


def format_number(value: np.integer | np.floating | int) -> str:
    # always a number, even for character types
    if isinstance(value, np.integer):
        return str(int(value))
    return str(value)


def text_lines(direction: Direction, reports: Iterable[TypeReport]) -> Iterator[str]:
    """
    Yield the console report for one direction, section header first.
    """
    title, verb = _TITLES[direction]
    yield ""
    yield STAR_LINE
    yield f"*** Running {title} Tests ***"
    yield STAR_LINE
    for rep in reports:
        start = format_number(rep.start)
        step = format_number(rep.step)
        yield f"{title} Test of Type = {rep.type_name}"
        yield (
            f"\t{verb} Numbers Without Overflow ({start}, {step}, {rep.steps}) = "
            f"{title}: {format_bool(rep.within_range.range_exceeded)} Result: {format_number(rep.within_range.value)}"
        )
        yield (
            f"\t{verb} Numbers With Overflow ({start}, {step}, {rep.steps + 1}) = "
            f"{title}: {format_bool(rep.beyond_range.range_exceeded)} Result: {format_number(rep.beyond_range.value)}"
        )


def json_lines(reports: Iterable[TypeReport]) -> Iterator[str]:
    """
    Yield one JSON object per report (JSON lines).
    """
    for rep in reports:
        yield json.dumps(rep.todict(), separators=(",", ":"))
