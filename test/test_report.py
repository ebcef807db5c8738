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

import numpy as np

from overflowguard.const import STAR_LINE, Direction, NumericTypes
from overflowguard.harness import run_overflow_test, run_underflow_test
from overflowguard.report import format_bool, format_number, json_lines, text_lines


def test_format_bool():
    assert format_bool(True) == "true"
    assert format_bool(False) == "false"


def test_format_number():
    assert format_number(np.byte(65)) == "65"  # not 'A'
    assert format_number(np.ubyte(255)) == "255"
    assert format_number(np.double(0.5)) == "0.5"
    assert format_number(5) == "5"


def test_overflow_text():
    lines = list(text_lines(Direction.OVERFLOW, [run_overflow_test(NumericTypes.INT)]))
    assert lines == [
        "",
        STAR_LINE,
        "*** Running Overflow Tests ***",
        STAR_LINE,
        "Overflow Test of Type = int",
        "\tAdding Numbers Without Overflow (0, 429496729, 5) = Overflow: false Result: 2147483645",
        "\tAdding Numbers With Overflow (0, 429496729, 6) = Overflow: true Result: 2147483645",
    ]


def test_underflow_text():
    lines = list(text_lines(Direction.UNDERFLOW, [run_underflow_test(NumericTypes.UCHAR)]))
    assert lines[2] == "*** Running Underflow Tests ***"
    assert lines[4:] == [
        "Underflow Test of Type = unsigned char",
        "\tSubtracting Numbers Without Overflow (255, 51, 5) = Underflow: false Result: 0",
        "\tSubtracting Numbers With Overflow (255, 51, 6) = Underflow: true Result: 0",
    ]


def test_header_only_without_reports():
    lines = list(text_lines(Direction.OVERFLOW, []))
    assert len(lines) == 4


def test_json_lines():
    reports = [run_overflow_test(NumericTypes.SHORT), run_overflow_test(NumericTypes.USHORT)]
    lines = list(json_lines(reports))
    assert len(lines) == 2
    decoded = [json.loads(line) for line in lines]
    assert decoded[0]["type"] == "short"
    assert decoded[0]["beyond_range"] == {"value": 32765, "range_exceeded": True, "steps_taken": 5}
    assert decoded[1]["step"] == 13107
