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
from collections.abc import Generator, Iterable
import logging
from typing import Any

from overflowguard.accumulate import add_numbers, subtract_numbers
from overflowguard.const import DEFAULT_STEPS, Direction, NumericTypes
from overflowguard.limits import NumericLimits, limits_for, scalar_type_for
from overflowguard.structures import AccumulationResult, TypeReport

# pyright: reportExplicitAny=false
# pyright: reportAny=false


def derive_step(limits: NumericLimits[Any], steps: int) -> Any:
    """
    Amount added or subtracted per step such that (steps) steps stay within range but (steps + 1) do not - i.e. max / steps.
    Integer types use floor division, as C integer division truncates toward zero for positive operands.
    """
    if steps < 1:
        raise ValueError(f"steps must be at least 1 to derive a step size, received {steps!r}")
    # steps may exceed the range of the type under test, so integer division is done on python ints
    if limits.is_integer:
        return limits.scalar_type(int(limits.max) // steps)
    return limits.scalar_type(limits.max / limits.scalar_type(steps))


def _log_outcome(
    report: TypeReport,
    quiet: int,
) -> None:
    kind = report.direction
    if report.within_range.range_exceeded and quiet < 2:
        logging.warning(
            f'{report.type_name: <18} ¦ {kind} prevented after {report.within_range.steps_taken} of {report.steps} steps, where all steps were expected to remain within range'
        )
    if report.beyond_range.range_exceeded and quiet < 1:
        logging.info(
            f'{report.type_name: <18} ¦ {kind} prevented after {report.beyond_range.steps_taken} of {report.steps + 1} steps, last safe value {report.beyond_range.value}'
        )


def _run_test(
    numeric_type: NumericTypes | str,
    direction: Direction,
    steps: int,
    quiet: int,
) -> TypeReport:
    type_name = NumericTypes(numeric_type)
    limits = limits_for(scalar_type_for(type_name))
    step = derive_step(limits, steps)

    within_range: AccumulationResult[Any]
    beyond_range: AccumulationResult[Any]
    match direction:
        case Direction.OVERFLOW:
            start = limits.scalar_type(0)
            within_range = add_numbers(start, step, steps)
            beyond_range = add_numbers(start, step, steps + 1)
        case Direction.UNDERFLOW:
            start = limits.max
            within_range = subtract_numbers(start, step, steps)
            beyond_range = subtract_numbers(start, step, steps + 1)
        case _:
            raise ValueError(f"Unsupported direction {direction!r} - supports {[str(d) for d in Direction]} only")

    report = TypeReport(
        type_name=type_name,
        direction=direction,
        start=start,
        step=step,
        steps=steps,
        within_range=within_range,
        beyond_range=beyond_range,
    )
    _log_outcome(report, quiet)
    return report


def run_overflow_test(
    numeric_type: NumericTypes | str,
    steps: int = DEFAULT_STEPS,
    quiet: int = 0,
) -> TypeReport:
    """
    Add max / steps to 0, (steps) times and then (steps + 1) times, guarding against overflow.
    """
    return _run_test(numeric_type, Direction.OVERFLOW, steps, quiet)


def run_underflow_test(
    numeric_type: NumericTypes | str,
    steps: int = DEFAULT_STEPS,
    quiet: int = 0,
) -> TypeReport:
    """
    Subtract max / steps from max, (steps) times and then (steps + 1) times, guarding against underflow.
    """
    return _run_test(numeric_type, Direction.UNDERFLOW, steps, quiet)


def do_overflow_tests(
    types: Iterable[NumericTypes | str] = tuple(NumericTypes),
    steps: int = DEFAULT_STEPS,
    quiet: int = 0,
) -> Generator[TypeReport, Any, Any]:
    for numeric_type in types:
        yield run_overflow_test(numeric_type, steps, quiet)


def do_underflow_tests(
    types: Iterable[NumericTypes | str] = tuple(NumericTypes),
    steps: int = DEFAULT_STEPS,
    quiet: int = 0,
) -> Generator[TypeReport, Any, Any]:
    for numeric_type in types:
        yield run_underflow_test(numeric_type, steps, quiet)


def run_tests(
    types: Iterable[NumericTypes | str],
    directions: Iterable[Direction],
    steps: int = DEFAULT_STEPS,
    quiet: int = 0,
) -> Generator[tuple[Direction, list[TypeReport]], Any, Any]:
    """
    Run the requested directions in turn over the given types, yielding the reports for each direction as a batch.
    """
    types = tuple(types)
    for direction in directions:
        match direction:
            case Direction.OVERFLOW:
                yield direction, list(do_overflow_tests(types, steps, quiet))
            case Direction.UNDERFLOW:
                yield direction, list(do_underflow_tests(types, steps, quiet))
