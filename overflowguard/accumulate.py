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
"""
Bounds-checked accumulation of `start ± step × steps` for fixed-width numeric types.

Each step is checked *before* it is applied, by rearranging `current + step > max` into `current > max - step`
(and likewise for the lowest value), so the potentially overflowing operation is never performed. This holds
for floating point types too - range is the finite range, and no inf/nan is produced then inspected.

Exceeding the range is an expected outcome, reported in the returned `AccumulationResult` rather than raised.
"""
from numbers import Integral

import numpy as np

from overflowguard.limits import is_supported_type, limits_for
from overflowguard.structures import AccumulationResult

# pyright: reportAny=false


def _check_args[T: np.integer | np.floating](start: T, step: T, steps: int) -> type[T]:
    scalar_type = type(start)
    if not is_supported_type(scalar_type):
        raise TypeError(
            f"start must be a fixed-width numpy integer or floating point scalar, received {scalar_type!r}"
        )
    # mixed types would promote silently and the check would be made against the wrong range
    if not isinstance(step, np.generic) or np.dtype(type(step)) != np.dtype(scalar_type):
        raise TypeError(
            f"start and step must be of the same numeric type, received {scalar_type!r} and {type(step)!r}"
        )
    if issubclass(scalar_type, np.floating) and not (np.isfinite(start) and np.isfinite(step)):
        raise ValueError(f"start and step must be finite, received {start!r} and {step!r}")
    if isinstance(steps, bool) or not isinstance(steps, Integral):
        raise ValueError(f"steps must be an integer, received {steps!r}")
    if steps < 0:
        raise ValueError(f"steps must not be negative, received {steps!r}")
    return scalar_type


def add_numbers[T: np.integer | np.floating](start: T, increment: T, steps: int) -> AccumulationResult[T]:
    """
    Compute start + (increment * steps) by repeated addition, stopping before any step that would leave the range of T.

    Returns the total with succeeded=True if every step was applied, otherwise the last safe total with succeeded=False.
    """
    scalar_type = _check_args(start, increment, steps)
    limits = limits_for(scalar_type)
    zero = scalar_type(0)

    current = start
    for i in range(steps):
        if increment > zero:
            # would we go above max?
            if current > limits.max - increment:
                return AccumulationResult(current, False, i)
        elif increment < zero:
            # would we go below lowest?
            if current < limits.lowest - increment:
                return AccumulationResult(current, False, i)

        current = current + increment

    return AccumulationResult(current, True, steps)


def subtract_numbers[T: np.integer | np.floating](start: T, decrement: T, steps: int) -> AccumulationResult[T]:
    """
    Compute start - (decrement * steps) by repeated subtraction, stopping before any step that would leave the range of T.

    Returns the total with succeeded=True if every step was applied, otherwise the last safe total with succeeded=False.
    """
    scalar_type = _check_args(start, decrement, steps)
    limits = limits_for(scalar_type)
    zero = scalar_type(0)

    current = start
    for i in range(steps):
        if decrement > zero:
            # would we go below lowest?
            if current < limits.lowest + decrement:
                return AccumulationResult(current, False, i)
        elif decrement < zero:
            # subtracting a negative adds - would we go above max?
            if current > limits.max + decrement:
                return AccumulationResult(current, False, i)

        current = current - decrement

    return AccumulationResult(current, True, steps)
