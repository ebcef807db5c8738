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
Representable range lookup for the fixed-width numeric types overflowguard tests.

Python's int is unbounded, so fixed-width behaviour comes from numpy scalar types, whose arithmetic
follows the C primitive types they are named after. Limits are resolved via `numpy.iinfo`/`numpy.finfo`.
"""
from dataclasses import dataclass
from functools import cache

import numpy as np

from overflowguard.const import NumericTypes, TypeFamily

# pyright: reportAny=false


# insertion order is the order in which test runs report
NUMERIC_TYPE_MAP: dict[NumericTypes, type[np.integer] | type[np.floating]] = {
    # signed integers
    NumericTypes.CHAR: np.byte,
    NumericTypes.WCHAR: np.int32,  # as on most unix-likes
    NumericTypes.SHORT: np.short,
    NumericTypes.INT: np.intc,
    NumericTypes.LONG: np.dtype("l").type,
    NumericTypes.LONGLONG: np.longlong,
    # unsigned integers
    NumericTypes.UCHAR: np.ubyte,
    NumericTypes.USHORT: np.ushort,
    NumericTypes.UINT: np.uintc,
    NumericTypes.ULONG: np.dtype("L").type,
    NumericTypes.ULONGLONG: np.ulonglong,
    # real numbers
    NumericTypes.FLOAT: np.single,
    NumericTypes.DOUBLE: np.double,
    NumericTypes.LONGDOUBLE: np.longdouble,
}


@dataclass(frozen=True, slots=True)
class NumericLimits[T: np.integer | np.floating]:
    """
    Largest and lowest finite values of a numeric type, held as instances of that type.
    """

    scalar_type: type[T]
    max: T
    lowest: T

    @property
    def family(self) -> TypeFamily:
        return family_of(self.scalar_type)

    @property
    def is_integer(self) -> bool:
        return issubclass(self.scalar_type, np.integer)


def is_supported_type(scalar_type: type) -> bool:
    # np.timedelta64 subclasses np.signedinteger but has no integer limits
    return (
        isinstance(scalar_type, type)
        and issubclass(scalar_type, (np.integer, np.floating))
        and not issubclass(scalar_type, np.timedelta64)
    )


def family_of(scalar_type: type[np.integer] | type[np.floating]) -> TypeFamily:
    if issubclass(scalar_type, np.signedinteger):
        return TypeFamily.SIGNED
    elif issubclass(scalar_type, np.unsignedinteger):
        return TypeFamily.UNSIGNED
    elif issubclass(scalar_type, np.floating):
        return TypeFamily.REAL
    else:
        raise TypeError(f"{scalar_type!r} is not a fixed-width integer or floating point type")


def scalar_type_for(name: NumericTypes | str) -> type[np.integer] | type[np.floating]:
    """
    Map a C type name (e.g. "unsigned char") onto the numpy scalar type used to represent it.
    """
    try:
        return NUMERIC_TYPE_MAP[NumericTypes(name)]
    except ValueError:
        raise ValueError(
            f"Unsupported numeric type {name!r} - supports {[str(nt) for nt in NumericTypes]} only"
        ) from None


@cache
def limits_for[T: np.integer | np.floating](scalar_type: type[T]) -> NumericLimits[T]:
    """
    Return the largest and lowest finite values representable by `scalar_type`.

    For floating point types lowest is the most negative finite value (as C++ `numeric_limits::lowest()`),
    not the smallest positive normal.
    """
    if not is_supported_type(scalar_type):
        raise TypeError(f"{scalar_type!r} is not a fixed-width integer or floating point type")

    if issubclass(scalar_type, np.integer):
        iinfo = np.iinfo(scalar_type)
        return NumericLimits(scalar_type, scalar_type(iinfo.max), scalar_type(iinfo.min))
    else:
        finfo = np.finfo(scalar_type)
        return NumericLimits(scalar_type, scalar_type(finfo.max), scalar_type(finfo.min))
