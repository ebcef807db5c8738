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
import pytest

from helpers import ALL_TYPES, INTEGER_TYPES, REAL_TYPES
from overflowguard.const import NumericTypes, TypeFamily
from overflowguard.limits import NUMERIC_TYPE_MAP, family_of, limits_for, scalar_type_for


def test_int_limits():
    lim = limits_for(np.intc)
    assert lim.max == 2147483647
    assert lim.lowest == -2147483648
    assert lim.is_integer
    assert lim.family == TypeFamily.SIGNED


def test_uchar_limits():
    lim = limits_for(np.ubyte)
    assert lim.max == 255
    assert lim.lowest == 0
    assert lim.family == TypeFamily.UNSIGNED


def test_ulonglong_limits():
    lim = limits_for(np.ulonglong)
    assert int(lim.max) == 2**64 - 1
    assert lim.lowest == 0


@pytest.mark.parametrize("scalar_type", INTEGER_TYPES)
def test_integer_limits_match_iinfo(scalar_type):
    lim = limits_for(scalar_type)
    assert int(lim.max) == int(np.iinfo(scalar_type).max)
    assert int(lim.lowest) == int(np.iinfo(scalar_type).min)


@pytest.mark.parametrize("scalar_type", REAL_TYPES)
def test_real_lowest_is_most_negative(scalar_type):
    lim = limits_for(scalar_type)
    assert lim.lowest == -lim.max
    assert lim.lowest < 0
    assert np.isfinite(lim.max)
    assert not lim.is_integer
    assert lim.family == TypeFamily.REAL


@pytest.mark.parametrize("scalar_type", ALL_TYPES)
def test_limits_held_in_type(scalar_type):
    lim = limits_for(scalar_type)
    assert np.dtype(type(lim.max)) == np.dtype(scalar_type)
    assert np.dtype(type(lim.lowest)) == np.dtype(scalar_type)


def test_limits_cached():
    assert limits_for(np.short) is limits_for(np.short)


@pytest.mark.parametrize("bad_type", [int, float, bool, np.bool_, np.complex128, np.timedelta64, str])
def test_unsupported_types(bad_type):
    with pytest.raises(TypeError):
        limits_for(bad_type)


def test_scalar_type_for():
    assert scalar_type_for("unsigned char") is np.ubyte
    assert scalar_type_for(NumericTypes.DOUBLE) is np.double
    assert scalar_type_for("char") is np.byte
    with pytest.raises(ValueError):
        scalar_type_for("quad")


def test_type_map_closed():
    assert list(NUMERIC_TYPE_MAP) == list(NumericTypes)
    # character types are numeric
    assert issubclass(NUMERIC_TYPE_MAP[NumericTypes.CHAR], np.integer)
    assert issubclass(NUMERIC_TYPE_MAP[NumericTypes.WCHAR], np.integer)


def test_family_ordering():
    families = [family_of(t) for t in NUMERIC_TYPE_MAP.values()]
    assert families == sorted(families, key=list(TypeFamily).index)
    with pytest.raises(TypeError):
        family_of(np.bool_)  # pyright: ignore[reportArgumentType]
