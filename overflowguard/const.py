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
from enum import StrEnum


class NumericTypes(StrEnum):
    """
    Primitive numeric types which overflowguard is able to test, named as their C counterparts.
    """

    CHAR = "char"
    WCHAR = "wchar_t"
    SHORT = "short"
    INT = "int"
    LONG = "long"
    LONGLONG = "long long"
    UCHAR = "unsigned char"
    USHORT = "unsigned short"
    UINT = "unsigned int"
    ULONG = "unsigned long"
    ULONGLONG = "unsigned long long"
    FLOAT = "float"
    DOUBLE = "double"
    LONGDOUBLE = "long double"


class TypeFamily(StrEnum):
    """
    Broad grouping of numeric types, used to order test runs.
    """

    SIGNED = "signed"
    UNSIGNED = "unsigned"
    REAL = "real"


class Direction(StrEnum):
    """
    Direction of accumulation under test, and hence the kind of range violation being guarded.
    """

    OVERFLOW = "overflow"
    UNDERFLOW = "underflow"


class ReportFormat(StrEnum):
    TEXT = "text"
    JSON = "json"


DEFAULT_STEPS = 5
STAR_LINE = "*" * 50
