"""SPICE cells and double precision windows.

A cell is a fixed size array preceded by a control area, see:
https://naif.jpl.nasa.gov/pub/naif/toolkit_docs/C/req/cells.html

A window is a double precision cell holding an ordered set of disjoint
intervals, see:
https://naif.jpl.nasa.gov/pub/naif/toolkit_docs/C/req/windows.html

Examples
--------
>>> confine = Window.from_intervals([(0.0, 86400.0)])
>>> confine.window_cardinality()
1
>>> confine.window_interval(0)
(0.0, 86400.0)

"""
import ctypes
import logging
import typing

import numpy as np

from .common import ComparisonOperator, Side
from .error import check_error
from .native.types import (
    SPICE_CELL_CTRLSZ,
    SPICEFALSE,
    SPICETRUE,
    SpiceCell,
    SpiceDataType,
    SpiceDouble,
    SpiceInt,
    as_boolean,
)
from .spice import spice_lock
from .string import to_char_p

logger = logging.getLogger(__name__)


class WindowSummary(typing.NamedTuple):
    """Summary of a double precision window (`wnsumd_c`)."""

    total_measure_of_intervals: float
    average_measure: float
    standard_deviation: float
    shortest_interval_index: int
    longest_interval_index: int


class Cell:
    """Python owned SPICE cell.

    Use :meth:`new_double`, :meth:`new_int` or :meth:`new_char`. The cell keeps
    its data buffer alive for as long as it exists.
    """

    dtype = None

    def __init__(self, size, length, buffer, start):
        if size < 0:
            raise ValueError(f"Cell size must be non-negative, not {size}")
        self._buffer = buffer
        base = ctypes.addressof(buffer)
        self._cell = SpiceCell(
            dtype=int(self.dtype),
            length=length,
            size=size,
            card=0,
            isSet=SPICETRUE,
            adjust=SPICEFALSE,
            init=SPICEFALSE,
            base=base,
            data=base + start,
        )

    @staticmethod
    def new_double(size):
        """Create a double precision cell (a `Window`) holding up to `size` values."""
        return DoubleCell(size)

    @staticmethod
    def new_int(size):
        """Create an integer cell holding up to `size` values."""
        return IntCell(size)

    @staticmethod
    def new_char(size, length):
        """Create a character cell of `size` strings, each up to `length` characters (including the nul)."""
        return CharCell(size, length)

    def as_mut_cell(self):
        """Pointer to the underlying `SpiceCell` structure."""
        return ctypes.pointer(self._cell)

    @property
    def struct(self):
        return self._cell

    def set_cardinality(self, cardinality):
        """Set the cardinality (`scard_c`)."""
        with spice_lock() as lib:
            lib.scard_c(cardinality, self.as_mut_cell())
        check_error()

    def get_size(self):
        """Size (maximum cardinality) of the cell (`size_c`)."""
        with spice_lock() as lib:
            out = lib.size_c(self.as_mut_cell())
        check_error()
        return int(out)

    def get_cardinality(self):
        """Number of elements in the cell (`card_c`)."""
        with spice_lock() as lib:
            out = lib.card_c(self.as_mut_cell())
        check_error()
        return int(out)

    def copy(self, dest):
        """Copy this cell's contents into `dest`, a cell of the same type (`copy_c`)."""
        if type(dest) is not type(self):
            raise TypeError(f"Cannot copy a {type(self).__name__} into a {type(dest).__name__}")
        with spice_lock() as lib:
            lib.copy_c(self.as_mut_cell(), dest.as_mut_cell())
        check_error()

    def append(self, item):
        raise NotImplementedError

    def _get(self, index):
        raise NotImplementedError

    def __len__(self):
        return int(self._cell.card)

    def __getitem__(self, index):
        card = len(self)
        if isinstance(index, slice):
            return [self._get(i) for i in range(*index.indices(card))]
        if index < 0:
            index += card
        if not 0 <= index < card:
            raise IndexError(f"Cell index out of range: {index}")
        return self._get(index)

    def __iter__(self):
        for i in range(len(self)):
            yield self._get(i)

    def __repr__(self):
        return f"{self.__class__.__name__}(size={self._cell.size}, card={self._cell.card})"


class IntCell(Cell):
    """SPICEINT_CELL."""

    dtype = SpiceDataType.INT

    def __init__(self, size):
        buffer = (SpiceInt * (SPICE_CELL_CTRLSZ + size))()
        super().__init__(size, 0, buffer, SPICE_CELL_CTRLSZ * ctypes.sizeof(SpiceInt))

    def append(self, item):
        """Append an integer to the cell (`appndi_c`)."""
        with spice_lock() as lib:
            lib.appndi_c(int(item), self.as_mut_cell())
        check_error()

    def _get(self, index):
        return int(self._buffer[SPICE_CELL_CTRLSZ + index])

    def to_numpy(self):
        return np.array(list(self), dtype=np.int64)


class CharCell(Cell):
    """SPICECHAR_CELL."""

    dtype = SpiceDataType.CHR

    def __init__(self, size, length):
        if length < 1:
            raise ValueError(f"Character cell length must be positive, not {length}")
        buffer = ctypes.create_string_buffer((SPICE_CELL_CTRLSZ + size) * length)
        super().__init__(size, length, buffer, SPICE_CELL_CTRLSZ * length)

    @property
    def length(self):
        return int(self._cell.length)

    def append(self, item):
        """Append a string to the cell (`appndc_c`)."""
        with spice_lock() as lib:
            lib.appndc_c(to_char_p(item), self.as_mut_cell())
        check_error()

    def _get(self, index):
        start = (SPICE_CELL_CTRLSZ + index) * self.length
        raw = self._buffer.raw[start:start + self.length]
        return raw.split(b"\0", 1)[0].decode("ascii", errors="replace")


class DoubleCell(Cell):
    """SPICEDOUBLE_CELL, with the window routines."""

    dtype = SpiceDataType.DP

    def __init__(self, size):
        buffer = (SpiceDouble * (SPICE_CELL_CTRLSZ + size))()
        super().__init__(size, 0, buffer, SPICE_CELL_CTRLSZ * ctypes.sizeof(SpiceDouble))

    @classmethod
    def from_intervals(cls, intervals, size=None):
        """Create a window and insert intervals into it.

        Parameters
        ----------
        intervals : iter of (float, float)
            Interval endpoints (left, right).
        size : int, optional
            Window size. Default is twice the number of intervals.

        Returns
        -------
        DoubleCell

        """
        intervals = list(intervals)
        window = cls(2 * len(intervals) if size is None else size)
        for left, right in intervals:
            window.window_insert_interval(left, right)
        return window

    def append(self, item):
        """Append a double to the cell (`appndd_c`)."""
        with spice_lock() as lib:
            lib.appndd_c(float(item), self.as_mut_cell())
        check_error()

    def _get(self, index):
        return float(self._buffer[SPICE_CELL_CTRLSZ + index])

    def to_numpy(self):
        return np.array(list(self), dtype=np.float64)

    def intervals(self):
        """Window intervals as a list of (left, right) pairs."""
        values = list(self)
        return list(zip(values[0::2], values[1::2]))

    def window_cardinality(self):
        """Number of intervals in the window (`wncard_c`)."""
        with spice_lock() as lib:
            out = lib.wncard_c(self.as_mut_cell())
        check_error()
        return int(out)

    def window_complement(self, left, right, output):
        """Complement of the window with respect to [left, right], into `output` (`wncomd_c`)."""
        with spice_lock() as lib:
            lib.wncomd_c(left, right, self.as_mut_cell(), output.as_mut_cell())
        check_error()

    def window_contract(self, left, right):
        """Contract each interval, in place (`wncond_c`)."""
        with spice_lock() as lib:
            lib.wncond_c(left, right, self.as_mut_cell())
        check_error()

    def window_difference(self, other, output):
        """Difference of this window and `other`, into `output` (`wndifd_c`)."""
        with spice_lock() as lib:
            lib.wndifd_c(self.as_mut_cell(), other.as_mut_cell(), output.as_mut_cell())
        check_error()

    def window_contains_element(self, point):
        """Whether `point` is an element of the window (`wnelmd_c`)."""
        with spice_lock() as lib:
            out = lib.wnelmd_c(point, self.as_mut_cell())
        check_error()
        return as_boolean(out)

    def window_expand(self, left, right):
        """Expand each interval, in place (`wnexpd_c`)."""
        with spice_lock() as lib:
            lib.wnexpd_c(left, right, self.as_mut_cell())
        check_error()

    def window_extract(self, side):
        """Replace the window with its left or right endpoints (`wnextd_c`)."""
        side = Side(side)
        with spice_lock() as lib:
            lib.wnextd_c(side.as_char(), self.as_mut_cell())
        check_error()

    def window_interval(self, n):
        """Fetch interval `n` (zero based) as (left, right) (`wnfetd_c`)."""
        left, right = SpiceDouble(0.0), SpiceDouble(0.0)
        with spice_lock() as lib:
            lib.wnfetd_c(self.as_mut_cell(), n, ctypes.byref(left), ctypes.byref(right))
        check_error()
        return left.value, right.value

    def window_fill(self, small_gap):
        """Fill gaps no larger than `small_gap`, in place (`wnfild_c`)."""
        with spice_lock() as lib:
            lib.wnfild_c(small_gap, self.as_mut_cell())
        check_error()

    def window_filter(self, small_interval):
        """Remove intervals no larger than `small_interval`, in place (`wnfltd_c`)."""
        with spice_lock() as lib:
            lib.wnfltd_c(small_interval, self.as_mut_cell())
        check_error()

    def window_contains_interval(self, left, right):
        """Whether [left, right] is included in the window (`wnincd_c`)."""
        with spice_lock() as lib:
            out = lib.wnincd_c(left, right, self.as_mut_cell())
        check_error()
        return as_boolean(out)

    def window_insert_interval(self, left, right):
        """Insert [left, right] into the window (`wninsd_c`)."""
        with spice_lock() as lib:
            lib.wninsd_c(left, right, self.as_mut_cell())
        check_error()

    def window_intersect(self, other, output):
        """Intersection of this window and `other`, into `output` (`wnintd_c`)."""
        with spice_lock() as lib:
            lib.wnintd_c(self.as_mut_cell(), other.as_mut_cell(), output.as_mut_cell())
        check_error()

    def window_compare(self, op, other):
        """Compare this window with `other` using a relational operator (`wnreld_c`).

        Parameters
        ----------
        op : ComparisonOperator or str
            One of "=", "<>", "<=", "<", ">=", ">".
        other : DoubleCell

        Returns
        -------
        bool

        """
        op = ComparisonOperator(op)
        with spice_lock() as lib:
            out = lib.wnreld_c(self.as_mut_cell(), op.as_char_p(), other.as_mut_cell())
        check_error()
        return as_boolean(out)

    def window_summarize(self):
        """Summarize the window (`wnsumd_c`).

        Returns
        -------
        WindowSummary

        """
        meas, avg, stddev = SpiceDouble(0.0), SpiceDouble(0.0), SpiceDouble(0.0)
        idxsml, idxlon = SpiceInt(0), SpiceInt(0)
        with spice_lock() as lib:
            lib.wnsumd_c(self.as_mut_cell(), ctypes.byref(meas), ctypes.byref(avg), ctypes.byref(stddev),
                         ctypes.byref(idxsml), ctypes.byref(idxlon))
        check_error()
        return WindowSummary(
            total_measure_of_intervals=meas.value,
            average_measure=avg.value,
            standard_deviation=stddev.value,
            shortest_interval_index=idxsml.value,
            longest_interval_index=idxlon.value,
        )

    def window_union(self, other, output):
        """Union of this window and `other`, into `output` (`wnunid_c`)."""
        with spice_lock() as lib:
            lib.wnunid_c(self.as_mut_cell(), other.as_mut_cell(), output.as_mut_cell())
        check_error()

    def window_validate(self, size, n):
        """Turn the first `n` values of the cell into a window of `size` (`wnvald_c`)."""
        with spice_lock() as lib:
            lib.wnvald_c(size, n, self.as_mut_cell())
        check_error()


Window = DoubleCell
