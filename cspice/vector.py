"""Three dimensional vectors.

See: https://naif.jpl.nasa.gov/pub/naif/toolkit_docs/C/info/mostused.html#U
"""
import ctypes

import numpy as np

from .native.types import SpiceDouble
from .spice import spice_lock

_DP_PTR = ctypes.POINTER(SpiceDouble)


class Vector3D:
    """A 3D vector of doubles, backed by a contiguous numpy array.

    Parameters
    ----------
    values : array-like of 3 float, optional
        Vector components. Default is the zero vector.

    """

    __slots__ = ("_data",)

    def __init__(self, values=(0.0, 0.0, 0.0)):
        data = np.array(values, dtype=np.float64).reshape(-1)
        if data.shape != (3,):
            raise ValueError(f"Expected 3 components, got shape {data.shape}")
        self._data = np.ascontiguousarray(data)

    @property
    def data(self):
        """Components as a numpy array (shares memory with the vector)."""
        return self._data

    @property
    def x(self):
        return float(self._data[0])

    @property
    def y(self):
        return float(self._data[1])

    @property
    def z(self):
        return float(self._data[2])

    def as_ptr(self):
        """Pointer suitable for a `SpiceDouble[3]` argument."""
        return self._data.ctypes.data_as(_DP_PTR)

    def norm(self):
        return float(np.linalg.norm(self._data))

    def separation_angle(self, other):
        """Angle in radians between two vectors (`vsep_c`).

        Defined as zero if either vector is zero.

        Parameters
        ----------
        other : Vector3D or array-like

        Returns
        -------
        float

        """
        if not isinstance(other, Vector3D):
            other = Vector3D(other)
        with spice_lock() as lib:
            return float(lib.vsep_c(self.as_ptr(), other.as_ptr()))

    def __array__(self, dtype=None, copy=None):
        if dtype is None:
            return self._data.copy()
        return self._data.astype(dtype)

    def __len__(self):
        return 3

    def __iter__(self):
        return iter(self._data.tolist())

    def __getitem__(self, index):
        return self._data[index]

    def __setitem__(self, index, value):
        self._data[index] = value

    def __eq__(self, other):
        if isinstance(other, Vector3D):
            return bool(np.array_equal(self._data, other._data))
        return NotImplemented

    def __hash__(self):
        return hash(tuple(self._data.tolist()))

    def __repr__(self):
        return f"{self.__class__.__name__}({self._data.tolist()!r})"
