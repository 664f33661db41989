"""C types and constants from the CSPICE headers (SpiceZdf.h, SpiceErr.h, SpiceCel.h).
"""
import ctypes
from enum import IntEnum

SpiceDouble = ctypes.c_double
SpiceInt = ctypes.c_int
SpiceBoolean = ctypes.c_int
SpiceChar = ctypes.c_char
ConstSpiceChar = ctypes.c_char

SpiceDouble3 = SpiceDouble * 3
SpiceDouble6 = SpiceDouble * 6

SPICETRUE = 1
SPICEFALSE = 0

# SpiceErr.h
SPICE_ERROR_LMSGLN = 1841
SPICE_ERROR_SMSGLN = 26
SPICE_ERROR_XMSGLN = 81
SPICE_ERROR_MODLEN = 32
SPICE_ERROR_MAXMOD = 100
SPICE_ERROR_TRCLEN = SPICE_ERROR_MAXMOD * (SPICE_ERROR_MODLEN + 5)

# SpiceCel.h
SPICE_CELL_CTRLSZ = 6


class SpiceDataType(IntEnum):
    """Cell data types (`SpiceCellDataType`)."""

    CHR = 0
    DP = 1
    INT = 2
    TIME = 3
    BOOL = 4


class SpiceCell(ctypes.Structure):
    """Mirror of the `SpiceCell` structure."""

    _fields_ = [
        ("dtype", ctypes.c_int),
        ("length", SpiceInt),
        ("size", SpiceInt),
        ("card", SpiceInt),
        ("isSet", SpiceBoolean),
        ("adjust", SpiceBoolean),
        ("init", SpiceBoolean),
        ("base", ctypes.c_void_p),
        ("data", ctypes.c_void_p),
    ]


SpiceCellPtr = ctypes.POINTER(SpiceCell)


def as_boolean(value) -> bool:
    """Convert a `SpiceBoolean` return value to a Python bool."""
    return int(value) == SPICETRUE
