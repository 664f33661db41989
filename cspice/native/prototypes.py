"""Foreign-function declarations for the CSPICE routines wrapped by this package.

The full API can be generated from `SpiceUsr.h` with :mod:`cspice.native.bindgen`,
which renders a module exposing a `PROTOTYPES` mapping of the same shape.
"""
from ctypes import POINTER, c_char_p
from typing import NamedTuple, Optional

from .types import SpiceBoolean, SpiceCellPtr, SpiceChar, SpiceDouble, SpiceInt

_dp = SpiceDouble
_int = SpiceInt
_bool = SpiceBoolean
_str = c_char_p
_dp_ptr = POINTER(SpiceDouble)
_int_ptr = POINTER(SpiceInt)
_cell = SpiceCellPtr


class Prototype(NamedTuple):
    """C function signature: return type and argument types."""

    name: str
    restype: Optional[type]
    argtypes: tuple


def _proto(name, restype, *argtypes):
    return name, Prototype(name, restype, tuple(argtypes))


PROTOTYPES = dict([
    # Error handling.
    _proto("erract_c", None, _str, _int, _str),
    _proto("errdev_c", None, _str, _int, _str),
    _proto("failed_c", _bool),
    _proto("getmsg_c", None, _str, _int, _str),
    _proto("qcktrc_c", None, _int, _str),
    _proto("reset_c", None),

    # Kernel pool.
    _proto("furnsh_c", None, _str),
    _proto("unload_c", None, _str),
    _proto("kclear_c", None),
    _proto("ktotal_c", None, _str, _int_ptr),

    # Time.
    _proto("str2et_c", None, _str, _dp_ptr),
    _proto("timout_c", None, _dp, _str, _int, _str),
    _proto("timdef_c", None, _str, _str, _int, _str),

    # Ephemeris.
    _proto("spkpos_c", None, _str, _dp, _str, _str, _str, _dp_ptr, _dp_ptr),
    _proto("spkez_c", None, _int, _dp, _str, _str, _int, _dp_ptr, _dp_ptr),
    _proto("spkezp_c", None, _int, _dp, _str, _str, _int, _dp_ptr, _dp_ptr),
    _proto("spkezr_c", None, _str, _dp, _str, _str, _str, _dp_ptr, _dp_ptr),

    # Coordinates and vectors.
    _proto("azlrec_c", None, _dp, _dp, _dp, _bool, _bool, _dp_ptr),
    _proto("recazl_c", None, _dp_ptr, _bool, _bool, _dp_ptr, _dp_ptr, _dp_ptr),
    _proto("reclat_c", None, _dp_ptr, _dp_ptr, _dp_ptr, _dp_ptr),
    _proto("latrec_c", None, _dp, _dp, _dp, _dp_ptr),
    _proto("recrad_c", None, _dp_ptr, _dp_ptr, _dp_ptr, _dp_ptr),
    _proto("radrec_c", None, _dp, _dp, _dp, _dp_ptr),
    _proto("vsep_c", _dp, _dp_ptr, _dp_ptr),

    # Geometry finder.
    _proto("gfsep_c", None, _str, _str, _str, _str, _str, _str, _str, _str, _str, _dp, _dp, _dp, _int, _cell, _cell),

    # Cells.
    _proto("scard_c", None, _int, _cell),
    _proto("card_c", _int, _cell),
    _proto("size_c", _int, _cell),
    _proto("copy_c", None, _cell, _cell),
    _proto("appndd_c", None, _dp, _cell),
    _proto("appndi_c", None, _int, _cell),
    _proto("appndc_c", None, _str, _cell),

    # Windows.
    _proto("wncard_c", _int, _cell),
    _proto("wncomd_c", None, _dp, _dp, _cell, _cell),
    _proto("wncond_c", None, _dp, _dp, _cell),
    _proto("wndifd_c", None, _cell, _cell, _cell),
    _proto("wnelmd_c", _bool, _dp, _cell),
    _proto("wnexpd_c", None, _dp, _dp, _cell),
    _proto("wnextd_c", None, SpiceChar, _cell),
    _proto("wnfetd_c", None, _cell, _int, _dp_ptr, _dp_ptr),
    _proto("wnfild_c", None, _dp, _cell),
    _proto("wnfltd_c", None, _dp, _cell),
    _proto("wnincd_c", _bool, _dp, _dp, _cell),
    _proto("wninsd_c", None, _dp, _dp, _cell),
    _proto("wnintd_c", None, _cell, _cell, _cell),
    _proto("wnreld_c", _bool, _cell, _str, _cell),
    _proto("wnsumd_c", None, _cell, _dp_ptr, _dp_ptr, _dp_ptr, _int_ptr, _int_ptr),
    _proto("wnunid_c", None, _cell, _cell, _cell),
    _proto("wnvald_c", None, _int, _int, _cell),
])
