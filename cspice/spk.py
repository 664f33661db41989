"""SPK ephemeris readers.

Require SPK kernels (and usually a leapseconds kernel) to be loaded, see
:func:`cspice.data.furnish`.

Examples
--------
>>> with load_kernel(['naif0012.tls', 'de440s.bsp']):
...     pos, lt = position('moon', Et(0.0), 'J2000', AberrationCorrection.LT, 'earth')

"""
import ctypes
import logging

import numpy as np
import pandas as pd

from .common import AberrationCorrection
from .error import check_error
from .native.types import SpiceDouble, SpiceDouble3, SpiceDouble6
from .spice import spice_lock
from .string import to_char_p
from .vector import Vector3D

logger = logging.getLogger(__name__)


def _abcorr(aberration_correction):
    return AberrationCorrection(aberration_correction).as_char_p()


def position(target, et, reference_frame, aberration_correction, observing_body):
    """Position of a target relative to an observer (`spkpos_c`).

    Parameters
    ----------
    target : str
        Target body name or NAIF ID as a string.
    et : Et or float
        Ephemeris time.
    reference_frame : str
        Reference frame of the output, e.g., "J2000".
    aberration_correction : AberrationCorrection or str
    observing_body : str
        Observer body name or NAIF ID as a string.

    Returns
    -------
    (Vector3D, float)
        Position (km) and one-way light time (s).

    """
    pos = SpiceDouble3()
    light_time = SpiceDouble(0.0)
    with spice_lock() as lib:
        lib.spkpos_c(to_char_p(target), float(et), to_char_p(reference_frame), _abcorr(aberration_correction),
                     to_char_p(observing_body), pos, ctypes.byref(light_time))
    check_error()
    return Vector3D(list(pos)), light_time.value


def easy_reader(target, et, reference_frame, aberration_correction, observing_body):
    """State of a target relative to an observer, by NAIF ID (`spkez_c`).

    Returns
    -------
    (numpy.ndarray, float)
        State (km, km/s) of shape (6,) and one-way light time (s).

    """
    state = SpiceDouble6()
    light_time = SpiceDouble(0.0)
    with spice_lock() as lib:
        lib.spkez_c(int(target), float(et), to_char_p(reference_frame), _abcorr(aberration_correction),
                    int(observing_body), state, ctypes.byref(light_time))
    check_error()
    return np.array(state, dtype=np.float64), light_time.value


def easy_position(target, et, reference_frame, aberration_correction, observing_body):
    """Position of a target relative to an observer, by NAIF ID (`spkezp_c`).

    Returns
    -------
    (Vector3D, float)

    """
    pos = SpiceDouble3()
    light_time = SpiceDouble(0.0)
    with spice_lock() as lib:
        lib.spkezp_c(int(target), float(et), to_char_p(reference_frame), _abcorr(aberration_correction),
                     int(observing_body), pos, ctypes.byref(light_time))
    check_error()
    return Vector3D(list(pos)), light_time.value


def easier_reader(target, et, reference_frame, aberration_correction, observing_body):
    """State of a target relative to an observer, by name (`spkezr_c`).

    Returns
    -------
    (numpy.ndarray, float)
        State (km, km/s) of shape (6,) and one-way light time (s).

    """
    state = SpiceDouble6()
    light_time = SpiceDouble(0.0)
    with spice_lock() as lib:
        lib.spkezr_c(to_char_p(target), float(et), to_char_p(reference_frame), _abcorr(aberration_correction),
                     to_char_p(observing_body), state, ctypes.byref(light_time))
    check_error()
    return np.array(state, dtype=np.float64), light_time.value


def query_ephemeris(ets, target, observer, reference_frame="J2000",
                    aberration_correction=AberrationCorrection.NONE, velocity=True):
    """Query positions (and velocities) over a series of times.

    Parameters
    ----------
    ets : iter of float or Et
        Ephemeris times.
    target, observer : int or str
        NAIF IDs (`spkez_c`/`spkezp_c`) or names (`spkezr_c`/`spkpos_c`).
    reference_frame : str, optional
        Default="J2000".
    aberration_correction : AberrationCorrection or str, optional
        Default is no correction.
    velocity : bool, optional
        Include the velocity columns. Default=True.

    Returns
    -------
    pd.DataFrame
        Indexed by ET, with columns x, y, z, (vx, vy, vz,) lt.

    """
    ets = np.array([float(et) for et in ets], dtype=np.float64)
    by_id = isinstance(target, (int, np.integer)) and isinstance(observer, (int, np.integer))
    if not by_id:
        target, observer = str(target), str(observer)

    columns = ["x", "y", "z"] + (["vx", "vy", "vz"] if velocity else [])
    values = np.empty((ets.size, len(columns)), dtype=np.float64)
    light_times = np.empty(ets.size, dtype=np.float64)

    if velocity:
        reader = easy_reader if by_id else easier_reader
    else:
        reader = easy_position if by_id else position

    logger.debug("Querying [%i] %s of [%s] relative to [%s]", ets.size, "states" if velocity else "positions",
                 target, observer)
    for index, et in enumerate(ets):
        out, light_times[index] = reader(target, et, reference_frame, aberration_correction, observer)
        values[index] = np.asarray(out)

    table = pd.DataFrame(values, columns=columns, index=pd.Index(ets, name="et"))
    table["lt"] = light_times
    return table
