"""Python bindings to NAIF's CSPICE Toolkit.

The native library is located (or downloaded and built) by
:mod:`cspice.native`. The modules here wrap a subset of its functions with
thread confinement, error checking and Python types.
"""
from . import cell, common, coordinates, data, error, gf, native, spk, time, utils, vector
from .cell import Cell, Window, WindowSummary
from .common import AberrationCorrection, ComparisonOperator, Side
from .coordinates import AzEl, Latitudinal, RaDec, Rectangular
from .data import clear_kernels, furnish, kernel_count, load_kernel, unload
from .error import ErrorAction, ErrorDevice, SpiceError
from .spice import Spice, SpiceThreadError, spice_lock
from .string import SpiceString
from .time import Calendar, DateTime, Et, JulianDate, Tdb, Tdt, Utc
from .vector import Vector3D

__all__ = [
    "cell",
    "common",
    "coordinates",
    "data",
    "error",
    "gf",
    "native",
    "spk",
    "time",
    "utils",
    "vector",
    "AberrationCorrection",
    "AzEl",
    "Calendar",
    "Cell",
    "ComparisonOperator",
    "DateTime",
    "ErrorAction",
    "ErrorDevice",
    "Et",
    "JulianDate",
    "Latitudinal",
    "RaDec",
    "Rectangular",
    "Side",
    "Spice",
    "SpiceError",
    "SpiceString",
    "SpiceThreadError",
    "Tdb",
    "Tdt",
    "Utc",
    "Vector3D",
    "Window",
    "WindowSummary",
    "clear_kernels",
    "furnish",
    "kernel_count",
    "load_kernel",
    "spice_lock",
    "unload",
]
