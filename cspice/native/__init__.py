"""Low-level access to the CSPICE C library (ctypes).

Functions are called directly on the loaded library, e.g.,
`get_library().str2et_c(b"2000-01-01", ctypes.byref(et))`. No error checking or
thread confinement is done at this level, see :mod:`cspice.spice` and
:mod:`cspice.error` for that.
"""
from . import bindgen, config, download, library, prototypes, types
from .library import CSPICENotFoundError, find_library, get_library, load_library, reset_library
from .prototypes import PROTOTYPES, Prototype

__all__ = [
    "bindgen",
    "config",
    "download",
    "library",
    "prototypes",
    "types",
    "CSPICENotFoundError",
    "find_library",
    "get_library",
    "load_library",
    "reset_library",
    "PROTOTYPES",
    "Prototype",
]
