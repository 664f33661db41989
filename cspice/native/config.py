"""Environment configuration for locating, downloading and parsing CSPICE.

Values are read at call time so they can be changed after import.
"""
import os
import platform
from pathlib import Path

CSPICE_DIR = "CSPICE_DIR"
CSPICE_LIB = "CSPICE_LIB"
CSPICE_CLANG_TARGET = "CSPICE_CLANG_TARGET"
CSPICE_CLANG_ROOT = "CSPICE_CLANG_ROOT"
CSPICE_DOWNLOAD = "CSPICE_DOWNLOAD"
CSPICE_CACHE_DIR = "CSPICE_CACHE_DIR"

DEFAULT_CACHE_DIR = Path("~/.cache/cspice")

_SHARED_LIBRARY_NAMES = {
    "Linux": ("libcspice.so",),
    "Darwin": ("libcspice.dylib", "libcspice.so"),
    "Windows": ("cspice.dll",),
}
_STATIC_LIBRARY_NAMES = ("cspice.a", "libcspice.a", "cspice.lib")


def host_system(system=None):
    """Operating system name as reported by `platform.system()`."""
    return platform.system() if system is None else system


def shared_library_names(system=None):
    """File names a shared CSPICE library may have on `system`.

    Parameters
    ----------
    system : str, optional
        "Linux", "Darwin" or "Windows". Default is the host.

    Returns
    -------
    tuple of str

    """
    system = host_system(system)
    try:
        return _SHARED_LIBRARY_NAMES[system]
    except KeyError:
        raise OSError(f"Unsupported platform: {system}") from None


def static_library_names():
    """File names of the static archive shipped in NAIF's toolkit packages."""
    return _STATIC_LIBRARY_NAMES


def cache_dir() -> Path:
    """Directory for downloaded toolkits and built shared libraries."""
    value = os.environ.get(CSPICE_CACHE_DIR, "").strip()
    path = Path(value) if value else DEFAULT_CACHE_DIR
    return path.expanduser()


def env_value(name):
    """Non-empty, stripped environment value or None."""
    value = os.environ.get(name, "").strip()
    return value or None
