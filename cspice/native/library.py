"""Locate and load the CSPICE shared library.

Search order used by :func:`find_library`:

1. `CSPICE_LIB` environment variable (explicit shared library file).
2. A shared library in `$CSPICE_DIR/lib`.
3. The static archive in `$CSPICE_DIR/lib`, linked into a shared library
   in the cache directory.
4. A library previously built in the cache directory (`CSPICE_CACHE_DIR`).
5. The prebuilt library bundled with the installed `spiceypy` distribution.
6. If `CSPICE_DOWNLOAD` is enabled, NAIF's prebuilt toolkit is downloaded
   and linked.
"""
import ctypes
import importlib.util
import logging
import subprocess
import threading
from pathlib import Path

from . import config, download
from .prototypes import PROTOTYPES
from ..utils import env_flag

logger = logging.getLogger(__name__)

_LIBRARY = None
_LIBRARY_LOCK = threading.Lock()


class CSPICENotFoundError(FileNotFoundError):
    """Raised when no CSPICE library could be located."""


def find_cspice_dir():
    """Root directory of a CSPICE installation from `CSPICE_DIR`.

    Returns
    -------
    Path or None
        None if the variable is not set.

    """
    value = config.env_value(config.CSPICE_DIR)
    if value is None:
        return None
    path = Path(value).expanduser()
    if not path.is_dir():
        raise NotADirectoryError(f"Provided {config.CSPICE_DIR} ({path}) is not a directory")
    return path


def find_include_dir(cspice_dir=None):
    """Header directory (containing `SpiceUsr.h`) of a CSPICE installation."""
    cspice_dir = find_cspice_dir() if cspice_dir is None else Path(cspice_dir)
    if cspice_dir is None:
        raise CSPICENotFoundError(
            f"Unable to read {config.CSPICE_DIR} environment variable."
            " It must be set to the directory of your CSPICE installation."
        )
    include_dir = cspice_dir / "include"
    if not (include_dir / "SpiceUsr.h").is_file():
        raise CSPICENotFoundError(f"SpiceUsr.h not found in: {include_dir}")
    return include_dir


def find_bundled_library():
    """Shared library shipped inside the installed `spiceypy` package, or None."""
    spec = importlib.util.find_spec("spiceypy")
    if spec is None or not spec.submodule_search_locations:
        return None
    utils_dir = Path(spec.submodule_search_locations[0]) / "utils"
    for name in config.shared_library_names():
        path = utils_dir / name
        if path.is_file():
            return path
    return None


def find_library(allow_download=None):
    """Locate a loadable CSPICE shared library.

    Parameters
    ----------
    allow_download : bool, optional
        Download the NAIF toolkit if nothing else is found. Default is the
        `CSPICE_DOWNLOAD` environment variable.

    Returns
    -------
    Path

    Raises
    ------
    CSPICENotFoundError
        If no library was found and downloading is not enabled.

    """
    names = config.shared_library_names()
    searched = []

    env_lib = config.env_value(config.CSPICE_LIB)
    if env_lib is not None:
        path = Path(env_lib).expanduser()
        if not path.is_file():
            raise CSPICENotFoundError(f"{config.CSPICE_LIB} set but file not found: {path}")
        logger.debug("Using %s: %s", config.CSPICE_LIB, path)
        return path

    cache_dir = config.cache_dir()
    cspice_dir = find_cspice_dir()
    if cspice_dir is not None:
        lib_dir = cspice_dir / "lib"
        for name in names:
            path = lib_dir / name
            searched.append(path)
            if path.is_file():
                logger.debug("Found shared library in %s: %s", config.CSPICE_DIR, path)
                return path

        archive = download.find_static_library(cspice_dir)
        if archive is not None:
            output = cache_dir / names[0]
            if output.is_file() and output.stat().st_mtime >= archive.stat().st_mtime:
                return output
            logger.info("Linking static CSPICE archive [%s] into a shared library", archive)
            return download.build_shared_library(cspice_dir, output=output)

    for name in names:
        path = cache_dir / name
        searched.append(path)
        if path.is_file():
            logger.debug("Found cached shared library: %s", path)
            return path

    bundled = find_bundled_library()
    if bundled is not None:
        logger.debug("Using CSPICE library bundled with spiceypy: %s", bundled)
        return bundled
    searched.append("<spiceypy>/utils")

    if allow_download is None:
        allow_download = env_flag(config.CSPICE_DOWNLOAD)
    if allow_download:
        logger.info("No CSPICE library found, downloading the NAIF toolkit (%s=%s)",
                    config.CSPICE_DOWNLOAD, config.env_value(config.CSPICE_DOWNLOAD))
        return download.ensure_toolkit(cache_dir)

    raise CSPICENotFoundError(
        "Unable to find a CSPICE library. Either:\n"
        f"  - Set {config.CSPICE_LIB}=/path/to/{names[0]}\n"
        f"  - Set {config.CSPICE_DIR} to a CSPICE installation\n"
        f"  - Set {config.CSPICE_DOWNLOAD}=1 to download the NAIF toolkit\n"
        f"Searched: {', '.join(str(p) for p in searched)}"
    )


def is_available():
    """Whether a CSPICE library can be located without downloading it."""
    try:
        find_library(allow_download=False)
    except (CSPICENotFoundError, OSError, subprocess.SubprocessError) as err:
        logger.debug("CSPICE library is not available: %s", err)
        return False
    return True


def apply_prototypes(lib, prototypes):
    """Set `argtypes` and `restype` on the library functions.

    Parameters
    ----------
    lib : ctypes.CDLL
        Loaded library.
    prototypes : dict
        Function name to :class:`~cspice.native.prototypes.Prototype`.

    Returns
    -------
    list of str
        Names that were declared but are missing from the library.

    """
    missing = []
    for name, proto in prototypes.items():
        try:
            func = getattr(lib, name)
        except AttributeError:
            missing.append(name)
            continue
        func.argtypes = list(proto.argtypes)
        func.restype = proto.restype
    if missing:
        logger.warning("Library is missing [%i] declared functions: %s", len(missing), ", ".join(missing))
    return missing


def load_library(path=None, prototypes=None):
    """Load the CSPICE shared library and declare its functions.

    Parameters
    ----------
    path : str or Path, optional
        Library file. Default uses :func:`find_library`.
    prototypes : dict, optional
        Declarations to apply. Default is the built-in table.

    Returns
    -------
    ctypes.CDLL

    """
    path = find_library() if path is None else Path(path)
    logger.info("Loading CSPICE library: %s", path)
    lib = ctypes.CDLL(str(path))
    apply_prototypes(lib, PROTOTYPES if prototypes is None else prototypes)
    return lib


def get_library():
    """Process-wide CSPICE library instance (loaded on first use)."""
    global _LIBRARY
    with _LIBRARY_LOCK:
        if _LIBRARY is None:
            _LIBRARY = load_library()
        return _LIBRARY


def reset_library():
    """Forget the cached library instance; the next access reloads it."""
    global _LIBRARY
    with _LIBRARY_LOCK:
        _LIBRARY = None
