"""Thread confinement for the CSPICE library.

CSPICE is not thread safe: it keeps global state (kernel pool, error status,
default calendar, ...). The first thread to use the library owns it for the
life of the process, any other thread gets a `SpiceThreadError`.

https://naif.jpl.nasa.gov/pub/naif/toolkit_docs/C/req/problems.html#Problem:%20SPICE%20code%20is%20not%20thread%20safe.

Examples
--------
>>> from cspice.spice import spice_lock
>>> with spice_lock() as lib:
...     lib.reset_c()

"""
import contextlib
import logging
import threading

from .native import library

logger = logging.getLogger(__name__)


class SpiceThreadError(RuntimeError):
    """SPICE was used from a thread other than the one that owns it."""


class Spice:
    """Handle to the CSPICE library for the owning thread.

    Use :meth:`get_instance` rather than the constructor.
    """

    _owner = None
    _guard = threading.RLock()

    def __init__(self, lib):
        self._lib = lib

    @property
    def lib(self):
        """The loaded `ctypes.CDLL`."""
        return self._lib

    @classmethod
    def owner(cls):
        """Identifier of the owning thread, or None if not yet initialized."""
        return cls._owner

    @classmethod
    def get_instance(cls):
        """Handle to SPICE, binding it to the calling thread on first use.

        The first call loads the library and sets the error defaults
        (action=RETURN, device=NULL) so failures are reported through
        :class:`cspice.error.SpiceError`.

        Returns
        -------
        Spice

        Raises
        ------
        SpiceThreadError
            If called from a thread other than the owner.

        """
        current = threading.get_ident()
        with cls._guard:
            if cls._owner is None:
                cls._owner = current
                try:
                    cls._initialize()
                except Exception:
                    cls._owner = None
                    raise
                logger.debug("SPICE bound to thread [%s]", threading.current_thread().name)
            elif cls._owner != current:
                raise SpiceThreadError("SPICE is in use by another thread")
        return cls(library.get_library())

    @classmethod
    def _initialize(cls):
        from . import error

        library.get_library()
        error.set_error_defaults()


@contextlib.contextmanager
def spice_lock():
    """Hold the library for a sequence of calls.

    Only the owning thread gets in, and it may nest. Any other thread gets a
    `SpiceThreadError` instead of blocking, whether or not the owner is
    currently inside.

    Yields
    ------
    ctypes.CDLL

    """
    yield Spice.get_instance().lib


def lib():
    """The loaded CSPICE library (initializing SPICE if needed)."""
    return Spice.get_instance().lib
