"""Loading and unloading SPICE kernels.
"""
import ctypes
import logging
from collections.abc import Mapping
from pathlib import Path

from .error import check_error
from .spice import spice_lock
from .string import to_char_p

logger = logging.getLogger(__name__)


def furnish(file):
    """Load a kernel (or meta-kernel) into the kernel pool.

    Parameters
    ----------
    file : str or Path
        Kernel file.

    Raises
    ------
    SpiceError
        E.g., "SPICE(NOSUCHFILE)" if the file does not exist.

    """
    logger.debug("Loading kernel: %s", file)
    with spice_lock() as lib:
        lib.furnsh_c(to_char_p(file))
    check_error()


def unload(file):
    """Unload a kernel previously loaded with `furnish`."""
    logger.debug("Unloading kernel: %s", file)
    with spice_lock() as lib:
        lib.unload_c(to_char_p(file))
    check_error()


def kernel_count(kind="ALL"):
    """Number of loaded kernels of a kind ("SPK", "CK", "TEXT", "META", "ALL", ...)."""
    count = ctypes.c_int(0)
    with spice_lock() as lib:
        lib.ktotal_c(to_char_p(kind), ctypes.byref(count))
    check_error()
    return count.value


def clear_kernels():
    """Unload all kernels and clear the kernel pool."""
    with spice_lock() as lib:
        lib.kclear_c()
    check_error()


class load_kernel:  # pylint: disable=invalid-name
    """SPICE Kernel Context Manager.
    """

    def __init__(self, kernels):
        """SPICE Kernel Context Manager

        Parameters
        ----------
        kernels : str or Path or iter of str or dict
            Kernel file(s) to load. Nested lists are flattened. For a dict the
            "meta" entry is loaded first, then the rest in order.

        Examples
        --------
        >>> with load_kernel(['naif0012.tls', 'de440s.bsp']):
        ...     position('moon', Et(0.0), 'J2000', AberrationCorrection.LT, 'earth')

        """
        self._loaded = []
        try:
            for kernel in self._flatten(kernels):
                self.load(kernel)
        except Exception:
            self.unload(clear=True)
            raise

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.unload(clear=True)

    @property
    def loaded(self):
        """Kernels loaded by this manager, in load order."""
        return self._loaded

    @classmethod
    def _flatten(cls, kernels):
        if isinstance(kernels, (str, Path)):
            yield str(kernels)
        elif isinstance(kernels, (list, tuple)):
            for item in kernels:
                yield from cls._flatten(item)
        elif isinstance(kernels, Mapping):
            ordered = sorted(kernels, key=lambda key: key != "meta")
            for key in ordered:
                yield from cls._flatten(kernels[key])
        else:
            raise ValueError(f"Invalid `kernels`: {kernels!r}")

    def load(self, kernel):
        """Furnish one kernel file and track it."""
        furnish(kernel)
        self._loaded.append(kernel)

    def unload(self, kernel=None, clear=False):
        """Unload one tracked kernel, or every one (newest first) if `clear`."""
        if clear:
            while self._loaded:
                self.unload(self._loaded[-1])
        elif isinstance(kernel, str):
            unload(kernel)
            self._loaded.remove(kernel)
        else:
            raise ValueError("Must specify `kernel` (str) or `clear`=True.")
