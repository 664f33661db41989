"""CSPICE error status, actions and output devices.

See the CSPICE error handling required reading:
https://naif.jpl.nasa.gov/pub/naif/toolkit_docs/C/req/error.html

The error action is set to RETURN when SPICE is initialized (see
:mod:`cspice.spice`), so a failed call leaves an error status behind instead of
aborting the process. Every wrapper calls :func:`check_error` afterwards, which
turns that status into a :class:`SpiceError`.
"""
import enum
import logging

from .native.types import (
    SPICE_ERROR_LMSGLN,
    SPICE_ERROR_SMSGLN,
    SPICE_ERROR_TRCLEN,
    SPICE_ERROR_XMSGLN,
    as_boolean,
)
from .spice import spice_lock
from .string import buffer_to_str, create_buffer, to_char_p

logger = logging.getLogger(__name__)

GET = b"GET"
SET = b"SET"

# Buffer lengths for GET operations.
ACTION_LEN = 20
FILEN = 255


class SpiceError(Exception):
    """Error signalled by a CSPICE routine.

    Attributes
    ----------
    short_message : str
        Short error message, e.g., "SPICE(NOSUCHFILE)".
    explanation : str
        Expansion of the short message.
    long_message : str
        Detailed message describing the failure.
    traceback : str
        CSPICE call trace at the time of the failure.

    """

    def __init__(self, short_message, explanation="", long_message="", traceback=""):
        self.short_message = short_message
        self.explanation = explanation
        self.long_message = long_message
        self.traceback = traceback
        super().__init__(short_message)

    def __str__(self):
        return (f"{self.short_message}\n\n{self.explanation}\n\n{self.long_message}\n\n"
                f"Traceback:\n{self.traceback}")

    def __reduce__(self):
        return self.__class__, (self.short_message, self.explanation, self.long_message, self.traceback)


class ErrorAction(enum.Enum):
    """Action taken when an error is signalled (`erract_c`)."""

    ABORT = "ABORT"
    IGNORE = "IGNORE"
    REPORT = "REPORT"
    RETURN = "RETURN"
    DEFAULT = "DEFAULT"


class ErrorDevice(enum.Enum):
    """Where error messages are written (`errdev_c`). Any other value is a file name."""

    SCREEN = "SCREEN"
    NULL = "NULL"


def get_last_error():
    """Retrieve and reset the CSPICE error status.

    Returns
    -------
    SpiceError or None
        The pending error, or None if no error was signalled.

    """
    with spice_lock() as lib:
        if not as_boolean(lib.failed_c()):
            return None

        short_message = create_buffer(SPICE_ERROR_SMSGLN)
        lib.getmsg_c(b"SHORT", len(short_message), short_message)
        explanation = create_buffer(SPICE_ERROR_XMSGLN)
        lib.getmsg_c(b"EXPLAIN", len(explanation), explanation)
        long_message = create_buffer(SPICE_ERROR_LMSGLN)
        lib.getmsg_c(b"LONG", len(long_message), long_message)
        traceback = create_buffer(SPICE_ERROR_TRCLEN)
        lib.qcktrc_c(len(traceback), traceback)

        lib.reset_c()

    return SpiceError(
        short_message=buffer_to_str(short_message),
        explanation=buffer_to_str(explanation),
        long_message=buffer_to_str(long_message),
        traceback=buffer_to_str(traceback),
    )


def check_error():
    """Raise the pending CSPICE error, if any.

    Raises
    ------
    SpiceError

    """
    err = get_last_error()
    if err is not None:
        logger.debug("SPICE error: %s", err.short_message)
        raise err


def set_error_action(action):
    """Set the action taken when an error is signalled.

    Parameters
    ----------
    action : ErrorAction or str

    """
    action = ErrorAction(action)
    with spice_lock() as lib:
        lib.erract_c(SET, 0, to_char_p(action.value))
    check_error()


def get_error_action():
    """Action taken when an error is signalled.

    Returns
    -------
    ErrorAction

    """
    buffer = create_buffer(ACTION_LEN)
    with spice_lock() as lib:
        lib.erract_c(GET, len(buffer), buffer)
    check_error()
    return ErrorAction(buffer_to_str(buffer))


def set_error_output_device(device):
    """Set where error messages are written.

    Parameters
    ----------
    device : ErrorDevice or str or Path
        SCREEN, NULL or a file name.

    """
    if isinstance(device, ErrorDevice):
        device = device.value
    with spice_lock() as lib:
        lib.errdev_c(SET, 0, to_char_p(device))
    check_error()


def get_error_output_device():
    """Where error messages are written.

    Returns
    -------
    ErrorDevice or str
        The device, or the file name when messages go to a file.

    """
    buffer = create_buffer(FILEN)
    with spice_lock() as lib:
        lib.errdev_c(GET, len(buffer), buffer)
    check_error()
    value = buffer_to_str(buffer)
    try:
        return ErrorDevice(value)
    except ValueError:
        return value


def set_error_defaults():
    """Return on error and discard messages (errors are raised as `SpiceError`)."""
    set_error_action(ErrorAction.RETURN)
    set_error_output_device(ErrorDevice.NULL)
