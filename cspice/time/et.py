"""Ephemeris time (TDB seconds past J2000) and general time conversions.
"""
import ctypes
import logging
from dataclasses import dataclass

from .calendar import Calendar
from .system import Tdb
from ..error import check_error
from ..native.types import SpiceDouble
from ..spice import spice_lock
from ..string import buffer_to_str, create_buffer, to_char_p

logger = logging.getLogger(__name__)

GET = b"GET"
SET = b"SET"
CALENDAR = b"CALENDAR"

# Long enough for any calendar name ("GREGORIAN").
CALENDAR_LEN = 12

DEFAULT_TIME_OUT_LEN = 100


def string_to_et(string):
    """Convert a time string to ephemeris time (`str2et_c`).

    Parameters
    ----------
    string : str
        Any time string understood by `str2et_c`, e.g., "2027-MAR-23 16:00:00"
        or "JD TDB 2451545.0". Requires a loaded leapseconds kernel.

    Returns
    -------
    Et

    """
    output = SpiceDouble(0.0)
    with spice_lock() as lib:
        lib.str2et_c(to_char_p(string), ctypes.byref(output))
    check_error()
    return Et(output.value)


def time_out(et, pictur, out_length=DEFAULT_TIME_OUT_LEN):
    """Format an ephemeris time using a picture (`timout_c`).

    Parameters
    ----------
    et : Et or float
        Ephemeris time.
    pictur : str
        Format picture, e.g., "YYYY-MM-DDTHR:MN:SC.### ::UTC".
    out_length : int, optional
        Output buffer length (including the nul).

    Returns
    -------
    str

    """
    buffer = create_buffer(out_length)
    with spice_lock() as lib:
        lib.timout_c(float(et), to_char_p(pictur), len(buffer), buffer)
    check_error()
    return buffer_to_str(buffer)


def get_default_calendar():
    """Calendar currently used to interpret and format dates (`timdef_c`).

    Returns
    -------
    Calendar

    """
    return Calendar.from_name(_get_calendar_name())


def set_default_calendar(calendar):
    """Set the calendar used to interpret and format dates (`timdef_c`).

    Parameters
    ----------
    calendar : Calendar or str

    """
    if not isinstance(calendar, Calendar):
        calendar = Calendar.from_name(calendar)
    _set_calendar_name(calendar.value)


def _get_calendar_name():
    buffer = create_buffer(CALENDAR_LEN)
    with spice_lock() as lib:
        lib.timdef_c(GET, CALENDAR, len(buffer), buffer)
    check_error()
    return buffer_to_str(buffer)


def _set_calendar_name(name):
    with spice_lock() as lib:
        lib.timdef_c(SET, CALENDAR, 0, to_char_p(name))
    check_error()


@dataclass(frozen=True, order=True)
class Et:
    """Ephemeris time: TDB seconds past the J2000 epoch."""

    value: float

    def __float__(self):
        return float(self.value)

    def __str__(self):
        return f"ET {self.value}"

    def to_julian_date(self, system=None):
        """Julian date in a time system (default TDB)."""
        from .julian_date import JulianDate

        return JulianDate.from_et(self, Tdb() if system is None else system)

    @classmethod
    def from_julian_date(cls, jd):
        return jd.to_et()

    def to_date_time(self, calendar=Calendar.MIXED, system=None):
        """Calendar date in a time system (default TDB)."""
        from .date_time import DateTime

        return DateTime.from_et(self, Tdb() if system is None else system, calendar)

    @classmethod
    def from_date_time(cls, date_time):
        return date_time.to_et()

    @classmethod
    def from_string(cls, string):
        """Parse a time string (`str2et_c`)."""
        return string_to_et(string)

    def to_string(self, pictur, out_length=DEFAULT_TIME_OUT_LEN):
        """Format using a picture (`timout_c`)."""
        return time_out(self, pictur, out_length)
