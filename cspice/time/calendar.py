"""Calendars supported by SPICE time conversions.
"""
from enum import Enum


class Calendar(Enum):
    """Calendar used to interpret or format calendar dates.

    The value is the `timdef_c` name, :attr:`short_name` is the meta marker
    used in `timout_c` pictures and `str2et_c` strings.
    """

    MIXED = "MIXED"  # Julian prior to 1582-10-15, Gregorian after.
    GREGORIAN = "GREGORIAN"
    JULIAN = "JULIAN"

    @property
    def short_name(self):
        return _SHORT_NAMES[self]

    @classmethod
    def from_name(cls, name):
        """Calendar from its full or short name (e.g., "GREGORIAN" or "GCAL")."""
        name = name.strip().upper()
        for cal, short in _SHORT_NAMES.items():
            if name in (cal.value, short):
                return cal
        raise ValueError(f"Unknown calendar: {name!r}")


_SHORT_NAMES = {
    Calendar.MIXED: "MCAL",
    Calendar.GREGORIAN: "GCAL",
    Calendar.JULIAN: "JCAL",
}
