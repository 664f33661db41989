"""Julian dates in a SPICE time system.
"""
from dataclasses import dataclass, field

import numpy as np

from .calendar import Calendar
from .et import string_to_et, time_out
from .system import Tdb

JD_BUFFER_LEN = 40


@dataclass(frozen=True)
class JulianDate:
    """Julian date in a time system.

    Parameters
    ----------
    value : float
        Julian date (days).
    system : Tdb or Tdt or Utc, optional
        Time system. Default is TDB.

    """

    value: float
    system: object = field(default_factory=Tdb)

    def __float__(self):
        return float(self.value)

    def __str__(self):
        return f"JD {self.system.system_name} {self.value}"

    def to_et(self):
        """Ephemeris time of the date (`str2et_c`)."""
        # str2et_c rejects exponent notation.
        value = np.format_float_positional(float(self.value), trim="0")
        return string_to_et(f"JD {self.system.system_name} {value}")

    @classmethod
    def from_et(cls, et, system=None):
        """Julian date of an ephemeris time (`timout_c`)."""
        system = Tdb() if system is None else system
        text = time_out(et, f"JULIAND.############# ::{system.system_name}", JD_BUFFER_LEN)
        return cls(float(text), system)

    def to_date_time(self, calendar=Calendar.MIXED):
        """Calendar date in the same time system."""
        return self.to_et().to_date_time(calendar, self.system)
