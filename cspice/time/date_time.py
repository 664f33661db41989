"""Calendar dates in a SPICE time system and calendar.
"""
import datetime
import logging
from dataclasses import dataclass, field

from .calendar import Calendar
from .et import _get_calendar_name, _set_calendar_name, string_to_et, time_out
from .system import Tdb, Utc

logger = logging.getLogger(__name__)

DATE_TIME_BUFFER_LEN = 100


def _format_seconds(seconds):
    text = f"{seconds:.9f}".rstrip("0")
    return text[:-1] if text.endswith(".") else text


@dataclass(frozen=True)
class DateTime:
    """Calendar date and time of day.

    Years before 1 A.D. are numbered astronomically: 0 is 1 B.C., -1 is 2 B.C.
    and so on.

    Parameters
    ----------
    year, month, day : int
    hour, minute : int, optional
    second : float, optional
    system : Tdb or Tdt or Utc, optional
        Time system. Default is TDB.
    calendar : Calendar, optional
        Default is MIXED.

    """

    year: int
    month: int
    day: int
    hour: int = 0
    minute: int = 0
    second: float = 0.0
    system: object = field(default_factory=Tdb)
    calendar: Calendar = Calendar.MIXED

    def __str__(self):
        return (f"{self.year}-{self.month}-{self.day} {self.hour}:{self.minute}:{self.second} "
                f"{self.system.meta_marker()} {self.calendar.short_name}")

    @classmethod
    def from_et(cls, et, system=None, calendar=Calendar.MIXED):
        """Calendar date of an ephemeris time (`timout_c`).

        Parameters
        ----------
        et : Et or float
        system : Tdb or Tdt or Utc, optional
            Default is TDB.
        calendar : Calendar, optional
            Default is MIXED.

        Returns
        -------
        DateTime

        """
        system = Tdb() if system is None else system
        pictur = f"ERA:YYYY:MM:DD:HR:MN:SC.##### ::{system.meta_marker()} ::{calendar.short_name}"
        output = time_out(et, pictur, DATE_TIME_BUFFER_LEN)

        era, year, month, day, hour, minute, second = output.split(":")
        year = int(year.strip())
        if era.strip() == "B.C.":
            year = 1 - year
        return cls(year, int(month), int(day), int(hour), int(minute), float(second), system, calendar)

    def to_et(self):
        """Ephemeris time of the date (`str2et_c`).

        The default calendar is switched to this date's calendar for the
        conversion, then restored.
        """
        original = _get_calendar_name()
        year = str(self.year) if self.year > 0 else f"{abs(self.year) + 1} BC"
        date = (f"{year}-{self.month}-{self.day} {self.hour}:{self.minute}:{_format_seconds(self.second)}"
                f" {self.system.meta_marker()}")

        _set_calendar_name(self.calendar.value)
        try:
            return string_to_et(date)
        finally:
            _set_calendar_name(original)

    def to_julian_date(self):
        """Julian date in the same time system."""
        from .julian_date import JulianDate

        return JulianDate.from_et(self.to_et(), self.system)

    @classmethod
    def from_julian_date(cls, jd, calendar=Calendar.MIXED):
        return cls.from_et(jd.to_et(), jd.system, calendar)

    @classmethod
    def from_datetime(cls, value):
        """Gregorian UTC date from a `datetime.datetime`.

        Naive values are assumed to be UTC. The zone offset is rounded to the
        nearest minute.
        """
        offset = value.utcoffset()
        zone = Utc() if offset is None else Utc.from_zone_seconds(offset.total_seconds())
        second = value.second + value.microsecond / 1e6
        return cls(value.year, value.month, value.day, value.hour, value.minute, second, zone, Calendar.GREGORIAN)

    def to_datetime(self):
        """Timezone aware `datetime.datetime`, for Gregorian UTC dates.

        Raises
        ------
        ValueError
            If the date is not in the Gregorian calendar and UTC system, or is
            outside the range supported by `datetime`.

        """
        if self.calendar is not Calendar.GREGORIAN or not isinstance(self.system, Utc):
            raise ValueError(f"Only Gregorian UTC dates can be converted to datetime, not: {self}")
        base = datetime.datetime(self.year, self.month, self.day, self.hour, self.minute,
                                 tzinfo=self.system.to_tzinfo())
        return base + datetime.timedelta(seconds=self.second)
