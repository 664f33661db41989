"""SPICE time systems, calendars and conversions.

Examples
--------
>>> from cspice.time import Et, JulianDate, DateTime, Calendar, Tdb
>>> Et(0.0).to_julian_date()
JulianDate(value=2451545.0, system=Tdb())
>>> JulianDate(1502273.5).to_et().to_date_time(Calendar.MIXED, Tdb())
DateTime(year=-599, month=1, day=1, hour=0, minute=0, second=0.0, system=Tdb(), calendar=<Calendar.MIXED: 'MIXED'>)

"""
from .calendar import Calendar
from .date_time import DateTime
from .et import Et, get_default_calendar, set_default_calendar, string_to_et, time_out
from .julian_date import JulianDate
from .system import Tdb, Tdt, Utc

__all__ = [
    "Calendar",
    "DateTime",
    "Et",
    "JulianDate",
    "Tdb",
    "Tdt",
    "Utc",
    "get_default_calendar",
    "set_default_calendar",
    "string_to_et",
    "time_out",
]
