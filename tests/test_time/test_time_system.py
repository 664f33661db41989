"""time.system and time.calendar - Unit test
"""

import datetime
import logging
import unittest

from cspice import utils
from cspice.time import Calendar, DateTime, Tdb, Tdt, Utc

logger = logging.getLogger(__name__)
utils.enable_logging(extra_loggers=[__name__])


class UtcTestCase(unittest.TestCase):
    def test_utc_from_seconds(self):
        self.assertEqual(Utc(2, 30), Utc.from_zone_seconds(9000))
        self.assertEqual(Utc(-2, 30), Utc.from_zone_seconds(-9000))
        self.assertEqual(Utc(-2, 30), Utc.from_zone_seconds(-9001))
        self.assertEqual(Utc(-2, 31), Utc.from_zone_seconds(-9050))
        self.assertEqual(Utc(0, 0), Utc.from_zone_seconds(0))

    def test_utc_from_seconds_carries_minutes(self):
        # 59.5 minutes rounds up to the next hour.
        self.assertEqual(Utc(1, 0), Utc.from_zone_seconds(3570))
        self.assertEqual(Utc(0, 30), Utc.from_zone_seconds(1800))

        with self.assertRaises(ValueError):
            Utc.from_zone_seconds(-1800)

    def test_utc_to_seconds(self):
        self.assertEqual(9000, Utc(2, 30).to_zone_seconds())
        self.assertEqual(-9000, Utc(-2, 30).to_zone_seconds())
        self.assertEqual(0, Utc().to_zone_seconds())

    def test_utc_invalid_minutes(self):
        with self.assertRaises(ValueError):
            Utc(1, 60)
        with self.assertRaises(ValueError):
            Utc(1, -5)

    def test_meta_markers(self):
        self.assertEqual("TDB", Tdb().meta_marker())
        self.assertEqual("TDT", Tdt().meta_marker())
        self.assertEqual("UTC+0:0", Utc().meta_marker())
        self.assertEqual("UTC+5:45", Utc(5, 45).meta_marker())
        self.assertEqual("UTC-3:30", Utc(-3, 30).meta_marker())

    def test_to_tzinfo(self):
        self.assertEqual(datetime.timezone(datetime.timedelta(hours=-3, minutes=-30)), Utc(-3, 30).to_tzinfo())
        self.assertEqual(datetime.timezone.utc, Utc().to_tzinfo())


class CalendarTestCase(unittest.TestCase):
    def test_names(self):
        self.assertEqual("MCAL", Calendar.MIXED.short_name)
        self.assertEqual("GCAL", Calendar.GREGORIAN.short_name)
        self.assertEqual("JCAL", Calendar.JULIAN.short_name)

        self.assertIs(Calendar.GREGORIAN, Calendar.from_name("gregorian "))
        self.assertIs(Calendar.JULIAN, Calendar.from_name("JCAL"))
        with self.assertRaisesRegex(ValueError, "Unknown calendar"):
            Calendar.from_name("LUNAR")


class DateTimeTestCase(unittest.TestCase):
    def test_defaults_and_str(self):
        value = DateTime(-599, 1, 1)
        self.assertEqual(Tdb(), value.system)
        self.assertIs(Calendar.MIXED, value.calendar)
        self.assertEqual("-599-1-1 0:0:0.0 TDB MCAL", str(value))

    def test_from_datetime(self):
        aware = datetime.datetime(
            2021, 3, 4, 5, 6, 7, 250000, tzinfo=datetime.timezone(datetime.timedelta(hours=2, minutes=30))
        )
        value = DateTime.from_datetime(aware)
        self.assertEqual(DateTime(2021, 3, 4, 5, 6, 7.25, Utc(2, 30), Calendar.GREGORIAN), value)

        naive = DateTime.from_datetime(datetime.datetime(2021, 3, 4))
        self.assertEqual(Utc(), naive.system)

    def test_to_datetime(self):
        value = DateTime(2021, 3, 4, 5, 6, 7.25, Utc(-2, 30), Calendar.GREGORIAN)
        expected = datetime.datetime(
            2021, 3, 4, 5, 6, 7, 250000, tzinfo=datetime.timezone(datetime.timedelta(hours=-2, minutes=-30))
        )
        self.assertEqual(expected, value.to_datetime())
        self.assertEqual(value, DateTime.from_datetime(value.to_datetime()))

        with self.assertRaises(ValueError):
            DateTime(2021, 3, 4).to_datetime()
        with self.assertRaises(ValueError):
            DateTime(2021, 3, 4, system=Utc(), calendar=Calendar.JULIAN).to_datetime()


if __name__ == "__main__":
    unittest.main()
