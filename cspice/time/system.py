"""Time systems supported by SPICE time conversions.
"""
import datetime
from dataclasses import dataclass


@dataclass(frozen=True)
class Tdb:
    """Barycentric Dynamical Time."""

    system_name = "TDB"

    def meta_marker(self):
        return self.system_name


@dataclass(frozen=True)
class Tdt:
    """Terrestrial Dynamical Time."""

    system_name = "TDT"

    def meta_marker(self):
        return self.system_name


@dataclass(frozen=True)
class Utc:
    """Coordinated Universal Time, with a time zone offset.

    Parameters
    ----------
    zone_hours : int
        Signed hours offset from UTC.
    zone_minutes : int
        Unsigned minutes offset (0-59), with the sign of `zone_hours`.

    """

    zone_hours: int = 0
    zone_minutes: int = 0

    system_name = "UTC"

    def __post_init__(self):
        if not 0 <= self.zone_minutes < 60:
            raise ValueError(f"Zone minutes must be in [0, 60), not {self.zone_minutes}")

    def meta_marker(self):
        return f"UTC{self.zone_hours:+}:{self.zone_minutes}"

    def to_zone_seconds(self):
        """Signed zone offset in seconds."""
        total = abs(self.zone_hours) * 3600 + self.zone_minutes * 60
        return -total if self.zone_hours < 0 else total

    @classmethod
    def from_zone_seconds(cls, seconds):
        """Zone from a signed offset in seconds, rounded to the nearest minute.

        Offsets between -1 hour and zero cannot be expressed since the sign is
        carried by the hours.
        """
        seconds = int(seconds)
        total_minutes = int(abs(seconds) / 60.0 + 0.5)
        hours, minutes = divmod(total_minutes, 60)
        if seconds < 0:
            if hours == 0 and minutes != 0:
                raise ValueError(f"Zone offset of {seconds} seconds has no sign-carrying hour component")
            hours = -hours
        return cls(hours, minutes)

    def to_tzinfo(self):
        """Equivalent fixed offset `datetime.timezone`."""
        return datetime.timezone(datetime.timedelta(seconds=self.to_zone_seconds()))
