"""Coordinate system conversions.

Angles are in radians. See the "Coordinate Systems" section of:
https://naif.jpl.nasa.gov/pub/naif/toolkit_docs/C/info/mostused.html
"""
import ctypes
import typing

from .native.types import SpiceDouble, SpiceDouble3
from .spice import spice_lock
from .vector import Vector3D


class Rectangular(Vector3D):
    """Rectangular (x, y, z) coordinates."""

    __slots__ = ()

    def to_azel(self, azccw=False, elplsz=False):
        """Convert to range, azimuth and elevation (`recazl_c`).

        Parameters
        ----------
        azccw : bool, optional
            Azimuth increases counterclockwise (about +Z) if True.
        elplsz : bool, optional
            Elevation increases towards +Z if True.

        Returns
        -------
        AzEl

        """
        range_, az, el = SpiceDouble(0.0), SpiceDouble(0.0), SpiceDouble(0.0)
        with spice_lock() as lib:
            lib.recazl_c(self.as_ptr(), int(azccw), int(elplsz),
                         ctypes.byref(range_), ctypes.byref(az), ctypes.byref(el))
        return AzEl(range_.value, az.value, el.value)

    @classmethod
    def from_azel(cls, azel, azccw=False, elplsz=False):
        """Rectangular coordinates from range, azimuth and elevation (`azlrec_c`)."""
        return azel.to_rect(azccw=azccw, elplsz=elplsz)

    def to_latitudinal(self):
        """Convert to radius, longitude and latitude (`reclat_c`)."""
        return Latitudinal.from_rect(self)

    def to_radec(self):
        """Convert to range, right ascension and declination (`recrad_c`)."""
        return RaDec.from_rect(self)


class AzEl(typing.NamedTuple):
    """Range, azimuth and elevation."""

    range: float = 0.0
    az: float = 0.0
    el: float = 0.0

    def to_rect(self, azccw=False, elplsz=False):
        """Convert to rectangular coordinates (`azlrec_c`).

        Parameters
        ----------
        azccw : bool, optional
            Azimuth increases counterclockwise (about +Z) if True.
        elplsz : bool, optional
            Elevation increases towards +Z if True.

        Returns
        -------
        Rectangular

        """
        out = SpiceDouble3()
        with spice_lock() as lib:
            lib.azlrec_c(self.range, self.az, self.el, int(azccw), int(elplsz), out)
        return Rectangular(list(out))


class RaDec(typing.NamedTuple):
    """Range, right ascension and declination."""

    range: float = 0.0
    ra: float = 0.0
    dec: float = 0.0

    @classmethod
    def from_rect(cls, rect):
        """Convert rectangular coordinates (`recrad_c`)."""
        rect = rect if isinstance(rect, Vector3D) else Rectangular(rect)
        range_, ra, dec = SpiceDouble(0.0), SpiceDouble(0.0), SpiceDouble(0.0)
        with spice_lock() as lib:
            lib.recrad_c(rect.as_ptr(), ctypes.byref(range_), ctypes.byref(ra), ctypes.byref(dec))
        return cls(range_.value, ra.value, dec.value)

    def to_rect(self):
        """Convert to rectangular coordinates (`radrec_c`)."""
        out = SpiceDouble3()
        with spice_lock() as lib:
            lib.radrec_c(self.range, self.ra, self.dec, out)
        return Rectangular(list(out))


class Latitudinal(typing.NamedTuple):
    """Radius, longitude and latitude."""

    radius: float = 0.0
    longitude: float = 0.0
    latitude: float = 0.0

    @classmethod
    def from_rect(cls, rect):
        """Convert rectangular coordinates (`reclat_c`)."""
        rect = rect if isinstance(rect, Vector3D) else Rectangular(rect)
        radius, lon, lat = SpiceDouble(0.0), SpiceDouble(0.0), SpiceDouble(0.0)
        with spice_lock() as lib:
            lib.reclat_c(rect.as_ptr(), ctypes.byref(radius), ctypes.byref(lon), ctypes.byref(lat))
        return cls(radius.value, lon.value, lat.value)

    def to_rect(self):
        """Convert to rectangular coordinates (`latrec_c`)."""
        out = SpiceDouble3()
        with spice_lock() as lib:
            lib.latrec_c(self.radius, self.longitude, self.latitude, out)
        return Rectangular(list(out))
