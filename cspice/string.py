"""Conversions between Python strings and C character buffers.
"""
import ctypes
import os

ENCODING = "ascii"


class SpiceString:
    """Owned, nul-free string encoded for CSPICE.

    Parameters
    ----------
    value : str or bytes or os.PathLike
        String value. Must not contain a nul character.

    """

    __slots__ = ("_value",)

    def __init__(self, value):
        if isinstance(value, SpiceString):
            value = value.as_bytes()
        elif isinstance(value, os.PathLike):
            value = os.fspath(value)
        if isinstance(value, str):
            value = value.encode(ENCODING)
        if not isinstance(value, bytes):
            raise TypeError(f"Expected str, bytes or path-like, not {type(value).__name__}")
        if b"\0" in value:
            raise ValueError(f"String contains an embedded nul: {value!r}")
        self._value = value

    @classmethod
    def from_buffer(cls, buffer):
        """Read a nul-terminated string out of a character buffer.

        Parameters
        ----------
        buffer : ctypes char array or bytes or bytearray
            Buffer filled in by CSPICE.

        Returns
        -------
        SpiceString

        Raises
        ------
        ValueError
            If the buffer does not contain a nul terminator.

        """
        raw = bytes(buffer.raw if hasattr(buffer, "raw") else buffer)
        end = raw.find(b"\0")
        if end < 0:
            raise ValueError("missing nul terminator")
        return cls(raw[:end])

    def as_bytes(self):
        return self._value

    def as_str(self):
        return self._value.decode(ENCODING, errors="replace")

    def as_char_p(self):
        """Value suitable for a `ctypes.c_char_p` argument."""
        return self._value

    def __str__(self):
        return self.as_str()

    def __repr__(self):
        return f"{self.__class__.__name__}({self.as_str()!r})"

    def __eq__(self, other):
        if isinstance(other, SpiceString):
            return self._value == other._value
        if isinstance(other, str):
            return self.as_str() == other
        return NotImplemented

    def __hash__(self):
        return hash(self.as_str())

    def __len__(self):
        return len(self._value)


def to_char_p(value):
    """Encode a value for a `const char *` argument."""
    return SpiceString(value).as_char_p()


def create_buffer(length):
    """Zeroed output buffer of `length` characters (including the nul)."""
    return ctypes.create_string_buffer(length)


def buffer_to_str(buffer):
    """Python string from an output buffer filled in by CSPICE."""
    return SpiceString.from_buffer(buffer).as_str()
