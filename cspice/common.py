"""Values shared by several CSPICE routines.
"""
import enum

from .string import to_char_p


class _SpiceStrEnum(enum.Enum):
    def as_char_p(self):
        return to_char_p(self.value)

    def __str__(self):
        return self.value


class AberrationCorrection(_SpiceStrEnum):
    """Aberration correction applied to apparent states.

    See: https://naif.jpl.nasa.gov/pub/naif/toolkit_docs/C/cspice/spkezr_c.html#Detailed_Input
    """

    NONE = "NONE"
    LT = "LT"
    LT_S = "LT+S"
    CN = "CN"
    CN_S = "CN+S"
    XLT = "XLT"
    XLT_S = "XLT+S"
    XCN = "XCN"
    XCN_S = "XCN+S"


class ComparisonOperator(_SpiceStrEnum):
    """Relational operator used to compare windows (`wnreld_c`)."""

    EQ = "="
    NE = "<>"
    LEQ = "<="
    LT = "<"
    GEQ = ">="
    GT = ">"


class Side(_SpiceStrEnum):
    """Endpoint selector used by `wnextd_c`."""

    LEFT = "L"
    RIGHT = "R"

    def as_char(self):
        return self.value.encode()
