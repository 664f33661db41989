"""Geometry finder searches.

See: https://naif.jpl.nasa.gov/pub/naif/toolkit_docs/C/req/gf.html
"""
import enum
import logging

from .common import AberrationCorrection
from .error import check_error
from .spice import spice_lock
from .string import to_char_p

logger = logging.getLogger(__name__)


class Shape(enum.Enum):
    """Body shape model used by the search."""

    SPHERE = "SPHERE"
    POINT = "POINT"


class RelationalOperator(enum.Enum):
    """Constraint applied to the searched quantity."""

    GT = ">"
    EQ = "="
    LT = "<"
    ABSMAX = "ABSMAX"
    ABSMIN = "ABSMIN"
    LOCMAX = "LOCMAX"
    LOCMIN = "LOCMIN"


def separation_search(body1, shape1, frame1, body2, shape2, frame2, aberration_correction, observing_body,
                      relational_operator, refval, adjust, step_size, intervals, confine, output):
    """Find when the angular separation of two bodies satisfies a relation (`gfsep_c`).

    Parameters
    ----------
    body1, body2 : str
        Target body names.
    shape1, shape2 : Shape or str
    frame1, frame2 : str
        Body-fixed frames (ignored for POINT shapes, may be blank).
    aberration_correction : AberrationCorrection or str
    observing_body : str
    relational_operator : RelationalOperator or str
    refval : float
        Reference separation (radians), for GT, EQ and LT.
    adjust : float
        Adjustment (radians), for ABSMAX and ABSMIN.
    step_size : float
        Search step (seconds).
    intervals : int
        Workspace size (number of intervals).
    confine : Window
        Time window confining the search.
    output : Window
        Window filled with the intervals satisfying the relation.

    """
    shape1, shape2 = Shape(shape1), Shape(shape2)
    relational_operator = RelationalOperator(relational_operator)
    aberration_correction = AberrationCorrection(aberration_correction)

    logger.debug("Separation search of [%s] and [%s] from [%s]: %s %s", body1, body2, observing_body,
                 relational_operator.value, refval)
    with spice_lock() as lib:
        lib.gfsep_c(
            to_char_p(body1),
            to_char_p(shape1.value),
            to_char_p(frame1),
            to_char_p(body2),
            to_char_p(shape2.value),
            to_char_p(frame2),
            aberration_correction.as_char_p(),
            to_char_p(observing_body),
            to_char_p(relational_operator.value),
            float(refval),
            float(adjust),
            float(step_size),
            int(intervals),
            confine.as_mut_cell(),
            output.as_mut_cell(),
        )
    check_error()
    return output
