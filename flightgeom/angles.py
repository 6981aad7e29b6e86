# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


r"""
This module provides scalar angle wrapping utilities and a generic clamp.

Two different wrapping conventions are used in :mod:`flightgeom` and they should not be confused:

* :func:`normalize_angle` wraps into :math:`(-180, 180]`.  It is used for signed angles, for instance the reduced
  attitude vectors of :func:`.reduce_angles`.
* :func:`clamp_angle_degrees` wraps into :math:`[0, 360)`.  It is used for the unsigned angles produced by the Euler
  angle extraction in :func:`.euler_angles`.

All angles in this module are in degrees.  Both wrapping functions accept scalars or arrays; scalars are returned as
python floats and arrays are returned as numpy arrays of the same shape.
"""

from typing import TypeVar, Protocol, Any

import numpy as np

from flightgeom._typing import SCALAR_OR_ARRAY, F_SCALAR_OR_ARRAY


class _SupportsOrdering(Protocol):

    def __lt__(self, other: Any, /) -> bool: ...

    def __gt__(self, other: Any, /) -> bool: ...


OrderedT = TypeVar("OrderedT", bound=_SupportsOrdering)


def _as_output(value: np.ndarray) -> F_SCALAR_OR_ARRAY:
    """
    Return a python float for 0 dimensional arrays and the array otherwise.
    """

    if value.ndim == 0:
        return float(value)

    return value


def normalize_angle(angle: SCALAR_OR_ARRAY) -> F_SCALAR_OR_ARRAY:
    r"""
    This function wraps an angle in degrees into the half open interval :math:`(-180, 180]`.

    The wrapping is performed as

    .. math::
        a' = a + 360\left\lfloor\frac{180 - a}{360}\right\rfloor

    which is exact for integral multiples of 360 and handles negative inputs the same way as positive ones.  Both
    :math:`180` and :math:`-180` map to :math:`180`.

    This function is vectorized.

    :param angle: The angle(s) to wrap in degrees
    :return: The wrapped angle(s) in degrees
    """

    angle = np.asarray(angle, dtype=np.float64)

    return _as_output(angle + 360.0 * np.floor((180.0 - angle) / 360.0))


def clamp_angle_degrees(angle: SCALAR_OR_ARRAY) -> F_SCALAR_OR_ARRAY:
    """
    This function wraps an angle in degrees into the half open interval :math:`[0, 360)`.

    The angle is first reduced using the floating point remainder (which keeps the sign of the input) and then 360 is
    added to anything that is negative.  For very small negative inputs the addition rounds to exactly 360, which is
    folded back to 0 so that the result is always inside the interval.

    This function is vectorized.

    :param angle: The angle(s) to wrap in degrees
    :return: The wrapped angle(s) in degrees
    """

    angle = np.fmod(np.asarray(angle, dtype=np.float64), 360.0)

    angle = np.where(angle < 0.0, angle + 360.0, angle)

    return _as_output(np.where(angle == 360.0, 0.0, angle))


def clamp(value: OrderedT, minimum: OrderedT, maximum: OrderedT) -> OrderedT:
    """
    Clamp a value to the closed range ``[minimum, maximum]``.

    This works for any type with a total ordering (numbers, strings, datetimes, ...).  Only the ``<`` and ``>``
    comparisons are used, so the input object itself is returned when it is already inside the range.  The bounds are
    not checked against each other; when ``minimum > maximum`` the lower bound test wins.

    :param value: The value to clamp
    :param minimum: The lower bound of the range
    :param maximum: The upper bound of the range
    :return: ``minimum`` if ``value < minimum``, ``maximum`` if ``value > maximum``, otherwise ``value``
    """

    if value < minimum:
        return minimum
    elif value > maximum:
        return maximum
    else:
        return value
