# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


"""
This module provides the :class:`AttitudeConverter` class, a configurable front end to the conversions in
:mod:`flightgeom.rotations`.

The functions in :mod:`.rotations` assume unit quaternions and silently give wrong answers otherwise.  That is the right
behaviour inside tight numerical code, but at the edges of a system (telemetry, user input) the quaternions are often
only approximately normalized.  The :class:`AttitudeConverter` checks its inputs according to its
:class:`AttitudeConverterOptions` before handing them to the pure functions::

    >>> from flightgeom.attitude import AttitudeConverter, AttitudeConverterOptions, UnitQuaternionCheck
    >>> converter = AttitudeConverter(AttitudeConverterOptions(unit_check=UnitQuaternionCheck.NORMALIZE,
    ...                                                        decimal_places=3))
    >>> converter.heading([0, 0, 0, 2])
    0.0
"""

import logging
import warnings

from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable

import numpy as np

from flightgeom._typing import ARRAY_LIKE, DOUBLE_ARRAY, F_SCALAR_OR_ARRAY, AXIS_ORDER_NAMES
from flightgeom.angles import clamp_angle_degrees, normalize_angle
from flightgeom.options import UserOptions, UserOptionConfigured
from flightgeom.rotations import (AxisOrder, PitchHeadingRoll, euler_angles, is_unit_quaternion, look_rotation,
                                  pitch_heading_roll, quaternion_inverse, quaternion_normalize)


_LOGGER: logging.Logger = logging.getLogger(__name__)


class UnitQuaternionCheck(Enum):
    """
    This enumeration provides the valid options for handling non-unit quaternions in :class:`AttitudeConverter`.
    """

    IGNORE = auto()
    """
    Use the quaternion as given.  Non-unit quaternions give incorrect angles.
    """

    WARN = auto()
    """
    Issue a ``UserWarning`` for non-unit quaternions and then normalize them.
    """

    NORMALIZE = auto()
    """
    Normalize every quaternion without warning.
    """

    RAISE = auto()
    """
    Raise a ``ValueError`` for non-unit quaternions.
    """


@dataclass
class AttitudeConverterOptions(UserOptions):
    """
    This dataclass holds the options for configuring an :class:`AttitudeConverter`.
    """

    unit_check: UnitQuaternionCheck = UnitQuaternionCheck.IGNORE
    """
    How to handle quaternions that are not of unit length.

    See :class:`UnitQuaternionCheck` for the choices.
    """

    unit_tolerance: float = 1e-6
    """
    The allowed absolute difference between a quaternion norm and 1 before it is treated as non-unit.
    """

    robust_look_rotation: bool = False
    """
    Use the general matrix conversion in :func:`.look_rotation` so that 180 degree rotations are well defined.
    """

    decimal_places: int | None = None
    """
    Round the returned angles (half to even) to this many decimal places.  ``None`` disables rounding.

    Rounded angles are wrapped back into the range of the unrounded angle, so a heading of 359.999 rounded to 2 places
    is reported as 0.
    """

    def override_options(self):

        if isinstance(self.unit_check, str):
            try:
                self.unit_check = UnitQuaternionCheck[self.unit_check.upper()]
            except KeyError:
                raise ValueError('Unknown unit quaternion check {!r}. Must be one of {}'.format(
                    self.unit_check, [check.name for check in UnitQuaternionCheck])) from None

        if self.unit_tolerance < 0:
            raise ValueError('The unit tolerance must be non-negative')


class AttitudeConverter(UserOptionConfigured[AttitudeConverterOptions], AttitudeConverterOptions):
    """
    This class converts between orientation quaternions and flight attitude angles with configurable input checking.

    All of the conversions are delegated to :mod:`.rotations`.  Before a quaternion is converted it is passed through
    :meth:`prepare`, which applies :attr:`unit_check`.  The instance holds no state other than its configuration, so a
    single converter can be shared freely.
    """

    def __init__(self, options: AttitudeConverterOptions | None = None) -> None:
        """
        :param options: The options to configure the converter with.  If ``None`` the defaults are used.
        """

        super().__init__(AttitudeConverterOptions, options=options)

    def reset_settings(self) -> None:

        super().reset_settings()

        _LOGGER.info('Attitude converter reset to {}'.format(self.original_options))

    def prepare(self, quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:
        """
        Check a quaternion according to :attr:`unit_check` and return the quaternion to use.

        :param quaternion: The rotation quaternion(s)
        :return: The quaternion(s), normalized if the options require it
        :raises ValueError: If :attr:`unit_check` is ``RAISE`` and a quaternion is not of unit length
        """

        quaternion = np.asarray(quaternion, dtype=np.float64)

        if self.unit_check is UnitQuaternionCheck.IGNORE:
            return quaternion

        if self.unit_check is UnitQuaternionCheck.NORMALIZE:
            return quaternion_normalize(quaternion)

        unit = np.all(is_unit_quaternion(quaternion, self.unit_tolerance))

        if unit:
            return quaternion

        if self.unit_check is UnitQuaternionCheck.RAISE:
            raise ValueError('Non-unit length quaternion {}'.format(quaternion))

        warnings.warn('Non-unit length quaternion {}.  Normalizing'.format(quaternion))

        return quaternion_normalize(quaternion)

    def _round(self, angles: F_SCALAR_OR_ARRAY,
               wrap: Callable[[F_SCALAR_OR_ARRAY], F_SCALAR_OR_ARRAY] | None = None) -> F_SCALAR_OR_ARRAY:
        """
        Round angles to :attr:`decimal_places` and wrap them back into their range with ``wrap``.

        Rounding can carry a value onto the open end of its range (359.999 to 360 for instance).
        """

        if self.decimal_places is None:
            return angles

        rounded = np.round(angles, self.decimal_places)

        if wrap is not None:
            rounded = wrap(rounded)

        if np.ndim(rounded) == 0:
            return float(rounded)

        return rounded

    def euler_angles(self, quaternion: ARRAY_LIKE,
                     order: AxisOrder | AXIS_ORDER_NAMES | str = AxisOrder.YZX) -> DOUBLE_ARRAY:
        """
        Extract Euler angles in degrees using :func:`.rotations.euler_angles`.

        :param quaternion: The rotation quaternion(s)
        :param order: The Euler angle decomposition to use
        :return: The Euler angles in degrees
        """

        return self._round(euler_angles(self.prepare(quaternion), order), clamp_angle_degrees)

    def pitch_heading_roll(self, quaternion: ARRAY_LIKE) -> PitchHeadingRoll:
        """
        Compute the pitch, heading, and roll angles in degrees using :func:`.rotations.pitch_heading_roll`.

        :param quaternion: The rotation quaternion(s)
        :return: The pitch, heading, and roll angles in degrees
        """

        attitude = pitch_heading_roll(self.prepare(quaternion))

        return PitchHeadingRoll(self._round(attitude.pitch),
                                self._round(attitude.heading, clamp_angle_degrees),
                                self._round(attitude.roll, normalize_angle))

    def pitch(self, quaternion: ARRAY_LIKE) -> F_SCALAR_OR_ARRAY:
        """
        The pitch angle in degrees (see :meth:`pitch_heading_roll`).
        """

        return self.pitch_heading_roll(quaternion).pitch

    def heading(self, quaternion: ARRAY_LIKE) -> F_SCALAR_OR_ARRAY:
        """
        The heading angle in degrees (see :meth:`pitch_heading_roll`).
        """

        return self.pitch_heading_roll(quaternion).heading

    def roll(self, quaternion: ARRAY_LIKE) -> F_SCALAR_OR_ARRAY:
        """
        The roll angle in degrees (see :meth:`pitch_heading_roll`).
        """

        return self.pitch_heading_roll(quaternion).roll

    def inverse(self, quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:
        """
        The inverse rotation of a quaternion (see :func:`.quaternion_inverse`).

        :param quaternion: The rotation quaternion(s)
        :return: The inverse quaternion(s)
        """

        return quaternion_inverse(self.prepare(quaternion))

    def look_rotation(self, forward: ARRAY_LIKE, up: ARRAY_LIKE) -> DOUBLE_ARRAY:
        """
        Build the orientation facing ``forward`` with ``up`` as the reference up direction.

        Uses :attr:`robust_look_rotation` to select the conversion (see :func:`.look_rotation`).

        :param forward: The direction(s) for the local +z axis
        :param up: The reference direction(s) for the local +y axis
        :return: The rotation quaternion(s)
        """

        return look_rotation(forward, up, robust=self.robust_look_rotation)
