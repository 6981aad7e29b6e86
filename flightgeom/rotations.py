# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


r"""
This module defines the quaternion routines used to convert between a spacecraft orientation and flight attitude
angles.

Quaternions in this module are 4 element numpy arrays of the form

.. math::
    \mathbf{q}=\left[\begin{array}{c} q_x \\ q_y \\ q_z \\ q_w\end{array}\right]=
    \left[\begin{array}{c}\text{sin}(\frac{\theta}{2})\hat{\mathbf{x}}\\
    \text{cos}(\frac{\theta}{2})\end{array}\right]

where :math:`\hat{\mathbf{x}}` is the unit rotation axis and :math:`\theta` is the angle to rotate about it.  The
rotation is active, that is :math:`\mathbf{T}(\mathbf{q})\mathbf{v}` rotates the vector :math:`\mathbf{v}`.  Most
routines are vectorized along the first axis, so multiple quaternions can be given as the columns of a
:math:`4\times n` array.

The attitude angles produced here follow the flight-dynamics convention where

* **heading** is the rotation about the x axis,
* **pitch** is the rotation about the z axis, measured nose up positive,
* **roll** is the rotation about the y axis, measured right wing down positive,

and are extracted from the YZX Euler decomposition of the orientation (see :func:`euler_angles` and
:func:`pitch_heading_roll`).  The inverse direction, building an orientation from a facing direction, is provided by
:func:`look_rotation`.

Many of these routines assume a unit quaternion and do not check it.  Use :func:`quaternion_normalize` first if that
cannot be guaranteed, or use the :class:`.AttitudeConverter` which can check for you.  Degenerate inputs (zero length
quaternions, parallel direction vectors) are not trapped; they give ``nan`` or ``inf`` in the result.
"""

import logging

from enum import Enum
from typing import NamedTuple

import numpy as np

from flightgeom._typing import ARRAY_LIKE, ARRAY_LIKE_2D, DOUBLE_ARRAY, F_SCALAR_OR_ARRAY, AXIS_ORDER_NAMES
from flightgeom.angles import clamp_angle_degrees
from flightgeom.vectors import cross, ortho_normalize, unit


_LOGGER: logging.Logger = logging.getLogger(__name__)


GIMBAL_LOCK_TOLERANCE: float = 1e-12
"""
How close the sine of the middle Euler angle may get to :math:`\\pm 1` before the decomposition is treated as gimbal
locked.

At gimbal lock only the sum or difference of the first and last angles is defined.  The first angle is then set to 0
and the whole rotation is assigned to the last angle.
"""


class AxisOrder(Enum):
    """
    This enumeration specifies the supported Euler angle decompositions for :func:`euler_angles`.
    """

    YZX = 'yzx'
    """
    Rotate about y first, then about z, then about x (each about the fixed axes).

    The angles are returned in the order (about y, about z, about x).
    """


class PitchHeadingRoll(NamedTuple):
    """
    The flight attitude angles of an orientation as returned by :func:`pitch_heading_roll`.

    Each element is a float for a single quaternion or an array for multiple quaternions.
    """

    pitch: F_SCALAR_OR_ARRAY
    """
    The nose up (positive) or down (negative) angle in degrees, in :math:`[-90, 90]`.
    """

    heading: F_SCALAR_OR_ARRAY
    """
    The compass direction in degrees, in :math:`[0, 360)`.
    """

    roll: F_SCALAR_OR_ARRAY
    """
    The bank angle in degrees, in :math:`(-180, 180]`.
    """


def _interp_axis_order(order: AxisOrder | AXIS_ORDER_NAMES | str) -> AxisOrder:
    """
    Interpret the order as an :class:`AxisOrder`.

    :raises ValueError: If the order is not supported
    """

    if isinstance(order, AxisOrder):
        return order

    if isinstance(order, str):
        for candidate in AxisOrder:
            if candidate.value == order.lower():
                return candidate

    raise ValueError('Axis order not supported: {!r}'.format(order))


def _check_quaternion_shape(quaternion: np.ndarray):

    if quaternion.ndim == 0 or quaternion.shape[0] != 4:
        raise ValueError('The length of the first axis must be 4')


def quaternion_norm(quaternion: ARRAY_LIKE) -> F_SCALAR_OR_ARRAY:
    r"""
    This function computes the length of a quaternion :math:`\sqrt{q_x^2+q_y^2+q_z^2+q_w^2}`.

    This function is vectorized.

    :param quaternion: The quaternion(s)
    :return: The norm(s)
    """

    quaternion = np.asarray(quaternion, dtype=np.float64)

    _check_quaternion_shape(quaternion)

    norm = np.sqrt((quaternion * quaternion).sum(axis=0))

    if norm.ndim == 0:
        return float(norm)

    return norm


def quaternion_normalize(quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    This function scales a quaternion to unit length.

    A zero quaternion cannot be normalized and gives ``nan`` components.

    This function is vectorized.

    :param quaternion: The quaternion(s) to normalize
    :return: The unit quaternion(s)
    """

    quaternion = np.asarray(quaternion, dtype=np.float64)

    norm = quaternion_norm(quaternion)

    with np.errstate(invalid='ignore', divide='ignore'):
        scale = 1.0 / np.asarray(norm)

    if not np.isfinite(scale).all():
        _LOGGER.debug('Attempted to normalize a zero length quaternion')

    with np.errstate(invalid='ignore'):
        return quaternion * scale


def is_unit_quaternion(quaternion: ARRAY_LIKE, tolerance: float = 1e-6) -> bool | np.ndarray:
    """
    This function checks whether quaternion(s) are of unit length within a tolerance.

    :param quaternion: The quaternion(s) to check
    :param tolerance: The allowed absolute difference between the norm and 1
    :return: ``True`` where the quaternion is a unit quaternion
    """

    result = np.abs(np.asarray(quaternion_norm(quaternion)) - 1.0) <= tolerance

    if result.ndim == 0:
        return bool(result)

    return result


def quaternion_inverse(quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function provides the inverse of a unit rotation quaternion.

    The inverse of a rotation quaternion is defined such that :math:`\mathbf{q}\otimes\mathbf{q}^{-1}=\mathbf{q}_I`
    where :math:`\mathbf{q}_I=\left[\begin{array}{cccc}0&0&0&1\end{array}\right]^T` is the identity quaternion.  For a
    unit quaternion this corresponds to negating the vector portion of the quaternion.

    .. warning::
        The input must be a unit quaternion.  This is not checked, and for any other input the result is silently not
        the inverse.  Normalize with :func:`quaternion_normalize` first if needed.

    This function is vectorized.

    :param quaternion: The unit rotation quaternion(s) to be inverted
    :return: The inverse quaternion(s)
    """

    # copy to break the mutability of the input
    quaternion = np.array(quaternion, dtype=np.float64)

    _check_quaternion_shape(quaternion)

    quaternion[:3] *= -1

    return quaternion


def quaternion_multiplication(quaternion_1: ARRAY_LIKE, quaternion_2: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function performs the hamiltonian quaternion multiplication operation.

    The multiplication is defined such that
    ``q_from_A_to_C = quaternion_multiplication(q_from_B_to_C, q_from_A_to_B)``, that is the rotation on the right is
    applied first.  Mathematically:

    .. math::
        \mathbf{q}_1\otimes\mathbf{q}_2=\left[\begin{array}{c}q_{s1}\mathbf{q}_{v2} + q_{s2}\mathbf{q}_{v1} +
        \mathbf{q}_{v1}\times\mathbf{q}_{v2}\\
        q_{s1}q_{s2}-\mathbf{q}_{v1}^T\mathbf{q}_{v2}\end{array}\right]

    This function is vectorized.

    :param quaternion_1: The first quaternion(s), applied last
    :param quaternion_2: The second quaternion(s), applied first
    :return: The product of the quaternions
    """

    quaternion_1 = np.asarray(quaternion_1, dtype=np.float64)
    quaternion_2 = np.asarray(quaternion_2, dtype=np.float64)

    _check_quaternion_shape(quaternion_1)
    _check_quaternion_shape(quaternion_2)

    qs1 = quaternion_1[-1]
    qv1 = quaternion_1[:3]

    qs2 = quaternion_2[-1]
    qv2 = quaternion_2[:3]

    return np.concatenate([qs1 * qv2 + qs2 * qv1 + np.cross(qv1, qv2, axis=0),
                           [qs1 * qs2 - (qv1 * qv2).sum(axis=0)]], axis=0)


def skew(vector: ARRAY_LIKE) -> np.ndarray:
    r"""
    This function returns the skew symmetric cross product matrix for a vector.

    .. math::
        \left[\mathbf{a}\times\right] = \left[\begin{array}{ccc} 0 & -a_3 & a_2 \\
        a_3 & 0 & -a_1 \\
        -a_2 & a_1 & 0 \end{array}\right]

    For a :math:`3\times n` input the output is :math:`n\times 3\times 3`.

    :param vector: The vector(s) to compute a skew symmetric matrix for
    :return: The skew symmetric cross product matrix(ces)
    """

    vector = np.asarray(vector, dtype=np.float64)

    if vector.shape[0] != 3:
        raise ValueError('The length of the first axis must be equal to 3')

    zeros = np.zeros(vector.shape[1:])

    matrix = np.array([[zeros, -vector[2], vector[1]],
                       [vector[2], zeros, -vector[0]],
                       [-vector[1], vector[0], zeros]])

    # move the stacking axis (if any) to the front
    return np.moveaxis(matrix, [0, 1], [-2, -1])


def quaternion_to_rotmat(quaternion: ARRAY_LIKE) -> DOUBLE_ARRAY:
    r"""
    This function converts a unit rotation quaternion into its equivalent rotation matrix.

    .. math::
        \mathbf{T} = (q_s^2-\mathbf{q}_v^T\mathbf{q}_v)\mathbf{I}_{3\times 3}+2\mathbf{q}_v\mathbf{q}_v^T+2q_s
        \left[\mathbf{q}_v\times\right]

    where :math:`\mathbf{q}_v` is the vector portion of the quaternion, :math:`q_s` is the scalar portion and
    :math:`\left[\bullet\times\right]` is the skew symmetric cross product matrix (see :func:`skew`).

    For a :math:`4\times n` input the matrices are stacked down the first axis of an :math:`n\times 3\times 3` output.

    :param quaternion: The rotation quaternion(s) to be converted
    :return: The rotation matrix(ces)
    """

    quaternion = np.asarray(quaternion, dtype=np.float64)

    _check_quaternion_shape(quaternion)

    qs = np.asarray(quaternion[-1])[..., np.newaxis, np.newaxis]
    qv = quaternion[:3]

    # outer products with the stacking axis in front
    outer = np.einsum('i...,j...->...ij', qv, qv)

    return ((qs ** 2 - np.asarray((qv * qv).sum(axis=0))[..., np.newaxis, np.newaxis]) * np.eye(3) + 2 * outer +
            2 * qs * skew(qv))


def rotmat_to_quaternion(rotation_matrix: ARRAY_LIKE_2D) -> DOUBLE_ARRAY:
    r"""
    This function converts a rotation matrix into a rotation quaternion with a non-negative scalar part.

    The conversion picks whichever quaternion component has the largest magnitude (determined from the largest of
    :math:`t_{11}`, :math:`t_{22}`, :math:`t_{33}`, and :math:`\text{Tr}(\mathbf{T})`), computes it from the diagonal,
    and computes the other three from the off diagonal sums and differences divided by it.  This is well defined for
    every rotation including 180 degree rotations, where the scalar part is 0.

    For an :math:`n\times 3\times 3` input the quaternions are returned as the columns of a :math:`4\times n` array.

    :param rotation_matrix: The rotation matrix(ces) to convert
    :return: The rotation quaternion(s)
    """

    rotation_matrix = np.asarray(rotation_matrix, dtype=np.float64)

    if rotation_matrix.shape[-2:] != (3, 3) or rotation_matrix.ndim > 3:
        raise ValueError('Invalid Shape')

    t = rotation_matrix.reshape(-1, 3, 3)

    trace = np.trace(t, axis1=-2, axis2=-1)

    # 4 times the square of the chosen component, the max(..., 0) is to avoid rounding errors
    squares = np.maximum(np.stack([1 + 2 * t[:, 0, 0] - trace,
                                   1 + 2 * t[:, 1, 1] - trace,
                                   1 + 2 * t[:, 2, 2] - trace,
                                   1 + trace]), 0)

    largest = 0.5 * np.sqrt(squares)

    # the cases that are not chosen may divide by zero
    with np.errstate(invalid='ignore', divide='ignore'):
        scale = 0.25 / largest

        x_case = np.stack([largest[0],
                           (t[:, 0, 1] + t[:, 1, 0]) * scale[0],
                           (t[:, 0, 2] + t[:, 2, 0]) * scale[0],
                           (t[:, 2, 1] - t[:, 1, 2]) * scale[0]])

        y_case = np.stack([(t[:, 0, 1] + t[:, 1, 0]) * scale[1],
                           largest[1],
                           (t[:, 1, 2] + t[:, 2, 1]) * scale[1],
                           (t[:, 0, 2] - t[:, 2, 0]) * scale[1]])

        z_case = np.stack([(t[:, 0, 2] + t[:, 2, 0]) * scale[2],
                           (t[:, 1, 2] + t[:, 2, 1]) * scale[2],
                           largest[2],
                           (t[:, 1, 0] - t[:, 0, 1]) * scale[2]])

        w_case = np.stack([(t[:, 2, 1] - t[:, 1, 2]) * scale[3],
                           (t[:, 0, 2] - t[:, 2, 0]) * scale[3],
                           (t[:, 1, 0] - t[:, 0, 1]) * scale[3],
                           largest[3]])

    choice = np.stack([t[:, 0, 0], t[:, 1, 1], t[:, 2, 2], trace]).argmax(axis=0)

    columns = np.arange(t.shape[0])

    quaternions = np.stack([x_case, y_case, z_case, w_case])[choice, :, columns].T

    # enforce a non-negative scalar to make the result unique
    quaternions *= np.where(quaternions[-1] < 0, -1.0, 1.0)

    if rotation_matrix.ndim == 2:
        return quaternions[:, 0]

    return quaternions


def rotate_vector(quaternion: ARRAY_LIKE, vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    This function rotates vector(s) by unit rotation quaternion(s).

    Either a single quaternion can be applied to one or more vectors (given as columns), or each column of a
    :math:`4\\times n` quaternion array can be applied to the corresponding column of a :math:`3\\times n` vector array.

    :param quaternion: The unit rotation quaternion(s)
    :param vector: The vector(s) to rotate
    :return: The rotated vector(s)
    """

    matrix = quaternion_to_rotmat(quaternion)
    vector = np.asarray(vector, dtype=np.float64)

    if matrix.ndim == 3:
        return np.einsum('nij,jn->in', matrix, vector)

    return matrix @ vector


def axis_angle_to_quaternion(axis: ARRAY_LIKE, angle: F_SCALAR_OR_ARRAY) -> DOUBLE_ARRAY:
    r"""
    This function forms the rotation quaternion for a right handed rotation by ``angle`` degrees about ``axis``.

    .. math::
        \mathbf{q} = \left[\begin{array}{c} \text{sin}(\frac{\theta}{2})\hat{\mathbf{x}} \\
        \text{cos}(\frac{\theta}{2})\end{array}\right]

    The axis does not need to be of unit length, but it must not be zero.  This function is vectorized over the columns
    of the axis together with the angles.

    :param axis: The rotation axis (or axes)
    :param angle: The rotation angle(s) in degrees
    :return: The rotation quaternion(s)
    """

    axis = unit(axis)

    half_angle = np.radians(np.asarray(angle, dtype=np.float64)) / 2

    return np.concatenate([axis * np.sin(half_angle),
                           np.reshape(np.cos(half_angle), (1,) + axis.shape[1:])], axis=0)


def euler_angles(quaternion: ARRAY_LIKE,
                 order: AxisOrder | AXIS_ORDER_NAMES | str = AxisOrder.YZX) -> DOUBLE_ARRAY:
    r"""
    This function extracts Euler angles in degrees from a unit rotation quaternion using the specified axis order.

    Only :attr:`AxisOrder.YZX` is supported.  For it the returned angles :math:`(e_x, e_y, e_z)` are such that

    .. math::
        \mathbf{T}(\mathbf{q}) = \mathbf{R}_x(e_z)\mathbf{R}_z(e_y)\mathbf{R}_y(e_x)

    that is the rotation is :math:`e_x` about y, followed by :math:`e_y` about z, followed by :math:`e_z` about x.  From
    the elements :math:`t_{ij}` of the rotation matrix (zero based indices):

    .. math::
        e_x = \text{atan2}(t_{02}, t_{00}) \\
        e_y = \text{sin}^{-1}(-t_{01}) \\
        e_z = \text{atan2}(t_{21}, t_{11})

    At gimbal lock (:math:`|t_{01}|` within :data:`GIMBAL_LOCK_TOLERANCE` of 1) :math:`e_y` is snapped to 90 or 270,
    :math:`e_x` is set to 0, and
    :math:`e_z=\text{atan2}(-t_{12}, t_{22})`.  Finally each angle is wrapped into :math:`[0, 360)` using
    :func:`.clamp_angle_degrees`.

    Everything is computed in double precision.

    This function is vectorized.  For a :math:`4\times n` input the output is :math:`3\times n`.

    .. warning::
        The input must be a unit quaternion.  This is not checked.

    :param quaternion: The unit rotation quaternion(s)
    :param order: The Euler angle decomposition to use
    :return: The Euler angles in degrees
    :raises ValueError: If the axis order is not supported
    """

    _interp_axis_order(order)

    # only YZX gets this far
    matrix = quaternion_to_rotmat(quaternion)

    sine_second = np.clip(-matrix[..., 0, 1], -1, 1)

    locked = np.abs(sine_second) >= 1 - GIMBAL_LOCK_TOLERANCE

    first = np.where(locked, 0.0, np.arctan2(matrix[..., 0, 2], matrix[..., 0, 0]))
    second = np.where(locked, np.copysign(np.pi / 2, sine_second), np.arcsin(sine_second))
    third = np.where(locked,
                     np.arctan2(-matrix[..., 1, 2], matrix[..., 2, 2]),
                     np.arctan2(matrix[..., 2, 1], matrix[..., 1, 1]))

    return np.asarray(clamp_angle_degrees(np.degrees(np.stack([first, second, third]))))


def euler_to_pitch_heading_roll(angles: ARRAY_LIKE) -> PitchHeadingRoll:
    """
    This function maps YZX Euler angles :math:`(e_x, e_y, e_z)` in degrees (as returned by :func:`euler_angles`) onto
    the flight attitude angles:

    * heading :math:`= e_z`
    * pitch :math:`= 360 - e_y` if :math:`e_y > 180` else :math:`-e_y`
    * roll :math:`= 270 - e_x` if :math:`e_x \\geq 90` else :math:`-90 - e_x`

    Note the strict comparison for pitch and the non strict one for roll, which decide the branch taken for values
    exactly on the boundary.

    This function is vectorized.  For a :math:`3\\times n` input each element of the output is a length :math:`n` array.

    :param angles: The YZX Euler angles in degrees, wrapped into :math:`[0, 360)`
    :return: The pitch, heading, and roll angles in degrees
    """

    ex, ey, ez = np.asarray(angles, dtype=np.float64)

    pitch = np.where(ey > 180.0, 360.0 - ey, -ey)
    heading = ez
    roll = np.where(ex >= 90.0, 270.0 - ex, -90.0 - ex)

    if np.ndim(heading) == 0:
        return PitchHeadingRoll(float(pitch), float(heading), float(roll))

    return PitchHeadingRoll(pitch, heading, roll)


def pitch_heading_roll(quaternion: ARRAY_LIKE) -> PitchHeadingRoll:
    """
    This function computes the pitch, heading, and roll angles in degrees of a unit rotation quaternion.

    The quaternion is decomposed with :func:`euler_angles` using :attr:`AxisOrder.YZX` and the result is mapped with
    :func:`euler_to_pitch_heading_roll`.  Heading is the rotation about x, pitch the rotation about z, and roll the
    rotation about y.

    This function is vectorized.

    .. warning::
        The input must be a unit quaternion.  This is not checked.

    :param quaternion: The unit rotation quaternion(s)
    :return: The pitch, heading, and roll angles in degrees
    """

    return euler_to_pitch_heading_roll(euler_angles(quaternion, AxisOrder.YZX))


def look_rotation(forward: ARRAY_LIKE, up: ARRAY_LIKE, robust: bool = False) -> DOUBLE_ARRAY:
    r"""
    This function builds the rotation quaternion that points the local +z axis along ``forward`` and the local +y axis
    as close to ``up`` as possible.

    The two directions are first made into an orthonormal pair using :func:`.ortho_normalize` (keeping ``forward``) and
    the third axis is :math:`\mathbf{r}=\mathbf{u}\times\mathbf{f}`.  The quaternion is then computed in closed form
    from the rotation matrix :math:`[\mathbf{r}\ \mathbf{u}\ \mathbf{f}]`:

    .. math::
        q_w = \frac{1}{2}\sqrt{1 + r_x + u_y + f_z} \\
        q_x = \frac{u_z - f_y}{4q_w} \quad
        q_y = \frac{f_x - r_z}{4q_w} \quad
        q_z = \frac{r_y - u_x}{4q_w}

    The closed form breaks down when the rotation is close to 180 degrees (the radicand approaches or drops below 0)
    and the result is then ``nan``.  Set ``robust`` to ``True`` to instead convert the matrix with
    :func:`rotmat_to_quaternion`, which handles every rotation.  Where the closed form is defined both give the same
    quaternion.

    This function is vectorized along the first axis.

    .. warning::
        ``forward`` and ``up`` must not be parallel.  This is not checked and gives ``nan``.

    :param forward: The direction(s) for the local +z axis
    :param up: The reference direction(s) for the local +y axis
    :param robust: Use the general matrix conversion instead of the closed form
    :return: The rotation quaternion(s)
    """

    forward, up = ortho_normalize(forward, up)

    right = cross(up, forward)

    if robust:
        basis = np.stack([right, up, forward], axis=1)

        if basis.ndim == 3:
            basis = basis.transpose(2, 0, 1)

        return rotmat_to_quaternion(basis)

    with np.errstate(invalid='ignore', divide='ignore'):
        w = np.sqrt(1.0 + right[0] + up[1] + forward[2]) * 0.5
        r = 0.25 / w

        x = (up[2] - forward[1]) * r
        y = (forward[0] - right[2]) * r
        z = (right[1] - up[0]) * r

    quaternion = np.stack([x, y, z, w])

    if not np.isfinite(quaternion).all():
        _LOGGER.debug('The look rotation is undefined for these directions.  Consider robust=True')

    return quaternion
