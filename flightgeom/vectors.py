# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


r"""
This module provides element-wise helpers and basic linear algebra for 3 element vectors.

Vectors are represented as numpy arrays of the form :math:`[x, y, z]` in double precision.  Most of the functions in
this module are vectorized along the first axis, meaning that you can specify multiple vectors as the columns of a
:math:`3\times n` array.  The exceptions are the tuple conversions (:func:`to_tuple`, :func:`to_vector`,
:func:`to_quaternion`) which exist to exchange single values with callers that do not use numpy, and
:func:`round_vector` which works on single precision vectors.

None of the functions in this module raise on degenerate numeric input.  Division by zero and invalid operations
propagate as ``inf``/``nan`` values in the result following IEEE floating point semantics.
"""

import logging

import numpy as np

from flightgeom._typing import ARRAY_LIKE, DOUBLE_ARRAY, SINGLE_ARRAY, TUPLE3, TUPLE4, Real
from flightgeom.angles import normalize_angle


_LOGGER: logging.Logger = logging.getLogger(__name__)


def to_tuple(data: ARRAY_LIKE) -> TUPLE3 | TUPLE4:
    """
    This function converts a vector or a quaternion into a tuple of python floats.

    The order of the components is kept, so vectors become ``(x, y, z)`` and quaternions become ``(x, y, z, w)``.  The
    conversion is lossless.

    :param data: The length 3 vector or length 4 quaternion to convert
    :return: The components as a tuple of floats
    :raises ValueError: If the input is not a 1D array of length 3 or 4
    """

    data = np.asarray(data)

    if data.shape not in ((3,), (4,)):
        raise ValueError('Only 3 element vectors and 4 element quaternions can be converted to a tuple. '
                         'Got shape {}'.format(data.shape))

    return tuple(float(component) for component in data)


def to_vector(data: TUPLE3 | ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    This function converts a 3 element tuple ``(x, y, z)`` into a double precision vector.

    :param data: The 3 element tuple
    :return: The vector as a numpy array
    :raises ValueError: If the input does not have exactly 3 elements
    """

    vector = np.array(data, dtype=np.float64)

    if vector.shape != (3,):
        raise ValueError('A vector must have exactly 3 elements. Got shape {}'.format(vector.shape))

    return vector


def to_quaternion(data: TUPLE4 | ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    This function converts a 4 element tuple ``(x, y, z, w)`` into a double precision quaternion.

    :param data: The 4 element tuple
    :return: The quaternion as a numpy array
    :raises ValueError: If the input does not have exactly 4 elements
    """

    quaternion = np.array(data, dtype=np.float64)

    if quaternion.shape != (4,):
        raise ValueError('A quaternion must have exactly 4 elements. Got shape {}'.format(quaternion.shape))

    return quaternion


def sign(vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Compute the sign of each element of a vector (-1, 0, or 1).

    :param vector: The vector(s)
    :return: The element-wise sign
    """

    return np.sign(np.asarray(vector, dtype=np.float64))


def power(vector: ARRAY_LIKE, exponent: Real) -> DOUBLE_ARRAY:
    """
    Raise each element of a vector to the given exponent.

    A negative element raised to a non-integer exponent gives ``nan`` for that element.

    :param vector: The vector(s)
    :param exponent: The exponent to raise each element to
    :return: The element-wise power
    """

    with np.errstate(invalid='ignore', divide='ignore'):
        return np.power(np.asarray(vector, dtype=np.float64), exponent)


def vector_inverse(vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Compute the element-wise reciprocal of a vector.

    Zero elements give a signed infinity.

    :param vector: The vector(s)
    :return: ``1/x`` for each element ``x``
    """

    with np.errstate(divide='ignore'):
        return 1.0 / np.asarray(vector, dtype=np.float64)


def reduce_angles(vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Apply :func:`.normalize_angle` to each element of a vector of angles in degrees.

    :param vector: The vector(s) of angles in degrees
    :return: The angles wrapped into :math:`(-180, 180]`
    """

    return np.asarray(normalize_angle(np.asarray(vector, dtype=np.float64)))


def round_vector(vector: ARRAY_LIKE, decimal_places: int) -> SINGLE_ARRAY:
    """
    Round each element of a single precision vector to the given number of decimal places.

    The rounding is performed in double precision using round half to even and the result is narrowed back to single
    precision.

    :param vector: The single precision vector(s)
    :param decimal_places: The number of decimal places to keep
    :return: The rounded single precision vector(s)
    """

    single = np.asarray(vector, dtype=np.float32)

    return np.round(single.astype(np.float64), decimal_places).astype(np.float32)


def dot(vector_1: ARRAY_LIKE, vector_2: ARRAY_LIKE) -> float | DOUBLE_ARRAY:
    """
    Compute the dot product of vectors stored down the first axis.

    :param vector_1: The first vector(s)
    :param vector_2: The second vector(s)
    :return: The dot product(s)
    """

    return (np.asarray(vector_1, dtype=np.float64) * np.asarray(vector_2, dtype=np.float64)).sum(axis=0)


def cross(vector_1: ARRAY_LIKE, vector_2: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Compute the right handed cross product of vectors stored down the first axis.

    :param vector_1: The first vector(s)
    :param vector_2: The second vector(s)
    :return: ``vector_1 x vector_2``
    """

    return np.cross(np.asarray(vector_1, dtype=np.float64), np.asarray(vector_2, dtype=np.float64), axis=0)


def vector_norm(vector: ARRAY_LIKE) -> float | DOUBLE_ARRAY:
    """
    Compute the euclidean length of vectors stored down the first axis.

    :param vector: The vector(s)
    :return: The length(s)
    """

    return np.linalg.norm(np.asarray(vector, dtype=np.float64), axis=0)


def unit(vector: ARRAY_LIKE) -> DOUBLE_ARRAY:
    """
    Scale vectors stored down the first axis to unit length.

    A zero vector gives ``nan`` elements.

    :param vector: The vector(s) to normalize
    :return: The unit vector(s)
    """

    vector = np.asarray(vector, dtype=np.float64)

    with np.errstate(invalid='ignore', divide='ignore'):
        return vector / vector_norm(vector)


def ortho_normalize(normal: ARRAY_LIKE, tangent: ARRAY_LIKE) -> tuple[DOUBLE_ARRAY, DOUBLE_ARRAY]:
    r"""
    This function makes two vectors unit length and orthogonal to each other using stabilized Gram-Schmidt.

    The normal vector keeps its direction and the tangent vector is rotated in the plane of the two vectors until it is
    perpendicular to the normal:

    .. math::
        \hat{\mathbf{n}} = \frac{\mathbf{n}}{\left\|\mathbf{n}\right\|} \\
        \hat{\mathbf{t}}' = \frac{\mathbf{t}}{\left\|\mathbf{t}\right\|} \\
        \mathbf{t}'' = \hat{\mathbf{t}}' - \hat{\mathbf{n}}(\hat{\mathbf{t}}'^T\hat{\mathbf{n}}) \\
        \hat{\mathbf{t}} = \frac{\mathbf{t}''}{\left\|\mathbf{t}''\right\|}

    The tangent is normalized before the projection is removed.  This keeps the projection well scaled when the tangent
    is much longer or shorter than the normal.

    The inputs are not modified.  This function is vectorized along the first axis.

    .. warning::
        If the normal and tangent are parallel (or either is zero) the projection removes the entire tangent and the
        resulting tangent is ``nan``.  This is not checked for; make sure the inputs are not parallel.

    :param normal: The normal vector(s), whose direction is kept
    :param tangent: The tangent vector(s), made perpendicular to the normal
    :return: The unit normal and unit tangent
    """

    normal = unit(normal)

    tangent = unit(tangent)

    projection = normal * dot(tangent, normal)

    tangent = unit(tangent - projection)

    if not np.isfinite(tangent).all():
        _LOGGER.debug('Parallel or zero normal and tangent vectors.  The orthonormalized tangent is not finite')

    return normal, tangent
