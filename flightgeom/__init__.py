# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


"""
flightgeom provides the vector and quaternion geometry used to express a spacecraft orientation as flight attitude
angles and to build orientations from facing directions.

* :mod:`flightgeom.angles` wraps angles and clamps values.
* :mod:`flightgeom.vectors` holds element-wise vector helpers, the tuple conversions, and Gram-Schmidt
  orthonormalization.
* :mod:`flightgeom.rotations` holds the quaternion operations, the Euler and pitch/heading/roll extraction, and the look
  rotation.
* :mod:`flightgeom.attitude` provides a configurable front end that checks quaternions before converting them.
"""

from flightgeom.angles import normalize_angle, clamp_angle_degrees, clamp
from flightgeom.vectors import (to_tuple, to_vector, to_quaternion, sign, power, vector_inverse, reduce_angles,
                                round_vector, ortho_normalize)
from flightgeom.rotations import (AxisOrder, PitchHeadingRoll, quaternion_norm, quaternion_normalize,
                                  quaternion_inverse, quaternion_multiplication, euler_angles, pitch_heading_roll,
                                  look_rotation)
from flightgeom.attitude import AttitudeConverter, AttitudeConverterOptions, UnitQuaternionCheck


__version__ = '1.0.0'
