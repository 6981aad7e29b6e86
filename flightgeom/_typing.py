# Copyright 2021 United States Government as represented by the Administrator of the National Aeronautics and Space
# Administration.  No copyright is claimed in the United States under Title 17, U.S. Code. All Other Rights Reserved.


from typing import Union, Literal

import numpy as np
import numpy.typing as npt

DOUBLE_ARRAY = npt.NDArray[np.float64]
SINGLE_ARRAY = npt.NDArray[np.float32]
ARRAY_LIKE = npt.ArrayLike
ARRAY_LIKE_2D = npt.ArrayLike
SCALAR_OR_ARRAY = Union[float, npt.ArrayLike]
F_SCALAR_OR_ARRAY = Union[float, DOUBLE_ARRAY]

Real = Union[int, float]

TUPLE3 = tuple[float, float, float]
TUPLE4 = tuple[float, float, float, float]

AXIS_ORDER_NAMES = Literal['yzx', 'YZX']
