"""
evendist samples integer points inside square and circular rings,
either spread evenly over the area or clustered around a radius.
"""

import jax

# Radii are integers up to 2**31 - 1, which float32 cannot carry exactly
jax.config.update("jax_enable_x64", True)

from evendist.entropy import KeyStream, seed_thread_stream, thread_stream
from evendist.locating import CircleRing, Ring, Shape, SquareRing
from evendist.matrix import ROTATIONS_0_90_180_270, multiply
from evendist.sampling import (
    DistributionUnsatisfiable,
    InvalidParameter,
    bounded_gaussian,
    circle_biased,
    circle_sample,
    circle_uniform,
    square_biased,
    square_uniform,
)

__version__ = "0.1.0"
