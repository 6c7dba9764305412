"""Numeric tolerances shared across the engine.

Two tolerances are used, each for one purpose only:

    EPSILON: float equality (tuples, matrices, colors) and the parallelism
        tests of the intersection routines.
    SURFACE_OFFSET: distance a hit point is nudged along the normal to build
        the over/under points used by shadow, reflection and refraction rays.
"""

EPSILON = 1e-5

SURFACE_OFFSET = 1e-4


def approx_equal(a: float, b: float, epsilon: float = EPSILON) -> bool:
    """Compare two floats within ``epsilon``.

    Infinite values compare equal only to themselves.
    """
    if a == b:
        return True
    return abs(a - b) < epsilon
