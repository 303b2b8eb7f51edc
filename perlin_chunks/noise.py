# perlin_chunks/noise.py

"""
================================================================================
CHUNK INTERPOLATION KERNELS
================================================================================
This module turns the four corner influences of one octave chunk into a grid
of vector values. It is designed to be a pure, stateless utility.

Data Contract:
---------------
- Inputs:
    - corners: Four DirectedInfluence values in CornerMask order. All corner
      vectors must share one dimension.
    - geometry: The OctaveGeometry of the chunk's octave.
- Outputs:
    - A float array (size, size, dim) indexed [x, y, component].
- Side Effects: None.
- Invariants:
    - Blending uses the quintic smoothstep 6t^5 - 15t^4 + 10t^3, whose first
      and second derivatives vanish at t=0 and t=1. At a chunk edge only the
      two corners on that edge contribute, so neighbouring chunks meet
      continuously and differentiably.
    - Each output component is at most sqrt(1/2) times the largest corner
      vector norm in magnitude.
================================================================================
"""

import numpy as np
from numba import njit

from .exceptions import DimensionMismatchError
from .octave import CornerMask, OctaveGeometry


@njit
def _lerp(a, b, x):
    "Linear interpolation, exact at both ends."
    return (1.0 - x) * a + x * b


@njit
def _fade(t):
    "6t^5 - 15t^4 + 10t^3"
    return t * t * t * (t * (t * 6 - 15) + 10)


@njit
def _interpolate_chunk(distance_vectors, fractions, directions, influences):
    """
    Dot-products every pixel's distance vector with each corner direction,
    scales the corner vectors by the results, then lerps the top and bottom
    masks horizontally and the two rows vertically.
    This function is JIT-compiled with Numba and uses explicit loops.
    """
    size = fractions.shape[0]
    dim = influences.shape[1]
    out = np.zeros((size, size, dim))

    for x in range(size):
        u = _fade(fractions[x])
        for y in range(size):
            v = _fade(fractions[y])

            d_tl = distance_vectors[0, x, y, 0] * directions[0, 0] + distance_vectors[0, x, y, 1] * directions[0, 1]
            d_tr = distance_vectors[1, x, y, 0] * directions[1, 0] + distance_vectors[1, x, y, 1] * directions[1, 1]
            d_bl = distance_vectors[2, x, y, 0] * directions[2, 0] + distance_vectors[2, x, y, 1] * directions[2, 1]
            d_br = distance_vectors[3, x, y, 0] * directions[3, 0] + distance_vectors[3, x, y, 1] * directions[3, 1]

            for k in range(dim):
                top = _lerp(d_tl * influences[0, k], d_tr * influences[1, k], u)
                bottom = _lerp(d_bl * influences[2, k], d_br * influences[3, k], u)
                out[x, y, k] = _lerp(top, bottom, v)

    return out


@njit
def _interpolate_point(directions, influences, px, py):
    """The same blend as _interpolate_chunk, at one point of the unit chunk."""
    dim = influences.shape[1]
    out = np.zeros(dim)
    u = _fade(px)
    v = _fade(py)

    d_tl = px * directions[0, 0] + py * directions[0, 1]
    d_tr = (px - 1.0) * directions[1, 0] + py * directions[1, 1]
    d_bl = px * directions[2, 0] + (py - 1.0) * directions[2, 1]
    d_br = (px - 1.0) * directions[3, 0] + (py - 1.0) * directions[3, 1]

    for k in range(dim):
        top = _lerp(d_tl * influences[0, k], d_tr * influences[1, k], u)
        bottom = _lerp(d_bl * influences[2, k], d_br * influences[3, k], u)
        out[k] = _lerp(top, bottom, v)
    return out


def smoothstep(t):
    """Quintic smoothstep; works on floats and NumPy arrays."""
    return _fade(t)


def corner_arrays(corners) -> tuple[np.ndarray, np.ndarray]:
    """
    Packs four DirectedInfluence values into the (4, 2) direction array and
    the (4, dim) influence array the kernels expect.
    """
    if len(corners) != len(CornerMask):
        raise ValueError(f"Expected {len(CornerMask)} corners, got {len(corners)}")
    dim = corners[0].vector.size
    for corner in corners[1:]:
        if corner.vector.size != dim:
            raise DimensionMismatchError(dim, corner.vector.size)

    directions = np.ascontiguousarray([c.direction for c in corners], dtype=np.float64)
    influences = np.ascontiguousarray([c.vector.components for c in corners], dtype=np.float64)
    return directions, influences


def interpolate_chunk(corners, geometry: OctaveGeometry) -> np.ndarray:
    """Generates the (size, size, dim) value grid of one octave chunk."""
    directions, influences = corner_arrays(corners)
    return _interpolate_chunk(geometry.distance_vectors, geometry.fractions, directions, influences)


def interpolate_at(corners, u: float, v: float):
    """
    Evaluates the chunk blend at (u, v) in the closed unit square and returns
    a value of the corners' vector type.
    """
    directions, influences = corner_arrays(corners)
    components = _interpolate_point(directions, influences, float(u), float(v))
    return type(corners[0].vector).from_components(components)
