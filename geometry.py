# geometry.py
"""
Geometric primitives for 2D ray casting against circles.

The hot paths (single circle intersection and the nearest-hit scan over
all circles in the scene) are Numba-jitted free functions, kept outside
of any class for Numba compatibility. Thin Python wrappers expose them
with NumPy vectors.
"""
import math
import numpy as np
from typing import Optional, Tuple
from numba import jit

from constants import RAY_EPSILON

# --- Data Contracts ---
#
# intersect(origin, direction, length, center, radius) -> Optional[float]:
#   - Inputs:
#     - origin, direction: array-likes of shape (2,). direction need not
#       be unit length, but must be non-zero.
#     - length: float, the maximum distance the ray travels.
#     - center, radius: the circle. radius > 0.
#   - Outputs: The distance t along the ray to the near intersection,
#     or None when the ray misses, the near root is behind the origin
#     (or within RAY_EPSILON of it), or t exceeds length.
#
# reflect(direction, normal) -> np.ndarray:
#   - Outputs: direction - 2 * dot(direction, normal) * normal.
#   - Invariants: dot(result, normal) == -dot(direction, normal) for a
#     unit normal.
#
# nearest_hit(origin, direction, length, centers, radii) -> Tuple[float, int]:
#   - Inputs: centers of shape (N, 2), radii of shape (N,).
#   - Outputs: (t, index) of the closest circle hit, or (length, -1)
#     when nothing is hit.


@jit(nopython=True)
def _intersect_circle_numba(ox, oy, dx, dy, length, cx, cy, radius, epsilon):
    """
    Solves |o + t*d - c|^2 = r^2 for the near root.

    Returns -1.0 when there is no usable intersection.
    """
    to_x = cx - ox
    to_y = cy - oy
    a = dx * dx + dy * dy
    b = -2.0 * (to_x * dx + to_y * dy)
    c = to_x * to_x + to_y * to_y - radius * radius

    discriminant = b * b - 4.0 * a * c
    if discriminant < 0.0:
        return -1.0

    t = (-b - math.sqrt(discriminant)) / (2.0 * a)
    if t < epsilon or t > length:
        return -1.0
    return t


@jit(nopython=True)
def _nearest_hit_numba(ox, oy, dx, dy, length, centers, radii, epsilon):
    """
    Linear scan for the closest circle along a ray.

    No spatial index is used; scenes hold at most a few dozen circles.
    """
    best_t = length
    best_index = -1
    for i in range(radii.shape[0]):
        t = _intersect_circle_numba(
            ox, oy, dx, dy, length, centers[i, 0], centers[i, 1], radii[i], epsilon
        )
        if t >= 0.0 and (best_index == -1 or t < best_t):
            best_t = t
            best_index = i
    return best_t, best_index


def intersect(origin, direction, length: float, center, radius: float) -> Optional[float]:
    """Returns the hit distance of a ray against a circle, or None."""
    if radius <= 0:
        raise ValueError(f"Circle radius must be positive, got {radius}.")
    t = _intersect_circle_numba(
        float(origin[0]), float(origin[1]),
        float(direction[0]), float(direction[1]),
        float(length),
        float(center[0]), float(center[1]),
        float(radius), RAY_EPSILON
    )
    return None if t < 0.0 else t


def nearest_hit(origin, direction, length: float,
                centers: np.ndarray, radii: np.ndarray) -> Tuple[float, int]:
    """Finds the closest circle a ray strikes within its length."""
    return _nearest_hit_numba(
        float(origin[0]), float(origin[1]),
        float(direction[0]), float(direction[1]),
        float(length), centers, radii, RAY_EPSILON
    )


def reflect(direction, normal) -> np.ndarray:
    """Mirrors a direction about a unit surface normal."""
    d = np.asarray(direction, dtype=np.float64)
    n = np.asarray(normal, dtype=np.float64)
    if not np.any(d):
        raise ValueError("Cannot reflect a zero-length direction.")
    return d - 2.0 * np.dot(d, n) * n


def outward_normal(center, point) -> np.ndarray:
    """Unit vector from a circle's center through a point on its boundary."""
    offset = np.asarray(point, dtype=np.float64) - np.asarray(center, dtype=np.float64)
    return offset / np.linalg.norm(offset)
