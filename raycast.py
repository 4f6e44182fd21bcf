# raycast.py
"""
Ray cascade engine.

Each simulation tick the light emits a uniform fan of primary rays. Every
ray is traced to the nearest circle it strikes; when reflections are
enabled a struck ray spawns a shorter reflected child, which is traced the
same way, until MAX_REFLECTIONS bounces. Pending rays are kept on an
explicit stack rather than recursing. Nothing here survives the tick: the
result is a flat list of segments for the renderer.
"""
import math
from typing import List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

from constants import (
    MAX_RAY_LENGTH, MAX_REFLECTIONS, REFLECTION_LENGTH_FACTOR,
    REFLECTION_LENGTH_DECAY, RAY_PALETTE
)
from entities import Color, Entity
from geometry import nearest_hit, outward_normal, reflect

# --- Data Contracts ---
#
# class RayCascade:
#   - emit(self, origin, ray_count) -> List[Ray]:
#     - Outputs: ray_count primary rays at angles 2*pi*i/ray_count, each
#       with length MAX_RAY_LENGTH, the primary palette color and
#       reflection_count 0.
#
#   - cast(self, origin, ray_count, targets, reflections_enabled)
#       -> CascadeResult:
#     - Inputs:
#       - origin: the light source center.
#       - targets: the entities rays can strike (main object, obstacles).
#       - reflections_enabled: when False no reflected ray is created.
#     - Outputs: primary segments in emission order and reflected
#       segments in stack (depth-first) order.
#     - Invariants: every segment has 0 <= reflection_count <=
#       max_reflections; a segment never extends past its ray's length.


class Ray:
    """A ray in flight during one tick."""
    __slots__ = ("origin", "direction", "length", "color", "reflection_count", "is_reflected")

    def __init__(self, origin: np.ndarray, direction: np.ndarray, length: float,
                 color: Color, reflection_count: int = 0):
        self.origin = origin
        self.direction = direction
        self.length = length
        self.color = color
        self.reflection_count = reflection_count
        self.is_reflected = reflection_count > 0

    def point_at(self, t: float) -> np.ndarray:
        return self.origin + self.direction * t


class RaySegment(NamedTuple):
    start: Tuple[float, float]
    end: Tuple[float, float]
    color: Color
    reflection_count: int

    @property
    def is_reflected(self) -> bool:
        return self.reflection_count > 0


class CascadeResult(NamedTuple):
    primary: List[RaySegment]
    reflected: List[RaySegment]

    @property
    def segments(self) -> List[RaySegment]:
        return self.primary + self.reflected

    @property
    def max_depth(self) -> int:
        return max((s.reflection_count for s in self.reflected), default=0)


def ray_color(reflection_count: int) -> Color:
    """Palette tier for a bounce count; deep bounces reuse the last tier."""
    return RAY_PALETTE[min(reflection_count, len(RAY_PALETTE) - 1)]


def reflected_length(reflection_count: int, max_length: float = MAX_RAY_LENGTH,
                     length_factor: float = REFLECTION_LENGTH_FACTOR) -> float:
    return max_length * length_factor * REFLECTION_LENGTH_DECAY ** (reflection_count - 1)


def _pack_targets(targets: Sequence[Entity]) -> Tuple[np.ndarray, np.ndarray]:
    """Flattens entity geometry into the arrays the hit kernel consumes."""
    centers = np.empty((len(targets), 2), dtype=np.float64)
    radii = np.empty(len(targets), dtype=np.float64)
    for i, entity in enumerate(targets):
        centers[i] = entity.position
        radii[i] = entity.radius
    return centers, radii


class RayCascade:
    """
    Traces primary rays and their reflections against circular targets.
    """

    def __init__(self, max_ray_length: float = MAX_RAY_LENGTH,
                 max_reflections: int = MAX_REFLECTIONS,
                 reflection_length_factor: float = REFLECTION_LENGTH_FACTOR):
        self.max_ray_length = max_ray_length
        self.max_reflections = max_reflections
        self.reflection_length_factor = reflection_length_factor

    def emit(self, origin: Sequence[float], ray_count: int) -> List[Ray]:
        origin = np.asarray(origin, dtype=np.float64)
        rays = []
        for i in range(ray_count):
            angle = 2.0 * math.pi * i / ray_count
            direction = np.array([math.cos(angle), math.sin(angle)])
            rays.append(Ray(origin.copy(), direction, self.max_ray_length, ray_color(0)))
        return rays

    def _trace(self, ray: Ray, centers: np.ndarray, radii: np.ndarray) -> Tuple[RaySegment, Optional[int], np.ndarray]:
        t, index = nearest_hit(ray.origin, ray.direction, ray.length, centers, radii)
        end = ray.point_at(t)
        segment = RaySegment(
            (float(ray.origin[0]), float(ray.origin[1])),
            (float(end[0]), float(end[1])),
            ray.color,
            ray.reflection_count
        )
        return segment, (index if index >= 0 else None), end

    def _spawn_reflection(self, parent: Ray, hit_point: np.ndarray, center: np.ndarray) -> Ray:
        normal = outward_normal(center, hit_point)
        count = parent.reflection_count + 1
        return Ray(
            hit_point,
            reflect(parent.direction, normal),
            reflected_length(count, self.max_ray_length, self.reflection_length_factor),
            ray_color(count),
            count
        )

    def cast(self, origin: Sequence[float], ray_count: int, targets: Sequence[Entity],
             reflections_enabled: bool = True) -> CascadeResult:
        centers, radii = _pack_targets(targets)
        primary: List[RaySegment] = []
        reflected: List[RaySegment] = []
        pending: List[Ray] = []

        for ray in self.emit(origin, ray_count):
            segment, hit_index, hit_point = self._trace(ray, centers, radii)
            primary.append(segment)
            if reflections_enabled and hit_index is not None and ray.reflection_count < self.max_reflections:
                pending.append(self._spawn_reflection(ray, hit_point, centers[hit_index]))

        while pending:
            ray = pending.pop()
            segment, hit_index, hit_point = self._trace(ray, centers, radii)
            reflected.append(segment)
            if hit_index is not None and ray.reflection_count < self.max_reflections:
                pending.append(self._spawn_reflection(ray, hit_point, centers[hit_index]))

        return CascadeResult(primary, reflected)
