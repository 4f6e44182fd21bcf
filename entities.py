# entities.py
"""
Circular entities that populate the scene.

An Entity is a tagged variant: the light source, the main object and the
obstacles share position, radius, color and the collision test, and differ
only in how the scene and the renderer treat them, which is decided by
their EntityKind rather than by subclassing.
"""
import logging
from enum import Enum
from typing import Sequence, Tuple

import numpy as np

# --- Data Contracts ---
#
# class Entity:
#   - __init__(self, kind: EntityKind, position, radius: float, color):
#     - Inputs:
#       - kind: which variant this entity is.
#       - position: array-like of shape (2,), scene coordinates
#         (origin at screen center, Y up).
#       - radius: float, strictly positive.
#       - color: RGB float triple in [0, 1].
#     - Side Effects: Stores the position as a float64 array of shape (2,).
#     - Invariants: radius > 0 for the lifetime of the entity.
#
#   - collides_with(self, other: Entity) -> bool:
#     - True when the circles overlap (center distance < sum of radii).
#
#   - contains_point(self, point) -> bool:
#     - True when the point lies strictly inside the circle.

Color = Tuple[float, float, float]


class EntityKind(Enum):
    LIGHT_SOURCE = "light_source"
    MAIN_OBJECT = "main_object"
    OBSTACLE = "obstacle"


class Entity:
    """A circle with a position, radius, color and a dragging flag."""

    def __init__(self, kind: EntityKind, position: Sequence[float], radius: float, color: Color):
        if radius <= 0:
            msg = f"Entity radius must be positive, got {radius} for {kind.value}."
            logging.critical(msg)
            raise ValueError(msg)
        self.kind = kind
        self._position = np.array(position, dtype=np.float64)
        self.radius = float(radius)
        self.color = tuple(float(c) for c in color)
        self.dragging = False

    @property
    def position(self) -> np.ndarray:
        return self._position

    @position.setter
    def position(self, value: Sequence[float]) -> None:
        self._position = np.array(value, dtype=np.float64)

    def distance_to(self, point: Sequence[float]) -> float:
        return float(np.linalg.norm(self._position - np.asarray(point, dtype=np.float64)))

    def collides_with(self, other: "Entity") -> bool:
        return self.distance_to(other.position) < (self.radius + other.radius)

    def contains_point(self, point: Sequence[float]) -> bool:
        return self.distance_to(point) < self.radius

    def clamp_to_bounds(self, width: float, height: float) -> None:
        """Keeps the whole circle inside a screen centered on the origin."""
        half_w = width / 2.0
        half_h = height / 2.0
        x = min(max(self._position[0], -half_w + self.radius), half_w - self.radius)
        y = min(max(self._position[1], -half_h + self.radius), half_h - self.radius)
        self._position = np.array([x, y], dtype=np.float64)

    def __repr__(self) -> str:
        return (
            f"Entity({self.kind.value}, position=({self._position[0]:.1f}, "
            f"{self._position[1]:.1f}), radius={self.radius:.1f})"
        )
