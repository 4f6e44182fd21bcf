# placement.py
"""
Constrained placement of circular entities.

This module owns the validity predicate shared by obstacle scattering and
the light's autonomous motion, the description of the reserved control
panel rectangle, and the seeded rejection sampler that scatters obstacles.
"""
import logging
from typing import Iterable, List, NamedTuple, Optional, Tuple, TYPE_CHECKING

import numpy as np

from constants import (
    CONTROLS_WIDTH, CONTROLS_HEIGHT, CONTROLS_MARGIN, OBSTACLE_RADIUS,
    OBSTACLE_GRAY_RANGE, SCATTER_EDGE_MARGIN, SCATTER_MAX_ATTEMPTS,
    SCATTER_SEED_MULTIPLIER, OBSTACLE_CLEARANCE_TO_LIGHT,
    OBSTACLE_CLEARANCE_TO_MAIN, OBSTACLE_CLEARANCE_TO_OBSTACLE,
    OBSTACLE_EDGE_PADDING, LIGHT_PROBE_CLEARANCE, LIGHT_PROBE_EDGE_PADDING
)
from entities import Entity, EntityKind

# Forward reference for type hinting to avoid circular import
if TYPE_CHECKING:
    from scene import Scene

# --- Data Contracts ---
#
# check_valid_position(scene, position, radius, is_light_source=False,
#                      obstacles=None) -> bool:
#   - Inputs:
#     - scene: the Scene whose light source, main object, obstacles and
#       screen bounds are checked against.
#     - position: candidate center, array-like of shape (2,).
#     - radius: radius of the entity that would be placed there.
#     - is_light_source: selects the tight clearance policy used when
#       probing for the light source itself. The light never collides
#       with itself, so the light check is skipped for such probes.
#     - obstacles: optional replacement for scene.obstacles, used while a
#       new obstacle set is still being built.
#   - Outputs: False if any center distance is below
#     radius + other.radius + clearance, or if the candidate lies outside
#     the screen minus radius + edge padding. True otherwise.
#
# class ObstacleScatterer:
#   - scatter(self, scene, count) -> List[Entity]:
#     - Side Effects: Increments the call counter that seeds the RNG.
#     - Outputs: Up to `count` new obstacles. Under-fill is allowed when
#       the attempt budget runs out; overlap never is.
#     - Invariants: Two scatterers with equal call counts produce the same
#       obstacles for the same scene state.


class ClearancePolicy(NamedTuple):
    """Minimum surface gaps required by one kind of placement probe."""
    to_light: float
    to_main: float
    to_obstacle: float
    edge_padding: float


OBSTACLE_PROBE = ClearancePolicy(
    OBSTACLE_CLEARANCE_TO_LIGHT, OBSTACLE_CLEARANCE_TO_MAIN,
    OBSTACLE_CLEARANCE_TO_OBSTACLE, OBSTACLE_EDGE_PADDING
)
LIGHT_PROBE = ClearancePolicy(
    LIGHT_PROBE_CLEARANCE, LIGHT_PROBE_CLEARANCE,
    LIGHT_PROBE_CLEARANCE, LIGHT_PROBE_EDGE_PADDING
)


class ReservedRegion:
    """
    The screen rectangle occupied by the control panel.

    The rectangle is anchored at the bottom-right corner of the screen and
    extends `margin` further towards the scene on both inner sides.
    """

    def __init__(self, width: float = CONTROLS_WIDTH, height: float = CONTROLS_HEIGHT,
                 margin: float = CONTROLS_MARGIN):
        self.width = width
        self.height = height
        self.margin = margin

    def x_min(self, screen_width: float) -> float:
        return screen_width / 2.0 - self.width - self.margin

    def y_max(self, screen_height: float) -> float:
        return -screen_height / 2.0 + self.height + self.margin

    def contains(self, position, screen_width: float, screen_height: float) -> bool:
        return (position[0] > self.x_min(screen_width)
                and position[1] < self.y_max(screen_height))

    def screen_rect(self, screen_width: float, screen_height: float) -> Tuple[float, float, float, float]:
        """Panel rectangle (left, top, width, height) in top-left pixel coordinates."""
        left = screen_width - self.width - self.margin
        top = screen_height - self.height - self.margin
        return left, top, self.width, self.height


def sample_point(rng: np.random.Generator, x_range: Tuple[float, float],
                 y_range: Tuple[float, float]) -> np.ndarray:
    """Draws a uniform point; an inverted range collapses to its lower end."""
    x = rng.uniform(x_range[0], max(x_range[0], x_range[1]))
    y = rng.uniform(y_range[0], max(y_range[0], y_range[1]))
    return np.array([x, y], dtype=np.float64)


def _too_close(position: np.ndarray, radius: float, other: Entity, clearance: float) -> bool:
    return other.distance_to(position) < radius + other.radius + clearance


def check_valid_position(scene: "Scene", position, radius: float,
                         is_light_source: bool = False,
                         obstacles: Optional[Iterable[Entity]] = None) -> bool:
    """
    Returns True if a circle of `radius` at `position` keeps its clearance
    from every other entity and stays inside the padded screen bounds.
    """
    policy = LIGHT_PROBE if is_light_source else OBSTACLE_PROBE
    position = np.asarray(position, dtype=np.float64)

    if not is_light_source and _too_close(position, radius, scene.light_source, policy.to_light):
        return False

    if _too_close(position, radius, scene.main_object, policy.to_main):
        return False

    for obstacle in (scene.obstacles if obstacles is None else obstacles):
        if _too_close(position, radius, obstacle, policy.to_obstacle):
            return False

    padding = radius + policy.edge_padding
    half_w = scene.width / 2.0
    half_h = scene.height / 2.0
    if (position[0] < -half_w + padding or position[0] > half_w - padding or
            position[1] < -half_h + padding or position[1] > half_h - padding):
        return False

    return True


class ObstacleScatterer:
    """
    Seeded rejection sampler for obstacle sets.

    The RNG is reseeded on every call from an incrementing counter times a
    fixed odd constant, so the n-th scatter of a scene is reproducible.
    """

    def __init__(self, max_attempts: int = SCATTER_MAX_ATTEMPTS,
                 edge_margin: float = SCATTER_EDGE_MARGIN,
                 radius: float = OBSTACLE_RADIUS):
        self.max_attempts = max_attempts
        self.edge_margin = edge_margin
        self.radius = radius
        self.call_count = 0

    def next_seed(self) -> int:
        self.call_count += 1
        return (self.call_count * SCATTER_SEED_MULTIPLIER) % (2 ** 32)

    def scatter(self, scene: "Scene", count: int) -> List[Entity]:
        seed = self.next_seed()
        rng = np.random.default_rng(seed)

        half_w = scene.width / 2.0
        half_h = scene.height / 2.0
        x_range = (-half_w + self.edge_margin, half_w - self.edge_margin)
        y_range = (-half_h + self.edge_margin, half_h - self.edge_margin)

        placed: List[Entity] = []
        attempts = 0
        while len(placed) < count and attempts < self.max_attempts:
            attempts += 1
            position = sample_point(rng, x_range, y_range)

            if scene.reserved_region.contains(position, scene.width, scene.height):
                continue
            if not check_valid_position(scene, position, self.radius, obstacles=placed):
                continue

            gray = rng.uniform(*OBSTACLE_GRAY_RANGE)
            placed.append(Entity(EntityKind.OBSTACLE, position, self.radius, (gray, gray, gray)))

        if len(placed) < count:
            logging.warning(
                f"Obstacle scatter under-filled: placed {len(placed)} of {count} "
                f"after {attempts} attempts."
            )
        logging.debug(
            f"Scatter #{self.call_count} (seed {seed}) placed {len(placed)} obstacles "
            f"in {attempts} attempts."
        )
        return placed
