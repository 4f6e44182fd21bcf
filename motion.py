# motion.py
"""
Autonomous motion of the light source.

When auto-move is on, the light periodically picks a new random target,
steers towards it at a capped speed and validates every step. Target
selection relaxes its constraints tier by tier; when every tier is
exhausted, or a step would land somewhere invalid, the light snaps to a
safe position instead.
"""
import logging
from enum import Enum
from typing import Optional, Tuple, TYPE_CHECKING

import numpy as np

from constants import (
    LIGHT_AUTO_MOVE_INTERVAL, LIGHT_MOVE_SPEED, MAX_DELTA_TIME, ARRIVAL_RADIUS,
    SEEK_ATTEMPTS_PER_TIER, SAFE_POSITION_ATTEMPTS, SEEK_EDGE_PADDING,
    STEP_CLEARANCE, STEP_EDGE_PADDING, SEEK_TIERS
)
from placement import check_valid_position, sample_point

if TYPE_CHECKING:
    from scene import Scene

# --- Data Contracts ---
#
# class AutoMoveController:
#   - __init__(self, interval, speed, rng=None, tiers=SEEK_TIERS):
#     - Inputs:
#       - interval: float, seconds between forced re-targets.
#       - speed: float, scene units per second.
#       - rng: optional np.random.Generator. Defaults to an OS-seeded one.
#       - tiers: sequence of (min_distance, clearance) pairs, tried in order.
#
#   - update(self, scene: Scene, delta_time: float) -> None:
#     - Side Effects: May move scene.light_source, change the current
#       target, reset the timer.
#     - Invariants: delta_time is clamped to [0, MAX_DELTA_TIME]. A step
#       never overshoots the target. The light is never left at a
#       position that failed step validation.
#
#   - select_target(self, scene) -> Optional[np.ndarray]:
#     - Outputs: The first candidate accepted by any tier, or None when
#       every tier exhausts its attempt budget.
#
#   - find_safe_position(self, scene) -> np.ndarray:
#     - Outputs: A validated random position inside the safe rectangle and
#       outside the reserved region, or the deterministic default corner
#       of that rectangle.


class MotionState(Enum):
    IDLE = "idle"
    SEEKING_TARGET = "seeking_target"
    STEERING = "steering"


def safe_rectangle(scene: "Scene", padding: float) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """
    Area the light may roam: the screen minus padding, and left of the
    control panel column.
    """
    half_w = scene.width / 2.0
    half_h = scene.height / 2.0
    x_range = (-half_w + padding, scene.reserved_region.x_min(scene.width) - padding)
    y_range = (-half_h + padding, half_h - padding)
    return x_range, y_range


class AutoMoveController:
    """
    Timed seek-and-steer behavior for the light source.
    """

    def __init__(self, interval: float = LIGHT_AUTO_MOVE_INTERVAL,
                 speed: float = LIGHT_MOVE_SPEED,
                 rng: Optional[np.random.Generator] = None,
                 tiers=SEEK_TIERS):
        self.interval = interval
        self.speed = speed
        self.rng = rng if rng is not None else np.random.default_rng()
        self.tiers = tuple(tiers)
        self.state = MotionState.IDLE
        self.timer = 0.0
        self.target: Optional[np.ndarray] = None

    def reset(self, position) -> None:
        """Parks the controller on the given position with a fresh timer."""
        self.target = np.array(position, dtype=np.float64)
        self.timer = 0.0
        self.state = MotionState.IDLE

    # --- Validation -----------------------------------------------------

    def _within(self, position: np.ndarray, x_range, y_range) -> bool:
        return (x_range[0] <= position[0] <= x_range[1] and
                y_range[0] <= position[1] <= y_range[1])

    def _clear_of_entities(self, scene: "Scene", position: np.ndarray, clearance: float) -> bool:
        light = scene.light_source
        if scene.main_object.distance_to(position) < light.radius + scene.main_object.radius + clearance:
            return False
        for obstacle in scene.obstacles:
            if obstacle.distance_to(position) < light.radius + obstacle.radius + clearance:
                return False
        return True

    def _tier_accepts(self, scene: "Scene", candidate: np.ndarray, clearance: float,
                      x_range, y_range) -> bool:
        light = scene.light_source
        return (not scene.reserved_region.contains(candidate, scene.width, scene.height)
                and self._within(candidate, x_range, y_range)
                and self._clear_of_entities(scene, candidate, clearance)
                and check_valid_position(scene, candidate, light.radius, is_light_source=True))

    def is_valid_step(self, scene: "Scene", position: np.ndarray) -> bool:
        light = scene.light_source
        x_range, y_range = safe_rectangle(scene, light.radius + STEP_EDGE_PADDING)
        return (not scene.reserved_region.contains(position, scene.width, scene.height)
                and self._within(position, x_range, y_range)
                and self._clear_of_entities(scene, position, STEP_CLEARANCE))

    def target_is_valid(self, scene: "Scene") -> bool:
        return check_valid_position(
            scene, self.target, scene.light_source.radius, is_light_source=True
        )

    # --- Target Selection -------------------------------------------------

    def select_target(self, scene: "Scene") -> Optional[np.ndarray]:
        light = scene.light_source
        current = light.position
        x_range, y_range = safe_rectangle(scene, light.radius + SEEK_EDGE_PADDING)

        for tier, (min_distance, clearance) in enumerate(self.tiers):
            for _ in range(SEEK_ATTEMPTS_PER_TIER):
                candidate = sample_point(self.rng, x_range, y_range)
                if np.linalg.norm(candidate - current) < min_distance:
                    continue
                if self._tier_accepts(scene, candidate, clearance, x_range, y_range):
                    logging.debug(
                        f"Light auto-move: new target ({candidate[0]:.1f}, {candidate[1]:.1f}) "
                        f"from tier {tier} (min distance {min_distance:.0f})."
                    )
                    return candidate
            logging.debug(f"Light auto-move: tier {tier} exhausted after {SEEK_ATTEMPTS_PER_TIER} draws.")
        return None

    def find_safe_position(self, scene: "Scene") -> np.ndarray:
        light = scene.light_source
        padding = light.radius + SEEK_EDGE_PADDING
        x_range, y_range = safe_rectangle(scene, padding)

        for _ in range(SAFE_POSITION_ATTEMPTS):
            candidate = sample_point(self.rng, x_range, y_range)
            if scene.reserved_region.contains(candidate, scene.width, scene.height):
                continue
            if check_valid_position(scene, candidate, light.radius, is_light_source=True):
                return candidate

        fallback = np.array([x_range[0] + padding, y_range[1] - padding], dtype=np.float64)
        logging.warning(
            f"No safe light position found in {SAFE_POSITION_ATTEMPTS} draws; "
            f"using default corner ({fallback[0]:.1f}, {fallback[1]:.1f})."
        )
        return fallback

    def _snap_to_safe_position(self, scene: "Scene", reason: str) -> None:
        safe = self.find_safe_position(scene)
        scene.light_source.position = safe
        self.target = safe.copy()
        logging.info(f"Light auto-move: {reason}, reset to safe position ({safe[0]:.1f}, {safe[1]:.1f}).")

    # --- Tick -------------------------------------------------------------

    def needs_new_target(self, scene: "Scene") -> bool:
        if self.target is None:
            return True
        return (self.timer >= self.interval
                or np.linalg.norm(scene.light_source.position - self.target) < ARRIVAL_RADIUS
                or not self.target_is_valid(scene))

    def update(self, scene: "Scene", delta_time: float) -> None:
        if not scene.settings.light_auto_move:
            self.state = MotionState.IDLE
            return

        delta_time = min(max(delta_time, 0.0), MAX_DELTA_TIME)
        self.timer += delta_time

        if self.needs_new_target(scene):
            self.state = MotionState.SEEKING_TARGET
            self.timer = 0.0
            target = self.select_target(scene)
            if target is None:
                self._snap_to_safe_position(scene, "all target tiers failed")
                return
            self.target = target

        self.state = MotionState.STEERING
        current = scene.light_source.position
        offset = self.target - current
        distance = float(np.linalg.norm(offset))
        if distance <= ARRIVAL_RADIUS:
            return

        step = min(self.speed * delta_time, distance)
        candidate = current + offset / distance * step

        if self.is_valid_step(scene, candidate):
            scene.light_source.position = candidate
        else:
            logging.debug(
                f"Light auto-move: step to ({candidate[0]:.1f}, {candidate[1]:.1f}) rejected."
            )
            self._snap_to_safe_position(scene, "invalid movement detected")
