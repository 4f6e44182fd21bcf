# scene.py
"""
The scene aggregate.

The Scene owns every entity, the run settings and the controllers that
mutate entity positions. Each tick it applies pending motion first and
then recomputes the ray cascade, so rays are always cast against a
consistent snapshot of the entities.
"""
import logging
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from constants import (
    DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT, ALLOWED_RAY_COUNTS,
    DEFAULT_RAY_COUNT, DEFAULT_OBSTACLE_COUNT, MAX_OBSTACLE_COUNT,
    LIGHT_SOURCE_RADIUS, MAIN_OBJECT_RADIUS, LIGHT_SOURCE_START,
    MAIN_OBJECT_START, LIGHT_SOURCE_COLOR, MAIN_OBJECT_COLOR,
    LIGHT_AUTO_MOVE_INTERVAL, LIGHT_MOVE_SPEED
)
from drag import DragController
from entities import Color, Entity, EntityKind
from motion import AutoMoveController
from placement import ObstacleScatterer, ReservedRegion
from raycast import CascadeResult, RayCascade, RaySegment

# --- Data Contracts ---
#
# class SceneSettings:
#   - __init__(self, params: Optional[Dict[str, Any]] = None):
#     - Inputs:
#       - params: the "scene_parameters" section of config.json.
#         - "desired_obstacle_count": int in [0, MAX_OBSTACLE_COUNT]
#         - "ray_count": int, one of ALLOWED_RAY_COUNTS
#         - "reflections_enabled": bool
#         - "light_auto_move": bool
#         - "light_move_speed": float
#         - "light_auto_move_interval": float
#         - "motion_seed": Optional[int]
#     - Errors: ValueError on an out-of-range or non-integer count, or a
#       non-boolean flag, logged at CRITICAL.
#
# class Scene:
#   - __init__(self, settings, width, height):
#     - Side Effects: Creates the light source, the main object and the
#       first obstacle set, and casts the first rays.
#
#   - update(self, delta_time: float) -> None:
#     - Side Effects: Advances light auto-move, then recomputes self.rays.
#
#   - handle_window_resize(self, width, height) -> None:
#     - Invariants: Idempotent for repeated identical sizes. Entities are
#       clamped into the new bounds but not re-validated for overlap.


class SceneSettings:
    """
    Tunables shared between the control panel and the simulation.
    """

    def __init__(self, params: Optional[Dict[str, Any]] = None):
        params = params or {}
        self.desired_obstacle_count = self._validate_obstacle_count(
            params.get('desired_obstacle_count', DEFAULT_OBSTACLE_COUNT)
        )
        self.ray_count = self._validate_ray_count(params.get('ray_count', DEFAULT_RAY_COUNT))
        self.reflections_enabled = self._validate_flag(
            'reflections_enabled', params.get('reflections_enabled', True)
        )
        self.light_auto_move = self._validate_flag(
            'light_auto_move', params.get('light_auto_move', False)
        )
        self.light_move_speed = float(params.get('light_move_speed', LIGHT_MOVE_SPEED))
        self.light_auto_move_interval = float(
            params.get('light_auto_move_interval', LIGHT_AUTO_MOVE_INTERVAL)
        )
        self.motion_seed = params.get('motion_seed')

    @staticmethod
    def _reject(msg: str) -> None:
        logging.critical(msg)
        raise ValueError(msg)

    @staticmethod
    def _is_int(value: Any) -> bool:
        # bool is an int subclass but never a valid count
        return isinstance(value, int) and not isinstance(value, bool)

    @staticmethod
    def _validate_flag(name: str, value: Any) -> bool:
        if not isinstance(value, bool):
            SceneSettings._reject(
                f"Configuration error: {name} must be true or false, got {value!r}."
            )
        return value

    @staticmethod
    def _validate_obstacle_count(count: int) -> int:
        if not SceneSettings._is_int(count) or not 0 <= count <= MAX_OBSTACLE_COUNT:
            SceneSettings._reject(
                f"Configuration error: desired obstacle count {count!r} is not an "
                f"integer in the range 0..{MAX_OBSTACLE_COUNT}."
            )
        return count

    @staticmethod
    def _validate_ray_count(count: int) -> int:
        if not SceneSettings._is_int(count) or count not in ALLOWED_RAY_COUNTS:
            SceneSettings._reject(
                f"Configuration error: ray count {count!r} is not one of "
                f"{', '.join(str(c) for c in ALLOWED_RAY_COUNTS)}."
            )
        return count


class Scene:
    """
    Owns the light source, the main object and the obstacles, and keeps
    the current tick's ray segments.
    """

    def __init__(self, settings: Optional[SceneSettings] = None,
                 width: float = DEFAULT_WINDOW_WIDTH, height: float = DEFAULT_WINDOW_HEIGHT,
                 reserved_region: Optional[ReservedRegion] = None):
        self.settings = settings if settings is not None else SceneSettings()
        self.width = float(width)
        self.height = float(height)
        self.reserved_region = reserved_region if reserved_region is not None else ReservedRegion()

        self.light_source = Entity(
            EntityKind.LIGHT_SOURCE, LIGHT_SOURCE_START, LIGHT_SOURCE_RADIUS, LIGHT_SOURCE_COLOR
        )
        self.main_object = Entity(
            EntityKind.MAIN_OBJECT, MAIN_OBJECT_START, MAIN_OBJECT_RADIUS, MAIN_OBJECT_COLOR
        )
        self.obstacles: List[Entity] = []

        self.scatterer = ObstacleScatterer()
        self.cascade = RayCascade()
        self.drag = DragController()
        rng = np.random.default_rng(self.settings.motion_seed)
        self.auto_move = AutoMoveController(
            interval=self.settings.light_auto_move_interval,
            speed=self.settings.light_move_speed,
            rng=rng
        )
        self.auto_move.reset(self.light_source.position)

        self.rays = CascadeResult([], [])
        self.generate_random_obstacles(self.settings.desired_obstacle_count)
        self.update_rays()

        logging.info(
            f"Scene initialized ({self.width:.0f}x{self.height:.0f}) with "
            f"{len(self.obstacles)} obstacles and {self.settings.ray_count} rays."
        )

    # --- Simulation ---------------------------------------------------------

    def update(self, delta_time: float) -> None:
        """Runs one simulation tick: motion first, then the ray cascade."""
        self.auto_move.update(self, delta_time)
        self.update_rays()

    def update_rays(self) -> None:
        self.rays = self.cascade.cast(
            self.light_source.position,
            self.settings.ray_count,
            self.ray_targets(),
            self.settings.reflections_enabled
        )

    def ray_targets(self) -> List[Entity]:
        return [self.main_object] + self.obstacles

    def generate_random_obstacles(self, count: int) -> None:
        """Replaces the obstacle set with a freshly scattered one."""
        self.obstacles = self.scatterer.scatter(self, count)
        logging.info(f"Generated {len(self.obstacles)} obstacles (requested {count}).")

    # --- Rendering contract -----------------------------------------------

    def visible_entities(self) -> List[Entity]:
        """Entities in draw order."""
        return [self.light_source] + self.obstacles + [self.main_object]

    def ray_segments(self) -> List[RaySegment]:
        return self.rays.segments

    @property
    def obstacle_count(self) -> int:
        return len(self.obstacles)

    # --- Controls -----------------------------------------------------------

    def set_desired_obstacle_count(self, count: int) -> None:
        self.settings.desired_obstacle_count = SceneSettings._validate_obstacle_count(count)
        self.generate_random_obstacles(self.settings.desired_obstacle_count)

    def set_ray_count(self, count: int) -> None:
        self.settings.ray_count = SceneSettings._validate_ray_count(count)
        logging.info(f"Ray count set to {count}.")

    def set_reflections_enabled(self, enabled: bool) -> None:
        self.settings.reflections_enabled = bool(enabled)
        logging.info(f"Reflections: {'Enabled' if enabled else 'Disabled'}")

    def set_light_auto_move(self, enabled: bool) -> None:
        enabled = bool(enabled)
        if enabled and not self.settings.light_auto_move:
            self.auto_move.reset(self.light_source.position)
        self.settings.light_auto_move = enabled
        logging.info(f"Light auto-move: {'Enabled' if enabled else 'Disabled'}")

    def set_main_object_color(self, color: Color) -> None:
        self.main_object.color = tuple(float(c) for c in color)

    def refresh(self) -> None:
        """Regenerates all obstacles at new random positions."""
        logging.info("Scene refresh requested.")
        self.generate_random_obstacles(self.settings.desired_obstacle_count)

    # --- Host events ----------------------------------------------------------

    def handle_window_resize(self, width: float, height: float) -> None:
        self.width = float(width)
        self.height = float(height)
        for entity in self.visible_entities():
            entity.clamp_to_bounds(self.width, self.height)
        logging.info(f"Scene bounds updated to {self.width:.0f}x{self.height:.0f}.")

    def handle_mouse_press(self, pointer: Sequence[float]) -> Optional[Entity]:
        return self.drag.press(self, pointer)

    def handle_mouse_release(self) -> None:
        self.drag.release()

    def handle_mouse_move(self, pointer: Sequence[float]) -> None:
        self.drag.move(self, pointer)
