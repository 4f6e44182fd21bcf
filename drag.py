# drag.py
"""
Pointer dragging of the light source and the main object.
"""
import logging
from typing import Optional, TYPE_CHECKING

import numpy as np

from constants import POINTER_LERP_FACTOR
from entities import Entity, EntityKind

if TYPE_CHECKING:
    from scene import Scene

# --- Data Contracts ---
#
# class DragController:
#   - press(self, scene, pointer) -> Optional[Entity]:
#     - Picks the light source if the pointer is inside it, else the main
#       object, else nothing. Grabbing the light turns auto-move off.
#   - move(self, scene, pointer) -> None:
#     - Smooths the pointer (lerp towards the raw input), clamps the
#       dragged entity inside the screen and reverts the move if the
#       entity then overlaps an obstacle or the other draggable entity.
#   - release(self) -> None


class DragController:
    """
    Maps pointer input onto one draggable entity at a time.
    """

    def __init__(self, lerp_factor: float = POINTER_LERP_FACTOR):
        self.lerp_factor = lerp_factor
        self.dragged: Optional[Entity] = None
        self.current_pointer = np.zeros(2, dtype=np.float64)
        self.target_pointer = np.zeros(2, dtype=np.float64)

    def pick(self, scene: "Scene", pointer) -> Optional[Entity]:
        # Light source first: it wins when the two circles overlap.
        for entity in (scene.light_source, scene.main_object):
            if entity.contains_point(pointer):
                return entity
        return None

    def press(self, scene: "Scene", pointer) -> Optional[Entity]:
        self.dragged = self.pick(scene, pointer)
        if self.dragged is None:
            return None

        self.dragged.dragging = True
        # Start smoothing from the press point to avoid an initial jump.
        self.current_pointer = np.array(pointer, dtype=np.float64)
        self.target_pointer = self.current_pointer.copy()

        if self.dragged.kind is EntityKind.LIGHT_SOURCE and scene.settings.light_auto_move:
            scene.set_light_auto_move(False)
            logging.info("Light auto-move disabled by manual drag.")
        return self.dragged

    def release(self) -> None:
        if self.dragged is not None:
            self.dragged.dragging = False
            self.dragged = None

    def _collides(self, scene: "Scene", entity: Entity) -> bool:
        if any(entity.collides_with(obstacle) for obstacle in scene.obstacles):
            return True
        other = scene.main_object if entity is scene.light_source else scene.light_source
        return entity.collides_with(other)

    def move(self, scene: "Scene", pointer) -> None:
        self.target_pointer = np.array(pointer, dtype=np.float64)
        self.current_pointer = (
            self.current_pointer + (self.target_pointer - self.current_pointer) * self.lerp_factor
        )

        entity = self.dragged
        if entity is None or not entity.dragging:
            return

        previous = entity.position.copy()
        entity.position = self.current_pointer
        entity.clamp_to_bounds(scene.width, scene.height)

        if self._collides(scene, entity):
            entity.position = previous
