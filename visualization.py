# visualization.py
"""
Handles the visualization of the light reflection scene using Pygame.

The Visualizer is the scene's rendering collaborator: it translates
window input into scene coordinates (origin at screen center, Y up),
reports elapsed frame time, draws entities and ray segments, and hosts
the control panel in the reserved bottom-right rectangle.
"""
import logging
import pygame
from typing import Callable, List, Optional, Sequence, Tuple

from constants import (
    BACKGROUND_COLOR, FPS, ALLOWED_RAY_COUNTS, MAX_OBSTACLE_COUNT,
    CROSSHAIR_COLOR, CROSSHAIR_LENGTH, DASH_LENGTH, DASH_GAP,
    MAIN_OBJECT_COLOR_CHOICES, UI_BACKGROUND_ALPHA, UI_BUTTON_WIDTH,
    UI_BUTTON_HEIGHT, UI_BUTTON_SPACING
)

# Forward reference for type hinting to avoid circular import
from typing import TYPE_CHECKING
if TYPE_CHECKING:
    from scene import Scene
    from raycast import RaySegment


# --- Data Contracts ---
#
# class Visualizer:
#   - __init__(self, width: int, height: int, fps: int = FPS, resizable: bool = True):
#     - Side Effects: Initializes Pygame and creates a display surface.
#
#   - handle_events(self, scene: Scene) -> bool:
#     - Outputs: False if the user has quit, True otherwise.
#     - Side Effects: Forwards pointer input, resizes and control panel
#       actions to the scene. Must run before scene.update() each frame.
#
#   - tick(self) -> float:
#     - Outputs: Seconds elapsed since the previous call (frame clock).
#
#   - draw(self, scene: Scene) -> None:
#     - Side Effects: Renders entities, ray segments and the control panel.


def to_rgb(color: Sequence[float]) -> Tuple[int, int, int]:
    """Converts an RGB float triple in [0, 1] to 8-bit channels."""
    return tuple(int(round(max(0.0, min(1.0, c)) * 255)) for c in color[:3])


class Button:
    """A clickable rectangle with a label that is recomputed every frame."""

    def __init__(self, label: Callable[["Scene"], str], action: Callable[["Scene"], None]):
        self.label = label
        self.action = action
        self.rect = pygame.Rect(0, 0, UI_BUTTON_WIDTH, UI_BUTTON_HEIGHT)


class Visualizer:
    """
    Renders the scene state and provides the interactive control panel.
    """
    def __init__(self, width: int, height: int, fps: int = FPS, resizable: bool = True):
        """
        Initializes Pygame and the display window.
        """
        pygame.init()
        pygame.font.init()

        self.flags = pygame.RESIZABLE if resizable else 0
        self.screen = pygame.display.set_mode((width, height), self.flags)
        self.width, self.height = self.screen.get_size()
        self.fps = fps

        pygame.display.set_caption("Light Reflection")
        self.clock = pygame.time.Clock()

        try:
            self.font_title = pygame.font.SysFont("Segoe UI", 16, bold=True)
            self.font_main = pygame.font.SysFont("Segoe UI", 14)
        except pygame.error:
            logging.warning("Segoe UI font not found, falling back to default sans-serif.")
            self.font_title = pygame.font.SysFont(None, 20, bold=True)
            self.font_main = pygame.font.SysFont(None, 18)

        # --- UI Color Palette ---
        self.button_color = (80, 80, 80)
        self.button_hover_color = (110, 110, 110)
        self.text_color_title = (255, 255, 255)
        self.text_color_key = (200, 200, 200)
        self.panel_color = (40, 40, 40, UI_BACKGROUND_ALPHA)

        self.panel_rect = pygame.Rect(0, 0, 0, 0)
        self.panel_surface: Optional[pygame.Surface] = None
        self.buttons = self._create_buttons()
        self._color_index = 0

        logging.info(f"Visualizer initialized with Pygame display ({self.width}x{self.height}).")

    # --- Coordinate transforms -------------------------------------------

    def screen_to_world(self, pos: Tuple[int, int]) -> Tuple[float, float]:
        return (pos[0] - self.width / 2.0, self.height / 2.0 - pos[1])

    def world_to_screen(self, pos: Sequence[float]) -> Tuple[int, int]:
        return (int(round(pos[0] + self.width / 2.0)), int(round(self.height / 2.0 - pos[1])))

    # --- Control panel -------------------------------------------------------

    def _cycle_ray_count(self, scene: "Scene") -> None:
        index = ALLOWED_RAY_COUNTS.index(scene.settings.ray_count)
        scene.set_ray_count(ALLOWED_RAY_COUNTS[(index + 1) % len(ALLOWED_RAY_COUNTS)])

    def _change_obstacle_count(self, scene: "Scene", delta: int) -> None:
        count = min(max(scene.settings.desired_obstacle_count + delta, 0), MAX_OBSTACLE_COUNT)
        if count != scene.settings.desired_obstacle_count:
            scene.set_desired_obstacle_count(count)

    def _cycle_main_color(self, scene: "Scene") -> None:
        self._color_index = (self._color_index + 1) % len(MAIN_OBJECT_COLOR_CHOICES)
        scene.set_main_object_color(MAIN_OBJECT_COLOR_CHOICES[self._color_index])

    def _create_buttons(self) -> List[Button]:
        def on_off(flag: bool) -> str:
            return "On" if flag else "Off"

        return [
            Button(lambda s: "Refresh Scene", lambda s: s.refresh()),
            Button(lambda s: f"Reflections: {on_off(s.settings.reflections_enabled)}",
                   lambda s: s.set_reflections_enabled(not s.settings.reflections_enabled)),
            Button(lambda s: f"Auto Move Light: {on_off(s.settings.light_auto_move)}",
                   lambda s: s.set_light_auto_move(not s.settings.light_auto_move)),
            Button(lambda s: f"Ray Count: {s.settings.ray_count}", self._cycle_ray_count),
            Button(lambda s: "Obstacles +", lambda s: self._change_obstacle_count(s, 1)),
            Button(lambda s: "Obstacles -", lambda s: self._change_obstacle_count(s, -1)),
            Button(lambda s: "Main Object Color", self._cycle_main_color),
        ]

    def _layout_panel(self, scene: "Scene") -> None:
        left, top, w, h = scene.reserved_region.screen_rect(self.width, self.height)
        rect = pygame.Rect(int(left), int(top), int(w), int(h))
        if rect == self.panel_rect and self.panel_surface is not None:
            return
        self.panel_rect = rect
        self.panel_surface = pygame.Surface(rect.size, pygame.SRCALPHA)
        self.panel_surface.fill(self.panel_color)

        x = rect.right - UI_BUTTON_WIDTH - 12
        y = rect.top + 12
        for button in self.buttons:
            button.rect.topleft = (x, y)
            y += UI_BUTTON_HEIGHT + UI_BUTTON_SPACING

    def _handle_key(self, scene: "Scene", key: int) -> None:
        if key == pygame.K_r:
            scene.refresh()
        elif key == pygame.K_f:
            scene.set_reflections_enabled(not scene.settings.reflections_enabled)
        elif key == pygame.K_a:
            scene.set_light_auto_move(not scene.settings.light_auto_move)
        elif key in (pygame.K_1, pygame.K_2, pygame.K_3, pygame.K_4):
            scene.set_ray_count(ALLOWED_RAY_COUNTS[key - pygame.K_1])
        elif key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            self._change_obstacle_count(scene, 1)
        elif key in (pygame.K_MINUS, pygame.K_KP_MINUS):
            self._change_obstacle_count(scene, -1)

    # --- Host contract -------------------------------------------------------

    def handle_events(self, scene: "Scene") -> bool:
        """
        Processes window events and forwards input to the scene.

        Returns:
            bool: False if the simulation should exit, True otherwise.
        """
        self._layout_panel(scene)
        mouse_pos = pygame.mouse.get_pos()

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("Quit event received. Shutting down visualizer.")
                return False

            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    logging.info("ESC key pressed. Shutting down visualizer.")
                    return False
                self._handle_key(scene, event.key)

            if event.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((event.w, event.h), self.flags)
                self.width, self.height = self.screen.get_size()
                scene.handle_window_resize(self.width, self.height)
                self._layout_panel(scene)

            if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                if self.panel_rect.collidepoint(event.pos):
                    for button in self.buttons:
                        if button.rect.collidepoint(event.pos):
                            button.action(scene)
                            break
                else:
                    scene.handle_mouse_press(self.screen_to_world(event.pos))

            if event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                scene.handle_mouse_release()

        # Pointer smoothing runs every frame, not only on motion events.
        if not self.panel_rect.collidepoint(mouse_pos):
            scene.handle_mouse_move(self.screen_to_world(mouse_pos))
        return True

    def tick(self) -> float:
        """Waits for the next frame and returns elapsed seconds."""
        return self.clock.tick(self.fps) / 1000.0

    # --- Drawing -------------------------------------------------------------

    def _draw_dashed(self, color, start: Tuple[int, int], end: Tuple[int, int]) -> None:
        dx = end[0] - start[0]
        dy = end[1] - start[1]
        total = (dx * dx + dy * dy) ** 0.5
        if total == 0:
            return
        ux, uy = dx / total, dy / total
        travelled = 0.0
        while travelled < total:
            dash = min(DASH_LENGTH, total - travelled)
            a = (start[0] + ux * travelled, start[1] + uy * travelled)
            b = (a[0] + ux * dash, a[1] + uy * dash)
            pygame.draw.line(self.screen, color, a, b)
            travelled += dash + DASH_GAP

    def _draw_rays(self, segments: List["RaySegment"]) -> None:
        for segment in segments:
            color = to_rgb(segment.color)
            start = self.world_to_screen(segment.start)
            end = self.world_to_screen(segment.end)
            if segment.is_reflected:
                self._draw_dashed(color, start, end)
            else:
                pygame.draw.aaline(self.screen, color, start, end)

    def _draw_crosshair(self, scene: "Scene") -> None:
        cx, cy = self.world_to_screen(scene.light_source.position)
        half = int(CROSSHAIR_LENGTH / 2)
        color = to_rgb(CROSSHAIR_COLOR)
        pygame.draw.line(self.screen, color, (cx - half, cy), (cx + half, cy), 2)
        pygame.draw.line(self.screen, color, (cx, cy - half), (cx, cy + half), 2)

    def _draw_panel(self, scene: "Scene") -> None:
        self.screen.blit(self.panel_surface, self.panel_rect.topleft)
        mouse_pos = pygame.mouse.get_pos()

        light = scene.light_source.position
        main = scene.main_object.position
        lines = [
            ("Controls", self.font_title, self.text_color_title),
            (f"FPS: {self.clock.get_fps():.1f}", self.font_main, self.text_color_key),
            (f"Light: ({light[0]:.1f}, {light[1]:.1f})", self.font_main, self.text_color_key),
            (f"Main Object: ({main[0]:.1f}, {main[1]:.1f})", self.font_main, self.text_color_key),
            (f"Obstacles: {scene.obstacle_count} / {scene.settings.desired_obstacle_count}",
             self.font_main, self.text_color_key),
            (f"Rays: {scene.settings.ray_count}", self.font_main, self.text_color_key),
            (f"Reflected segments: {len(scene.rays.reflected)}", self.font_main, self.text_color_key),
            ("Keys: R F A 1-4 +/- Esc", self.font_main, self.text_color_key),
        ]
        y = self.panel_rect.top + 12
        for text, font, color in lines:
            surf = font.render(text, True, color)
            self.screen.blit(surf, (self.panel_rect.left + 12, y))
            y += font.get_linesize() + 4

        for button in self.buttons:
            is_hovered = button.rect.collidepoint(mouse_pos)
            color = self.button_hover_color if is_hovered else self.button_color
            pygame.draw.rect(self.screen, color, button.rect, border_radius=5)
            text_surf = self.font_main.render(button.label(scene), True, self.text_color_title)
            self.screen.blit(text_surf, text_surf.get_rect(center=button.rect.center))

    def draw(self, scene: "Scene") -> None:
        """Draws rays, entities and the control panel for the current tick."""
        self._layout_panel(scene)
        self.screen.fill(BACKGROUND_COLOR)

        self._draw_rays(scene.ray_segments())

        for entity in scene.visible_entities():
            pygame.draw.circle(
                self.screen,
                to_rgb(entity.color),
                self.world_to_screen(entity.position),
                int(round(entity.radius))
            )
        self._draw_crosshair(scene)
        self._draw_panel(scene)

        pygame.display.flip()

    def close(self):
        """Shuts down Pygame."""
        pygame.font.quit()
        pygame.quit()
