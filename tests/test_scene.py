import logging

import numpy as np
import pytest

from constants import MAX_OBSTACLE_COUNT
from entities import EntityKind
from scene import Scene, SceneSettings


def test_settings_defaults():
    settings = SceneSettings()
    assert settings.desired_obstacle_count == 10
    assert settings.ray_count == 90
    assert settings.reflections_enabled
    assert not settings.light_auto_move


@pytest.mark.parametrize("params", [
    {"ray_count": 100},
    {"desired_obstacle_count": MAX_OBSTACLE_COUNT + 1},
    {"desired_obstacle_count": -1},
    {"desired_obstacle_count": 10.7},
    {"desired_obstacle_count": None},
    {"desired_obstacle_count": True},
    {"ray_count": 90.0},
    {"reflections_enabled": "false"},
    {"light_auto_move": 1},
])
def test_settings_reject_invalid_values(params):
    with pytest.raises(ValueError):
        SceneSettings(params)


def test_settings_reject_string_flag_with_critical_log(caplog):
    with caplog.at_level(logging.CRITICAL):
        with pytest.raises(ValueError):
            SceneSettings({"reflections_enabled": "false"})
    assert "reflections_enabled" in caplog.text


def test_scene_starts_with_rays_cast(scene):
    assert len(scene.rays.primary) == 90
    for segment in scene.rays.primary:
        assert segment.start == pytest.approx(tuple(scene.light_source.position))


def test_visible_entities_draw_order(scene):
    kinds = [e.kind for e in scene.visible_entities()]
    assert kinds[0] is EntityKind.LIGHT_SOURCE
    assert kinds[-1] is EntityKind.MAIN_OBJECT
    assert all(k is EntityKind.OBSTACLE for k in kinds[1:-1])
    assert len(kinds) == scene.obstacle_count + 2


def test_set_ray_count(scene):
    scene.set_ray_count(360)
    scene.update(0.016)
    assert len(scene.rays.primary) == 360
    with pytest.raises(ValueError):
        scene.set_ray_count(45)
    assert scene.settings.ray_count == 360


def test_toggling_reflections_removes_reflected_rays(scene):
    scene.main_object.position = (-400.0, 0.0)
    scene.update(0.016)
    assert scene.rays.reflected

    scene.set_reflections_enabled(False)
    scene.update(0.016)
    assert scene.rays.reflected == []


def test_changing_desired_count_rescatters(scene):
    calls = scene.scatterer.call_count
    scene.set_desired_obstacle_count(3)
    assert scene.scatterer.call_count == calls + 1
    assert scene.obstacle_count == 3
    with pytest.raises(ValueError):
        scene.set_desired_obstacle_count(MAX_OBSTACLE_COUNT + 1)


def test_refresh_replaces_obstacles_wholesale(scene):
    old = list(scene.obstacles)
    scene.refresh()
    assert all(o not in old for o in scene.obstacles)


def test_resize_clamps_entities_into_bounds(empty_scene):
    empty_scene.handle_window_resize(600, 400)
    assert empty_scene.width == 600
    assert empty_scene.light_source.position == pytest.approx(np.array([-280.0, 0.0]))


def test_resize_is_idempotent(scene):
    scene.handle_window_resize(800, 500)
    once = [e.position.copy() for e in scene.visible_entities()]
    scene.handle_window_resize(800, 500)
    twice = [e.position for e in scene.visible_entities()]
    for a, b in zip(once, twice):
        assert a == pytest.approx(b)


def test_update_casts_from_the_moved_light(empty_scene):
    empty_scene.set_light_auto_move(True)
    empty_scene.update(0.05)
    light = tuple(empty_scene.light_source.position)
    assert light != pytest.approx((-500.0, 0.0))
    for segment in empty_scene.rays.primary:
        assert segment.start == pytest.approx(light)


def test_set_main_object_color(scene):
    scene.set_main_object_color((1, 0, 0.5))
    assert scene.main_object.color == (1.0, 0.0, 0.5)
