import itertools

import numpy as np
import pytest

from conftest import make_obstacle
from constants import (
    OBSTACLE_CLEARANCE_TO_LIGHT, OBSTACLE_CLEARANCE_TO_MAIN,
    OBSTACLE_CLEARANCE_TO_OBSTACLE, SCATTER_EDGE_MARGIN
)
from placement import ObstacleScatterer, ReservedRegion, check_valid_position, sample_point
from scene import Scene, SceneSettings


def _gap(a, b):
    return float(np.linalg.norm(a.position - b.position)) - a.radius - b.radius


def test_scattered_obstacles_keep_their_clearances(scene):
    assert scene.obstacles
    for a, b in itertools.combinations(scene.obstacles, 2):
        assert _gap(a, b) >= OBSTACLE_CLEARANCE_TO_OBSTACLE
    for obstacle in scene.obstacles:
        assert _gap(obstacle, scene.main_object) >= OBSTACLE_CLEARANCE_TO_MAIN
        assert _gap(obstacle, scene.light_source) >= OBSTACLE_CLEARANCE_TO_LIGHT


def test_scattered_obstacles_avoid_reserved_region_and_edges(scene):
    half_w, half_h = scene.width / 2.0, scene.height / 2.0
    for obstacle in scene.obstacles:
        x, y = obstacle.position
        assert not scene.reserved_region.contains(obstacle.position, scene.width, scene.height)
        assert -half_w + SCATTER_EDGE_MARGIN <= x <= half_w - SCATTER_EDGE_MARGIN
        assert -half_h + SCATTER_EDGE_MARGIN <= y <= half_h - SCATTER_EDGE_MARGIN


def test_obstacle_colors_are_gray_in_band(scene):
    for obstacle in scene.obstacles:
        r, g, b = obstacle.color
        assert r == g == b
        assert 0.3 <= r <= 0.7


def test_crowded_scene_under_fills_without_overlap():
    scene = Scene(SceneSettings({"desired_obstacle_count": 50}))
    assert len(scene.obstacles) < 50
    for a, b in itertools.combinations(scene.obstacles, 2):
        assert _gap(a, b) >= OBSTACLE_CLEARANCE_TO_OBSTACLE


def test_scatter_is_reproducible_for_the_same_call_count():
    first = Scene(SceneSettings())
    second = Scene(SceneSettings())
    assert [tuple(o.position) for o in first.obstacles] == [tuple(o.position) for o in second.obstacles]
    assert [o.color for o in first.obstacles] == [o.color for o in second.obstacles]

    initial = [tuple(o.position) for o in first.obstacles]
    first.refresh()
    second.refresh()
    refreshed = [tuple(o.position) for o in first.obstacles]
    assert refreshed != initial
    assert refreshed == [tuple(o.position) for o in second.obstacles]


def test_seed_counter_uses_odd_multiplier():
    scatterer = ObstacleScatterer()
    assert scatterer.next_seed() == 2654435761
    assert scatterer.next_seed() == (2 * 2654435761) % 2 ** 32
    assert scatterer.call_count == 2


def test_check_valid_position_uses_tighter_clearance_for_light_probes(empty_scene):
    # 66 units from the main object's center: enough for a light probe
    # (20 + 25 + 20) but far too close for an obstacle probe (20 + 25 + 80).
    candidate = (66.0, 0.0)
    assert check_valid_position(empty_scene, candidate, 20.0, is_light_source=True)
    assert not check_valid_position(empty_scene, candidate, 20.0, is_light_source=False)


def test_check_valid_position_rejects_out_of_bounds(empty_scene):
    assert not check_valid_position(empty_scene, (630.0, 0.0), 20.0, is_light_source=True)
    assert not check_valid_position(empty_scene, (0.0, -355.0), 30.0)


def test_check_valid_position_obstacle_probe_avoids_light(empty_scene):
    near_light = empty_scene.light_source.position + np.array([140.0, 0.0])
    assert not check_valid_position(empty_scene, near_light, 30.0)
    assert check_valid_position(empty_scene, near_light, 30.0, is_light_source=True)


def test_check_valid_position_accepts_explicit_obstacle_list(empty_scene):
    blocker = make_obstacle(300.0, 200.0)
    assert check_valid_position(empty_scene, (300.0, 100.0), 30.0)
    assert not check_valid_position(empty_scene, (300.0, 100.0), 30.0, obstacles=[blocker])


def test_reserved_region_is_anchored_bottom_right():
    region = ReservedRegion(484.0, 275.0, 20.0)
    assert region.contains((600.0, -300.0), 1280, 720)
    assert not region.contains((600.0, 300.0), 1280, 720)
    assert not region.contains((0.0, -300.0), 1280, 720)
    assert region.screen_rect(1280, 720) == (776.0, 425.0, 484.0, 275.0)


def test_sample_point_collapses_inverted_range():
    rng = np.random.default_rng(0)
    point = sample_point(rng, (10.0, -10.0), (0.0, 1.0))
    assert point[0] == pytest.approx(10.0)
    assert 0.0 <= point[1] <= 1.0
