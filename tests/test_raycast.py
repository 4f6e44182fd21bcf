import numpy as np
import pytest

from constants import (
    MAX_RAY_LENGTH, MAX_REFLECTIONS, PRIMARY_RAY_COLOR, REFLECTED_RAY_COLOR,
    REREFLECTED_RAY_COLOR
)
from conftest import make_obstacle
from raycast import RayCascade, ray_color, reflected_length


def _length(segment):
    return float(np.hypot(segment.end[0] - segment.start[0], segment.end[1] - segment.start[1]))


def test_emit_fans_rays_uniformly():
    rays = RayCascade().emit((5.0, -3.0), 4)
    directions = np.array([r.direction for r in rays])
    expected = np.array([[1.0, 0.0], [0.0, 1.0], [-1.0, 0.0], [0.0, -1.0]])
    assert directions == pytest.approx(expected, abs=1e-12)
    for ray in rays:
        assert ray.origin == pytest.approx(np.array([5.0, -3.0]))
        assert ray.length == MAX_RAY_LENGTH
        assert ray.reflection_count == 0
        assert ray.color == PRIMARY_RAY_COLOR
        assert not ray.is_reflected


def test_rays_without_targets_travel_full_length():
    result = RayCascade().cast((0.0, 0.0), 90, [])
    assert len(result.primary) == 90
    assert result.reflected == []
    for segment in result.primary:
        assert _length(segment) == pytest.approx(MAX_RAY_LENGTH)


def test_head_on_hit_reflects_straight_back():
    obstacle = make_obstacle(0.0, 0.0)
    result = RayCascade().cast((-100.0, 0.0), 90, [obstacle])

    # Ray 0 points along +x and stops on the obstacle's near side.
    assert result.primary[0].end == pytest.approx((-30.0, 0.0))

    bounces = [s for s in result.reflected if s.start == pytest.approx((-30.0, 0.0))]
    assert len(bounces) == 1
    bounce = bounces[0]
    assert bounce.reflection_count == 1
    assert bounce.color == REFLECTED_RAY_COLOR
    assert bounce.end == pytest.approx((-30.0 - reflected_length(1), 0.0))


def test_reflections_from_a_single_convex_obstacle_do_not_rehit_it():
    result = RayCascade().cast((-100.0, 0.0), 360, [make_obstacle(0.0, 0.0)])
    assert result.reflected
    assert all(s.reflection_count == 1 for s in result.reflected)


def test_reflection_depth_is_bounded_between_facing_obstacles():
    targets = [make_obstacle(-60.0, 0.0), make_obstacle(60.0, 0.0)]
    result = RayCascade().cast((0.0, 0.0), 180, targets)

    counts = [s.reflection_count for s in result.segments]
    assert max(counts) == MAX_REFLECTIONS
    assert all(0 <= c <= MAX_REFLECTIONS for c in counts)
    for segment in result.reflected:
        if segment.reflection_count >= 2:
            assert segment.color == REREFLECTED_RAY_COLOR


def test_disabling_reflections_produces_no_reflected_rays():
    targets = [make_obstacle(-60.0, 0.0), make_obstacle(60.0, 0.0)]
    result = RayCascade().cast((0.0, 0.0), 180, targets, reflections_enabled=False)
    assert result.reflected == []
    assert len(result.primary) == 180
    assert result.max_depth == 0


def test_segments_never_exceed_their_ray_length():
    targets = [make_obstacle(-60.0, 0.0), make_obstacle(60.0, 0.0), make_obstacle(0.0, 80.0)]
    result = RayCascade().cast((0.0, 0.0), 360, targets)
    for segment in result.primary:
        assert _length(segment) <= MAX_RAY_LENGTH + 1e-9
    for segment in result.reflected:
        assert _length(segment) <= reflected_length(segment.reflection_count) + 1e-9


def test_reflected_length_shrinks_each_bounce():
    assert reflected_length(1) == pytest.approx(100.0)
    assert reflected_length(2) == pytest.approx(70.0)
    assert reflected_length(3) == pytest.approx(49.0)


def test_palette_tiers():
    assert ray_color(0) == PRIMARY_RAY_COLOR
    assert ray_color(1) == REFLECTED_RAY_COLOR
    assert ray_color(2) == REREFLECTED_RAY_COLOR
    assert ray_color(7) == REREFLECTED_RAY_COLOR
