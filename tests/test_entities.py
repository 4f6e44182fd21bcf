import numpy as np
import pytest

from entities import Entity, EntityKind


def _circle(x, y, radius=10.0, kind=EntityKind.OBSTACLE):
    return Entity(kind, (x, y), radius, (1.0, 1.0, 1.0))


@pytest.mark.parametrize("radius", [0.0, -5.0])
def test_radius_must_be_positive(radius):
    with pytest.raises(ValueError):
        _circle(0.0, 0.0, radius)


def test_collision_is_strict_overlap():
    a = _circle(0.0, 0.0)
    assert a.collides_with(_circle(19.0, 0.0))
    assert not a.collides_with(_circle(20.0, 0.0))


def test_contains_point():
    a = _circle(5.0, 5.0)
    assert a.contains_point((10.0, 5.0))
    assert not a.contains_point((15.0, 5.0))


def test_position_is_copied_on_assignment():
    a = _circle(0.0, 0.0)
    source = np.array([3.0, 4.0])
    a.position = source
    source[0] = 100.0
    assert a.position == pytest.approx(np.array([3.0, 4.0]))


def test_clamp_to_bounds_is_idempotent():
    a = _circle(700.0, -400.0, radius=25.0)
    a.clamp_to_bounds(1280, 720)
    assert a.position == pytest.approx(np.array([615.0, -335.0]))
    a.clamp_to_bounds(1280, 720)
    assert a.position == pytest.approx(np.array([615.0, -335.0]))
