import os
import sys

# Ensure the repository root is on sys.path at import time
repo_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if repo_root not in sys.path:
    sys.path.insert(0, repo_root)

import pytest

from entities import Entity, EntityKind
from scene import Scene, SceneSettings


@pytest.fixture
def scene():
    """Default 1280x720 scene with the configured obstacle scatter."""
    return Scene(SceneSettings({"motion_seed": 1234}))


@pytest.fixture
def empty_scene():
    """Scene with no obstacles, light at (-500, 0) and main object at the origin."""
    return Scene(SceneSettings({"desired_obstacle_count": 0, "motion_seed": 1234}))


def make_obstacle(x, y, radius=30.0):
    return Entity(EntityKind.OBSTACLE, (x, y), radius, (0.5, 0.5, 0.5))
