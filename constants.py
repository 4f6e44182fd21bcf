# constants.py
"""
Application-level constants.

These values are static and do not change between simulation runs.
They are fundamental to the application's framework, such as entity
geometry, the ray palette, placement clearances and sampling budgets,
and are not part of the run configuration in config.json.
"""

# Visualization settings
DEFAULT_WINDOW_WIDTH = 1280
DEFAULT_WINDOW_HEIGHT = 720
FPS = 60
BACKGROUND_COLOR = (0, 0, 0)

# --- Control Panel (reserved rectangle, anchored bottom-right) ---
CONTROLS_WIDTH = 484.0
CONTROLS_HEIGHT = 275.0
CONTROLS_MARGIN = 20.0

# --- Entities ---
LIGHT_SOURCE_RADIUS = 20.0
MAIN_OBJECT_RADIUS = 25.0
OBSTACLE_RADIUS = 30.0

LIGHT_SOURCE_START = (-500.0, 0.0)
MAIN_OBJECT_START = (0.0, 0.0)

# RGB floats in [0, 1]
LIGHT_SOURCE_COLOR = (1.0, 0.95, 0.4)    # Bright warm yellow
MAIN_OBJECT_COLOR = (0.0, 1.0, 0.0)      # Green
OBSTACLE_GRAY_RANGE = (0.3, 0.7)
CROSSHAIR_COLOR = (1.0, 0.0, 0.0)
CROSSHAIR_LENGTH = 10.0

# --- Rays ---
ALLOWED_RAY_COUNTS = (90, 180, 360, 720)
DEFAULT_RAY_COUNT = 90
MAX_RAY_LENGTH = 2000.0
MAX_REFLECTIONS = 3
# Fraction of MAX_RAY_LENGTH kept by the first reflection.
REFLECTION_LENGTH_FACTOR = 0.05
# Each further bounce is shortened by this factor.
REFLECTION_LENGTH_DECAY = 0.7
# Intersections closer than this are treated as the ray leaving its own surface.
RAY_EPSILON = 1e-4

PRIMARY_RAY_COLOR = (1.0, 0.95, 0.4)      # Warm yellow
REFLECTED_RAY_COLOR = (1.0, 0.65, 0.2)    # Orange, first bounce
REREFLECTED_RAY_COLOR = (1.0, 0.3, 0.1)   # Red, second bounce and beyond
RAY_PALETTE = (PRIMARY_RAY_COLOR, REFLECTED_RAY_COLOR, REREFLECTED_RAY_COLOR)

DASH_LENGTH = 5.0
DASH_GAP = 5.0

# --- Obstacle Scatter ---
DEFAULT_OBSTACLE_COUNT = 10
MAX_OBSTACLE_COUNT = 50
SCATTER_EDGE_MARGIN = 50.0
SCATTER_MAX_ATTEMPTS = 1000
# Odd multiplier (Knuth's golden-ratio constant) applied to the call counter.
SCATTER_SEED_MULTIPLIER = 2654435761

# --- Clearances used by check_valid_position ---
# Obstacle probes keep a wide berth around everything.
OBSTACLE_CLEARANCE_TO_LIGHT = 100.0
OBSTACLE_CLEARANCE_TO_MAIN = 80.0
OBSTACLE_CLEARANCE_TO_OBSTACLE = 60.0
OBSTACLE_EDGE_PADDING = 50.0
# Light source probes are allowed much closer.
LIGHT_PROBE_CLEARANCE = 20.0
LIGHT_PROBE_EDGE_PADDING = 20.0

# --- Light Auto Move ---
LIGHT_AUTO_MOVE_INTERVAL = 1.0   # seconds between re-targets
LIGHT_MOVE_SPEED = 50.0          # units per second
MAX_DELTA_TIME = 0.1
ARRIVAL_RADIUS = 1.0
SEEK_ATTEMPTS_PER_TIER = 300
SAFE_POSITION_ATTEMPTS = 100
SEEK_EDGE_PADDING = 30.0
STEP_CLEARANCE = 20.0
STEP_EDGE_PADDING = 20.0
# (minimum travel distance, clearance to main object and obstacles)
SEEK_TIERS = (
    (400.0, 40.0),
    (250.0, 35.0),
    (150.0, 30.0),
    (75.0, 25.0),
)

# --- Dragging ---
POINTER_LERP_FACTOR = 0.8

# Choices cycled by the control panel's color button, as RGB floats.
MAIN_OBJECT_COLOR_CHOICES = [
    (0.0, 1.0, 0.0),    # Green
    (1.0, 0.0, 0.4),    # Hot Pink
    (0.0, 1.0, 1.0),    # Cyan
    (1.0, 0.8, 0.0),    # Gold
    (0.8, 0.0, 1.0),    # Purple
    (1.0, 0.4, 0.0),    # Orange
]

# --- Control Panel Appearance ---
UI_BACKGROUND_ALPHA = 200
UI_BUTTON_WIDTH = 190
UI_BUTTON_HEIGHT = 26
UI_BUTTON_SPACING = 5
