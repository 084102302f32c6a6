#!/usr/bin/env python3
"""
Shared constants for the Three Body Simulator.

All values are tuned for visual appeal, not orbital realism. World units are
viewport pixels and one tick is one frame (~16 ms), so velocities are pixels
per tick.

Keeping constants in one place helps ensure values are consistent across the
codebase and makes tuning easier.
"""

# Force law (classic profile)
DEFAULT_GRAVITY_STRENGTH = 0.44
DEFAULT_MIN_DISTANCE = 9.0  # "gravity range": floor distance for force computation
DEFAULT_FORCE_CAP = 200000.0
DEFAULT_FORCE_SCALE = 0.25

# Bodies
BODY_COUNT = 3
DEFAULT_BODY_COLORS = ((255, 199, 46), (0, 255, 255), (255, 255, 255))
BODY_MASS_MIN = 22.0
BODY_MASS_SPAN = 44.0
BODY_SPEED_MIN = 0.025
BODY_SPEED_SPAN = 1.1
DEFAULT_TRAIL_CAPACITY = 66
DEFAULT_SPAWN_MARGIN = 0.06  # fraction of the shorter viewport side

# Escape detection
DEFAULT_ESCAPE_MULTIPLIER = 2.5
DEFAULT_VISIBLE_MARGIN = 150.0
RESET_POLICIES = ("extent", "visible")

# Camera
DEFAULT_CAMERA_ZOOM = 0.875
DEFAULT_EASING = 0.994

# Satellite (reflective planet)
SATELLITE_RADIUS = 3.0
SATELLITE_TRAIL_CAPACITY = 30
SATELLITE_COLOR_BLEND = 0.1
SATELLITE_RESPONSE_RANGE_FACTOR = 0.25
SATELLITE_RESPONSE_AMPLIFICATION = 5.0
SATELLITE_RESPONSE_FORCE_CAP = 5000.0
SATELLITE_FORCE_MULTIPLIER = 1.5
SATELLITE_DAMPING_PER_STRENGTH = 0.0005
SATELLITE_SPAWN_MARGIN = 50.0
SATELLITE_SPEED_MIN = 0.1
SATELLITE_SPEED_SPAN = 0.5
SATELLITE_RESPAWN_SPREAD = 50.0
SATELLITE_RESPAWN_SPEED_SPAN = 0.5
WHITE = (255, 255, 255)

# UI slider ranges (progress 0..100 maps linearly onto these)
GRAVITY_STRENGTH_RANGE = (0.01, 100.0)
GRAVITY_RANGE_RANGE = (0.1, 1000.0)

# Per-slot colour sequences stepped through by the "cycle" buttons
COLOR_SEQUENCES = (
    ((255, 199, 46), (255, 0, 0), (255, 0, 255), (255, 255, 0)),
    ((0, 255, 255), (0, 255, 0), (0, 0, 255), (0, 255, 255)),
    ((255, 255, 255), (204, 204, 204), (136, 136, 136), (255, 255, 255)),
)

# Rendering (viewport)
VIEW_WIDTH = 1100
VIEW_HEIGHT = 800
TARGET_FPS = 60
BACKGROUND_COLOR = (0, 0, 0)
HUD_TEXT_COLOR = (200, 200, 200)
BODY_RADIUS_FACTOR = 3.0
BODY_MIN_SCREEN_RADIUS = 6.0
TRAIL_ALPHA = 50
SATELLITE_TRAIL_ALPHA = 40

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000

# Stats persistence
DEFAULT_STATS_FILE = "~/.three_body_sim/stats.json"
