#!/usr/bin/env python3
"""
Shared constants for the Orbital simulator (dimensionless world units).

World units are nominally pixels at zoom 1. Keeping the tunables in one place
keeps physics, camera and interaction code consistent.
"""

# Physics controls
SUB_STEPS = 4  # fixed integration substeps per rendered frame
FRAME_RATE = 60
SUBSTEP_DT = 1.0 / (FRAME_RATE * SUB_STEPS)
MIN_INTERACTION_DISTANCE = 1.0  # pairs closer than this exert no force
TRAIL_MIN_SPACING_SQ = 10.0  # squared world distance between trail samples
MAX_TRAIL_LENGTH = 2000
MIN_BODY_RADIUS = 3.0
WAVE_TIME_STEP = 0.01  # decorative clock advance per frame, scaled by time_scale

# Property-panel bounds
MIN_MASS = 0.1
MAX_MASS = 1_000_000.0
MIN_DENSITY = 0.1
MAX_DENSITY = 20.0
DEFAULT_DENSITY = 1.0
DEFAULT_CREATION_MASS = 100.0

# Camera zoom bounds (screen pixels per world unit)
MIN_ZOOM = 0.1
MAX_ZOOM = 5.0
BUTTON_ZOOM_STEP = 1.2
WHEEL_ZOOM_STEP = 1.1

# Interaction
CLICK_DRAG_THRESHOLD = 5.0  # pixels on either axis before a press becomes a drag
HIT_RADIUS_SCALE = 1.5
HIT_MIN_SCREEN_RADIUS = 15.0  # pixels
LAUNCH_VELOCITY_SCALE = 0.05  # drag vector (world units) -> launch velocity

# Rendering (viewport)
VIEW_WIDTH = 1100
VIEW_HEIGHT = 800
BACKGROUND_COLOR = (0, 0, 0)
GRID_COLOR = (20, 60, 70)
GRID_FINE_COLOR = (12, 30, 36)
SELECTION_COLOR = (255, 255, 255)
GHOST_COLOR = (160, 200, 220)
FIXED_MARKER_COLOR = (255, 255, 255)

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000

BODY_COLORS = [
    (56, 189, 248),   # sky
    (244, 114, 182),  # pink
    (167, 139, 250),  # violet
    (52, 211, 153),   # emerald
    (251, 191, 36),   # amber
    (248, 113, 113),  # red
]
