from __future__ import annotations

"""Game configuration constants for Skyline Bird."""

# Playfield
DEFAULT_WIDTH = 400
DEFAULT_HEIGHT = 600
MAX_WINDOW_WIDTH = 500
MAX_WINDOW_HEIGHT = 800
FPS = 60
NOMINAL_FRAME_MS = 16.67  # one dt unit

# Physics (per normalized tick)
GRAVITY = 0.3
JUMP_STRENGTH = -9.0  # overwrites velocity, never added

# Bird
BIRD_SIZE = 50
BIRD_LEFT = 50  # fixed horizontal position

# Obstacles
OBSTACLE_WIDTH = 100
OBSTACLE_SPEED = 2.5
GAP_SIZE = 280
MIN_GAP_TOP = 50
WIDTH_VARIANCE = 25  # each piece is OBSTACLE_WIDTH +/- this
OFFSET_RANGE = 75  # horizontal stagger per piece
SPAWN_THRESHOLD = 350  # px from the leading edge
OFFSCREEN_MARGIN = 200

# Session
MAX_LIVES = 4
COOLDOWN_MS = 1000

# Smallest playfield that still fits a full gap and one obstacle
MIN_PLAYFIELD_WIDTH = BIRD_LEFT + BIRD_SIZE + OBSTACLE_WIDTH
MIN_PLAYFIELD_HEIGHT = GAP_SIZE + 2 * MIN_GAP_TOP

# Palette
COL_SKY_TOP = (255, 120, 90)
COL_SKY_BOTTOM = (255, 214, 120)
COL_BUILDING = (52, 48, 70)
COL_BIRD = (250, 220, 60)
COL_BIRD_HIT = (230, 60, 60)
COL_TEXT = (250, 250, 250)
COL_TEXT_DIM = (230, 225, 235)
