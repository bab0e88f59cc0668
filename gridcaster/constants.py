# -*- coding: utf-8 -*-
"""Project-wide constants and type aliases for the grid raycaster."""
from __future__ import annotations

import math
from typing import Literal

CIRCLE = math.pi * 2

# ----- World constants -----
BLOCKED = -1  # cell value reported outside the grid
GRID_SIZE_DEFAULT = 32
WALL_PROBABILITY_DEFAULT = 0.3

MOVE_SPEED = 3.0          # cells/s
ROT_SPEED = math.pi       # rad/s
HOLD_TIMEOUT = 0.14
MAX_FRAME_DT = 0.2        # ticks slower than this are skipped
FRAME_SLEEP = 0.01

# ----- Camera -----
FOCAL_LENGTH_DEFAULT = 0.8
RANGE_DEFAULT = 14.0
LIGHT_RANGE_DEFAULT = 5.0
FOG_ALPHA_DEFAULT = 0.15

# Shortest distance between two boundary crossings worth counting when
# bounding the ray loop.
MIN_CELL_STEP = 0.5

# ----- Shading codes (RayStep.shading) -----
SHADE_X = 0      # crossed a constant-x line moving +x
SHADE_Y = 1      # crossed a constant-y line moving +y
SHADE_BACK = 2   # crossed any line moving in the negative direction

# ----- Greys used by draw commands -----
BLACK = 0.0
WHITE = 1.0

# ----- Texture -----
TEXTURE_SIZE = 64
BRICK_ROWS = 4
BRICK_COLS = 2

# ASCII fallback shading, dark to light
ASCII_SHADES = " .:-=+*#%@"
UNICODE_SHADES = " ░▒▓█"

MapKind = Literal["random", "maze"]
OnOffAuto = Literal["auto", "on", "off"]
